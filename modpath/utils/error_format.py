"""Error rendering for CLI output.

Resolution failures are rendered from their structured context (the
requested specifier and starting directory) instead of str() alone, so the
terminal and JSON outputs always say what was asked for and from where.
"""

from __future__ import annotations

from typing import Any

from rich.markup import escape as _escape_markup

from ..resolution.errors import ResolutionError


def format_error_message(e: BaseException, *, include_type: bool = True) -> str:
    """Format any exception into a non-empty one-line message.

    Examples:
        >>> format_error_message(ValueError("invalid input"))
        'ValueError: invalid input'

        >>> format_error_message(ValueError("invalid input"), include_type=False)
        'invalid input'
    """
    error_str = str(e) or "(no additional details)"
    error_type = type(e).__name__
    if include_type and error_type not in error_str:
        return f"{error_type}: {error_str}"
    return error_str


def format_resolution_error(e: ResolutionError) -> str:
    """Render a resolution failure as a headline plus the detailed message.

    Example:
        FileNotFound: './src/missing' from /project
          Could not find a file on disk for './src/missing' ...
    """
    return f"{type(e).__name__}: '{e.specifier}' from {e.from_directory}\n  {e.message}"


def resolution_error_fields(e: ResolutionError) -> dict[str, Any]:
    """Machine-readable fields describing a resolution failure."""
    return {
        "error": type(e).__name__,
        "message": e.message,
        "from_directory": e.from_directory,
    }


def escape_markup(value: object) -> str:
    """Escape a value for safe interpolation into Rich markup strings."""
    return _escape_markup(str(value))
