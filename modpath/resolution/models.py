"""Data models shared by the resolution components."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class ResolutionRequest:
    """A single `resolve` call: what was asked for and where from.

    Errors always report this original request, never an intermediate path.
    """

    specifier: str
    from_directory: str


class EscalationMode(str, Enum):
    """Fallback locations tried when a library directory does not exist.

    Modes:
    - TYPE_SIDECAR: `node_modules/@types/<name>` beside the missing library
    - NESTED_ROOT: `<name>` inside the next `node_modules` further up
    """

    TYPE_SIDECAR = "type-sidecar"
    NESTED_ROOT = "nested-root"


@dataclass(frozen=True)
class WalkResult:
    """Outcome of a named-entry walk.

    `directory` is where the walk ended, after any escalation; `match` is the
    file found there, or None when the directory holds no such file.
    """

    directory: str
    match: str | None = None
