"""Path-string helpers used by the resolver.

Everything here is pure string manipulation. Nothing touches the disk, so the
resolver can compute cache keys without a single file-system probe.
"""

import ntpath
import os
import posixpath

# Extensions made of more than one dotted part that must be treated as a unit
COMPOUND_EXTENSIONS: tuple[str, ...] = (".d.ts", ".d.mts", ".d.cts")


class PathUtil:
    """String operations on file-system paths."""

    def __init__(self, compound_extensions: tuple[str, ...] = COMPOUND_EXTENSIONS):
        self.compound_extensions = compound_extensions

    def make_absolute(self, path: str, from_directory: str | None = None) -> str:
        """Return `path` as a normalized absolute path.

        Relative paths are anchored at `from_directory` (default: cwd).
        Symlinks are not resolved.
        """
        if os.path.isabs(path):
            return os.path.normpath(path)
        base = from_directory if from_directory is not None else os.getcwd()
        return os.path.normpath(os.path.join(os.path.abspath(base), path))

    def join(self, *parts: str) -> str:
        return os.path.normpath(os.path.join(*parts))

    def parent(self, path: str) -> str:
        return os.path.dirname(os.path.normpath(path))

    def is_root(self, path: str) -> bool:
        return self.parent(path) == os.path.normpath(path)

    def segments(self, path: str) -> list[str]:
        """Split a path on both separators, dropping empty parts."""
        return [part for part in path.replace("\\", "/").split("/") if part]

    def take_filename(self, path: str) -> str:
        return os.path.basename(os.path.normpath(path))

    def take_extension(self, path: str) -> str:
        """Return the extension of `path`, including its leading dot.

        Compound extensions such as `.d.ts` are returned whole.
        """
        filename = self.take_filename(path)
        for compound in self.compound_extensions:
            if filename.endswith(compound) and len(filename) > len(compound):
                return compound
        return os.path.splitext(filename)[1]

    def has_extension(self, path: str) -> bool:
        return self.take_extension(path) != ""

    def clear_extension(self, path: str) -> str:
        extension = self.take_extension(path)
        if not extension:
            return path
        return path[: -len(extension)]

    def set_extension(self, path: str, extension: str) -> str:
        return self.clear_extension(path) + self.dot_extension(extension)

    def dot_extension(self, extension: str) -> str:
        """Prefix an extension with a dot unless it already carries one."""
        if not extension or extension.startswith("."):
            return extension
        return f".{extension}"

    def is_lib(self, specifier: str) -> bool:
        """Check if a specifier names a library rather than a file path.

        Anything that does not start with a relative or absolute path marker
        is a library specifier.
        """
        if specifier.startswith((".", "/", "\\")):
            return False
        if ntpath.isabs(specifier) or posixpath.isabs(specifier):
            return False
        return True


__all__ = ["COMPOUND_EXTENSIONS", "PathUtil"]
