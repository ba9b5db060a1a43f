"""File-system and path-string collaborators consumed by the resolver."""

from .file_system import FileSystem
from .path_util import PathUtil

__all__ = ["FileSystem", "PathUtil"]
