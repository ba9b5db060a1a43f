"""Synchronous file-system access for the resolver.

All probing goes through this class so callers can substitute an instrumented
or in-memory variant.
"""

import logging
import os
from collections.abc import Collection

from .path_util import PathUtil

logger = logging.getLogger(__name__)


class FileSystem:
    """Blocking file-system accessor."""

    def __init__(self, path_util: PathUtil | None = None):
        self.path_util = path_util or PathUtil()

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def is_file(self, path: str) -> bool:
        return os.path.isfile(path)

    def read_text(self, path: str) -> str:
        with open(path, encoding="utf-8") as f:
            return f.read()

    def list_files(
        self,
        directory: str,
        allowed: Collection[str],
        excluded: Collection[str] = (),
        recursive: bool = True,
    ) -> list[str]:
        """List files under a directory whose extension passes the filters.

        Walks top-down with directory and file names sorted so results are
        stable across platforms.

        Args:
            directory: Directory to list
            allowed: Extensions a file must carry to be listed
            excluded: Extensions that veto a file even if allowed
            recursive: Descend into subdirectories

        Returns:
            Absolute file paths in walk order
        """
        results: list[str] = []
        for root, dirnames, filenames in os.walk(directory):
            dirnames.sort()
            for filename in sorted(filenames):
                extension = self.path_util.take_extension(filename)
                if extension in excluded or extension not in allowed:
                    continue
                results.append(os.path.join(root, filename))
            if not recursive:
                break
        logger.debug(f"[fs:list] {directory} -> {len(results)} files")
        return results


__all__ = ["FileSystem"]
