"""Extension inference for extensionless or loosely-named specifiers."""

import logging

from ..fs.file_system import FileSystem
from ..fs.path_util import PathUtil
from .options import DEFAULT_LIBRARY_ENTRY
from .options import EffectiveOptions

logger = logging.getLogger(__name__)


class ExtensionMatcher:
    """Probes candidate suffixes in priority order.

    Allowed extensions are scanned in order and the first existing file wins.
    An excluded extension is never matched, even when it is also allowed.
    """

    def __init__(self, file_system: FileSystem, path_util: PathUtil, options: EffectiveOptions):
        self.file_system = file_system
        self.path_util = path_util
        self.options = options

    def first_match(self, base_path: str) -> str | None:
        """Return the first `base_path + extension` that exists as a file.

        The veto applies to the extension the candidate ends up with, so
        `foo.d` + `.ts` is skipped when `.d.ts` is excluded.
        """
        for extension in self.options.probe_order():
            candidate = base_path + extension
            if self.path_util.take_extension(candidate) in self.options.excluded_extensions:
                continue
            if self.file_system.is_file(candidate):
                return candidate
        return None

    def index_match(self, directory: str) -> str | None:
        """Return the first `directory/index + extension` that exists."""
        return self.first_match(self.path_util.join(directory, DEFAULT_LIBRARY_ENTRY))

    def cleared_match(self, base_path: str) -> str | None:
        """Strip any suffix from `base_path`, then probe extensions."""
        return self.first_match(self.path_util.clear_extension(base_path))

    def probe_file(self, path: str) -> str | None:
        """Locate the file an absolute path designates.

        Order:
        1. `path` itself, when it is a file with a non-excluded extension
        2. extension swap, when `path` carries a recognized extension
           (`foo.js` may be authored as `foo.ts`)
        3. appended extension (`foo.model` -> `foo.model.ts`)
        4. extension swap, when `path` carries an unrecognized suffix
        5. `index` file inside `path`

        Returns:
            Absolute file path, or None when nothing matches
        """
        extension = self.path_util.take_extension(path)

        if (
            extension not in self.options.excluded_extensions
            and not self.file_system.is_dir(path)
            and self.file_system.exists(path)
        ):
            return path

        recognized = bool(extension) and self.options.is_recognized(extension)

        if recognized and (match := self.cleared_match(path)):
            logger.debug(f"[probe] {path} -> {match} (extension swapped)")
            return match

        if match := self.first_match(path):
            return match

        if extension and not recognized and (match := self.cleared_match(path)):
            logger.debug(f"[probe] {path} -> {match} (suffix cleared)")
            return match

        if match := self.index_match(path):
            logger.debug(f"[probe] {path} -> {match} (index)")
            return match

        return None
