"""Directory walks used to find `node_modules` and package manifests."""

import logging
from collections.abc import Iterator

from ..fs.file_system import FileSystem
from ..fs.path_util import PathUtil
from .errors import InvalidAncestorPath
from .models import EscalationMode
from .models import ResolutionRequest
from .models import WalkResult
from .options import DEPENDENCY_ROOT
from .options import TYPES_DIRECTORY
from .options import EffectiveOptions

logger = logging.getLogger(__name__)


def sidecar_name(library_name: str) -> str:
    """Name of a library's type package under `@types`.

    Scoped names follow the DefinitelyTyped convention: `@scope/pkg` becomes
    `scope__pkg`.
    """
    if library_name.startswith("@") and "/" in library_name:
        scope, name = library_name[1:].split("/", 1)
        return f"{scope}__{name}"
    return library_name


class DirectoryWalker:
    """Upward searches with bounded fallback hops."""

    def __init__(self, file_system: FileSystem, path_util: PathUtil, options: EffectiveOptions):
        self.file_system = file_system
        self.path_util = path_util
        self.options = options

    def walk_up_for_sibling(self, name: str, start: str) -> str | None:
        """Find `name` in `start` or the nearest ancestor that contains it.

        The filesystem root itself is not probed.

        Returns:
            Absolute path to the match, or None
        """
        current = self.path_util.make_absolute(start)
        while not self.path_util.is_root(current):
            candidate = self.path_util.join(current, name)
            if self.file_system.exists(candidate):
                return candidate
            current = self.path_util.parent(current)
        return None

    def walk_up_for_named_entry(
        self,
        target: str,
        start: str,
        request: ResolutionRequest,
        *,
        escalate: bool = True,
    ) -> WalkResult:
        """Locate `target` (usually `package.json`) for the directory `start`.

        A direct child wins. When `start` does not exist, each escalation
        mode is tried at most once (type sidecar, then a higher
        `node_modules`). When `start` exists without a direct child, the
        tree below it is searched.

        Args:
            target: File name to find, with or without extension
            start: Directory expected to contain `target`
            request: Original request, for error messages
            escalate: Try the escalation modes when `start` is missing

        Returns:
            The directory the walk ended in and the match inside it (None
            when that directory exists but holds no match)

        Raises:
            InvalidAncestorPath: `start` and every escalation target are missing
        """
        escalations = self._escalations(start) if escalate else iter(())
        current = start

        while True:
            direct = self.path_util.join(current, target)
            if self.file_system.exists(direct):
                return WalkResult(current, direct)

            if self.file_system.exists(current):
                return WalkResult(current, self._search_tree(target, current))

            step = next(escalations, None)
            if step is None:
                raise InvalidAncestorPath(
                    f"No '{target}' found for '{request.specifier}': {start} does not exist "
                    f"in '{request.from_directory}' nor any parent directory",
                    specifier=request.specifier,
                    from_directory=request.from_directory,
                )

            mode, current = step
            logger.debug(f"[walk:{mode.value}] {target} for {request.specifier} -> {current}")

    def _escalations(self, start: str) -> Iterator[tuple[EscalationMode, str]]:
        """Yield each escalation target for a missing library path, lazily."""
        located = self._split_dependency_path(start)
        if located is None:
            return

        root, parts = located
        name_length = 2 if parts[0].startswith("@") and len(parts) > 1 else 1
        library_name = "/".join(parts[:name_length])
        rest = parts[name_length:]

        if parts[0] != TYPES_DIRECTORY:
            yield (
                EscalationMode.TYPE_SIDECAR,
                self.path_util.join(root, TYPES_DIRECTORY, sidecar_name(library_name), *rest),
            )

        # The package owning `root` sits one level up; search above it
        owner = self.path_util.parent(root)
        if self.path_util.is_root(owner):
            return
        higher_root = self.walk_up_for_sibling(DEPENDENCY_ROOT, self.path_util.parent(owner))
        if higher_root is not None:
            yield (EscalationMode.NESTED_ROOT, self.path_util.join(higher_root, *parts))

    def _split_dependency_path(self, path: str) -> tuple[str, list[str]] | None:
        """Split a path at its innermost `node_modules` segment.

        Returns:
            (dependency root, path segments below it), or None
        """
        current = self.path_util.make_absolute(path)
        below: list[str] = []
        while not self.path_util.is_root(current):
            if self.path_util.take_filename(current) == DEPENDENCY_ROOT:
                return (current, below) if below else None
            below.insert(0, self.path_util.take_filename(current))
            current = self.path_util.parent(current)
        return None

    def _search_tree(self, target: str, directory: str) -> str | None:
        """Find a file named `target` anywhere under `directory`."""
        if self.path_util.has_extension(target):
            names = {target}
        else:
            names = {target + extension for extension in self.options.probe_order()}

        files = self.file_system.list_files(
            directory,
            self.options.allowed_extensions,
            self.options.excluded_extensions,
            recursive=True,
        )
        return next((f for f in files if self.path_util.take_filename(f) in names), None)
