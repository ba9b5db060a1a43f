"""Turning a bare library specifier into a concrete entry file."""

import logging

from ..fs.file_system import FileSystem
from ..fs.path_util import PathUtil
from .errors import DependencyRootNotFound
from .errors import FileNotFound
from .errors import PackageEntryNotFound
from .errors import PackageManifestNotFound
from .extensions import ExtensionMatcher
from .models import ResolutionRequest
from .options import DEPENDENCY_ROOT
from .options import PACKAGE_MANIFEST
from .options import EffectiveOptions
from .package_descriptor import PackageDescriptorReader
from .walker import DirectoryWalker

logger = logging.getLogger(__name__)


class LibraryLocator:
    """Locates a library's entry file inside `node_modules`.

    Resolution order (first match wins):
    1. Same-named script beside the library directory (`<lib>.ts`, ...)
    2. A concrete file path inside a library (`lib/sub/file`)
    3. The entry named by the library's `package.json`
    4. An `index` file in the library directory (after any escalation) when
       no manifest exists
    """

    def __init__(
        self,
        file_system: FileSystem,
        path_util: PathUtil,
        options: EffectiveOptions,
        walker: DirectoryWalker,
        matcher: ExtensionMatcher,
        descriptor_reader: PackageDescriptorReader,
    ):
        self.file_system = file_system
        self.path_util = path_util
        self.options = options
        self.walker = walker
        self.matcher = matcher
        self.descriptor_reader = descriptor_reader

    def locate(self, lib_name: str, from_directory: str, request: ResolutionRequest | None = None) -> str:
        """Resolve `lib_name` as seen from `from_directory`.

        Args:
            lib_name: Bare library specifier (e.g. "left-pad", "@scope/pkg/sub")
            from_directory: Absolute directory the lookup starts from
            request: Original request, when this lookup is a retry

        Returns:
            Absolute path of the library's entry file

        Raises:
            FileNotFound: `lib_name` names no library
            DependencyRootNotFound: No `node_modules` in any ancestor
            PackageManifestNotFound: No manifest and no index file
            PackageEntryNotFound: Manifest entry matches no file
            InvalidAncestorPath: Library directory and its fallbacks are missing
        """
        request = request or ResolutionRequest(lib_name, from_directory)
        library_dir = self.library_directory(lib_name, from_directory, request)

        if script := self.matcher.first_match(library_dir):
            logger.debug(f"[library] {lib_name} -> {script} (script)")
            return script

        if self.file_system.exists(library_dir) and not self.file_system.is_dir(library_dir):
            if found := self.matcher.probe_file(library_dir):
                return found

        walk = self.walker.walk_up_for_named_entry(
            PACKAGE_MANIFEST,
            library_dir,
            request,
            escalate=self.options.manifest_fallback == "escalate",
        )

        if walk.match is None:
            if index := self.matcher.index_match(walk.directory):
                logger.debug(f"[library] {lib_name} -> {index} (no manifest, index)")
                return index
            raise PackageManifestNotFound(
                f"Could not find a {PACKAGE_MANIFEST} for '{request.specifier}' "
                f"(from '{request.from_directory}') within directory: {walk.directory}",
                specifier=request.specifier,
                from_directory=request.from_directory,
            )

        return self._entry_file(walk.match, walk.directory, request)

    def library_directory(self, lib_name: str, from_directory: str, request: ResolutionRequest) -> str:
        """Absolute directory a library is expected to live in.

        Raises:
            FileNotFound: `lib_name` names no library (empty, or a bare `node_modules`)
            DependencyRootNotFound: No `node_modules` in any ancestor
        """
        segments = self.path_util.segments(lib_name)
        if not segments or segments[-1] == DEPENDENCY_ROOT:
            raise FileNotFound(
                f"'{request.specifier}' (from '{request.from_directory}') does not name a library",
                specifier=request.specifier,
                from_directory=request.from_directory,
            )

        if DEPENDENCY_ROOT in segments:
            return self.path_util.make_absolute(lib_name, from_directory)

        dependency_root = self.walker.walk_up_for_sibling(DEPENDENCY_ROOT, from_directory)
        if dependency_root is None:
            raise DependencyRootNotFound(
                f"Could not locate '{DEPENDENCY_ROOT}' for '{request.specifier}' in neither "
                f"'{request.from_directory}' nor any parent directory",
                specifier=request.specifier,
                from_directory=request.from_directory,
            )
        return self.path_util.join(dependency_root, lib_name)

    def _entry_file(self, manifest: str, library_dir: str, request: ResolutionRequest) -> str:
        entry = self.descriptor_reader.entry_path_for(manifest, request)

        # Trust the manifest when it names a full file
        if self.options.is_recognized(self.path_util.take_extension(entry)):
            return entry

        match = (
            self.matcher.first_match(entry)
            or self.matcher.index_match(entry)
            or self.matcher.index_match(library_dir)
        )
        if match is None:
            raise PackageEntryNotFound(
                f"No file on disk matches the entry {entry} declared in {manifest} "
                f"(resolving '{request.specifier}' from '{request.from_directory}')",
                specifier=request.specifier,
                from_directory=request.from_directory,
            )
        return match
