"""Public entry point: specifier + directory -> absolute file path."""

import logging
import os

from ..fs.file_system import FileSystem
from ..fs.path_util import PathUtil
from .builtins import BuiltinRegistry
from .cache import ResolutionCache
from .errors import DependencyRootNotFound
from .errors import FileNotFound
from .errors import ResolutionError
from .extensions import ExtensionMatcher
from .library import LibraryLocator
from .models import ResolutionRequest
from .options import EffectiveOptions
from .options import ResolverOptions
from .package_descriptor import PackageDescriptorReader
from .walker import DirectoryWalker

logger = logging.getLogger(__name__)


class PathResolver:
    """Resolves import specifiers the way Node.js would locate them.

    Classification:
    - builtin (e.g. "fs"): returned verbatim, no file-system access
    - library (bare name): located inside the nearest `node_modules`
    - file (starts with "." or "/"): extension-probed relative to the directory

    Results are memoized per instance; a repeated request performs no
    file-system calls at all.
    """

    def __init__(
        self,
        file_system: FileSystem | None = None,
        path_util: PathUtil | None = None,
        options: ResolverOptions | None = None,
        cache: ResolutionCache | None = None,
    ):
        self.path_util = path_util or PathUtil()
        self.file_system = file_system or FileSystem(self.path_util)
        self.cache = cache if cache is not None else ResolutionCache()
        self.configure(options)

    def configure(self, options: ResolverOptions | None = None) -> None:
        """Apply options to all subsequent resolutions.

        Previously cached results were computed under different options, so
        the cache is emptied.
        """
        self.options = EffectiveOptions.from_options(options, self.path_util)
        self.builtins = BuiltinRegistry(self.options.builtin_modules)
        self.matcher = ExtensionMatcher(self.file_system, self.path_util, self.options)
        self.walker = DirectoryWalker(self.file_system, self.path_util, self.options)
        self.descriptor_reader = PackageDescriptorReader(self.file_system, self.path_util, self.options)
        self.locator = LibraryLocator(
            self.file_system,
            self.path_util,
            self.options,
            walker=self.walker,
            matcher=self.matcher,
            descriptor_reader=self.descriptor_reader,
        )
        self.cache.clear()

    @property
    def builtin_modules(self) -> frozenset[str]:
        return self.builtins.names

    def cache_key(self, specifier: str, from_directory: str) -> tuple[str, ...]:
        """Lookup key for a request. Pure string work, no file-system access."""
        if self.path_util.is_lib(specifier):
            if self.builtins.is_builtin(specifier):
                return ("builtin", specifier)
            return ("library", specifier, from_directory)
        return ("file", self.path_util.make_absolute(specifier, from_directory))

    def resolve(self, specifier: str, from_directory: str | None = None) -> str:
        """Resolve a specifier to an absolute, extension-qualified path.

        Args:
            specifier: Relative path, absolute path, or bare library name
            from_directory: Directory the import occurs in (default: cwd)

        Returns:
            Absolute file path, or the specifier itself for builtins

        Raises:
            ResolutionError: Any failure to locate a file (see errors module)
        """
        from_directory = self.path_util.make_absolute(
            from_directory if from_directory is not None else os.getcwd()
        )
        key = self.cache_key(specifier, from_directory)

        if (cached := self.cache.get(key)) is not None:
            return cached

        request = ResolutionRequest(specifier, from_directory)
        kind = key[0]
        if kind == "builtin":
            resolved = specifier
        elif kind == "library":
            resolved = self._resolve_library(request)
        else:
            resolved = self._resolve_file(key[1], request)

        logger.debug(f"[resolve] {specifier} -> {resolved} ({kind})")
        return self.cache.set(key, resolved)

    def _resolve_library(self, request: ResolutionRequest) -> str:
        try:
            return self.locator.locate(request.specifier, request.from_directory, request)
        except (DependencyRootNotFound, FileNotFound):
            # Walking up already covered every ancestor, or the name itself is unusable
            raise
        except ResolutionError as first_error:
            parent = self.path_util.parent(request.from_directory)
            if not self.options.retry_from_parent or parent == request.from_directory:
                raise

            logger.debug(f"[resolve] {request.specifier} failed from {request.from_directory}, retrying from {parent}")
            try:
                return self.locator.locate(request.specifier, parent, request)
            except ResolutionError:
                raise first_error from None

    def _resolve_file(self, absolute_path: str, request: ResolutionRequest) -> str:
        resolved = self.matcher.probe_file(absolute_path)
        if resolved is None:
            raise FileNotFound(
                f"Could not find a file on disk for '{request.specifier}' "
                f"(from '{request.from_directory}'): {absolute_path}",
                specifier=request.specifier,
                from_directory=request.from_directory,
            )
        return resolved

    def __repr__(self) -> str:
        return f"PathResolver({len(self.options.allowed_extensions)} extensions, {self.cache!r})"
