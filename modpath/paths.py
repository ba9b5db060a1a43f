"""Factory helpers wiring the resolver to its collaborators.

Callers get a fresh, independent resolver (with its own cache) from each
call. There is no process-wide singleton.
"""

from .fs.file_system import FileSystem
from .fs.path_util import PathUtil
from .resolution.cache import ResolutionCache
from .resolution.options import ResolverOptions
from .resolution.resolver import PathResolver
from .settings import ResolverSettings


def create_path_util() -> PathUtil:
    return PathUtil()


def create_file_system(path_util: PathUtil | None = None) -> FileSystem:
    return FileSystem(path_util or create_path_util())


def create_resolver(
    options: ResolverOptions | None = None,
    *,
    settings: ResolverSettings | None = None,
    file_system: FileSystem | None = None,
    path_util: PathUtil | None = None,
) -> PathResolver:
    """Create a resolver with explicit collaborators.

    Args:
        options: Resolver options; takes precedence over `settings`
        settings: Settings to read options from when `options` is None
        file_system: File-system accessor (default: real disk)
        path_util: Path-string helper (default: PathUtil())

    Returns:
        A new PathResolver with an empty cache
    """
    path_util = path_util or create_path_util()
    file_system = file_system or create_file_system(path_util)

    if options is None and settings is not None:
        options = settings.to_options()

    return PathResolver(
        file_system=file_system,
        path_util=path_util,
        options=options,
        cache=ResolutionCache(),
    )
