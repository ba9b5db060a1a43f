"""modpath - resolve import specifiers to canonical file paths."""

from .paths import create_resolver
from .resolution import DependencyRootNotFound
from .resolution import FileNotFound
from .resolution import InvalidAncestorPath
from .resolution import InvalidPackageManifest
from .resolution import PackageEntryNotFound
from .resolution import PackageManifestNotFound
from .resolution import PathResolver
from .resolution import ResolutionError
from .resolution import ResolverOptions

__all__ = [
    "create_resolver",
    "DependencyRootNotFound",
    "FileNotFound",
    "InvalidAncestorPath",
    "InvalidPackageManifest",
    "PackageEntryNotFound",
    "PackageManifestNotFound",
    "PathResolver",
    "ResolutionError",
    "ResolverOptions",
]
