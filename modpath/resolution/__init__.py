"""Module resolution implementation.

Components, leaves first:
- BuiltinRegistry: names supplied by the host runtime
- ExtensionMatcher: ordered extension probing with exclusions
- DirectoryWalker: upward searches with bounded escalation
- PackageDescriptorReader: package.json entry selection
- LibraryLocator: bare specifier -> entry file in node_modules
- PathResolver: classification, dispatch and caching
"""

from .builtins import DEFAULT_BUILTIN_MODULES
from .builtins import BuiltinRegistry
from .cache import ResolutionCache
from .errors import DependencyRootNotFound
from .errors import FileNotFound
from .errors import InvalidAncestorPath
from .errors import InvalidPackageManifest
from .errors import PackageEntryNotFound
from .errors import PackageManifestNotFound
from .errors import ResolutionError
from .extensions import ExtensionMatcher
from .library import LibraryLocator
from .models import EscalationMode
from .models import ResolutionRequest
from .models import WalkResult
from .options import EffectiveOptions
from .options import ResolverOptions
from .package_descriptor import PackageDescriptorReader
from .resolver import PathResolver
from .walker import DirectoryWalker

__all__ = [
    "DEFAULT_BUILTIN_MODULES",
    "BuiltinRegistry",
    "DependencyRootNotFound",
    "DirectoryWalker",
    "EffectiveOptions",
    "EscalationMode",
    "ExtensionMatcher",
    "FileNotFound",
    "InvalidAncestorPath",
    "InvalidPackageManifest",
    "LibraryLocator",
    "PackageDescriptorReader",
    "PackageEntryNotFound",
    "PackageManifestNotFound",
    "PathResolver",
    "ResolutionCache",
    "ResolutionError",
    "ResolutionRequest",
    "ResolverOptions",
    "WalkResult",
]
