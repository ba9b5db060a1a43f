"""Resolver options.

`ResolverOptions` is the caller-facing schema: every collection in it EXTENDS
the built-in defaults, it never replaces them. `EffectiveOptions` is the
frozen result the resolver components read from.
"""

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel
from pydantic import Field

from ..fs.path_util import PathUtil
from .builtins import DEFAULT_BUILTIN_MODULES

DEFAULT_ALLOWED_EXTENSIONS: tuple[str, ...] = (".ts", ".tsx", ".js", ".mjs", ".json", ".d.ts")
DEFAULT_EXCLUDED_EXTENSIONS: tuple[str, ...] = ()
DEFAULT_PACKAGE_FIELDS: tuple[str, ...] = ("module", "es2015", "jsnext:main", "main")

# Entry used when a manifest names none (extension is probed)
DEFAULT_LIBRARY_ENTRY = "index"
DEPENDENCY_ROOT = "node_modules"
TYPES_DIRECTORY = "@types"
PACKAGE_MANIFEST = "package.json"

ManifestFallback = Literal["escalate", "strict"]


class ResolverOptions(BaseModel):
    """Caller-supplied additions to the default resolver configuration."""

    extra_extensions: list[str] = Field(
        default_factory=list, description="Extensions probed after the defaults, in order"
    )
    extra_excluded_extensions: list[str] = Field(
        default_factory=list, description="Extensions that veto a match even when allowed"
    )
    extra_package_fields: list[str] = Field(
        default_factory=list, description="package.json fields consulted after the defaults, in order"
    )
    extra_builtin_modules: list[str] = Field(
        default_factory=list, description="Specifiers supplied by the host runtime"
    )
    manifest_fallback: ManifestFallback = Field(
        default="escalate",
        description="'escalate' searches @types and a higher node_modules; 'strict' fails immediately",
    )
    retry_from_parent: bool = Field(
        default=True, description="Retry a failed library lookup once from the parent directory"
    )


@dataclass(frozen=True)
class EffectiveOptions:
    """Defaults merged with caller additions."""

    allowed_extensions: tuple[str, ...]
    excluded_extensions: frozenset[str]
    package_fields: tuple[str, ...]
    builtin_modules: frozenset[str]
    manifest_fallback: ManifestFallback = "escalate"
    retry_from_parent: bool = True

    @classmethod
    def from_options(cls, options: ResolverOptions | None = None, path_util: PathUtil | None = None) -> "EffectiveOptions":
        """Merge `options` into the defaults.

        Extensions are dot-prefixed. Ordered collections keep the first
        occurrence of a duplicate.
        """
        options = options or ResolverOptions()
        path_util = path_util or PathUtil()

        extra_extensions = [path_util.dot_extension(ext) for ext in options.extra_extensions if ext]
        extra_excluded = [path_util.dot_extension(ext) for ext in options.extra_excluded_extensions if ext]

        return cls(
            allowed_extensions=tuple(dict.fromkeys([*DEFAULT_ALLOWED_EXTENSIONS, *extra_extensions])),
            excluded_extensions=frozenset([*DEFAULT_EXCLUDED_EXTENSIONS, *extra_excluded]),
            package_fields=tuple(dict.fromkeys([*DEFAULT_PACKAGE_FIELDS, *options.extra_package_fields])),
            builtin_modules=frozenset([*DEFAULT_BUILTIN_MODULES, *options.extra_builtin_modules]),
            manifest_fallback=options.manifest_fallback,
            retry_from_parent=options.retry_from_parent,
        )

    def is_recognized(self, extension: str) -> bool:
        """Check if an extension is allowed and not vetoed."""
        return extension in self.allowed_extensions and extension not in self.excluded_extensions

    def probe_order(self) -> list[str]:
        """Allowed extensions in priority order, exclusions removed."""
        return [ext for ext in self.allowed_extensions if ext not in self.excluded_extensions]
