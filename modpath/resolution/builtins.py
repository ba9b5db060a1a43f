"""Specifiers supplied by the host runtime and never resolved on disk."""

from collections.abc import Iterable
from collections.abc import Iterator

DEFAULT_BUILTIN_MODULES: tuple[str, ...] = (
    "fs",
    "path",
    "buffer",
    "assert",
    "child_process",
    "cluster",
    "http",
    "https",
    "os",
    "crypto",
    "dns",
    "domain",
    "events",
    "net",
    "process",
    "punycode",
    "querystring",
    "readline",
    "repl",
    "stream",
    "string_decoder",
    "timers",
    "tls",
    "tty",
    "dgram",
    "url",
    "util",
    "module",
    "vm",
    "zlib",
    "constants",
)


class BuiltinRegistry:
    """Set of specifier names considered part of the host runtime."""

    def __init__(self, names: Iterable[str] = DEFAULT_BUILTIN_MODULES):
        self._names = frozenset(names)

    def is_builtin(self, specifier: str) -> bool:
        return specifier in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._names))

    def __len__(self) -> int:
        return len(self._names)

    @property
    def names(self) -> frozenset[str]:
        return self._names

    def __repr__(self) -> str:
        return f"BuiltinRegistry({len(self._names)} modules)"
