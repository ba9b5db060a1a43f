"""Resolution cache owned by a single resolver instance."""

import threading


class ResolutionCache:
    """Memoizes lookup keys to resolved paths.

    Entries are written once and never overwritten: the first stored value
    for a key wins. Reads are lock-free; writes are serialized so concurrent
    misses on the same key only duplicate file-system work.
    """

    def __init__(self):
        self._entries: dict[object, str] = {}
        self._lock = threading.Lock()

    def get(self, key: object) -> str | None:
        return self._entries.get(key)

    def set(self, key: object, resolved: str) -> str:
        """Store `resolved` under `key` unless present; return the stored value."""
        with self._lock:
            return self._entries.setdefault(key, resolved)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ResolutionCache({len(self._entries)} entries)"
