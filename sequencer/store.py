"""Ordered in-memory key-value store, prefixed views and pagination."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping, Protocol

DEFAULT_LIMIT = 100


def _check_entry(key: bytes, value: bytes | None = b"") -> None:
    if not key:
        raise ValueError("key is nil or empty")
    if value is None:
        raise ValueError("value is nil")


class _Store(Protocol):
    def get(self, key: bytes) -> bytes | None: ...

    def set(self, key: bytes, value: bytes) -> None: ...

    def delete(self, key: bytes) -> None: ...

    def items(self) -> list[tuple[bytes, bytes]]: ...


class KVStore:
    """A byte-keyed store whose entries iterate in ascending key order."""

    def __init__(self, data: Mapping[bytes, bytes] | None = None) -> None:
        self._data: dict[bytes, bytes] = {}
        for key, value in (data or {}).items():
            self.set(key, value)

    def get(self, key: bytes) -> bytes | None:
        """Return the value stored under ``key``, or None."""
        return self._data.get(bytes(key))

    def set(self, key: bytes, value: bytes) -> None:
        """Store ``value`` under ``key``; both must be given, the key non-empty."""
        _check_entry(key, value)
        self._data[bytes(key)] = bytes(value)

    def delete(self, key: bytes) -> None:
        """Remove ``key`` if present."""
        self._data.pop(bytes(key), None)

    def items(self) -> list[tuple[bytes, bytes]]:
        """All entries, sorted by key."""
        return sorted(self._data.items())

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, (bytes, bytearray)) and bytes(key) in self._data


class PrefixStore:
    """A view of a parent store restricted to keys starting with ``prefix``."""

    def __init__(self, parent: _Store, prefix: bytes) -> None:
        self.parent = parent
        self.prefix = bytes(prefix)

    def get(self, key: bytes) -> bytes | None:
        _check_entry(key)
        return self.parent.get(self.prefix + bytes(key))

    def set(self, key: bytes, value: bytes) -> None:
        _check_entry(key, value)
        self.parent.set(self.prefix + bytes(key), value)

    def delete(self, key: bytes) -> None:
        _check_entry(key)
        self.parent.delete(self.prefix + bytes(key))

    def items(self) -> list[tuple[bytes, bytes]]:
        """Entries under the prefix, with the prefix stripped, sorted by key."""
        size = len(self.prefix)
        return [(key[size:], value) for key, value in self.parent.items() if key.startswith(self.prefix)]


@dataclass
class PageRequest:
    """Selects a page either by start key or by offset."""

    key: bytes | None = None
    offset: int = 0
    limit: int = 0
    count_total: bool = False
    reverse: bool = False


@dataclass
class PageResponse:
    """Key of the next page, if any, and the total when it was asked for."""

    next_key: bytes | None = None
    total: int = 0


def paginate(
    store: _Store,
    page_request: PageRequest | None,
    on_result: Callable[[bytes, bytes], None],
) -> PageResponse:
    """Call ``on_result`` for each entry of the requested page and describe the page."""
    request = page_request or PageRequest()
    key, offset, limit = request.key, request.offset, request.limit
    count_total = request.count_total

    if offset > 0 and key is not None:
        raise ValueError("invalid request, either offset or key is expected, got both")
    if limit == 0:
        limit = DEFAULT_LIMIT
        count_total = True

    entries = store.items()
    if request.reverse:
        entries.reverse()

    if key:
        if request.reverse:
            remaining = [entry for entry in entries if entry[0] <= key]
        else:
            remaining = [entry for entry in entries if entry[0] >= key]
        for entry_key, value in remaining[:limit]:
            on_result(entry_key, value)
        next_key = remaining[limit][0] if len(remaining) > limit else None
        return PageResponse(next_key=next_key)

    end = offset + limit
    for entry_key, value in entries[offset:end]:
        on_result(entry_key, value)
    next_key = entries[end][0] if len(entries) > end else None
    return PageResponse(next_key=next_key, total=len(entries) if count_total else 0)