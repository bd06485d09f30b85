"""Cache en memoria con TTL y eviction LRU para resultados de discovery."""

import time
from collections import OrderedDict
from typing import Generic, TypeVar

T = TypeVar("T")


def normalize_key(raw: str) -> str:
    """Normaliza identificadores de empresa ("  ACME Corp " -> "acme corp")."""
    return " ".join(raw.split()).lower()


class TTLCache(Generic[T]):
    """Cache simple con expiracion por TTL y eviction LRU.

    Las claves se normalizan, asi que variantes de mayusculas o espacios
    de un mismo identificador comparten entrada.
    """

    def __init__(self, ttl_seconds: int, max_size: int):
        self._ttl_seconds = ttl_seconds
        self._max_size = max_size
        self._store: OrderedDict[str, tuple[float, T]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._store)

    def get(self, key: str) -> T | None:
        """Obtiene un valor si existe y no expiro."""
        key = normalize_key(key)
        entry = self._store.get(key)
        if entry is None:
            return None

        stored_at, value = entry
        if time.monotonic() - stored_at > self._ttl_seconds:
            del self._store[key]
            return None

        self._store.move_to_end(key)
        return value

    def set(self, key: str, value: T) -> None:
        """Guarda un valor y aplica politica de eviction LRU."""
        key = normalize_key(key)
        self._store[key] = (time.monotonic(), value)
        self._store.move_to_end(key)
        while len(self._store) > self._max_size:
            self._store.popitem(last=False)

    def invalidate(self, key: str) -> None:
        self._store.pop(normalize_key(key), None)

    def clear(self) -> None:
        self._store.clear()
