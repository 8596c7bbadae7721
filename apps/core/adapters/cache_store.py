# apps/core/adapters/cache_store.py
from typing import Dict, Optional

from django.core.cache import caches

from apps.core.ports.local_store import ILocalStore


class DjangoCacheLocalStore(ILocalStore):
    def __init__(self, alias: str = 'local'):
        self.alias = alias

    @property
    def cache(self):
        return caches[self.alias]

    def get(self, key: str) -> Optional[str]:
        return self.cache.get(key)

    def set(self, key: str, value: str) -> None:
        # timeout=None -> wpis nigdy nie wygasa
        self.cache.set(key, value, timeout=None)

    def delete(self, key: str) -> None:
        self.cache.delete(key)


class InMemoryLocalStore(ILocalStore):
    def __init__(self):
        self.data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)
