# apps/core/ports/local_store.py
from abc import ABC, abstractmethod
from typing import Optional


def local_key(user_id, purpose: str, suffix) -> str:
    """Klucz w formacie {userId}_{purpose}_{date-or-context}."""
    return f"{user_id}_{purpose}_{suffix}"


class ILocalStore(ABC):
    """Prosta mapa klucz -> string. Bez TTL i bez eviction."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        pass
