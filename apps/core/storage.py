# apps/core/storage.py
import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from apps.core.errors import PersistenceError
from apps.core.ports.local_store import ILocalStore

logger = logging.getLogger(__name__)


class StorageOutcome(str, Enum):
    REMOTE = 'remote'
    LOCAL = 'local'


@dataclass
class StorageResult:
    outcome: StorageOutcome
    value: Any = None

    @property
    def is_remote(self) -> bool:
        return self.outcome == StorageOutcome.REMOTE


class FallbackStorage:
    """
    Jeden punkt dostępu do dwóch backendów: zdalnego (baza) i lokalnego (cache urządzenia).

    Zdalna operacja jest przekazywana jako callable. Jeśli rzuci PersistenceError
    (lub polityka wyłączyła backend zdalny), dane trafiają do / są czytane z lokalnego klucza.
    """

    def __init__(self, local_store: ILocalStore, remote_enabled: bool = True):
        self.local_store = local_store
        self.remote_enabled = remote_enabled

    def write(self, remote_write: Callable[[], Any], key: str, payload: Any) -> StorageResult:
        if self.remote_enabled:
            try:
                return StorageResult(StorageOutcome.REMOTE, remote_write())
            except PersistenceError as e:
                logger.warning("Remote write failed (%s), falling back to local key %s", e, key)

        self.write_local(key, payload)
        return StorageResult(StorageOutcome.LOCAL, payload)

    def read(self, remote_read: Callable[[], Any], key: str) -> StorageResult:
        """Czyta zdalnie; None ze zdalnego backendu też kieruje do lokalnego klucza."""
        if self.remote_enabled:
            try:
                value = remote_read()
                if value is not None:
                    return StorageResult(StorageOutcome.REMOTE, value)
            except PersistenceError as e:
                logger.warning("Remote read failed (%s), trying local key %s", e, key)

        return StorageResult(StorageOutcome.LOCAL, self.read_local(key))

    def write_local(self, key: str, payload: Any) -> None:
        self.local_store.set(key, json.dumps(payload, default=str))

    def read_local(self, key: str) -> Optional[Any]:
        raw = self.local_store.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Corrupted local entry under %s, ignoring", key)
            return None

    def delete_local(self, key: str) -> None:
        self.local_store.delete(key)
