"""Local cache of INACTIVE workers and projects.

The backend's list endpoints may leave deactivated records out. Every record
last seen as INACTIVE is kept here and merged back into each fresh list so
"show inactive" views keep showing it until the server returns that id again.
"""

from __future__ import annotations

import json
import logging
from typing import Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from contracts import RegistrationStatus
from cache.store import KeyValueStore


logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def _is_inactive(entity: Optional[BaseModel]) -> bool:
    return entity is not None and getattr(entity, "registration_status", None) == RegistrationStatus.INACTIVO


class SoftDeleteCache(Generic[T]):
    """One persisted namespace of INACTIVE records for a single entity kind.

    Build one instance per kind for the lifetime of the application and pass
    it to whoever needs it.

    Args:
        store: Backing key-value store
        key: Storage key of this namespace
        model: Contract class used to decode stored records (Worker, Project)
    """

    def __init__(self, store: KeyValueStore, key: str, model: Type[T]):
        self.store = store
        self.key = key
        self.model = model

    def cached(self) -> List[T]:
        """INACTIVE records currently persisted.

        Malformed data is logged and read as an empty cache; invalid entries
        inside an otherwise valid list are skipped.
        """
        raw = self.store.get(self.key)
        if not raw:
            return []
        try:
            parsed = json.loads(raw)
        except ValueError as e:
            logger.warning("Cache %s holds malformed JSON, ignoring it: %s", self.key, e)
            return []
        if not isinstance(parsed, list):
            logger.warning("Cache %s does not hold a list, ignoring it", self.key)
            return []

        entities: List[T] = []
        for item in parsed:
            if not isinstance(item, dict):
                continue
            try:
                entity = self.model.model_validate(item)
            except ValidationError as e:
                logger.warning("Skipping invalid entry in cache %s: %s", self.key, e)
                continue
            if _is_inactive(entity):
                entities.append(entity)
        return entities

    def _persist(self, entities: List[T]) -> None:
        inactive = [e.model_dump(by_alias=True, mode="json") for e in entities if _is_inactive(e)]
        self.store.set(self.key, json.dumps(inactive, ensure_ascii=False))

    def overlay(self, server_list: List[T]) -> List[T]:
        """Server records followed by cached records whose id the server lacks.

        Read-only counterpart of ``merge``: the cache is not rewritten.
        """
        seen = {entity.id for entity in server_list}
        return list(server_list) + [e for e in self.cached() if e.id not in seen]

    def merge(self, server_list: List[T]) -> List[T]:
        """Merge a fresh server list with the cached INACTIVE records.

        Server records win on id collision. Cached records whose id the
        server did not return are appended after the server records. The
        INACTIVE subset of the result becomes the new cache.

        Returns:
            Server records in server order, then cache-only records.
        """
        merged = {}
        for entity in server_list:
            merged[entity.id] = entity
        added = 0
        for entity in self.cached():
            if entity.id not in merged:
                merged[entity.id] = entity
                added += 1

        result = list(merged.values())
        self._persist(result)
        if added:
            logger.debug("Cache %s restored %d inactive record(s)", self.key, added)
        return result

    def sync(self, entity: T) -> None:
        """Refresh the cache after a single record changed.

        Any previous entry for the id is dropped; the record is re-added only
        if it is now INACTIVE.
        """
        entries = [e for e in self.cached() if e.id != entity.id]
        if _is_inactive(entity):
            entries.append(entity)
        self._persist(entries)

    def clear(self) -> None:
        self.store.delete(self.key)
