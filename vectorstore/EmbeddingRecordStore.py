# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-13
# Updated: 2026-10-15
# Description: EmbeddingRecordStore
# -----------------------------------------------------------------------------
from __future__ import annotations

import json
import logging
from typing import AsyncIterator, Iterable, List, Optional

import settings
from embedding.ScriptEmbeddingRecord import ScriptEmbeddingRecord
from utility.errors import ServiceError
from utility.logging_utils import get_class_logger
from vectorstore.ObjectStore import ObjectStore


def record_key(episode_id: str, chapter_id: str, record_id: str, *, root: str = settings.KEY_PREFIX) -> str:
    """Storage key for one record: {root}{episodeId}/{chapterId}/{recordId}.json"""
    return f"{root}{episode_id}/{chapter_id}/{record_id}.json"


def episode_prefixes(episode_ids: Optional[Iterable[str]], *, root: str = settings.KEY_PREFIX) -> List[str]:
    """
    One listing prefix per requested episode, or the whole corpus when no
    episode is requested. Sorted so enumeration order is reproducible.
    """
    ids = sorted({str(e) for e in episode_ids or () if str(e)})
    if not ids:
        return [root]
    return [f"{root}{episode_id}/" for episode_id in ids]


class EmbeddingRecordStore:
    """
    Reads (and, for ingestion tooling, writes) embedding records kept as one
    JSON object per passage in an ObjectStore.
    """

    def __init__(
        self,
        object_store: ObjectStore,
        *,
        root: str = settings.KEY_PREFIX,
        logger: logging.Logger | None = None,
    ) -> None:
        self.object_store = object_store
        self.root = root
        self.logger = logger or get_class_logger(self.__class__)

    async def list_candidate_keys(
        self,
        episode_ids: Optional[Iterable[str]] = None,
        *,
        limit: Optional[int] = None,
    ) -> AsyncIterator[str]:
        """
        Yield candidate keys, one enumeration per episode prefix. Raises
        ServiceError if a listing call fails.
        """
        prefixes = episode_prefixes(episode_ids, root=self.root)
        self.logger.debug("list_candidate_keys: prefixes=%s limit=%s (start)", prefixes, limit)

        yielded = 0
        for prefix in prefixes:
            try:
                async for key in self.object_store.list_keys(prefix):
                    if key.endswith("/"):
                        continue
                    yield key
                    yielded += 1
                    if limit is not None and yielded >= limit:
                        self.logger.info("list_candidate_keys: stopped at limit=%d", limit)
                        return
            except ServiceError:
                raise
            except Exception as e:
                self.logger.error("list_candidate_keys: listing failed for prefix '%s': %s", prefix, e)
                raise ServiceError(f"Failed to list embeddings under '{prefix}': {e}") from e

        self.logger.debug("list_candidate_keys: %d keys (done)", yielded)

    async def fetch_record(self, key: str) -> Optional[ScriptEmbeddingRecord]:
        """
        Point lookup. Missing, unreadable or malformed records yield None.
        """
        try:
            data = await self.object_store.get_object(key)
        except Exception as e:
            self.logger.warning("fetch_record: fetch failed for '%s', skipping: %s", key, e)
            return None

        if data is None:
            self.logger.warning("fetch_record: '%s' not found, skipping", key)
            return None

        try:
            payload = json.loads(data)
            return ScriptEmbeddingRecord.from_dict(payload)
        except (ValueError, TypeError) as e:
            # json.JSONDecodeError and UnicodeDecodeError are ValueErrors
            self.logger.warning("fetch_record: malformed record '%s', skipping: %s", key, e)
            return None

    async def store_record(self, record: ScriptEmbeddingRecord) -> str:
        key = record_key(record.episode_id, record.chapter_id, record.id, root=self.root)
        body = json.dumps(record.to_dict(), ensure_ascii=False).encode("utf-8")
        await self.object_store.put_object(key, body, content_type="application/json")
        self.logger.info("Stored embedding id='%s' episode='%s' -> '%s'", record.id, record.episode_id, key)
        return key
