# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-15
# Description: conftest.py
# -----------------------------------------------------------------------------

import asyncio
import math
import sys
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
import pytest

# add project root to sys.path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from embedding.ScriptEmbeddingRecord import ScriptEmbeddingRecord  # noqa: E402
from services.ScriptSearchService import ScriptSearchService  # noqa: E402
from vectorstore.EmbeddingRecordStore import EmbeddingRecordStore  # noqa: E402
from vectorstore.InMemoryObjectStore import InMemoryObjectStore  # noqa: E402

QUERY_VECTOR = np.array([1.0, 0.0], dtype=np.float32)


class FixedEmbedder:
    """Returns the same vector for every query and remembers what it was asked."""

    def __init__(self, vector=QUERY_VECTOR, error: Exception | None = None):
        self.vector = np.asarray(vector, dtype=np.float32)
        self.error = error
        self.calls: List[str] = []

    async def embed(self, text: str) -> np.ndarray:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.vector


def vector_for_score(score: float) -> List[float]:
    """2-d unit vector whose cosine similarity with QUERY_VECTOR is `score`."""
    return [score, math.sqrt(max(0.0, 1.0 - score * score))]


def build_record(
    episode_id: str,
    chapter_id: str,
    message_id: int,
    score: float,
    *,
    speaker: Optional[str] = None,
    text_jpn: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
    record_id: Optional[str] = None,
    vector: Optional[List[float]] = None,
) -> ScriptEmbeddingRecord:
    meta = {"episodeName": episode_id.capitalize() + "-hen"}
    meta.update(metadata or {})
    return ScriptEmbeddingRecord(
        id=record_id or f"{episode_id}_{chapter_id}_{message_id}_{uuid.uuid4().hex[:6]}",
        episode_id=episode_id,
        chapter_id=chapter_id,
        message_id=message_id,
        text_eng=f"Line {message_id} of {episode_id}",
        vector=np.asarray(vector if vector is not None else vector_for_score(score), dtype=np.float32),
        speaker=speaker,
        text_jpn=text_jpn,
        metadata=meta,
    )


@pytest.fixture
def make_record():
    return build_record


@pytest.fixture
def object_store() -> InMemoryObjectStore:
    return InMemoryObjectStore()


@pytest.fixture
def record_store(object_store) -> EmbeddingRecordStore:
    return EmbeddingRecordStore(object_store)


@pytest.fixture
def embedder() -> FixedEmbedder:
    return FixedEmbedder()


@pytest.fixture
def seed(record_store):
    def _seed(*records: ScriptEmbeddingRecord) -> List[str]:
        async def _store_all():
            return [await record_store.store_record(r) for r in records]
        return asyncio.run(_store_all())
    return _seed


@pytest.fixture
def search_service(embedder, record_store) -> ScriptSearchService:
    return ScriptSearchService(
        embedder=embedder,
        record_store=record_store,
        fetch_concurrency=4,
        expected_dimension=2,
    )
