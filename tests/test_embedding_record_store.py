# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-15
# Description: test_embedding_record_store.py
# -----------------------------------------------------------------------------
import asyncio
import json

import pytest

from utility.errors import ServiceError
from vectorstore.EmbeddingRecordStore import EmbeddingRecordStore, episode_prefixes, record_key
from vectorstore.InMemoryObjectStore import InMemoryObjectStore


async def _collect(agen):
    return [item async for item in agen]


class BrokenListingStore(InMemoryObjectStore):
    async def list_keys(self, prefix):
        raise ConnectionError("listing unavailable")
        yield  # pragma: no cover


class FlakyFetchStore(InMemoryObjectStore):
    def __init__(self, failing_keys, objects=None):
        super().__init__(objects)
        self.failing_keys = set(failing_keys)

    async def get_object(self, key):
        if key in self.failing_keys:
            raise TimeoutError(f"timed out fetching {key}")
        return await super().get_object(key)


def test_record_key_layout():
    assert record_key("onikakushi", "ch1", "abc", root="embeddings/") == "embeddings/onikakushi/ch1/abc.json"


def test_episode_prefixes():
    assert episode_prefixes(None, root="embeddings/") == ["embeddings/"]
    assert episode_prefixes(["b", "a"], root="embeddings/") == ["embeddings/a/", "embeddings/b/"]


def test_store_then_fetch(record_store, make_record):
    record = make_record("onikakushi", "ch1", 5, 0.8, speaker="Keiichi")

    async def _run():
        key = await record_store.store_record(record)
        return key, await record_store.fetch_record(key)

    key, fetched = asyncio.run(_run())
    assert key == f"embeddings/onikakushi/ch1/{record.id}.json"
    assert fetched.id == record.id
    assert fetched.speaker == "Keiichi"
    assert fetched.vector.tolist() == pytest.approx(record.vector.tolist())


def test_list_candidate_keys_scoped_by_episode(record_store, seed, make_record):
    seed(
        make_record("onikakushi", "ch1", 1, 0.5),
        make_record("onikakushi", "ch2", 2, 0.5),
        make_record("watanagashi", "ch1", 1, 0.5),
    )
    keys = asyncio.run(_collect(record_store.list_candidate_keys(["onikakushi"])))
    assert len(keys) == 2
    assert all(k.startswith("embeddings/onikakushi/") for k in keys)

    all_keys = asyncio.run(_collect(record_store.list_candidate_keys()))
    assert len(all_keys) == 3


def test_episode_prefix_does_not_match_longer_episode_names(record_store, seed, make_record):
    seed(make_record("oni", "ch1", 1, 0.5), make_record("onikakushi", "ch1", 1, 0.5))
    keys = asyncio.run(_collect(record_store.list_candidate_keys(["oni"])))
    assert len(keys) == 1
    assert keys[0].startswith("embeddings/oni/")


def test_list_candidate_keys_respects_limit(record_store, seed, make_record):
    seed(*[make_record("onikakushi", "ch1", i, 0.5) for i in range(1, 6)])
    keys = asyncio.run(_collect(record_store.list_candidate_keys(limit=3)))
    assert len(keys) == 3


def test_directory_markers_are_skipped():
    store = EmbeddingRecordStore(InMemoryObjectStore({"embeddings/onikakushi/": b""}))
    assert asyncio.run(_collect(store.list_candidate_keys())) == []


def test_listing_failure_raises_service_error():
    store = EmbeddingRecordStore(BrokenListingStore())
    with pytest.raises(ServiceError) as exc:
        asyncio.run(_collect(store.list_candidate_keys(["onikakushi"])))
    assert exc.value.retryable is True


def test_fetch_missing_key_returns_none(record_store):
    assert asyncio.run(record_store.fetch_record("embeddings/nope/ch1/x.json")) is None


@pytest.mark.parametrize(
    "body",
    [
        b"{not json",
        b"\xff\xfe\x00",
        json.dumps({"id": "x", "episodeId": "onikakushi"}).encode(),
        json.dumps([1, 2, 3]).encode(),
    ],
)
def test_fetch_malformed_record_returns_none(body):
    key = "embeddings/onikakushi/ch1/bad.json"
    store = EmbeddingRecordStore(InMemoryObjectStore({key: body}))
    assert asyncio.run(store.fetch_record(key)) is None


def test_fetch_io_failure_returns_none(make_record):
    record = make_record("onikakushi", "ch1", 1, 0.5)
    key = record_key(record.episode_id, record.chapter_id, record.id)
    object_store = FlakyFetchStore({key}, {key: json.dumps(record.to_dict()).encode()})
    store = EmbeddingRecordStore(object_store)
    assert asyncio.run(store.fetch_record(key)) is None
