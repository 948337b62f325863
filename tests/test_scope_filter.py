# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-15
# Description: test_scope_filter.py
# -----------------------------------------------------------------------------
from retrieval.ScopeFilter import ScopeFilter
from retrieval.types import SearchOptions


def test_unscoped_filter_accepts_everything(make_record):
    scope = ScopeFilter.build()
    assert not scope.is_episode_scoped
    assert scope.is_eligible(make_record("onikakushi", "ch1", 1, 0.5))
    assert scope.episode_prefixes("embeddings/") == ["embeddings/"]


def test_empty_episode_list_means_all_episodes(make_record):
    scope = ScopeFilter.build(episode_ids=[])
    assert scope.is_eligible(make_record("watanagashi", "ch1", 1, 0.5))


def test_episode_scope(make_record):
    scope = ScopeFilter.build(episode_ids=["watanagashi", "onikakushi", "onikakushi"])
    assert scope.episode_prefixes("embeddings/") == ["embeddings/onikakushi/", "embeddings/watanagashi/"]
    assert scope.matches_episode(make_record("onikakushi", "ch1", 1, 0.5))
    assert not scope.matches_episode(make_record("tatarigoroshi", "ch1", 1, 0.5))


def test_metadata_filters_are_conjunctive(make_record):
    record = make_record("onikakushi", "ch2", 4, 0.5, metadata={"arc": "question", "day": 3})
    assert ScopeFilter.build(metadata_filters={"arc": "question"}).is_eligible(record)
    assert ScopeFilter.build(metadata_filters={"arc": "question", "day": "3"}).is_eligible(record)
    assert not ScopeFilter.build(metadata_filters={"arc": "question", "day": 4}).is_eligible(record)
    assert not ScopeFilter.build(metadata_filters={"arc": "answer"}).is_eligible(record)


def test_unknown_metadata_key_fails_to_match(make_record):
    record = make_record("onikakushi", "ch2", 4, 0.5)
    scope = ScopeFilter.build(metadata_filters={"doesNotExist": "x"})
    assert scope.is_eligible(record) is False


def test_speaker_filter(make_record):
    scope = ScopeFilter.build(speaker="Rena")
    assert scope.is_eligible(make_record("onikakushi", "ch1", 1, 0.5, speaker="Rena"))
    assert not scope.is_eligible(make_record("onikakushi", "ch1", 2, 0.5, speaker="Mion"))
    assert not scope.is_eligible(make_record("onikakushi", "ch1", 3, 0.5))


def test_from_options():
    scope = ScopeFilter.from_options(SearchOptions(episode_ids="onikakushi", metadata_filters={"a": 1}))
    assert scope.episode_ids == frozenset({"onikakushi"})
    assert scope.metadata_filters == {"a": 1}
