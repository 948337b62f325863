# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-15
# Description: test_script_embedding_record.py
# -----------------------------------------------------------------------------
import json

import numpy as np
import pytest

from embedding.ScriptEmbeddingRecord import ScriptEmbeddingRecord


def _payload(**overrides):
    payload = {
        "id": "oni_ch1_12",
        "episodeId": "onikakushi",
        "chapterId": "ch1",
        "messageId": 12,
        "speaker": "Rena",
        "textENG": "Hau~ so cute!",
        "textJPN": "はう～かぁいいよぉ",
        "embedding": [0.1, 0.2, 0.3],
        "metadata": {"episodeName": "Onikakushi-hen", "arc": "question"},
    }
    payload.update(overrides)
    return payload


def test_from_dict_parses_stored_shape():
    record = ScriptEmbeddingRecord.from_dict(_payload())
    assert record.episode_id == "onikakushi"
    assert record.message_id == 12
    assert record.speaker == "Rena"
    assert record.text_jpn == "はう～かぁいいよぉ"
    assert record.vector.dtype == np.float32
    assert record.dimension == 3
    assert record.episode_name == "Onikakushi-hen"


def test_to_dict_omits_absent_optionals():
    payload = _payload()
    del payload["speaker"]
    del payload["textJPN"]
    out = ScriptEmbeddingRecord.from_dict(payload).to_dict()
    assert "speaker" not in out
    assert "textJPN" not in out
    assert out["embedding"] == pytest.approx([0.1, 0.2, 0.3])


def test_empty_speaker_is_treated_as_absent():
    record = ScriptEmbeddingRecord.from_dict(_payload(speaker="", textJPN="  "))
    assert record.speaker is None
    assert record.text_jpn is None


def test_numeric_string_message_id_is_accepted():
    assert ScriptEmbeddingRecord.from_dict(_payload(messageId="42")).message_id == 42


def test_episode_name_falls_back_to_episode_id():
    record = ScriptEmbeddingRecord.from_dict(_payload(metadata={}))
    assert record.episode_name == "onikakushi"


@pytest.mark.parametrize(
    "overrides",
    [
        {"id": ""},
        {"episodeId": None},
        {"chapterId": "  "},
        {"messageId": 0},
        {"messageId": -3},
        {"messageId": True},
        {"messageId": "abc"},
        {"textENG": ""},
        {"embedding": []},
        {"embedding": "not-a-list"},
        {"embedding": [0.1, "x"]},
        {"metadata": ["not", "a", "dict"]},
        {"speaker": 5},
    ],
)
def test_malformed_payloads_raise_value_error(overrides):
    with pytest.raises(ValueError):
        ScriptEmbeddingRecord.from_dict(_payload(**overrides))


def test_non_mapping_payload_raises():
    with pytest.raises(ValueError):
        ScriptEmbeddingRecord.from_dict(["not", "an", "object"])


@pytest.mark.parametrize(
    "embedding",
    [
        [float("nan"), 0.0],
        [float("inf"), 0.0],
        [0.0, float("-inf")],
        [1e39, 0.0],
    ],
)
def test_non_finite_embedding_raises_value_error(embedding):
    with pytest.raises(ValueError):
        ScriptEmbeddingRecord.from_dict(_payload(embedding=embedding))


def test_non_finite_embedding_in_stored_json_is_rejected():
    # json.loads accepts the NaN / Infinity literals
    payload = json.loads(json.dumps(_payload()).replace("[0.1, 0.2, 0.3]", "[NaN, Infinity, 0.3]"))
    with pytest.raises(ValueError):
        ScriptEmbeddingRecord.from_dict(payload)
