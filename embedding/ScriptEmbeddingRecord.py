# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-12
# Description: ScriptEmbeddingRecord
# -----------------------------------------------------------------------------
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Dict, Mapping, Optional

import numpy as np


def _required_str(payload: Mapping[str, Any], key: str) -> str:
    value = payload.get(key)
    if value is None or isinstance(value, bool):
        raise ValueError(f"Record field '{key}' is missing")
    value = str(value).strip()
    if not value:
        raise ValueError(f"Record field '{key}' must not be empty")
    return value


def _optional_str(payload: Mapping[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"Record field '{key}' must be a string, got {type(value).__name__}")
    return value if value.strip() else None


def _message_id(payload: Mapping[str, Any]) -> int:
    raw = payload.get("messageId")
    if isinstance(raw, bool):
        raise ValueError("Record field 'messageId' must be an integer")
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str) and raw.strip().isdigit():
        value = int(raw.strip())
    else:
        raise ValueError(f"Record field 'messageId' must be a positive integer, got {raw!r}")
    if value <= 0:
        raise ValueError(f"Record field 'messageId' must be a positive integer, got {value}")
    return value


def _vector(payload: Mapping[str, Any]) -> np.ndarray:
    raw = payload.get("embedding")
    if not isinstance(raw, (list, tuple)) or not raw:
        raise ValueError("Record field 'embedding' must be a non-empty list of numbers")
    if any(isinstance(v, bool) or not isinstance(v, Real) for v in raw):
        raise ValueError("Record field 'embedding' must contain only numbers")
    # values beyond float32 range overflow to inf on the cast
    with np.errstate(over="ignore"):
        arr = np.asarray(raw, dtype=np.float32)
    if not np.all(np.isfinite(arr)):
        raise ValueError("Record field 'embedding' must contain only finite numbers")
    return arr


@dataclass
class ScriptEmbeddingRecord:
    """One indexed script passage: coordinates, text, embedding vector and metadata."""
    id: str
    episode_id: str
    chapter_id: str
    message_id: int
    text_eng: str
    vector: np.ndarray
    speaker: Optional[str] = None
    text_jpn: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def dimension(self) -> int:
        return int(self.vector.shape[0])

    @property
    def episode_name(self) -> str:
        # fall back to the id so citations always carry a label
        name = self.metadata.get("episodeName")
        if name is None or not str(name).strip():
            return self.episode_id
        return str(name)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ScriptEmbeddingRecord":
        """
        Parse the stored JSON shape (camelCase keys). Raises ValueError when
        the payload is not a usable record.
        """
        if not isinstance(payload, Mapping):
            raise ValueError(f"Record payload must be an object, got {type(payload).__name__}")

        metadata = payload.get("metadata")
        if metadata is None:
            metadata = {}
        if not isinstance(metadata, Mapping):
            raise ValueError("Record field 'metadata' must be an object")

        return cls(
            id=_required_str(payload, "id"),
            episode_id=_required_str(payload, "episodeId"),
            chapter_id=_required_str(payload, "chapterId"),
            message_id=_message_id(payload),
            text_eng=_required_str(payload, "textENG"),
            vector=_vector(payload),
            speaker=_optional_str(payload, "speaker"),
            text_jpn=_optional_str(payload, "textJPN"),
            metadata=dict(metadata),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "episodeId": self.episode_id,
            "chapterId": self.chapter_id,
            "messageId": self.message_id,
            "textENG": self.text_eng,
            "embedding": [float(v) for v in self.vector],
            "metadata": dict(self.metadata),
        }
        if self.speaker is not None:
            out["speaker"] = self.speaker
        if self.text_jpn is not None:
            out["textJPN"] = self.text_jpn
        return out
