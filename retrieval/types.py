# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-14
# Description: types.py
# -----------------------------------------------------------------------------
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Collection, Dict, Optional

import settings
from embedding.ScriptEmbeddingRecord import ScriptEmbeddingRecord
from utility.errors import ValidationError


def _default_max_candidates() -> Optional[int]:
    return settings.SEARCH_DEFAULTS["max_candidates"] or None


@dataclass
class SearchOptions:
    episode_ids: Optional[Collection[str]] = None
    metadata_filters: Optional[Dict[str, Any]] = None
    speaker: Optional[str] = None
    top_k: int = settings.SEARCH_DEFAULTS["top_k"]
    min_score: float = settings.SEARCH_DEFAULTS["min_score"]
    max_candidates: Optional[int] = field(default_factory=_default_max_candidates)

    def __post_init__(self) -> None:
        if isinstance(self.episode_ids, str):
            # a bare string would otherwise be iterated character by character
            self.episode_ids = [self.episode_ids]
        if isinstance(self.top_k, bool) or not isinstance(self.top_k, int) or self.top_k < 1:
            raise ValidationError(f"top_k must be a positive integer, got {self.top_k!r}")
        if isinstance(self.min_score, bool) or not isinstance(self.min_score, Real):
            raise ValidationError(f"min_score must be a number, got {self.min_score!r}")
        # NaN fails both comparisons
        if not -1.0 <= float(self.min_score) <= 1.0:
            raise ValidationError(f"min_score must be within [-1, 1], got {self.min_score!r}")
        if self.max_candidates is not None and (
            isinstance(self.max_candidates, bool)
            or not isinstance(self.max_candidates, int)
            or self.max_candidates < 1
        ):
            raise ValidationError(f"max_candidates must be a positive integer when set, got {self.max_candidates!r}")


@dataclass(frozen=True)
class RetrievalResult:
    """A scored passage; every record field except the vector."""
    id: str
    episode_id: str
    episode_name: str
    chapter_id: str
    message_id: int
    text_eng: str
    score: float
    speaker: Optional[str] = None
    text_jpn: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_record(cls, record: ScriptEmbeddingRecord, score: float) -> "RetrievalResult":
        return cls(
            id=record.id,
            episode_id=record.episode_id,
            episode_name=record.episode_name,
            chapter_id=record.chapter_id,
            message_id=record.message_id,
            text_eng=record.text_eng,
            score=float(score),
            speaker=record.speaker,
            text_jpn=record.text_jpn,
            metadata=dict(record.metadata),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "episode_id": self.episode_id,
            "episode_name": self.episode_name,
            "chapter_id": self.chapter_id,
            "message_id": self.message_id,
            "text_eng": self.text_eng,
            "score": self.score,
            "metadata": dict(self.metadata),
        }
        if self.speaker is not None:
            out["speaker"] = self.speaker
        if self.text_jpn is not None:
            out["text_jpn"] = self.text_jpn
        return out


@dataclass(frozen=True)
class Citation:
    episode_id: str
    episode_name: str
    chapter_id: str
    message_id: int
    text_eng: str
    speaker: Optional[str] = None
    text_jpn: Optional[str] = None

    @property
    def anchor(self) -> str:
        return f"{self.episode_id}/{self.chapter_id}/{self.message_id}"

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "episode_id": self.episode_id,
            "episode_name": self.episode_name,
            "chapter_id": self.chapter_id,
            "message_id": self.message_id,
            "text_eng": self.text_eng,
        }
        if self.speaker is not None:
            out["speaker"] = self.speaker
        if self.text_jpn is not None:
            out["text_jpn"] = self.text_jpn
        return out
