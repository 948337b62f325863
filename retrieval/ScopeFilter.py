# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-14
# Description: ScopeFilter
# -----------------------------------------------------------------------------
from dataclasses import dataclass, field
from typing import Any, Collection, Dict, FrozenSet, List, Optional

import settings
from embedding.ScriptEmbeddingRecord import ScriptEmbeddingRecord
from retrieval.types import SearchOptions
from vectorstore.EmbeddingRecordStore import episode_prefixes


@dataclass(frozen=True)
class ScopeFilter:
    """
    Decides whether a record may be returned for a query.

    Episode scope is pushed down to the storage prefix before fetching and
    checked again after; metadata and speaker constraints need the full
    record. All constraints are ANDed.
    """
    episode_ids: FrozenSet[str] = field(default_factory=frozenset)
    metadata_filters: Dict[str, Any] = field(default_factory=dict)
    speaker: Optional[str] = None

    @classmethod
    def build(
        cls,
        episode_ids: Optional[Collection[str]] = None,
        metadata_filters: Optional[Dict[str, Any]] = None,
        speaker: Optional[str] = None,
    ) -> "ScopeFilter":
        return cls(
            episode_ids=frozenset(str(e) for e in episode_ids or () if str(e)),
            metadata_filters=dict(metadata_filters or {}),
            speaker=speaker or None,
        )

    @classmethod
    def from_options(cls, options: SearchOptions) -> "ScopeFilter":
        return cls.build(options.episode_ids, options.metadata_filters, options.speaker)

    @property
    def is_episode_scoped(self) -> bool:
        return bool(self.episode_ids)

    def episode_prefixes(self, root: str = settings.KEY_PREFIX) -> List[str]:
        return episode_prefixes(self.episode_ids, root=root)

    def matches_episode(self, record: ScriptEmbeddingRecord) -> bool:
        return not self.episode_ids or record.episode_id in self.episode_ids

    def matches_metadata(self, record: ScriptEmbeddingRecord) -> bool:
        for key, expected in self.metadata_filters.items():
            if key not in record.metadata:
                return False
            if str(record.metadata[key]) != str(expected):
                return False
        return True

    def matches_speaker(self, record: ScriptEmbeddingRecord) -> bool:
        return self.speaker is None or record.speaker == self.speaker

    def is_eligible(self, record: ScriptEmbeddingRecord) -> bool:
        return self.matches_episode(record) and self.matches_metadata(record) and self.matches_speaker(record)
