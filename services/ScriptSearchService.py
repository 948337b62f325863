# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-14
# Updated: 2026-10-17
# Description: ScriptSearchService
# -----------------------------------------------------------------------------
import asyncio
import logging
import time
from typing import Any, Dict, List, Optional, Protocol, Sequence

import numpy as np

import settings
from embedding.ScriptEmbeddingRecord import ScriptEmbeddingRecord
from retrieval.CitationFormatter import dedupe_citations, group_results_by_episode, to_citation
from retrieval.ScopeFilter import ScopeFilter
from retrieval.VectorSimilarity import cosine_similarity, rank_results
from retrieval.types import RetrievalResult, SearchOptions
from utility.errors import DimensionMismatchError, ScriptSearchError, ServiceError
from utility.logging_utils import get_class_logger
from vectorstore.EmbeddingRecordStore import EmbeddingRecordStore


class QueryEmbedder(Protocol):
    async def embed(self, text: str) -> np.ndarray:
        ...


class ScriptSearchService:
    """
    Semantic search over stored script embeddings:
        - embeds the query
        - enumerates candidates under the requested episode prefixes
        - fetches records concurrently (bounded)
        - filters, scores, thresholds, ranks and truncates
    """

    def __init__(
        self,
        *,
        embedder: QueryEmbedder,
        record_store: EmbeddingRecordStore,
        fetch_concurrency: int = settings.FETCH_CONCURRENCY,
        expected_dimension: int = settings.EMBEDDING_DIMENSION,
        logger: logging.Logger | None = None,
    ) -> None:
        if fetch_concurrency < 1:
            raise ValueError(f"fetch_concurrency must be >= 1, got {fetch_concurrency}")
        self.embedder = embedder
        self.record_store = record_store
        self.fetch_concurrency = fetch_concurrency
        self.expected_dimension = expected_dimension
        self.logger = logger or get_class_logger(self.__class__)
        self.logger.info(
            "ScriptSearchService initialised (embedder=%s fetch_concurrency=%d expected_dimension=%s)",
            type(self.embedder).__name__,
            self.fetch_concurrency,
            self.expected_dimension or "any",
        )

    async def _embed_query(self, query: str) -> np.ndarray:
        try:
            vector = await self.embedder.embed(query)
        except ScriptSearchError:
            raise
        except Exception as e:
            self.logger.error("Query embedding failed: %s", e, exc_info=True)
            raise ServiceError(f"Embedding provider failed: {e}") from e

        vector = np.asarray(vector, dtype=np.float32).ravel()
        if not np.all(np.isfinite(vector)):
            raise ServiceError("Embedding provider returned a query vector containing NaN or infinity")
        if self.expected_dimension and vector.shape[0] != self.expected_dimension:
            raise DimensionMismatchError(
                expected=self.expected_dimension,
                actual=vector.shape[0],
                message=(
                    f"Embedding provider returned a {vector.shape[0]}-dim query vector, "
                    f"expected {self.expected_dimension}"
                ),
            )
        return vector

    async def _fetch_all(self, keys: Sequence[str]) -> List[Optional[ScriptEmbeddingRecord]]:
        # remaining fetches queue on the semaphore
        semaphore = asyncio.Semaphore(self.fetch_concurrency)

        async def _fetch(key: str) -> Optional[ScriptEmbeddingRecord]:
            async with semaphore:
                return await self.record_store.fetch_record(key)

        return await asyncio.gather(*(_fetch(k) for k in keys))

    def _score(
        self,
        query_vector: np.ndarray,
        records: Sequence[Optional[ScriptEmbeddingRecord]],
        scope: ScopeFilter,
        min_score: float,
    ) -> List[RetrievalResult]:
        scored: List[RetrievalResult] = []
        skipped = {"missing": 0, "filtered": 0, "dimension": 0, "non_finite": 0, "below_min_score": 0}

        for record in records:
            if record is None:
                skipped["missing"] += 1
                continue
            if not scope.is_eligible(record):
                skipped["filtered"] += 1
                continue
            try:
                score = cosine_similarity(query_vector, record.vector)
            except DimensionMismatchError as e:
                skipped["dimension"] += 1
                self.logger.warning("Skipping record id='%s': %s", record.id, e)
                continue
            except ValueError as e:
                skipped["non_finite"] += 1
                self.logger.warning("Skipping record id='%s': %s", record.id, e)
                continue
            if score < min_score:
                skipped["below_min_score"] += 1
                continue
            scored.append(RetrievalResult.from_record(record, score))

        self.logger.debug("Scoring: kept=%d skipped=%s", len(scored), skipped)
        return scored

    async def semantic_search(self, query: str, options: Optional[SearchOptions] = None) -> List[RetrievalResult]:
        """
        Return up to options.top_k passages scoring >= options.min_score,
        ordered by score descending (ties: messageId, then episodeId).

        Raises ServiceError when the embedding provider or the candidate
        listing fails; per-record problems only drop that record.
        """
        options = options or SearchOptions()
        scope = ScopeFilter.from_options(options)
        start_time = time.time()

        self.logger.info(
            "semantic_search: query='%s' episodes=%s metadata_filters=%s top_k=%d min_score=%.3f (start)",
            query[:50],
            sorted(scope.episode_ids) or "all",
            scope.metadata_filters or None,
            options.top_k,
            options.min_score,
        )

        query_vector = await self._embed_query(query)

        keys = [
            key async for key in self.record_store.list_candidate_keys(
                scope.episode_ids, limit=options.max_candidates
            )
        ]
        self.logger.debug("semantic_search: %d candidate keys", len(keys))

        records = await self._fetch_all(keys)
        scored = self._score(query_vector, records, scope, options.min_score)
        results = rank_results(scored, options.top_k)

        elapsed = (time.time() - start_time) * 1000.0
        self.logger.info(
            "semantic_search: candidates=%d qualifying=%d returned=%d top_score=%s (%.1f ms) (done)",
            len(keys),
            len(scored),
            len(results),
            f"{results[0].score:.3f}" if results else None,
            elapsed,
        )
        return results

    async def search_with_citations(self, query: str, options: Optional[SearchOptions] = None) -> Dict[str, Any]:
        """
        Returns:
            {
                "results": [RetrievalResult, ...],
                "citations": [Citation, ...],   # de-duplicated, result order
            }
        """
        results = await self.semantic_search(query, options)
        return {
            "results": results,
            "citations": dedupe_citations(to_citation(r) for r in results),
        }

    @staticmethod
    def group_results_by_episode(results: Sequence[RetrievalResult]) -> Dict[str, List[RetrievalResult]]:
        return group_results_by_episode(results)
