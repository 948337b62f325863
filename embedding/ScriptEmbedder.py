# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-13
# Description: ScriptEmbedder
# -----------------------------------------------------------------------------
import asyncio
from typing import Any, List

import numpy as np
from openai import AsyncAzureOpenAI

import settings
from config.Config import Config
from utility.errors import ServiceError
from utility.logging_utils import get_class_logger


class ScriptEmbedder:
    """
    Query-side embedding provider backed by Azure OpenAI.

    embed() is the only call the retrieval engine makes; it retries transient
    failures with backoff and raises ServiceError once retries are exhausted.
    """

    def __init__(
            self,
            cfg: Config,
            *,
            normalize: bool = settings.NORMALIZE_QUERY_EMBEDDINGS,
            max_retries: int = 5,
            retry_delay: float = 0.8,
            client: Any = None,
            logger=None,
    ):
        self.cfg = cfg
        self.normalize = normalize
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay
        self.logger = logger or get_class_logger(self.__class__)

        self.client = client or AsyncAzureOpenAI(
            api_key=cfg.openai_azure_api_key,
            azure_endpoint=cfg.openai_azure_endpoint,
            api_version=settings.OPENAI_API_VERSION,
        )
        self.model = cfg.openai_azure_embed_deployment or "text-embedding-3-small"
        self.logger.info("Azure OpenAI embedder initialised (model=%s, normalize=%s)", self.model, self.normalize)

    async def _embed_batch(self, texts: List[str]) -> np.ndarray:
        delay = self.retry_delay
        for attempt in range(1, self.max_retries + 1):
            try:
                resp = await self.client.embeddings.create(model=self.model, input=texts)
                arr = np.asarray([d.embedding for d in resp.data], dtype=np.float32)

                # Normalize vectors (cosine-friendly)
                if self.normalize:
                    norms = np.linalg.norm(arr, axis=1, keepdims=True) + 1e-12
                    arr = arr / norms
                return arr

            except Exception as e:
                self.logger.warning("Embedding request failed (attempt %d/%d): %s", attempt, self.max_retries, e)
                if attempt == self.max_retries:
                    raise ServiceError(f"Embedding provider failed after {attempt} attempts: {e}") from e
                await asyncio.sleep(delay)
                delay *= 1.7  # backoff

        # Unreachable and included for type checkers
        return np.empty((0, 0), dtype=np.float32)

    async def embed(self, text: str) -> np.ndarray:
        """
        Embed a single query string. The text is sent as-is, including empty strings.
        """
        self.logger.debug("embed: text_len=%d (start)", len(text))
        arr = await self._embed_batch([text])
        if arr.ndim != 2 or arr.shape[0] != 1:
            raise ServiceError(f"Embedding provider returned {arr.shape[0] if arr.ndim else 0} vectors for 1 input")
        vector = arr[0]
        self.logger.debug("embed: vector_length=%d (done)", vector.shape[0])
        return vector

    async def close(self) -> None:
        await self.client.close()
