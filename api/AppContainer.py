# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-15
# Description: AppContainer.py
# -----------------------------------------------------------------------------
from config.Config import Config
from embedding.ScriptEmbedder import ScriptEmbedder
from services.ScriptSearchService import ScriptSearchService
from utility.logging_utils import get_class_logger
from vectorstore.AzureBlobObjectStore import AzureBlobObjectStore
from vectorstore.EmbeddingRecordStore import EmbeddingRecordStore


class AppContainer:
    """
    Owns heavy object instantiation and application wiring.
    Singleton instances are provided via FastAPI dependencies.
    """

    def __init__(self, cfg: Config | None = None) -> None:
        self.logger = get_class_logger(self.__class__)

        # Configuration
        self.cfg = cfg or Config.from_env()
        self.logger.info("AppContainer config: %s", self.cfg.summary())

        # Core infrastructure
        self.embedder = ScriptEmbedder(cfg=self.cfg)
        self.object_store = AzureBlobObjectStore(cfg=self.cfg)
        self.record_store = EmbeddingRecordStore(self.object_store)

        # Return a singleton ScriptSearchService instance
        self.search_service = ScriptSearchService(
            embedder=self.embedder,
            record_store=self.record_store,
        )

    async def close(self) -> None:
        await self.object_store.close()
        await self.embedder.close()
