# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-13
# Description: vectorstore/AzureBlobObjectStore.py
# -----------------------------------------------------------------------------
from __future__ import annotations

import logging
import time
from typing import Any, AsyncIterator, Optional

from azure.core.credentials import AzureNamedKeyCredential
from azure.core.exceptions import AzureError, ResourceNotFoundError
from azure.storage.blob import ContentSettings
from azure.storage.blob.aio import BlobServiceClient

from config.Config import Config
from utility.logging_utils import get_class_logger


class AzureBlobObjectStore:
    """
    Knowledge-base container access over the async Azure Blob SDK.

    Provides:
      - list_keys(): blob names under a prefix (lazy, paged by the SDK)
      - get_object(): blob bytes, or None when the blob does not exist
      - put_object(): overwrite a blob
    """

    def __init__(
        self,
        cfg: Config,
        *,
        container: str | None = None,
        blob_service: Any = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.cfg = cfg
        self.container = container or cfg.kb_container
        self.logger = logger or get_class_logger(self.__class__)

        start_time = time.time()
        try:
            self.blob_service = blob_service or BlobServiceClient(
                account_url=cfg.storage_account_url,
                credential=AzureNamedKeyCredential(cfg.storage_account, cfg.storage_key),
            )
            self.container_client = self.blob_service.get_container_client(self.container)
        except Exception as e:
            elapsed = (time.time() - start_time) * 1000.0
            self.logger.exception("Failed to initialise BlobServiceClient after %.1f ms: %s", elapsed, e)
            raise

        elapsed = (time.time() - start_time) * 1000.0
        self.logger.info(
            "Initialised async BlobServiceClient for account '%s' container '%s' (%.1f ms)",
            cfg.storage_account,
            self.container,
            elapsed,
        )

    async def list_keys(self, prefix: str) -> AsyncIterator[str]:
        self.logger.debug("list_keys: container='%s' prefix='%s' (start)", self.container, prefix)
        count = 0
        try:
            async for blob in self.container_client.list_blobs(name_starts_with=prefix):
                count += 1
                yield blob.name
        except AzureError as e:
            self.logger.error("list_keys failed: container='%s' prefix='%s': %s", self.container, prefix, e)
            raise
        self.logger.debug("list_keys: container='%s' prefix='%s' -> %d keys (done)", self.container, prefix, count)

    async def get_object(self, key: str) -> Optional[bytes]:
        try:
            downloader = await self.container_client.download_blob(key)
            return await downloader.readall()
        except ResourceNotFoundError:
            self.logger.warning("get_object: not found container='%s' blob='%s'", self.container, key)
            return None

    async def put_object(self, key: str, data: bytes, *, content_type: str = "application/json") -> None:
        self.logger.info(
            "put_object: container='%s' blob='%s' bytes=%d (start)", self.container, key, len(data)
        )
        try:
            await self.container_client.upload_blob(
                key,
                data,
                overwrite=True,
                content_settings=ContentSettings(content_type=content_type),
            )
        except AzureError as e:
            self.logger.exception("put_object failed: container='%s' blob='%s': %s", self.container, key, e)
            raise
        self.logger.info("put_object: container='%s' blob='%s' (done)", self.container, key)

    async def close(self) -> None:
        await self.blob_service.close()
