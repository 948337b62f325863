# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-13
# Description: InMemoryObjectStore
# -----------------------------------------------------------------------------
from typing import AsyncIterator, Dict, Optional


class InMemoryObjectStore:
    """
    Dict-backed object store for local development and tests.
    Keys are listed in sorted order.
    """

    def __init__(self, objects: Optional[Dict[str, bytes]] = None) -> None:
        self.objects: Dict[str, bytes] = dict(objects or {})

    async def list_keys(self, prefix: str) -> AsyncIterator[str]:
        for key in sorted(self.objects):
            if key.startswith(prefix):
                yield key

    async def get_object(self, key: str) -> Optional[bytes]:
        return self.objects.get(key)

    async def put_object(self, key: str, data: bytes, *, content_type: str = "application/json") -> None:
        self.objects[key] = bytes(data)

    async def close(self) -> None:
        return None
