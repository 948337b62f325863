# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-13
# Description: ObjectStore
# -----------------------------------------------------------------------------

from typing import AsyncIterator, Optional, Protocol, runtime_checkable


@runtime_checkable
class ObjectStore(Protocol):
    def list_keys(self, prefix: str) -> AsyncIterator[str]:
        ...

    async def get_object(self, key: str) -> Optional[bytes]:
        ...

    async def put_object(self, key: str, data: bytes, *, content_type: str = "application/json") -> None:
        ...

    async def close(self) -> None:
        ...
