"""
Blob Fetcher - Retrieve blob content from an HTTP blob store
"""

from __future__ import annotations

from typing import Any

import aiohttp


class BlobNotFoundError(LookupError):
    """The blob store has no blob with the requested id"""

    def __init__(self, blob_id: str):
        super().__init__(f"Blob not found: {blob_id}")
        self.blob_id = blob_id


class BlobStoreError(RuntimeError):
    """The blob store could not be reached or answered with an error"""


class BlobFetcher:
    """Fetch raw blob bytes by id from `{endpoint}/blobs/{blob_id}`"""

    def __init__(self, endpoint: str, timeout: float = 10):
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "BlobFetcher":
        cfg = config.get("blob_store", {})
        return cls(
            endpoint=cfg.get("endpoint", "http://localhost:8080"),
            timeout=cfg.get("timeout", 10),
        )

    async def fetch(self, blob_id: str | None) -> bytes | None:
        """Return the blob's bytes; `None` id means an absent blob"""
        if blob_id is None:
            return None

        async with aiohttp.ClientSession() as session:
            return await self._fetch_one(session, blob_id)

    async def fetch_pair(
        self, old_id: str | None, new_id: str | None
    ) -> tuple[bytes | None, bytes | None]:
        """Fetch both sides of a comparison over one session"""
        async with aiohttp.ClientSession() as session:
            old = await self._fetch_one(session, old_id) if old_id is not None else None
            new = await self._fetch_one(session, new_id) if new_id is not None else None
        return old, new

    async def _fetch_one(self, session: aiohttp.ClientSession, blob_id: str) -> bytes:
        url = f"{self.endpoint}/blobs/{blob_id}"
        try:
            async with session.get(url, timeout=aiohttp.ClientTimeout(total=self.timeout)) as response:
                if response.status == 404:
                    raise BlobNotFoundError(blob_id)
                if response.status != 200:
                    raise BlobStoreError(f"Blob store returned HTTP {response.status} for {blob_id}")
                return await response.read()
        except aiohttp.ClientError as e:
            raise BlobStoreError(f"Network error fetching {blob_id}: {e}") from e
