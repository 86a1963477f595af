"""Tests for fetching blobs from an HTTP blob store"""

import asyncio

import pytest
from aiohttp import test_utils, web

from services.blob_fetcher import BlobFetcher, BlobNotFoundError, BlobStoreError

BLOBS = {
    "7909961": b"1\n3\n4\n",
    "4e935b7": b"1\n2\n3\n4\n",
}


def blob_store_app():
    async def get_blob(request):
        blob_id = request.match_info["blob_id"]
        if blob_id == "broken":
            return web.Response(status=500)
        if blob_id not in BLOBS:
            return web.Response(status=404)
        return web.Response(body=BLOBS[blob_id])

    app = web.Application()
    app.router.add_get("/blobs/{blob_id}", get_blob)
    return app


async def with_blob_store(callback):
    server = test_utils.TestServer(blob_store_app())
    await server.start_server()
    try:
        fetcher = BlobFetcher(str(server.make_url("/")), timeout=5)
        return await callback(fetcher)
    finally:
        await server.close()


class TestBlobFetcher:
    def test_fetch(self):
        data = asyncio.run(with_blob_store(lambda fetcher: fetcher.fetch("7909961")))
        assert data == BLOBS["7909961"]

    def test_fetch_pair_with_absent_side(self):
        old, new = asyncio.run(with_blob_store(lambda fetcher: fetcher.fetch_pair(None, "4e935b7")))
        assert old is None
        assert new == BLOBS["4e935b7"]

    def test_absent_id(self):
        assert asyncio.run(BlobFetcher("http://unused").fetch(None)) is None

    def test_missing_blob(self):
        with pytest.raises(BlobNotFoundError):
            asyncio.run(with_blob_store(lambda fetcher: fetcher.fetch("deadbeef")))

    def test_store_error(self):
        with pytest.raises(BlobStoreError):
            asyncio.run(with_blob_store(lambda fetcher: fetcher.fetch("broken")))

    def test_from_config(self):
        fetcher = BlobFetcher.from_config({"blob_store": {"endpoint": "http://store/", "timeout": 2}})
        assert fetcher.endpoint == "http://store"
        assert fetcher.timeout == 2
