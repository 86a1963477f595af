"""Diff API endpoints"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException
from fastapi.concurrency import iterate_in_threadpool, run_in_threadpool
from sse_starlette.sse import EventSourceResponse

from models.compare import BlobContent, CompareBlobsRequest, CompareRequest, StreamSummary
from models.diff import ContentChanges, DiffOptions
from services.blob_fetcher import BlobFetcher, BlobNotFoundError, BlobStoreError
from services.config_manager import ConfigManager
from services.diff_generator import DiffGenerator, InvalidOptionsError, validate_options

router = APIRouter()


def resolve_options(options: DiffOptions | None) -> DiffOptions:
    """Request options, or the configured defaults; 400 when invalid"""
    if options is None:
        options = ConfigManager.get_instance().get_diff_options()
    try:
        validate_options(options)
    except InvalidOptionsError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return options


def decode_content(content: BlobContent | None) -> bytes | None:
    """Inline request content to raw bytes; 400 on malformed content"""
    if content is None:
        return None
    try:
        return content.to_bytes()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/compare", response_model=ContentChanges)
async def compare_contents(request: CompareRequest) -> ContentChanges:
    """Compare two inline blobs"""
    generator = DiffGenerator(resolve_options(request.options))
    old = decode_content(request.old)
    new = decode_content(request.new)
    return await run_in_threadpool(generator.compare, old, new)


@router.post("/compare-blobs", response_model=ContentChanges)
async def compare_blobs(request: CompareBlobsRequest) -> ContentChanges:
    """Fetch two blobs from the blob store and compare them"""
    options = resolve_options(request.options)
    fetcher = BlobFetcher.from_config(ConfigManager.get_instance().get_config())

    try:
        old, new = await fetcher.fetch_pair(request.old_id, request.new_id)
    except BlobNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except BlobStoreError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return await run_in_threadpool(DiffGenerator(options).compare, old, new)


@router.post("/stream")
async def stream_hunks(request: CompareRequest):
    """Compare two inline blobs and stream the hunks as server-sent events"""
    generator = DiffGenerator(resolve_options(request.options))
    old = decode_content(request.old)
    new = decode_content(request.new)

    async def event_generator():
        is_binary = generator.is_binary_comparison(old, new)
        lines_added = 0
        lines_deleted = 0
        hunk_count = 0

        async for hunk in iterate_in_threadpool(generator.iter_hunks(old, new)):
            lines_added += len(hunk.added_lines)
            lines_deleted += len(hunk.removed_lines)
            hunk_count += 1
            yield {"event": "hunk", "data": hunk.model_dump_json()}

        summary = StreamSummary(
            is_binary=is_binary,
            lines_added=lines_added,
            lines_deleted=lines_deleted,
            hunk_count=hunk_count,
        )
        yield {"event": "done", "data": summary.model_dump_json()}

    return EventSourceResponse(event_generator())
