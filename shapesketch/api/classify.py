"""POST /api/classify — classify one finished stroke."""

from __future__ import annotations

import asyncio
import json
import logging
import time
from collections.abc import AsyncGenerator

import numpy as np
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse
from numpy.typing import NDArray

from shapesketch.config import Settings
from shapesketch.dependencies import get_classifier_config, get_settings
from shapesketch.engine.config import ClassifierConfig
from shapesketch.engine.context import ClassificationContext
from shapesketch.engine.pipeline import create_pipeline
from shapesketch.models.requests import ClassifyRequest
from shapesketch.models.responses import ClassifyResponse
from shapesketch.utils.encoding import decode_image, decode_rgba, mask_to_png_data_url
from shapesketch.utils.pixel_mask import SurfaceError, SurfaceTooLarge

logger = logging.getLogger(__name__)

router = APIRouter()

_SENTINEL = object()  # marks end of queue


def _too_large(width: int, height: int, settings: Settings) -> HTTPException:
    return HTTPException(
        status_code=413,
        detail=(
            f"Surface {width}x{height} exceeds the maximum "
            f"{settings.max_width}x{settings.max_height}"
        ),
    )


def _decode_surface(req: ClassifyRequest, settings: Settings) -> NDArray[np.uint8]:
    # Limits are enforced before any pixel buffer is built
    if req.rgba is not None and (
        req.width > settings.max_width or req.height > settings.max_height
    ):
        raise _too_large(req.width, req.height, settings)

    try:
        if req.rgba is not None:
            rgba = decode_rgba(req.rgba, req.width, req.height)
        else:
            rgba = decode_image(req.image, settings.max_width, settings.max_height)
    except SurfaceTooLarge as e:
        raise HTTPException(status_code=413, detail=str(e)) from e
    except SurfaceError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    height, width = rgba.shape[:2]
    if req.image is not None and req.width is not None and req.height is not None:
        if (width, height) != (req.width, req.height):
            raise HTTPException(
                status_code=400,
                detail=f"Image is {width}x{height}, request declared {req.width}x{req.height}",
            )
    return rgba


def _build_response(
    ctx: ClassificationContext,
    elapsed_ms: float,
    include_candidates: bool,
) -> ClassifyResponse:
    summary = ctx.summary()
    candidates = None
    if include_candidates and ctx.candidates:
        candidates = {name: mask_to_png_data_url(m) for name, m in ctx.candidates.items()}

    return ClassifyResponse(
        label=ctx.label,
        label_text=f"This is a {ctx.label}" if ctx.label else "",
        width=ctx.width,
        height=ctx.height,
        degenerate=ctx.degenerate,
        errors=summary["errors"],
        corners=summary["corners"],
        bounds=summary["bounds"],
        candidates=candidates,
        processing_time_ms=round(elapsed_ms, 1),
        stages_completed=len(ctx.completed_stages),
        stage_errors=ctx.stage_errors,
    )


def _new_context(rgba: NDArray[np.uint8], config: ClassifierConfig) -> ClassificationContext:
    height, width = rgba.shape[:2]
    return ClassificationContext(surface=rgba, width=width, height=height, config=config)


@router.post("/classify", response_model=ClassifyResponse)
def classify(
    req: ClassifyRequest,
    settings: Settings = Depends(get_settings),
    config: ClassifierConfig = Depends(get_classifier_config),
) -> ClassifyResponse:
    start = time.perf_counter()
    rgba = _decode_surface(req, settings)

    ctx = create_pipeline().run(_new_context(rgba, config))

    elapsed = (time.perf_counter() - start) * 1000
    logger.info("Classified %dx%d surface as %s in %.1fms", ctx.width, ctx.height, ctx.label, elapsed)
    return _build_response(ctx, elapsed, req.include_candidates)


async def _stream_classify(
    rgba: NDArray[np.uint8],
    config: ClassifierConfig,
    include_candidates: bool,
) -> AsyncGenerator[str, None]:
    """Drive pipeline.run_streaming() in a thread, yielding SSE events as they arrive."""
    start = time.perf_counter()
    ctx = _new_context(rgba, config)
    pipeline = create_pipeline()
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue = asyncio.Queue()

    def _run_pipeline() -> None:
        """Sync pipeline in thread — pushes progress dicts onto the async queue."""
        try:
            for progress in pipeline.run_streaming(ctx):
                loop.call_soon_threadsafe(queue.put_nowait, progress)
        finally:
            loop.call_soon_threadsafe(queue.put_nowait, _SENTINEL)

    # Start pipeline in a thread so the event loop stays free to flush SSE
    future = loop.run_in_executor(None, _run_pipeline)

    while True:
        item = await queue.get()
        if item is _SENTINEL:
            break
        yield f"event: progress\ndata: {json.dumps(item)}\n\n"

    try:
        await future
    except Exception as e:
        logger.exception("Streaming classification failed")
        data = json.dumps({"type": "error", "message": str(e)})
        yield f"event: error\ndata: {data}\n\n"
        return

    elapsed = (time.perf_counter() - start) * 1000
    response = _build_response(ctx, elapsed, include_candidates)
    yield f"event: result\ndata: {json.dumps(response.model_dump())}\n\n"
    yield f"event: done\ndata: {json.dumps({'type': 'done'})}\n\n"


@router.post("/classify/stream")
async def classify_stream(
    req: ClassifyRequest,
    settings: Settings = Depends(get_settings),
    config: ClassifierConfig = Depends(get_classifier_config),
) -> StreamingResponse:
    rgba = _decode_surface(req, settings)
    return StreamingResponse(
        _stream_classify(rgba, config, req.include_candidates),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
