from __future__ import annotations
import asyncio
import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, StreamingResponse
from app.core.channel import EventChannel
from app.core.config import settings
from app.core.engine import StageExecutor, StageValidationError
from app.core.sse import format_sse
from app.schemas.tasks import StageRequest

log = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks")


def get_stage_executor(request: Request) -> StageExecutor:
    state = request.app.state
    return StageExecutor.from_settings(settings, generator=state.generator, prompts=state.prompts)


async def stream_stage_events(executor: StageExecutor, req: StageRequest):
    """Run the executor as a task and relay its events as SSE records."""
    channel = EventChannel()
    task = asyncio.create_task(executor.execute(req, channel))
    try:
        async for event in channel:
            yield format_sse(event)
    finally:
        if not task.done():
            log.info("Client disconnected, cancelling stage execution", extra={"task_id": req.task_id})
            task.cancel()


@router.post("/execute")
async def execute_task(req: StageRequest, executor: StageExecutor = Depends(get_stage_executor)):
    try:
        executor.validate(req)
    except StageValidationError as e:
        return JSONResponse(status_code=e.status_code, content={"error": str(e)})

    return StreamingResponse(
        stream_stage_events(executor, req),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
    )
