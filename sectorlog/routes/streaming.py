# =====================================================
# sectorlog/routes/streaming.py - Server-Sent Events helpers
# =====================================================
import json
import logging
from typing import Any, AsyncIterator

from fastapi.encoders import jsonable_encoder
from fastapi.responses import StreamingResponse

logger = logging.getLogger(__name__)


def format_sse(data: Any, event: str = "snapshot") -> str:
    payload = json.dumps(jsonable_encoder(data), separators=(",", ":"))
    return f"event: {event}\ndata: {payload}\n\n"


async def _encode(events: AsyncIterator[Any], event: str) -> AsyncIterator[str]:
    try:
        async for item in events:
            yield format_sse(item, event)
    finally:
        # Chiude le subscription sottostanti alla disconnessione del client
        aclose = getattr(events, "aclose", None)
        if aclose is not None:
            await aclose()
        logger.debug("Event stream '%s' closed", event)


def sse_response(events: AsyncIterator[Any], event: str = "snapshot") -> StreamingResponse:
    return StreamingResponse(
        _encode(events, event),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
