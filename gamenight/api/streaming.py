"""Server-sent event helpers for live snapshots."""
import json
from typing import Any, AsyncIterator

from fastapi.encoders import jsonable_encoder
from fastapi.responses import StreamingResponse


def format_event(event: str, payload: Any) -> str:
    """Encode one server-sent event."""
    return f"event: {event}\ndata: {json.dumps(jsonable_encoder(payload))}\n\n"


def event_stream(events: AsyncIterator[str]) -> StreamingResponse:
    """Wrap an async iterator of encoded events in a streaming response."""
    return StreamingResponse(
        events,
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"},
    )
