"""Server-sent event stream for tool discovery."""

import asyncio
import json
from typing import Any, AsyncIterator, Awaitable, Callable, Dict

HEARTBEAT_COMMENT = ":\n\n"


def format_event(payload: Dict[str, Any]) -> str:
    """Encode a payload as a single `data:` event."""
    return f"data: {json.dumps(payload, ensure_ascii=False)}\n\n"


async def discovery_events(
    manifest: Dict[str, Any],
    heartbeat_seconds: float,
    is_disconnected: Callable[[], Awaitable[bool]],
) -> AsyncIterator[str]:
    """Yield the manifest event, then comment heartbeats until the client leaves.

    Args:
        manifest: Tool manifest advertised to the client
        heartbeat_seconds: Idle interval between heartbeats
        is_disconnected: Coroutine function reporting client disconnect

    Yields:
        Encoded event-stream chunks
    """
    yield format_event({"type": "manifest", "manifest": manifest})
    while not await is_disconnected():
        await asyncio.sleep(heartbeat_seconds)
        yield HEARTBEAT_COMMENT
