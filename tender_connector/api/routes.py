"""HTTP routes for search, tool invocation, discovery and diagnostics.

Search handlers are plain functions so FastAPI runs them on its worker
threadpool while the driver blocks on the upstream fetch.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import PlainTextResponse, StreamingResponse

from tender_connector.logging import get_logger
from tender_connector.pipeline.runner import SearchService
from tender_connector.tools import ToolInvoker, build_manifest, build_search_filter

from .events import discovery_events

logger = get_logger(__name__, component="api")

router = APIRouter()


def get_service(request: Request) -> SearchService:
    return request.app.state.service


@router.get("/health", response_class=PlainTextResponse)
def health() -> str:
    return "ok"


@router.get("/search")
def search(request: Request, service: SearchService = Depends(get_service)) -> List[Dict[str, Any]]:
    """
    Search listings.

    Accepts organization, keyword, recencyDays and limit (or the short
    names org, q and days) as query parameters.
    """
    search_filter = build_search_filter(dict(request.query_params), service.catalog)
    listings = service.search(search_filter)
    logger.info(
        "Search request served",
        extra={"event": "api.search.completed", "returned": len(listings)},
    )
    return [listing.to_public_dict() for listing in listings]


@router.post("/invoke")
def invoke(
    payload: Dict[str, Any] = Body(...),
    service: SearchService = Depends(get_service),
) -> Dict[str, Any]:
    """Invoke a tool: {"tool": name, "args": {...}}."""
    tool: Optional[str] = payload.get("tool")
    result = ToolInvoker(service).invoke(tool, payload.get("args"))
    logger.info(
        "Tool invocation served",
        extra={"event": "api.invoke.completed", "tool": tool, "returned": len(result["content"])},
    )
    return result


@router.get("/sse")
async def sse(request: Request) -> StreamingResponse:
    """Advertise the tool manifest, then keep the stream alive with heartbeats."""
    service: SearchService = request.app.state.service
    logger.info("Discovery stream opened", extra={"event": "api.sse.opened"})
    events = discovery_events(
        build_manifest(service.catalog),
        request.app.state.heartbeat_seconds,
        request.is_disconnected,
    )
    return StreamingResponse(
        events,
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
    )


@router.get("/debug")
def debug(service: SearchService = Depends(get_service)) -> Dict[str, Any]:
    """Report what the configured source returns before filtering."""
    return service.inspect().to_dict()
