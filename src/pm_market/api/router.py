"""pm_market REST endpoints (read-only).

GET /markets                                — list, optional phase filter
GET /markets/{market_id}                    — full detail, optional ?account=
GET /markets/{market_id}/positions/{account} — one account's position

Writes are not served here: they need the user's own wallet signature.
"""

from fastapi import APIRouter, Query, Request

from src.pm_common.enums import MarketPhase
from src.pm_common.response import ApiResponse, success_response
from src.pm_market.application.service import MarketApplicationService

router = APIRouter(prefix="/markets", tags=["markets"])

_service = MarketApplicationService()


def _respond(request: Request, data: dict) -> ApiResponse:
    resp = success_response(data)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("")
async def list_markets(
    request: Request,
    phase: MarketPhase | None = Query(None, description="LIVE, EXPIRED or RESOLVED. Default: all."),
    newest_first: bool = Query(False),
    limit: int | None = Query(None, ge=1, le=500),
) -> ApiResponse:
    result = await _service.list_markets(phase=phase, newest_first=newest_first, limit=limit)
    return _respond(request, result.model_dump())


@router.get("/{market_id}")
async def get_market(
    market_id: int,
    request: Request,
    account: str | None = Query(None, description="Include this account's position"),
) -> ApiResponse:
    result = await _service.get_market(market_id, account=account)
    return _respond(request, result.model_dump())


@router.get("/{market_id}/positions/{account}")
async def get_position(market_id: int, account: str, request: Request) -> ApiResponse:
    result = await _service.get_position(market_id, account)
    return _respond(request, result.model_dump())
