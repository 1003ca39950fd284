"""MarketApplicationService — thin composition layer over the repository.

All methods are read-only. Listing walks ids 0..count-1 the same way the
contract assigns them; markets that cannot be read are logged and skipped so
one bad entry does not hide the rest.
"""

import logging

from src.pm_common.datetime_utils import unix_now
from src.pm_common.enums import MarketPhase
from src.pm_common.errors import MarketNotFoundError, WireDecodeError
from src.pm_contract.codec import validate_account_id
from src.pm_market.application.schemas import (
    MarketDetail,
    MarketListResponse,
    MarketSummary,
    PositionOut,
)
from src.pm_market.domain.economics import market_phase
from src.pm_market.domain.models import Market
from src.pm_market.domain.repository import MarketRepositoryProtocol
from src.pm_market.infrastructure.contract_repository import MarketRepository

logger = logging.getLogger(__name__)


class MarketApplicationService:
    def __init__(self, repo: MarketRepositoryProtocol | None = None) -> None:
        self._repo: MarketRepositoryProtocol = repo or MarketRepository()

    async def _load_all(self) -> tuple[int, list[Market]]:
        count = await self._repo.count()
        markets: list[Market] = []
        for market_id in range(count):
            try:
                markets.append(await self._repo.get(market_id))
            except (MarketNotFoundError, WireDecodeError) as exc:
                logger.warning("Skipping market %d: %s", market_id, exc.message)
        return count, markets

    async def list_markets(
        self,
        phase: MarketPhase | None = None,
        newest_first: bool = False,
        limit: int | None = None,
        now: int | None = None,
    ) -> MarketListResponse:
        now = unix_now() if now is None else now
        count, markets = await self._load_all()
        if phase is not None:
            markets = [m for m in markets if market_phase(m, now) == phase]
        if newest_first:
            markets.reverse()
        if limit is not None:
            markets = markets[:limit]
        return MarketListResponse(
            items=[MarketSummary.from_domain(m, now) for m in markets],
            total_count=count,
        )

    async def get_market(
        self,
        market_id: int,
        account: str | None = None,
        now: int | None = None,
    ) -> MarketDetail:
        market = await self._repo.get(market_id)
        position = None
        if account is not None:
            validate_account_id(account)
            position = await self._repo.get_position(market_id, account)
        return MarketDetail.from_domain(market, now, account, position)

    async def get_position(self, market_id: int, account: str) -> PositionOut:
        validate_account_id(account)
        market = await self._repo.get(market_id)
        position = await self._repo.get_position(market_id, account)
        return PositionOut.from_domain(market, account, position)
