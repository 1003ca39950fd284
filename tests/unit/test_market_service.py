# tests/unit/test_market_service.py
"""Unit tests for MarketApplicationService using mock repository."""
from unittest.mock import AsyncMock, MagicMock

import pytest
from stellar_sdk import Keypair

from src.pm_common.enums import MarketPhase, Side
from src.pm_common.errors import (
    InvalidAddressError,
    LedgerUnavailableError,
    MarketNotFoundError,
    WireDecodeError,
)
from src.pm_market.application.service import MarketApplicationService
from src.pm_market.domain.models import EMPTY_POSITION, Market, MarketStatus, Position

NOW = 1_700_000_000
ACCOUNT = Keypair.random().public_key


def _make_market(**kwargs) -> Market:
    defaults = dict(
        id=0, creator="GCREATOR", question="Test?", deadline=NOW + 3600,
        status=MarketStatus.open(), total_yes=0, total_no=0, pool_balance=0,
    )
    defaults.update(kwargs)
    return Market(**defaults)


@pytest.fixture
def mock_repo():
    return MagicMock()


def _with_markets(repo, markets: list[Market]) -> None:
    by_id = {m.id: m for m in markets}

    async def get(market_id: int) -> Market:
        if market_id not in by_id:
            raise MarketNotFoundError(market_id)
        return by_id[market_id]

    repo.count = AsyncMock(return_value=len(markets))
    repo.get = AsyncMock(side_effect=get)


class TestListMarkets:
    async def test_returns_all_in_id_order(self, mock_repo):
        _with_markets(mock_repo, [_make_market(id=i) for i in range(3)])
        resp = await MarketApplicationService(repo=mock_repo).list_markets(now=NOW)
        assert [m.id for m in resp.items] == [0, 1, 2]
        assert resp.total_count == 3

    async def test_empty_registry(self, mock_repo):
        _with_markets(mock_repo, [])
        resp = await MarketApplicationService(repo=mock_repo).list_markets(now=NOW)
        assert resp.items == []
        assert resp.total_count == 0

    async def test_newest_first_and_limit(self, mock_repo):
        _with_markets(mock_repo, [_make_market(id=i) for i in range(5)])
        resp = await MarketApplicationService(repo=mock_repo).list_markets(
            newest_first=True, limit=2, now=NOW
        )
        assert [m.id for m in resp.items] == [4, 3]

    async def test_phase_filter(self, mock_repo):
        _with_markets(mock_repo, [
            _make_market(id=0),
            _make_market(id=1, deadline=NOW - 1),
            _make_market(id=2, status=MarketStatus.resolved(Side.YES)),
        ])
        svc = MarketApplicationService(repo=mock_repo)
        live = await svc.list_markets(phase=MarketPhase.LIVE, now=NOW)
        expired = await svc.list_markets(phase=MarketPhase.EXPIRED, now=NOW)
        resolved = await svc.list_markets(phase=MarketPhase.RESOLVED, now=NOW)
        assert [m.id for m in live.items] == [0]
        assert [m.id for m in expired.items] == [1]
        assert [m.id for m in resolved.items] == [2]

    async def test_skips_unreadable_markets(self, mock_repo):
        good = _make_market(id=1)
        mock_repo.count = AsyncMock(return_value=3)
        mock_repo.get = AsyncMock(side_effect=[
            MarketNotFoundError(0), good, WireDecodeError("bad status"),
        ])
        resp = await MarketApplicationService(repo=mock_repo).list_markets(now=NOW)
        assert [m.id for m in resp.items] == [1]
        assert resp.total_count == 3

    async def test_transport_error_propagates(self, mock_repo):
        mock_repo.count = AsyncMock(side_effect=LedgerUnavailableError("down"))
        with pytest.raises(LedgerUnavailableError):
            await MarketApplicationService(repo=mock_repo).list_markets(now=NOW)


class TestGetMarket:
    async def test_detail_without_account(self, mock_repo):
        _with_markets(mock_repo, [_make_market(total_yes=10, pool_balance=10)])
        mock_repo.get_position = AsyncMock()
        detail = await MarketApplicationService(repo=mock_repo).get_market(0, now=NOW)
        assert detail.yes_percent == 100
        assert detail.position is None
        mock_repo.get_position.assert_not_called()

    async def test_detail_with_account(self, mock_repo):
        _with_markets(mock_repo, [_make_market(total_yes=10, pool_balance=10)])
        mock_repo.get_position = AsyncMock(return_value=Position(yes_shares=10))
        detail = await MarketApplicationService(repo=mock_repo).get_market(
            0, account=ACCOUNT, now=NOW
        )
        assert detail.position is not None
        assert detail.position.payout_if_yes_stroops == 10

    async def test_invalid_account(self, mock_repo):
        _with_markets(mock_repo, [_make_market()])
        with pytest.raises(InvalidAddressError):
            await MarketApplicationService(repo=mock_repo).get_market(0, account="nope", now=NOW)

    async def test_not_found(self, mock_repo):
        _with_markets(mock_repo, [])
        with pytest.raises(MarketNotFoundError):
            await MarketApplicationService(repo=mock_repo).get_market(42, now=NOW)


class TestGetPosition:
    async def test_empty_position(self, mock_repo):
        _with_markets(mock_repo, [_make_market()])
        mock_repo.get_position = AsyncMock(return_value=EMPTY_POSITION)
        out = await MarketApplicationService(repo=mock_repo).get_position(0, ACCOUNT)
        assert out.yes_shares_stroops == 0
        assert out.can_claim is False
        assert out.account == ACCOUNT
