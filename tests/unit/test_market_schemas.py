"""Tests for pm_market.application.schemas — view models."""

from src.pm_common.enums import Side
from src.pm_market.application.schemas import MarketDetail, MarketSummary, PositionOut
from src.pm_market.domain.models import Market, MarketStatus, Position

NOW = 1_700_000_000


def _make_market(**kwargs) -> Market:
    defaults = dict(
        id=1, creator="GCREATOR", question="Test?", deadline=NOW + 60,
        status=MarketStatus.open(), total_yes=30_000_000, total_no=10_000_000,
        pool_balance=40_000_000,
    )
    defaults.update(kwargs)
    return Market(**defaults)


class TestMarketSummary:
    def test_from_domain(self) -> None:
        s = MarketSummary.from_domain(_make_market(), NOW)
        assert s.status == "Open"
        assert s.outcome is None
        assert s.phase == "LIVE"
        assert (s.yes_percent, s.no_percent) == (75, 25)
        assert s.pool_balance_stroops == 40_000_000
        assert s.pool_balance_display == "4 XLM"
        assert s.deadline_at is not None and s.deadline_at.startswith("2023-11-14")

    def test_resolved(self) -> None:
        s = MarketSummary.from_domain(_make_market(status=MarketStatus.resolved(Side.NO)), NOW)
        assert s.status == "Resolved"
        assert s.outcome == "No"
        assert s.phase == "RESOLVED"

    def test_unrepresentable_deadline(self) -> None:
        s = MarketSummary.from_domain(_make_market(deadline=2**64 - 1), NOW)
        assert s.deadline == 2**64 - 1
        assert s.deadline_at is None

    def test_large_pool_serializes_exactly(self) -> None:
        big = 2**100
        s = MarketSummary.from_domain(_make_market(total_yes=big, total_no=0, pool_balance=big))
        assert s.model_dump()["pool_balance_stroops"] == big


class TestMarketDetail:
    def test_flags(self) -> None:
        d = MarketDetail.from_domain(_make_market(deadline=NOW), NOW)
        assert d.can_buy is False
        assert d.can_resolve is True
        assert d.total_yes_display == "3 XLM"
        assert d.position is None

    def test_with_position(self) -> None:
        d = MarketDetail.from_domain(
            _make_market(), NOW, account="GACCOUNT", position=Position(no_shares=10_000_000),
        )
        assert d.position is not None
        assert d.position.payout_if_no_stroops == 40_000_000


class TestPositionOut:
    def test_resolved_claimable(self) -> None:
        m = _make_market(status=MarketStatus.resolved(Side.YES))
        out = PositionOut.from_domain(m, "GACCOUNT", Position(yes_shares=15_000_000))
        assert out.winning_payout_stroops == 20_000_000
        assert out.claimable_stroops == 20_000_000
        assert out.claimable_display == "2 XLM"
        assert out.can_claim is True

    def test_claimed(self) -> None:
        m = _make_market(status=MarketStatus.resolved(Side.YES))
        out = PositionOut.from_domain(m, "GACCOUNT", Position(yes_shares=15_000_000, claimed=True))
        assert out.claimable_stroops == 0
        assert out.can_claim is False

    def test_open_market_has_no_winning_payout(self) -> None:
        out = PositionOut.from_domain(_make_market(), "GACCOUNT", Position(yes_shares=1))
        assert out.winning_payout_stroops is None
