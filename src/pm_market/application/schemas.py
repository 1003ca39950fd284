"""Pydantic schemas for pm_market views.

Amounts are exposed twice: raw stroops (int, arbitrary width) and a display
string in XLM. Derived fields (percentages, phase, payouts) come from
pm_market.domain.economics so every consumer sees the same numbers.
"""

from pydantic import BaseModel

from src.pm_common.datetime_utils import from_unix
from src.pm_common.enums import Side
from src.pm_common.stroops import stroops_to_display
from src.pm_market.domain import economics
from src.pm_market.domain.models import Market, Position

# ---------------------------------------------------------------------------
# Position
# ---------------------------------------------------------------------------


class PositionOut(BaseModel):
    market_id: int
    account: str
    yes_shares_stroops: int
    yes_shares_display: str
    no_shares_stroops: int
    no_shares_display: str
    claimed: bool
    payout_if_yes_stroops: int
    payout_if_no_stroops: int
    winning_payout_stroops: int | None
    claimable_stroops: int
    claimable_display: str
    can_claim: bool

    @classmethod
    def from_domain(cls, market: Market, account: str, p: Position) -> "PositionOut":
        claimable = economics.expected_claim(market, p)
        return cls(
            market_id=market.id,
            account=account,
            yes_shares_stroops=p.yes_shares,
            yes_shares_display=stroops_to_display(p.yes_shares),
            no_shares_stroops=p.no_shares,
            no_shares_display=stroops_to_display(p.no_shares),
            claimed=p.claimed,
            payout_if_yes_stroops=economics.potential_payout(market, p, Side.YES),
            payout_if_no_stroops=economics.potential_payout(market, p, Side.NO),
            winning_payout_stroops=economics.winning_payout(market, p),
            claimable_stroops=claimable,
            claimable_display=stroops_to_display(claimable),
            can_claim=economics.can_claim(market, p),
        )


# ---------------------------------------------------------------------------
# Market list item (lightweight)
# ---------------------------------------------------------------------------


def _deadline_iso(deadline: int) -> str | None:
    try:
        return from_unix(deadline).isoformat()
    except (OverflowError, OSError, ValueError):
        return None  # beyond datetime range


def _summary_fields(m: Market, now: int | None) -> dict:
    yes_pct, no_pct = economics.probability_split(m)
    return dict(
        id=m.id,
        question=m.question,
        creator=m.creator,
        deadline=m.deadline,
        deadline_at=_deadline_iso(m.deadline),
        status=m.status.tag.value,
        outcome=m.status.outcome.value if m.status.outcome else None,
        phase=economics.market_phase(m, now).value,
        yes_percent=yes_pct,
        no_percent=no_pct,
        pool_balance_stroops=m.pool_balance,
        pool_balance_display=stroops_to_display(m.pool_balance),
    )


class MarketSummary(BaseModel):
    id: int
    question: str
    creator: str
    deadline: int
    deadline_at: str | None
    status: str
    outcome: str | None
    phase: str
    yes_percent: int
    no_percent: int
    pool_balance_stroops: int
    pool_balance_display: str

    @classmethod
    def from_domain(cls, m: Market, now: int | None = None) -> "MarketSummary":
        return cls(**_summary_fields(m, now))


class MarketListResponse(BaseModel):
    items: list[MarketSummary]
    total_count: int


# ---------------------------------------------------------------------------
# Market detail (full fields + optional position)
# ---------------------------------------------------------------------------


class MarketDetail(MarketSummary):
    total_yes_stroops: int
    total_yes_display: str
    total_no_stroops: int
    total_no_display: str
    can_buy: bool
    can_resolve: bool
    position: PositionOut | None = None

    @classmethod
    def from_domain(  # type: ignore[override]
        cls,
        m: Market,
        now: int | None = None,
        account: str | None = None,
        position: Position | None = None,
    ) -> "MarketDetail":
        position_out = None
        if account is not None and position is not None:
            position_out = PositionOut.from_domain(m, account, position)
        return cls(
            **_summary_fields(m, now),
            total_yes_stroops=m.total_yes,
            total_yes_display=stroops_to_display(m.total_yes),
            total_no_stroops=m.total_no,
            total_no_display=stroops_to_display(m.total_no),
            can_buy=economics.can_buy(m, now),
            can_resolve=economics.can_resolve(m, now),
            position=position_out,
        )
