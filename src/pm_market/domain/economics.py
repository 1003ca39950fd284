"""Market economics — pure functions over Market/Position snapshots.

Integer arithmetic only. No I/O; `now` is always passed in (or defaulted
from the clock at the call site) so results are reproducible.
"""

import logging

from src.pm_common.datetime_utils import unix_now
from src.pm_common.enums import MarketPhase, Side
from src.pm_market.domain.models import Market, Position

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Probability split
# ---------------------------------------------------------------------------


def yes_percent(total_yes: int, total_no: int) -> int:
    """Floor of the Yes share of the pool; 50 when nothing is staked."""
    total = total_yes + total_no
    if total == 0:
        return 50
    return total_yes * 100 // total


def no_percent(total_yes: int, total_no: int) -> int:
    # Complement of yes_percent so the pair always sums to 100; odd splits
    # therefore round in Yes's favour.
    return 100 - yes_percent(total_yes, total_no)


def probability_split(market: Market) -> tuple[int, int]:
    yes = yes_percent(market.total_yes, market.total_no)
    return yes, 100 - yes


# ---------------------------------------------------------------------------
# Lifecycle phase
# ---------------------------------------------------------------------------


def market_phase(market: Market, now: int | None = None) -> MarketPhase:
    if market.status.is_resolved:
        return MarketPhase.RESOLVED
    now = unix_now() if now is None else now
    if now < market.deadline:
        return MarketPhase.LIVE
    return MarketPhase.EXPIRED


def can_buy(market: Market, now: int | None = None) -> bool:
    return market_phase(market, now) == MarketPhase.LIVE


def can_resolve(market: Market, now: int | None = None) -> bool:
    return market_phase(market, now) == MarketPhase.EXPIRED


def can_claim(market: Market, position: Position) -> bool:
    return market.status.is_resolved and not position.claimed


# ---------------------------------------------------------------------------
# Payouts
# ---------------------------------------------------------------------------


def payout(shares: int, pool_balance: int, total_winning_shares: int) -> int:
    """Pro-rata share of the pool for `shares` on the winning side.

    Zero when the account holds no winning shares or nobody staked on the
    winning side.
    """
    if shares == 0 or total_winning_shares == 0:
        return 0
    return shares * pool_balance // total_winning_shares


def potential_payout(market: Market, position: Position, side: Side) -> int:
    """What `position` would receive if `side` won, at current pool totals."""
    return payout(position.shares_for(side), market.pool_balance, market.total_for(side))


def winning_payout(market: Market, position: Position) -> int | None:
    """Realised payout for a resolved market; None while unresolved."""
    outcome = market.status.outcome
    if not market.status.is_resolved or outcome is None:
        return None
    return potential_payout(market, position, outcome)


def expected_claim(market: Market, position: Position) -> int:
    """Amount a claim call would transfer.

    Same as winning_payout, except when nobody backed the winning side: the
    program then refunds every staker in proportion to their total stake.
    """
    outcome = market.status.outcome
    if position.claimed or outcome is None:
        return 0
    if market.total_for(outcome) == 0:
        staked = position.yes_shares + position.no_shares
        return payout(staked, market.pool_balance, market.total_yes + market.total_no)
    return potential_payout(market, position, outcome)


# ---------------------------------------------------------------------------
# Invariants
# ---------------------------------------------------------------------------


def verify_pool_invariant(market: Market) -> bool:
    """While Open: total_yes + total_no == pool_balance. Claims shrink the pool later."""
    if market.status.is_resolved:
        return True
    staked = market.total_yes + market.total_no
    if staked != market.pool_balance:
        logger.warning(
            "Pool invariant violated: market=%d yes=%d no=%d pool=%d",
            market.id, market.total_yes, market.total_no, market.pool_balance,
        )
        return False
    return True
