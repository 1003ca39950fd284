"""Domain models for pm_market — pure dataclasses, no business logic.

These are read-only snapshots of contract state. Amounts are int stroops.
"""

from dataclasses import dataclass

from src.pm_common.enums import MarketStatusTag, Side


@dataclass(frozen=True)
class MarketStatus:
    tag: MarketStatusTag
    outcome: Side | None = None  # set only when tag == RESOLVED

    @property
    def is_resolved(self) -> bool:
        return self.tag == MarketStatusTag.RESOLVED

    @classmethod
    def open(cls) -> "MarketStatus":
        return cls(MarketStatusTag.OPEN)

    @classmethod
    def resolved(cls, outcome: Side) -> "MarketStatus":
        return cls(MarketStatusTag.RESOLVED, outcome)


@dataclass(frozen=True)
class Market:
    id: int
    creator: str
    question: str
    deadline: int            # unix seconds
    status: MarketStatus
    total_yes: int
    total_no: int
    pool_balance: int

    def total_for(self, side: Side) -> int:
        return self.total_yes if side is Side.YES else self.total_no


@dataclass(frozen=True)
class Position:
    yes_shares: int = 0
    no_shares: int = 0
    claimed: bool = False

    def shares_for(self, side: Side) -> int:
        return self.yes_shares if side is Side.YES else self.no_shares


# Returned for accounts that never bought into a market
EMPTY_POSITION = Position()
