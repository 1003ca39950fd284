# src/pm_market/domain/repository.py
"""Repository Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the contract-backed implementation.
"""

from typing import Protocol

from src.pm_market.domain.models import Market, Position


class MarketRepositoryProtocol(Protocol):
    async def count(self) -> int: ...

    async def get(self, market_id: int) -> Market: ...

    async def get_position(self, market_id: int, account: str) -> Position: ...
