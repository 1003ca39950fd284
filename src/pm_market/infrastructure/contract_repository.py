"""MarketRepository — concrete implementation of MarketRepositoryProtocol.

All operations are read-only contract simulations (no signature, no fee).
Every call returns a fresh snapshot; nothing is cached between calls.
"""

import logging

from stellar_sdk import xdr as stellar_xdr

from config.settings import settings
from src.pm_common.enums import ContractErrorCode, ContractMethod, MarketStatusTag, Side
from src.pm_common.errors import MarketNotFoundError, SimulationError, WireDecodeError
from src.pm_contract import codec
from src.pm_contract.domain.models import TaggedVariant
from src.pm_ledger.application.invoker import ContractInvoker
from src.pm_market.domain.economics import verify_pool_invariant
from src.pm_market.domain.models import EMPTY_POSITION, Market, MarketStatus, Position

logger = logging.getLogger(__name__)

_MARKET_FIELDS = (
    "creator", "question", "deadline", "status",
    "total_yes", "total_no", "pool_balance",
)
_POSITION_FIELDS = ("yes_shares", "no_shares", "claimed")

# ---------------------------------------------------------------------------
# Wire mappers
# ---------------------------------------------------------------------------


def _status_from_variant(variant: TaggedVariant) -> MarketStatus:
    if variant.tag == MarketStatusTag.OPEN.value:
        return MarketStatus.open()
    if variant.tag == MarketStatusTag.RESOLVED.value:
        if not variant.values:
            raise WireDecodeError("Resolved status without an outcome")
        outcome = codec.decode_enum(variant.first).tag
        try:
            return MarketStatus.resolved(Side(outcome))
        except ValueError as exc:
            raise WireDecodeError(f"unknown outcome {outcome!r}") from exc
    raise WireDecodeError(f"unknown market status {variant.tag!r}")


def market_from_wire(market_id: int, value: stellar_xdr.SCVal | dict) -> Market:
    raw = codec.decode_record(value, _MARKET_FIELDS)
    return Market(
        id=market_id,
        creator=raw["creator"],
        question=raw["question"],
        deadline=codec.decode_int(raw["deadline"], "deadline"),
        status=_status_from_variant(codec.decode_enum(raw["status"])),
        total_yes=codec.decode_int(raw["total_yes"], "total_yes"),
        total_no=codec.decode_int(raw["total_no"], "total_no"),
        pool_balance=codec.decode_int(raw["pool_balance"], "pool_balance"),
    )


def position_from_wire(value: stellar_xdr.SCVal | dict) -> Position:
    raw = codec.decode_record(value, _POSITION_FIELDS)
    return Position(
        yes_shares=codec.decode_int(raw["yes_shares"], "yes_shares"),
        no_shares=codec.decode_int(raw["no_shares"], "no_shares"),
        claimed=bool(raw["claimed"]),
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class MarketRepository:
    def __init__(
        self,
        invoker: ContractInvoker | None = None,
        contract_id: str | None = None,
    ) -> None:
        self._invoker = invoker or ContractInvoker()
        self._contract_id = contract_id or settings.CONTRACT_ID

    async def count(self) -> int:
        """Number of markets ever created; an uninitialised registry counts as 0."""
        value = await self._invoker.read(self._contract_id, ContractMethod.GET_MARKET_COUNT.value)
        if value is None:
            return 0
        native = codec.to_native(value)
        return 0 if native is None else codec.decode_int(native, "market count")

    async def get(self, market_id: int) -> Market:
        try:
            value = await self._invoker.read(
                self._contract_id,
                ContractMethod.GET_MARKET.value,
                [codec.encode_u64(market_id)],
            )
        except SimulationError as exc:
            if exc.contract_error == ContractErrorCode.MARKET_NOT_FOUND:
                raise MarketNotFoundError(market_id) from exc
            raise
        native = None if value is None else codec.to_native(value)
        if native is None:
            raise MarketNotFoundError(market_id)
        market = market_from_wire(market_id, native)
        logger.debug("Loaded market %d status=%s", market_id, market.status.tag.value)
        verify_pool_invariant(market)
        return market

    async def get_position(self, market_id: int, account: str) -> Position:
        """Position of `account`; accounts that never traded get an all-zero position."""
        value = await self._invoker.read(
            self._contract_id,
            ContractMethod.GET_POSITION.value,
            [codec.encode_u64(market_id), codec.encode_address(account)],
        )
        native = None if value is None else codec.to_native(value)
        if native is None:
            return EMPTY_POSITION
        return position_from_wire(native)
