"""Domain models for pm_ledger — pure dataclasses describing one call lifecycle.

Nothing here is persisted; each value lives for the duration of a single
read or write round trip.
"""

from dataclasses import dataclass, field
from typing import Any

from src.pm_common.enums import SendStatus, TransactionStatus
from src.pm_contract import codec


@dataclass(frozen=True)
class LedgerAccount:
    account_id: str
    sequence: int


@dataclass
class SimulationResult:
    error: str | None
    return_value_xdr: str | None
    transaction_data_xdr: str | None
    min_resource_fee: int
    auth_xdr: list[str] = field(default_factory=list)
    latest_ledger: int | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass(frozen=True)
class SubmitResult:
    tx_hash: str
    status: SendStatus
    error_result_xdr: str | None = None

    @property
    def accepted(self) -> bool:
        return self.status in (SendStatus.PENDING, SendStatus.DUPLICATE)


@dataclass(frozen=True)
class TransactionInfo:
    tx_hash: str
    status: TransactionStatus
    ledger: int | None = None
    return_value_xdr: str | None = None
    result_xdr: str | None = None


@dataclass(frozen=True)
class ConfirmedCall:
    """A write that reached consensus and executed successfully."""

    tx_hash: str
    ledger: int | None
    return_value_xdr: str | None

    @property
    def return_value(self) -> Any:
        if self.return_value_xdr is None:
            return None
        return codec.to_native(codec.from_xdr(self.return_value_xdr))
