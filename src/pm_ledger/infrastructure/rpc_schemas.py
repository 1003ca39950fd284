"""Pydantic models for Soroban JSON-RPC results.

Field aliases follow the RPC's camelCase; numeric strings (minResourceFee)
are coerced to int. Unknown fields are ignored so newer RPC versions parse.
"""

from pydantic import BaseModel, ConfigDict, Field
from stellar_sdk import xdr as stellar_xdr

from src.pm_common.enums import SendStatus, TransactionStatus
from src.pm_ledger.domain.models import SimulationResult, SubmitResult, TransactionInfo


class _RpcModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# ---------------------------------------------------------------------------
# getLedgerEntries
# ---------------------------------------------------------------------------


class LedgerEntryResult(_RpcModel):
    key: str
    xdr: str
    last_modified_ledger_seq: int | None = Field(None, alias="lastModifiedLedgerSeq")


class GetLedgerEntriesResponse(_RpcModel):
    entries: list[LedgerEntryResult] | None = None
    latest_ledger: int | None = Field(None, alias="latestLedger")


# ---------------------------------------------------------------------------
# simulateTransaction
# ---------------------------------------------------------------------------


class SimulateHostFunctionResult(_RpcModel):
    xdr: str
    auth: list[str] = Field(default_factory=list)


class SimulateTransactionResponse(_RpcModel):
    error: str | None = None
    results: list[SimulateHostFunctionResult] | None = None
    transaction_data: str | None = Field(None, alias="transactionData")
    min_resource_fee: int = Field(0, alias="minResourceFee")
    latest_ledger: int | None = Field(None, alias="latestLedger")

    def to_domain(self) -> SimulationResult:
        first = self.results[0] if self.results else None
        return SimulationResult(
            error=self.error,
            return_value_xdr=first.xdr if first else None,
            transaction_data_xdr=self.transaction_data,
            min_resource_fee=self.min_resource_fee,
            auth_xdr=list(first.auth) if first else [],
            latest_ledger=self.latest_ledger,
        )


# ---------------------------------------------------------------------------
# sendTransaction
# ---------------------------------------------------------------------------


class SendTransactionResponse(_RpcModel):
    status: SendStatus
    hash: str
    error_result_xdr: str | None = Field(None, alias="errorResultXdr")
    latest_ledger: int | None = Field(None, alias="latestLedger")

    def to_domain(self) -> SubmitResult:
        return SubmitResult(
            tx_hash=self.hash,
            status=self.status,
            error_result_xdr=self.error_result_xdr,
        )


# ---------------------------------------------------------------------------
# getTransaction
# ---------------------------------------------------------------------------


def _return_value_from_meta(meta_xdr: str) -> str | None:
    """Dig the invocation's return value out of TransactionMeta (v3 or v4)."""
    meta = stellar_xdr.TransactionMeta.from_xdr(meta_xdr)
    for version in ("v4", "v3"):
        body = getattr(meta, version, None)
        soroban_meta = getattr(body, "soroban_meta", None)
        if soroban_meta is not None and soroban_meta.return_value is not None:
            return soroban_meta.return_value.to_xdr()
    return None


class GetTransactionResponse(_RpcModel):
    status: TransactionStatus
    ledger: int | None = None
    return_value: str | None = Field(None, alias="returnValue")
    result_xdr: str | None = Field(None, alias="resultXdr")
    result_meta_xdr: str | None = Field(None, alias="resultMetaXdr")

    def to_domain(self, tx_hash: str) -> TransactionInfo:
        return_value = self.return_value
        if (
            return_value is None
            and self.status == TransactionStatus.SUCCESS
            and self.result_meta_xdr
        ):
            return_value = _return_value_from_meta(self.result_meta_xdr)
        return TransactionInfo(
            tx_hash=tx_hash,
            status=self.status,
            ledger=self.ledger,
            return_value_xdr=return_value,
            result_xdr=self.result_xdr,
        )
