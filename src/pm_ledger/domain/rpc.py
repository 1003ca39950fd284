# src/pm_ledger/domain/rpc.py
"""Ledger RPC Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real JSON-RPC implementation.
Envelopes cross this boundary as base64 XDR strings.
"""

from typing import Protocol

from src.pm_ledger.domain.models import (
    LedgerAccount,
    SimulationResult,
    SubmitResult,
    TransactionInfo,
)


class LedgerRpcProtocol(Protocol):
    async def get_account(self, account_id: str) -> LedgerAccount: ...

    async def simulate(self, envelope_xdr: str) -> SimulationResult: ...

    async def submit(self, envelope_xdr: str) -> SubmitResult: ...

    async def get_transaction(self, tx_hash: str) -> TransactionInfo: ...
