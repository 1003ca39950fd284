"""SorobanRpcClient — concrete implementation of LedgerRpcProtocol.

JSON-RPC 2.0 over httpx. Transport failures become LedgerUnavailableError,
JSON-RPC error objects become LedgerRpcError; neither is retried here.
"""

import itertools
import logging
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from config.settings import settings
from src.pm_common.errors import LedgerRpcError, LedgerUnavailableError, ValidationError
from src.pm_common.http_client import get_http_client
from src.pm_ledger.domain.models import (
    LedgerAccount,
    SimulationResult,
    SubmitResult,
    TransactionInfo,
)
from src.pm_ledger.infrastructure.envelope import account_ledger_key, sequence_from_entry
from src.pm_ledger.infrastructure.rpc_schemas import (
    GetLedgerEntriesResponse,
    GetTransactionResponse,
    SendTransactionResponse,
    SimulateTransactionResponse,
)

logger = logging.getLogger(__name__)

# JSON-RPC "parse error" code, reused for bodies we cannot interpret
_PARSE_ERROR = -32700


class SorobanRpcClient:
    def __init__(
        self,
        url: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._url = url or settings.SOROBAN_RPC_URL
        self._client = client
        self._ids = itertools.count(1)

    async def _call(self, method: str, params: dict[str, Any]) -> dict[str, Any]:
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params,
        }
        client = self._client or await get_http_client()
        try:
            resp = await client.post(self._url, json=payload)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise LedgerUnavailableError(f"{method}: {exc}") from exc

        try:
            body = resp.json()
        except ValueError as exc:
            raise LedgerRpcError(_PARSE_ERROR, f"{method}: response is not JSON") from exc

        if not isinstance(body, dict):
            raise LedgerRpcError(_PARSE_ERROR, f"{method}: response is not a JSON object")
        error = body.get("error")
        if isinstance(error, dict):
            raise LedgerRpcError(error.get("code", _PARSE_ERROR), error.get("message", str(error)))
        if error:
            raise LedgerRpcError(_PARSE_ERROR, str(error))
        return body.get("result") or {}

    @staticmethod
    def _parse(model: type, method: str, result: dict[str, Any]) -> Any:
        try:
            return model.model_validate(result)
        except PydanticValidationError as exc:
            raise LedgerRpcError(_PARSE_ERROR, f"{method}: unexpected result shape: {exc}") from exc

    async def get_account(self, account_id: str) -> LedgerAccount:
        key = account_ledger_key(account_id)
        result = await self._call("getLedgerEntries", {"keys": [key]})
        parsed: GetLedgerEntriesResponse = self._parse(
            GetLedgerEntriesResponse, "getLedgerEntries", result
        )
        if not parsed.entries:
            raise ValidationError(f"Account not found on ledger: {account_id}")
        sequence = sequence_from_entry(parsed.entries[0].xdr)
        logger.debug("Loaded account %s seq=%d", account_id, sequence)
        return LedgerAccount(account_id=account_id, sequence=sequence)

    async def simulate(self, envelope_xdr: str) -> SimulationResult:
        result = await self._call("simulateTransaction", {"transaction": envelope_xdr})
        parsed: SimulateTransactionResponse = self._parse(
            SimulateTransactionResponse, "simulateTransaction", result
        )
        return parsed.to_domain()

    async def submit(self, envelope_xdr: str) -> SubmitResult:
        result = await self._call("sendTransaction", {"transaction": envelope_xdr})
        parsed: SendTransactionResponse = self._parse(
            SendTransactionResponse, "sendTransaction", result
        )
        return parsed.to_domain()

    async def get_transaction(self, tx_hash: str) -> TransactionInfo:
        result = await self._call("getTransaction", {"hash": tx_hash})
        parsed: GetTransactionResponse = self._parse(
            GetTransactionResponse, "getTransaction", result
        )
        return parsed.to_domain(tx_hash)
