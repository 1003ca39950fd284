"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Local validation (nothing sent over the wire)
  2xxx: Signer / wallet
  3xxx: Market
  4xxx: Call lifecycle (simulate, submit, confirm, decode)
  9xxx: System (transport, RPC, faucet)
"""

import re

from src.pm_common.enums import ContractErrorCode


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Validation ---

class ValidationError(AppError):
    def __init__(self, detail: str, code: int = 1001) -> None:
        super().__init__(code, detail, 422)


class InvalidAddressError(ValidationError):
    def __init__(self, address: str) -> None:
        super().__init__(f"Invalid Stellar address: {address!r}", 1002)
        self.address = address


class InvalidAmountError(ValidationError):
    def __init__(self, detail: str) -> None:
        super().__init__(f"Invalid amount: {detail}", 1003)


class InvalidQuestionError(ValidationError):
    def __init__(self, detail: str) -> None:
        super().__init__(f"Invalid question: {detail}", 1004)


# --- 2xxx: Signer ---

class SignerError(AppError):
    """Wallet-side failure, kept apart from network errors so the UI can prompt reconnection."""

    def __init__(self, code: int = 2000, message: str = "Signer error", http_status: int = 401) -> None:
        super().__init__(code, message, http_status)


class WalletNotConnectedError(SignerError):
    def __init__(self) -> None:
        super().__init__(2001, "Wallet not connected")


class SignerRejectedError(SignerError):
    def __init__(self, detail: str = "User rejected the request") -> None:
        super().__init__(2002, f"Signer rejected: {detail}", 403)


class SignerUnavailableError(SignerError):
    def __init__(self, detail: str = "No wallet available") -> None:
        super().__init__(2003, f"Signer unavailable: {detail}", 503)


class SignerTimeoutError(SignerError):
    def __init__(self, timeout: float) -> None:
        super().__init__(2004, f"Signer did not respond within {timeout:g}s", 408)


# --- 3xxx: Market ---

class MarketNotFoundError(AppError):
    def __init__(self, market_id: int) -> None:
        super().__init__(3001, f"Market not found: {market_id}", 404)
        self.market_id = market_id


# --- 4xxx: Call lifecycle ---

_CONTRACT_ERROR_RE = re.compile(r"Error\(Contract, #(\d+)\)")


def parse_contract_error(diagnostic: str) -> ContractErrorCode | None:
    """Extract the program's error code from a host diagnostic string, if any."""
    match = _CONTRACT_ERROR_RE.search(diagnostic)
    if match is None:
        return None
    try:
        return ContractErrorCode(int(match.group(1)))
    except ValueError:
        return None


class SimulationError(AppError):
    """Rejected during simulation — no state changed, safe to retry after fixing the cause."""

    def __init__(self, diagnostic: str) -> None:
        self.diagnostic = diagnostic
        self.contract_error = parse_contract_error(diagnostic)
        detail = diagnostic
        if self.contract_error is not None:
            detail = f"{self.contract_error.name}: {diagnostic}"
        super().__init__(4001, f"Simulation failed: {detail}", 422)


class SubmissionError(AppError):
    """Envelope refused at submission — rebuild from a fresh sequence before retrying."""

    def __init__(self, status: str, error_result_xdr: str | None = None) -> None:
        self.status = status
        self.error_result_xdr = error_result_xdr
        msg = f"Transaction rejected at submission: {status}"
        if error_result_xdr:
            msg += f" ({error_result_xdr})"
        super().__init__(4002, msg, 409)


class OnChainFailure(AppError):
    """Executed but reverted. Never retried blindly; re-read state first."""

    def __init__(self, tx_hash: str, result_xdr: str | None = None) -> None:
        self.tx_hash = tx_hash
        self.result_xdr = result_xdr
        super().__init__(4003, f"Transaction failed on-chain: {tx_hash}", 409)


class ConfirmationTimeoutError(AppError):
    def __init__(self, tx_hash: str, timeout: float) -> None:
        self.tx_hash = tx_hash
        super().__init__(
            4004,
            f"Transaction {tx_hash} not confirmed within {timeout:g}s; it may still land",
            504,
        )


class WireDecodeError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(4005, f"Malformed contract value: {detail}", 502)


# --- 9xxx: System ---

class LedgerUnavailableError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(9001, f"Ledger RPC unreachable: {detail}", 503)


class LedgerRpcError(AppError):
    def __init__(self, rpc_code: int, detail: str) -> None:
        self.rpc_code = rpc_code
        super().__init__(9002, f"Ledger RPC error {rpc_code}: {detail}", 502)


class FaucetError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(9003, f"Faucet request failed: {detail}", 502)
