"""ContractInvoker — drives every remote contract call.

read():  build (placeholder source) -> simulate -> return value | None
write(): load account -> build -> simulate -> assemble -> sign -> submit -> poll

Steps of a write run strictly in that order; each consumes the previous
step's output. Nothing touches the network after the simulation until the
signer hands back a signed envelope, so cancelling while the wallet prompt is
open abandons the call cleanly. Once submitted, the effect proceeds on-ledger
whether or not we keep polling.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Sequence

from stellar_sdk import xdr as stellar_xdr

from config.settings import settings
from src.pm_common.enums import TransactionStatus
from src.pm_common.errors import (
    ConfirmationTimeoutError,
    LedgerRpcError,
    LedgerUnavailableError,
    OnChainFailure,
    SimulationError,
    SubmissionError,
)
from src.pm_contract import codec
from src.pm_ledger.domain.models import ConfirmedCall, LedgerAccount, TransactionInfo
from src.pm_ledger.domain.rpc import LedgerRpcProtocol
from src.pm_ledger.infrastructure.envelope import EnvelopeBuilder
from src.pm_ledger.infrastructure.soroban_rpc import SorobanRpcClient

logger = logging.getLogger(__name__)

# Receives the assembled unsigned envelope XDR, returns the signed envelope XDR
SignFn = Callable[[str], Awaitable[str]]


class ContractInvoker:
    def __init__(
        self,
        rpc: LedgerRpcProtocol | None = None,
        envelopes: EnvelopeBuilder | None = None,
        *,
        read_source: str | None = None,
        read_timeout: int | None = None,
        write_timeout: int | None = None,
        poll_interval: float | None = None,
        poll_timeout: float | None = settings.POLL_TIMEOUT_SECONDS,
    ) -> None:
        self._rpc: LedgerRpcProtocol = rpc or SorobanRpcClient()
        self._envelopes = envelopes or EnvelopeBuilder()
        self._read_source = read_source or settings.READ_SOURCE_ACCOUNT
        self._read_timeout = read_timeout or settings.READ_TIMEOUT_SECONDS
        self._write_timeout = write_timeout or settings.WRITE_TIMEOUT_SECONDS
        self._poll_interval = (
            poll_interval if poll_interval is not None else settings.POLL_INTERVAL_SECONDS
        )
        self._poll_timeout = poll_timeout

    # ------------------------------------------------------------------
    # Read path
    # ------------------------------------------------------------------

    async def read(
        self,
        contract_id: str,
        method: str,
        args: Sequence[stellar_xdr.SCVal] = (),
    ) -> stellar_xdr.SCVal | None:
        """Simulate-only call. None means the contract returned nothing (not an error)."""
        # Simulation ignores sequence numbers, so the placeholder needs no lookup
        source = LedgerAccount(account_id=self._read_source, sequence=0)
        envelope = self._envelopes.build_invocation(
            source, contract_id, method, args, self._read_timeout
        )
        simulation = await self._rpc.simulate(envelope)
        if simulation.failed:
            raise SimulationError(simulation.error or "")
        logger.debug("read %s -> %s", method, "value" if simulation.return_value_xdr else "absent")
        if simulation.return_value_xdr is None:
            return None
        return codec.from_xdr(simulation.return_value_xdr)

    # ------------------------------------------------------------------
    # Write path
    # ------------------------------------------------------------------

    async def write(
        self,
        caller: str,
        contract_id: str,
        method: str,
        args: Sequence[stellar_xdr.SCVal],
        sign: SignFn,
    ) -> ConfirmedCall:
        account = await self._rpc.get_account(caller)
        unsigned = self._envelopes.build_invocation(
            account, contract_id, method, args, self._write_timeout
        )

        simulation = await self._rpc.simulate(unsigned)
        if simulation.failed:
            # Fail before submission: no fee is paid for a call that cannot land
            raise SimulationError(simulation.error or "")

        assembled = self._envelopes.assemble(unsigned, simulation)

        try:
            signed = await sign(assembled)
        except asyncio.CancelledError:
            logger.info("%s abandoned at signing; nothing was submitted", method)
            raise

        submitted = await self._rpc.submit(signed)
        if not submitted.accepted:
            raise SubmissionError(submitted.status.value, submitted.error_result_xdr)
        logger.info("Submitted %s tx=%s (%s)", method, submitted.tx_hash, submitted.status.value)

        info = await self._await_confirmation(submitted.tx_hash)
        if info.status == TransactionStatus.FAILED:
            raise OnChainFailure(info.tx_hash, info.result_xdr)

        logger.info("Confirmed %s tx=%s ledger=%s", method, info.tx_hash, info.ledger)
        return ConfirmedCall(
            tx_hash=info.tx_hash,
            ledger=info.ledger,
            return_value_xdr=info.return_value_xdr,
        )

    async def _await_confirmation(self, tx_hash: str) -> TransactionInfo:
        """Poll getTransaction until the hash leaves NOT_FOUND.

        The only retry loop in the client. The envelope is already on its way,
        so a failed poll counts as "not known yet" rather than aborting the
        call. With poll_timeout=None it never gives up.
        """
        deadline = None
        if self._poll_timeout is not None:
            deadline = time.monotonic() + self._poll_timeout

        attempts = 0
        while True:
            attempts += 1
            try:
                info = await self._rpc.get_transaction(tx_hash)
            except (LedgerUnavailableError, LedgerRpcError) as exc:
                logger.warning("poll %s attempt=%d failed: %s", tx_hash, attempts, exc.message)
            else:
                logger.debug("poll %s attempt=%d status=%s", tx_hash, attempts, info.status.value)
                if info.status != TransactionStatus.NOT_FOUND:
                    return info
            if deadline is not None and time.monotonic() >= deadline:
                raise ConfirmationTimeoutError(tx_hash, self._poll_timeout or 0.0)
            await asyncio.sleep(self._poll_interval)
