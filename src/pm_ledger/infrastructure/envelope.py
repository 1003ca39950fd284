"""Transaction envelope construction (stellar-sdk).

The public surface speaks base64 XDR strings, so the orchestrator and the RPC
client never hold SDK transaction objects: build -> simulate -> assemble ->
sign all pass plain strings along.
"""

from collections.abc import Sequence

from stellar_sdk import Account, Keypair, TransactionBuilder, TransactionEnvelope
from stellar_sdk import xdr as stellar_xdr

from config.settings import settings
from src.pm_contract.codec import validate_account_id, validate_contract_id
from src.pm_ledger.domain.models import LedgerAccount, SimulationResult


class EnvelopeBuilder:
    def __init__(
        self,
        network_passphrase: str | None = None,
        base_fee: int | None = None,
    ) -> None:
        self._network_passphrase = network_passphrase or settings.NETWORK_PASSPHRASE
        self._base_fee = base_fee if base_fee is not None else settings.BASE_FEE

    @property
    def network_passphrase(self) -> str:
        return self._network_passphrase

    def build_invocation(
        self,
        source: LedgerAccount,
        contract_id: str,
        method: str,
        args: Sequence[stellar_xdr.SCVal],
        timeout: int,
    ) -> str:
        """Unsigned envelope with a single invoke-contract operation."""
        validate_contract_id(contract_id)
        envelope = (
            TransactionBuilder(
                source_account=Account(source.account_id, source.sequence),
                network_passphrase=self._network_passphrase,
                base_fee=self._base_fee,
            )
            .append_invoke_contract_function_op(
                contract_id=contract_id,
                function_name=method,
                parameters=list(args),
            )
            .set_timeout(timeout)
            .build()
        )
        return envelope.to_xdr()

    def assemble(self, envelope_xdr: str, simulation: SimulationResult) -> str:
        """Fold simulated footprint, auth entries and resource fee into the envelope.

        Must run before signing: the resource fee is part of the signed payload.
        """
        envelope = TransactionEnvelope.from_xdr(envelope_xdr, self._network_passphrase)
        tx = envelope.transaction
        if simulation.transaction_data_xdr:
            tx.soroban_data = stellar_xdr.SorobanTransactionData.from_xdr(
                simulation.transaction_data_xdr
            )
        tx.fee += simulation.min_resource_fee
        op = tx.operations[0]
        if simulation.auth_xdr and not op.auth:
            op.auth = [
                stellar_xdr.SorobanAuthorizationEntry.from_xdr(entry)
                for entry in simulation.auth_xdr
            ]
        return envelope.to_xdr()


# ---------------------------------------------------------------------------
# Account ledger entries (getLedgerEntries)
# ---------------------------------------------------------------------------


def account_ledger_key(account_id: str) -> str:
    """LedgerKey XDR for an account entry."""
    validate_account_id(account_id)
    key = stellar_xdr.LedgerKey(
        type=stellar_xdr.LedgerEntryType.ACCOUNT,
        account=stellar_xdr.LedgerKeyAccount(
            account_id=Keypair.from_public_key(account_id).xdr_account_id(),
        ),
    )
    return key.to_xdr()


def sequence_from_entry(entry_xdr: str) -> int:
    """Current sequence number from an account LedgerEntryData XDR."""
    data = stellar_xdr.LedgerEntryData.from_xdr(entry_xdr)
    return data.account.seq_num.sequence_number.int64
