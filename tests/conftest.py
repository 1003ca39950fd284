"""Shared test fixtures."""

from collections.abc import Callable

import pytest
from httpx import ASGITransport, AsyncClient
from stellar_sdk import Keypair, StrKey
from stellar_sdk import xdr as stellar_xdr

from src.main import app


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client for testing FastAPI endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def keypair() -> Keypair:
    return Keypair.random()


@pytest.fixture
def contract_id() -> str:
    return StrKey.encode_contract(bytes(range(32)))


@pytest.fixture
def account_entry_xdr() -> Callable[[str, int], str]:
    """Factory: LedgerEntryData XDR for an account, as getLedgerEntries returns it."""

    def _make(account_id: str, sequence: int) -> str:
        entry = stellar_xdr.AccountEntry(
            account_id=Keypair.from_public_key(account_id).xdr_account_id(),
            balance=stellar_xdr.Int64(100_000_000),
            seq_num=stellar_xdr.SequenceNumber(stellar_xdr.Int64(sequence)),
            num_sub_entries=stellar_xdr.Uint32(0),
            inflation_dest=None,
            flags=stellar_xdr.Uint32(0),
            home_domain=stellar_xdr.String32(b""),
            thresholds=stellar_xdr.Thresholds(bytes([1, 0, 0, 0])),
            signers=[],
            ext=stellar_xdr.AccountEntryExt(0),
        )
        data = stellar_xdr.LedgerEntryData(
            type=stellar_xdr.LedgerEntryType.ACCOUNT,
            account=entry,
        )
        return data.to_xdr()

    return _make
