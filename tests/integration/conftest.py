"""Integration-test fixtures.

FakePredictionProgram stands in for ContractInvoker: it keeps the program's
state in memory and answers read()/write() with real SCVals, so the
repository, action service, wallet session and gateway all run unmodified
on top of it. Contract errors surface as SimulationError with the same
host diagnostic format the network returns.
"""

from collections.abc import Sequence

import pytest
from stellar_sdk import Keypair, StrKey
from stellar_sdk import xdr as stellar_xdr

from src.pm_common.enums import ContractErrorCode
from src.pm_common.errors import SimulationError
from src.pm_contract import codec
from src.pm_ledger.application.invoker import SignFn
from src.pm_ledger.domain.models import ConfirmedCall, LedgerAccount
from src.pm_ledger.infrastructure.envelope import EnvelopeBuilder
from src.pm_market.application.actions import MarketActionService
from src.pm_market.infrastructure.contract_repository import MarketRepository
from src.pm_wallet.application.session import WalletSession
from src.pm_wallet.infrastructure.keypair_signer import KeypairSigner

CONTRACT_ID = StrKey.encode_contract(bytes(range(32)))
START_TIME = 1_700_000_000


def _fail(code: ContractErrorCode) -> SimulationError:
    return SimulationError(f"HostError: Error(Contract, #{code.value})")


class FakePredictionProgram:
    def __init__(self, admin: str) -> None:
        self.admin = admin
        self.now = START_TIME
        self.markets: list[dict] = []
        self.positions: dict[tuple[int, str], dict] = {}
        self.submitted: list[str] = []
        self._sequences: dict[str, int] = {}
        self._envelopes = EnvelopeBuilder()

    # -- state helpers -------------------------------------------------

    def _market(self, market_id: int) -> dict:
        if market_id >= len(self.markets):
            raise _fail(ContractErrorCode.MARKET_NOT_FOUND)
        return self.markets[market_id]

    def _position(self, market_id: int, user: str) -> dict:
        return self.positions.get(
            (market_id, user), {"yes_shares": 0, "no_shares": 0, "claimed": False}
        )

    @staticmethod
    def _market_scval(m: dict) -> stellar_xdr.SCVal:
        if m["outcome"] is None:
            status = codec.encode_enum("Open")
        else:
            status = codec.encode_enum("Resolved", codec.encode_enum(m["outcome"]))
        return codec.encode_record({
            "creator": codec.encode_address(m["creator"]),
            "question": codec.encode_string(m["question"]),
            "deadline": codec.encode_u64(m["deadline"]),
            "status": status,
            "total_yes": codec.encode_i128(m["total_yes"]),
            "total_no": codec.encode_i128(m["total_no"]),
            "pool_balance": codec.encode_i128(m["pool_balance"]),
        })

    # -- ContractInvoker surface ---------------------------------------

    async def read(
        self,
        contract_id: str,
        method: str,
        args: Sequence[stellar_xdr.SCVal] = (),
    ) -> stellar_xdr.SCVal | None:
        params = [codec.to_native(a) for a in args]
        if method == "get_market_count":
            return codec.encode_u64(len(self.markets))
        if method == "get_market":
            return self._market_scval(self._market(params[0]))
        if method == "get_position":
            p = self._position(params[0], params[1])
            return codec.encode_record({
                "yes_shares": codec.encode_i128(p["yes_shares"]),
                "no_shares": codec.encode_i128(p["no_shares"]),
                "claimed": codec.encode_bool(p["claimed"]),
            })
        raise SimulationError(f"HostError: Error(WasmVm, MissingValue) unknown function {method}")

    async def write(
        self,
        caller: str,
        contract_id: str,
        method: str,
        args: Sequence[stellar_xdr.SCVal],
        sign: SignFn,
    ) -> ConfirmedCall:
        params = [codec.to_native(a) for a in args]
        # Simulate first: a failing call never reaches the signer
        handler = getattr(self, f"_{method}")
        result = handler(caller, *params, dry_run=True)

        sequence = self._sequences.get(caller, 100)
        unsigned = self._envelopes.build_invocation(
            LedgerAccount(caller, sequence), contract_id, method, args, 60
        )
        signed = await sign(unsigned)
        self._sequences[caller] = sequence + 1
        self.submitted.append(signed)

        result = handler(caller, *params, dry_run=False)
        return ConfirmedCall(
            tx_hash=f"tx{len(self.submitted)}",
            ledger=len(self.submitted),
            return_value_xdr=codec.to_xdr(result) if result is not None else None,
        )

    # -- program methods -----------------------------------------------

    def _create_market(self, caller, creator, question, deadline, *, dry_run):
        if deadline <= self.now:
            raise _fail(ContractErrorCode.INVALID_DEADLINE)
        market_id = len(self.markets)
        if not dry_run:
            self.markets.append({
                "creator": creator, "question": question, "deadline": deadline,
                "outcome": None, "total_yes": 0, "total_no": 0, "pool_balance": 0,
            })
        return codec.encode_u64(market_id)

    def _buy_shares(self, caller, buyer, market_id, side, amount, *, dry_run):
        if amount <= 0:
            raise _fail(ContractErrorCode.INVALID_AMOUNT)
        m = self._market(market_id)
        if m["outcome"] is not None or self.now >= m["deadline"]:
            raise _fail(ContractErrorCode.MARKET_CLOSED)
        if not dry_run:
            tag = side[0]
            key = "yes" if tag == "Yes" else "no"
            m[f"total_{key}"] += amount
            m["pool_balance"] += amount
            p = dict(self._position(market_id, buyer))
            p[f"{key}_shares"] += amount
            self.positions[(market_id, buyer)] = p
        return None

    def _resolve_market(self, caller, market_id, outcome, *, dry_run):
        if caller != self.admin:
            raise _fail(ContractErrorCode.UNAUTHORIZED)
        m = self._market(market_id)
        if m["outcome"] is not None:
            raise _fail(ContractErrorCode.MARKET_ALREADY_RESOLVED)
        if self.now < m["deadline"]:
            raise _fail(ContractErrorCode.DEADLINE_NOT_REACHED)
        if not dry_run:
            m["outcome"] = outcome[0]
        return None

    def _claim_winnings(self, caller, user, market_id, *, dry_run):
        m = self._market(market_id)
        p = self._position(market_id, user)
        if p["claimed"]:
            raise _fail(ContractErrorCode.ALREADY_CLAIMED)
        if m["outcome"] is None:
            raise _fail(ContractErrorCode.MARKET_NOT_RESOLVED)
        key = "yes" if m["outcome"] == "Yes" else "no"
        winning_total = m[f"total_{key}"]
        if winning_total == 0:
            staked = m["total_yes"] + m["total_no"]
            mine = p["yes_shares"] + p["no_shares"]
            amount = 0 if staked == 0 else mine * m["pool_balance"] // staked
        else:
            amount = p[f"{key}_shares"] * m["pool_balance"] // winning_total
        if not dry_run:
            self.positions[(market_id, user)] = {**p, "claimed": True}
        return codec.encode_i128(amount)


@pytest.fixture
def admin() -> Keypair:
    return Keypair.random()


@pytest.fixture
def program(admin) -> FakePredictionProgram:
    return FakePredictionProgram(admin.public_key)


@pytest.fixture
def repo(program) -> MarketRepository:
    return MarketRepository(invoker=program, contract_id=CONTRACT_ID)


async def _connected(secret: str) -> WalletSession:
    session = WalletSession(KeypairSigner(secret))
    await session.connect()
    return session


@pytest.fixture
def actions_for(program):
    """Factory: action service driven by a connected local-keypair wallet."""

    async def _make(keypair: Keypair) -> MarketActionService:
        session = await _connected(keypair.secret)
        return MarketActionService(session, invoker=program, contract_id=CONTRACT_ID)

    return _make
