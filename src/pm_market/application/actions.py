"""MarketActionService — the four state-changing contract calls.

Each method validates its input locally, builds the contract arguments and
delegates to ContractInvoker.write(). Failures propagate unchanged; nothing
is retried here. The caller is always the connected wallet's address.
"""

import logging

from config.settings import settings
from src.pm_common.enums import ContractMethod, Side
from src.pm_common.errors import InvalidQuestionError, ValidationError
from src.pm_common.stroops import validate_stake
from src.pm_contract import codec
from src.pm_ledger.application.invoker import ContractInvoker
from src.pm_ledger.domain.models import ConfirmedCall
from src.pm_wallet.application.session import WalletSession

logger = logging.getLogger(__name__)


def _coerce_side(value: Side | str) -> Side:
    try:
        return Side(value)
    except ValueError as exc:
        raise ValidationError(f"side must be Yes or No, got {value!r}") from exc


class MarketActionService:
    def __init__(
        self,
        session: WalletSession,
        invoker: ContractInvoker | None = None,
        contract_id: str | None = None,
        max_question_length: int | None = None,
    ) -> None:
        self._session = session
        self._invoker = invoker or ContractInvoker()
        self._contract_id = contract_id or settings.CONTRACT_ID
        self._max_question_length = max_question_length or settings.MAX_QUESTION_LENGTH

    async def _write(self, method: ContractMethod, args: list, caller: str) -> ConfirmedCall:
        return await self._invoker.write(
            caller,
            self._contract_id,
            method.value,
            args,
            self._session.sign_envelope,
        )

    def _clean_question(self, question: str) -> str:
        text = question.strip()
        if not text:
            raise InvalidQuestionError("question is empty")
        if len(text) > self._max_question_length:
            raise InvalidQuestionError(
                f"{len(text)} characters exceeds the {self._max_question_length} limit"
            )
        return text

    async def create_market(self, question: str, deadline: int) -> ConfirmedCall:
        """Create a market; return_value of the result is the new market id.

        The deadline is passed through as given. Rejecting past deadlines is
        the caller's policy (the contract also refuses them in simulation).
        """
        creator = self._session.require_address()
        args = [
            codec.encode_address(creator),
            codec.encode_string(self._clean_question(question)),
            codec.encode_u64(deadline),
        ]
        result = await self._write(ContractMethod.CREATE_MARKET, args, creator)
        logger.info("Market created by %s: id=%s", creator, result.return_value)
        return result

    async def buy_shares(self, market_id: int, side: Side | str, amount: int) -> ConfirmedCall:
        buyer = self._session.require_address()
        validate_stake(amount)
        args = [
            codec.encode_address(buyer),
            codec.encode_u64(market_id),
            codec.encode_enum(_coerce_side(side).value),
            codec.encode_i128(amount),
        ]
        return await self._write(ContractMethod.BUY_SHARES, args, buyer)

    async def resolve_market(self, market_id: int, outcome: Side | str) -> ConfirmedCall:
        """Set the outcome. Only the contract admin can; that check happens on-chain."""
        caller = self._session.require_address()
        args = [
            codec.encode_u64(market_id),
            codec.encode_enum(_coerce_side(outcome).value),
        ]
        return await self._write(ContractMethod.RESOLVE_MARKET, args, caller)

    async def claim_winnings(self, market_id: int) -> ConfirmedCall:
        """Claim once; return_value is the payout in stroops.

        A second claim fails in simulation with ALREADY_CLAIMED. That is an
        expected outcome to show the user, not something to retry.
        """
        claimant = self._session.require_address()
        args = [
            codec.encode_address(claimant),
            codec.encode_u64(market_id),
        ]
        return await self._write(ContractMethod.CLAIM_WINNINGS, args, claimant)
