"""WalletSession — explicitly owned signer state.

Lifecycle: DISCONNECTED -> CONNECTING -> ACTIVE -> DISCONNECTED.
One session per user; injected into MarketActionService instead of living
in module globals.
"""

import asyncio
import logging

from config.settings import settings
from src.pm_common.enums import WalletState
from src.pm_common.errors import SignerTimeoutError, WalletNotConnectedError
from src.pm_contract.codec import validate_account_id
from src.pm_wallet.domain.signer import SignerProtocol

logger = logging.getLogger(__name__)


class WalletSession:
    def __init__(
        self,
        signer: SignerProtocol,
        network_passphrase: str | None = None,
        sign_timeout: float | None = settings.SIGN_TIMEOUT_SECONDS,
    ) -> None:
        self._signer = signer
        self._network_passphrase = network_passphrase or settings.NETWORK_PASSPHRASE
        self._sign_timeout = sign_timeout
        self._state = WalletState.DISCONNECTED
        self._address: str | None = None
        self._wallet_name: str | None = None

    @property
    def state(self) -> WalletState:
        return self._state

    @property
    def connected(self) -> bool:
        return self._state == WalletState.ACTIVE

    @property
    def address(self) -> str | None:
        return self._address

    @property
    def wallet_name(self) -> str | None:
        return self._wallet_name

    async def connect(self) -> str:
        if self.connected:
            return self._address  # type: ignore[return-value]
        self._state = WalletState.CONNECTING
        try:
            await self._signer.connect()
            address = validate_account_id(await self._signer.get_address())
        except BaseException:
            self._state = WalletState.DISCONNECTED
            raise
        self._address = address
        self._wallet_name = self._signer.name
        self._state = WalletState.ACTIVE
        logger.info("Wallet connected: %s (%s)", address, self._wallet_name)
        return address

    async def disconnect(self) -> None:
        try:
            await self._signer.disconnect()
        finally:
            if self._address is not None:
                logger.info("Wallet disconnected: %s", self._address)
            self._address = None
            self._wallet_name = None
            self._state = WalletState.DISCONNECTED

    def require_address(self) -> str:
        if not self.connected or self._address is None:
            raise WalletNotConnectedError()
        return self._address

    async def sign_envelope(self, envelope_xdr: str) -> str:
        """Hand the envelope to the wallet; may wait on a human."""
        self.require_address()
        pending = self._signer.sign_envelope(envelope_xdr, self._network_passphrase)
        if self._sign_timeout is None:
            return await pending
        try:
            return await asyncio.wait_for(pending, timeout=self._sign_timeout)
        except asyncio.TimeoutError as exc:
            raise SignerTimeoutError(self._sign_timeout) from exc
