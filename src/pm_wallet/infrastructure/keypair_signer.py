"""KeypairSigner — signs with a local Stellar secret key.

For scripts, automation (e.g. the resolution authority) and tests. Browser
wallets implement the same SignerProtocol on their side of the bridge.
"""

from stellar_sdk import Keypair, TransactionEnvelope
from stellar_sdk.exceptions import Ed25519SecretSeedInvalidError

from src.pm_common.errors import SignerRejectedError, SignerUnavailableError


class KeypairSigner:
    name = "Local keypair"

    def __init__(self, secret: str) -> None:
        try:
            self._keypair = Keypair.from_secret(secret)
        except Ed25519SecretSeedInvalidError as exc:
            raise SignerUnavailableError("invalid secret seed") from exc

    async def connect(self) -> None:
        return None

    async def disconnect(self) -> None:
        return None

    async def get_address(self) -> str:
        return self._keypair.public_key

    async def sign_envelope(self, envelope_xdr: str, network_passphrase: str) -> str:
        envelope = TransactionEnvelope.from_xdr(envelope_xdr, network_passphrase)
        if envelope.transaction.source.account_id != self._keypair.public_key:
            raise SignerRejectedError("envelope source is not this keypair")
        envelope.sign(self._keypair)
        return envelope.to_xdr()
