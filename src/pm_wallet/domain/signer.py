"""Signer Protocol — the wallet collaborator as seen by the client.

Any wallet (browser extension bridge, hardware device, local keypair) fits as
long as it can report an address and sign an envelope for a given network.
Implementations raise SignerError subclasses for rejection or absence.
"""

from typing import Protocol


class SignerProtocol(Protocol):
    name: str

    async def connect(self) -> None: ...

    async def disconnect(self) -> None: ...

    async def get_address(self) -> str: ...

    async def sign_envelope(self, envelope_xdr: str, network_passphrase: str) -> str: ...
