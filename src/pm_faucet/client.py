"""Friendbot client — funds a testnet account with XLM.

One request per call, never retried; the caller decides what to tell the user.
"""

import logging

import httpx

from config.settings import settings
from src.pm_common.errors import FaucetError
from src.pm_common.http_client import get_http_client
from src.pm_contract.codec import validate_account_id

logger = logging.getLogger(__name__)


async def fund_account(
    address: str,
    client: httpx.AsyncClient | None = None,
    url: str | None = None,
) -> None:
    validate_account_id(address)
    client = client or await get_http_client()
    try:
        resp = await client.get(url or settings.FRIENDBOT_URL, params={"addr": address})
    except httpx.HTTPError as exc:
        raise FaucetError(str(exc)) from exc
    if resp.is_error:
        # Friendbot answers 400 for accounts it already funded
        raise FaucetError(f"HTTP {resp.status_code}: {resp.text[:200]}")
    logger.info("Friendbot funded %s", address)
