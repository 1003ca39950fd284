"""Shared httpx client factory — used for Soroban RPC and friendbot calls."""

import httpx

from config.settings import settings

_http_client: httpx.AsyncClient | None = None


async def get_http_client() -> httpx.AsyncClient:
    """Get or create the shared async HTTP client."""
    global _http_client  # noqa: PLW0603
    if _http_client is None:
        _http_client = httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS)
    return _http_client


async def close_http_client() -> None:
    """Close the shared async HTTP client."""
    global _http_client  # noqa: PLW0603
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None
