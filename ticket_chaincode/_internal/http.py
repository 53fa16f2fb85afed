"""Shared HTTP client configuration."""

import httpx

from ticket_chaincode._version import __version__

DEFAULT_TIMEOUT = 30.0


def create_http_client(
    *,
    timeout: float = DEFAULT_TIMEOUT,
    base_url: str | None = None,
    token: str | None = None,
) -> httpx.Client:
    """Create configured HTTP client.

    Args:
        timeout: Request timeout in seconds.
        base_url: Optional base URL for all requests.
        token: Optional bearer token sent on every request.

    Returns:
        Configured httpx.Client instance.
    """
    headers = {"User-Agent": f"ticket-chaincode/{__version__}"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return httpx.Client(
        timeout=timeout,
        base_url=base_url or "",
        headers=headers,
    )
