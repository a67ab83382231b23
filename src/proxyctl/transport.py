"""Blocking HTTP transport for the proxy's control endpoints."""

import logging
import time
from dataclasses import dataclass

import httpx

from proxyctl.errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


@dataclass
class TransportResponse:
    """Represents a control-plane response."""

    url: str
    status_code: int
    content: bytes
    response_time: float

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


class HTTPTransport:
    """Sends PUT requests to a proxy's control endpoints."""

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.Client | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        # A caller-supplied client stays open; its owner closes it.
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=timeout)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def send_put(
        self,
        path: str,
        body: str = "",
        params: dict[str, str] | None = None,
    ) -> TransportResponse:
        """PUT ``body`` to ``path`` and return the raw response.

        ``params`` are URL-encoded into the query string.

        Raises TransportError on connection failures and non-2xx statuses.
        """
        url = f"{self.base_url}{path}"
        start = time.monotonic()
        try:
            response = self.client.put(url, content=body.encode("utf-8"), params=params)
        except httpx.HTTPError as exc:
            logger.debug("PUT %s failed: %s", url, exc)
            raise TransportError(f"PUT {url} failed: {exc}") from exc
        elapsed = round(time.monotonic() - start, 4)

        logger.debug("PUT %s -> %d (%.4fs)", url, response.status_code, elapsed)
        if not response.is_success:
            raise TransportError(
                f"PUT {url} returned unexpected status {response.status_code}",
                status_code=response.status_code,
                body=response.content,
            )

        return TransportResponse(
            url=str(response.url),
            status_code=response.status_code,
            content=response.content,
            response_time=elapsed,
        )
