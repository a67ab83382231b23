"""Client for the proxy's control plane."""

import logging
from pathlib import Path

from proxyctl.codec import deserialize_expectations, serialize_request
from proxyctl.models import Address, Expectation, RequestPattern, Times
from proxyctl.transport import DEFAULT_TIMEOUT, HTTPTransport
from proxyctl.verification import VerificationOutcome, Verifier

logger = logging.getLogger(__name__)


class ProxyClient:
    """Controls and queries a recording proxy, for example::

        with ProxyClient("localhost", 1080) as proxy:
            proxy.reset()
            ...
            proxy.verify(request().with_path("/some_path"), Times.exactly(2))

    Mutating calls and ``verify`` return the client so they can be chained.
    Passing ``None`` as a pattern means "every recorded request".
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 1080,
        *,
        timeout: float | None = None,
        transport: HTTPTransport | None = None,
    ):
        self.address = Address(host, port)
        if timeout is None:
            timeout = DEFAULT_TIMEOUT
        self.transport = transport or HTTPTransport(self.address.base_url, timeout=timeout)
        self.verifier = Verifier(self)

    @classmethod
    def from_config(cls, project_dir: Path | None = None) -> "ProxyClient":
        """Build a client from environment, project .env and global config."""
        from proxyctl.config import get_host, get_port, get_timeout

        return cls(
            get_host(project_dir),
            get_port(project_dir),
            timeout=get_timeout(project_dir),
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self) -> str:
        return f"ProxyClient({self.address.base_url!r})"

    def close(self) -> None:
        self.transport.close()

    def dump_to_log_as_json(self, pattern: RequestPattern | None = None) -> "ProxyClient":
        """Ask the proxy to log matching (or all) expectations as JSON."""
        logger.info("Dumping %s expectations to proxy log as JSON", _scope(pattern))
        self.transport.send_put("/dumpToLog", serialize_request(pattern))
        return self

    def dump_to_log_as_code(
        self,
        pattern: RequestPattern | None = None,
        language: str = "java",
    ) -> "ProxyClient":
        """Ask the proxy to log matching (or all) expectations as source code."""
        logger.info("Dumping %s expectations to proxy log as %s", _scope(pattern), language)
        self.transport.send_put(
            "/dumpToLog", serialize_request(pattern), params={"type": language}
        )
        return self

    def reset(self) -> "ProxyClient":
        """Clear every recorded request."""
        logger.debug("Resetting proxy at %s", self.address.base_url)
        self.transport.send_put("/reset")
        return self

    def clear(self, pattern: RequestPattern | None) -> "ProxyClient":
        """Clear recorded requests matching ``pattern`` (all when None)."""
        logger.debug("Clearing %s recorded requests", _scope(pattern))
        self.transport.send_put("/clear", serialize_request(pattern))
        return self

    def retrieve_as_json(self, pattern: RequestPattern | None = None) -> str:
        """Return matching (or all) recorded expectations as the proxy's raw JSON."""
        return self.transport.send_put("/retrieve", serialize_request(pattern)).text

    def retrieve_as_expectations(
        self, pattern: RequestPattern | None = None
    ) -> list[Expectation] | None:
        """Return matching (or all) recorded expectations, decoded.

        None means the proxy answered ``null`` instead of a list.
        """
        response = self.transport.send_put("/retrieve", serialize_request(pattern))
        return deserialize_expectations(response.content)

    def verify(self, pattern: RequestPattern, times: Times | None = None) -> "ProxyClient":
        """Assert ``pattern`` was recorded ``times`` (default: at least once).

        Raises:
            UsageError: if ``pattern`` is None.
            VerificationError: if the recorded count does not satisfy ``times``.
        """
        self.verifier.verify(pattern, times)
        return self

    def check(self, pattern: RequestPattern, times: Times | None = None) -> VerificationOutcome:
        """Like :meth:`verify`, but return the outcome instead of raising."""
        return self.verifier.check(pattern, times)


def _scope(pattern: RequestPattern | None) -> str:
    return "all" if pattern is None else "matching"
