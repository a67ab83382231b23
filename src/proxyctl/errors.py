"""Exception hierarchy for proxyctl."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from proxyctl.verification import VerificationOutcome


class ProxyCtlError(Exception):
    """Base class for every error raised by proxyctl."""


class UsageError(ProxyCtlError, ValueError):
    """A caller broke a precondition (null pattern, negative count, bad port)."""


class TransportError(ProxyCtlError):
    """The proxy could not be reached or answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None, body: bytes = b""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class DecodeError(ProxyCtlError, ValueError):
    """A response body could not be decoded into expectations."""


class VerificationError(ProxyCtlError, AssertionError):
    """A recorded request count did not satisfy the requested occurrence."""

    def __init__(self, outcome: VerificationOutcome):
        super().__init__(outcome.message)
        self.outcome = outcome
