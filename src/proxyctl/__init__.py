"""proxyctl - remote-control client for a recording mock/proxy server."""

from proxyctl.client import ProxyClient
from proxyctl.errors import (
    DecodeError,
    ProxyCtlError,
    TransportError,
    UsageError,
    VerificationError,
)
from proxyctl.models import (
    Address,
    Delay,
    Expectation,
    RemainingTimes,
    RequestPattern,
    ResponseSpec,
    Times,
    request,
)
from proxyctl.verification import VerificationOutcome, Verifier

__all__ = [
    "Address",
    "DecodeError",
    "Delay",
    "Expectation",
    "ProxyClient",
    "ProxyCtlError",
    "RemainingTimes",
    "RequestPattern",
    "ResponseSpec",
    "Times",
    "TransportError",
    "UsageError",
    "VerificationError",
    "VerificationOutcome",
    "Verifier",
    "app",
    "main",
    "request",
]


def __getattr__(name: str):
    if name in ("app", "main"):
        from proxyctl.cli import app, main

        return {"app": app, "main": main}[name]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
