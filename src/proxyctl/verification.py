"""Verification of recorded request counts against an occurrence spec."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from proxyctl.codec import serialize_request
from proxyctl.errors import UsageError, VerificationError
from proxyctl.models import DEFAULT_TIMES, RequestPattern, Times

if TYPE_CHECKING:
    from proxyctl.client import ProxyClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerificationOutcome:
    """Result of one verification; ``message`` is empty when it passed."""

    passed: bool
    expected: Times
    found: int
    message: str = ""


def build_failure_message(serialized_pattern: str, all_records: str) -> str:
    """Compose the diagnostic for a failed verification."""
    if all_records:
        return f"Expected {serialized_pattern} but only found {all_records}"
    return f"Expected {serialized_pattern} but found no requests"


class Verifier:
    """Checks that a request pattern was recorded the expected number of times.

    Each check is one filtered ``/retrieve`` round trip. Only a failing check
    makes a second, unfiltered ``/retrieve`` to describe everything the proxy
    has recorded. Nothing is retried and nothing is cached between calls, so a
    concurrent writer can change the proxy state between the two round trips.
    """

    def __init__(self, client: ProxyClient):
        self.client = client

    def check(self, pattern: RequestPattern, times: Times | None = None) -> VerificationOutcome:
        """Run the verification and return its outcome without raising on failure."""
        if not isinstance(pattern, RequestPattern):
            raise UsageError("verify() requires a non-null RequestPattern")
        if times is None:
            times = DEFAULT_TIMES

        expectations = self.client.retrieve_as_expectations(pattern)
        found = len(expectations) if expectations is not None else 0

        # An absent result fails for every occurrence spec, including never().
        if expectations is not None and times.matches(found):
            logger.debug("Verified %s: found %d, expected %s", pattern, found, times.describe())
            return VerificationOutcome(passed=True, expected=times, found=found)

        all_records = self.client.retrieve_as_json(None)
        message = build_failure_message(serialize_request(pattern), all_records)
        logger.debug("Verification failed: found %d, expected %s", found, times.describe())
        return VerificationOutcome(passed=False, expected=times, found=found, message=message)

    def verify(self, pattern: RequestPattern, times: Times | None = None) -> None:
        """Raise VerificationError unless ``pattern`` was recorded ``times``."""
        outcome = self.check(pattern, times)
        if not outcome.passed:
            raise VerificationError(outcome)
