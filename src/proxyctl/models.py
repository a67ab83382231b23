"""Value types exchanged with the proxy."""

from dataclasses import dataclass, field, replace

from proxyctl.errors import UsageError

NamedValues = tuple[tuple[str, tuple[str, ...]], ...]


@dataclass(frozen=True)
class Address:
    """Host and port of the remote proxy."""

    host: str = "localhost"
    port: int = 1080

    def __post_init__(self):
        if not self.host:
            raise UsageError("Proxy host must not be empty")
        if not 0 < self.port < 65536:
            raise UsageError(f"Proxy port out of range: {self.port}")

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"


@dataclass(frozen=True)
class RequestPattern:
    """Shape of an HTTP request; empty fields match anything on the proxy side."""

    method: str = ""
    path: str = ""
    query_string: str = ""
    body: str = ""
    headers: NamedValues = ()
    cookies: NamedValues = ()

    def with_method(self, method: str) -> "RequestPattern":
        return replace(self, method=method.upper())

    def with_path(self, path: str) -> "RequestPattern":
        return replace(self, path=path)

    def with_query_string(self, query_string: str) -> "RequestPattern":
        return replace(self, query_string=query_string)

    def with_body(self, body: str) -> "RequestPattern":
        return replace(self, body=body)

    def with_header(self, name: str, *values: str) -> "RequestPattern":
        return replace(self, headers=self.headers + ((name, tuple(values)),))

    def with_cookie(self, name: str, *values: str) -> "RequestPattern":
        return replace(self, cookies=self.cookies + ((name, tuple(values)),))

    def is_empty(self) -> bool:
        return self == RequestPattern()


def request() -> RequestPattern:
    """Start a new request pattern, e.g. ``request().with_path("/login")``."""
    return RequestPattern()


@dataclass(frozen=True)
class Delay:
    """Artificial delay applied by the proxy before responding."""

    time_unit: str = "MILLISECONDS"
    value: int = 0


@dataclass(frozen=True)
class ResponseSpec:
    """Response half of a recorded expectation."""

    status_code: int = 200
    body: str = ""
    headers: NamedValues = ()
    cookies: NamedValues = ()
    delay: Delay | None = None


@dataclass(frozen=True)
class Times:
    """How many times a request must have been seen.

    ``exact`` means the count must match precisely; otherwise ``count`` is a
    lower bound.
    """

    count: int = 1
    exact: bool = False

    def __post_init__(self):
        if self.count < 0:
            raise UsageError(f"Occurrence count must be non-negative, got {self.count}")

    @classmethod
    def exactly(cls, count: int) -> "Times":
        return cls(count=count, exact=True)

    @classmethod
    def at_least(cls, count: int) -> "Times":
        return cls(count=count, exact=False)

    @classmethod
    def once(cls) -> "Times":
        return cls.exactly(1)

    @classmethod
    def never(cls) -> "Times":
        return cls.exactly(0)

    def matches(self, found: int) -> bool:
        """Return True if ``found`` occurrences satisfy this spec."""
        if self.exact:
            return found == self.count
        return found >= self.count

    def describe(self) -> str:
        noun = "time" if self.count == 1 else "times"
        if self.exact:
            return f"exactly {self.count} {noun}"
        return f"at least {self.count} {noun}"


DEFAULT_TIMES = Times.at_least(1)


@dataclass(frozen=True)
class RemainingTimes:
    """Remaining match budget the proxy reports for an expectation."""

    remaining_times: int = 0
    unlimited: bool = True


@dataclass(frozen=True)
class Expectation:
    """A recorded request/response pair as returned by ``/retrieve``."""

    http_request: RequestPattern = field(default_factory=RequestPattern)
    http_response: ResponseSpec | None = None
    times: RemainingTimes | None = None
