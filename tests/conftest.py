"""Test configuration and fixtures for proxyctl."""

import tempfile
from collections.abc import Generator
from pathlib import Path

import httpx
import pytest
import respx

from proxyctl.client import ProxyClient
from proxyctl.codec import deserialize_request, expectation_to_dict
from proxyctl.config import DEFAULTS
from proxyctl.models import Expectation, RequestPattern, ResponseSpec

PROXY_HOST = "localhost"
PROXY_PORT = 1080
BASE_URL = f"http://{PROXY_HOST}:{PROXY_PORT}"


class FakeProxy:
    """In-memory stand-in for the remote proxy's control endpoints."""

    def __init__(self):
        self.records: list[Expectation] = []
        self.calls: list[tuple[str, str, dict[str, str]]] = []

    def record(
        self,
        method: str = "GET",
        path: str = "/",
        body: str = "",
        status_code: int = 200,
    ) -> Expectation:
        expectation = Expectation(
            http_request=RequestPattern(method=method, path=path, body=body),
            http_response=ResponseSpec(status_code=status_code),
        )
        self.records.append(expectation)
        return expectation

    @staticmethod
    def matches(pattern: RequestPattern | None, recorded: RequestPattern) -> bool:
        if pattern is None:
            return True
        if pattern.method and pattern.method.upper() != recorded.method.upper():
            return False
        for name in ("path", "query_string", "body"):
            wanted = getattr(pattern, name)
            if wanted and wanted != getattr(recorded, name):
                return False
        return all(header in recorded.headers for header in pattern.headers)

    def _select(self, pattern: RequestPattern | None) -> list[Expectation]:
        return [e for e in self.records if self.matches(pattern, e.http_request)]

    def handle(self, request: httpx.Request) -> httpx.Response:
        body = request.content.decode("utf-8")
        path = request.url.path
        self.calls.append((path, body, dict(request.url.params)))
        pattern = deserialize_request(body) if body else None

        if path == "/reset":
            self.records.clear()
            return httpx.Response(202)
        if path == "/clear":
            keep = [e for e in self.records if not self.matches(pattern, e.http_request)]
            self.records = keep
            return httpx.Response(202)
        if path == "/dumpToLog":
            return httpx.Response(202)
        if path == "/retrieve":
            selected = self._select(pattern)
            if not selected:
                return httpx.Response(200, text="")
            return httpx.Response(200, json=[expectation_to_dict(e) for e in selected])
        return httpx.Response(404)

    @property
    def paths(self) -> list[str]:
        return [path for path, _, _ in self.calls]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fake_proxy() -> Generator[FakeProxy, None, None]:
    """Route every PUT to the proxy address through a FakeProxy."""
    proxy = FakeProxy()
    with respx.mock(base_url=BASE_URL, assert_all_called=False) as router:
        router.route(method="PUT").mock(side_effect=proxy.handle)
        yield proxy


@pytest.fixture
def client() -> Generator[ProxyClient, None, None]:
    """Create a client pointed at the fake proxy address."""
    proxy_client = ProxyClient(PROXY_HOST, PROXY_PORT, timeout=5.0)
    yield proxy_client
    proxy_client.close()


@pytest.fixture
def isolated_config(monkeypatch: pytest.MonkeyPatch, temp_dir: Path) -> Path:
    """Point config lookups at an empty home and working directory."""
    home = temp_dir / "home"
    work = temp_dir / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    monkeypatch.chdir(work)
    for key in DEFAULTS:
        monkeypatch.delenv(key, raising=False)
    return work
