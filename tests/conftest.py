"""
Global test configuration and shared fakes for the ocean client.
"""

from collections.abc import Callable, Iterable, Mapping
import logging
import os

import pytest

from ocean_client.core.types import Response

NOW = 1_700_000_000.0


# --- Environment Isolation (Autouse) ---
@pytest.fixture(autouse=True)
def isolate_ocean_env(request, monkeypatch):
    """Ensure a clean OCEAN_* environment for each test.

    Escape hatch: @pytest.mark.allow_env_pollution keeps the current env.
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return
    for key in list(os.environ.keys()):
        if key.startswith("OCEAN_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("DEBUG", raising=False)


# --- Logging Fixtures ---
@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Sets the log level for noisy external libraries to WARNING."""
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


# --- Test Environment Markers ---
def pytest_configure(config):
    """Configure custom markers for test organization."""
    markers = [
        "unit: Fast, isolated unit tests",
        "integration: Component integration tests with mocked transports",
        "slow: Tests that take >1 second",
        "allow_env_pollution: Keep OCEAN_* variables from the real environment",
    ]
    for marker in markers:
        config.addinivalue_line("markers", marker)


# --- Fakes ---


class FakeClock:
    """Manually advanced Unix-epoch clock."""

    def __init__(self, start: float = NOW):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeSleep:
    """Async sleep that advances a FakeClock instead of blocking."""

    def __init__(self, clock: FakeClock):
        self.clock = clock
        self.calls: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.calls.append(delay)
        self.clock.advance(delay)


class ScriptedRequest:
    """PerformableRequest that replays a script of responses or exceptions."""

    def __init__(self, script: Iterable[Response | Exception]):
        self.script = list(script)
        self.credentials: list[str] = []

    @property
    def calls(self) -> int:
        return len(self.credentials)

    async def perform(self, credential: str) -> Response:
        self.credentials.append(credential)
        if not self.script:
            raise AssertionError("ScriptedRequest performed more times than scripted")
        item = self.script.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def ratelimit_headers(
    limit: int | str, remaining: int | str, reset: float | str
) -> dict[str, str]:
    """Build the three rate-limit headers the API sends on every response."""
    if isinstance(reset, float):
        reset = int(reset)
    return {
        "RateLimit-Limit": str(limit),
        "RateLimit-Remaining": str(remaining),
        "RateLimit-Reset": str(reset),
    }


# --- Core Fixtures ---


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_sleep(clock) -> FakeSleep:
    return FakeSleep(clock)


@pytest.fixture
def headers() -> Callable[..., dict[str, str]]:
    return ratelimit_headers


@pytest.fixture
def make_response(clock) -> Callable[..., Response]:
    """Build a Response whose reset is given relative to the fake clock."""

    def _make(
        status: int = 200,
        *,
        limit: int = 5000,
        remaining: int = 4999,
        reset_in: float = 60,
        body: object = None,
        extra_headers: Mapping[str, str] | None = None,
    ) -> Response:
        hdrs = ratelimit_headers(limit, remaining, clock.now + reset_in)
        if extra_headers:
            hdrs.update(extra_headers)
        return Response(status_code=status, headers=hdrs, body=body)

    return _make


@pytest.fixture
def scripted() -> Callable[..., ScriptedRequest]:
    def _make(*script: Response | Exception) -> ScriptedRequest:
        return ScriptedRequest(script)

    return _make


@pytest.fixture
def mock_api_key():
    """Provide a consistent, fake API key for tests."""
    return "dop_v1_test_key_12345_67890_abcdef"
