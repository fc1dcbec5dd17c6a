"""Shared pytest fixtures for the listening-to test suite."""

from __future__ import annotations

from typing import Callable
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from listening_to.interfaces.streaming_link_provider import (
    IDirectLinkProvider,
    IReferenceLinkProvider,
)
from listening_to.models.track import LinkSet, ProviderName

Handler = Callable[[httpx.Request], httpx.Response]


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: float = 1_000_000_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


def make_direct_provider(name: ProviderName, links: LinkSet | None = None) -> MagicMock:
    """Mock IDirectLinkProvider returning *links* from every lookup."""
    mock = MagicMock(spec=IDirectLinkProvider)
    mock.get_provider_name.return_value = name
    mock.lookup = AsyncMock(return_value=dict(links or {}))
    return mock


def make_reference_provider(
    name: ProviderName = ProviderName.ODESLI, links: LinkSet | None = None
) -> MagicMock:
    """Mock IReferenceLinkProvider returning *links* from every lookup."""
    mock = MagicMock(spec=IReferenceLinkProvider)
    mock.get_provider_name.return_value = name
    mock.lookup = AsyncMock(return_value=dict(links or {}))
    return mock


def make_client(handler: Handler) -> httpx.AsyncClient:
    """AsyncClient whose requests are answered by *handler* in-process."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class RecordingRouter:
    """MockTransport handler that routes by URL path and records requests.

    Unrouted paths answer 404, like a real server would.
    """

    def __init__(self, routes: dict[str, Handler] | None = None) -> None:
        self.routes: dict[str, Handler] = dict(routes or {})
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get(f"{request.url.host}{request.url.path}")
        if handler is None:
            return httpx.Response(404, json={"error": "not found"})
        return handler(request)

    def calls_to(self, host_and_path: str) -> list[httpx.Request]:
        return [r for r in self.requests if f"{r.url.host}{r.url.path}" == host_and_path]


@pytest.fixture
def router() -> RecordingRouter:
    return RecordingRouter()


@pytest.fixture
def direct_provider() -> Callable[..., MagicMock]:
    """Factory fixture: ``direct_provider(ProviderName.OPENWHYD, {...})``."""
    return make_direct_provider


@pytest.fixture
def reference_provider() -> Callable[..., MagicMock]:
    """Factory fixture: ``reference_provider(links={...})``."""
    return make_reference_provider


@pytest.fixture
def client_for() -> Callable[[Handler], httpx.AsyncClient]:
    """Factory fixture building a MockTransport-backed AsyncClient."""
    return make_client
