"""Shared fixtures: an in-memory Kyivstar gateway and a controllable clock."""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any, Optional
from unittest.mock import patch

import httpx
import pytest

from kyivstar_adwisor.oauth import KYIVSTAR_TOKEN_URL


class FakeGateway:
    """Records requests and answers token and resource calls."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.expires_in = 3600
        self.issued = 0

        self.token_status = 200
        self.token_body: Any = None  # None issues a fresh token
        self.token_exception: Optional[Exception] = None

        self.api_status = 200
        self.api_body: Any = {"reqId": "req-1", "msgId": "msg-1", "reservedSmsSegments": 1}
        self.api_exception: Optional[Exception] = None

    @property
    def token_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if str(r.url) == KYIVSTAR_TOKEN_URL]

    @property
    def api_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if str(r.url) != KYIVSTAR_TOKEN_URL]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        await asyncio.sleep(0)

        if str(request.url) == KYIVSTAR_TOKEN_URL:
            if self.token_exception is not None:
                raise self.token_exception
            body = self.token_body
            if body is None:
                self.issued += 1
                body = {
                    "access_token": f"token-{self.issued}",
                    "token_type": "Bearer",
                    "expires_in": self.expires_in,
                }
            return self._respond(self.token_status, body)

        if self.api_exception is not None:
            raise self.api_exception
        return self._respond(self.api_status, self.api_body)

    @staticmethod
    def _respond(status: int, body: Any) -> httpx.Response:
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)


class FakeClock:
    """Replacement for ``kyivstar_adwisor.oauth._utcnow``."""

    def __init__(self) -> None:
        self.now = datetime(2025, 1, 15, 10, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
async def http_client(gateway: FakeGateway):
    """httpx client routed to the fake gateway."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(gateway.handler)) as client:
        yield client


@pytest.fixture
def clock():
    fake = FakeClock()
    with patch("kyivstar_adwisor.oauth._utcnow", new=fake):
        yield fake
