"""Shared fixtures: a fake Flattr backend served through httpx.MockTransport."""

import json
from types import SimpleNamespace

import httpx
import pytest

from flattr_auth import StrategyConfig

ALICE = {"username": "alice", "firstname": "Alice", "lastname": "Doe"}


def _fresh(response: httpx.Response) -> httpx.Response:
    # A Response object is bound to one request; hand out copies.
    return httpx.Response(response.status_code, headers=response.headers, content=response.content)


class FakeFlattr:
    """Records requests and answers the token and user endpoints."""

    def __init__(self):
        self.requests = []
        self.token_response = httpx.Response(
            200,
            json={"access_token": "access-123", "refresh_token": "refresh-456", "token_type": "bearer"},
        )
        self.profile_response = httpx.Response(200, text=json.dumps(ALICE))
        self.profile_error = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/oauth/token":
            return _fresh(self.token_response)
        if request.url.path == "/rest/v2/user":
            if self.profile_error is not None:
                raise self.profile_error
            return _fresh(self.profile_response)
        return httpx.Response(404)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def fake_flattr():
    return FakeFlattr()


@pytest.fixture
def config():
    return StrategyConfig(
        client_id="123-456-789",
        client_secret="shhh-its-a-secret",
        callback_url="https://www.example.net/auth/flattr/callback",
    )


def make_request(query=None, session=None):
    """Minimal stand-in for a Starlette request: query_params and session."""
    return SimpleNamespace(query_params=dict(query or {}), session=dict(session or {}))


@pytest.fixture(name="make_request")
def make_request_fixture():
    return make_request
