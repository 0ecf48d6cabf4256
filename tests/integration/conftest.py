"""Integration fixtures: a StashClient wired to an in-memory httpx transport."""

from unittest.mock import patch

import httpx
import pytest

from stash_api.client import StashClient
from stash_api.settings import Settings

from .fixtures import BASE_URL


class FakeStash:
    """Records requests and answers them with a handler or a fixed response list."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.handler = lambda request: httpx.Response(200, json={})

    def respond(self, *responses: httpx.Response):
        """Serve responses in order; the last one repeats."""
        queue = list(responses)

        def handler(request):
            resp = queue.pop(0) if len(queue) > 1 else queue[0]
            # fresh copy: the last response repeats across retries
            return httpx.Response(resp.status_code, headers=resp.headers, content=resp.content)

        self.handler = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


@pytest.fixture(autouse=True)
def _no_sleep():
    """Patch out time.sleep in the retry executor to avoid real waits."""
    with patch("stash_api.retry.time.sleep") as mock_sleep:
        yield mock_sleep


@pytest.fixture
def settings():
    return Settings(_env_file=None, stash_page_limit=25, stash_retry_attempts=3, stash_retry_interval=3.0)


@pytest.fixture
def stash():
    return FakeStash()


@pytest.fixture
def client(stash, settings):
    c = StashClient(BASE_URL, "u", "p", settings=settings, transport=httpx.MockTransport(stash))
    yield c
    c.close()


@pytest.fixture
def anonymous_client(stash, settings):
    c = StashClient(BASE_URL, "", "", settings=settings, transport=httpx.MockTransport(stash))
    yield c
    c.close()
