import asyncio
import json
import sys
from pathlib import Path

import httpx
import pytest
import pytest_asyncio


# Ensure project root is on sys.path so `services.*` imports work
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))


# Explicitly enable pytest-asyncio plugin for async tests/fixtures
pytest_plugins = ("pytest_asyncio",)


from services.user_api import UserApiClient
from services.user_controller import UserController

BASE_URL = "http://testserver/users"


class FakeUserEndpoint:
    """In-memory JSONPlaceholder-style /users resource served through httpx.MockTransport.

    Like the public service it echoes POST/PUT bodies and always hands out the
    same id for new records. Set `fail_with` to a status code to make every
    request fail, or `raise_error` to simulate a transport failure.
    `echo_extra` is merged into POST/PUT echoes. `hold(method)` keeps the
    response to the next such request back until the returned event is set.
    """

    def __init__(self, users=None):
        self.users = {u["id"]: dict(u) for u in (users or [])}
        self.requests = []
        self.fail_with = None
        self.raise_error = False
        self.created_id = 11
        self.echo_extra = {}
        self.arrived = {}
        self._held = {}

    def hold(self, method: str) -> asyncio.Event:
        release = asyncio.Event()
        self._held[method] = release
        self.arrived[method] = asyncio.Event()
        return release

    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        # the response is decided on arrival; only its delivery is held back
        response = self._respond(request)
        release = self._held.pop(request.method, None)
        if release is not None:
            self.arrived[request.method].set()
            await release.wait()
        return response

    def _respond(self, request: httpx.Request) -> httpx.Response:
        if self.raise_error:
            raise httpx.ConnectError("connection refused", request=request)
        if self.fail_with:
            return httpx.Response(self.fail_with, json={"detail": "forced failure"})

        parts = request.url.path.rstrip("/").split("/")
        user_id = int(parts[-1]) if parts[-1].isdigit() else None
        body = json.loads(request.content) if request.content else None

        if request.method == "GET" and user_id is None:
            return httpx.Response(200, json=list(self.users.values()))
        if request.method == "POST" and user_id is None:
            return httpx.Response(201, json={**body, "id": self.created_id, **self.echo_extra})
        if user_id not in self.users:
            return httpx.Response(404, json={})
        if request.method == "PUT":
            self.users[user_id] = {**body, "id": user_id}
            return httpx.Response(200, json={**self.users[user_id], **self.echo_extra})
        if request.method == "DELETE":
            del self.users[user_id]
            return httpx.Response(200, json={})
        return httpx.Response(405, json={})


def make_users(count: int):
    return [
        {
            "id": i,
            "name": f"User {i}",
            "email": f"user{i}@example.com",
            "phone": f"555-010{i}",
            "username": f"user{i}",
            "website": "example.com",
        }
        for i in range(1, count + 1)
    ]


SAMPLE_USERS = [
    {"id": 1, "name": "Ann", "email": "ann@example.com", "phone": "111", "username": "ann"},
    {"id": 2, "name": "Ben", "email": "ben@example.com", "phone": "222", "username": "ben"},
    {"id": 3, "name": "Joanna", "email": "jo@example.com", "phone": "333", "username": "jo"},
]


@pytest.fixture()
def endpoint():
    return FakeUserEndpoint(SAMPLE_USERS)


@pytest_asyncio.fixture()
async def api_client(endpoint):
    """UserApiClient wired to the in-memory endpoint."""
    client = UserApiClient(base_url=BASE_URL, transport=httpx.MockTransport(endpoint.handle))
    yield client
    await client.aclose()


@pytest_asyncio.fixture()
async def controller(api_client):
    """Controller with the collection already loaded."""
    ctrl = UserController(api_client, page_size=2, notice_timeout=0.05)
    await ctrl.load()
    yield ctrl
    ctrl.notices.close()


@pytest_asyncio.fixture()
async def make_controller():
    """Factory: controller over a fresh endpoint holding `count` generated users."""
    created = []

    async def _make(count: int, page_size: int = 10, **kwargs):
        fake = FakeUserEndpoint(make_users(count))
        client = UserApiClient(base_url=BASE_URL, transport=httpx.MockTransport(fake.handle))
        ctrl = UserController(client, page_size=page_size, notice_timeout=0.05, **kwargs)
        created.append(ctrl)
        await ctrl.load()
        return ctrl, fake

    yield _make
    for ctrl in created:
        await ctrl.aclose()
