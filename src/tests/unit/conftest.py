"""Fixtures for podbind unit tests.

FakeEngine is an in-memory stand-in for the engine's secrets endpoints,
served through httpx.MockTransport so the real request path is exercised.
"""

import json
import uuid
from collections.abc import AsyncIterator
from datetime import datetime, timezone
from urllib.parse import unquote

import httpx
import pytest

from podbind.config import ConnectionConfig
from podbind.connection import EngineClient
from podbind.secrets import SecretsAPI


def _error(status: int, cause: str, message: str) -> httpx.Response:
    return httpx.Response(
        status, json={"cause": cause, "message": message, "response": status}
    )


class FakeEngine:
    """Minimal secrets server keeping state in a dict."""

    def __init__(self, ids: list[str] | None = None) -> None:
        self.secrets: dict[str, dict] = {}
        self.payloads: dict[str, bytes] = {}
        self.requests: list[httpx.Request] = []
        self._ids = iter(ids or [])

    def _next_id(self) -> str:
        return next(self._ids, None) or uuid.uuid4().hex

    def _lookup(self, name_or_id: str) -> dict | None:
        for secret in self.secrets.values():
            if secret["ID"] == name_or_id or secret["Spec"]["Name"] == name_or_id:
                return secret
        return None

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        segments = [unquote(s) for s in request.url.raw_path.split(b"?")[0].decode().split("/")[1:]]
        method = request.method

        if segments[0] == "_ping" and method == "GET":
            return httpx.Response(200, text="OK")

        if segments[0] != "secrets":
            return httpx.Response(404, text="page not found")

        if segments == ["secrets", "json"] and method == "GET":
            return self._list(request)
        if segments == ["secrets", "create"] and method == "POST":
            return self._create(request)
        if len(segments) == 3 and segments[2] == "json" and method == "GET":
            return self._inspect(segments[1])
        if len(segments) == 2 and method == "DELETE":
            return self._remove(segments[1])
        return httpx.Response(405, text="method not allowed")

    def _list(self, request: httpx.Request) -> httpx.Response:
        filters = json.loads(request.url.params.get("filters", "{}"))
        names = filters.get("name")
        items = [
            s for s in self.secrets.values() if not names or s["Spec"]["Name"] in names
        ]
        return httpx.Response(200, json=items)

    def _inspect(self, name_or_id: str) -> httpx.Response:
        secret = self._lookup(name_or_id)
        if secret is None:
            return _error(404, "no such secret", f"{name_or_id}: no such secret")
        return httpx.Response(200, json=secret)

    def _create(self, request: httpx.Request) -> httpx.Response:
        name = request.url.params.get("name", "")
        if not name:
            return _error(400, "invalid argument", "secret name is required")
        if self._lookup(name) is not None:
            return _error(409, "secret name in use", f"{name}: secret name in use")
        secret_id = self._next_id()
        now = datetime(2024, 1, 1, tzinfo=timezone.utc).isoformat()
        self.secrets[secret_id] = {
            "ID": secret_id,
            "CreatedAt": now,
            "UpdatedAt": now,
            "Spec": {
                "Name": name,
                "Driver": {
                    "Name": request.url.params.get("driver", "file"),
                    "Options": json.loads(request.url.params.get("driveropts", "{}")),
                },
                "Labels": json.loads(request.url.params.get("labels", "{}")),
            },
        }
        self.payloads[secret_id] = request.content
        return httpx.Response(200, json={"ID": secret_id})

    def _remove(self, name_or_id: str) -> httpx.Response:
        secret = self._lookup(name_or_id)
        if secret is None:
            return _error(404, "no such secret", f"{name_or_id}: no such secret")
        del self.secrets[secret["ID"]]
        return httpx.Response(204)


@pytest.fixture
def fake_engine() -> FakeEngine:
    """Empty fake engine; the first created secret gets ID abc123."""
    return FakeEngine(ids=["abc123"])


@pytest.fixture
async def engine_client(fake_engine: FakeEngine) -> AsyncIterator[EngineClient]:
    """EngineClient wired to the fake engine."""
    config = ConnectionConfig(host="http://engine", upload_chunk_size=4)
    async with EngineClient(config, transport=httpx.MockTransport(fake_engine.handle)) as client:
        yield client


@pytest.fixture
def secrets_api(engine_client: EngineClient) -> SecretsAPI:
    """SecretsAPI backed by the fake engine."""
    return SecretsAPI(engine_client)
