from __future__ import annotations

from typing import Any, Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from stoic_quotes.common.config import Settings
from stoic_quotes.serve import generation
from stoic_quotes.serve.dependencies import get_settings
from stoic_quotes.serve.fastapi_app import app


class _FakeResponse:
    def __init__(self, json_data: Any, status_code: int = 200) -> None:
        self._json = json_data
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            request = httpx.Request("POST", "https://upstream.test/chat/completions")
            response = httpx.Response(self.status_code, text="upstream unavailable", request=request)
            raise httpx.HTTPStatusError("upstream error", request=request, response=response)

    def json(self) -> Any:
        return self._json


class FakeUpstream:
    """Stands in for httpx.AsyncClient and records every chat-completion call."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.content: str | None = "  The obstacle is the way.  "
        self.status_code = 200
        self.fail_with: Exception | None = None
        self.fail_on_call: int | None = None

    def client(self, timeout: float | int | None = None) -> "_FakeAsyncClient":
        return _FakeAsyncClient(self, timeout)


class _FakeAsyncClient:
    def __init__(self, upstream: FakeUpstream, timeout: float | int | None) -> None:
        self.upstream = upstream
        self.timeout = timeout

    async def __aenter__(self) -> "_FakeAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        return None

    async def post(self, url: str, headers: dict[str, str] | None = None, json: dict[str, Any] | None = None) -> _FakeResponse:  # noqa: A002
        up = self.upstream
        up.calls.append({"url": url, "headers": headers, "json": json})
        if up.fail_with is not None and (up.fail_on_call is None or len(up.calls) == up.fail_on_call):
            raise up.fail_with
        data = {
            "choices": [
                {"message": {"role": "assistant", "content": up.content}, "index": 0}
            ],
            "usage": {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
        }
        return _FakeResponse(data, up.status_code)


@pytest.fixture
def upstream(monkeypatch: pytest.MonkeyPatch) -> FakeUpstream:
    fake = FakeUpstream()
    monkeypatch.setattr(generation.httpx, "AsyncClient", fake.client)
    return fake


@pytest.fixture
def settings() -> Settings:
    return Settings(
        api_key="test-key",
        base_url="https://upstream.test",
        batch_delay_s=0.0,
        template_path="configs/prompt_template.txt",
    )


@pytest.fixture
def client(settings: Settings) -> Iterator[TestClient]:
    app.dependency_overrides[get_settings] = lambda: settings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
