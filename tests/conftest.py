from __future__ import annotations

from typing import Any

import pytest

import gemini_proxy.upstream.gemini as gemini_mod


def candidate(text: str) -> dict[str, Any]:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


class FakeGemini:
    """Stands in for ``httpx.Client`` inside the upstream module."""

    def __init__(self) -> None:
        self.status_code = 200
        self.data: Any = candidate("Hello test")
        self.not_json = False
        self.exc: Exception | None = None
        self.calls: list[dict[str, Any]] = []
        self.timeouts: list[Any] = []

    def respond(self, data: Any, status_code: int = 200) -> None:
        self.data = data
        self.status_code = status_code

    def client_factory(self, timeout: Any = None) -> "_FakeClient":
        self.timeouts.append(timeout)
        return _FakeClient(self)


class _FakeResponse:
    def __init__(self, fake: FakeGemini) -> None:
        self.status_code = fake.status_code
        self._fake = fake

    def json(self) -> Any:
        if self._fake.not_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._fake.data


class _FakeClient:
    def __init__(self, fake: FakeGemini) -> None:
        self._fake = fake

    def __enter__(self) -> "_FakeClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        return None

    def post(self, url: str, params: dict[str, Any] | None = None, headers: dict[str, str] | None = None, json: Any = None) -> _FakeResponse:  # noqa: A002
        self._fake.calls.append({"url": url, "params": params, "headers": headers, "json": json})
        if self._fake.exc is not None:
            raise self._fake.exc
        return _FakeResponse(self._fake)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("GEMINI_MODEL_ID", "GEMINI_BASE_URL", "MAX_OUTPUT_TOKENS", "GEMINI_TIMEOUT", "GEMINI_PROXY_VARIANTS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")


@pytest.fixture
def fake_gemini(monkeypatch: pytest.MonkeyPatch) -> FakeGemini:
    fake = FakeGemini()
    monkeypatch.setattr(gemini_mod.httpx, "Client", fake.client_factory)
    return fake
