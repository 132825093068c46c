from __future__ import annotations

import json

from gemini_proxy.cli import ask

from conftest import candidate


def test_ask_prints_response(fake_gemini, capsys) -> None:
    fake_gemini.respond(candidate("hello"))
    assert ask("hi", "gemini-proxy") == 0
    out = capsys.readouterr().out
    assert json.loads(out.strip().splitlines()[-1]) == {"success": True, "response": "hello"}


def test_ask_failure_exit_code(monkeypatch, capsys) -> None:
    monkeypatch.delenv("GEMINI_API_KEY")
    assert ask("hi", "gemini-proxy") == 1
    assert "API key missing" in capsys.readouterr().out


def test_ask_unknown_variant() -> None:
    assert ask("hi", "nope") == 2
