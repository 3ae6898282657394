from __future__ import annotations

import httpx
import pytest

from stoic_quotes import cli


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "setup_logging", lambda *a, **k: None)


def test_cli_prints_quote(upstream, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setenv("DEEPSEEK_API_KEY", "cli-key")
    rc = cli.main(["--theme", "courage", "--length", "short", "--philosopher", "Seneca"])
    assert rc == 0
    out = capsys.readouterr().out
    assert "The obstacle is the way.\n  - In the style of Seneca" in out
    assert "about courage." in upstream.calls[0]["json"]["messages"][1]["content"]


def test_cli_reports_failure(upstream, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DEEPSEEK_API_KEY", "cli-key")
    upstream.fail_with = httpx.ConnectError("offline")
    assert cli.main([]) == 1
