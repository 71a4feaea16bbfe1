"""CLI: startup checks, UI launch, sarufi bots."""

import json
import logging
from logging.handlers import RotatingFileHandler

import click
import pytest
from click.testing import CliRunner

from conftest import ECHO, GPT, FakeGateway
from sarufi_chat.cli import main as cli_main
from sarufi_chat.errors import AuthError, StartupConfigError
from sarufi_chat.gateway import SarufiGateway
from sarufi_chat.ui import app as ui_app


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def launched(monkeypatch):
    calls = []

    def fake_run(gateway):
        calls.append(gateway)
        return calls_return.pop(0) if calls_return else 0

    calls_return: list = []
    monkeypatch.setattr(ui_app, "run", fake_run)
    return calls, calls_return


class TestStartup:
    def test_missing_api_key_exits_before_ui(self, runner, launched, monkeypatch):
        monkeypatch.delenv("SARUFI_API_KEY", raising=False)
        calls, _ = launched
        result = runner.invoke(cli_main.main, [])
        assert result.exit_code == 1
        assert "SARUFI_API_KEY not found, kindly add the key to your environment" in result.output
        assert calls == []

    def test_empty_api_key_exits_before_ui(self, runner, launched):
        calls, _ = launched
        result = runner.invoke(cli_main.main, [], env={"SARUFI_API_KEY": ""})
        assert result.exit_code == 1
        assert "SARUFI_API_KEY not found" in result.output
        assert calls == []

    def test_get_gateway_raises_startup_config_error(self):
        with click.Context(cli_main.main, obj={"api_key": ""}):
            with pytest.raises(StartupConfigError) as exc:
                cli_main._get_gateway()
        assert exc.value.code == "startup_config"
        assert "SARUFI_API_KEY not found" in str(exc.value)

    def test_get_gateway_uses_configured_key(self):
        with click.Context(cli_main.main, obj={"api_key": "secret", "base_url": "https://sarufi.example"}):
            gateway = cli_main._get_gateway()
        assert isinstance(gateway, SarufiGateway)
        assert gateway.http._auth_headers()["Authorization"] == "Bearer secret"
        assert gateway.http._client.base_url.host == "sarufi.example"

    def test_launches_ui_with_configured_gateway(self, runner, launched):
        calls, _ = launched
        result = runner.invoke(
            cli_main.main, ["--base-url", "https://sarufi.example", "--timeout", "5"],
            env={"SARUFI_API_KEY": "secret"},
        )
        assert result.exit_code == 0, result.output
        assert len(calls) == 1
        gateway = calls[0]
        assert isinstance(gateway, SarufiGateway)
        assert gateway.http._client.base_url.host == "sarufi.example"

    def test_ui_crash_reports_and_exits(self, runner, launched):
        _, calls_return = launched
        calls_return.append(1)
        result = runner.invoke(cli_main.main, [], env={"SARUFI_API_KEY": "secret"})
        assert result.exit_code == 1
        assert "OOOOPs, something went wrong" in result.output

    def test_log_file_installs_rotating_handler(self, runner, launched, tmp_path):
        log_file = tmp_path / "sarufi.log"
        result = runner.invoke(
            cli_main.main, ["--log-file", str(log_file), "--log-level", "debug"],
            env={"SARUFI_API_KEY": "secret"},
        )
        assert result.exit_code == 0, result.output
        logger = logging.getLogger("sarufi_chat")
        assert any(isinstance(h, RotatingFileHandler) for h in logger.handlers)
        assert logger.level == logging.DEBUG
        for h in logger.handlers:
            h.close()
        logger.handlers.clear()


class TestBotsCommand:
    def test_json_listing(self, runner, monkeypatch):
        gateway = FakeGateway(bots=[ECHO, GPT])
        monkeypatch.setattr(cli_main, "_get_gateway", lambda: gateway)
        result = runner.invoke(cli_main.main, ["bots", "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output[result.output.index("["):])
        assert [b["name"] for b in data] == ["Echo", "Helper"]
        assert gateway.closed

    def test_table_listing(self, runner, monkeypatch):
        monkeypatch.setattr(cli_main, "_get_gateway", lambda: FakeGateway(bots=[ECHO]))
        result = runner.invoke(cli_main.main, ["bots"])
        assert result.exit_code == 0, result.output
        assert "Echo" in result.output
        assert "Repeats you" in result.output

    def test_gateway_error_exits_nonzero(self, runner, monkeypatch):
        gateway = FakeGateway(auth_error=AuthError("HTTP 401: Invalid token"))
        monkeypatch.setattr(cli_main, "_get_gateway", lambda: gateway)
        result = runner.invoke(cli_main.main, ["bots"])
        assert result.exit_code == 1
        assert "HTTP 401: Invalid token" in result.output

    def test_missing_api_key_exits_nonzero(self, runner, monkeypatch):
        monkeypatch.delenv("SARUFI_API_KEY", raising=False)
        result = runner.invoke(cli_main.main, ["bots"])
        assert result.exit_code == 1
        assert "SARUFI_API_KEY not found" in result.output
