"""Tests for the command-line interface."""

from __future__ import annotations

import logging
from pathlib import Path

import httpx
import pytest

from llmterminal import cli
from llmterminal.adapter import MessageCompletionAdapter
from llmterminal.cli import main, parse_args, run_shell
from llmterminal.domain.models import HistoryLedger
from llmterminal.transport.httpx_transport import HttpxTransport


def _scripted(lines: list[str]):
    """read_line stand-in that replays lines, then signals EOF."""
    remaining = list(lines)

    def read_line(prompt: str) -> str:
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    return read_line


class TestParseArgs:
    def test_run_command(self) -> None:
        args = parse_args(["--adapter", "legacy", "run", "ls -la"])
        assert args.command == "run"
        assert args.line == "ls -la"
        assert args.adapter == "legacy"

    def test_shell_defaults(self) -> None:
        args = parse_args(["shell"])
        assert args.ps1 == "user@ubuntu:~$ "
        assert args.verbose is False


class TestRunShell:
    """Test the interactive loop that owns the ledger."""

    def test_records_each_completion(
        self, empty_ledger: HistoryLedger, fake_transport_factory
    ) -> None:
        transport = fake_transport_factory(payload={"content": [{"type": "text", "text": "/home/user"}]})
        adapter = MessageCompletionAdapter(empty_ledger, api_key="k", transport=transport)
        written: list[str] = []

        recorded = run_shell(
            adapter, empty_ledger, read_line=_scripted(["pwd", "", "pwd", "exit", "ls"]),
            write=written.append,
        )

        assert recorded == 2
        assert written == ["/home/user", "/home/user"]
        assert [e.input for e in empty_ledger] == ["pwd", "pwd"]
        assert transport.call_count == 2

    def test_failure_does_not_record(
        self, empty_ledger: HistoryLedger, fake_transport_factory
    ) -> None:
        transport = fake_transport_factory(payload={"content": []})
        adapter = MessageCompletionAdapter(empty_ledger, api_key="k", transport=transport)
        written: list[str] = []

        recorded = run_shell(adapter, empty_ledger, read_line=_scripted(["ls"]), write=written.append)

        assert recorded == 0
        assert len(empty_ledger) == 0
        assert written[0].startswith("llmterminal: No content blocks")

    def test_missing_key_keeps_looping(self, empty_ledger: HistoryLedger, fake_transport_factory) -> None:
        transport = fake_transport_factory()
        adapter = MessageCompletionAdapter(empty_ledger, api_key="", transport=transport)
        written: list[str] = []

        run_shell(adapter, empty_ledger, read_line=_scripted(["ls", "pwd"]), write=written.append)

        assert written[:2] == ["llmterminal: API key is missing"] * 2
        assert transport.call_count == 0


class TestMain:
    @pytest.fixture(autouse=True)
    def _reset_logging(self):
        """Drop handlers main() installs so they never outlive capsys."""
        yield
        logging.getLogger("llmterminal").handlers.clear()

    def test_prompt_subcommand_makes_no_request(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.chdir(tmp_path)
        exit_code = main(["-c", str(tmp_path / "missing.yaml"), "prompt", "pwd"])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert out.endswith("A:pwd\n\nQ:\n")

    def test_run_without_key_fails(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        monkeypatch.delenv("LLMTERMINAL_ANTHROPIC_API_KEY", raising=False)

        exit_code = main(["-c", str(tmp_path / "missing.yaml"), "run", "ls"])

        assert exit_code == 1
        assert "API key is missing" in capsys.readouterr().out

    def test_run_closes_http_client(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        created: list[httpx.Client] = []

        class MockedHttpxTransport(HttpxTransport):
            def _ensure_client(self) -> httpx.Client:
                if self._client is None:
                    self._client = httpx.Client(
                        transport=httpx.MockTransport(
                            lambda request: httpx.Response(
                                200, json={"content": [{"type": "text", "text": "root"}]}
                            )
                        )
                    )
                    created.append(self._client)
                return self._client

        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
        monkeypatch.delenv("LLMTERMINAL_ADAPTER", raising=False)
        monkeypatch.setattr(cli, "HttpxTransport", MockedHttpxTransport)

        exit_code = main(["-c", str(tmp_path / "missing.yaml"), "run", "whoami"])

        assert exit_code == 0
        assert capsys.readouterr().out == "root\n"
        assert len(created) == 1
        assert created[0].is_closed is True
