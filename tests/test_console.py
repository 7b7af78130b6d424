"""Tests for cmdbuild.console."""

from __future__ import annotations

import io

from cmdbuild.console import CYAN, GREEN, MAGENTA, RED, RESET, YELLOW, Console, supports_color


class FakeTTY(io.StringIO):
    def isatty(self) -> bool:
        return True


class TestSupportsColor:
    def test_plain_stream(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        assert supports_color(io.StringIO()) is False

    def test_tty(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        assert supports_color(FakeTTY()) is True

    def test_no_color_env(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "1")
        assert supports_color(FakeTTY()) is False

    def test_closed_stream(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        stream = io.StringIO()
        stream.close()
        assert supports_color(stream) is False


class TestConsole:
    def test_plain_line(self):
        out = io.StringIO()
        Console(out, color=False).line("hello")
        assert out.getvalue() == "hello\n"

    def test_blank_line_never_colored(self):
        out = io.StringIO()
        Console(out, color=True).line("", RED)
        assert out.getvalue() == "\n"

    def test_colored_line(self):
        out = io.StringIO()
        Console(out, color=True).error("boom")
        assert out.getvalue() == f"{RED}boom{RESET}\n"

    def test_auto_color_follows_stream(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        assert Console(io.StringIO()).color is False
        assert Console(FakeTTY()).color is True

    def test_defaults_to_sys_stdout(self, capsys):
        Console(color=False).line("to stdout")
        assert capsys.readouterr().out == "to stdout\n"

    def test_command_with_breadcrumb(self):
        out = io.StringIO()
        Console(out, color=True).command("[build]", "go build ./...")
        assert out.getvalue() == f"{MAGENTA}[build] [cmd] go build ./...{RESET}\n"

    def test_command_without_breadcrumb(self):
        out = io.StringIO()
        Console(out, color=False).command("", "go vet")
        assert out.getvalue() == "[cmd] go vet\n"

    def test_info_warn_success(self):
        out = io.StringIO()
        console = Console(out, color=True)
        console.info("hi")
        console.warn("careful")
        console.success("done")
        assert out.getvalue().splitlines() == [
            f"{GREEN}[info] hi{RESET}",
            f"{YELLOW}[warn] careful{RESET}",
            f"{GREEN}done{RESET}",
        ]

    def test_breadcrumb(self):
        out = io.StringIO()
        Console(out, color=True).breadcrumb("[a | b]")
        assert out.getvalue() == f"{CYAN}[a | b]{RESET}\n"

    def test_targets_plain(self):
        out = io.StringIO()
        Console(out, color=False).targets(["build", "test"])
        assert out.getvalue() == "Available targets:\n    - build\n    - test\n"

    def test_targets_colored(self):
        out = io.StringIO()
        Console(out, color=True).targets(["build"])
        assert out.getvalue() == f"Available targets:\n    - {CYAN}build{RESET}\n"
