"""Integration tests for the linegreet CLI."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from linegreet.cli import main


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run each test from an isolated working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _set_stdin(monkeypatch: pytest.MonkeyPatch, text: str) -> io.StringIO:
    stream = io.StringIO(text)
    monkeypatch.setattr("sys.stdin", stream)
    return stream


@pytest.mark.integration
class TestLineGreetCli:
    """End-to-end runs of the echo-then-greet sequence."""

    def test_echoes_file_then_greets(
        self,
        workdir: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        (workdir / "input.txt").write_text("line one\nline two\n", encoding="utf-8")
        _set_stdin(monkeypatch, "alice\n")

        result = main([])

        assert result == 0
        captured = capsys.readouterr()
        assert captured.out == "line one\nline two\nEnter name: Hello ALICE\n"
        assert captured.err == ""

    def test_empty_file_then_greets(
        self,
        workdir: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        (workdir / "input.txt").write_text("", encoding="utf-8")
        _set_stdin(monkeypatch, "\n")

        result = main([])

        assert result == 0
        assert capsys.readouterr().out == "Enter name: Hello \n"

    def test_missing_file_reported_without_traceback(
        self,
        workdir: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        _set_stdin(monkeypatch, "alice\n")

        result = main([])

        assert result == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "not found" in captured.err
        assert "input.txt" in captured.err
        assert "Traceback" not in captured.err

    def test_skip_missing_continues_to_greeter(
        self,
        workdir: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        _set_stdin(monkeypatch, "alice\n")

        result = main(["--skip-missing"])

        assert result == 0
        captured = capsys.readouterr()
        assert captured.out == "Enter name: Hello ALICE\n"
        assert "warning" in captured.err
        assert "not found" in captured.err

    def test_end_of_input_reported(
        self,
        workdir: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        (workdir / "input.txt").write_text("only\n", encoding="utf-8")
        _set_stdin(monkeypatch, "")

        result = main([])

        assert result == 1
        captured = capsys.readouterr()
        assert captured.out == "only\nEnter name: "
        assert "No input provided" in captured.err

    def test_undecodable_stdin_reported(
        self,
        workdir: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        (workdir / "input.txt").write_text("only\n", encoding="utf-8")
        stdin = io.TextIOWrapper(io.BytesIO(b"\xff\n"), encoding="utf-8")
        monkeypatch.setattr("sys.stdin", stdin)

        result = main([])

        assert result == 1
        captured = capsys.readouterr()
        assert captured.out == "only\nEnter name: "
        assert "Cannot read input" in captured.err
        assert "Traceback" not in captured.err

    def test_stdin_not_closed(
        self,
        workdir: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        (workdir / "input.txt").write_text("x\n", encoding="utf-8")
        stdin = _set_stdin(monkeypatch, "zoe\n")

        assert main([]) == 0
        assert not stdin.closed

    def test_source_option(
        self,
        workdir: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        other = workdir / "names.txt"
        other.write_text("from option\n", encoding="utf-8")
        _set_stdin(monkeypatch, "bob\n")

        result = main(["--source", str(other)])

        assert result == 0
        assert capsys.readouterr().out == "from option\nEnter name: Hello BOB\n"

    def test_source_env_var(
        self,
        workdir: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        (workdir / "env.txt").write_text("from env\n", encoding="utf-8")
        monkeypatch.setenv("LINEGREET_SOURCE", "env.txt")
        _set_stdin(monkeypatch, "eve\n")

        assert main([]) == 0
        assert capsys.readouterr().out == "from env\nEnter name: Hello EVE\n"

    def test_config_file_in_cwd(
        self,
        workdir: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        (workdir / "data").mkdir()
        (workdir / "data" / "greet.txt").write_text("configured\n", encoding="utf-8")
        (workdir / "linegreet.toml").write_text(
            '[linegreet]\nsource = "data/greet.txt"\nprompt = "Who? "\ngreeting_prefix = "Hi "\n',
            encoding="utf-8",
        )
        _set_stdin(monkeypatch, "kim\n")

        assert main([]) == 0
        assert capsys.readouterr().out == "configured\nWho? Hi KIM\n"

    def test_missing_explicit_config(
        self,
        workdir: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        _set_stdin(monkeypatch, "alice\n")

        result = main(["--config", str(workdir / "absent.toml")])

        assert result == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Config not found" in captured.err

    def test_invalid_config_value(
        self,
        workdir: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        (workdir / "linegreet.toml").write_text(
            '[linegreet]\non_missing_source = "retry"\n', encoding="utf-8"
        )
        _set_stdin(monkeypatch, "alice\n")

        assert main([]) == 1
        assert "on_missing_source" in capsys.readouterr().err

    def test_undecodable_file_reported(
        self,
        workdir: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        (workdir / "input.txt").write_bytes(b"\xff\xfe\xfd\n")
        _set_stdin(monkeypatch, "alice\n")

        assert main([]) == 1
        assert "Cannot read source file" in capsys.readouterr().err

    def test_verbose_logs_to_stderr_only(
        self,
        workdir: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        (workdir / "input.txt").write_text("a\n", encoding="utf-8")
        _set_stdin(monkeypatch, "alice\n")

        assert main(["--verbose"]) == 0
        captured = capsys.readouterr()
        assert captured.out == "a\nEnter name: Hello ALICE\n"
        assert "source_opened" in captured.err
        assert "source_closed" in captured.err

    def test_version_flag(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main(["--version"])

        assert excinfo.value.code == 0
        assert "linegreet" in capsys.readouterr().out
