"""Tests for dits.launcher."""

from __future__ import annotations

import json
import signal
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from dits.errors import SpawnError
from dits.exit_codes import EXIT_SHIM_FAILURE
from dits.launcher import LaunchResult, launch

posix_only = pytest.mark.skipif(
    sys.platform == "win32", reason="POSIX process semantics"
)

PYTHON = Path(sys.executable)

PRINT_ARGS = "import json, sys; print(json.dumps(sys.argv[1:]))"


class TestLaunch:
    """Tests for launching a child process."""

    def test_arguments_passed_verbatim(self, capfd: pytest.CaptureFixture) -> None:
        result = launch(PYTHON, ["-c", PRINT_ARGS, "--flag", "value with spaces"])

        assert result == LaunchResult(exit_code=0)
        assert result.ok
        out = capfd.readouterr().out
        assert json.loads(out) == ["--flag", "value with spaces"]

    def test_shell_metacharacters_not_interpreted(
        self, capfd: pytest.CaptureFixture
    ) -> None:
        args = ["$HOME", "a;b", "`id`", "'quoted'", '"double"', "*"]
        result = launch(PYTHON, ["-c", PRINT_ARGS, *args])

        assert result.exit_code == 0
        assert json.loads(capfd.readouterr().out) == args

    def test_exit_code_propagated(self) -> None:
        result = launch(PYTHON, ["-c", "import sys; sys.exit(42)"])

        assert result.exit_code == 42
        assert result.signal is None
        assert result.error is None
        assert not result.ok

    def test_stderr_inherited(self, capfd: pytest.CaptureFixture) -> None:
        launch(PYTHON, ["-c", "import sys; sys.stderr.write('progress')"])
        assert "progress" in capfd.readouterr().err

    @posix_only
    def test_signal_termination(self) -> None:
        result = launch(
            PYTHON,
            ["-c", "import os, signal; os.kill(os.getpid(), signal.SIGTERM)"],
        )

        assert result.signal == signal.SIGTERM
        assert result.exit_code == EXIT_SHIM_FAILURE
        assert result.error is None

    def test_missing_binary(self, tmp_path: Path) -> None:
        missing = tmp_path / "dits"
        result = launch(missing, [])

        assert result.exit_code == EXIT_SHIM_FAILURE
        assert isinstance(result.error, SpawnError)
        assert result.error.binary_path == missing
        assert f"Could not find dits binary at {missing}" in str(result.error)

    @posix_only
    def test_permission_denied(self, tmp_path: Path) -> None:
        binary = tmp_path / "dits"
        binary.write_text("#!/bin/sh\nexit 0\n")
        binary.chmod(0o644)

        result = launch(binary, [])

        assert result.exit_code == EXIT_SHIM_FAILURE
        assert isinstance(result.error, SpawnError)
        message = str(result.error)
        assert "Permission denied" in message
        assert f"chmod +x {binary}" in message

    def test_other_os_error(self, tmp_path: Path) -> None:
        binary = tmp_path / "dits"
        with patch(
            "dits.launcher.subprocess.Popen",
            side_effect=OSError(8, "Exec format error"),
        ):
            result = launch(binary, ["status"])

        assert result.exit_code == EXIT_SHIM_FAILURE
        assert str(result.error) == "Error executing dits: Exec format error"

    def test_popen_called_without_shell(self, tmp_path: Path) -> None:
        binary = tmp_path / "dits"
        with patch("dits.launcher.subprocess.Popen") as mock_popen:
            mock_popen.return_value.wait.return_value = 0
            launch(binary, ["commit", "-m", "a message"])

        mock_popen.assert_called_once_with(
            [str(binary), "commit", "-m", "a message"], shell=False
        )
        mock_popen.return_value.wait.assert_called_once_with()

    def test_interrupt_keeps_waiting_for_child(self, tmp_path: Path) -> None:
        process = MagicMock()
        process.wait.side_effect = [KeyboardInterrupt, KeyboardInterrupt, 130]

        with patch("dits.launcher.subprocess.Popen", return_value=process):
            result = launch(tmp_path / "dits", [])

        assert result.exit_code == 130
        assert process.wait.call_count == 3
        process.kill.assert_not_called()
