"""Tests for the command-line entry points.

Verifies that the backup CLI:
- uses ``vacuum-table`` as program name and takes three positionals
- wraps the async pipeline via ``asyncio.run()``
- exits 0 on success and 1 with a single ``Error:`` line on failure
- exits 2 on usage errors

and that the verify CLI reports a backup's validity through its exit code.
"""

import ast
import inspect
import json
import logging
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from vacuum_table.backup.downloader import DownloadSummary
from vacuum_table.backup.models import Backup
from vacuum_table.backup.snapshot import save_backup
from vacuum_table.cli import cmd_backup, main
from vacuum_table.cli import verify
from vacuum_table.errors import ExtractionError, RemoteStatusError

CLI_INIT_PY = Path(__file__).parent.parent / "src" / "vacuum_table" / "cli" / "__init__.py"


@pytest.fixture(autouse=True)
def restore_root_logger():
    """``main()`` reconfigures the root logger; undo it after each test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


# ------------------------------------------------------------------
# Program name and arguments
# ------------------------------------------------------------------


class TestCLIArguments:
    """Verify argument parsing."""

    def test_prog_is_vacuum_table(self):
        tree = ast.parse(CLI_INIT_PY.read_text())
        progs = [
            kw.value.value
            for node in ast.walk(tree)
            if isinstance(node, ast.Call)
            for kw in node.keywords
            if kw.arg == "prog" and isinstance(kw.value, ast.Constant)
        ]
        assert progs == ["vacuum-table"]

    def test_missing_positionals(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["config.json"])
        assert exc_info.value.code == 2

    def test_unknown_option(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["--bogus", "a", "b", "c"])
        assert exc_info.value.code == 2

    def test_arguments_passed_through(self):
        mock = AsyncMock(return_value=DownloadSummary())
        with patch("vacuum_table.cli.backup_bases", mock):
            assert main(["c.json", "b.json", "dl"]) == 0
        mock.assert_awaited_once_with("c.json", "b.json", "dl")


# ------------------------------------------------------------------
# Async wrapping
# ------------------------------------------------------------------


class TestAsyncWrapping:
    """Verify cmd_backup wraps the pipeline via asyncio.run()."""

    def test_cmd_backup_calls_asyncio_run(self):
        source = inspect.getsource(cmd_backup)
        assert "asyncio.run" in source

    def test_cmd_backup_is_sync(self):
        assert not inspect.iscoroutinefunction(cmd_backup)


# ------------------------------------------------------------------
# Exit codes and error output
# ------------------------------------------------------------------


class TestBackupExitCodes:
    """Verify exit status and error reporting."""

    def test_success(self, capsys):
        summary = DownloadSummary(downloaded=2, already_present=3, bytes_downloaded=10)
        with patch("vacuum_table.cli.backup_bases", AsyncMock(return_value=summary)):
            code = main(["c.json", "b.json", "dl"])

        assert code == 0
        err = capsys.readouterr().err
        assert "Backup complete" in err
        assert "2 attachments downloaded" in err

    def test_quiet_success_prints_nothing(self, capsys):
        with patch("vacuum_table.cli.backup_bases", AsyncMock(return_value=DownloadSummary())):
            code = main(["--quiet", "c.json", "b.json", "dl"])

        assert code == 0
        assert capsys.readouterr().err == ""

    def test_extraction_error(self, capsys):
        error = ExtractionError(
            [
                RemoteStatusError("https://api.airtable.com/v0/a/t1", 500, "Internal Server Error"),
                RemoteStatusError("https://api.airtable.com/v0/b/t2", 503, "Service Unavailable"),
            ]
        )
        with patch("vacuum_table.cli.backup_bases", AsyncMock(side_effect=error)):
            code = main(["c.json", "b.json", "dl"])

        assert code == 1
        lines = [line for line in capsys.readouterr().err.splitlines() if line.strip()]
        assert len(lines) == 1
        assert lines[0].startswith("Error: 2 errors occurred")
        assert "503 'Service Unavailable'" in lines[0]

    def test_multiline_error_collapsed(self, capsys):
        error = ValueError("first line\n  second line\nthird")
        with patch("vacuum_table.cli.backup_bases", AsyncMock(side_effect=error)):
            code = main(["-q", "c.json", "b.json", "dl"])

        assert code == 1
        err = capsys.readouterr().err
        assert err.strip() == "Error: first line second line third"

    def test_os_error(self, capsys):
        error = FileNotFoundError("download directory does not exist: dl")
        with patch("vacuum_table.cli.backup_bases", AsyncMock(side_effect=error)):
            code = main(["c.json", "b.json", "dl"])

        assert code == 1
        assert "download directory does not exist" in capsys.readouterr().err

    def test_missing_config_file(self, tmp_path, capsys):
        code = main(
            [str(tmp_path / "nope.json"), str(tmp_path / "b.json"), str(tmp_path)]
        )

        assert code == 1
        assert "Backup config not found" in capsys.readouterr().err
        assert not (tmp_path / "b.json").exists()

    def test_logging_configured(self):
        with patch("vacuum_table.cli.backup_bases", AsyncMock(return_value=DownloadSummary())):
            main(["c.json", "b.json", "dl"])

        assert logging.getLogger().level == logging.INFO
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_quiet_logging_level(self):
        with patch("vacuum_table.cli.backup_bases", AsyncMock(return_value=DownloadSummary())):
            main(["-q", "c.json", "b.json", "dl"])

        assert logging.getLogger().level == logging.WARNING


# ------------------------------------------------------------------
# verify
# ------------------------------------------------------------------


class TestVerifyCLI:
    """Verify the offline verification entry point."""

    def _write_backup(self, tmp_path, size: int) -> Path:
        backup = Backup.model_validate(
            {
                "config": {"app-tables": {}},
                "tables": {},
                "attachments": [
                    {"link": "https://dl.airtable.com/.attachments/x", "id": "attABCDEFGHIJKLMN", "size": size}
                ],
            }
        )
        path = tmp_path / "backup.json"
        save_backup(backup, path)
        return path

    def test_valid_backup(self, tmp_path, capsys):
        backup_path = self._write_backup(tmp_path, 3)
        (tmp_path / "attABCDEFGHIJKLMN").write_bytes(b"abc")

        code = verify.main([str(backup_path), str(tmp_path)])

        assert code == 0
        assert "Backup is valid" in capsys.readouterr().out

    def test_invalid_backup(self, tmp_path, capsys):
        backup_path = self._write_backup(tmp_path, 3)

        code = verify.main([str(backup_path), str(tmp_path)])

        assert code == 1
        out = capsys.readouterr().out
        assert "Missing attachment attABCDEFGHIJKLMN" in out
        assert "Backup is invalid" in out

    def test_corrupt_backup_file(self, tmp_path, capsys):
        path = tmp_path / "backup.json"
        path.write_text(json.dumps({"config": "nope"}))

        assert verify.main([str(path), str(tmp_path)]) == 1

    def test_backup_path_is_a_directory(self, tmp_path, capsys):
        assert verify.main([str(tmp_path), str(tmp_path)]) == 1
        assert "Cannot read backup file" in capsys.readouterr().out

    def test_usage_error(self):
        with pytest.raises(SystemExit) as exc_info:
            verify.main([])
        assert exc_info.value.code == 2
