"""Tests for the e2e-harness command line."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from playwright.sync_api import Error as PlaywrightError

from e2e_harness.cli import build_parser, main
from e2e_harness.core.browser import NavigationError

REPO_CONFIG_DIR = Path(__file__).resolve().parents[1] / "config"


class TestParser:
    def test_command_required(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_unknown_suite(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["run", "--suite", "mobile"])


class TestConfigCommand:
    def test_valid_config(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--env", "ci", "--config-dir", str(REPO_CONFIG_DIR), "config"]) == 0
        out = capsys.readouterr().out
        assert "Configuration is valid." in out
        assert "https://www.demoblaze.com" in out

    def test_missing_environment(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--env", "staging", "--config-dir", str(tmp_path), "config"]) == 2
        assert "Configuration error" in capsys.readouterr().out


class TestRunCommand:
    def test_builds_pytest_arguments(self) -> None:
        with patch("e2e_harness.cli.pytest.main", return_value=0) as pytest_main:
            assert main(["run", "--suite", "api"]) == 0
        pytest_main.assert_called_once_with(["tests/e2e", "--run-e2e", "-m", "api"])

    def test_forwards_options_and_exit_code(self) -> None:
        with patch("e2e_harness.cli.pytest.main", return_value=1) as pytest_main:
            code = main(["--env", "ci", "run", "--headed", "--", "-k", "login"])
        assert code == 1
        assert pytest_main.call_args.args[0] == [
            "tests/e2e",
            "--run-e2e",
            "-m",
            "api or web",
            "--env",
            "ci",
            "--headed",
            "-k",
            "login",
        ]


class TestSmokeCommand:
    def run_smoke(self, home_page: MagicMock) -> int:
        with (
            patch("e2e_harness.cli.sync_playwright"),
            patch("e2e_harness.cli.open_session"),
            patch("e2e_harness.cli.HomePage", return_value=home_page),
        ):
            return main(["--env", "ci", "--config-dir", str(REPO_CONFIG_DIR), "smoke"])

    def test_ready(self, capsys: pytest.CaptureFixture[str]) -> None:
        home_page = MagicMock()
        home_page.product_names.return_value = ["Samsung galaxy s6", "Nokia lumia 1520"]
        assert self.run_smoke(home_page) == 0
        home_page.open.assert_called_once_with("https://www.demoblaze.com")
        assert "2 products listed" in capsys.readouterr().out

    def test_not_ready(self) -> None:
        home_page = MagicMock()
        home_page.open.side_effect = NavigationError(
            "https://www.demoblaze.com", 3, PlaywrightError("net::ERR_NAME_NOT_RESOLVED")
        )
        assert self.run_smoke(home_page) == 1
