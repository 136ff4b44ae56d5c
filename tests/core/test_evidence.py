"""Tests for the evidence sink."""

import os
import time
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from playwright.sync_api import Error as PlaywrightError

from e2e_harness.core.evidence import EvidenceSink, sanitize_label


@pytest.fixture
def mock_session() -> MagicMock:
    """A BrowserSession double whose screenshot() really writes a file."""
    session = MagicMock()

    def mock_screenshot_impl(path: Path, full_page: bool = False) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"fake_png_data")
        return path

    session.screenshot = MagicMock(side_effect=mock_screenshot_impl)
    session.page_source.return_value = "<html><body>STORE</body></html>"
    return session


@pytest.fixture
def sink(tmp_path: Path) -> EvidenceSink:
    return EvidenceSink(tmp_path / "evidence")


class TestSanitizeLabel:
    def test_replaces_unsafe_characters(self) -> None:
        assert sanitize_label("Log in: wrong password / admin") == "Log_in_wrong_password_admin"

    def test_truncates(self) -> None:
        assert len(sanitize_label("x" * 200)) == 50

    def test_empty_fallback(self) -> None:
        assert sanitize_label("///") == "evidence"


class TestCapture:
    def test_screenshot(self, sink: EvidenceSink, mock_session: MagicMock) -> None:
        path = sink.capture_screenshot(mock_session, "home page")
        assert path is not None and path.exists()
        assert path.suffix == ".png"
        assert path.name.startswith("home_page_")
        assert path.parent.name == "screenshots"

    def test_page_source(self, sink: EvidenceSink, mock_session: MagicMock) -> None:
        path = sink.capture_page_source(mock_session, "cart")
        assert path is not None
        assert path.read_text(encoding="utf-8") == "<html><body>STORE</body></html>"

    def test_screenshot_failure_returns_none(self, sink: EvidenceSink, mock_session: MagicMock) -> None:
        mock_session.screenshot.side_effect = PlaywrightError("Target page, context or browser has been closed")
        assert sink.capture_screenshot(mock_session, "closed") is None

    def test_capture_failure_writes_both(self, sink: EvidenceSink, mock_session: MagicMock) -> None:
        paths = sink.capture_failure(mock_session, "Add a product_I add the product to the cart")
        assert len(paths) == 2
        assert all(path.name.startswith("FAILED_") for path in paths)

    def test_capture_failure_keeps_partial_evidence(self, sink: EvidenceSink, mock_session: MagicMock) -> None:
        mock_session.page_source.side_effect = RuntimeError("Browser session is not open")
        paths = sink.capture_failure(mock_session, "step")
        assert [path.suffix for path in paths] == [".png"]


class TestCleanup:
    def test_removes_only_old_files(self, sink: EvidenceSink, mock_session: MagicMock) -> None:
        old = sink.capture_screenshot(mock_session, "old")
        new = sink.capture_screenshot(mock_session, "new")
        assert old is not None and new is not None
        ten_days_ago = time.time() - 10 * 86400
        os.utime(old, (ten_days_ago, ten_days_ago))

        assert sink.cleanup(older_than_days=7) == 1
        assert not old.exists()
        assert new.exists()

    def test_missing_directory(self, tmp_path: Path) -> None:
        assert EvidenceSink(tmp_path / "missing").cleanup() == 0
