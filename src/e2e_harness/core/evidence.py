"""Failure evidence: screenshots and page source.

The sink is write-only and best-effort. A capture that fails is logged and
reported as ``None``; it never replaces the error that triggered it.
"""

import re
import time
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from playwright.sync_api import Error as PlaywrightError

from e2e_harness.core.logging import ErrorIds, logError, logEvent, logForDebugging

if TYPE_CHECKING:
    from e2e_harness.core.browser import BrowserSession

MAX_LABEL_LENGTH = 50


def sanitize_label(label: str) -> str:
    """Make ``label`` safe for a file name: ``[A-Za-z0-9._-]``, at most 50 chars."""
    cleaned = re.sub(r"[^A-Za-z0-9._-]+", "_", label.strip()).strip("_")
    return cleaned[:MAX_LABEL_LENGTH] or "evidence"


def _stamped(label: str, suffix: str) -> str:
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")[:-3]
    return f"{sanitize_label(label)}_{timestamp}{suffix}"


class EvidenceSink:
    """Writes evidence files into one directory."""

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)

    def capture_screenshot(
        self,
        session: "BrowserSession",
        label: str,
        full_page: bool = True,
    ) -> Path | None:
        """Save a PNG of the current page; returns its path or None on failure."""
        path = self.directory / "screenshots" / _stamped(label, ".png")
        try:
            session.screenshot(path, full_page=full_page)
        except (PlaywrightError, RuntimeError, OSError) as e:
            logError(
                ErrorIds.SCREENSHOT_CAPTURE_FAILED,
                f"Could not capture screenshot {label!r}",
                extra={"error": e},
            )
            return None
        logForDebugging(f"Screenshot saved: {path}", level="info")
        return path

    def capture_page_source(self, session: "BrowserSession", label: str) -> Path | None:
        """Save the current DOM as HTML; returns its path or None on failure."""
        path = self.directory / "page_source" / _stamped(label, ".html")
        try:
            html = session.page_source()
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(html, encoding="utf-8")
        except (PlaywrightError, RuntimeError, OSError) as e:
            logError(
                ErrorIds.PAGE_SOURCE_CAPTURE_FAILED,
                f"Could not capture page source {label!r}",
                extra={"error": e},
            )
            return None
        logForDebugging(f"Page source saved: {path}")
        return path

    def capture_failure(self, session: "BrowserSession", label: str) -> list[Path]:
        """Capture everything useful for a failed step; returns the files written."""
        written = [
            path
            for path in (
                self.capture_screenshot(session, f"FAILED_{label}"),
                self.capture_page_source(session, f"FAILED_{label}"),
            )
            if path is not None
        ]
        logEvent("evidence_captured", {"label": label, "files": len(written)})
        return written

    def cleanup(self, older_than_days: int = 7) -> int:
        """Delete evidence files older than ``older_than_days``; returns how many."""
        if not self.directory.is_dir():
            return 0

        cutoff = time.time() - older_than_days * 86400
        removed = 0
        for path in self.directory.rglob("*"):
            if not path.is_file() or path.stat().st_mtime >= cutoff:
                continue
            try:
                path.unlink()
                removed += 1
            except OSError as e:
                logForDebugging(f"Could not delete old evidence {path}: {e}", level="warning")

        if removed:
            logForDebugging(f"Removed {removed} old evidence file(s)", level="info")
        return removed
