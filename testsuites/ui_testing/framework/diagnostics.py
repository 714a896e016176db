"""
================================================================================
Failure Diagnostics
================================================================================

Evidence collection for failed scenarios.

Features:
    - Rolling capture of recent API responses per page
    - Full-page screenshot on failure
    - Allure attachments (screenshot, URL, recent requests)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import allure
from loguru import logger
from playwright.async_api import Page, Response


# Default output directory for screenshots
SCREENSHOT_DIR = Path(__file__).parent.parent / "screenshots"


class RequestCapture:
    """
    Keeps the most recent API responses seen by a page.

    Usage:
        capture = RequestCapture(page)
        ...
        allure.attach(json.dumps(capture.recent()), ...)
    """

    def __init__(self, page: Page, url_marker: str = "/api/", limit: int = 20):
        self.url_marker = url_marker
        self.limit = limit
        self._captured: List[Dict[str, Any]] = []
        page.on("response", self._on_response)

    def _on_response(self, response: Response) -> None:
        if self.url_marker not in response.url:
            return
        self._captured.append({
            "timestamp": datetime.now().isoformat(),
            "url": response.url,
            "status": response.status,
        })
        if len(self._captured) > self.limit:
            self._captured.pop(0)

    def recent(self, count: int = 10) -> List[Dict[str, Any]]:
        return self._captured[-count:]


async def screenshot(
    page: Page,
    name: str,
    full_page: bool = True,
    directory: Optional[Path] = None,
) -> Path:
    """
    Save a screenshot and attach it to Allure.

    Returns:
        Path to saved screenshot
    """
    directory = directory or SCREENSHOT_DIR
    directory.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    filepath = directory / f"{name}_{timestamp}.png"

    data = await page.screenshot(path=str(filepath), full_page=full_page)
    allure.attach(data, name=name, attachment_type=allure.attachment_type.PNG)

    logger.debug(f"Screenshot saved: {filepath}")
    return filepath


async def capture_failure(
    page: Page,
    test_name: str,
    capture: Optional[RequestCapture] = None,
) -> None:
    """
    Attach screenshot, current URL and recent API requests for a failed test.

    Failures while collecting evidence are logged and never raised, so the
    original test failure stays the reported one.
    """
    with allure.step("Capture failure details"):
        try:
            await screenshot(page, f"failure_{test_name}")
        except Exception as e:
            logger.warning(f"Failed to capture screenshot for {test_name}: {e}")

        allure.attach(
            page.url,
            name="Current URL",
            attachment_type=allure.attachment_type.TEXT
        )

        if capture and capture.recent():
            allure.attach(
                json.dumps(capture.recent(), indent=2),
                name="Recent API Requests",
                attachment_type=allure.attachment_type.JSON
            )


__all__ = [
    "RequestCapture",
    "capture_failure",
    "screenshot",
    "SCREENSHOT_DIR",
]
