"""
================================================================================
Page Context
================================================================================

Explicit per-page dependencies handed to every page object.

A PageContext bundles the Playwright page with its base URL, timeouts, and
StateReader. Two tabs or two sessions are two PageContext instances; nothing
is shared through module globals.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Optional

from playwright.async_api import Page

from .config_loader import ConfigLoader, ConfigurationError
from .state_reader import StateReader


@dataclass(frozen=True)
class Timeouts:
    """
    Timeouts in milliseconds.

    Attributes:
        visibility: Default wait for a probe that waits on visibility
        spinner: Settle wait for the loading indicator
        network_idle: Settle wait for network quiescence
        action: Timeout for clicks/fills that must succeed
        page_load: Navigation timeout
        probe_grace: Extra ceiling granted to every probe
    """
    visibility: int = 5000
    spinner: int = 10000
    network_idle: int = 10000
    action: int = 10000
    page_load: int = 15000
    probe_grace: int = 1000

    @classmethod
    def from_config(cls, config: Optional[ConfigLoader] = None) -> "Timeouts":
        """
        Build timeouts from the `timeouts.*` configuration keys.

        Raises:
            ConfigurationError: If a value is not a whole number of milliseconds
        """
        config = config or ConfigLoader()
        values = {}
        for name, default in asdict(cls()).items():
            value = config.get(f"timeouts.{name}", default)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(
                    f"timeouts.{name} must be an integer (ms), got {value!r}"
                )
            values[name] = value
        return cls(**values)


@dataclass
class PageContext:
    """Dependencies shared by the page objects driving one Playwright page."""

    page: Page
    base_url: str = "https://testathon.live"
    timeouts: Timeouts = field(default_factory=Timeouts)
    reader: Optional[StateReader] = None

    def __post_init__(self) -> None:
        self.base_url = self.base_url.rstrip("/")
        if self.reader is None:
            self.reader = StateReader(
                default_timeout_ms=self.timeouts.visibility,
                ceiling_grace_ms=self.timeouts.probe_grace,
            )

    @classmethod
    def for_page(
        cls,
        page: Page,
        config: Optional[ConfigLoader] = None,
    ) -> "PageContext":
        """Build a context for `page` from configuration."""
        config = config or ConfigLoader()
        return cls(
            page=page,
            base_url=config.get("ui.base_url", "https://testathon.live"),
            timeouts=Timeouts.from_config(config),
        )

    def url_for(self, path: str) -> str:
        """Absolute URL for an application path."""
        if path.startswith("http"):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"


__all__ = [
    "PageContext",
    "Timeouts",
]
