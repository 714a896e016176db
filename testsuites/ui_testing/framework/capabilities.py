"""
================================================================================
Page Capabilities
================================================================================

Small, composable behaviours shared by page objects.

Provides:
    - SpinnerAware: loading indicator + settle after mutating actions
    - ErrorMessageAware: probe-based error/success banner reads
    - Navigable: navigation, reload, URL and title access

Page objects hold the capabilities they need as attributes instead of
inheriting all of them from a common base class:

    class CartPage:
        def __init__(self, ctx: PageContext):
            self.spinner = SpinnerAware(ctx)
            self.nav = Navigable(ctx, "/")

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure
from loguru import logger
from playwright.async_api import Locator

from .page_context import PageContext
from .settle import SPINNER_SELECTOR, wait_for_network_idle, wait_for_spinner_hidden


class SpinnerAware:
    """Knows the loading indicator and how to settle after an action."""

    def __init__(self, ctx: PageContext, selector: str = SPINNER_SELECTOR):
        self.ctx = ctx
        self.selector = selector

    @property
    def spinner(self) -> Locator:
        return self.ctx.page.locator(self.selector)

    async def wait_for_spinner_to_hide(self, timeout: Optional[int] = None) -> bool:
        """Best-effort spinner wait; False when the spinner outlived the timeout."""
        timeout = self.ctx.timeouts.spinner if timeout is None else timeout
        return await wait_for_spinner_hidden(self.ctx.page, self.selector, timeout)

    async def settle(self, network_idle: bool = False) -> bool:
        """
        Settle window after a mutating action.

        Args:
            network_idle: Also wait for network quiescence

        Returns:
            True when every requested wait completed
        """
        settled = await self.wait_for_spinner_to_hide()
        if network_idle:
            settled = await wait_for_network_idle(
                self.ctx.page, self.ctx.timeouts.network_idle
            ) and settled
        return settled


class ErrorMessageAware:
    """Reads error and success banners without raising."""

    ERROR_SELECTOR = ".error-message, .alert-error, [role='alert']"
    SUCCESS_SELECTOR = ".success-message, .alert-success"

    def __init__(self, ctx: PageContext):
        self.ctx = ctx

    @property
    def error_message(self) -> Locator:
        return self.ctx.page.locator(self.ERROR_SELECTOR).first

    @property
    def success_message(self) -> Locator:
        return self.ctx.page.locator(self.SUCCESS_SELECTOR).first

    async def has_error_message(self) -> bool:
        probe = await self.ctx.reader.is_visible(
            self.error_message, description="error message"
        )
        return probe.value

    async def get_error_message_text(self) -> str:
        if not await self.has_error_message():
            return ""
        return (await self.ctx.reader.text(self.error_message)).value.strip()

    async def has_success_message(self) -> bool:
        probe = await self.ctx.reader.is_visible(
            self.success_message, description="success message"
        )
        return probe.value

    async def get_success_message_text(self) -> str:
        if not await self.has_success_message():
            return ""
        return (await self.ctx.reader.text(self.success_message)).value.strip()


class Navigable:
    """Navigation helpers bound to one application path."""

    def __init__(self, ctx: PageContext, path: str = "/"):
        self.ctx = ctx
        self.path = path

    @property
    def url(self) -> str:
        return self.ctx.url_for(self.path)

    async def open(self, wait_for: str = "load") -> None:
        """Navigate to this capability's path."""
        await self.navigate_to(self.path, wait_for=wait_for)

    async def navigate_to(self, path: str, wait_for: str = "load") -> None:
        """
        Navigate to an application path.

        Args:
            path: Path relative to the base URL, or an absolute URL
            wait_for: Wait condition - 'load', 'domcontentloaded', 'networkidle'
        """
        url = self.ctx.url_for(path)
        with allure.step(f"Navigate to {path}"):
            await self.ctx.page.goto(url, wait_until=wait_for, timeout=self.ctx.timeouts.page_load)
            logger.debug(f"Navigated to: {url}")

    async def wait_for_page_load(self, timeout: Optional[int] = None) -> bool:
        """Best-effort wait for network quiescence."""
        timeout = self.ctx.timeouts.network_idle if timeout is None else timeout
        return await wait_for_network_idle(self.ctx.page, timeout)

    async def refresh_page(self) -> None:
        with allure.step("Reload page"):
            await self.ctx.page.reload(timeout=self.ctx.timeouts.page_load)
            await self.wait_for_page_load()

    async def go_back(self) -> None:
        with allure.step("Browser back"):
            await self.ctx.page.go_back(timeout=self.ctx.timeouts.page_load)
            await self.wait_for_page_load()

    async def get_current_url(self) -> str:
        return self.ctx.page.url

    async def get_page_title(self) -> str:
        probe = await self.ctx.reader.probe(self.ctx.page.title, "", "document title", timeout=0)
        return probe.value


__all__ = [
    "SpinnerAware",
    "ErrorMessageAware",
    "Navigable",
]
