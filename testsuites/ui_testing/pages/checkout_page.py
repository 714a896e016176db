"""
================================================================================
Checkout Page Object (Async / Playwright)
================================================================================

Checkout orchestrator: add a named product, open the mini cart, fill the
shipping form, submit, and work with the confirmation page.

Key Features:
- Add-to-cart by exact product title
- Mini cart open that is a no-op when already open
- Shipping form fill + submit (submit failures propagate)
- Bounded poll for the confirmation URL
- Confirmation PDF download

================================================================================
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

import allure
from loguru import logger
from playwright.async_api import Locator

from testsuites.ui_testing.framework.capabilities import Navigable, SpinnerAware
from testsuites.ui_testing.framework.page_context import PageContext
from testsuites.ui_testing.framework.settle import get_wait_config, poll_until
from testsuites.ui_testing.framework.smart_locator import SmartLocator, xpath_literal

CONFIRMATION_PATH = "/confirmation"


class CheckoutPage:
    """Checkout page object (async)."""

    URL_PATH = "/checkout"

    LOCATORS: Dict[str, Dict[str, str]] = {
        "add_button_by_name": {
            "primary": (
                "xpath=//p[@class='shelf-item__title' and normalize-space()={name}]"
                "/ancestor::div[@class='shelf-item']"
                "//div[@class='shelf-item__buy-btn' and normalize-space()='Add to cart']"
            ),
        },
        "mini_cart_icon": {
            "primary": "xpath=//span[@class='bag bag--float-cart-closed']",
        },
        "mini_cart_close": {
            "primary": "xpath=//div[@class='float-cart__close-btn']",
        },
        "checkout_button": {
            "primary": "xpath=//div[@class='buy-btn']",
        },
        "first_name": {
            "primary": "#firstNameInput",
        },
        "last_name": {
            "primary": "#lastNameInput",
        },
        "address": {
            "primary": "#addressLine1Input",
        },
        "province": {
            "primary": "#provinceInput",
        },
        "post_code": {
            "primary": "#postCodeInput",
        },
        "submit_button": {
            "primary": "#checkout-shipping-continue",
        },
        "confirmation_message": {
            "primary": "#confirmation-message",
        },
        "download_pdf": {
            "primary": "#downloadpdf",
        },
    }

    def __init__(self, ctx: PageContext):
        self.ctx = ctx
        self.page = ctx.page
        self.reader = ctx.reader
        self.smart = SmartLocator(ctx.page, self.LOCATORS)
        self.spinner = SpinnerAware(ctx)
        self.nav = Navigable(ctx, self.URL_PATH)

    def add_button(self, product_name: str) -> Locator:
        return self.smart.get("add_button_by_name", name=xpath_literal(product_name)).first

    # ============================================================
    # Cart
    # ============================================================

    @allure.step("Add '{product_name}' to cart")
    async def add_product_to_cart(self, product_name: str) -> None:
        await self.add_button(product_name).click(timeout=self.ctx.timeouts.action)
        await self.spinner.settle()

    @allure.step("Open mini cart")
    async def click_mini_cart_button(self) -> None:
        """Open the mini cart; no-op when its close button is already shown."""
        already_open = await self.reader.is_visible_now(
            self.smart.get("mini_cart_close").first, description="mini cart close"
        )
        if already_open.value:
            logger.debug("Mini cart already open")
            return
        await self.smart.get("mini_cart_icon").first.click(timeout=self.ctx.timeouts.action)
        await self.spinner.settle()

    async def add_product_to_cart_and_open_mini_cart(self, product_name: str) -> None:
        await self.add_product_to_cart(product_name)
        await self.click_mini_cart_button()

    @allure.step("Click checkout")
    async def click_checkout_button(self) -> None:
        await self.smart.get("checkout_button").first.click(timeout=self.ctx.timeouts.action)
        await self.spinner.settle()

    # ============================================================
    # Shipping form
    # ============================================================

    @allure.step("Fill checkout form for {first_name} {last_name}")
    async def fill_checkout_form(
        self,
        first_name: str,
        last_name: str,
        address: str,
        province: str,
        post_code: str,
    ) -> None:
        fields = {
            "first_name": first_name,
            "last_name": last_name,
            "address": address,
            "province": province,
            "post_code": post_code,
        }
        for name, value in fields.items():
            await self.smart.get(name).fill(value, timeout=self.ctx.timeouts.action)

    @allure.step("Submit checkout form")
    async def submit_form(self) -> None:
        """Submit shipping details. Failures propagate to the scenario."""
        await self.smart.get("submit_button").click(timeout=self.ctx.timeouts.action)
        await self.spinner.settle()

    # ============================================================
    # Confirmation
    # ============================================================

    async def is_order_confirmed(self) -> bool:
        """True once the browser reaches the confirmation page."""

        async def on_confirmation_page() -> bool:
            return CONFIRMATION_PATH in self.page.url

        return await poll_until(
            on_confirmation_page, get_wait_config("navigation"), "confirmation page"
        )

    async def get_confirmation_message(self) -> str:
        probe = await self.reader.text(
            self.smart.get("confirmation_message"), description="confirmation message"
        )
        return probe.value.strip()

    @allure.step("Download confirmation PDF")
    async def download_confirmation_pdf(self, target_dir: Path) -> Optional[Path]:
        """
        Click the confirmation download link and save the file.

        Returns:
            Saved file path, or None when the link is not shown
        """
        link = self.smart.get("download_pdf")
        visible = await self.reader.is_visible(link, description="download pdf link")
        if not visible.value:
            logger.warning("Confirmation PDF link not visible")
            return None

        async with self.page.expect_download(timeout=self.ctx.timeouts.action) as download_info:
            await link.click(timeout=self.ctx.timeouts.action)
        download = await download_info.value

        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / download.suggested_filename
        await download.save_as(path)
        logger.info(f"Confirmation PDF saved: {path}")
        return path


__all__ = [
    "CheckoutPage",
    "CONFIRMATION_PATH",
]
