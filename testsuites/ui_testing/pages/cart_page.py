"""
================================================================================
Cart Page Object (Async / Playwright)
================================================================================

Cart orchestrator for the storefront's floating cart ("bag").

The bag badge shows the item quantity; the floating cart panel lists items and
the checkout button. The panel opens on its own after add-to-cart.

Every read here is an independent probe. A CartSnapshot therefore holds three
values observed at slightly different instants; `item_count` and `item_names`
may disagree while the cart is updating, and callers must tolerate that.

================================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import allure
from loguru import logger
from playwright.async_api import Locator

from testsuites.ui_testing.framework.capabilities import SpinnerAware
from testsuites.ui_testing.framework.page_context import PageContext
from testsuites.ui_testing.framework.settle import get_wait_config, poll_until
from testsuites.ui_testing.framework.smart_locator import SmartLocator

BADGE_PATTERN = re.compile(r"^\s*(\d+)\s*$")


@dataclass(frozen=True)
class CartSnapshot:
    """Cart state read through independent probes."""

    item_count: int
    item_names: List[str] = field(default_factory=list)
    is_empty: bool = True


class CartPage:
    """Floating cart page object (async)."""

    LOCATORS: Dict[str, Dict[str, str]] = {
        "cart_panel": {
            "primary": ".float-cart",
        },
        "cart_badge": {
            "primary": "span.bag__quantity",
        },
        "bag_icon": {
            "primary": "span.bag.bag--float-cart-closed",
        },
        "cart_items": {
            "primary": ".float-cart__content .float-cart__shelf-container .shelf-item",
        },
        "cart_item_names": {
            "primary": ".float-cart__shelf-container .shelf-item__details p.title",
        },
        "empty_cart_message": {
            "primary": "text=Add some products in the bag",
        },
        "close_button": {
            "primary": "div.float-cart__close-btn",
            "fallback_1": "text=\"X\"",
        },
        "checkout_button": {
            "primary": "div.buy-btn",
        },
    }

    def __init__(self, ctx: PageContext):
        self.ctx = ctx
        self.page = ctx.page
        self.reader = ctx.reader
        self.smart = SmartLocator(ctx.page, self.LOCATORS)
        self.spinner = SpinnerAware(ctx)

    # ============================================================
    # Elements
    # ============================================================

    @property
    def badge(self) -> Locator:
        return self.smart.get("cart_badge").first

    @property
    def close_button(self) -> Locator:
        return self.smart.get("close_button").first

    @property
    def checkout_button(self) -> Locator:
        return self.smart.get("checkout_button").first

    # ============================================================
    # Actions
    # ============================================================

    @allure.step("Open cart")
    async def open_cart(self) -> None:
        """Open the floating cart unless it is already open."""
        already_open = await self.reader.is_visible_now(
            self.close_button, description="cart close button"
        )
        if already_open.value:
            return
        await self.smart.get("bag_icon").first.click(timeout=self.ctx.timeouts.action)
        await self.spinner.settle()

    async def open_bag(self) -> None:
        await self.open_cart()

    @allure.step("Close cart")
    async def close_cart(self) -> None:
        """Best-effort close; the panel may already have closed on its own."""
        visible = await self.reader.is_visible(
            self.close_button, timeout=2000, description="cart close button"
        )
        if not visible.value:
            return
        try:
            await self.close_button.click(timeout=self.ctx.timeouts.action)
        except Exception as e:
            logger.warning(f"Could not close cart: {str(e)[:80]}")

    # ============================================================
    # Observations
    # ============================================================

    async def get_cart_item_count(self) -> int:
        """Quantity shown on the bag badge; 0 when absent or not a number."""
        probe = await self.reader.numeric_label(
            self.badge, BADGE_PATTERN, description="cart badge"
        )
        return probe.value

    async def get_cart_items_count(self) -> int:
        """Number of item rows in the open cart panel."""

        async def read() -> int:
            await self.open_cart()
            rows = await self.reader.count(self.smart.get("cart_items"), description="cart rows")
            await self.close_cart()
            return rows.value

        probe = await self.reader.probe(read, 0, "cart item rows", timeout=self.ctx.timeouts.action)
        return probe.value

    async def get_cart_item_names(self) -> List[str]:
        """Product names listed in the cart panel."""

        async def read() -> List[str]:
            await self.open_cart()
            names = await self.reader.texts(
                self.smart.get("cart_item_names"), description="cart item names"
            )
            await self.close_cart()
            return [name.strip() for name in names.value if name.strip()]

        probe = await self.reader.probe(read, [], "cart item names", timeout=self.ctx.timeouts.action)
        return probe.value

    async def is_cart_empty(self) -> bool:
        """
        Badge first; when it shows items, confirm with the panel's empty
        message.
        """
        if await self.get_cart_item_count() == 0:
            return True

        async def read() -> bool:
            await self.open_cart()
            empty = await self.reader.is_visible(
                self.smart.get("empty_cart_message").first,
                timeout=2000,
                description="empty cart message",
            )
            await self.close_cart()
            return empty.value

        probe = await self.reader.probe(read, False, "cart empty message", timeout=self.ctx.timeouts.action)
        return probe.value

    async def is_cart_indicator_visible(self) -> bool:
        panel = await self.reader.is_visible_now(
            self.smart.get("cart_panel").first, description="cart panel"
        )
        if panel.value:
            return True
        bag = await self.reader.is_visible_now(
            self.smart.get("bag_icon").first, description="bag icon"
        )
        return bag.value

    async def is_cart_indicator_showing_items(self) -> bool:
        return await self.get_cart_item_count() > 0

    # ============================================================
    # Waits
    # ============================================================

    async def wait_for_cart_to_load(self, timeout: int = 10000) -> None:
        """Raises when the cart never renders."""
        await self.smart.get("cart_panel").first.wait_for(state="visible", timeout=timeout)

    @allure.step("Wait for cart to update")
    async def wait_for_cart_content_to_update(self, previous_count: Optional[int] = None) -> bool:
        """
        Poll the bag badge until it differs from `previous_count`, then settle.

        Without `previous_count`, waits until the badge can be read at all.

        Returns:
            True when the change was observed before the poll timed out
        """

        async def badge_changed() -> bool:
            probe = await self.reader.numeric_label(
                self.badge, BADGE_PATTERN, timeout=500, description="cart badge"
            )
            if previous_count is None:
                return probe.observed
            return probe.observed and probe.value != previous_count

        changed = await poll_until(badge_changed, get_wait_config("cart_update"), "cart badge changed")
        await self.spinner.settle()
        return changed

    # ============================================================
    # Verification
    # ============================================================

    @allure.step("Verify '{product_name}' is in the cart")
    async def verify_product_added_to_cart(self, product_name: str) -> bool:
        if await self.get_cart_item_count() <= 0:
            logger.info("Cart badge shows no items")
            return False
        if not await self.is_cart_indicator_visible():
            logger.info("Cart indicator not visible")
            return False
        names = await self.get_cart_item_names()
        return product_name in names

    async def verify_mini_cart_opened(self) -> bool:
        return await self.is_cart_indicator_visible()

    @allure.step("Snapshot cart state")
    async def snapshot(self) -> CartSnapshot:
        count = await self.get_cart_item_count()
        names = await self.get_cart_item_names()
        empty = await self.is_cart_empty()
        snapshot = CartSnapshot(item_count=count, item_names=names, is_empty=empty)
        logger.debug(f"Cart snapshot: {snapshot}")
        return snapshot


__all__ = [
    "CartPage",
    "CartSnapshot",
    "BADGE_PATTERN",
]
