"""
================================================================================
Product Listing Page Object (Async / Playwright)
================================================================================

Listing orchestrator for the storefront home page.

Key Features:
- Brand filters with settle after every toggle
- Product count read from the "N Product(s) found." label
- Add-to-cart by index, by name, and rapid repeated clicks
- Product image source inspection

Products carry numeric ids starting at 1 (`<div class="shelf-item" id="1">`);
index 0 maps to id "1".

================================================================================
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Dict, List, Optional, Union

import allure
from loguru import logger
from playwright.async_api import Locator

from testsuites.ui_testing.framework.capabilities import Navigable, SpinnerAware
from testsuites.ui_testing.framework.page_context import PageContext
from testsuites.ui_testing.framework.settle import pause_millis
from testsuites.ui_testing.framework.smart_locator import SmartLocator, xpath_literal

PRODUCT_COUNT_PATTERN = re.compile(r"(\d+) Product\(s\) found\.")


class Brand(str, Enum):
    """Brand filters offered by the listing sidebar."""

    APPLE = "Apple"
    SAMSUNG = "Samsung"
    GOOGLE = "Google"
    ONEPLUS = "OnePlus"

    @property
    def keyword(self) -> str:
        """Marker that every product name of this brand contains."""
        return BRAND_KEYWORDS[self]


BRAND_KEYWORDS: Dict[Brand, str] = {
    Brand.APPLE: "iPhone",
    Brand.SAMSUNG: "Galaxy",
    Brand.GOOGLE: "Pixel",
    Brand.ONEPLUS: "One Plus",
}


class ProductListingPage:
    """Product listing page object (async)."""

    URL_PATH = "/"

    LOCATORS: Dict[str, Dict[str, str]] = {
        "brand_filter": {
            "primary": "label:has-text(\"{brand}\")",
        },
        "product_titles": {
            "primary": "p.shelf-item__title",
        },
        "product_count_label": {
            "primary": "small.products-found",
            "fallback_1": "text=/\\d+ Product\\(s\\) found\\./",
        },
        "product_title_by_id": {
            "primary": "[id=\"{product_id}\"] p.shelf-item__title",
        },
        "buy_button_by_id": {
            "primary": "[id=\"{product_id}\"] .shelf-item__buy-btn",
        },
        "buy_button_by_name": {
            "primary": (
                "xpath=//p[@class='shelf-item__title' and normalize-space()={name}]"
                "/ancestor::div[@class='shelf-item']//div[@class='shelf-item__buy-btn']"
            ),
        },
        "product_images": {
            "primary": "div.shelf-item img",
        },
        "mini_cart_close": {
            "primary": "div.float-cart__close-btn",
        },
    }

    def __init__(self, ctx: PageContext):
        self.ctx = ctx
        self.page = ctx.page
        self.reader = ctx.reader
        self.smart = SmartLocator(ctx.page, self.LOCATORS)
        self.spinner = SpinnerAware(ctx)
        self.nav = Navigable(ctx, self.URL_PATH)

    # ============================================================
    # Elements
    # ============================================================

    def brand_filter(self, brand: Union[Brand, str]) -> Locator:
        return self.smart.get("brand_filter", brand=Brand(brand).value).first

    def buy_button(self, index: int) -> Locator:
        """Add-to-cart control of the product at zero-based `index`."""
        return self.smart.get("buy_button_by_id", product_id=index + 1).first

    def buy_button_for(self, name: str) -> Locator:
        return self.smart.get("buy_button_by_name", name=xpath_literal(name)).first

    # ============================================================
    # Navigation
    # ============================================================

    @allure.step("Open product listing")
    async def open(self) -> None:
        await self.nav.open()
        await self.wait_for_products_to_load()

    async def wait_for_products_to_load(self, timeout: Optional[int] = None) -> None:
        """
        Wait until at least one product title is visible.

        Raises on timeout: every listing action depends on rendered products.
        """
        timeout = self.ctx.timeouts.action if timeout is None else timeout
        await self.smart.get("product_titles").first.wait_for(state="visible", timeout=timeout)

    # ============================================================
    # Filters
    # ============================================================

    @allure.step("Select brand filter '{brand}'")
    async def select_brand_filter(self, brand: Union[Brand, str]) -> None:
        await self.brand_filter(brand).check(timeout=self.ctx.timeouts.action)
        await self.spinner.settle()

    @allure.step("Clear all brand filters")
    async def clear_all_filters(self) -> None:
        for brand in Brand:
            await self.brand_filter(brand).uncheck(timeout=self.ctx.timeouts.action)
        await self.spinner.settle()

    # ============================================================
    # Product data
    # ============================================================

    async def get_all_product_names(self) -> List[str]:
        probe = await self.reader.texts(
            self.smart.get("product_titles"), description="product names"
        )
        return [name.strip() for name in probe.value]

    async def check_all_products_contain_keyword(self, keyword: str) -> bool:
        """
        True when every listed product name contains `keyword`
        (case-insensitive). An empty listing is False.
        """
        names = await self.get_all_product_names()
        if not names:
            return False
        needle = keyword.lower()
        return all(needle in name.lower() for name in names)

    async def get_product_count(self) -> int:
        """Count from the "N Product(s) found." label; 0 when unreadable."""
        probe = await self.reader.numeric_label(
            self.smart.get("product_count_label").first,
            PRODUCT_COUNT_PATTERN,
            description="products found label",
        )
        return probe.value

    async def get_first_product_name(self) -> str:
        probe = await self.reader.text(
            self.smart.get("product_title_by_id", product_id=1).first,
            description="first product name",
        )
        return probe.value.strip()

    async def is_add_to_cart_button_visible(self) -> bool:
        probe = await self.reader.is_visible_now(
            self.buy_button(0), description="first add-to-cart button"
        )
        return probe.value

    # ============================================================
    # Images
    # ============================================================

    async def get_all_product_image_sources(self) -> List[str]:
        """`src` of every product image; unreadable sources read as ""."""
        images = await self.reader.probe(
            self.smart.get("product_images").all, [], "product images", timeout=0
        )
        sources = []
        for image in images.value:
            src = await self.reader.attribute(image, "src", description="product image")
            sources.append(src.value or "")
        return sources

    async def validate_all_images_have_non_empty_source(self) -> bool:
        """True when at least one image exists and none has an empty `src`."""
        sources = await self.get_all_product_image_sources()
        if not sources:
            return False
        return all(src.strip() for src in sources)

    async def get_images_with_empty_source(self) -> int:
        sources = await self.get_all_product_image_sources()
        return sum(1 for src in sources if not src.strip())

    # ============================================================
    # Cart actions
    # ============================================================

    @allure.step("Add first product to cart")
    async def add_first_product_to_cart(self) -> None:
        await self.add_product_to_cart_by_index(0)

    @allure.step("Add product #{index} to cart")
    async def add_product_to_cart_by_index(self, index: int) -> None:
        await self.buy_button(index).click(timeout=self.ctx.timeouts.action)
        await self.spinner.settle()

    @allure.step("Add '{name}' to cart")
    async def add_product_to_cart_by_name(self, name: str) -> None:
        await self.buy_button_for(name).click(timeout=self.ctx.timeouts.action)
        await self.spinner.settle()

    @allure.step("Click add-to-cart {clicks} times rapidly")
    async def rapid_add_to_cart(
        self,
        index: int = 0,
        clicks: int = 5,
        interval_ms: int = 100,
    ) -> None:
        """
        Click one add-to-cart control repeatedly without settling in between.

        Settles once after the last click.
        """
        button = self.buy_button(index)
        for attempt in range(clicks):
            await button.click(timeout=self.ctx.timeouts.action)
            if attempt < clicks - 1:
                await pause_millis(
                    self.page,
                    interval_ms,
                    reason="click cadence under test; no UI signal between rapid clicks",
                )
        await self.spinner.settle()

    async def close_mini_cart_if_open(self) -> bool:
        """
        Best-effort close of the mini cart that opens after add-to-cart.

        Returns:
            True when the mini cart was closed by this call
        """
        close_button = self.smart.get("mini_cart_close").first
        visible = await self.reader.is_visible_now(close_button, description="mini cart close")
        if not visible.value:
            return False
        try:
            await close_button.click(timeout=self.ctx.timeouts.action)
        except Exception as e:
            logger.warning(f"Could not close mini cart: {str(e)[:80]}")
            return False
        await self.spinner.settle()
        return True


__all__ = [
    "ProductListingPage",
    "Brand",
    "BRAND_KEYWORDS",
    "PRODUCT_COUNT_PATTERN",
]
