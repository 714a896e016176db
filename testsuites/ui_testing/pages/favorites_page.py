"""
================================================================================
Favorites Page Object (Async / Playwright)
================================================================================

Favorites orchestrator: heart buttons on product cards and the /favourites
page.

A heart button carries the `clicked` class when its product is favorited.
Favorite status is always read as a three-valued FavoriteState:

    FAVORITED      heart has `clicked`
    NOT_FAVORITED  heart readable, no `clicked`
    UNKNOWN        heart could not be read

`add_product_to_favorites` and `remove_product_from_favorites` click only on a
confirmed opposite state, so calling either twice is the same as calling it
once. UNKNOWN never triggers a click.

================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

import allure
from loguru import logger
from playwright.async_api import Locator

from testsuites.ui_testing.framework.capabilities import ErrorMessageAware, Navigable, SpinnerAware
from testsuites.ui_testing.framework.page_context import PageContext
from testsuites.ui_testing.framework.probe import FavoriteState, Probe
from testsuites.ui_testing.framework.settle import get_wait_config, poll_until
from testsuites.ui_testing.framework.smart_locator import SmartLocator, xpath_literal

FAVORITED_CLASS = "clicked"


@dataclass(frozen=True)
class FavoriteItemStructure:
    """Which parts of a favorite card are rendered."""

    has_title: bool
    has_price: bool
    has_image: bool

    @property
    def is_complete(self) -> bool:
        return self.has_title and self.has_price and self.has_image


class FavoritesPage:
    """Favorites page object (async)."""

    URL_PATH = "/favourites"

    LOCATORS: Dict[str, Dict[str, str]] = {
        "favorites_link": {
            "primary": "xpath=//a[@id='favourites' and @href='/favourites']",
            "fallback_1": "a#favourites",
        },
        "page_title": {
            "primary": "h1:text-matches('favou?rites|wishlist', 'i')",
            "fallback_1": ".page-title:text-matches('favou?rites|wishlist', 'i')",
        },
        "favorite_items": {
            "primary": "xpath=//div[@class='shelf-item']",
        },
        "products_found_label": {
            "primary": "xpath=//small[@class='products-found']",
        },
        "item_titles": {
            "primary": "xpath=//p[@class='shelf-item__title']",
        },
        "item_prices": {
            "primary": "xpath=//div[@class='val']",
        },
        "heart_button": {
            "primary": (
                "xpath=//p[@class='shelf-item__title' and normalize-space()={name}]"
                "/ancestor::div[@class='shelf-item']"
                "//button[contains(@class,'MuiIconButton-root')]"
            ),
        },
        "item_title": {
            "primary": ".shelf-item__title, h3, .product-name",
        },
        "item_price": {
            "primary": ".shelf-item__price, .product-price",
        },
        "item_image": {
            "primary": "div.shelf-item__thumb img",
        },
    }

    def __init__(self, ctx: PageContext):
        self.ctx = ctx
        self.page = ctx.page
        self.reader = ctx.reader
        self.smart = SmartLocator(ctx.page, self.LOCATORS)
        self.spinner = SpinnerAware(ctx)
        self.errors = ErrorMessageAware(ctx)
        self.nav = Navigable(ctx, self.URL_PATH)

    # ============================================================
    # Elements
    # ============================================================

    def heart_button(self, product_name: str) -> Locator:
        return self.smart.get("heart_button", name=xpath_literal(product_name)).first

    @property
    def products_found_label(self) -> Locator:
        return self.smart.get("products_found_label").first

    # ============================================================
    # Navigation
    # ============================================================

    @allure.step("Open favorites page")
    async def navigate_to_favorites_page(self) -> None:
        await self.nav.open()
        await self.nav.wait_for_page_load()

    @allure.step("Open favorites via header link")
    async def navigate_to_favorites_via_link(self) -> None:
        await self.smart.get("favorites_link").first.click(timeout=self.ctx.timeouts.action)
        await self.nav.wait_for_page_load()

    async def wait_for_favorites_page_to_load(self) -> bool:
        """Best-effort wait for the products-found label."""
        probe = await self.reader.is_visible(
            self.products_found_label,
            timeout=self.ctx.timeouts.page_load,
            description="favorites label",
        )
        return probe.value

    async def is_favorites_page_loaded(self) -> bool:
        if "favourites" in await self.nav.get_current_url():
            return True
        title = await self.reader.is_visible(
            self.smart.get("page_title").first, description="favorites title"
        )
        if title.value:
            return True
        items = await self.reader.is_visible(
            self.smart.get("favorite_items").first, description="favorite items"
        )
        return items.value

    # ============================================================
    # Favorite status
    # ============================================================

    async def get_heart_button_state(self, product_name: str) -> FavoriteState:
        """Three-valued favorite status of `product_name`'s heart button."""
        classes = await self.reader.attribute(
            self.heart_button(product_name),
            "class",
            description=f"heart button of '{product_name}'",
        )
        if not classes.observed:
            return FavoriteState.UNKNOWN
        favorited = FAVORITED_CLASS in (classes.value or "").split()
        return FavoriteState.from_probe(Probe.hit(favorited))

    async def _toggle_to(self, product_name: str, target: FavoriteState) -> FavoriteState:
        current = await self.get_heart_button_state(product_name)
        if current is target:
            logger.info(f"'{product_name}' already {target.value}, no click")
            return current
        if current is FavoriteState.UNKNOWN:
            logger.warning(f"Favorite state of '{product_name}' unknown, not clicking")
            return current

        await self.heart_button(product_name).click(timeout=self.ctx.timeouts.action)
        await self.spinner.settle()

        async def reached_target() -> bool:
            return await self.get_heart_button_state(product_name) is target

        await poll_until(reached_target, get_wait_config("fast"), f"'{product_name}' {target.value}")
        return await self.get_heart_button_state(product_name)

    @allure.step("Add '{product_name}' to favorites")
    async def add_product_to_favorites(self, product_name: str) -> FavoriteState:
        """
        Favorite a product if it is confirmed not favorited.

        Returns:
            Favorite state observed after the call
        """
        return await self._toggle_to(product_name, FavoriteState.FAVORITED)

    @allure.step("Remove '{product_name}' from favorites")
    async def remove_product_from_favorites(self, product_name: str) -> FavoriteState:
        """
        Un-favorite a product if it is confirmed favorited.

        Returns:
            Favorite state observed after the call
        """
        return await self._toggle_to(product_name, FavoriteState.NOT_FAVORITED)

    # ============================================================
    # Favorites list
    # ============================================================

    async def get_favorites_count_from_label(self) -> int:
        """Count from the "N Product(s) found." label; 0 when unreadable."""
        probe = await self.reader.numeric_label(
            self.products_found_label, description="favorites label"
        )
        return probe.value

    async def is_favorites_empty(self) -> bool:
        return await self.get_favorites_count_from_label() == 0

    async def get_favorite_items_count(self) -> int:
        probe = await self.reader.count(
            self.smart.get("favorite_items"), description="favorite cards"
        )
        return probe.value

    async def get_all_favorite_item_names(self) -> List[str]:
        probe = await self.reader.texts(
            self.smart.get("item_titles"), description="favorite names"
        )
        return [name.strip() for name in probe.value]

    async def get_all_favorite_item_prices(self) -> List[str]:
        probe = await self.reader.texts(
            self.smart.get("item_prices"), description="favorite prices"
        )
        return [price.strip() for price in probe.value]

    async def is_product_in_favorites(self, product_name: str) -> bool:
        """Case-insensitive substring match against listed favorite names."""
        needle = product_name.lower()
        return any(needle in name.lower() for name in await self.get_all_favorite_item_names())

    async def get_empty_favorites_message(self) -> str:
        probe = await self.reader.text(self.products_found_label, description="favorites label")
        return probe.value.strip()

    async def get_favorites_page_title(self) -> str:
        return await self.nav.get_page_title()

    async def validate_favorite_item_structure(self, index: int) -> FavoriteItemStructure:
        item = self.smart.get("favorite_items").nth(index)
        title = await self.reader.is_visible(
            item.locator(self.smart.selectors("item_title")[0]).first, description="card title"
        )
        price = await self.reader.is_visible(
            item.locator(self.smart.selectors("item_price")[0]).first, description="card price"
        )
        image = await self.reader.is_visible(
            item.locator(self.smart.selectors("item_image")[0]).first, description="card image"
        )
        return FavoriteItemStructure(
            has_title=title.value,
            has_price=price.value,
            has_image=image.value,
        )


__all__ = [
    "FavoritesPage",
    "FavoriteItemStructure",
    "FAVORITED_CLASS",
]
