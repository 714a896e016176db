"""
================================================================================
Smart Locator
================================================================================

Declarative element lookup for page objects.

Each logical UI concept ("checkout_button", "heart_button") maps to a primary
selector plus optional fallbacks. Resolution combines all strategies into a
single Playwright locator with `Locator.or_`, so building a locator never waits
and never touches the DOM; waiting and reading belong to the StateReader and
the settle protocol.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from loguru import logger
from playwright.async_api import Locator, Page


class ElementNotFoundError(KeyError):
    """Raised when a page asks for an element name it never declared."""
    pass


def xpath_literal(value: str) -> str:
    """
    Quote `value` as an XPath string literal.

    Handles values containing single quotes, double quotes, or both.

    Examples:
        >>> xpath_literal("iPhone 12")
        "'iPhone 12'"
        >>> xpath_literal("Bob's phone")
        '"Bob\\'s phone"'
    """
    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'
    parts = value.split("'")
    return "concat(" + ", \"'\", ".join(f"'{p}'" for p in parts) + ")"


class SmartLocator:
    """
    Maps logical element names to Playwright locators.

    Locator definitions:
        {
            "checkout_button": {
                "primary": "div.buy-btn",
                "fallback_1": "text=Checkout",
            },
            "heart_button": {
                "primary": "xpath=//p[normalize-space()={product}]/ancestor::div[...]//button",
            },
        }

    Placeholders in braces are filled from keyword arguments to `get()`.

    Usage:
        >>> locators = SmartLocator(page, CartPage.LOCATORS)
        >>> await locators.get("checkout_button").click()
    """

    def __init__(
        self,
        page: Page,
        locators: Optional[Dict[str, Dict[str, str]]] = None,
    ):
        """
        Initialize SmartLocator.

        Args:
            page: Playwright Page object
            locators: Element name -> {strategy_name: selector}
        """
        self.page = page
        self._locators: Dict[str, Dict[str, str]] = dict(locators or {})

    def selectors(self, element_name: str, **params: Any) -> List[str]:
        """
        Resolved selectors for an element, primary first.

        Raises:
            ElementNotFoundError: When the element was never declared
        """
        strategies = self._locators.get(element_name)
        if not strategies:
            raise ElementNotFoundError(
                f"No locators defined for element: {element_name}"
            )
        try:
            return [selector.format(**params) for selector in strategies.values()]
        except KeyError as e:
            raise ElementNotFoundError(
                f"Missing parameter {e} for element: {element_name}"
            ) from e

    def get(self, element_name: str, **params: Any) -> Locator:
        """
        Build the locator for `element_name`.

        Args:
            element_name: Declared element name
            **params: Values for selector placeholders

        Returns:
            Locator matching the primary selector or any fallback
        """
        primary, *fallbacks = self.selectors(element_name, **params)
        locator = self.page.locator(primary)
        for selector in fallbacks:
            locator = locator.or_(self.page.locator(selector))
        return locator

    def register_locator(
        self,
        element_name: str,
        locators: Dict[str, str],
    ) -> None:
        """
        Register a locator at runtime for this instance only.

        Args:
            element_name: Unique name for the element
            locators: Dictionary of strategy -> selector
        """
        self._locators[element_name] = dict(locators)
        logger.debug(f"Registered new locator: {element_name}")

    def names(self) -> List[str]:
        """Declared element names."""
        return list(self._locators)


__all__ = [
    "SmartLocator",
    "ElementNotFoundError",
    "xpath_literal",
]
