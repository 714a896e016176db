"""
================================================================================
Page Objects
================================================================================

Action orchestrators for the storefront.

Each page class encapsulates:
    - Declarative element locators (LOCATORS + SmartLocator)
    - User-level actions that settle before returning
    - Probe-based observations that never raise

Author: Automation Team
License: MIT
================================================================================
"""

from .cart_page import CartPage, CartSnapshot
from .checkout_page import CheckoutPage
from .favorites_page import FavoriteItemStructure, FavoritesPage
from .product_listing_page import Brand, ProductListingPage
from .sign_in_page import GUEST, SessionState, SignInPage

__all__ = [
    "CartPage",
    "CartSnapshot",
    "CheckoutPage",
    "FavoritesPage",
    "FavoriteItemStructure",
    "ProductListingPage",
    "Brand",
    "SignInPage",
    "SessionState",
    "GUEST",
]
