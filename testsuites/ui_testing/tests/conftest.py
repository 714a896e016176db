"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module configures pytest for the live storefront scenarios, providing
fixtures for browser management, page contexts, page objects, and failure
evidence.

Key Features:
- One browser per session, one isolated context per test
- Extra tab (same context) and extra session (separate context) fixtures
- Page Object fixtures for all orchestrators
- Screenshot + request capture on failure
- Opt-in switch: scenarios are skipped unless `--run-e2e` / UI_RUN_E2E=true

================================================================================
"""

from typing import AsyncGenerator, Tuple

import pytest
import pytest_asyncio
from loguru import logger
from playwright.async_api import BrowserContext, Page

from testsuites.ui_testing.framework.browser_manager import BrowserManager
from testsuites.ui_testing.framework.config_loader import ConfigLoader
from testsuites.ui_testing.framework.diagnostics import RequestCapture, capture_failure
from testsuites.ui_testing.framework.page_context import PageContext
from testsuites.ui_testing.pages.cart_page import CartPage
from testsuites.ui_testing.pages.checkout_page import CheckoutPage
from testsuites.ui_testing.pages.favorites_page import FavoritesPage
from testsuites.ui_testing.pages.product_listing_page import ProductListingPage
from testsuites.ui_testing.pages.sign_in_page import SignInPage


# ================================================================================
# Collection
# ================================================================================

def pytest_collection_modifyitems(config, items):
    """Skip live scenarios unless explicitly enabled."""
    if ConfigLoader().get("ui.run_e2e", False):
        return

    skip_live = pytest.mark.skip(
        reason="live storefront scenarios disabled (use --run-e2e or UI_RUN_E2E=true)"
    )
    for item in items:
        if "ui_testing" in item.path.parts:
            item.add_marker(skip_live)


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest_asyncio.fixture(scope="session", loop_scope="session")
async def browser_manager() -> AsyncGenerator[BrowserManager, None]:
    """
    Session-scoped browser manager fixture.

    Provides a single browser for all tests in the session, reducing
    browser launch overhead.
    """
    async with BrowserManager() as manager:
        yield manager


@pytest_asyncio.fixture(loop_scope="session")
async def context(browser_manager: BrowserManager) -> AsyncGenerator[BrowserContext, None]:
    """
    Function-scoped browser context fixture.

    Creates a new browser context for each test, providing isolation of
    cookies and local/session storage.
    """
    context = await browser_manager.new_context()
    yield context
    await browser_manager.close_context(context)


@pytest_asyncio.fixture(loop_scope="session")
async def page(request, context: BrowserContext) -> AsyncGenerator[Page, None]:
    """
    Function-scoped page fixture.

    Attaches screenshot, URL and recent API calls to the report when the
    test body fails.
    """
    page = await context.new_page()
    capture = RequestCapture(page)
    yield page

    report = getattr(request.node, "rep_call", None)
    if report is not None and report.failed:
        await capture_failure(page, request.node.name, capture)
    await page.close()


@pytest.fixture
def page_context(page: Page) -> PageContext:
    return PageContext.for_page(page)


@pytest_asyncio.fixture(loop_scope="session")
async def second_tab(context: BrowserContext) -> AsyncGenerator[PageContext, None]:
    """Second tab in the same context: shares cookies and storage with `page`."""
    tab = await context.new_page()
    yield PageContext.for_page(tab)
    await tab.close()


@pytest_asyncio.fixture(loop_scope="session")
async def isolated_session(
    browser_manager: BrowserManager,
) -> AsyncGenerator[PageContext, None]:
    """Page in a separate context: shares nothing with `page`."""
    other_context = await browser_manager.new_context()
    other_page = await other_context.new_page()
    yield PageContext.for_page(other_page)
    await browser_manager.close_context(other_context)


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def sign_in_page(page_context: PageContext) -> SignInPage:
    return SignInPage(page_context)


@pytest.fixture
def listing_page(page_context: PageContext) -> ProductListingPage:
    return ProductListingPage(page_context)


@pytest.fixture
def cart_page(page_context: PageContext) -> CartPage:
    return CartPage(page_context)


@pytest.fixture
def checkout_page(page_context: PageContext) -> CheckoutPage:
    return CheckoutPage(page_context)


@pytest.fixture
def favorites_page(page_context: PageContext) -> FavoritesPage:
    return FavoritesPage(page_context)


@pytest.fixture
def second_tab_pages(second_tab: PageContext) -> Tuple[SignInPage, ProductListingPage, CartPage]:
    """Sign-in, listing and cart orchestrators bound to the second tab."""
    return SignInPage(second_tab), ProductListingPage(second_tab), CartPage(second_tab)


@pytest_asyncio.fixture(loop_scope="session")
async def storefront(listing_page: ProductListingPage) -> ProductListingPage:
    """Listing page opened on the storefront home."""
    await listing_page.nav.open()
    return listing_page


@pytest_asyncio.fixture(loop_scope="session")
async def clean_session(page: Page, sign_in_page: SignInPage) -> AsyncGenerator[None, None]:
    """
    Logs out, drops route handlers and clears storage after the test.

    Cleanup problems are logged; they never replace the test outcome.
    """
    yield
    try:
        await sign_in_page.logout()
        await page.unroute_all()
        await page.evaluate("() => { localStorage.clear(); sessionStorage.clear(); }")
    except Exception as e:
        logger.warning(f"Session cleanup incomplete: {str(e)[:120]}")


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Expose each phase's report on the item for fixture teardown."""
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)
