"""
================================================================================
Sign-In Feature UI Tests (Async / Playwright)
================================================================================

Covers:
  - Sign-in with dropdown-selected credentials
  - Session state observation (Guest / LoggedIn)
  - Logout returning the session to Guest
  - Sign-in page elements and incomplete submissions

================================================================================
"""

import allure
import pytest

from testsuites.ui_testing.pages.product_listing_page import ProductListingPage
from testsuites.ui_testing.pages.sign_in_page import GUEST, SignInPage
from testsuites.ui_testing.test_data.credentials import (
    DEFAULT_PASSWORD,
    DEMO_USER,
    NO_IMAGE_CREDS,
)

pytestmark = [pytest.mark.asyncio(loop_scope="session"), pytest.mark.auth]


@allure.epic("UI Testing")
@allure.feature("Authentication")
@pytest.mark.usefixtures("storefront", "clean_session")
class TestSignIn:
    """Sign-in UI test suite (async)."""

    @allure.story("Happy Path")
    @allure.title("Sign in succeeds with a demo identity")
    @allure.severity(allure.severity_level.BLOCKER)
    @pytest.mark.P0
    @pytest.mark.smoke
    @pytest.mark.parametrize("credential", [NO_IMAGE_CREDS, DEMO_USER], ids=lambda c: c.username)
    async def test_sign_in_success(
        self,
        sign_in_page: SignInPage,
        listing_page: ProductListingPage,
        credential,
    ):
        """Signed-in header shows the username and a logout link."""
        with allure.step("Sign in"):
            assert await sign_in_page.sign_in_and_verify(credential.username, credential.password)

        with allure.step("Verify session and listing"):
            state = await sign_in_page.session_state()
            assert not state.is_guest
            assert state.username == credential.username
            assert await listing_page.get_product_count() > 0

    @allure.story("Logout")
    @allure.title("Logout returns the session to guest")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P0
    async def test_logout(self, sign_in_page: SignInPage):
        await sign_in_page.sign_in(DEMO_USER)
        assert await sign_in_page.is_user_logged_in()

        assert await sign_in_page.logout()

        assert await sign_in_page.session_state() == GUEST
        sign_in_link = sign_in_page.smart.get("sign_in_link").first
        assert (await sign_in_page.reader.is_visible(sign_in_link)).value

    @allure.story("Logout")
    @allure.title("Logout as guest is a no-op")
    @allure.severity(allure.severity_level.MINOR)
    @pytest.mark.P2
    async def test_logout_as_guest_is_noop(self, sign_in_page: SignInPage):
        assert await sign_in_page.logout() is False
        assert await sign_in_page.session_state() == GUEST

    @allure.story("Sign-In Page")
    @allure.title("Sign-in page shows both dropdowns and the Log In button")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P1
    async def test_sign_in_page_elements(self, sign_in_page: SignInPage):
        await sign_in_page.click_sign_in_button()
        await sign_in_page.wait_for_sign_in_page_to_load()

        assert await sign_in_page.is_sign_in_page_loaded()
        log_in = sign_in_page.smart.get("log_in_button").first
        assert (await sign_in_page.reader.is_visible(log_in)).value
        assert await sign_in_page.nav.get_page_title() == "StackDemo"

    @allure.story("Form Validation")
    @allure.title("Log In without a username keeps the sign-in page")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P1
    @pytest.mark.regression
    async def test_incomplete_sign_in_form(self, sign_in_page: SignInPage):
        await sign_in_page.navigate_to_sign_in_page()
        await sign_in_page.wait_for_sign_in_page_to_load()

        await sign_in_page.select_password(DEFAULT_PASSWORD)
        await sign_in_page.click_log_in_button()
        await sign_in_page.spinner.settle()

        assert await sign_in_page.is_sign_in_page_loaded()
        assert await sign_in_page.session_state() == GUEST
