"""
================================================================================
Sign-In Page Object (Async / Playwright)
================================================================================

Sign-in orchestrator for the storefront.

The storefront has no free-text login form: username and password are picked
from two dropdowns, then "Log In" is pressed. A logged-in session shows a
"Logout" link and the username in the header.

Session model observed by this page:
    GUEST --sign_in(user)--> logged in as user
    logged in --logout()--> GUEST

The page only observes and reports the session; whether cart or favorites
reset on an identity switch is judged by the scenarios.

================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

import allure
from loguru import logger
from playwright.async_api import Locator

from testsuites.ui_testing.framework.capabilities import Navigable, SpinnerAware
from testsuites.ui_testing.framework.page_context import PageContext
from testsuites.ui_testing.framework.smart_locator import SmartLocator
from testsuites.ui_testing.test_data.credentials import SessionCredential


@dataclass(frozen=True)
class SessionState:
    """Observed identity of the current browser session."""

    username: Optional[str] = None

    @property
    def is_guest(self) -> bool:
        return self.username is None

    def __str__(self) -> str:
        return "Guest" if self.is_guest else f"LoggedIn({self.username or '?'})"


GUEST = SessionState()


class SignInPage:
    """Sign-in page object (async)."""

    URL_PATH = "/signin"

    LOCATORS: Dict[str, Dict[str, str]] = {
        "sign_in_link": {
            "primary": "role=link[name='Sign In']",
            "fallback_1": "a#signin",
        },
        "username_field": {
            "primary": "#username",
        },
        "password_field": {
            "primary": "#password",
        },
        "username_dropdown": {
            "primary": "#username svg",
        },
        "password_dropdown": {
            "primary": "#password svg",
        },
        "dropdown_option": {
            "primary": "text=\"{value}\"",
        },
        "log_in_button": {
            "primary": "role=button[name='Log In']",
            "fallback_1": "#login-btn",
        },
        "logout_text": {
            "primary": "text=\"Logout\"",
        },
        "logout_link": {
            "primary": "role=link[name='Logout']",
            "fallback_1": "#logout",
        },
        "username_label": {
            "primary": ".username",
            "fallback_1": "[data-testid='username']",
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

    def dropdown_option(self, value: str) -> Locator:
        """Option with exactly `value` in an open dropdown."""
        return self.smart.get("dropdown_option", value=value).first

    # ============================================================
    # Actions
    # ============================================================

    @allure.step("Click 'Sign In'")
    async def click_sign_in_button(self) -> None:
        await self.smart.get("sign_in_link").first.click(timeout=self.ctx.timeouts.action)

    @allure.step("Select username '{username}'")
    async def select_username(self, username: str) -> None:
        await self.smart.get("username_dropdown").click(timeout=self.ctx.timeouts.action)
        await self.dropdown_option(username).click(timeout=self.ctx.timeouts.action)

    @allure.step("Select password")
    async def select_password(self, password: str) -> None:
        await self.smart.get("password_dropdown").click(timeout=self.ctx.timeouts.action)
        await self.dropdown_option(password).click(timeout=self.ctx.timeouts.action)

    @allure.step("Click 'Log In'")
    async def click_log_in_button(self) -> None:
        await self.smart.get("log_in_button").first.click(timeout=self.ctx.timeouts.action)

    @allure.step("Sign in as {username}")
    async def sign_in_with_credentials(self, username: str, password: str) -> None:
        """
        Full sign-in flow from any storefront page.

        Click failures propagate: a sign-in that cannot be performed should
        fail the scenario.
        """
        await self.click_sign_in_button()
        await self.select_username(username)
        await self.select_password(password)
        await self.click_log_in_button()
        await self.spinner.settle()
        logger.info(f"Signed in as {username}")

    async def sign_in(self, credential: SessionCredential) -> None:
        """Sign in with a credential from the credential directory."""
        await self.sign_in_with_credentials(credential.username, credential.password)

    @allure.step("Sign in as {username} and verify session")
    async def sign_in_and_verify(self, username: str, password: str) -> bool:
        """
        Sign in, then confirm the session shows a logged-in state.

        Returns:
            True when the logout control became visible
        """
        await self.sign_in_with_credentials(username, password)
        logged_in = await self.is_user_logged_in()
        if not logged_in:
            logger.warning(f"Sign-in as {username} did not reach a logged-in state")
        return logged_in

    @allure.step("Open sign-in page")
    async def navigate_to_sign_in_page(self) -> None:
        await self.nav.open()

    async def wait_for_sign_in_page_to_load(self, timeout: int = 10000) -> None:
        """Wait for both dropdowns; raises on timeout."""
        await self.smart.get("username_field").wait_for(state="visible", timeout=timeout)
        await self.smart.get("password_field").wait_for(state="visible", timeout=timeout)

    @allure.step("Logout")
    async def logout(self) -> bool:
        """
        Log out when a logout link is present.

        Returns:
            True when a logout was performed, False when there was no link
        """
        link = self.smart.get("logout_link").first
        visible = await self.reader.is_visible_now(link, description="logout link")
        if not visible.value:
            logger.info("Logout skipped: no logout link visible")
            return False

        await link.click(timeout=self.ctx.timeouts.action)
        await self.spinner.settle()
        logger.info("Logged out")
        return True

    # ============================================================
    # Observations
    # ============================================================

    async def is_sign_in_page_loaded(self) -> bool:
        username = await self.reader.is_visible(
            self.smart.get("username_field"), description="username dropdown"
        )
        password = await self.reader.is_visible(
            self.smart.get("password_field"), description="password dropdown"
        )
        return username.value and password.value

    async def is_user_logged_in(self) -> bool:
        probe = await self.reader.is_visible(
            self.smart.get("logout_text").first, description="logout control"
        )
        return probe.value

    async def get_logged_in_username(self) -> Optional[str]:
        """Username shown in the header, None when not readable."""
        probe = await self.reader.text(
            self.smart.get("username_label").first,
            timeout=self.ctx.timeouts.visibility,
            description="header username",
        )
        name = probe.value.strip()
        return name if probe.observed and name else None

    @allure.step("Read session state")
    async def session_state(self) -> SessionState:
        """Guest, or logged in with the username shown in the header."""
        if not await self.is_user_logged_in():
            return GUEST
        return SessionState(username=await self.get_logged_in_username() or "")


__all__ = [
    "SignInPage",
    "SessionState",
    "GUEST",
]
