"""
================================================================================
Credential Directory
================================================================================

Named storefront identities used by the UI scenarios.

Each identity has a special meaning on the demo storefront (images that never
load, pre-existing favorites, pre-existing orders, a locked account). Page
objects never build credentials themselves; scenarios look them up here by
name and pass them in.

Usage:
    from testsuites.ui_testing.test_data.credentials import FAV_USER, get_credential

    await sign_in_page.sign_in(FAV_USER)
    await sign_in_page.sign_in(get_credential("DEMO_USER"))

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping

# All demo identities share one password on the storefront
DEFAULT_PASSWORD = "testingisfun99"


class UnknownCredentialError(KeyError):
    """Raised when a scenario asks for an identity that is not defined."""
    pass


@dataclass(frozen=True)
class SessionCredential:
    """
    Username/password pair plus what makes the identity interesting.

    Attributes:
        username: Value picked from the sign-in username dropdown
        password: Value picked from the sign-in password dropdown
        description: Test significance of the identity
    """
    username: str
    password: str
    description: str = ""

    def __repr__(self) -> str:
        return f"SessionCredential(username={self.username!r}, description={self.description!r})"


NO_IMAGE_CREDS = SessionCredential(
    username="image_not_loading_user",
    password=DEFAULT_PASSWORD,
    description="User account that simulates image loading problems",
)

DEMO_USER = SessionCredential(
    username="demouser",
    password=DEFAULT_PASSWORD,
    description="Standard demo user account",
)

EXISTING_ORDERS_USER = SessionCredential(
    username="existing_orders_user",
    password=DEFAULT_PASSWORD,
    description="User account with pre-existing orders",
)

FAV_USER = SessionCredential(
    username="fav_user",
    password=DEFAULT_PASSWORD,
    description="User account with favorite items",
)

LOCKED_USER = SessionCredential(
    username="locked_user",
    password=DEFAULT_PASSWORD,
    description="Locked user account for testing error scenarios",
)


CREDENTIALS: Mapping[str, SessionCredential] = MappingProxyType({
    "NO_IMAGE_CREDS": NO_IMAGE_CREDS,
    "DEMO_USER": DEMO_USER,
    "EXISTING_ORDERS_USER": EXISTING_ORDERS_USER,
    "FAV_USER": FAV_USER,
    "LOCKED_USER": LOCKED_USER,
})


def get_credential(name: str) -> SessionCredential:
    """
    Look up a credential by its directory name.

    Raises:
        UnknownCredentialError: When `name` is not in the directory
    """
    try:
        return CREDENTIALS[name]
    except KeyError:
        raise UnknownCredentialError(
            f"Unknown credential '{name}'. Available: {', '.join(CREDENTIALS)}"
        ) from None


def list_credentials() -> List[str]:
    """Names of all defined identities."""
    return list(CREDENTIALS)


__all__ = [
    "SessionCredential",
    "UnknownCredentialError",
    "CREDENTIALS",
    "DEFAULT_PASSWORD",
    "NO_IMAGE_CREDS",
    "DEMO_USER",
    "EXISTING_ORDERS_USER",
    "FAV_USER",
    "LOCKED_USER",
    "get_credential",
    "list_credentials",
]
