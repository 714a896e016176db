"""
================================================================================
Test Data
================================================================================

Reference data shared by UI scenarios.

Author: Automation Team
License: MIT
================================================================================
"""

from .credentials import (
    CREDENTIALS,
    DEMO_USER,
    EXISTING_ORDERS_USER,
    FAV_USER,
    LOCKED_USER,
    NO_IMAGE_CREDS,
    SessionCredential,
    UnknownCredentialError,
    get_credential,
)

__all__ = [
    "CREDENTIALS",
    "DEMO_USER",
    "EXISTING_ORDERS_USER",
    "FAV_USER",
    "LOCKED_USER",
    "NO_IMAGE_CREDS",
    "SessionCredential",
    "UnknownCredentialError",
    "get_credential",
]
