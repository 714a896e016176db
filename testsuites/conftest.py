"""
================================================================================
Root Pytest Configuration
================================================================================

This module provides the root pytest configuration for the entire test suite.
It registers common markers and tags tests by directory.

================================================================================
"""

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "e2e: Live browser scenarios against the storefront"
    )
    config.addinivalue_line(
        "markers", "unit: Browser-free tests of the framework and page objects"
    )
    config.addinivalue_line(
        "markers", "ui: UI-specific tests"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "auth: Tests related to sign-in and sessions"
    )
    config.addinivalue_line(
        "markers", "cart: Tests related to the cart"
    )
    config.addinivalue_line(
        "markers", "checkout: Tests related to checkout"
    )
    config.addinivalue_line(
        "markers", "favorites: Tests related to favorites"
    )
    config.addinivalue_line(
        "markers", "listing: Tests related to the product listing"
    )
    config.addinivalue_line(
        "markers", "known_defect: Scenario encoding a known storefront defect (strict xfail)"
    )


def pytest_collection_modifyitems(config, items):
    """Tag collected tests by the directory they live in."""
    for item in items:
        parts = item.path.parts

        if "ui_testing" in parts:
            item.add_marker(pytest.mark.ui)
            item.add_marker(pytest.mark.e2e)

        if "unit" in parts:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Storefront UI Automation Suite",
        "=" * 60,
        "",
    ]
