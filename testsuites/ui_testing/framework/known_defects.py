"""
================================================================================
Known Defects
================================================================================

Scopes strict-xfail scenarios to the assertions that observe a storefront
defect.

A scenario that encodes a known defect runs its preconditions (sign-in,
add-to-cart, navigation) as ordinary steps. Only the final assertions sit
inside `defect_check`, which re-raises their AssertionError as
KnownDefectObserved. The marker from `expect_known_defect` xfails on that
exception alone, so:

    precondition fails          -> test FAILS
    defect observed             -> XFAIL
    defect fixed (block passes) -> XPASS(strict), test FAILS

Usage:
    CART_LEAK = expect_known_defect("previous user's cart stays visible")

    @pytest.mark.known_defect
    @CART_LEAK
    async def test_cart_isolation(...):
        await sign_in_page.sign_in(FAV_USER)
        ...
        with defect_check("cart empty for the next user"):
            assert await cart_page.get_cart_item_count() == 0

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import allure
import pytest
from loguru import logger


class KnownDefectObserved(AssertionError):
    """An assertion guarding a documented storefront defect failed."""
    pass


@contextmanager
def defect_check(description: str) -> Iterator[None]:
    """
    Mark the assertions that observe a known defect.

    AssertionError inside the block becomes KnownDefectObserved. Timeouts,
    selector errors and anything else pass through unchanged.
    """
    with allure.step(f"Known defect check: {description}"):
        try:
            yield
        except KnownDefectObserved:
            raise
        except AssertionError as e:
            logger.warning(f"Known defect observed ({description}): {e}")
            raise KnownDefectObserved(f"{description}: {e}") from e


def expect_known_defect(reason: str) -> pytest.MarkDecorator:
    """Strict xfail that only accepts KnownDefectObserved."""
    return pytest.mark.xfail(strict=True, raises=KnownDefectObserved, reason=reason)


__all__ = [
    "KnownDefectObserved",
    "defect_check",
    "expect_known_defect",
]
