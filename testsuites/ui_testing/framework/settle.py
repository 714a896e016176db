# ================================================================================
# Settle Protocol Module
# ================================================================================
#
# Wait primitives invoked around state-mutating actions so that the next read
# does not race the UI.
#
# Key Features:
#   - Spinner wait that treats "never appeared" as settled
#   - Network idle wait with bounded timeout
#   - Bounded poll-until-condition with exponential backoff
#   - Fixed pause reserved for places with no observable signal
#
# None of the waits raise on timeout. A degraded wait returns False and logs a
# warning; the subsequent read may then observe an intermediate state.
#
# Usage:
#   await wait_for_spinner_hidden(page)
#   settled = await poll_until(badge_changed, get_wait_config("cart_update"))
#
# ================================================================================

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Optional

import allure
from loguru import logger
from playwright.async_api import Page

SPINNER_SELECTOR = "div.spinner"


@dataclass
class WaitConfig:
    """
    Configuration for poll operations.

    Attributes:
        initial_interval: Initial wait interval in seconds
        multiplier: Multiplier for exponential backoff
        max_interval: Maximum interval between attempts
        timeout: Total timeout in seconds
    """
    initial_interval: float = 0.1
    multiplier: float = 1.5
    max_interval: float = 1.0
    timeout: float = 10.0


# Pre-configured poll strategies for common UI transitions
WAIT_SCENARIOS: Dict[str, WaitConfig] = {
    "default": WaitConfig(),
    "fast": WaitConfig(
        initial_interval=0.05,
        multiplier=1.5,
        max_interval=0.25,
        timeout=2.0
    ),
    "cart_update": WaitConfig(
        initial_interval=0.1,
        multiplier=1.5,
        max_interval=0.5,
        timeout=3.0
    ),
    "navigation": WaitConfig(
        initial_interval=0.2,
        multiplier=2.0,
        max_interval=1.0,
        timeout=10.0
    ),
}


def get_wait_config(scenario: str) -> WaitConfig:
    """Return the poll configuration for `scenario`, or the default."""
    return WAIT_SCENARIOS.get(scenario, WAIT_SCENARIOS["default"])


async def wait_for_spinner_hidden(
    page: Page,
    selector: str = SPINNER_SELECTOR,
    timeout: int = 10000,
) -> bool:
    """
    Wait until the loading indicator is gone.

    Args:
        page: Playwright page
        selector: Loading indicator selector
        timeout: Timeout in milliseconds

    Returns:
        True when settled (including when the spinner never appeared),
        False when it was still visible at timeout
    """
    spinner = page.locator(selector).first
    try:
        if await spinner.count() == 0:
            return True
        await spinner.wait_for(state="hidden", timeout=timeout)
        return True
    except Exception as e:
        logger.warning(
            f"Spinner '{selector}' still present after {timeout}ms, "
            f"continuing: {str(e)[:80]}"
        )
        return False


async def wait_for_network_idle(page: Page, timeout: int = 10000) -> bool:
    """
    Wait for the page to have no in-flight requests.

    Returns:
        True when idle was reached, False on timeout
    """
    try:
        await page.wait_for_load_state("networkidle", timeout=timeout)
        return True
    except Exception as e:
        logger.warning(f"Network not idle after {timeout}ms, continuing: {str(e)[:80]}")
        return False


async def pause_millis(page: Page, duration: int, reason: str) -> None:
    """
    Unconditional delay.

    Only for places with no observable signal to poll on; `reason` names
    the missing signal and is logged at every use.
    """
    logger.debug(f"Fixed pause {duration}ms: {reason}")
    await page.wait_for_timeout(duration)


def calculate_next_interval(current_interval: float, config: WaitConfig) -> float:
    """Next poll interval with exponential backoff."""
    return min(current_interval * config.multiplier, config.max_interval)


async def poll_until(
    condition: Callable[[], Awaitable[bool]],
    config: Optional[WaitConfig] = None,
    description: str = "condition",
) -> bool:
    """
    Poll `condition` until it returns True or the timeout elapses.

    Exceptions raised by the condition count as "not yet".

    Args:
        condition: Coroutine factory returning True once satisfied
        config: Poll configuration (defaults to WAIT_SCENARIOS["default"])
        description: Human-readable description for logging

    Returns:
        True if the condition was met, False on timeout
    """
    config = config or get_wait_config("default")
    loop = asyncio.get_running_loop()
    deadline = loop.time() + config.timeout
    interval = config.initial_interval
    attempt = 0

    with allure.step(f"Poll until: {description}"):
        while True:
            attempt += 1
            try:
                if await condition():
                    logger.debug(f"'{description}' met after {attempt} attempt(s)")
                    return True
            except Exception as e:
                logger.debug(f"'{description}' attempt {attempt} raised: {str(e)[:80]}")

            remaining = deadline - loop.time()
            if remaining <= 0:
                logger.warning(
                    f"'{description}' not met within {config.timeout:.1f}s "
                    f"({attempt} attempts)"
                )
                return False

            await asyncio.sleep(min(interval, remaining))
            interval = calculate_next_interval(interval, config)


__all__ = [
    "SPINNER_SELECTOR",
    "WaitConfig",
    "WAIT_SCENARIOS",
    "get_wait_config",
    "wait_for_spinner_hidden",
    "wait_for_network_idle",
    "pause_millis",
    "poll_until",
]
