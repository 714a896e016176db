# ================================================================================
# State Reader Module
# ================================================================================
#
# Reads transient UI state (visibility, counts, text, numeric labels) and turns
# every failure mode into a typed fallback instead of an exception.
#
# Key Features:
#   - Probe results carrying value + observed flag
#   - Hard ceiling on every read (asyncio.wait_for)
#   - Optional retry with backoff for reads taken during transitions
#   - Fallback logging for post-mortem analysis
#
# Usage:
#   reader = StateReader()
#   visible = await reader.is_visible(page.locator(".float-cart"), timeout=2000)
#   count = await reader.numeric_label(label, r"(\d+) Product\(s\) found\.")
#
# ================================================================================

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional, Pattern, TypeVar, Union

from loguru import logger
from playwright.async_api import Locator

from .probe import FIRST_INTEGER_PATTERN, Probe, parse_numeric_label

T = TypeVar("T")


@dataclass
class RetryConfig:
    """
    Configuration for probe retry behavior.

    Attributes:
        max_attempts: Total read attempts before falling back
        delay_ms: Initial delay between attempts
        backoff_multiplier: Multiplier applied to the delay after each attempt
        max_delay_ms: Upper bound for the delay
    """
    max_attempts: int = 1
    delay_ms: int = 250
    backoff_multiplier: float = 2.0
    max_delay_ms: int = 2000


class StateReader:
    """
    Resilient reader for UI state.

    Every public method returns a `Probe` and never raises. A missing,
    detached, or slow element is reported as the documented fallback
    (False / 0 / "" / []) with `observed=False`.

    Cancellation from the host runner is not intercepted.
    """

    def __init__(
        self,
        default_timeout_ms: int = 5000,
        retry: Optional[RetryConfig] = None,
        ceiling_grace_ms: int = 1000,
    ):
        """
        Initialize reader.

        Args:
            default_timeout_ms: Timeout for waiting reads when none is given
            retry: Retry policy applied to every read
            ceiling_grace_ms: Extra time granted on top of a read's own
                timeout before the read is abandoned
        """
        self.default_timeout_ms = default_timeout_ms
        self.retry = retry or RetryConfig()
        self.ceiling_grace_ms = ceiling_grace_ms

    # =========================================================================
    # Generic probe
    # =========================================================================

    async def probe(
        self,
        read: Callable[[], Awaitable[T]],
        fallback: T,
        description: str = "ui state",
        timeout: Optional[int] = None,
        retry: Optional[RetryConfig] = None,
    ) -> Probe[T]:
        """
        Run a read and convert any failure into a fallback result.

        Args:
            read: Zero-argument coroutine factory performing the read
            fallback: Value reported when the read cannot complete
            description: Human-readable name used in logs
            timeout: The read's own timeout in milliseconds
            retry: Override for the instance retry policy

        Returns:
            Probe with the read value, or the fallback
        """
        policy = retry or self.retry
        timeout = self.default_timeout_ms if timeout is None else timeout
        ceiling = (timeout + self.ceiling_grace_ms) / 1000
        delay = policy.delay_ms
        last_error = ""

        for attempt in range(max(1, policy.max_attempts)):
            try:
                value = await asyncio.wait_for(read(), timeout=ceiling)
                return Probe.hit(value)
            except asyncio.TimeoutError:
                last_error = f"read exceeded {ceiling:.1f}s"
            except Exception as e:
                last_error = f"{type(e).__name__}: {str(e)[:120]}"

            if attempt < policy.max_attempts - 1:
                logger.debug(
                    f"Probe '{description}' attempt {attempt + 1}/{policy.max_attempts} "
                    f"failed ({last_error}), retrying in {delay}ms"
                )
                await asyncio.sleep(delay / 1000)
                delay = min(int(delay * policy.backoff_multiplier), policy.max_delay_ms)

        logger.debug(f"Probe '{description}' fell back to {fallback!r}: {last_error}")
        return Probe.miss(fallback, last_error)

    # =========================================================================
    # Visibility
    # =========================================================================

    async def is_visible(
        self,
        locator: Locator,
        timeout: Optional[int] = None,
        description: str = "element visible",
    ) -> Probe[bool]:
        """True if the element becomes visible within `timeout`."""
        timeout = self.default_timeout_ms if timeout is None else timeout

        async def read() -> bool:
            await locator.wait_for(state="visible", timeout=timeout)
            return True

        return await self.probe(read, False, description, timeout)

    async def is_visible_now(
        self,
        locator: Locator,
        description: str = "element visible now",
    ) -> Probe[bool]:
        """Visibility at call time, without waiting."""

        async def read() -> bool:
            return await locator.is_visible()

        return await self.probe(read, False, description, timeout=0)

    async def is_hidden(
        self,
        locator: Locator,
        timeout: Optional[int] = None,
        description: str = "element hidden",
    ) -> Probe[bool]:
        """True if the element is hidden or detached within `timeout`."""
        timeout = self.default_timeout_ms if timeout is None else timeout

        async def read() -> bool:
            await locator.wait_for(state="hidden", timeout=timeout)
            return True

        return await self.probe(read, False, description, timeout)

    # =========================================================================
    # Counts and text
    # =========================================================================

    async def count(
        self,
        locator: Locator,
        description: str = "element count",
    ) -> Probe[int]:
        """Number of matching elements at call time."""
        return await self.probe(locator.count, 0, description, timeout=0)

    async def text(
        self,
        locator: Locator,
        timeout: Optional[int] = None,
        description: str = "element text",
    ) -> Probe[str]:
        """Text content of the element, empty when absent."""
        timeout = self.default_timeout_ms if timeout is None else timeout

        async def read() -> str:
            return await locator.text_content(timeout=timeout) or ""

        return await self.probe(read, "", description, timeout)

    async def texts(
        self,
        locator: Locator,
        description: str = "element texts",
    ) -> Probe[List[str]]:
        """Text content of every matching element."""
        return await self.probe(locator.all_text_contents, [], description, timeout=0)

    async def attribute(
        self,
        locator: Locator,
        name: str,
        timeout: Optional[int] = None,
        description: str = "element attribute",
    ) -> Probe[Optional[str]]:
        """Attribute value, None when absent or unreadable."""
        timeout = self.default_timeout_ms if timeout is None else timeout

        async def read() -> Optional[str]:
            return await locator.get_attribute(name, timeout=timeout)

        return await self.probe(read, None, f"{description} [{name}]", timeout)

    async def numeric_label(
        self,
        locator: Locator,
        pattern: Union[str, Pattern[str]] = FIRST_INTEGER_PATTERN,
        timeout: Optional[int] = None,
        description: str = "numeric label",
    ) -> Probe[int]:
        """
        Integer extracted from a label's text with `pattern`.

        Never falls back to counting rendered elements. The label and the
        rendered list can diverge and scenarios assert on that.
        """
        text = await self.text(locator, timeout=timeout, description=description)
        if not text.observed:
            return Probe.miss(0, text.error)
        return Probe.hit(parse_numeric_label(text.value, pattern))


__all__ = [
    "StateReader",
    "RetryConfig",
]
