"""
In-memory stand-ins for Playwright `Page` and `Locator`.

Only the calls the framework and page objects make are implemented. A page
holds a registry of selector -> FakeLocator; unregistered selectors resolve
to a locator that matches nothing.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional


class FakeTimeoutError(Exception):
    """Raised where Playwright would raise its TimeoutError."""


class FakeLocator:
    """
    Scriptable locator.

    Args:
        selector: Selector this locator was registered under
        texts: Text content of each matched element; empty means no match
        visible: Whether the first match is visible
        attributes: Attribute values of the first match
        error: Exception raised by every read
        hang: Reads never complete (until cancelled)
    """

    def __init__(
        self,
        selector: str = "",
        texts: Optional[List[str]] = None,
        visible: bool = True,
        attributes: Optional[Dict[str, Optional[str]]] = None,
        error: Optional[Exception] = None,
        hang: bool = False,
        children: Optional[Dict[str, "FakeLocator"]] = None,
    ):
        self.selector = selector
        self.texts = list(texts or [])
        self.visible = visible
        self.attributes = dict(attributes or {})
        self.error = error
        self.hang = hang
        self.children = dict(children or {})
        self.clicks = 0
        self.fills: List[str] = []
        self.checked: Optional[bool] = None
        self.on_click = None

    @classmethod
    def missing(cls, selector: str = "") -> "FakeLocator":
        return cls(selector=selector, texts=[], visible=False)

    @property
    def present(self) -> bool:
        return bool(self.texts)

    async def _read(self) -> None:
        if self.hang:
            await asyncio.sleep(3600)
        if self.error is not None:
            raise self.error

    # Chaining ---------------------------------------------------------------

    @property
    def first(self) -> "FakeLocator":
        return self

    def nth(self, index: int) -> "FakeLocator":
        return self

    def locator(self, selector: str) -> "FakeLocator":
        return self.children.get(selector, FakeLocator.missing(selector))

    def or_(self, other: "FakeLocator") -> "FakeLocator":
        return self if self.present else other

    # Reads ------------------------------------------------------------------

    async def wait_for(self, state: str = "visible", timeout: Optional[float] = None) -> None:
        await self._read()
        shown = self.present and self.visible
        if state == "visible" and not shown:
            raise FakeTimeoutError(f"{self.selector} not visible within {timeout}ms")
        if state == "hidden" and shown:
            raise FakeTimeoutError(f"{self.selector} still visible after {timeout}ms")

    async def is_visible(self) -> bool:
        await self._read()
        return self.present and self.visible

    async def count(self) -> int:
        await self._read()
        return len(self.texts)

    async def text_content(self, timeout: Optional[float] = None) -> Optional[str]:
        await self._read()
        if not self.present:
            raise FakeTimeoutError(f"{self.selector} not found within {timeout}ms")
        return self.texts[0]

    async def all_text_contents(self) -> List[str]:
        await self._read()
        return list(self.texts)

    async def get_attribute(self, name: str, timeout: Optional[float] = None) -> Optional[str]:
        await self._read()
        if not self.present:
            raise FakeTimeoutError(f"{self.selector} not found within {timeout}ms")
        return self.attributes.get(name)

    async def all(self) -> List["FakeLocator"]:
        await self._read()
        return [
            FakeLocator(self.selector, texts=[text], attributes=self.attributes)
            for text in self.texts
        ]

    # Actions ----------------------------------------------------------------

    async def click(self, timeout: Optional[float] = None, **kwargs: Any) -> None:
        if not self.present:
            raise FakeTimeoutError(f"cannot click {self.selector}")
        self.clicks += 1
        if self.on_click is not None:
            self.on_click(self)

    async def fill(self, value: str, timeout: Optional[float] = None) -> None:
        if not self.present:
            raise FakeTimeoutError(f"cannot fill {self.selector}")
        self.fills.append(value)

    async def check(self, timeout: Optional[float] = None) -> None:
        await self.click(timeout=timeout)
        self.checked = True

    async def uncheck(self, timeout: Optional[float] = None) -> None:
        if not self.present:
            raise FakeTimeoutError(f"cannot uncheck {self.selector}")
        self.checked = False


class FakePage:
    """Page with a selector registry and a recorded navigation history."""

    def __init__(self, url: str = "https://testathon.live/", title: str = "StackDemo"):
        self.url = url
        self._title = title
        self.locators: Dict[str, FakeLocator] = {}
        self.visited: List[str] = []
        self.pauses: List[int] = []
        self.network_idle = True
        self.handlers: Dict[str, List[Any]] = {}
        self.screenshot_error: Optional[Exception] = None

    def register(self, selector: str, **kwargs: Any) -> FakeLocator:
        locator = FakeLocator(selector, **kwargs)
        self.locators[selector] = locator
        return locator

    def locator(self, selector: str) -> FakeLocator:
        return self.locators.get(selector, FakeLocator.missing(selector))

    async def goto(self, url: str, **kwargs: Any) -> None:
        self.visited.append(url)
        self.url = url

    async def reload(self, **kwargs: Any) -> None:
        self.visited.append(self.url)

    async def go_back(self, **kwargs: Any) -> None:
        if len(self.visited) > 1:
            self.visited.pop()
            self.url = self.visited[-1]

    async def title(self) -> str:
        return self._title

    async def wait_for_load_state(self, state: str = "load", timeout: Optional[float] = None) -> None:
        if not self.network_idle:
            raise FakeTimeoutError(f"{state} not reached within {timeout}ms")

    async def wait_for_timeout(self, duration: float) -> None:
        self.pauses.append(duration)

    def on(self, event: str, handler: Any) -> None:
        self.handlers.setdefault(event, []).append(handler)

    def emit(self, event: str, payload: Any) -> None:
        for handler in self.handlers.get(event, []):
            handler(payload)

    async def screenshot(self, path: Optional[str] = None, full_page: bool = False) -> bytes:
        if self.screenshot_error is not None:
            raise self.screenshot_error
        return b"\x89PNG"
