from types import SimpleNamespace

from testsuites.ui_testing.framework import diagnostics
from testsuites.ui_testing.framework.diagnostics import RequestCapture, capture_failure


def response(url, status=200):
    return SimpleNamespace(url=url, status=status)


def test_capture_keeps_only_api_responses(fake_page):
    capture = RequestCapture(fake_page)

    fake_page.emit("response", response("https://testathon.live/api/products"))
    fake_page.emit("response", response("https://testathon.live/static/logo.png"))
    fake_page.emit("response", response("https://testathon.live/api/signin", 422))

    recent = capture.recent()
    assert [item["url"] for item in recent] == [
        "https://testathon.live/api/products",
        "https://testathon.live/api/signin",
    ]
    assert recent[-1]["status"] == 422


def test_capture_is_bounded(fake_page):
    capture = RequestCapture(fake_page, limit=3)

    for index in range(5):
        fake_page.emit("response", response(f"https://testathon.live/api/{index}"))

    assert [item["url"][-1] for item in capture.recent()] == ["2", "3", "4"]
    assert len(capture.recent(count=2)) == 2


async def test_screenshot_is_saved_under_directory(fake_page, tmp_path):
    path = await diagnostics.screenshot(fake_page, "cart", directory=tmp_path)

    assert path.parent == tmp_path
    assert path.name.startswith("cart_")


async def test_capture_failure_survives_screenshot_error(fake_page, tmp_path, monkeypatch):
    monkeypatch.setattr(diagnostics, "SCREENSHOT_DIR", tmp_path)
    fake_page.screenshot_error = RuntimeError("page crashed")
    capture = RequestCapture(fake_page)
    fake_page.emit("response", response("https://testathon.live/api/cart", 500))

    await capture_failure(fake_page, "test_checkout", capture)
