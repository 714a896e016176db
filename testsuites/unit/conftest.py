import pytest

from fakes import FakePage
from testsuites.ui_testing.framework.page_context import PageContext, Timeouts

FAST_TIMEOUTS = Timeouts(
    visibility=50,
    spinner=50,
    network_idle=50,
    action=50,
    page_load=50,
    probe_grace=100,
)


@pytest.fixture
def fake_page() -> FakePage:
    return FakePage()


@pytest.fixture
def ctx(fake_page: FakePage) -> PageContext:
    """Page context over a fake page with short timeouts."""
    return PageContext(page=fake_page, timeouts=FAST_TIMEOUTS)
