import pytest
from procargs.common.messaging import bus


class SpyRenderer:
    """A test utility to collect messages sent through the bus."""

    def __init__(self):
        self.messages = []

    def render(self, msg_id, level, **kwargs):
        self.messages.append((msg_id, level, kwargs))

    def ids(self, level=None):
        return [m[0] for m in self.messages if level is None or m[1] == level]


@pytest.fixture(autouse=True)
def isolated_bus():
    """Restores the global bus after tests that configure it (e.g. the CLI)."""
    store = bus.store
    yield
    bus.set_renderer(None)
    bus.set_store(store)


@pytest.fixture
def spy():
    renderer = SpyRenderer()
    bus.set_renderer(renderer)
    return renderer
