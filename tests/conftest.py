import uuid

import pytest

from publisher import create_publisher


@pytest.fixture
def pub():
    """A fresh, independent publisher that lets handler errors propagate."""
    return create_publisher(isolate_errors=False)


@pytest.fixture
def channel_name():
    """Unique channel name, for tests that go through the default publisher."""
    return f"test/{uuid.uuid4().hex[:8]}"


class Recorder:
    """Callable that records every call it receives."""

    def __init__(self, name="recorder", log=None):
        self.name = name
        self.calls = []
        self.log = log

    def __call__(self, *args, **kwargs):
        self.calls.append((args, kwargs))
        if self.log is not None:
            self.log.append(self.name)


@pytest.fixture
def recorder():
    return Recorder
