import pytest

from logplane.base.config import MemoryConfig
from logplane.memory.control_plane import ControlPlane as MemoryControlPlane


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def delayed_plane(clock):
    """Memory control plane with a one-second visibility delay on a fake clock."""
    return MemoryControlPlane(MemoryConfig(visibility_delay=1.0, page_size=2), clock=clock)
