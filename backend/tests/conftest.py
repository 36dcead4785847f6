import pytest

from services.room_store import rooms


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def clear_rooms() -> None:
    """Isolate tests by clearing the in-memory room registry."""
    rooms.clear()
    yield
    rooms.clear()


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start_ms: int = 1_700_000_000_000) -> None:
        self.now = start_ms

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += int(seconds * 1000)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
