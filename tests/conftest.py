import asyncio

import pytest

from battery_showcase.errors import ReadError
from battery_showcase.notifier_utils import Duration, Notifier, Placement, Position
from battery_showcase.producers.types import Reading, ValueSource


class RecordingNotifier(Notifier):
    def __init__(self) -> None:
        super().__init__()
        self.calls: list[tuple[str, Position]] = []
        self.placements: list[Placement] = []

    def display(self, message, position=Position.BOTTOM, duration=None) -> None:
        if isinstance(position, str):
            position = Position.parse(position)
        self.calls.append((message, position))
        super().display(message, position, duration)

    def _render(self, message: str, placement: Placement, duration: Duration) -> None:
        self.placements.append(placement)


class ConstantSource(ValueSource):
    def __init__(self, level: int) -> None:
        self.level = level
        self.reads = 0

    async def read(self) -> Reading:
        self.reads += 1
        return Reading(self.level)


class ScriptedSource(ValueSource):
    """Yields the scripted levels in order, raising any scripted exception instead."""

    def __init__(self, script: list[int | Exception]) -> None:
        self._script = list(script)

    async def read(self) -> Reading:
        if not self._script:
            raise ReadError("Script exhausted")
        item = self._script.pop(0)
        if isinstance(item, Exception):
            raise item
        return Reading(item)


class SlowSource(ValueSource):
    def __init__(self, delay_sec: float) -> None:
        self.delay_sec = delay_sec

    async def read(self) -> Reading:
        await asyncio.sleep(self.delay_sec)
        return Reading(1)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()
