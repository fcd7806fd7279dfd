from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime

from ..errors import ReadError

MIN_LEVEL = 0
MAX_LEVEL = 100


@dataclass(slots=True, frozen=True)
class Reading:
    level: int
    time: datetime = field(default_factory=lambda: datetime.now().astimezone())


def reading_from_value(value: float | int | None) -> Reading:
    if value is None:
        raise ReadError("No value available")
    level = int(round(value))
    if not MIN_LEVEL <= level <= MAX_LEVEL:
        raise ReadError(f"Level out of range: {value!r}")
    return Reading(level)


class ValueSource(ABC):
    """Produces a `Reading` on demand. Raises `ReadError` when no value is available."""

    @abstractmethod
    async def read(self) -> Reading:
        pass
