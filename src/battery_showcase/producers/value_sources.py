import asyncio
import logging
from random import Random

import psutil

from ..errors import ReadError
from .types import MAX_LEVEL, MIN_LEVEL, Reading, ValueSource, reading_from_value


class RandomValueSource(ValueSource):
    """Placeholder source: a uniformly random level in [0, 100]."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = Random(seed)

    async def read(self) -> Reading:
        return Reading(self._rng.randint(MIN_LEVEL, MAX_LEVEL))


class PsutilBatterySource(ValueSource):
    """Reads the host battery charge through `psutil.sensors_battery()`."""

    def __init__(self) -> None:
        self.log = logging.getLogger(self.__class__.__name__)

    async def read(self) -> Reading:
        # sensors_battery reads sysfs / WMI, keep it off the event loop
        try:
            battery = await asyncio.to_thread(psutil.sensors_battery)
        except (OSError, psutil.Error) as e:
            raise ReadError(f"psutil failed to query the battery: {e}") from e
        if battery is None:
            raise ReadError("No battery installed or battery state unavailable")
        self.log.debug(f"Battery: {battery!r}")
        return reading_from_value(battery.percent)
