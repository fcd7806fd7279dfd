from .periodic_sampler import PeriodicSampler
from .types import Reading, ValueSource, reading_from_value
from .value_sources import PsutilBatterySource, RandomValueSource

__all__ = [
    "PeriodicSampler",
    "PsutilBatterySource",
    "RandomValueSource",
    "Reading",
    "ValueSource",
    "reading_from_value",
]
