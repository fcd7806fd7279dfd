from .errors import ConfigurationError, ReadError, ShowcaseError
from .notifier_utils import LogNotifier, Notifier, Position
from .producers import PeriodicSampler, Reading, ValueSource
from .screen import ShowcaseScreen
from .types import SamplerState

__all__ = [
    "ConfigurationError",
    "LogNotifier",
    "Notifier",
    "PeriodicSampler",
    "Position",
    "ReadError",
    "Reading",
    "SamplerState",
    "ShowcaseError",
    "ShowcaseScreen",
    "ValueSource",
]
