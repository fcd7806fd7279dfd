import logging
from contextlib import asynccontextmanager

from .config import Config, SourceKind
from .constants import EXAMPLE_BUTTON_MESSAGE
from .notifier_utils import Notifier, Position
from .producers import PeriodicSampler, PsutilBatterySource, RandomValueSource
from .producers.types import ValueSource


def build_source(config: Config) -> ValueSource:
    if config.source.kind is SourceKind.PSUTIL:
        return PsutilBatterySource()
    return RandomValueSource(config.source.seed)


class ShowcaseScreen:
    """A screen whose visible lifetime bounds a background battery check.

    `on_resume` starts the sampler and `on_pause` / `on_destroy` stop it. Prefer
    `async with screen.active():` which guarantees the stop on every exit path.
    """

    def __init__(
        self,
        notifier: Notifier,
        config: Config | None = None,
        source: ValueSource | None = None,
    ) -> None:
        self.config = config or Config()
        self.notifier = notifier
        self.source = source or build_source(self.config)
        self.sampler = PeriodicSampler(
            self.config.sampler.read_timeout_sec,
            self.config.sampler.backoff_factor,
            self.config.sampler.max_backoff_sec,
        )
        self.is_created: bool = False
        self.is_destroyed: bool = False
        self.log = logging.getLogger(self.__class__.__name__)

    def on_create(self):
        self.is_created = True
        self.log.info("Created")

    def on_resume(self):
        if self.is_destroyed:
            raise RuntimeError("Cannot resume a destroyed screen")
        if not self.is_created:
            self.on_create()
        self.sampler.start(
            self.config.sampler.interval_sec, self.source, self.notifier
        )

    def on_pause(self):
        self.sampler.stop()

    async def on_destroy(self):
        await self.sampler.aclose()
        self.is_destroyed = True
        self.log.info("Destroyed")

    def handle_example_button_click(self):
        self.notifier.display(EXAMPLE_BUTTON_MESSAGE, Position.CENTER)

    @asynccontextmanager
    async def active(self):
        self.on_resume()
        try:
            yield self
        finally:
            self.on_pause()
            await self.on_destroy()
