import asyncio
from asyncio import Event

from ..constants import BATTERY_LEVEL_TEMPLATE, MAX_BACKOFF_SEC, READ_TIMEOUT_SEC
from ..errors import ConfigurationError, ReadError
from ..notifier_utils import Notifier, Position
from ..types import Producer, SamplerState
from .types import Reading, ValueSource


async def _wait_or_stop(stop_event: Event, delay_sec: float) -> bool:
    """Sleep for `delay_sec`, returning True early if `stop_event` gets set."""
    try:
        await asyncio.wait_for(stop_event.wait(), delay_sec)
    except asyncio.TimeoutError:
        return False
    return True


class PeriodicSampler(Producer):
    """Every `interval_sec`, reads a level from a `ValueSource` and shows it through a
    `Notifier` at the top of the screen, until stopped.

    A failed read skips the tick and the loop carries on. With `backoff_factor > 1`
    the wait after consecutive failures grows geometrically, capped at
    `max_backoff_sec` (an hour when unset), and drops back to `interval_sec` after
    the next successful read.
    """

    def __init__(
        self,
        read_timeout_sec: float | None = READ_TIMEOUT_SEC,
        backoff_factor: float = 1.0,
        max_backoff_sec: float | None = None,
    ) -> None:
        if read_timeout_sec is not None and read_timeout_sec <= 0:
            raise ConfigurationError(f"read_timeout_sec must be > 0: {read_timeout_sec}")
        if backoff_factor < 1:
            raise ConfigurationError(f"backoff_factor must be >= 1: {backoff_factor}")
        if max_backoff_sec is not None and max_backoff_sec <= 0:
            raise ConfigurationError(f"max_backoff_sec must be > 0: {max_backoff_sec}")
        self.read_timeout_sec = read_timeout_sec
        self.backoff_factor = backoff_factor
        self.max_backoff_sec = max_backoff_sec

        self.interval_sec: float | None = None
        self.source: ValueSource | None = None
        self.sink: Notifier | None = None
        self.last_reading: Reading | None = None
        self.delay_sec: float | None = None
        self.consecutive_failures: int = 0

    def start(
        self, interval_sec: float, source: ValueSource, sink: Notifier
    ) -> SamplerState:
        if self.is_running():
            self.log.debug("Already running, ignoring start")
            return self.state
        if interval_sec <= 0:
            raise ConfigurationError(f"interval_sec must be > 0: {interval_sec}")

        self.interval_sec = interval_sec
        self.source = source
        self.sink = sink
        return self._spawn()

    def _backoff_sec(self, interval_sec: float, delay_sec: float) -> float:
        """Next wait after another failed read, grown from `delay_sec` but never past
        the cap. Never shorter than `interval_sec`."""
        cap = MAX_BACKOFF_SEC if self.max_backoff_sec is None else self.max_backoff_sec
        return min(delay_sec * self.backoff_factor, max(cap, interval_sec))

    async def _sample(self, source: ValueSource) -> Reading | None:
        try:
            return await asyncio.wait_for(source.read(), self.read_timeout_sec)
        except asyncio.TimeoutError:
            self.log.warning(
                f"Read timed out after {self.read_timeout_sec} sec, skipping tick"
            )
        except ReadError as e:
            self.log.warning(f"Read failed, skipping tick: {e}")
        except Exception:
            self.log.exception("Unexpected value source error, skipping tick")
        return None

    def _dispatch(self, sink: Notifier, reading: Reading) -> None:
        message = BATTERY_LEVEL_TEMPLATE.format(level=reading.level)
        try:
            sink.display(message, Position.TOP)
        except Exception:
            self.log.exception(f"Notifier failed to display {message!r}")

    async def run(self, stop_event: Event) -> None:
        # collaborators are bound per loop, a restart may swap them while this one winds down
        interval_sec, source, sink = self.interval_sec, self.source, self.sink
        if interval_sec is None or source is None or sink is None:
            raise RuntimeError("run() needs start() to bind interval, source and sink")

        self.delay_sec = interval_sec
        self.consecutive_failures = 0
        while not stop_event.is_set():
            if await _wait_or_stop(stop_event, self.delay_sec):
                break

            reading = await self._sample(source)
            if reading is None:
                self.consecutive_failures += 1
                self.delay_sec = self._backoff_sec(interval_sec, self.delay_sec)
                continue

            self.consecutive_failures = 0
            self.delay_sec = interval_sec
            self.last_reading = reading
            self.log.info(f"Sampled level: {reading.level}%")
            self._dispatch(sink, reading)


if __name__ == "__main__":
    from ..log_helpers import setup_logging
    from ..notifier_utils import LogNotifier
    from .value_sources import RandomValueSource

    async def _demo():
        sampler = PeriodicSampler()
        sampler.start(1, RandomValueSource(), LogNotifier())
        await asyncio.sleep(5.5)
        await sampler.aclose()

    setup_logging()
    asyncio.run(_demo())
