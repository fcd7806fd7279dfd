import asyncio
import logging
from abc import ABC, abstractmethod
from asyncio import Event, Task
from enum import Enum, auto
from functools import wraps
from typing import final


class SamplerState(Enum):
    IDLE = auto()
    RUNNING = auto()
    STOPPED = auto()


class Producer(ABC):
    """Wraps `__init__` and `async run()` for logging, and owns the background task
    executing `run()`.

    Every spawn hands `run()` a fresh stop event for cooperative loop cancellation,
    so a loop still finishing an in-flight iteration after `stop()` can never be
    revived by a later spawn.
    """

    def __init__(self) -> None:
        self._stop_event = Event()
        self._task: Task[None] | None = None
        self._live_tasks: set[Task[None]] = set()
        self.state = SamplerState.IDLE
        self.log = logging.getLogger(self.__class__.__name__)

    def __init_subclass__(cls) -> None:
        super().__init_subclass__()

        # automatic run wrapper
        original_run = cls.run

        @wraps(original_run)
        async def _wrapped_run(self, stop_event: Event):
            self.log.info("Received run signal")
            try:
                return await original_run(self, stop_event)
            finally:
                self.log.info("Loop exited")

        cls.run = _wrapped_run

        # automatic super().__init__()
        original_init = cls.__init__
        if original_init is not Producer.__init__:

            @wraps(original_init)
            def wrapped_init(self, *args, **kwargs):
                Producer.__init__(self)
                original_init(self, *args, **kwargs)
                self.log.info("Fully initialized")

            cls.__init__ = wrapped_init

    @abstractmethod
    async def run(self, stop_event: Event) -> None:
        pass

    def _spawn(self) -> SamplerState:
        """Start `run()` as a task on the running loop, unless one is already running.

        Loops from earlier runs that are still winding down are cancelled first, so
        at most one loop is ever alive.
        """
        if self.state is SamplerState.RUNNING:
            self.log.debug("Already running, ignoring start")
            return self.state

        for stale in self._live_tasks:
            self.log.info("Cancelling loop still winding down from a previous run")
            stale.cancel()

        # bind the event now: the coroutine captures it before the task is scheduled
        self._stop_event = Event()
        self._task = asyncio.create_task(
            self.run(self._stop_event), name=self.__class__.__name__
        )
        self._live_tasks.add(self._task)
        self._task.add_done_callback(self._on_task_done)
        self.state = SamplerState.RUNNING
        return self.state

    def _on_task_done(self, task: Task[None]) -> None:
        self._live_tasks.discard(task)
        if task is self._task and self.state is SamplerState.RUNNING:
            # the loop ended without a stop signal, don't report it as running
            self.state = SamplerState.STOPPED
        if task.cancelled():
            self.log.info("Task cancelled")
            return
        exc = task.exception()
        if exc is not None:
            self.log.error("Task died unexpectedly", exc_info=exc)

    def is_running(self) -> bool:
        return self.state is SamplerState.RUNNING

    @final
    def stop(self):
        if self.state is not SamplerState.RUNNING:
            return
        self.log.info("Received stop signal")
        self._stop_event.set()
        self.state = SamplerState.STOPPED

    async def aclose(self, timeout_sec: float = 1.0) -> None:
        """Stop, then wait for every loop to wind down, cancelling stragglers after
        `timeout_sec`."""
        self.stop()
        self._task = None
        tasks = [task for task in self._live_tasks if not task.done()]
        if not tasks:
            return
        _, pending = await asyncio.wait(tasks, timeout=timeout_sec)
        if not pending:
            return
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        self.log.warning(
            f"Forcefully cancelled {len(pending)} task(s) after {timeout_sec} sec"
        )
