import asyncio

import pytest

from battery_showcase.config import Config, SamplerConfig, SourceConfig, SourceKind
from battery_showcase.notifier_utils import Position
from battery_showcase.producers import PsutilBatterySource, RandomValueSource
from battery_showcase.screen import ShowcaseScreen, build_source
from battery_showcase.types import SamplerState

from .conftest import ConstantSource, RecordingNotifier, SlowSource

INTERVAL = 0.1


def _config(interval_sec: float = INTERVAL) -> Config:
    return Config(sampler=SamplerConfig(interval_sec=interval_sec))


class TestShowcaseScreen:
    def test_click_without_sampler(self, notifier: RecordingNotifier):
        screen = ShowcaseScreen(notifier, _config(), ConstantSource(1))
        screen.handle_example_button_click()

        assert notifier.calls == [("Example button clicked!", Position.CENTER)]
        assert screen.sampler.state is SamplerState.IDLE

    @pytest.mark.asyncio
    async def test_click_while_sampling(self, notifier: RecordingNotifier):
        screen = ShowcaseScreen(notifier, _config(10), ConstantSource(1))
        async with screen.active():
            screen.handle_example_button_click()
            assert screen.sampler.is_running()
        assert notifier.calls == [("Example button clicked!", Position.CENTER)]

    @pytest.mark.asyncio
    async def test_active_scope_samples_then_stops(self, notifier: RecordingNotifier):
        screen = ShowcaseScreen(notifier, _config(), ConstantSource(42))
        async with screen.active():
            assert screen.is_created
            await asyncio.sleep(2 * INTERVAL + INTERVAL / 2)

        assert screen.is_destroyed
        assert screen.sampler.state is SamplerState.STOPPED
        assert notifier.calls == [("Battery level: 42%", Position.TOP)] * 2

        await asyncio.sleep(2 * INTERVAL)
        assert len(notifier.calls) == 2

    @pytest.mark.asyncio
    async def test_active_scope_stops_on_error(self, notifier: RecordingNotifier):
        screen = ShowcaseScreen(notifier, _config(), ConstantSource(42))
        with pytest.raises(RuntimeError):
            async with screen.active():
                raise RuntimeError("host crashed")

        assert screen.sampler.state is SamplerState.STOPPED
        assert screen.sampler._task is None

    @pytest.mark.asyncio
    async def test_pause_and_resume(self, notifier: RecordingNotifier):
        screen = ShowcaseScreen(notifier, _config(), ConstantSource(3))
        screen.on_resume()
        screen.on_pause()
        assert not screen.sampler.is_running()

        screen.on_resume()
        assert screen.sampler.is_running()
        await asyncio.sleep(INTERVAL + INTERVAL / 2)
        await screen.on_destroy()
        assert notifier.calls == [("Battery level: 3%", Position.TOP)]

    @pytest.mark.asyncio
    async def test_resume_after_destroy(self, notifier: RecordingNotifier):
        screen = ShowcaseScreen(notifier, _config(), ConstantSource(3))
        async with screen.active():
            pass
        with pytest.raises(RuntimeError):
            screen.on_resume()

    def test_build_source(self):
        assert isinstance(build_source(Config()), RandomValueSource)
        psutil_config = Config(source=SourceConfig(kind=SourceKind.PSUTIL))
        assert isinstance(build_source(psutil_config), PsutilBatterySource)

    @pytest.mark.asyncio
    async def test_no_display_after_destroy_when_paused_mid_read(
        self, notifier: RecordingNotifier
    ):
        config = Config(sampler=SamplerConfig(interval_sec=INTERVAL, read_timeout_sec=None))
        screen = ShowcaseScreen(notifier, config, SlowSource(5 * INTERVAL))
        screen.on_resume()
        await asyncio.sleep(INTERVAL + INTERVAL / 2)
        screen.on_pause()
        screen.on_resume()
        await screen.on_destroy()

        await asyncio.sleep(6 * INTERVAL)
        assert notifier.calls == []
        assert screen.sampler._live_tasks == set()
