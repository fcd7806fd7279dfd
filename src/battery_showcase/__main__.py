import asyncio
import logging
import os
from pathlib import Path

from .config import Config, NotifierBackend, load_config
from .log_helpers import add_file_logging, setup_logging
from .notifier_utils import LogNotifier, Notifier
from .screen import ShowcaseScreen

log = logging.getLogger()


def build_notifier(config: Config) -> Notifier:
    if config.notifier.backend is NotifierBackend.TOAST:
        from .toast_notifier import ToastNotifier

        return ToastNotifier(config.notifier.vertical_offset_px, config.notifier.duration)
    return LogNotifier(config.notifier.vertical_offset_px, config.notifier.duration)


def report_error(e: Exception, config: Config):
    if config.notifier.backend is NotifierBackend.TOAST:
        from .toast_notifier import notify_error

        notify_error(e, config.log_path)
    else:
        log.exception(f"Fatal error: {type(e).__name__}: {e}")


async def interact(screen: ShowcaseScreen):
    while True:
        user_input = (
            await asyncio.to_thread(input, "[c: click | p: pause | r: resume | q: quit] > ")
        ).strip()
        if user_input == "q":
            break
        if user_input == "c":
            screen.handle_example_button_click()
        elif user_input == "p":
            screen.on_pause()
        elif user_input == "r":
            screen.on_resume()
        else:
            print(f"Unrecognized command: {user_input!r}")


async def main():
    config_path = os.environ.get("CONFIG_YAML", "config.yaml")
    setup_logging()
    config = load_config(Path(config_path))
    add_file_logging(config.log_path)
    screen = ShowcaseScreen(build_notifier(config), config)
    try:
        async with screen.active():
            await interact(screen)
    except (KeyboardInterrupt, EOFError):
        log.info("Graceful exit by keyboard interrupt")
    except Exception as e:
        report_error(e, config)
        raise


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
