import dataclasses
import logging
from logging.handlers import RotatingFileHandler
from pprint import pformat

_FMT = "%(asctime)s | %(levelname)s | %(name)s | %(funcName)s | %(message)s"


def dataclass_format(dataclass) -> str:
    return pformat(dataclasses.asdict(dataclass), indent=2, compact=False)


def setup_logging(level=logging.DEBUG):
    # Console handler (debug level)
    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(_FMT))

    # Root logger
    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(console)


def add_file_logging(log_path: str) -> RotatingFileHandler:
    """Attach the rotating file handler once the log path is known (info level)."""
    file = RotatingFileHandler(
        log_path, maxBytes=5 * 1024 * 1024, backupCount=5, encoding="utf-8"
    )
    file.setLevel(logging.INFO)
    file.setFormatter(logging.Formatter(_FMT))
    logging.getLogger().addHandler(file)
    return file
