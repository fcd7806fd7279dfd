import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import dacite
import yaml

from .constants import (
    BATTERY_CHECK_INTERVAL_SEC,
    LOG_PATH,
    READ_TIMEOUT_SEC,
    VERTICAL_OFFSET_PX,
)
from .errors import ConfigurationError
from .log_helpers import dataclass_format
from .notifier_utils import Duration

log = logging.getLogger()


class SourceKind(Enum):
    RANDOM = "random"
    PSUTIL = "psutil"


class NotifierBackend(Enum):
    LOG = "log"
    TOAST = "toast"


@dataclass(frozen=True)
class SamplerConfig:
    interval_sec: float = BATTERY_CHECK_INTERVAL_SEC
    read_timeout_sec: float | None = READ_TIMEOUT_SEC
    backoff_factor: float = 1.0
    max_backoff_sec: float | None = None

    def __post_init__(self):
        if self.interval_sec <= 0:
            raise ConfigurationError(f"interval_sec must be > 0: {self.interval_sec}")
        if self.read_timeout_sec is not None and self.read_timeout_sec <= 0:
            raise ConfigurationError(
                f"read_timeout_sec must be > 0: {self.read_timeout_sec}"
            )
        if self.backoff_factor < 1:
            raise ConfigurationError(
                f"backoff_factor must be >= 1: {self.backoff_factor}"
            )
        if self.max_backoff_sec is not None and self.max_backoff_sec <= 0:
            raise ConfigurationError(
                f"max_backoff_sec must be > 0: {self.max_backoff_sec}"
            )


@dataclass(frozen=True)
class SourceConfig:
    kind: SourceKind = SourceKind.RANDOM
    seed: int | None = None


@dataclass(frozen=True)
class NotifierConfig:
    backend: NotifierBackend = NotifierBackend.LOG
    vertical_offset_px: int = VERTICAL_OFFSET_PX
    duration: Duration = Duration.SHORT


@dataclass(frozen=True)
class Config:
    sampler: SamplerConfig = field(default_factory=SamplerConfig)
    source: SourceConfig = field(default_factory=SourceConfig)
    notifier: NotifierConfig = field(default_factory=NotifierConfig)
    log_path: str = LOG_PATH


def parse_config(data: dict) -> Config:
    try:
        return dacite.from_dict(
            Config,
            data,
            dacite.Config(strict=True, cast=[Enum], type_hooks={float: float}),
        )
    except ConfigurationError:
        raise
    # enum casts surface as a bare ValueError
    except (dacite.DaciteError, ValueError) as e:
        raise ConfigurationError(f"Invalid config: {e}") from e


def load_config(path: Path) -> Config:
    """Load a YAML config, falling back to defaults when `path` does not exist."""
    config_path = Path(path).expanduser()
    if not config_path.exists():
        log.info(f"No config at {str(config_path)!r}, using defaults")
        return Config()

    yaml_dict = yaml.safe_load(config_path.read_text()) or {}
    if not isinstance(yaml_dict, dict):
        raise ConfigurationError(
            f"Config root must be a mapping, got {type(yaml_dict).__name__}"
        )
    config = parse_config(yaml_dict)

    log.info(f"Loaded config from {str(config_path.resolve())!r}")
    log.debug(f"Parsed config:\n{dataclass_format(config)}")
    return config
