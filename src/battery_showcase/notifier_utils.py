import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, IntFlag

from .constants import VERTICAL_OFFSET_PX


class Position(Enum):
    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"

    @classmethod
    def parse(cls, name: str) -> "Position":
        """Case insensitive for "top" and "center", anything else lands at the bottom."""
        lowered = name.lower()
        if lowered == "top":
            return cls.TOP
        if lowered == "center":
            return cls.CENTER
        return cls.BOTTOM


class Duration(Enum):
    SHORT = "short"
    LONG = "long"


class Gravity(IntFlag):
    CENTER_HORIZONTAL = 0x01
    CENTER_VERTICAL = 0x10
    CENTER = CENTER_HORIZONTAL | CENTER_VERTICAL
    TOP = 0x30
    BOTTOM = 0x50


@dataclass(frozen=True, slots=True)
class Placement:
    gravity: Gravity
    x_offset: int
    y_offset: int


def placement_for(
    position: Position, vertical_offset_px: int = VERTICAL_OFFSET_PX
) -> Placement:
    if position is Position.TOP:
        return Placement(Gravity.TOP | Gravity.CENTER_HORIZONTAL, 0, vertical_offset_px)
    if position is Position.CENTER:
        return Placement(Gravity.CENTER, 0, 0)
    return Placement(Gravity.BOTTOM | Gravity.CENTER_HORIZONTAL, 0, vertical_offset_px)


class Notifier(ABC):
    """Shows a short transient message. `display` is fire-and-forget and must return
    quickly, as it is called from the event loop."""

    def __init__(
        self,
        vertical_offset_px: int = VERTICAL_OFFSET_PX,
        duration: Duration = Duration.SHORT,
    ) -> None:
        self.vertical_offset_px = vertical_offset_px
        self.duration = duration
        self.log = logging.getLogger(self.__class__.__name__)

    def display(
        self,
        message: str,
        position: Position | str = Position.BOTTOM,
        duration: Duration | None = None,
    ) -> None:
        if isinstance(position, str):
            position = Position.parse(position)
        placement = placement_for(position, self.vertical_offset_px)
        self._render(message, placement, duration or self.duration)

    @abstractmethod
    def _render(self, message: str, placement: Placement, duration: Duration) -> None:
        pass


class LogNotifier(Notifier):
    def _render(self, message: str, placement: Placement, duration: Duration) -> None:
        self.log.info(
            f"{message} [gravity={placement.gravity!r}, "
            f"offset=({placement.x_offset}, {placement.y_offset}), "
            f"duration={duration.value}]"
        )
