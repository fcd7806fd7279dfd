import logging

import pytest

from battery_showcase.notifier_utils import (
    Duration,
    Gravity,
    LogNotifier,
    Placement,
    Position,
    placement_for,
)

from .conftest import RecordingNotifier


class TestPosition:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("top", Position.TOP),
            ("TOP", Position.TOP),
            ("Top", Position.TOP),
            ("center", Position.CENTER),
            ("CeNtEr", Position.CENTER),
            ("bottom", Position.BOTTOM),
            ("", Position.BOTTOM),
            ("left", Position.BOTTOM),
            (" top", Position.BOTTOM),
        ],
    )
    def test_parse(self, name: str, expected: Position):
        assert Position.parse(name) is expected


class TestPlacement:
    def test_top(self):
        assert placement_for(Position.TOP) == Placement(
            Gravity.TOP | Gravity.CENTER_HORIZONTAL, 0, 150
        )

    def test_center(self):
        assert placement_for(Position.CENTER, vertical_offset_px=99) == Placement(
            Gravity.CENTER, 0, 0
        )

    def test_bottom(self):
        assert placement_for(Position.BOTTOM, vertical_offset_px=40) == Placement(
            Gravity.BOTTOM | Gravity.CENTER_HORIZONTAL, 0, 40
        )


class TestNotifier:
    def test_string_positions_are_parsed(self, notifier: RecordingNotifier):
        notifier.display("a", "Top")
        notifier.display("b", "center")
        notifier.display("c", "nowhere")

        assert [p.gravity for p in notifier.placements] == [
            Gravity.TOP | Gravity.CENTER_HORIZONTAL,
            Gravity.CENTER,
            Gravity.BOTTOM | Gravity.CENTER_HORIZONTAL,
        ]

    def test_log_notifier_renders_through_logging(self, caplog):
        caplog.set_level(logging.INFO, logger="LogNotifier")
        notifier = LogNotifier(vertical_offset_px=10, duration=Duration.LONG)
        notifier.display("Battery level: 42%", Position.TOP)

        [record] = [r for r in caplog.records if r.name == "LogNotifier"]
        assert "Battery level: 42%" in record.getMessage()
        assert "offset=(0, 10)" in record.getMessage()
        assert "duration=long" in record.getMessage()
