"""Tests for the structured category logger"""

import pytest

from lottie_player.models.enums import LogCategory, LogLevel
from lottie_player.utils.logger import Colors, Logger, get_category_logger, get_logger


@pytest.fixture
def logger():
    return Logger(min_level=LogLevel.DEBUG, use_colors=False)


class TestLogger:

    def test_output_format(self, logger, capsys):
        logger.info(LogCategory.STATE, "Player state swapped", player="button", state="idle → hover")

        lines = capsys.readouterr().out.splitlines()
        assert "STATE" in lines[0]
        assert "Player state swapped" in lines[0]
        assert lines[1].strip() == "├─ player: button"
        assert lines[2].strip() == "└─ state: idle → hover"

    def test_min_level_filters(self, capsys):
        logger = Logger(min_level=LogLevel.WARN, use_colors=False)
        logger.info(LogCategory.ENGINE, "hidden")
        logger.warn(LogCategory.ENGINE, "shown")

        out = capsys.readouterr().out
        assert "hidden" not in out
        assert "shown" in out

    def test_listener_receives_records(self, logger):
        records = []
        logger.add_listener(lambda ts, level, category, message: records.append((level, category, message)))

        logger.for_category(LogCategory.ASSET).warn("Asset missing", asset="x")

        assert records == [("WARN", "ASSET", "Asset missing (asset: x)")]

    def test_remove_listener(self, logger):
        records = []
        listener = lambda *args: records.append(args)
        logger.add_listener(listener)
        logger.remove_listener(listener)

        logger.error(LogCategory.SYSTEM, "nobody hears this")

        assert records == []

    def test_bound_logger_category_override(self, logger):
        records = []
        logger.add_listener(lambda ts, level, category, message: records.append(category))
        bound = logger.for_category(LogCategory.PLAYBACK)

        bound.info("a")
        bound.info("b", category=LogCategory.TRANSITION)
        bound.with_category(LogCategory.CONFIG).info("c")

        assert records == ["PLAYBACK", "TRANSITION", "CONFIG"]

    def test_global_singleton(self):
        assert get_logger() is get_logger()
        assert get_category_logger(LogCategory.GENERAL)._base is get_logger()

    def test_plain_output_has_no_escape_codes(self, logger, capsys):
        logger.warn(LogCategory.CONFIG, "Unknown key", key="volume")

        assert "\033[" not in capsys.readouterr().out

    def test_colored_output_wraps_category_and_message(self, capsys):
        logger = Logger(use_colors=True)
        logger.info(LogCategory.TRANSITION, "Triggered")

        line = capsys.readouterr().out.splitlines()[0]
        assert Colors.MAGENTA + "TRANSITION" in line
        assert Colors.GREEN + "Triggered" + Colors.RESET in line

    def test_listener_text_is_uncolored(self):
        logger = Logger(use_colors=True)
        records = []
        logger.add_listener(lambda ts, level, category, message: records.append(message))

        logger.info(LogCategory.ENGINE, "Started", fps=60)

        assert records == ["Started (fps: 60)"]
