"""Tests for segment_clock.advance: wall time → signed frame delta"""

import math

import pytest

from lottie_player.engine import segment_clock
from lottie_player.models.enums import PlaybackDirection
from lottie_player.models.errors import InvalidPlaybackRateError
from lottie_player.models.playback_options import PlaybackOptions


class TestAdvance:

    def test_normal_direction(self):
        options = PlaybackOptions(speed=2.0)
        assert segment_clock.advance(0.5, options, 30) == pytest.approx(30.0)

    def test_reverse_direction_is_negative(self):
        options = PlaybackOptions(direction=PlaybackDirection.REVERSE)
        assert segment_clock.advance(1.0, options, 24) == pytest.approx(-24.0)

    def test_bounce_sign_flips_delta(self):
        options = PlaybackOptions()
        assert segment_clock.advance(1.0, options, 10, bounce_sign=-1.0) == pytest.approx(-10.0)

    def test_reverse_and_bounce_cancel_out(self):
        options = PlaybackOptions(direction=PlaybackDirection.REVERSE)
        assert segment_clock.advance(1.0, options, 10, bounce_sign=-1.0) == pytest.approx(10.0)

    def test_zero_dt_is_zero_delta(self):
        assert segment_clock.advance(0.0, PlaybackOptions(), 60) == 0.0

    def test_negative_dt_rejected(self):
        with pytest.raises(ValueError):
            segment_clock.advance(-0.1, PlaybackOptions(), 60)

    @pytest.mark.parametrize("frame_rate", [0, -30, math.nan, math.inf])
    def test_invalid_frame_rate_rejected(self, frame_rate):
        with pytest.raises(InvalidPlaybackRateError) as exc:
            segment_clock.advance(1.0, PlaybackOptions(), frame_rate)
        assert exc.value.code == "INVALID_PLAYBACK_RATE"
        assert exc.value.name == "frame_rate"


class TestPlaybackRateValidation:

    @pytest.mark.parametrize("speed", [0, -1.0, math.nan])
    def test_invalid_speed_rejected_at_construction(self, speed):
        with pytest.raises(InvalidPlaybackRateError):
            PlaybackOptions(speed=speed)

    def test_invalid_speed_rejected_on_change(self):
        with pytest.raises(InvalidPlaybackRateError):
            PlaybackOptions().with_changes(speed=0)
