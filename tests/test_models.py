"""
Tests for the playback data models: options, loop policy, timing, transitions,
player states and themes.
"""

import math

import pytest

from lottie_player.models.enums import LoopKind, PlaybackDirection, PlaybackPlayMode, TransitionKind
from lottie_player.models.errors import InvalidPlaybackRateError, PlaybackConfigError
from lottie_player.models.player_state import PlayerState
from lottie_player.models.playback_options import (
    DEFAULT_OPTIONS,
    LoopBehavior,
    PlaybackOptions,
    resolve_options,
)
from lottie_player.models.signals import PointerSignal, TickContext
from lottie_player.models.theme import Theme, parse_color
from lottie_player.models.timing import AnimationTimingDescriptor, Segment
from lottie_player.models.transition import (
    OnAfter,
    OnComplete,
    OnMouseEnter,
    OnMouseLeave,
    OnShow,
    transition_from_dict,
)


class TestPlaybackOptions:

    def test_defaults(self):
        options = PlaybackOptions()
        assert options.autoplay is True
        assert options.direction == PlaybackDirection.NORMAL
        assert options.speed == 1.0
        assert options.intermission == 0.0
        assert options.play_mode == PlaybackPlayMode.NORMAL
        assert options.looping == LoopBehavior.loop()
        assert options.segments == Segment(-math.inf, math.inf)

    def test_negative_intermission_rejected(self):
        with pytest.raises(PlaybackConfigError):
            PlaybackOptions(intermission=-1)

    def test_with_changes_returns_copy(self):
        options = PlaybackOptions()
        faster = options.with_changes(speed=3)

        assert faster.speed == 3.0
        assert options.speed == 1.0

    def test_resolve_options_priority(self):
        override = PlaybackOptions(speed=2)
        fallback = PlaybackOptions(speed=3)

        assert resolve_options(override, fallback) is override
        assert resolve_options(None, fallback) is fallback
        assert resolve_options(None, None) is DEFAULT_OPTIONS


class TestLoopBehavior:

    def test_allows(self):
        assert LoopBehavior.loop().allows(1000)
        assert not LoopBehavior.do_not_loop().allows(0)
        assert LoopBehavior.amount(2).allows(1)
        assert not LoopBehavior.amount(2).allows(2)

    def test_required_loops(self):
        assert LoopBehavior.loop().required_loops() == 0
        assert LoopBehavior.do_not_loop().required_loops() == 0
        assert LoopBehavior.amount(3).required_loops() == 3

    def test_amount_zero_behaves_like_do_not_loop(self):
        assert LoopBehavior.amount(0).allows(0) == LoopBehavior.do_not_loop().allows(0)

    def test_negative_amount_rejected(self):
        with pytest.raises(PlaybackConfigError):
            LoopBehavior.amount(-1)

    def test_repr(self):
        assert repr(LoopBehavior.amount(2)) == "LoopBehavior.AMOUNT(2)"
        assert LoopBehavior.loop().kind == LoopKind.LOOP


class TestTiming:

    def test_descriptor_rejects_bad_frame_rate(self):
        with pytest.raises(InvalidPlaybackRateError):
            AnimationTimingDescriptor.from_frames(0, 0, 10)

    def test_duration(self):
        assert AnimationTimingDescriptor.from_frames(30, 0, 60).duration == pytest.approx(2.0)

    def test_full_segment_is_unbounded(self):
        assert not Segment.full().is_bounded
        assert Segment(0, 10).is_bounded


class TestSignals:

    def test_negative_dt_rejected(self):
        with pytest.raises(ValueError):
            TickContext(now=1.0, dt=-0.1)

    def test_with_pointer_keeps_clock(self):
        ctx = TickContext(now=2.0, dt=0.5)
        inside = ctx.with_pointer(PointerSignal(is_inside=True))

        assert inside.now == 2.0
        assert inside.dt == 0.5
        assert inside.pointer.is_inside
        assert not ctx.pointer.is_inside


class TestTransitions:

    def test_kinds(self):
        assert OnAfter("a", seconds=1).kind == TransitionKind.ON_AFTER
        assert OnComplete("a").kind == TransitionKind.ON_COMPLETE
        assert OnShow("a").kind == TransitionKind.ON_SHOW

    def test_on_after_negative_seconds(self):
        with pytest.raises(PlaybackConfigError):
            OnAfter("a", seconds=-1)

    def test_repr(self):
        assert repr(OnMouseEnter("hover")) == "OnMouseEnter(→ hover)"
        assert repr(OnAfter("idle", seconds=2)) == "OnAfter(2s → idle)"

    @pytest.mark.parametrize("trigger", ["mouse_enter", "on_mouse_enter", "OnMouseEnter", "MouseEnter", "mouse-enter"])
    def test_from_dict_accepts_trigger_spellings(self, trigger):
        assert transition_from_dict({"type": trigger, "target": "hover"}) == OnMouseEnter("hover")

    def test_from_dict_after(self):
        assert transition_from_dict({"type": "after", "target": "idle", "seconds": 2.5}) == OnAfter("idle", 2.5)

    def test_from_dict_after_requires_seconds(self):
        with pytest.raises(PlaybackConfigError):
            transition_from_dict({"type": "after", "target": "idle"})

    def test_from_dict_unknown_trigger(self):
        with pytest.raises(PlaybackConfigError):
            transition_from_dict({"type": "double_click", "target": "idle"})

    def test_from_dict_missing_target(self):
        with pytest.raises(PlaybackConfigError):
            transition_from_dict({"type": "show"})


class TestPlayerState:

    def test_builder_returns_new_states(self):
        base = PlayerState.new("idle")
        built = base.with_asset("button").with_transition(OnMouseEnter("hover")).reset_playhead_on_start()

        assert base.asset is None
        assert base.transitions == ()
        assert built.asset == "button"
        assert built.reset_on_start
        assert not built.reset_on_exit

    def test_transitions_keep_order(self):
        state = PlayerState.new("s").with_transition(OnMouseEnter("a")).with_transition(OnMouseLeave("b"))
        assert list(state.targets()) == ["a", "b"]

    def test_with_transitions_replaces(self):
        state = PlayerState.new("s").with_transition(OnShow("a")).with_transitions(OnShow("b"))
        assert list(state.targets()) == ["b"]


class TestTheme:

    def test_parse_color(self):
        assert parse_color("#FF8000") == (255, 128, 0, 255)
        assert parse_color("#00000080") == (0, 0, 0, 128)
        assert parse_color((1, 2, 3)) == (1, 2, 3, 255)

    @pytest.mark.parametrize("value", ["#FFF", "#GGGGGG", (256, 0, 0), (1, 2)])
    def test_invalid_colors(self, value):
        with pytest.raises(PlaybackConfigError):
            parse_color(value)

    def test_add_returns_copy(self):
        theme = Theme({"bg": "#000000"})
        other = theme.add("fg", "#FFFFFF")

        assert "fg" not in theme
        assert len(other) == 2
        assert other.get("fg") == (255, 255, 255, 255)

    def test_equal_themes_hash_equal(self):
        assert hash(Theme({"bg": "#000000"})) == hash(Theme({"bg": (0, 0, 0)}))

    def test_state_with_theme_is_hashable(self):
        state = PlayerState.new("hover").with_theme(Theme({"bg": "#FF0000"}))
        same = PlayerState.new("hover").with_theme(Theme({"bg": (255, 0, 0, 255)}))

        assert hash(state) == hash(same)
        assert len({state, same}) == 1

    def test_edit_in_place(self):
        theme = Theme({"bg": "#000000"})
        theme.edit("bg", (10, 20, 30))

        assert theme.get("bg") == (10, 20, 30, 255)
        assert list(theme.layers()) == ["bg"]
        assert theme.to_dict() == {"bg": (10, 20, 30, 255)}
