"""
Tests for PlaybackEngine: shared tick snapshot, error isolation and the
asyncio tick loop.
"""

import asyncio

import pytest

from lottie_player.engine.playback_engine import PlaybackEngine
from lottie_player.models.player_state import PlayerState
from lottie_player.models.signals import NO_POINTER, PointerSignal
from lottie_player.models.transition import OnMouseEnter
from lottie_player.services.state_machine import Player


def make_player(name="player"):
    return (
        Player.new("idle", asset="button", name=name)
        .with_state(PlayerState.new("idle").with_transition(OnMouseEnter("hover")))
        .with_state(PlayerState.new("hover"))
        .build()
    )


class ExplodingPlayer:
    """Stand-in player whose tick always fails"""

    def __init__(self):
        self.name = None
        self.registry = None

    def state(self):
        return PlayerState.new("boom")

    def tick(self, ctx):
        raise RuntimeError("boom")

    def snapshot(self):
        return {"name": self.name}


@pytest.fixture
def engine(registry):
    return PlaybackEngine(registry, fps=240)


class TestRegistration:

    def test_add_player_uses_engine_registry(self, engine, registry):
        player = make_player()
        engine.add_player("button", player)

        assert player.registry is registry
        assert player.name == "button"
        assert engine.get_player("button") is player

    def test_remove_player(self, engine):
        engine.add_player("button", make_player())

        assert engine.remove_player("button") is not None
        assert engine.remove_player("button") is None
        assert engine.get_player("button") is None

    def test_fps_is_clamped(self, registry):
        assert PlaybackEngine(registry, fps=0).fps == 1
        assert PlaybackEngine(registry, fps=1000).fps == 240


class TestTickOnce:

    def test_first_tick_has_zero_dt(self, engine):
        engine.add_player("button", make_player())

        results = engine.tick_once(now=100.0)

        assert results["button"].state == "idle"
        assert results["button"].frame == 0.0

    def test_dt_from_clock_snapshot(self, engine):
        engine.add_player("a", make_player())
        engine.add_player("b", make_player())
        engine.tick_once(now=0.0)

        results = engine.tick_once(now=0.5)

        # 10 fps asset, both players see the same dt
        assert results["a"].frame == pytest.approx(5.0)
        assert results["b"].frame == pytest.approx(5.0)

    def test_pointer_provider_per_player(self, registry):
        inside = {"a"}
        engine = PlaybackEngine(
            registry,
            pointer_provider=lambda name: PointerSignal(is_inside=True) if name in inside else NO_POINTER,
        )
        engine.add_player("a", make_player())
        engine.add_player("b", make_player())
        engine.tick_once(now=0.0)

        results = engine.tick_once(now=0.1)

        assert results["a"].state == "hover"
        assert results["b"].state == "idle"
        assert engine.swaps == 3

    def test_failing_player_does_not_stop_others(self, engine):
        engine.add_player("bad", ExplodingPlayer())
        engine.add_player("good", make_player())

        results = engine.tick_once(now=0.0)

        assert "bad" not in results
        assert results["good"].state == "idle"
        assert engine.errors == 1

    def test_resume_does_not_replay_paused_time(self, engine):
        engine.add_player("button", make_player())
        engine.tick_once(now=0.0)
        engine.pause()
        engine.resume()

        results = engine.tick_once(now=5.0)

        assert results["button"].frame == 0.0

    def test_metrics(self, engine):
        engine.add_player("button", make_player())
        engine.tick_once(now=0.0)
        engine.tick_once(now=0.5)

        metrics = engine.get_metrics()

        assert metrics["ticks"] == 2
        assert metrics["players"] == 1
        assert metrics["fps_actual"] == pytest.approx(2.0)
        assert engine.snapshot()[0]["state"] == "idle"


class TestTickLoop:

    @pytest.mark.asyncio
    async def test_start_and_stop(self, engine):
        engine.add_player("button", make_player())

        await engine.start()
        await asyncio.sleep(0.05)
        await engine.stop()

        assert engine.ticks > 0
        assert engine.tick_task is None
        assert engine.get_player("button").current_state == "idle"

    @pytest.mark.asyncio
    async def test_paused_loop_only_steps_on_request(self, engine):
        engine.add_player("button", make_player())
        engine.pause()

        await engine.start()
        await asyncio.sleep(0.03)
        assert engine.ticks == 0

        engine.step_frame()
        await asyncio.sleep(0.03)
        await engine.stop()

        assert engine.ticks == 1

    @pytest.mark.asyncio
    async def test_start_twice_is_ignored(self, engine):
        await engine.start()
        task = engine.tick_task
        await engine.start()

        assert engine.tick_task is task
        await engine.stop()
        assert not engine.running
