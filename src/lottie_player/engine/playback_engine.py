"""
PlaybackEngine - ticks every registered player at a target FPS.

Architecture:
  - Players are registered by name and share one AssetRegistry
  - Each loop iteration captures ONE clock snapshot (now, dt) and one pointer
    snapshot per player, then ticks all players with it
  - Players are independent: an error in one player's tick is logged and the
    others keep running
  - Supports pause/step/FPS control for debugging, like the render loop it
    feeds
"""

from __future__ import annotations
import asyncio
import time
from collections import deque
from typing import Callable, Deque, Dict, List, Optional

from lottie_player.models.enums import LogCategory
from lottie_player.models.signals import NO_POINTER, PointerSignal, TickContext
from lottie_player.services.asset_registry import AssetRegistry
from lottie_player.services.state_machine import Player, TickResult
from lottie_player.utils.logger import get_logger

log = get_logger().for_category(LogCategory.ENGINE)

PointerProvider = Callable[[str], PointerSignal]
Clock = Callable[[], float]


class PlaybackEngine:
    """
    Drives many players from a single asyncio task.

    Example:
        engine = PlaybackEngine(registry, fps=60, pointer_provider=hit_test)
        engine.add_player("button", player)
        await engine.start()
        ...
        await engine.stop()
    """

    def __init__(
        self,
        registry: Optional[AssetRegistry] = None,
        fps: int = 60,
        pointer_provider: Optional[PointerProvider] = None,
        clock: Clock = time.monotonic,
    ):
        """
        Initialize PlaybackEngine.

        Args:
            registry: Asset timing provider shared by all players
            fps: Target tick frequency (1-240, default 60)
            pointer_provider: Returns the hit-test result for a player name
            clock: Monotonic time source in seconds
        """
        self.registry = registry or AssetRegistry()
        self.fps = max(1, min(fps, 240))
        self.pointer_provider = pointer_provider
        self.clock = clock

        self.players: Dict[str, Player] = {}
        self.last_results: Dict[str, TickResult] = {}

        # Runtime state
        self.running = False
        self.paused = False
        self.step_requested = False
        self.tick_task: Optional[asyncio.Task] = None
        self._last_tick: Optional[float] = None

        # Metrics
        self.tick_times: Deque[float] = deque(maxlen=300)
        self.ticks = 0
        self.swaps = 0
        self.errors = 0

        log.info("PlaybackEngine initialized", fps=self.fps)

    # === Player Registration ===

    def add_player(self, name: str, player: Player) -> None:
        """Register a player; it starts using the engine's asset registry."""
        if name in self.players:
            log.warn(f"Replacing already registered player '{name}'")
        player.name = name
        player.registry = self.registry
        self.players[name] = player
        log.info("Player registered", player=name, initial=player.state().id)

    def remove_player(self, name: str) -> Optional[Player]:
        player = self.players.pop(name, None)
        self.last_results.pop(name, None)
        if player is not None:
            log.info("Player removed", player=name)
        return player

    def get_player(self, name: str) -> Optional[Player]:
        return self.players.get(name)

    # === Controls ===

    def pause(self) -> None: self.paused = True

    def resume(self) -> None:
        self.paused = False
        # Don't replay the paused time into the playheads
        self._last_tick = None

    def step_frame(self) -> None: self.step_requested = True

    def set_fps(self, fps: int) -> None:
        self.fps = max(1, min(fps, 240))
        log.info("Target FPS changed", fps=self.fps)

    async def start(self) -> None:
        """Start the tick loop."""
        if self.running:
            log.warn("PlaybackEngine already running")
            return

        self.running = True
        self._last_tick = None
        self.tick_task = asyncio.create_task(self._tick_loop())
        log.info(f"PlaybackEngine tick loop started @ {self.fps} FPS")

    async def stop(self) -> None:
        """Stop the tick loop."""
        if not self.running:
            return
        self.running = False
        if self.tick_task:
            self.tick_task.cancel()
            try:
                await self.tick_task
            except asyncio.CancelledError:
                pass
            self.tick_task = None

        log.info("PlaybackEngine stopped", ticks=self.ticks, swaps=self.swaps, errors=self.errors)

    # === Ticking ===

    def tick_once(self, now: Optional[float] = None) -> Dict[str, TickResult]:
        """
        Tick every player once with a shared clock snapshot.

        Args:
            now: Monotonic time for this tick (engine clock if omitted)

        Returns:
            Tick results keyed by player name (players that raised are omitted)
        """
        now = self.clock() if now is None else now
        dt = 0.0 if self._last_tick is None else max(0.0, now - self._last_tick)
        self._last_tick = now

        base_ctx = TickContext(now=now, dt=dt)
        results: Dict[str, TickResult] = {}

        for name, player in list(self.players.items()):
            pointer = self.pointer_provider(name) if self.pointer_provider else NO_POINTER
            try:
                result = player.tick(base_ctx.with_pointer(pointer))
            except Exception as e:
                self.errors += 1
                log.error(f"Tick failed for player '{name}'", error=str(e), error_type=type(e).__name__)
                continue

            if result.swapped:
                self.swaps += 1
            results[name] = result

        self.last_results.update(results)
        self.ticks += 1
        self.tick_times.append(now)
        return results

    async def _tick_loop(self) -> None:
        """Main tick loop @ target FPS."""
        frame_delay = 1.0 / self.fps
        log.info(f"Tick loop @ {self.fps} FPS (delay={frame_delay * 1000:.2f}ms)")

        while self.running:
            if self.paused and not self.step_requested:
                await asyncio.sleep(0.01)
                continue

            self.tick_once()

            self.step_requested = False
            frame_delay = 1.0 / self.fps
            await asyncio.sleep(frame_delay)

    # === Metrics ===

    def get_actual_fps(self) -> float:
        """Measured ticks per second over recent ticks."""
        if len(self.tick_times) < 2:
            return 0.0
        duration = self.tick_times[-1] - self.tick_times[0]
        if duration <= 0:
            return 0.0
        return (len(self.tick_times) - 1) / duration

    def get_metrics(self) -> Dict:
        return {
            "fps_target": self.fps,
            "fps_actual": self.get_actual_fps(),
            "ticks": self.ticks,
            "swaps": self.swaps,
            "errors": self.errors,
            "players": len(self.players),
        }

    def snapshot(self) -> List[Dict]:
        return [player.snapshot() for player in self.players.values()]

    def __repr__(self) -> str:
        return f"PlaybackEngine(players={len(self.players)}, fps={self.fps}, running={self.running})"
