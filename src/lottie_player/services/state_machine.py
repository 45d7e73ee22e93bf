"""
Player State Machine

Owns the named states of one animated instance, its playhead and the swap
protocol between states.

Per tick (strict order):
  1. apply queued commands (seek / speed / direction / loop / play mode / segments)
  2. advance the playhead with the current state's playback options
  3. evaluate the current state's transitions
  4. perform at most one state swap (or re-queue it while the target asset is not ready)

States live in an arena (list + id → index map). Every transition target is
resolved at construction, so runtime lookups cannot fail.
"""

from collections import deque
from dataclasses import dataclass, replace
from typing import Any, Deque, Dict, Hashable, Iterable, Iterator, List, Optional

from lottie_player.engine import segment_clock
from lottie_player.engine.loop_controller import LoopController, SegmentBounds
from lottie_player.engine.playhead import Playhead
from lottie_player.models.enums import (
    LogCategory,
    PlaybackDirection,
    PlaybackPlayMode,
    PlayerCommandType,
)
from lottie_player.models.errors import PlaybackConfigError, UnknownStateError
from lottie_player.models.player_state import PlayerState
from lottie_player.models.playback_options import (
    DEFAULT_OPTIONS,
    LoopBehavior,
    PlaybackOptions,
    resolve_options,
)
from lottie_player.models.signals import TickContext
from lottie_player.models.theme import Theme
from lottie_player.models.timing import Segment, validate_rate
from lottie_player.services.asset_registry import AssetRegistry
from lottie_player.services.transition_evaluator import TransitionEvaluator
from lottie_player.utils.logger import get_logger

log = get_logger().for_category(LogCategory.STATE)


@dataclass(frozen=True)
class Pending:
    """A requested state swap; attempts counts ticks it was re-queued"""
    target: str
    attempts: int = 0


@dataclass(frozen=True)
class PlayerCommand:
    """Imperative command applied at the start of the next tick"""
    type: PlayerCommandType
    value: Any = None


@dataclass(frozen=True)
class TickResult:
    """What happened to a player during one tick"""
    frame: float
    state: Optional[str]
    swapped: bool = False
    triggered: Optional[str] = None
    playing: bool = False


class Player:
    """
    A player that drives playback and transitions of one animated instance.

    Example:
        player = (
            Player.new("idle", asset="button.json", registry=registry)
            .with_state(PlayerState.new("idle").with_transition(OnMouseEnter("hover")))
            .with_state(PlayerState.new("hover").with_transition(OnMouseLeave("idle")))
            .build()
        )
        result = player.tick(TickContext(now=time.monotonic(), dt=1 / 60))
    """

    def __init__(
        self,
        initial_state: str,
        states: Iterable[PlayerState],
        asset: Optional[Hashable] = None,
        registry: Optional[AssetRegistry] = None,
        options: Optional[PlaybackOptions] = None,
        theme: Optional[Theme] = None,
        name: str = "player",
    ):
        """
        Build and validate a player.

        Args:
            initial_state: Id of the state entered on the first tick
            states: All states of this player
            asset: Asset shown by states that don't override it
            registry: Timing descriptor provider (a private empty one if omitted)
            options: Playback options used until a state overrides them
            theme: Theme used until a state overrides it
            name: Label used in logs

        Raises:
            PlaybackConfigError: duplicate state ids
            UnknownStateError: initial state or a transition target is not defined
        """
        self.name = name
        self._states: List[PlayerState] = []
        self._index: Dict[str, int] = {}

        for state in states:
            if state.id in self._index:
                raise PlaybackConfigError(
                    f"Duplicate state '{state.id}' in player '{name}'",
                    details={"player": name, "state_id": state.id},
                    code="DUPLICATE_STATE",
                )
            self._index[state.id] = len(self._states)
            self._states.append(state)

        if initial_state not in self._index:
            raise UnknownStateError(initial_state)
        for state in self._states:
            for target in state.targets():
                if target not in self._index:
                    raise UnknownStateError(target, referenced_by=state.id)

        self._current: Optional[int] = None
        self.pending: Optional[Pending] = Pending(initial_state)

        self.started = False
        self.playing = False
        self.stopped = False

        self.playhead = Playhead()
        self.active_asset: Optional[Hashable] = asset
        self.options: PlaybackOptions = options or DEFAULT_OPTIONS
        self.theme: Optional[Theme] = theme
        self.registry = registry or AssetRegistry()

        self.evaluator = TransitionEvaluator()
        self._loop_controller = LoopController()
        self._commands: Deque[PlayerCommand] = deque()

        log.debug(
            "Player created",
            player=name,
            states=[s.id for s in self._states],
            initial=initial_state,
        )

    @classmethod
    def new(cls, initial_state: str, **kwargs) -> "PlayerBuilder":
        """Start building a player; see PlayerBuilder"""
        return PlayerBuilder(initial_state, **kwargs)

    # ============================================================
    # State access
    # ============================================================

    @property
    def current_state(self) -> Optional[str]:
        """Id of the active state, None before the first successful tick"""
        if self._current is None:
            return None
        return self._states[self._current].id

    @property
    def pending_state(self) -> Optional[str]:
        return self.pending.target if self.pending else None

    @property
    def frame(self) -> float:
        """Frame the renderer should sample"""
        return self.playhead.frame

    def state(self) -> PlayerState:
        """The active state, or the initial state before the first tick"""
        if self._current is not None:
            return self._states[self._current]
        return self._states[self._index[self.pending.target]]

    def get_state(self, state_id: str) -> PlayerState:
        index = self._index.get(state_id)
        if index is None:
            raise UnknownStateError(state_id)
        return self._states[index]

    def states(self) -> Iterator[PlayerState]:
        return iter(self._states)

    def is_playing(self) -> bool:
        return self.playing

    def is_stopped(self) -> bool:
        return self.stopped

    # ============================================================
    # Play controls (immediate)
    # ============================================================

    def play(self) -> None:
        """Play the animation"""
        self.playing = True
        self.stopped = False

    def pause(self) -> None:
        """Pause the animation. Transitions keep running."""
        self.playing = False

    def stop(self) -> None:
        """Stop the animation. Transitions don't run."""
        self.stopped = True

    def toggle_play(self) -> None:
        if self.stopped or not self.playing:
            self.play()
        else:
            self.pause()

    # ============================================================
    # Queued commands (applied at the start of the next tick)
    # ============================================================

    def seek(self, frame: float) -> None:
        self._commands.append(PlayerCommand(PlayerCommandType.SEEK, float(frame)))

    def set_speed(self, speed: float) -> None:
        """Raises InvalidPlaybackRateError right away for non-positive speeds"""
        self._commands.append(PlayerCommand(PlayerCommandType.SET_SPEED, validate_rate("speed", speed)))

    def set_direction(self, direction: PlaybackDirection) -> None:
        self._commands.append(PlayerCommand(PlayerCommandType.SET_DIRECTION, direction))

    def set_loop_behavior(self, looping: LoopBehavior) -> None:
        self._commands.append(PlayerCommand(PlayerCommandType.SET_LOOP_BEHAVIOR, looping))

    def set_play_mode(self, play_mode: PlaybackPlayMode) -> None:
        self._commands.append(PlayerCommand(PlayerCommandType.SET_PLAY_MODE, play_mode))

    def set_segments(self, start: float, end: float) -> None:
        self._commands.append(PlayerCommand(PlayerCommandType.SET_SEGMENTS, Segment(float(start), float(end))))

    @property
    def queued_commands(self) -> List[PlayerCommand]:
        return list(self._commands)

    def _apply_commands(self) -> None:
        while self._commands:
            command = self._commands.popleft()
            if command.type == PlayerCommandType.SEEK:
                self.playhead.seek(command.value)
            elif command.type == PlayerCommandType.SET_SPEED:
                self.options = self.options.with_changes(speed=command.value)
            elif command.type == PlayerCommandType.SET_DIRECTION:
                self.options = self.options.with_changes(direction=command.value)
            elif command.type == PlayerCommandType.SET_LOOP_BEHAVIOR:
                self.options = self.options.with_changes(looping=command.value)
            elif command.type == PlayerCommandType.SET_PLAY_MODE:
                self.options = self.options.with_changes(play_mode=command.value)
            elif command.type == PlayerCommandType.SET_SEGMENTS:
                self.options = self.options.with_changes(segments=command.value)
            log.debug("Command applied", player=self.name, command=command.type.name, value=command.value)

    # ============================================================
    # Transitions
    # ============================================================

    def request_transition(self, target: str) -> None:
        """
        Request a swap to `target` on the next swap step.

        The last request before a tick wins. Requesting the active state
        clears any pending request.

        Raises:
            UnknownStateError: target is not a state of this player
        """
        if target not in self._index:
            raise UnknownStateError(target)
        if self._current is not None and target == self.current_state:
            self.pending = None
            return
        self.pending = Pending(target)

    transition = request_transition

    def _requeue(self, reason: str) -> None:
        self.pending = replace(self.pending, attempts=self.pending.attempts + 1)
        if self.pending.attempts == 1:
            log.warn(
                "Not ready for state transition, re-queueing",
                player=self.name,
                target=self.pending.target,
                reason=reason,
            )
        else:
            log.debug("Still waiting for state transition", player=self.name,
                      target=self.pending.target, attempts=self.pending.attempts)

    def _perform_swap(self) -> bool:
        """Swap to the pending state. Returns True if the swap happened."""
        target_id = self.pending.target
        previous = self._states[self._current] if self._current is not None else None

        if previous is not None and previous.id == target_id:
            self.pending = None
            return False

        target = self._states[self._index[target_id]]
        target_asset = target.asset if target.asset is not None else self.active_asset
        asset_changed = target_asset != self.active_asset

        if asset_changed and not self.registry.is_ready(target_asset):
            self._requeue(f"asset '{target_asset}' not loaded")
            return False

        options = resolve_options(target.options, self.options)
        reset = (
            previous is None
            or previous.reset_on_exit
            or target.reset_on_start
            or asset_changed
        )
        if reset:
            timing = self.registry.get(target_asset)
            if timing is None:
                self._requeue(f"asset '{target_asset}' not loaded")
                return False
            bounds = SegmentBounds.resolve(options, timing)
            self.playhead.seek(bounds.entry_frame(options.direction))

        self.active_asset = target_asset
        self.options = options
        if target.theme is not None:
            self.theme = target.theme

        self.playhead.reset_cycle()
        self.started = False
        self.playing = False
        self._current = self._index[target_id]
        self.pending = None

        log.info(
            "Player state swapped",
            player=self.name,
            state=f"{previous.id if previous else '∅'} → {target_id}",
            reset_playhead=reset,
            frame=f"{self.playhead.frame:.3f}",
        )
        return True

    # ============================================================
    # Tick
    # ============================================================

    def tick(self, ctx: TickContext) -> TickResult:
        """
        Run one tick with the given clock + pointer snapshot.

        Returns:
            TickResult describing the frame, active state and whether a swap happened
        """
        self._apply_commands()

        swapped = False
        if self._current is None:
            swapped = self._perform_swap()
            if self._current is None:
                return self._result(swapped=False)

        if self.stopped:
            if not swapped and self.pending is not None:
                swapped = self._perform_swap()
            return self._result(swapped=swapped)

        triggered = None
        timing = self.registry.get(self.active_asset)
        if timing is not None:
            bounds = SegmentBounds.resolve(self.options, timing)
            LoopController.constrain(self.playhead, bounds)
            self.playhead.mark_rendered(ctx.now)

            if not self.started and self.options.autoplay:
                self.started = True
                self.playing = True

            if self.playing:
                delta = segment_clock.advance(ctx.dt, self.options, timing.frame_rate, self.playhead.bounce_sign)
                self._loop_controller.apply(self.playhead, delta, self.options, bounds, ctx.dt)

            triggered = self.evaluator.evaluate(
                self.state(), self.playhead, self.options, bounds, ctx.pointer, ctx.now
            )
            if triggered is not None:
                self.request_transition(triggered)

        if not swapped and self.pending is not None:
            swapped = self._perform_swap()

        return self._result(swapped=swapped, triggered=triggered)

    def _result(self, swapped: bool, triggered: Optional[str] = None) -> TickResult:
        return TickResult(
            frame=self.playhead.frame,
            state=self.current_state,
            swapped=swapped,
            triggered=triggered,
            playing=self.playing,
        )

    # ============================================================
    # Diagnostics
    # ============================================================

    def snapshot(self) -> Dict[str, Any]:
        """Plain dict of the runtime state (for logs / debugging)"""
        return {
            "name": self.name,
            "state": self.current_state,
            "pending": self.pending_state,
            "asset": self.active_asset,
            "frame": self.playhead.frame,
            "loops_completed": self.playhead.loops_completed,
            "bounce_sign": self.playhead.bounce_sign,
            "intermission_remaining": (
                self.playhead.intermission.remaining if self.playhead.intermission else None
            ),
            "started": self.started,
            "playing": self.playing,
            "stopped": self.stopped,
        }

    def __repr__(self) -> str:
        return (
            f"Player({self.name}, state={self.current_state}, "
            f"pending={self.pending_state}, frame={self.playhead.frame:.3f})"
        )


class PlayerBuilder:
    """
    Collects states for a Player and validates them on build().

    Example:
        player = Player.new("idle", registry=registry).with_state(idle).with_state(hover).build()
    """

    def __init__(self, initial_state: str, **player_kwargs):
        self.initial_state = initial_state
        self.player_kwargs = player_kwargs
        self.states: List[PlayerState] = []

    def with_state(self, state: PlayerState) -> "PlayerBuilder":
        self.states.append(state)
        return self

    def with_states(self, *states: PlayerState) -> "PlayerBuilder":
        self.states.extend(states)
        return self

    def build(self) -> Player:
        """Raises UnknownStateError / PlaybackConfigError on invalid setups"""
        return Player(self.initial_state, self.states, **self.player_kwargs)
