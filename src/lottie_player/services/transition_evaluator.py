"""
Transition Evaluator

Checks the current state's triggers in declared order and selects at most
one target per tick. Each player owns one evaluator, so pointer hover
edge-detection (`was_inside`) never leaks between players.
"""

from typing import Optional

from lottie_player.engine.loop_controller import SegmentBounds
from lottie_player.engine.playhead import Playhead
from lottie_player.models.enums import LogCategory, TransitionKind
from lottie_player.models.player_state import PlayerState
from lottie_player.models.playback_options import PlaybackOptions
from lottie_player.models.signals import PointerSignal
from lottie_player.models.transition import OnAfter, Transition
from lottie_player.utils.logger import get_logger

log = get_logger().for_category(LogCategory.TRANSITION)


class TransitionEvaluator:
    """
    Per-player trigger evaluation

    Conditions:
        ON_AFTER:       now - first_render >= seconds
        ON_COMPLETE:    frame == completion boundary and loops_completed >= required loops
        ON_MOUSE_ENTER: pointer went from outside to inside
        ON_MOUSE_LEAVE: pointer went from inside to outside
        ON_MOUSE_CLICK: pointer inside and primary button just pressed
        ON_SHOW:        first_render is set
    """

    def __init__(self):
        self.was_inside = False

    def evaluate(
        self,
        state: PlayerState,
        playhead: Playhead,
        options: PlaybackOptions,
        bounds: SegmentBounds,
        pointer: PointerSignal,
        now: float,
    ) -> Optional[str]:
        """
        Return the target of the first transition whose condition holds.

        Later transitions are not checked once one matches. The hover flag is
        updated after every evaluation regardless of the outcome.
        """
        entered = pointer.is_inside and not self.was_inside
        left = self.was_inside and not pointer.is_inside

        try:
            for transition in state.transitions:
                if self._holds(transition, playhead, options, bounds, pointer, now, entered, left):
                    log.debug(
                        "Transition triggered",
                        state=state.id,
                        trigger=transition.kind.name,
                        target=transition.target,
                    )
                    return transition.target
            return None
        finally:
            self.was_inside = pointer.is_inside

    @staticmethod
    def _holds(
        transition: Transition,
        playhead: Playhead,
        options: PlaybackOptions,
        bounds: SegmentBounds,
        pointer: PointerSignal,
        now: float,
        entered: bool,
        left: bool,
    ) -> bool:
        kind = transition.kind

        if isinstance(transition, OnAfter):
            elapsed = playhead.elapsed_since_first_render(now)
            return elapsed is not None and elapsed >= transition.seconds

        if kind == TransitionKind.ON_COMPLETE:
            # Under LOOP this fires on every boundary touch, not only once
            return (
                playhead.frame == bounds.completion_frame(options.direction)
                and playhead.loops_completed >= options.looping.required_loops()
            )

        if kind == TransitionKind.ON_MOUSE_ENTER:
            return entered

        if kind == TransitionKind.ON_MOUSE_LEAVE:
            return left

        if kind == TransitionKind.ON_MOUSE_CLICK:
            return pointer.is_inside and pointer.primary_button_just_pressed

        if kind == TransitionKind.ON_SHOW:
            return playhead.first_render is not None

        return False

    def reset(self) -> None:
        self.was_inside = False
