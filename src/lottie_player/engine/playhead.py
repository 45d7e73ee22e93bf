"""
Playhead - runtime playback position of one player (not persisted).

Tracks the fractional frame plus the per-cycle bookkeeping the loop
controller and the transition evaluator read:
- first_render: when the current state was first rendered (OnAfter / OnShow)
- intermission: countdown held at a boundary between loops
- loops_completed: loops counted for the loop policy and OnComplete
- bounce_sign: current bounce direction, only ever +1.0 or -1.0
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class IntermissionTimer:
    """One-shot countdown in seconds"""

    duration: float
    elapsed: float = 0.0

    def tick(self, dt: float) -> bool:
        """Advance by dt seconds, return True once finished"""
        self.elapsed += dt
        return self.finished

    @property
    def finished(self) -> bool:
        return self.elapsed >= self.duration

    @property
    def remaining(self) -> float:
        return max(0.0, self.duration - self.elapsed)


@dataclass
class Playhead:
    """
    The playhead of a player.

    Attributes:
        frame: The frame being rendered
        first_render: Monotonic timestamp of the first tick in the current state
        intermission: Active intermission timer, if any
        loops_completed: Loops counted since the state was entered
        bounce_sign: Direction multiplier used by BOUNCE play mode
    """

    frame: float = 0.0
    first_render: Optional[float] = None
    intermission: Optional[IntermissionTimer] = None
    loops_completed: int = 0
    bounce_sign: float = field(default=1.0)

    def seek(self, frame: float) -> None:
        """Seek to a given frame"""
        self.frame = float(frame)

    def mark_rendered(self, now: float) -> None:
        """Remember the first tick this state was rendered"""
        if self.first_render is None:
            self.first_render = now

    def elapsed_since_first_render(self, now: float) -> Optional[float]:
        if self.first_render is None:
            return None
        return now - self.first_render

    def start_intermission(self, duration: float) -> None:
        self.intermission = IntermissionTimer(duration)

    @property
    def in_intermission(self) -> bool:
        return self.intermission is not None

    def flip_bounce(self) -> None:
        self.bounce_sign = -1.0 if self.bounce_sign > 0 else 1.0

    def reset_cycle(self) -> None:
        """
        Forget everything tied to the current state.

        Called on every state swap: a running intermission is discarded, not resumed.
        """
        self.intermission = None
        self.loops_completed = 0
        self.first_render = None
        self.bounce_sign = 1.0

    def __repr__(self) -> str:
        return (
            f"Playhead(frame={self.frame:.3f}, "
            f"loops={self.loops_completed}, "
            f"bounce={'+' if self.bounce_sign > 0 else '-'}, "
            f"intermission={self.intermission.remaining if self.intermission else None})"
        )
