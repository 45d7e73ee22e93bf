"""
Per-tick input snapshot

Captured once per tick and shared read-only by every player ticked in that pass.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PointerSignal:
    """
    Result of the external hit test for one player.

    Attributes:
        is_inside: Pointer is inside the player's rendered bounding box
        primary_button_just_pressed: Primary button went down this tick
    """
    is_inside: bool = False
    primary_button_just_pressed: bool = False


NO_POINTER = PointerSignal()


@dataclass(frozen=True)
class TickContext:
    """
    Immutable clock + pointer snapshot for one tick.

    Attributes:
        now: Monotonic time in seconds
        dt: Seconds elapsed since the previous tick (>= 0)
        pointer: Hit-test result for the player being ticked
    """
    now: float
    dt: float
    pointer: PointerSignal = field(default=NO_POINTER)

    def __post_init__(self):
        if self.dt < 0:
            raise ValueError(f"dt must be >= 0, got {self.dt}")

    def with_pointer(self, pointer: PointerSignal) -> "TickContext":
        return TickContext(now=self.now, dt=self.dt, pointer=pointer)
