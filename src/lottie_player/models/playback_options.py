"""
Playback options

Immutable playback policy of a player, optionally overridden per state.
"""

from dataclasses import dataclass, field, replace
from typing import Optional

from lottie_player.models.enums import LoopKind, PlaybackDirection, PlaybackPlayMode
from lottie_player.models.errors import PlaybackConfigError
from lottie_player.models.timing import Segment, validate_rate


@dataclass(frozen=True)
class LoopBehavior:
    """
    How often to loop.

    Build with LoopBehavior.do_not_loop(), LoopBehavior.amount(n) or
    LoopBehavior.loop().
    """
    kind: LoopKind = LoopKind.LOOP
    count: int = 0

    def __post_init__(self):
        if self.kind == LoopKind.AMOUNT and self.count < 0:
            raise PlaybackConfigError(
                f"Loop amount must be >= 0, got {self.count}",
                details={"count": self.count},
            )

    @classmethod
    def do_not_loop(cls) -> "LoopBehavior":
        return cls(LoopKind.DO_NOT_LOOP)

    @classmethod
    def amount(cls, count: int) -> "LoopBehavior":
        return cls(LoopKind.AMOUNT, int(count))

    @classmethod
    def loop(cls) -> "LoopBehavior":
        return cls(LoopKind.LOOP)

    def allows(self, loops_completed: int) -> bool:
        """Whether another loop may start after `loops_completed` loops"""
        if self.kind == LoopKind.LOOP:
            return True
        if self.kind == LoopKind.AMOUNT:
            return loops_completed < self.count
        return False

    def required_loops(self) -> int:
        """Loops that must complete before the completion boundary counts"""
        if self.kind == LoopKind.AMOUNT:
            return self.count
        return 0

    def __repr__(self) -> str:
        if self.kind == LoopKind.AMOUNT:
            return f"LoopBehavior.AMOUNT({self.count})"
        return f"LoopBehavior.{self.kind.name}"


@dataclass(frozen=True)
class PlaybackOptions:
    """
    Playback options which adjust the playback of an asset.

    Attributes:
        autoplay: Start playing as soon as the state is entered
        direction: NORMAL (first → last frame) or REVERSE
        speed: Multiplier, 1.0 is normal speed (> 0)
        intermission: Seconds held at the boundary between loops (>= 0)
        play_mode: NORMAL wraps, BOUNCE reverses at every boundary
        looping: Loop policy
        segments: Frames to play; values outside the composition are ignored
    """
    autoplay: bool = True
    direction: PlaybackDirection = PlaybackDirection.NORMAL
    speed: float = 1.0
    intermission: float = 0.0
    play_mode: PlaybackPlayMode = PlaybackPlayMode.NORMAL
    looping: LoopBehavior = field(default_factory=LoopBehavior.loop)
    segments: Segment = field(default_factory=Segment.full)

    def __post_init__(self):
        object.__setattr__(self, "speed", validate_rate("speed", self.speed))
        if self.intermission < 0:
            raise PlaybackConfigError(
                f"Intermission must be >= 0 seconds, got {self.intermission}",
                details={"intermission": self.intermission},
            )

    def with_changes(self, **changes) -> "PlaybackOptions":
        """Return a copy with the given fields replaced (validated again)"""
        return replace(self, **changes)


DEFAULT_OPTIONS = PlaybackOptions()


def resolve_options(override: Optional[PlaybackOptions], fallback: Optional[PlaybackOptions]) -> PlaybackOptions:
    """Target override wins, then the current effective options, then defaults"""
    return override or fallback or DEFAULT_OPTIONS
