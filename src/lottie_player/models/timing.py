"""
Timing models

Segment: half-open frame range [start, end).
AnimationTimingDescriptor: read-only per-asset timing supplied by the asset loader.
"""

import math
from dataclasses import dataclass

from lottie_player.models.errors import InvalidPlaybackRateError


def validate_rate(name: str, value: float) -> float:
    """Reject non-positive, NaN or infinite rates instead of letting them reach the playhead"""
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise InvalidPlaybackRateError(name, value)
    if math.isnan(value) or math.isinf(value) or value <= 0:
        raise InvalidPlaybackRateError(name, value)
    return value


@dataclass(frozen=True)
class Segment:
    """Half-open frame range [start, end)"""
    start: float = -math.inf
    end: float = math.inf

    @classmethod
    def full(cls) -> "Segment":
        """Unbounded segment (resolves to the whole composition range)"""
        return cls()

    @property
    def is_bounded(self) -> bool:
        return math.isfinite(self.start) and math.isfinite(self.end)

    def __repr__(self) -> str:
        return f"Segment({self.start}..{self.end})"


@dataclass(frozen=True)
class AnimationTimingDescriptor:
    """
    Immutable timing of one animation asset.

    Attributes:
        frame_rate: Frames per second of the composition (> 0)
        frame_range: Composition frames as [start, end)
    """
    frame_rate: float
    frame_range: Segment

    def __post_init__(self):
        object.__setattr__(self, "frame_rate", validate_rate("frame_rate", self.frame_rate))

    @classmethod
    def from_frames(cls, frame_rate: float, start: float, end: float) -> "AnimationTimingDescriptor":
        return cls(frame_rate=frame_rate, frame_range=Segment(float(start), float(end)))

    @property
    def duration(self) -> float:
        """Composition length in seconds at speed 1.0"""
        return (self.frame_range.end - self.frame_range.start) / self.frame_rate
