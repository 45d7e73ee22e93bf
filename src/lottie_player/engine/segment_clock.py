"""
Segment clock

Turns elapsed wall time into a signed frame delta.
"""

from lottie_player.models.playback_options import PlaybackOptions
from lottie_player.models.timing import validate_rate


def advance(dt: float, options: PlaybackOptions, frame_rate: float, bounce_sign: float = 1.0) -> float:
    """
    Compute the raw frame delta for one tick.

    delta = dt * speed * frame_rate * direction sign * bounce sign

    Args:
        dt: Seconds elapsed since the previous tick (>= 0)
        options: Playback options providing speed and direction
        frame_rate: Composition frame rate
        bounce_sign: +1.0 or -1.0 from the playhead

    Raises:
        InvalidPlaybackRateError: frame_rate or speed is not positive
        ValueError: dt is negative
    """
    if dt < 0:
        raise ValueError(f"dt must be >= 0, got {dt}")
    frame_rate = validate_rate("frame_rate", frame_rate)
    speed = validate_rate("speed", options.speed)
    return dt * speed * frame_rate * options.direction.sign * bounce_sign
