"""
Loop Controller

Keeps the playhead inside its segment and applies the loop policy:
loop counting, bounce direction flips and intermission holds.

Bounds are inclusive numeric values derived from the exclusive segment end:
    start = max(segment.start, composition.start)
    end   = previous_representable(min(segment.end, composition.end))
so the playhead never lands exactly on the exclusive boundary.
"""

import math
from dataclasses import dataclass

from lottie_player.engine.playhead import Playhead
from lottie_player.models.enums import LogCategory, PlaybackDirection, PlaybackPlayMode
from lottie_player.models.playback_options import PlaybackOptions
from lottie_player.models.timing import AnimationTimingDescriptor
from lottie_player.utils.float_utils import clamp, previous_representable
from lottie_player.utils.logger import get_logger

log = get_logger().for_category(LogCategory.PLAYBACK)


@dataclass(frozen=True)
class SegmentBounds:
    """Inclusive playable range of a segment within a composition"""
    start: float
    end: float

    @classmethod
    def resolve(cls, options: PlaybackOptions, timing: AnimationTimingDescriptor) -> "SegmentBounds":
        start = max(options.segments.start, timing.frame_range.start)
        end = previous_representable(min(options.segments.end, timing.frame_range.end))
        return cls(start=start, end=end)

    @property
    def degenerate(self) -> bool:
        """end <= start: the segment is a single held frame at start"""
        return self.end <= self.start

    @property
    def length(self) -> float:
        return self.end - self.start

    def entry_frame(self, direction: PlaybackDirection) -> float:
        """Frame a fresh cycle starts from"""
        if self.degenerate or direction == PlaybackDirection.NORMAL:
            return self.start
        return self.end

    def completion_frame(self, direction: PlaybackDirection) -> float:
        """Boundary the playhead touches when a pass completes"""
        if self.degenerate:
            return self.start
        if direction == PlaybackDirection.NORMAL:
            return self.end
        return self.start

    def contains(self, frame: float) -> bool:
        return self.start <= frame <= self.end


class LoopController:
    """
    Applies segment bounds and the loop policy to a playhead.

    Per tick:
    1. An active intermission consumes the whole tick; the frame holds.
       On completion the timer clears and the frame snaps to the entry boundary.
    2. Otherwise the raw delta is added.
    3. An overrun past either boundary counts a loop (when the policy allows it),
       flips the bounce sign, starts an intermission or wraps the overshoot
       (reduced modulo the segment length). A disallowed loop clamps to the boundary.
       BOUNCE always rests on the boundary for the tick it was reached.
    """

    @staticmethod
    def constrain(playhead: Playhead, bounds: SegmentBounds) -> None:
        """Keep the playhead inside the bounds (segments may change between ticks)"""
        if bounds.degenerate:
            playhead.frame = bounds.start
        else:
            playhead.frame = clamp(playhead.frame, bounds.start, bounds.end)

    def apply(
        self,
        playhead: Playhead,
        delta: float,
        options: PlaybackOptions,
        bounds: SegmentBounds,
        dt: float,
    ) -> Playhead:
        """
        Advance the playhead by delta frames.

        Args:
            playhead: Playhead to update in place
            delta: Raw frame delta from the segment clock
            options: Effective playback options
            bounds: Resolved segment bounds
            dt: Seconds elapsed this tick (drives the intermission timer)

        Returns:
            The same playhead, updated
        """
        self.constrain(playhead, bounds)
        if bounds.degenerate:
            return playhead

        if playhead.intermission is not None:
            if playhead.intermission.tick(dt):
                playhead.intermission = None
                playhead.frame = bounds.entry_frame(options.direction)
                log.debug("Intermission finished", frame=playhead.frame)
            return playhead

        raw = playhead.frame + delta
        if raw > bounds.end:
            self._handle_overrun(playhead, raw, options, bounds, forward=True)
        elif raw < bounds.start:
            self._handle_overrun(playhead, raw, options, bounds, forward=False)
        else:
            playhead.frame = raw
        return playhead

    def _handle_overrun(
        self,
        playhead: Playhead,
        raw: float,
        options: PlaybackOptions,
        bounds: SegmentBounds,
        forward: bool,
    ) -> None:
        boundary = bounds.end if forward else bounds.start
        bounce = options.play_mode == PlaybackPlayMode.BOUNCE

        if options.looping.allows(playhead.loops_completed):
            playhead.loops_completed += 1
            if bounce:
                playhead.flip_bounce()

            if options.intermission > 0:
                playhead.start_intermission(options.intermission)
                playhead.frame = boundary
            elif forward:
                playhead.frame = bounds.start + math.fmod(raw - bounds.end, bounds.length)
            else:
                playhead.frame = bounds.end - math.fmod(bounds.start - raw, bounds.length)

            log.debug(
                "Loop completed",
                loops=playhead.loops_completed,
                frame=f"{playhead.frame:.3f}",
                intermission=playhead.in_intermission,
            )
        else:
            playhead.frame = boundary

        # Bounce touches the edge before reversing on the next tick
        if bounce:
            playhead.frame = boundary
