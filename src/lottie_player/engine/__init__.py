"""
Playback engine - frame clock, loop policy and playhead

PlaybackEngine lives in engine.playback_engine and is imported from there;
it depends on the services layer, which in turn uses this package.
"""

from .playhead import Playhead, IntermissionTimer
from . import segment_clock
from .loop_controller import LoopController, SegmentBounds

__all__ = [
    "Playhead",
    "IntermissionTimer",
    "segment_clock",
    "LoopController",
    "SegmentBounds",
]
