"""
Models package - Data models for the playback engine
"""

from .enums import (
    PlaybackDirection,
    PlaybackPlayMode,
    LoopKind,
    TransitionKind,
    PlayerCommandType,
    LogLevel,
    LogCategory,
)
from .errors import PlaybackError, PlaybackConfigError, UnknownStateError, InvalidPlaybackRateError
from .timing import Segment, AnimationTimingDescriptor
from .playback_options import LoopBehavior, PlaybackOptions, DEFAULT_OPTIONS
from .theme import Theme
from .transition import (
    Transition,
    OnAfter,
    OnComplete,
    OnMouseEnter,
    OnMouseClick,
    OnMouseLeave,
    OnShow,
    transition_from_dict,
)
from .player_state import PlayerState
from .signals import PointerSignal, TickContext, NO_POINTER

__all__ = [
    'PlaybackDirection',
    'PlaybackPlayMode',
    'LoopKind',
    'TransitionKind',
    'PlayerCommandType',
    'LogLevel',
    'LogCategory',
    'PlaybackError',
    'PlaybackConfigError',
    'UnknownStateError',
    'InvalidPlaybackRateError',
    'Segment',
    'AnimationTimingDescriptor',
    'LoopBehavior',
    'PlaybackOptions',
    'DEFAULT_OPTIONS',
    'Theme',
    'Transition',
    'OnAfter',
    'OnComplete',
    'OnMouseEnter',
    'OnMouseClick',
    'OnMouseLeave',
    'OnShow',
    'transition_from_dict',
    'PlayerState',
    'PointerSignal',
    'TickContext',
    'NO_POINTER',
]
