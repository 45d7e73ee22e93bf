"""
Enums for the lottie playback state machine
"""

from enum import Enum, auto


class PlaybackDirection(Enum):
    """
    Direction to play the segments of an animation.

    The value doubles as the sign applied to frame deltas.
    """
    NORMAL = 1      # First frame → last frame
    REVERSE = -1    # Last frame → first frame

    @property
    def sign(self) -> float:
        return float(self.value)


class PlaybackPlayMode(Enum):
    """Whether to restart every loop (normal) or reverse direction (bounce)"""
    NORMAL = auto()   # Wrap the playhead back to the entry boundary
    BOUNCE = auto()   # Reverse direction at every boundary


class LoopKind(Enum):
    """How often to loop"""
    DO_NOT_LOOP = auto()   # Equivalent to AMOUNT(0)
    AMOUNT = auto()        # Complete a fixed number of loops
    LOOP = auto()          # Loop forever


class TransitionKind(Enum):
    """Trigger kinds a player state can react to"""
    ON_AFTER = auto()         # Seconds elapsed since first render of the state
    ON_COMPLETE = auto()      # Playhead touched the completion boundary
    ON_MOUSE_ENTER = auto()   # Pointer moved into the bounding box
    ON_MOUSE_CLICK = auto()   # Primary button pressed inside the bounding box
    ON_MOUSE_LEAVE = auto()   # Pointer moved out of the bounding box
    ON_SHOW = auto()          # State rendered at least once


class PlayerCommandType(Enum):
    """Imperative commands queued on a player and applied at tick start"""
    SEEK = auto()
    SET_SPEED = auto()
    SET_DIRECTION = auto()
    SET_LOOP_BEHAVIOR = auto()
    SET_PLAY_MODE = auto()
    SET_SEGMENTS = auto()


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    PLAYBACK = auto()    # Playhead advancement, loops, intermissions
    STATE = auto()       # Player state swaps
    TRANSITION = auto()  # Trigger evaluation
    ASSET = auto()       # Timing descriptor registration / readiness
    ENGINE = auto()      # Tick loop lifecycle
    SYSTEM = auto()      # Startup, shutdown, errors

    GENERAL = auto()    # Default general category
