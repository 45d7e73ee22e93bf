"""
lottie_player - state-machine driven playback for Lottie-style animations

Public API:
    Player / PlayerState / transitions   - define and drive per-instance state machines
    PlaybackEngine                       - tick many players from one asyncio loop
    AssetRegistry                        - timing descriptors of loaded assets
    ConfigManager                        - build players from YAML
"""

from .models import *  # noqa: F401,F403
from .models import __all__ as _models_all
from .services import AssetRegistry, TransitionEvaluator, Player, PlayerBuilder, TickResult
from .engine import Playhead, LoopController, SegmentBounds
from .engine.playback_engine import PlaybackEngine
from .managers import ConfigManager, PlayerManager
from .utils.logger import get_logger, configure_logger

__version__ = "0.1.0"

__all__ = list(_models_all) + [
    "AssetRegistry",
    "TransitionEvaluator",
    "Player",
    "PlayerBuilder",
    "TickResult",
    "PlaybackEngine",
    "Playhead",
    "LoopController",
    "SegmentBounds",
    "ConfigManager",
    "PlayerManager",
    "get_logger",
    "configure_logger",
]
