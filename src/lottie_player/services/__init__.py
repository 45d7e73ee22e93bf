"""Services layer"""

from .asset_registry import AssetRegistry
from .transition_evaluator import TransitionEvaluator
from .state_machine import Player, PlayerBuilder, TickResult, PlayerCommand, Pending

__all__ = [
    "AssetRegistry",
    "TransitionEvaluator",
    "Player",
    "PlayerBuilder",
    "TickResult",
    "PlayerCommand",
    "Pending",
]
