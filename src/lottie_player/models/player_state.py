"""
Player state model

A named bundle of asset / playback options / theme / transitions a player
can be in. Built once at setup and never mutated afterwards: every builder
method returns a new PlayerState.
"""

from dataclasses import dataclass, replace
from typing import Hashable, Iterator, Optional, Tuple

from lottie_player.models.playback_options import PlaybackOptions
from lottie_player.models.theme import Theme
from lottie_player.models.transition import Transition


@dataclass(frozen=True)
class PlayerState:
    """
    Immutable player state

    Attributes:
        id: Unique state id within a player
        asset: Handle of the animation asset to show (None = keep the active asset)
        options: Playback options override (None = keep the current options)
        theme: Theme override (None = keep the current theme)
        transitions: Triggers checked in declared order, first hit wins
        reset_playhead_on_start: Seek to the entry boundary when entering this state
        reset_playhead_on_exit: Seek to the entry boundary of the next state when leaving this one

    Example:
        hover = (
            PlayerState.new("hover")
            .with_options(PlaybackOptions(looping=LoopBehavior.do_not_loop()))
            .with_transition(OnMouseLeave("idle"))
            .reset_playhead_on_start(True)
        )
    """
    id: str
    asset: Optional[Hashable] = None
    options: Optional[PlaybackOptions] = None
    theme: Optional[Theme] = None
    transitions: Tuple[Transition, ...] = ()
    reset_on_start: bool = False
    reset_on_exit: bool = False

    @classmethod
    def new(cls, state_id: str) -> "PlayerState":
        return cls(id=state_id)

    # === Builder ===

    def with_asset(self, asset: Optional[Hashable]) -> "PlayerState":
        return replace(self, asset=asset)

    def with_options(self, options: Optional[PlaybackOptions]) -> "PlayerState":
        return replace(self, options=options)

    def with_theme(self, theme: Optional[Theme]) -> "PlayerState":
        return replace(self, theme=theme)

    def with_transition(self, transition: Transition) -> "PlayerState":
        return replace(self, transitions=self.transitions + (transition,))

    def with_transitions(self, *transitions: Transition) -> "PlayerState":
        return replace(self, transitions=tuple(transitions))

    def reset_playhead_on_start(self, reset: bool = True) -> "PlayerState":
        return replace(self, reset_on_start=reset)

    def reset_playhead_on_exit(self, reset: bool = True) -> "PlayerState":
        return replace(self, reset_on_exit=reset)

    # === Accessors ===

    def targets(self) -> Iterator[str]:
        """State ids referenced by this state's transitions"""
        for transition in self.transitions:
            yield transition.target

    def __repr__(self) -> str:
        return (
            f"PlayerState({self.id}, "
            f"asset={self.asset!r}, "
            f"transitions={list(self.transitions)})"
        )
