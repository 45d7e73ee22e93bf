"""
Player Manager - Builds players from parsed config

Turns the 'players' section into PlayerState definitions and validated
Player objects. Parsing errors are raised as PlaybackConfigError so a bad
config fails before any player is usable.
"""

from typing import Any, Dict, List, Optional

from lottie_player.models.enums import LogCategory, LoopKind, PlaybackDirection, PlaybackPlayMode
from lottie_player.models.errors import PlaybackConfigError
from lottie_player.models.player_state import PlayerState
from lottie_player.models.playback_options import LoopBehavior, PlaybackOptions
from lottie_player.models.theme import Theme
from lottie_player.models.timing import Segment
from lottie_player.models.transition import transition_from_dict
from lottie_player.services.asset_registry import AssetRegistry
from lottie_player.services.state_machine import Player
from lottie_player.utils.enum_helper import EnumHelper
from lottie_player.utils.logger import get_logger

log = get_logger().for_category(LogCategory.CONFIG)

OPTION_KEYS = {"autoplay", "direction", "speed", "intermission", "play_mode", "looping", "segments"}


def parse_looping(value: Any) -> LoopBehavior:
    """
    Parse a loop policy.

    Accepts: "loop", "do_not_loop", true/false, an int amount, {amount: n}
    """
    if isinstance(value, bool):
        return LoopBehavior.loop() if value else LoopBehavior.do_not_loop()
    if isinstance(value, int):
        return LoopBehavior.amount(value)
    if isinstance(value, dict) and "amount" in value:
        return LoopBehavior.amount(int(value["amount"]))
    if isinstance(value, str):
        kind = EnumHelper.from_string(LoopKind, value)
        if kind == LoopKind.AMOUNT:
            raise PlaybackConfigError("Loop amount needs a count: use {amount: n}", details={"looping": value})
        return LoopBehavior(kind)
    raise PlaybackConfigError(f"Invalid looping value: {value!r}", details={"looping": value})


def parse_options(data: Dict[str, Any]) -> PlaybackOptions:
    """Parse a playback options mapping; unspecified fields keep their defaults"""
    unknown = set(data) - OPTION_KEYS
    if unknown:
        raise PlaybackConfigError(f"Unknown playback options: {sorted(unknown)}", details={"options": data})

    kwargs: Dict[str, Any] = {}
    try:
        if "autoplay" in data:
            kwargs["autoplay"] = bool(data["autoplay"])
        if "direction" in data:
            kwargs["direction"] = EnumHelper.to_enum(PlaybackDirection, data["direction"])
        if "speed" in data:
            kwargs["speed"] = data["speed"]
        if "intermission" in data:
            kwargs["intermission"] = float(data["intermission"])
        if "play_mode" in data:
            kwargs["play_mode"] = EnumHelper.to_enum(PlaybackPlayMode, data["play_mode"])
        if "looping" in data:
            kwargs["looping"] = parse_looping(data["looping"])
        if "segments" in data:
            start, end = data["segments"]
            kwargs["segments"] = Segment(float(start), float(end))
    except (TypeError, ValueError) as e:
        raise PlaybackConfigError(f"Invalid playback options: {e}", details={"options": data})

    return PlaybackOptions(**kwargs)


def parse_state(state_id: str, data: Optional[Dict[str, Any]]) -> PlayerState:
    """Parse one state definition"""
    data = data or {}
    state = PlayerState.new(state_id)

    if data.get("asset") is not None:
        state = state.with_asset(data["asset"])
    if data.get("options") is not None:
        state = state.with_options(parse_options(data["options"]))
    if data.get("theme") is not None:
        state = state.with_theme(Theme(data["theme"]))

    for entry in data.get("transitions") or []:
        state = state.with_transition(transition_from_dict(entry))

    state = state.reset_playhead_on_start(bool(data.get("reset_playhead_on_start", False)))
    state = state.reset_playhead_on_exit(bool(data.get("reset_playhead_on_exit", False)))
    return state


class PlayerManager:
    """
    Player definitions manager

    Responsibilities:
    - Parse player / state definitions from config
    - Build validated Player objects
    """

    def __init__(self, data: dict):
        """
        Initialize with parsed config

        Args:
            data: Dict with 'players' key (map format)
                  {
                      'button': {
                          'initial': 'idle',
                          'asset': 'button',
                          'options': {...},
                          'states': {'idle': {...}, 'hover': {...}}
                      },
                      ...
                  }
        """
        self.definitions: Dict[str, Dict[str, Any]] = {}
        self._process_data(data)

    def _process_data(self, data: dict):
        players_map = data.get('players') or {}

        for name, player_data in players_map.items():
            player_data = player_data or {}
            if not isinstance(player_data, dict):
                raise PlaybackConfigError(
                    f"Player '{name}' must be a mapping",
                    details={"player": name, "entry": player_data},
                )
            if not player_data.get('enabled', True):
                log.debug(f"Skipping disabled player: {name}")
                continue
            if not player_data.get('states'):
                raise PlaybackConfigError(f"Player '{name}' defines no states", details={"player": name})
            if 'initial' not in player_data:
                raise PlaybackConfigError(f"Player '{name}' has no initial state", details={"player": name})
            self.definitions[name] = player_data
            log.debug(f"Loaded player definition: {name}")

    def get_states(self, name: str) -> List[PlayerState]:
        definition = self.definitions[name]
        return [parse_state(state_id, state_data) for state_id, state_data in definition['states'].items()]

    def build(self, name: str, registry: Optional[AssetRegistry] = None) -> Player:
        """
        Build one player.

        Raises:
            KeyError: no definition with that name
            PlaybackConfigError / UnknownStateError: invalid definition
        """
        definition = self.definitions[name]
        options = parse_options(definition['options']) if definition.get('options') else None
        theme = Theme(definition['theme']) if definition.get('theme') else None

        return (
            Player.new(
                str(definition['initial']),
                asset=definition.get('asset'),
                registry=registry,
                options=options,
                theme=theme,
                name=name,
            )
            .with_states(*self.get_states(name))
            .build()
        )

    def build_all(self, registry: Optional[AssetRegistry] = None) -> Dict[str, Player]:
        return {name: self.build(name, registry) for name in self.definitions}

    def get_player_names(self) -> List[str]:
        return list(self.definitions.keys())
