"""
Transition Models

A transition maps a trigger condition to the id of the state to enter.
The set of triggers is closed: one frozen dataclass per TransitionKind.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, Type

from lottie_player.models.enums import TransitionKind
from lottie_player.models.errors import PlaybackConfigError
from lottie_player.utils.enum_helper import EnumHelper


@dataclass(frozen=True)
class Transition:
    """Base of all transitions. `target` is the id of the state to enter."""
    target: str

    kind = None  # type: TransitionKind

    def __repr__(self) -> str:
        return f"{type(self).__name__}(→ {self.target})"


@dataclass(frozen=True, repr=False)
class OnAfter(Transition):
    """Transition after `seconds` have passed since the state was first rendered"""
    seconds: float = 0.0

    kind = TransitionKind.ON_AFTER

    def __post_init__(self):
        if self.seconds < 0:
            raise PlaybackConfigError(
                f"OnAfter seconds must be >= 0, got {self.seconds}",
                details={"target": self.target, "seconds": self.seconds},
            )

    def __repr__(self) -> str:
        return f"OnAfter({self.seconds}s → {self.target})"


@dataclass(frozen=True, repr=False)
class OnComplete(Transition):
    """Transition once the playhead touches the completion boundary"""
    kind = TransitionKind.ON_COMPLETE


@dataclass(frozen=True, repr=False)
class OnMouseEnter(Transition):
    """Transition when the pointer enters the bounding box"""
    kind = TransitionKind.ON_MOUSE_ENTER


@dataclass(frozen=True, repr=False)
class OnMouseClick(Transition):
    """Transition when the primary button is pressed inside the bounding box"""
    kind = TransitionKind.ON_MOUSE_CLICK


@dataclass(frozen=True, repr=False)
class OnMouseLeave(Transition):
    """Transition when the pointer leaves the bounding box"""
    kind = TransitionKind.ON_MOUSE_LEAVE


@dataclass(frozen=True, repr=False)
class OnShow(Transition):
    """Transition on the first tick the state has been rendered"""
    kind = TransitionKind.ON_SHOW


TRANSITION_TYPES: Dict[TransitionKind, Type[Transition]] = {
    TransitionKind.ON_AFTER: OnAfter,
    TransitionKind.ON_COMPLETE: OnComplete,
    TransitionKind.ON_MOUSE_ENTER: OnMouseEnter,
    TransitionKind.ON_MOUSE_CLICK: OnMouseClick,
    TransitionKind.ON_MOUSE_LEAVE: OnMouseLeave,
    TransitionKind.ON_SHOW: OnShow,
}


def _snake_case(name: str) -> str:
    """OnMouseEnter → On_Mouse_Enter; names with separators or all caps pass through"""
    if "_" in name or "-" in name or name.isupper() or name.islower():
        return name
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name)


def transition_from_dict(data: Dict[str, Any]) -> Transition:
    """
    Build a transition from a config entry.

    Args:
        data: {'type': 'after', 'target': 'idle', 'seconds': 2.5}
              'type' accepts the TransitionKind name with or without the ON_ prefix

    Raises:
        PlaybackConfigError: missing keys or unknown trigger
    """
    try:
        trigger = str(data["type"])
        target = str(data["target"])
    except KeyError as e:
        raise PlaybackConfigError(f"Transition entry is missing {e}", details={"entry": data})

    name = _snake_case(trigger)
    if not name.upper().startswith("ON_"):
        name = f"on_{name}"
    try:
        kind = EnumHelper.from_string(TransitionKind, name)
    except ValueError as e:
        raise PlaybackConfigError(str(e), details={"entry": data})

    if kind == TransitionKind.ON_AFTER:
        if "seconds" not in data:
            raise PlaybackConfigError("OnAfter transition requires 'seconds'", details={"entry": data})
        return OnAfter(target=target, seconds=float(data["seconds"]))
    return TRANSITION_TYPES[kind](target=target)
