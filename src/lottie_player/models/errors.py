"""
Playback errors

Configuration problems fail fast at construction; runtime soft conditions
(asset not ready) are logged and retried instead of raised.
"""

from typing import Optional


class PlaybackError(Exception):
    """Base class for playback domain errors"""
    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None,
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class PlaybackConfigError(PlaybackError):
    """Invalid playback or player configuration"""
    def __init__(self, message: str, details: Optional[dict] = None, code: str = "INVALID_CONFIG"):
        super().__init__(code=code, message=message, details=details)


class UnknownStateError(PlaybackConfigError):
    """State id doesn't exist in the player"""
    def __init__(self, state_id: str, referenced_by: Optional[str] = None):
        if referenced_by:
            message = f"State '{referenced_by}' references unknown state '{state_id}'"
        else:
            message = f"State '{state_id}' not found"
        super().__init__(
            message=message,
            details={"state_id": state_id, "referenced_by": referenced_by},
            code="UNKNOWN_STATE",
        )
        self.state_id = state_id
        self.referenced_by = referenced_by


class InvalidPlaybackRateError(PlaybackConfigError):
    """Speed or frame rate is not a positive finite number"""
    def __init__(self, name: str, value: float):
        super().__init__(
            message=f"{name} must be a positive number, got {value!r}",
            details={"name": name, "value": value},
            code="INVALID_PLAYBACK_RATE",
        )
        self.name = name
        self.value = value
