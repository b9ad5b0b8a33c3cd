"""Audio unlock/playback state machine.

The controller does not decode audio itself; it drives an AudioBackend and
keeps the user-facing status (state, message, whether an "enable audio"
action should be offered) consistent with what the backend reports.

This module is the seam for an external front end that can actually play
sound (a browser page, a desktop shell). The terminal CLI only shows the
audio URL on each card, so it ships no AudioBackend and does not create a
controller.

States:
    idle -> unlocking -> idle        unlock succeeded
    idle -> unlocking -> blocked     unlock refused or failed
    any -> blocked                   no audio output on this platform
    idle/stopped -> playing          play(url) started
    playing -> stopped               finished() or playback failed
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import Protocol

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class PlaybackState(str, Enum):
    IDLE = "idle"
    UNLOCKING = "unlocking"
    PLAYING = "playing"
    STOPPED = "stopped"
    BLOCKED = "blocked"


class AudioStatus(BaseModel):
    """What the UI shows about audio.

    Attributes:
        state: Current playback state
        message: Status line text
        can_enable: Whether to offer the "enable audio" action
    """

    model_config = ConfigDict(frozen=True)

    state: PlaybackState
    message: str
    can_enable: bool = False


class AudioBackend(Protocol):
    """Protocol for platform audio output."""

    @property
    def available(self) -> bool:
        """Whether audio output exists at all."""
        ...

    async def unlock(self) -> bool:
        """Ask the platform to allow playback. Returns True once allowed."""
        ...

    async def play(self, url: str) -> None:
        """Start playing ``url``; returns once playback has started.

        Raises:
            Exception: If playback is refused or the asset cannot be played
        """
        ...

    def stop(self) -> None:
        """Stop current playback, if any."""
        ...


MSG_UNSUPPORTED = "Audio is not supported on this device."
MSG_LOCKED = "Audio locked. Enable audio to play pronunciations."
MSG_READY = "Audio ready."
MSG_STILL_LOCKED = "Audio is still locked. Try again."
MSG_UNLOCK_FAILED = "Audio could not be enabled (blocked)."
MSG_PLAYBACK_BLOCKED = "Playback blocked. Enable audio, then try again."
MSG_PLAYING = "Playing."
MSG_STOPPED = "Stopped."

StateCallback = Callable[[PlaybackState], None]


class PlaybackController:
    """Drives an AudioBackend and tracks the resulting status.

    Args:
        backend: Platform audio output

    Example:
        >>> controller = PlaybackController(backend)
        >>> controller.initialize()
        >>> await controller.unlock()
        True
        >>> await controller.play(project.audio_asset_url)
        <PlaybackState.PLAYING: 'playing'>
    """

    def __init__(self, backend: AudioBackend):
        self.backend = backend
        self.unlocked = False
        self.current_url: str | None = None
        self._on_state: StateCallback | None = None
        self.status = AudioStatus(state=PlaybackState.IDLE, message=MSG_LOCKED, can_enable=True)

    @property
    def state(self) -> PlaybackState:
        return self.status.state

    def _set_status(self, state: PlaybackState, message: str, can_enable: bool = False) -> None:
        self.status = AudioStatus(state=state, message=message, can_enable=can_enable)
        logger.debug(f"Audio status: {state.value} ({message})")

    def _notify(self, state: PlaybackState) -> None:
        if self._on_state is not None:
            self._on_state(state)

    def initialize(self) -> AudioStatus:
        """Set the initial status before any user action."""
        if not self.backend.available:
            self._set_status(PlaybackState.BLOCKED, MSG_UNSUPPORTED, can_enable=False)
        else:
            self._set_status(PlaybackState.IDLE, MSG_LOCKED, can_enable=True)
        return self.status

    async def unlock(self) -> bool:
        """Unlock audio output; a no-op once unlocked.

        Returns:
            True if playback is allowed
        """
        if self.unlocked:
            return True

        if not self.backend.available:
            self._set_status(PlaybackState.BLOCKED, MSG_UNSUPPORTED, can_enable=False)
            return False

        self._set_status(PlaybackState.UNLOCKING, self.status.message)
        try:
            self.unlocked = await self.backend.unlock()
        except Exception as e:
            logger.warning(f"Audio unlock failed: {e}")
            self._set_status(PlaybackState.BLOCKED, MSG_UNLOCK_FAILED, can_enable=True)
            return False

        if self.unlocked:
            self._set_status(PlaybackState.IDLE, MSG_READY)
            return True

        self._set_status(PlaybackState.BLOCKED, MSG_STILL_LOCKED, can_enable=True)
        return False

    async def play(self, url: str | None, on_state: StateCallback | None = None) -> PlaybackState:
        """Play ``url``, stopping whatever was playing before.

        Args:
            url: Audio asset URL; None is a no-op (project has no audio)
            on_state: Called with PLAYING/STOPPED as playback changes

        Returns:
            PLAYING once playback started, STOPPED if it failed
        """
        if not url:
            return self.state

        if self.current_url is not None:
            self.backend.stop()
            self._notify(PlaybackState.STOPPED)

        self.current_url = url
        self._on_state = on_state
        self._set_status(PlaybackState.PLAYING, MSG_PLAYING)
        self._notify(PlaybackState.PLAYING)

        try:
            await self.backend.play(url)
        except Exception as e:
            logger.warning(f"Playback of {url} failed: {e}")
            self.current_url = None
            self._notify(PlaybackState.STOPPED)
            self._set_status(PlaybackState.STOPPED, MSG_PLAYBACK_BLOCKED, can_enable=True)
            return PlaybackState.STOPPED

        return PlaybackState.PLAYING

    def finished(self) -> None:
        """Backend notification that playback ended or was paused."""
        if self.current_url is None:
            return
        self.current_url = None
        self._set_status(PlaybackState.STOPPED, MSG_STOPPED)
        self._notify(PlaybackState.STOPPED)
