"""Audio unlock and playback control."""

from openpronounce.core.audio.playback import (
    AudioBackend,
    AudioStatus,
    PlaybackController,
    PlaybackState,
)

__all__ = [
    "AudioBackend",
    "AudioStatus",
    "PlaybackController",
    "PlaybackState",
]
