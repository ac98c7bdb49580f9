"""Seek-and-play against the project's media, backed by pydub."""

import logging

from pydub import AudioSegment
from pydub.playback import play

from kuraldub.timecode import parse_timecode

logger = logging.getLogger(__name__)


class AudioPlayer:
    """Minimal media element: a position in seconds plus play()."""

    def __init__(self, audio: AudioSegment):
        self.audio = audio
        self.position = 0.0

    @classmethod
    def from_file(cls, path: str) -> "AudioPlayer":
        return cls(AudioSegment.from_file(path))

    @property
    def duration(self) -> float:
        return len(self.audio) / 1000

    def play(self) -> None:
        """Play from the current position to the end (blocking).

        Positions before the start clamp to 0; a negative pydub slice
        would count back from the end instead.
        """
        start_ms = max(round(self.position * 1000), 0)
        play(self.audio[start_ms:])


def seek(player, timestamp: str) -> bool:
    """Move player to a display timestamp and start playback.

    Invalid timestamps are a silent no-op (returns False). A failure to
    start playback (no audio device, missing backend) is swallowed.
    """
    seconds = parse_timecode(timestamp)
    if seconds is None:
        logger.debug("Ignoring seek to unparseable timestamp %r", timestamp)
        return False

    player.position = seconds
    try:
        player.play()
    except Exception as e:
        logger.debug("Playback did not start at %.3fs: %s", seconds, e)
    return True
