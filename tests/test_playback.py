"""Tests for playback module."""

from unittest.mock import patch, MagicMock

import pytest
from pydub import AudioSegment

from kuraldub.playback import AudioPlayer, seek


def test_seek_sets_position_and_plays():
    player = MagicMock()
    assert seek(player, "1:01:30") is True
    assert player.position == 3690.0
    player.play.assert_called_once_with()


def test_seek_invalid_timestamp_is_noop():
    """Unparseable timestamp: no position change, no playback, no error."""
    player = MagicMock()
    player.position = 12.0
    assert seek(player, "abc") is False
    assert player.position == 12.0
    player.play.assert_not_called()


def test_seek_swallows_play_failure():
    player = MagicMock()
    player.play.side_effect = RuntimeError("no audio device")
    assert seek(player, "0:05") is True
    assert player.position == 5.0


def test_audio_player_plays_from_position():
    audio = AudioSegment.silent(duration=3000)
    player = AudioPlayer(audio)
    player.position = 1.5
    with patch("kuraldub.playback.play") as mock_play:
        player.play()
    played = mock_play.call_args[0][0]
    assert len(played) == pytest.approx(1500, abs=5)


def test_audio_player_from_file(tiny_wav):
    player = AudioPlayer.from_file(str(tiny_wav))
    assert player.position == 0.0
    assert player.duration == pytest.approx(3.0, abs=0.01)


def test_seek_with_audio_player():
    player = AudioPlayer(AudioSegment.silent(duration=2000))
    with patch("kuraldub.playback.play") as mock_play:
        assert seek(player, "1") is True
    assert player.position == 1.0
    mock_play.assert_called_once()


def test_negative_timestamp_plays_from_start():
    """"-2" must not count back from the end of the media."""
    player = AudioPlayer(AudioSegment.silent(duration=10000))
    with patch("kuraldub.playback.play") as mock_play:
        assert seek(player, "-2") is True
    played = mock_play.call_args[0][0]
    assert len(played) == pytest.approx(10000, abs=5)
