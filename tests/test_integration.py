"""Integration tests: demo transcript through decode, artifacts and export."""

import os
from datetime import datetime
from unittest.mock import patch, MagicMock

import pytest

from kuraldub.parser import decode_transcript
from kuraldub.playback import seek
from kuraldub.exporter import format_script
from kuraldub.artifacts import (
    init_output_dir, write_artifact, build_script_artifact, load_script_lines,
)
from kuraldub.cli import main
from kuraldub.constants import DEFAULT_EMOTION


DEMO_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "demo")
MARKET_PATH = os.path.join(DEMO_DIR, "market_scene.txt")


@pytest.fixture
def market_text():
    with open(MARKET_PATH, encoding="utf-8") as f:
        return f.read()


def test_decode_market_scene(market_text):
    """Preamble and note blocks dropped, five entries kept in order."""
    result = decode_transcript(market_text)
    assert result.ok
    lines = result.lines
    assert [line.start_time for line in lines] == ["00:00", "00:03", "00:06", "00:09", "00:12"]
    assert [line.speaker for line in lines] == ["Narrator", "Unknown", "Vendor", "Lakshmi", "Vendor"]
    assert lines[1].is_action
    assert lines[3].versions.short_sync == ""
    assert lines[4].emotion == DEFAULT_EMOTION
    for line in lines:
        assert line.start_time and line.end_time


def test_market_scene_survives_artifact_round_trip(tmp_path, market_text):
    lines = decode_transcript(market_text).lines
    project_dir = init_output_dir(MARKET_PATH, output_base=str(tmp_path))
    write_artifact(project_dir, "script.json", build_script_artifact(lines, MARKET_PATH))
    assert load_script_lines(project_dir) == list(lines)


def test_every_market_timestamp_is_seekable(market_text):
    """Displayed timestamps all resolve for playback."""
    for line in decode_transcript(market_text).lines:
        player = MagicMock()
        assert seek(player, line.start_time)
        player.play.assert_called_once()


def test_market_scene_export(market_text):
    lines = decode_transcript(market_text).lines
    text = format_script(lines, "tanglish", datetime(2026, 1, 1))
    assert "[00:06 - 00:09] Vendor:\npudhu thakkaali, cheap vilai!\n" in text
    assert text.count("] ") == len(lines)


def test_cli_market_scene(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr("kuraldub.cli.OUTPUT_DIR", str(tmp_path / "output"))
    with patch("sys.argv", ["kuraldub", "new", MARKET_PATH]):
        main()
    with patch("sys.argv", ["kuraldub", "export", "market_scene", "--format", "all"]):
        main()

    final = tmp_path / "output" / "market_scene" / "final"
    assert sorted(os.listdir(final)) == ["market_scene_tamil.txt", "market_scene_tanglish.txt"]
    assert "Decoded 5 lines (4 dialogue, 1 action)" in capsys.readouterr().out
