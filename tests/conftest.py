"""Shared fixtures for kuraldub tests."""

import pytest
from pydub import AudioSegment

from kuraldub.models import DialogueVersions, ScriptLine


SAMPLE_TRANSCRIPT = """Here is the full Tamil dubbing script for your video.

---
[0:00 – 0:05]
Speaker: Kumar
Original Meaning: Hello, everyone
Emotion: Happy
S: வணக்கம் எல்லாருக்கும்
T: vanakkam ellarukkum
L: vanakkam
---
[0:05 - 0:09]
Speaker: Meena
Emotion: Curious
S: என்ன ஆச்சு?
T: enna aachu?
L: enna?
---
[0:09 – 0:12]
Action Description: Camera pans over the Chennai skyline
---
"""


@pytest.fixture
def sample_transcript():
    """Raw transcript: preamble, two dialogue entries, one action beat."""
    return SAMPLE_TRANSCRIPT


@pytest.fixture
def sample_lines():
    """Pre-built lines for exporter/artifact/CLI tests."""
    return [
        ScriptLine(
            start_time="0:00", end_time="0:02", speaker="Kumar", emotion="Happy",
            versions=DialogueVersions(spoken="வணக்கம்", phonetic="vanakkam", short_sync="vna"),
        ),
        ScriptLine(
            start_time="0:02", end_time="0:03",
            action_description="Door slams",
        ),
    ]


@pytest.fixture
def tiny_wav(tmp_path):
    """Generate a 3s silent WAV to stand in for the project media."""
    path = tmp_path / "media.wav"
    AudioSegment.silent(duration=3000).export(str(path), format="wav")
    return path
