"""Export decoded scripts as plain-text documents and per-line reference clips."""

import logging
import os
import re
from collections.abc import Sequence
from datetime import datetime

from pydub import AudioSegment

from kuraldub.constants import (
    CLIP_BITRATE,
    CLIP_FORMAT,
    EXPORT_HEADER,
    EXPORT_SEPARATOR,
    SCRIPT_FORMATS,
)
from kuraldub.models import ScriptLine
from kuraldub.timecode import timecode_to_ms

logger = logging.getLogger(__name__)


def _dialogue_for(line: ScriptLine, script_format: str) -> str:
    if script_format == "tamil":
        return line.versions.spoken
    return line.versions.phonetic


def format_script(
    lines: Sequence[ScriptLine],
    script_format: str,
    generated_at: datetime | None = None,
) -> str:
    """Render the dubbing script document for one display format.

    "tamil" uses the spoken version, "tanglish" the phonetic one.
    """
    if script_format not in SCRIPT_FORMATS:
        raise ValueError(
            f"Unknown script format: {script_format!r} (expected one of {', '.join(SCRIPT_FORMATS)})"
        )
    if generated_at is None:
        generated_at = datetime.now()

    header = (
        f"{EXPORT_HEADER}\n"
        f"Format: {script_format.upper()} | Generation Date: {generated_at:%Y-%m-%d %H:%M:%S}\n"
        f"{EXPORT_SEPARATOR}\n\n"
    )
    entries = [
        f"[{line.start_time} - {line.end_time}] {line.speaker}:\n{_dialogue_for(line, script_format)}\n"
        for line in lines
    ]
    return header + "\n".join(entries)


def export_script(
    lines: Sequence[ScriptLine],
    project_dir: str,
    slug: str,
    script_format: str,
) -> str:
    """Write final/<slug>_<format>.txt. Returns the path."""
    text = format_script(lines, script_format)

    final_dir = os.path.join(project_dir, "final")
    os.makedirs(final_dir, exist_ok=True)
    path = os.path.join(final_dir, f"{slug}_{script_format}.txt")
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    return path


def _clip_filename(index: int, line: ScriptLine) -> str:
    speaker_slug = re.sub(r"[^a-z0-9]+", "_", line.speaker.lower()).strip("_") or "line"
    return f"{index + 1:03d}_{speaker_slug}.{CLIP_FORMAT}"


def export_clips(
    audio: AudioSegment,
    lines: Sequence[ScriptLine],
    project_dir: str,
) -> list[str]:
    """Cut each line's [start, end) window out of the media into clips/.

    Lines whose timestamps don't parse, or whose window is empty or past the
    end of the media, are skipped. Returns the written paths in line order.
    """
    clips_dir = os.path.join(project_dir, "clips")
    os.makedirs(clips_dir, exist_ok=True)

    paths = []
    for i, line in enumerate(lines):
        start_ms = timecode_to_ms(line.start_time)
        end_ms = timecode_to_ms(line.end_time)
        if start_ms is None or end_ms is None:
            logger.warning("Line %d: unparseable time range %s - %s", i + 1, line.start_time, line.end_time)
            continue

        end_ms = min(end_ms, len(audio))
        if end_ms <= start_ms:
            logger.warning("Line %d: empty window %s - %s", i + 1, line.start_time, line.end_time)
            continue

        path = os.path.join(clips_dir, _clip_filename(i, line))
        audio[start_ms:end_ms].export(path, format=CLIP_FORMAT, bitrate=CLIP_BITRATE)
        paths.append(path)

    return paths
