"""Decode AI-generated dubbing transcripts into ScriptLines.

Transcript convention (one entry per "---" delimited block):

    [0:00 – 0:05]
    Speaker: Kumar
    Original Meaning: Hello there
    Emotion: Happy
    Action Description: <only for visual beats>
    S: <spoken Tamil>
    T: <Tanglish>
    L: <short sync version>
    ---
"""

import logging
import re
from dataclasses import dataclass

from kuraldub.constants import (
    BLOCK_DELIMITER,
    DEFAULT_SPEAKER,
    DEFAULT_EMOTION,
    DECODE_FAILURE_MESSAGE,
)
from kuraldub.models import DecodeResult, DialogueVersions, ScriptLine

logger = logging.getLogger(__name__)

# [0:00 – 0:05] with an en dash, then the same with an ASCII hyphen
_TIME_RANGE_RES = (
    re.compile(r"\[\s*([\d:.]+)\s*–\s*([\d:.]+)\s*\]"),
    re.compile(r"\[\s*([\d:.]+)\s*-\s*([\d:.]+)\s*\]"),
)


def _label_pattern(label: str) -> re.Pattern:
    """Line-leading `Label:` followed by the rest of that line."""
    words = r"[ \t]+".join(re.escape(w) for w in label.split())
    return re.compile(
        rf"^[ \t]*{words}[ \t]*:[ \t]*(.*)$",
        re.IGNORECASE | re.MULTILINE,
    )


@dataclass(frozen=True)
class FieldExtractor:
    """Pulls one labelled field out of an entry block."""

    name: str
    pattern: re.Pattern
    default: str = ""

    def extract(self, block: str) -> str:
        match = self.pattern.search(block)
        if not match:
            return self.default
        return match.group(1).strip() or self.default


FIELD_EXTRACTORS = (
    FieldExtractor("speaker", _label_pattern("Speaker"), DEFAULT_SPEAKER),
    FieldExtractor("original_meaning", _label_pattern("Original Meaning")),
    FieldExtractor("emotion", _label_pattern("Emotion"), DEFAULT_EMOTION),
    FieldExtractor("action_description", _label_pattern("Action Description")),
    FieldExtractor("spoken", _label_pattern("S")),
    FieldExtractor("phonetic", _label_pattern("T")),
    FieldExtractor("short_sync", _label_pattern("L")),
)


def split_blocks(raw_text: str) -> list[str]:
    """Split on the entry delimiter, dropping whitespace-only blocks."""
    return [block for block in raw_text.split(BLOCK_DELIMITER) if block.strip()]


def find_time_range(block: str) -> tuple[str, str] | None:
    """Return (start, end) display strings, or None if the block has no range."""
    for pattern in _TIME_RANGE_RES:
        match = pattern.search(block)
        if match:
            return match.group(1).strip(), match.group(2).strip()
    return None


def extract_fields(block: str) -> dict[str, str]:
    """Run every field extractor over the block independently."""
    return {ex.name: ex.extract(block) for ex in FIELD_EXTRACTORS}


def _build_line(block: str) -> ScriptLine | None:
    time_range = find_time_range(block)
    if time_range is None:
        return None

    fields = extract_fields(block)
    return ScriptLine(
        start_time=time_range[0],
        end_time=time_range[1],
        speaker=fields["speaker"],
        emotion=fields["emotion"],
        original_meaning=fields["original_meaning"],
        action_description=fields["action_description"],
        versions=DialogueVersions(
            spoken=fields["spoken"],
            phonetic=fields["phonetic"],
            short_sync=fields["short_sync"],
        ),
    )


def decode_transcript(raw_text: str) -> DecodeResult:
    """Decode a raw transcript into ScriptLines, in input order.

    Blocks without a bracketed time range are dropped as noise. Missing
    fields take their defaults. If nothing survives, the result carries an
    empty tuple and DECODE_FAILURE_MESSAGE instead of raising.
    """
    lines = []
    for index, block in enumerate(split_blocks(raw_text)):
        line = _build_line(block)
        if line is None:
            logger.debug("Skipping block %d: no time range", index)
            continue
        lines.append(line)

    if not lines:
        logger.warning("No timestamped entries recovered from %d chars of text", len(raw_text))
        return DecodeResult(lines=(), error=DECODE_FAILURE_MESSAGE)

    return DecodeResult(lines=tuple(lines))
