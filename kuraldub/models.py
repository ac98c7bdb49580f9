"""Data models for decoded dubbing scripts."""

from dataclasses import dataclass, field

from kuraldub.constants import DEFAULT_EMOTION, DEFAULT_SPEAKER


@dataclass(frozen=True)
class DialogueVersions:
    spoken: str = ""       # target-language script
    phonetic: str = ""     # romanized (Tanglish) rendering
    short_sync: str = ""   # condensed version for tight lip timing


@dataclass(frozen=True)
class ScriptLine:
    start_time: str        # verbatim, e.g. "0:05"
    end_time: str
    speaker: str = DEFAULT_SPEAKER
    emotion: str = DEFAULT_EMOTION
    original_meaning: str = ""
    action_description: str = ""   # non-empty → visual-only beat
    versions: DialogueVersions = field(default_factory=DialogueVersions)

    @property
    def dialogue(self) -> str:
        """Legacy alias for the spoken version."""
        return self.versions.spoken

    @property
    def is_action(self) -> bool:
        return bool(self.action_description)

    def to_dict(self) -> dict:
        return {
            "speaker": self.speaker,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "emotion": self.emotion,
            "original_meaning": self.original_meaning,
            "action_description": self.action_description,
            "dialogue": self.dialogue,
            "versions": {
                "spoken": self.versions.spoken,
                "phonetic": self.versions.phonetic,
                "short_sync": self.versions.short_sync,
            },
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ScriptLine":
        """Rebuild a line from its script.json record.

        Missing keys fall back to the decoder defaults. Older records that
        only carry "dialogue" get it as the spoken version.
        """
        start = data.get("start_time") or ""
        end = data.get("end_time") or ""
        if not start or not end:
            raise ValueError(f"Script line is missing its time range: {data!r}")

        versions = data.get("versions") or {}
        return cls(
            start_time=start,
            end_time=end,
            speaker=data.get("speaker") or DEFAULT_SPEAKER,
            emotion=data.get("emotion") or DEFAULT_EMOTION,
            original_meaning=data.get("original_meaning", ""),
            action_description=data.get("action_description", ""),
            versions=DialogueVersions(
                spoken=versions.get("spoken", data.get("dialogue", "")),
                phonetic=versions.get("phonetic", ""),
                short_sync=versions.get("short_sync", ""),
            ),
        )


@dataclass(frozen=True)
class DecodeResult:
    lines: tuple[ScriptLine, ...]
    error: str | None = None   # set only when no lines were recovered

    @property
    def ok(self) -> bool:
        return bool(self.lines)
