"""Convert display timestamps ("H:MM:SS", "MM:SS", "SS.f") into seconds."""

import math

# Multipliers for 1, 2 or 3 colon-separated components, most significant first
_UNIT_SECONDS = {
    1: (1,),
    2: (60, 1),
    3: (3600, 60, 1),
}


def parse_timecode(text: str) -> float | None:
    """Parse a timestamp into seconds.

    "12.5" → 12.5, "1:30" → 90.0, "1:01:30" → 3690.0. Each component is
    parsed as a float on its own. Returns None when any component is not a
    number, the total is not finite, or there are more than two colons
    (frame-style "H:MM:SS:FF" is not guessed at).
    """
    parts = text.strip().split(":")
    units = _UNIT_SECONDS.get(len(parts))
    if units is None:
        return None

    total = 0.0
    for part, unit in zip(parts, units):
        try:
            value = float(part)
        except ValueError:
            return None
        total += value * unit

    if not math.isfinite(total):
        return None
    return total


def timecode_to_ms(text: str) -> int | None:
    """Same as parse_timecode() but in whole milliseconds, for audio slicing."""
    seconds = parse_timecode(text)
    if seconds is None:
        return None
    return round(seconds * 1000)
