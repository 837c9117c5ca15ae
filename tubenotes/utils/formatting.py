"""Display helpers for YouTube statistics and ISO-8601 durations."""

from __future__ import annotations

import re

_DURATION_RE = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")


def format_count(count: str | int) -> str:
    """Abbreviate a subscriber/view count: ``1500000`` -> ``"1.5M"``."""
    value = int(count)
    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"{value / 1_000:.1f}K"
    return str(value)


def format_duration(duration: str) -> str:
    """Render ``PT1H2M3S`` as ``1:02:03`` and ``PT4M5S`` as ``4:05``.

    Strings that are not ISO-8601 time durations are returned unchanged.
    """
    match = _DURATION_RE.fullmatch(duration)
    if not match:
        return duration

    hours, minutes, seconds = (int(group or 0) for group in match.groups())
    if hours:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


__all__ = ["format_count", "format_duration"]
