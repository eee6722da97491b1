"""Clock-style formatting for caption offsets."""

from __future__ import annotations


def format_timestamp(offset_ms: int) -> str:
    """Render a millisecond offset as ``M:SS`` or ``H:MM:SS``.

    Seconds are truncated, never rounded. The leading unit is not zero-padded::

        >>> format_timestamp(65_000)
        '1:05'
        >>> format_timestamp(3_661_000)
        '1:01:01'
    """

    if offset_ms < 0:
        raise ValueError(f"offset_ms must be non-negative, got {offset_ms}")

    total_seconds = int(offset_ms) // 1000
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)

    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


__all__ = ["format_timestamp"]
