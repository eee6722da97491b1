"""Pure helpers shared across YouTube Tools modules."""

from youtube_tools.utils.timestamps import format_timestamp
from youtube_tools.utils.validation import normalize_video_id, require_text

__all__ = ["format_timestamp", "normalize_video_id", "require_text"]
