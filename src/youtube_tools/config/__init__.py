"""Configuration package for YouTube Tools."""

from youtube_tools.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
