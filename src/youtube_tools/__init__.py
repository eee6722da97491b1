"""YouTube transcript, search and summary tools exposed over MCP."""

__version__ = "1.0.0"

__all__ = ["__version__"]
