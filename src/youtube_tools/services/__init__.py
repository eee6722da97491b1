"""Service layer for YouTube Tools."""

from typing import Protocol


class SupportsClose(Protocol):
    """Protocol describing resources that can be closed."""

    def close(self) -> None:
        """Release any acquired resources."""


__all__ = ["SupportsClose"]
