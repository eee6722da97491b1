"""Shared base model definitions for YouTube Tools domain objects."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ToolsBaseModel(BaseModel):
    """Base model configured for package-wide defaults."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)


__all__ = ["ToolsBaseModel"]
