"""Configuration models for taskman-cli."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

OutputFormat = Literal["pretty", "table", "json", "yaml"]


class StorageConfig(BaseModel):
    """Where the task collection lives."""

    tasks_file: str | None = Field(
        default=None,
        description="Path to the tasks JSON file (defaults to the user data dir)",
    )

    @field_validator("tasks_file")
    @classmethod
    def validate_tasks_file(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None


class OutputConfig(BaseModel):
    """Output configuration."""

    format: OutputFormat = Field(default="pretty")
    color: bool = Field(default=True)


class AppConfig(BaseModel):
    """Main taskman configuration."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
