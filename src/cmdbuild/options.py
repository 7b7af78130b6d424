"""Build options: construction-time configuration for a Build."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


class BuildOptions(BaseModel):
    """Settings fixed when a Build is created.

    ``stdout`` and ``stderr`` accept any object with a ``write()`` method and
    default to the process streams at the time they are used.
    """

    model_config = {"arbitrary_types_allowed": True, "frozen": True}

    env: dict[str, str] = Field(default_factory=dict)
    stdout: Any = None
    stderr: Any = None
    color: bool | None = None
    shell: str = "/bin/sh"

    @field_validator("env", mode="before")
    @classmethod
    def _copy_env(cls, value: Any) -> Any:
        if value is None:
            return {}
        return dict(value)

    @field_validator("stdout", "stderr")
    @classmethod
    def _check_stream(cls, value: Any) -> Any:
        if value is not None and not callable(getattr(value, "write", None)):
            raise ValueError("output sinks must provide a write() method")
        return value
