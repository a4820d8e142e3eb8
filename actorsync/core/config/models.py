from __future__ import annotations

import os
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    log_dir: str = "logs"
    level: str = "INFO"

    @field_validator("level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        v = str(v or "").strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {v}")
        return v


class ErrorsConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    path: str = os.path.join("logs", "errors.jsonl")
    include_tracebacks: bool = False


class EventsConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    enabled: bool = True
    path: str = os.path.join("logs", "identity_events.jsonl")


class IdentityConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    # profile field copied into displayName when the service sends none
    display_name_fallback_field: str = "email"
    required_create_fields: List[str] = Field(default_factory=lambda: ["email", "password"], min_length=1)


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    errors: ErrorsConfig = Field(default_factory=ErrorsConfig)
    events: EventsConfig = Field(default_factory=EventsConfig)
    identity: IdentityConfig = Field(default_factory=IdentityConfig)
