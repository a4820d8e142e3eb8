from __future__ import annotations

from typing import Optional

from pydantic import ValidationError as _PydanticValidationError

from actorsync.core.config.io import read_json_file
from actorsync.core.config.models import AppConfig, ErrorsConfig, EventsConfig, IdentityConfig, LoggingConfig
from actorsync.core.errors import ConfigError


def load_config(path: Optional[str] = None, *, logger=None) -> AppConfig:
    """
    Load the app config from a JSON object file.

    A missing file (or no path) yields defaults; corrupt JSON or schema
    violations raise ConfigError.
    """
    if not path:
        return AppConfig()
    rr = read_json_file(path)
    if not rr.ok:
        if rr.error == "missing":
            if logger is not None:
                logger.warning(f"Missing config {path}; using defaults.")
            return AppConfig()
        raise ConfigError("Config file could not be read.", path=path, error=rr.error)
    try:
        return AppConfig.model_validate(rr.data)
    except _PydanticValidationError as e:
        raise ConfigError("Config file is invalid.", path=path, error=str(e)) from e


__all__ = [
    "AppConfig",
    "ErrorsConfig",
    "EventsConfig",
    "IdentityConfig",
    "LoggingConfig",
    "load_config",
]
