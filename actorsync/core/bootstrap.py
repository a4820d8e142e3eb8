from __future__ import annotations

from typing import Any, Optional

from actorsync.core.config import AppConfig
from actorsync.core.error_reporter import ErrorReporter, ErrorReporterConfig
from actorsync.core.events import EventLogger
from actorsync.core.identity.store import IdentityStore
from actorsync.core.logger import setup_logging


def build_identity_store(service: Any, cfg: Optional[AppConfig] = None, *, logger=None) -> IdentityStore:
    """
    Wire logging, error reporting and the identity event log around a new
    IdentityStore. The store is returned un-initialised: call `init()` once
    hooks are registered to open the current-actor subscription.
    """
    cfg = cfg or AppConfig()
    if logger is None:
        logger = setup_logging(cfg.logging.log_dir, cfg.logging.level)
    error_reporter = ErrorReporter(path=cfg.errors.path, cfg=ErrorReporterConfig(include_tracebacks=cfg.errors.include_tracebacks))
    event_logger = EventLogger(path=cfg.events.path) if cfg.events.enabled else None
    return IdentityStore(
        service=service,
        display_name_fallback_field=cfg.identity.display_name_fallback_field,
        required_create_fields=cfg.identity.required_create_fields,
        logger=logger,
        error_reporter=error_reporter,
        event_logger=event_logger,
    )
