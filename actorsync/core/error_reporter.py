from __future__ import annotations

import json
import os
import threading
import time
import traceback
from dataclasses import dataclass
from typing import Any, Dict, Optional

from actorsync.core.errors import (
    ConfigError,
    HookError,
    IdentityError,
    PayloadError,
    ServiceError,
)
from actorsync.core.events import redact


@dataclass
class ErrorReporterConfig:
    include_tracebacks: bool = False


class ErrorReporter:
    def __init__(self, *, path: str = os.path.join("logs", "errors.jsonl"), cfg: Optional[ErrorReporterConfig] = None):
        self.path = path
        self.cfg = cfg or ErrorReporterConfig()
        self._lock = threading.Lock()
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)

    def report_exception(self, exc: BaseException, *, trace_id: str, subsystem: str, context: Optional[Dict[str, Any]] = None) -> IdentityError:
        ie = normalize_exception(exc, subsystem=subsystem, context=context or {})
        self.write_error(ie, trace_id=trace_id, subsystem=subsystem, internal_exc=exc)
        return ie

    def write_error(self, err: IdentityError, *, trace_id: str, subsystem: str, internal_exc: Optional[BaseException] = None) -> None:
        entry: Dict[str, Any] = {
            "ts": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
            "trace_id": trace_id,
            "subsystem": subsystem,
            "error_code": err.code,
            "severity": err.severity.value,
            "recoverable": bool(err.recoverable),
            "user_message": err.user_message,
            "safe_context": redact(err.context or {}),
        }
        if self.cfg.include_tracebacks and internal_exc is not None:
            tb = traceback.format_exception(type(internal_exc), internal_exc, internal_exc.__traceback__, limit=30)
            entry["internal_context"] = {"traceback": "".join(tb)}
        line = json.dumps(entry, ensure_ascii=False, default=str)
        with self._lock:
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(line + "\n")

    def tail(self, n: int = 20) -> list[Dict[str, Any]]:
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                lines = f.readlines()
            return [json.loads(x) for x in lines[-max(1, int(n)) :]]
        except (OSError, json.JSONDecodeError):
            return []

    def by_trace_id(self, trace_id: str) -> list[Dict[str, Any]]:
        if not os.path.exists(self.path):
            return []
        out = []
        with open(self.path, "r", encoding="utf-8") as f:
            for line in f:
                try:
                    obj = json.loads(line)
                except json.JSONDecodeError:
                    continue
                if obj.get("trace_id") == trace_id:
                    out.append(obj)
        return out


def normalize_exception(exc: BaseException, *, subsystem: str, context: Dict[str, Any]) -> IdentityError:
    # Passthrough
    if isinstance(exc, IdentityError):
        return exc

    msg = str(exc)
    ctx = dict(context or {})

    if subsystem == "config":
        return ConfigError("Configuration error.", error=msg, **ctx)
    if subsystem == "service":
        return ServiceError(error=msg, **ctx)
    if subsystem == "partition":
        return PayloadError(error=msg, **ctx)
    if subsystem == "hooks":
        return HookError(error=msg, error_type=type(exc).__name__, **ctx)

    # Generic safe error
    return IdentityError(code="unknown_error", user_message="Something went wrong.", context=ctx)
