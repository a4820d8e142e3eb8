from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict

from actorsync.core.events import redact


class Severity(str, Enum):
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class IdentityError(Exception):
    code: str
    user_message: str
    severity: Severity = Severity.ERROR
    recoverable: bool = True
    context: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        super().__init__(self.code)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "user_message": self.user_message,
            "severity": self.severity.value,
            "recoverable": bool(self.recoverable),
            "context": redact(self.context or {}),
        }


class ConfigError(IdentityError):
    def __init__(self, user_message: str = "Configuration error.", **ctx: Any):
        super().__init__("config_error", user_message, severity=Severity.CRITICAL, recoverable=False, context=ctx)


class ValidationError(IdentityError):
    def __init__(self, user_message: str = "Invalid request.", **ctx: Any):
        super().__init__("validation_error", user_message, severity=Severity.WARN, recoverable=False, context=ctx)


class PermissionDeniedError(IdentityError):
    def __init__(self, user_message: str = "Permission denied.", **ctx: Any):
        super().__init__("permission_denied", user_message, severity=Severity.WARN, recoverable=False, context=ctx)


class ServiceError(IdentityError):
    def __init__(self, user_message: str = "The identity service reported an error.", **ctx: Any):
        super().__init__("service_error", user_message, severity=Severity.WARN, recoverable=True, context=ctx)


class PayloadError(IdentityError):
    def __init__(self, user_message: str = "Malformed identity payload.", **ctx: Any):
        super().__init__("payload_error", user_message, severity=Severity.WARN, recoverable=True, context=ctx)


class HookError(IdentityError):
    def __init__(self, user_message: str = "A lifecycle hook failed.", **ctx: Any):
        super().__init__("hook_error", user_message, severity=Severity.ERROR, recoverable=True, context=ctx)
