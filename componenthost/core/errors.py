from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict

from componenthost.core.events import redact


class Severity(str, Enum):
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class ComponentHostError(Exception):
    code: str
    user_message: str
    severity: Severity = Severity.ERROR
    recoverable: bool = True
    context: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        super().__init__(self.user_message)

    def __str__(self) -> str:
        return self.user_message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "user_message": self.user_message,
            "severity": self.severity.value,
            "recoverable": bool(self.recoverable),
            "context": redact(self.context or {}),
        }


# ---- Registry failures ----
class InvalidInputError(ComponentHostError):
    def __init__(self, user_message: str = "Invalid component code.", **ctx: Any):
        super().__init__("invalid_input", user_message, severity=Severity.WARN, recoverable=False, context=ctx)


class NameCollisionError(ComponentHostError):
    def __init__(self, name: str, user_message: str = "", **ctx: Any):
        msg = user_message or f"Cannot override built-in component '{name}', choose another name."
        super().__init__("name_collision", msg, severity=Severity.WARN, recoverable=False, context={"name": name, **ctx})


class NotFoundError(ComponentHostError):
    def __init__(self, name: str, user_message: str = "", **ctx: Any):
        msg = user_message or f"No component found for name '{name}'."
        super().__init__("not_found", msg, severity=Severity.WARN, recoverable=False, context={"name": name, **ctx})


# ---- Persistence ----
class SettingsStoreError(ComponentHostError):
    def __init__(self, user_message: str = "Settings store error.", **ctx: Any):
        super().__init__("settings_store_error", user_message, severity=Severity.ERROR, recoverable=True, context=ctx)
