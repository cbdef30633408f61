"""Error codes and error handling utilities for consolebrand."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes for branding operations."""

    # Configuration errors
    CONFIG_MISSING = auto()
    CONFIG_INVALID = auto()
    CONFIG_UNREADABLE = auto()
    LOG_DIR_UNWRITABLE = auto()

    # Query errors
    KEY_INVALID = auto()


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.CONFIG_MISSING: "No engine configuration directory is configured.",
    ErrorCode.CONFIG_INVALID: "The engine configuration file is invalid.",
    ErrorCode.CONFIG_UNREADABLE: "The engine configuration file could not be read.",
    ErrorCode.LOG_DIR_UNWRITABLE: "The log directory could not be created or written.",
    ErrorCode.KEY_INVALID: "Branding message keys must look like obrand.<scope>.<name>.",
}


@dataclass
class ConsoleBrandError(Exception):
    """Base exception for consolebrand with error code and context."""

    code: ErrorCode
    message: str = ""
    path: Path | None = None
    details: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.message:
            self.message = ERROR_MESSAGES.get(self.code, "An unexpected error occurred.")

    def __str__(self) -> str:
        parts = [self.message]
        if self.path:
            parts.append(f" ({self.path})")
        if self.details:
            details_str = " | ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f" [{details_str}]")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "code": self.code.name,
            "message": self.message,
            "path": str(self.path) if self.path else None,
            "details": self.details,
        }
