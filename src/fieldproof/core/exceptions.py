# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Custom exception hierarchy for fieldproof.

Classification itself never raises: malformed or adversarial values are
simply ineligible. These exceptions cover the record and configuration
layers around it.
"""

from __future__ import annotations

from typing import Any


class FieldproofException(Exception):  # noqa: N818
    """Base exception for all fieldproof errors."""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(FieldproofException):
    """Exception for validation errors.

    Raised when:
    - A profile field's name or value is not a string
    - A stored verification timestamp cannot be parsed
    - A profile carries more fields than allowed
    """

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        super().__init__(message, details)
        self.field = field
        self.value = value


class ConfigException(FieldproofException):
    """Exception for configuration errors.

    Raised when settings loaded from the environment fail validation.
    """

    def __init__(self, message: str, invalid_settings: list[str] | None = None):
        details = {}
        if invalid_settings:
            details["invalid_settings"] = invalid_settings
        super().__init__(message, details)
        self.invalid_settings = invalid_settings or []
