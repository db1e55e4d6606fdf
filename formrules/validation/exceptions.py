"""
formrules Validation Exceptions
===============================

Two families of errors:

- ``ConfigurationError`` and subclasses signal a mistake in rule setup
  (unknown rule, bad rule argument). They abort the current run.
- ``ValidationError`` carries field failures and is only raised on
  request (``validate_or_fail``); ``Validation.validate`` records
  failures instead of raising them.
"""

from __future__ import annotations

from typing import Dict, Optional


class ConfigurationError(ValueError):
    """Rules are set up incorrectly."""


class UnknownRuleError(ConfigurationError):
    """No validator source defines the rule."""

    def __init__(self, rule: str, field: str) -> None:
        super().__init__(f"Validation rule '{rule}' not found on field '{field}'")
        self.rule = rule
        self.field = field


class InvalidRuleArgumentError(ConfigurationError):
    """A rule received an argument it cannot work with."""


class ValidationError(Exception):
    """
    Validation failed exception.

    Contains the formatted message of every failed field.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        errors: Optional[Dict[str, str]] = None,
    ) -> None:
        super().__init__(message)
        self.errors = errors or {}

    def __str__(self) -> str:
        if self.errors:
            lines = [f"  - {field}: {msg}" for field, msg in self.errors.items()]
            return "Validation failed:\n" + "\n".join(lines)
        return "Validation failed"

    def first(self, field: Optional[str] = None) -> Optional[str]:
        """Get the message of a field, or the first message."""
        if field is not None:
            return self.errors.get(field)
        return next(iter(self.errors.values()), None)
