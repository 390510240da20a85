"""Custom exception hierarchy for i18nQL.

All public errors inherit from I18nQLError so callers can catch the base
class for any i18nQL-specific failure.
"""
from __future__ import annotations

from typing import Any


class I18nQLError(Exception):
    """Base exception for all i18nQL errors."""


class LanguageNotFoundError(I18nQLError, ValueError):
    """Raised when an explicit language identifier matches no known language.

    Args:
        identifier: The numeric id or locale code that failed to resolve.
    """

    def __init__(self, identifier: int | str) -> None:
        super().__init__(
            f"Incorrect lang argument given: lang {identifier} not found"
        )
        self.identifier = identifier


class NoDefaultLanguageError(I18nQLError):
    """Raised when a language repository holds no language at all."""

    def __init__(self, source: str | None = None) -> None:
        message = "No default language is defined"
        if source:
            message = f"{message} in {source}"
        super().__init__(f"{message}.")
        self.source = source


class ConfigError(I18nQLError):
    """Raised when an i18n configuration value cannot be interpreted.

    Args:
        key: Configuration key being read.
        value: The offending raw value.
        allowed: Accepted values, reported back to the caller.
    """

    def __init__(self, key: str, value: Any, allowed: list[str] | None = None) -> None:
        message = f"Invalid value {value!r} for configuration key '{key}'."
        if allowed:
            message = f"{message} Allowed values: {allowed}."
        super().__init__(message)
        self.key = key
        self.value = value
        self.allowed = allowed or []


class PlanError(I18nQLError):
    """Raised when a QueryPlan is mutated inconsistently.

    Args:
        message: Human-readable description.
        alias: The join alias involved, if any.
    """

    def __init__(self, message: str, alias: str | None = None) -> None:
        super().__init__(message)
        self.alias = alias


class CompilationError(I18nQLError):
    """Raised when SQL compilation fails for an unexpected reason.

    Args:
        message: Human-readable description.
        clause: The QueryPlan clause being compiled when the error occurred.
    """

    def __init__(self, message: str, clause: str | None = None) -> None:
        super().__init__(message)
        self.clause = clause
