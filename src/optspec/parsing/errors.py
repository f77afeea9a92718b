"""Exceptions and the user-facing error strings collected in ParseResult.errors."""

from __future__ import annotations

from typing import Any


class SpecError(ValueError):
    """Invalid or ambiguous option declarations. Raised before any token is read."""


class ParseError(ValueError):
    """Raised by a parse_fn to reject a raw value; its text becomes the error cause."""


def unknown_option(token: str) -> str:
    return f'Unknown option: "{token}"'


def missing_argument(flag: str, placeholder: str) -> str:
    return f'Missing argument for "{flag} {placeholder}"'


def describe_cause(exc: BaseException) -> str:
    """ParseError text as-is; other exceptions prefixed with their class name."""
    if isinstance(exc, ParseError):
        return str(exc) or "invalid value"
    text = str(exc)
    return f"{type(exc).__name__}: {text}" if text else type(exc).__name__


def parse_failure(flag: str, raw: str | None, exc: BaseException) -> str:
    given = flag if raw is None else f"{flag} {raw}"
    return f'Error while parsing option "{given}": {describe_cause(exc)}'


def validation_failure(flag: str, raw: str | None, message: str) -> str:
    given = flag if raw is None else f"{flag} {raw}"
    return f'Failed to validate "{given}": {message}'


def render_message(message: Any, value: Any) -> str:
    """Validation messages may be plain text or a callable taking the rejected value."""
    if message is None:
        return "invalid value"
    if callable(message):
        return str(message(value))
    return str(message)
