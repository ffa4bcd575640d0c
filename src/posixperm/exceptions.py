"""Custom exception hierarchy for posixperm."""

from __future__ import annotations


class PosixPermError(Exception):
    """Base exception for all posixperm errors."""


class ParseError(PosixPermError, ValueError):
    """Raised when text cannot be parsed as a permission value.

    Attributes:
        text: The offending input.
        reason: Human-readable description of what went wrong.
    """

    def __init__(self, text: str, reason: str = "unrecognized permission syntax") -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"{reason}: {text!r}")


class UnrepresentableError(PosixPermError, ValueError):
    """Raised when a value has bits the canonical text form cannot carry."""
