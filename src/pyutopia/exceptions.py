"""Custom exception hierarchy for pyutopia."""

from __future__ import annotations


class UtopiaError(Exception):
    """Base exception for all pyutopia errors."""


class UtopiaConfigError(UtopiaError):
    """Invalid or missing configuration."""


class UtopiaClosedError(UtopiaError):
    """A simulator was asked to arm background work after shutdown."""

    def __init__(self, message: str, *, kind: str = "") -> None:
        self.kind = kind
        super().__init__(message)


class UnknownOperationError(UtopiaError):
    """The operation catalog has no entry with the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown operation: {name}")
