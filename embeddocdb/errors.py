"""Errors raised by the embedded document database."""

from __future__ import annotations

from enum import IntEnum

CATEGORY_NAME = "EmbeddedDocumentDBErrorCategory"


class ErrorCode(IntEnum):
    GENERIC_ERROR = 1


def error_message(code: int) -> str:
    """Return the description of an error code."""
    try:
        known = ErrorCode(code)
    except ValueError:
        return "unknown value"
    if known is ErrorCode.GENERIC_ERROR:
        return "generic error"
    return "unknown value"


class EmbeddedDocumentDBError(Exception):
    """Failure reported by the database or its storage engine."""

    category = CATEGORY_NAME

    def __init__(self, code: int = ErrorCode.GENERIC_ERROR, message: str | None = None) -> None:
        self.code = code
        self.message = message if message is not None else error_message(code)
        super().__init__(self.message)