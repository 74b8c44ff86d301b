from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    INVALID_PARAMS = "InvalidParams"
    METHOD_NOT_FOUND = "MethodNotFound"


class ToolCallError(Exception):
    """
    The request itself failed: bad arguments or an unknown tool.
    Raised before any process is spawned; execution failures never use this.
    """

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"
