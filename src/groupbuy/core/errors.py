"""Error taxonomy. Every error carries the HTTP status and code used in the error envelope."""
from __future__ import annotations

from typing import Any


class GroupBuyError(Exception):
    code = "ERROR"
    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"error": {"code": self.code, "message": self.message}}


class ValidationError(GroupBuyError):
    code = "VALIDATION_ERROR"
    status_code = 400


class NotFoundError(GroupBuyError):
    code = "NOT_FOUND"
    status_code = 404


class ConflictError(GroupBuyError):
    """The request is well-formed but the aggregate's state forbids it."""

    code = "CONFLICT"
    status_code = 409


class DataStoreError(GroupBuyError):
    code = "DATA_STORE_ERROR"
    status_code = 502


class ConfigurationError(GroupBuyError):
    code = "CONFIGURATION_ERROR"
    status_code = 500
