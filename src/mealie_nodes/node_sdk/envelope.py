"""
Response normalization.

Every node emits exactly one of two payload shapes:

    {"success": True, "operation": "get", "data": {...}}
    {"success": False, "operation": "get", "error": {"message": "...", "code": "..."}}

``code`` is only present when the error carries one.
"""

from __future__ import annotations

from typing import Any, Optional, TypedDict


class ErrorInfo(TypedDict, total=False):
    """Error part of a failure envelope."""
    message: str
    code: str


class OperationResult(TypedDict, total=False):
    """Outbound message payload."""
    success: bool
    operation: Optional[str]
    data: Any
    error: ErrorInfo


def error_message(error: BaseException) -> str:
    """Message of an exception, preferring an explicit ``message`` attribute."""
    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(error)


def success_envelope(operation: Optional[str], data: Any) -> OperationResult:
    return {"success": True, "operation": operation, "data": data}


def error_envelope(operation: Optional[str], error: BaseException) -> OperationResult:
    info: ErrorInfo = {"message": error_message(error)}
    code = getattr(error, "code", None)
    if code is not None:
        info["code"] = str(code)
    return {"success": False, "operation": operation, "error": info}


def normalize(operation: Optional[str], outcome: Any) -> OperationResult:
    """Wrap a handler result or raised exception into the outbound envelope."""
    if isinstance(outcome, BaseException):
        return error_envelope(operation, outcome)
    return success_envelope(operation, outcome)


__all__ = [
    "ErrorInfo",
    "OperationResult",
    "error_message",
    "success_envelope",
    "error_envelope",
    "normalize",
]
