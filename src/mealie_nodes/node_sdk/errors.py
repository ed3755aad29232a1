"""
Node errors.

Locally raised errors carry a ``code`` that ends up in the error envelope.
Errors raised by the Mealie client are never wrapped in these types; they
reach the envelope unchanged.
"""

from __future__ import annotations

from typing import Any, Optional


class NodeOperationError(Exception):
    """Error during node operation."""

    code: Optional[str] = None

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Any = None,
    ) -> None:
        self.message = message
        if code is not None:
            self.code = code
        self.details = details
        super().__init__(message)


class ValidationError(NodeOperationError):
    """A required parameter is missing or malformed. Raised before any client call."""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message, details=details)


class ConfigurationError(NodeOperationError):
    """The server configuration is missing, incomplete, or cannot build a client."""

    code = "CONFIG_ERROR"

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message, details=details)


__all__ = [
    "NodeOperationError",
    "ValidationError",
    "ConfigurationError",
]
