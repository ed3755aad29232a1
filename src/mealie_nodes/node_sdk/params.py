"""
Parameter resolution and validation for node operations.

Every parameter is looked up in the inbound ``msg.payload`` first and in the
node's static configuration second. A value counts as present unless it is
``None`` or the empty string, so ``0``, ``False`` and empty collections are
real values.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Mapping, Optional, Union

from .errors import ValidationError


ParseMode = Literal["raw", "json"]


def is_present(value: Any) -> bool:
    """True unless the value is None or an empty string."""
    return value is not None and not (isinstance(value, str) and value == "")


def resolve_param(
    name: str,
    payload: Optional[Mapping[str, Any]],
    config: Optional[Mapping[str, Any]],
    parse: ParseMode = "raw",
    default: Any = None,
) -> Any:
    """
    Resolve a named parameter from payload, then node config.

    Args:
        name: Parameter name (same key in payload and config)
        payload: Inbound message payload (may be None)
        config: Static node configuration (may be None)
        parse: "json" parses string values; invalid JSON is returned raw
        default: Returned when neither source has a value

    Returns:
        The resolved value
    """
    value = None
    for source in (payload, config):
        if source is not None and is_present(source.get(name)):
            value = source[name]
            break

    if value is None:
        return default

    if parse == "json" and isinstance(value, str):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value
    return value


def require_param(value: Any, human_name: str, operation: str, field_hint: str) -> Any:
    """
    Assert that a required parameter has a value.

    Raises:
        ValidationError: If the value is None or an empty string
    """
    if not is_present(value):
        raise ValidationError(
            f"No {human_name} provided for {operation} operation. "
            f"Specify in node config or msg.payload.{field_hint}"
        )
    return value


# ==============================================================================
# Selectors - which sibling client call an optional identifier picks
# ==============================================================================

@dataclass(frozen=True)
class ById:
    """An identifier was supplied: address a single entity."""
    id: Any


@dataclass(frozen=True)
class All:
    """No identifier: address the whole collection."""


Selector = Union[ById, All]


def select_by_id(value: Any) -> Selector:
    """Build a selector from an optional identifier."""
    if is_present(value):
        return ById(value)
    return All()


# ==============================================================================
# OperationRequest - one per inbound message
# ==============================================================================

@dataclass
class OperationRequest:
    """
    The operation name plus both parameter sources for one message.

    Handlers pull their parameters through this object so that every lookup
    uses the same precedence and every error names the same operation.
    """

    operation: str
    payload: Dict[str, Any] = field(default_factory=dict)
    config: Dict[str, Any] = field(default_factory=dict)

    def get(self, name: str, parse: ParseMode = "raw", default: Any = None) -> Any:
        """Resolve an optional parameter."""
        return resolve_param(name, self.payload, self.config, parse=parse, default=default)

    def require(self, name: str, human_name: str, parse: ParseMode = "raw") -> Any:
        """Resolve a required parameter or raise ValidationError."""
        return require_param(self.get(name, parse=parse), human_name, self.operation, name)

    def require_data(self, name: str, human_name: str) -> Any:
        """Resolve a required JSON document (object, array, or JSON string)."""
        value = self.require(name, human_name, parse="json")
        if isinstance(value, str):
            raise ValidationError(
                f"Invalid JSON format for {human_name} in {self.operation} operation"
            )
        return value

    def get_data(self, name: str, human_name: str, default: Any = None) -> Any:
        """Resolve an optional JSON document; a string that fails to parse is rejected."""
        value = self.get(name, parse="json", default=default)
        if isinstance(value, str):
            raise ValidationError(
                f"Invalid JSON format for {human_name} in {self.operation} operation"
            )
        return value

    def select(self, name: str) -> Selector:
        """Resolve an optional identifier into a selector."""
        return select_by_id(self.get(name))


__all__ = [
    "ParseMode",
    "is_present",
    "resolve_param",
    "require_param",
    "ById",
    "All",
    "Selector",
    "select_by_id",
    "OperationRequest",
]
