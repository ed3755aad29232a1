"""Structured JSON logging with node context."""
import logging
import sys
from typing import Any

from pythonjsonlogger import jsonlogger

from mealie_nodes.config import get_settings

CONTEXT_FIELDS = ("node_id", "node_type", "operation")


class NodeContextFilter(logging.Filter):
    """Add node context to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Add default node context fields if not present."""
        for name in CONTEXT_FIELDS:
            if not hasattr(record, name):
                setattr(record, name, None)
        return True


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with standardized field names."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        """Add custom fields to the log record."""
        super().add_fields(log_record, record, message_dict)

        if not log_record.get("timestamp"):
            log_record["timestamp"] = self.formatTime(record, self.datefmt)

        log_record["level"] = record.levelname
        log_record["logger"] = record.name

        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value:
                log_record[name] = value
            else:
                log_record.pop(name, None)


def setup_logging() -> None:
    """Configure logging for a host process that loads the node pack."""
    settings = get_settings()

    handler = logging.StreamHandler(sys.stdout)

    if settings.log_json:
        formatter: logging.Formatter = CustomJsonFormatter(
            "%(timestamp)s %(level)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        )
    handler.setFormatter(formatter)
    handler.addFilter(NodeContextFilter())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(settings.log_level)


class NodeLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that merges per-call extra over the bound node context."""

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        kwargs["extra"] = {**(self.extra or {}), **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(name: str, **context: Any) -> NodeLoggerAdapter:
    """
    Get a logger with node context support.

    Args:
        name: Logger name (typically __name__)
        **context: Node context bound to every record (see with_node_context)

    Returns:
        LoggerAdapter that also accepts node context in the extra dict
    """
    logger = logging.getLogger(name)
    return NodeLoggerAdapter(logger, with_node_context(**context))


def with_node_context(
    node_id: str | None = None,
    node_type: str | None = None,
    operation: str | None = None,
    **kwargs: Any,
) -> dict[str, Any]:
    """
    Create an extra dict with node context for logging.

    Args:
        node_id: Flow node ID
        node_type: Node type (e.g. "mealie-recipe")
        operation: Operation being dispatched
        **kwargs: Additional context fields

    Returns:
        Dict to pass as extra parameter to logger methods
    """
    extra = kwargs.copy()
    if node_id:
        extra["node_id"] = node_id
    if node_type:
        extra["node_type"] = node_type
    if operation:
        extra["operation"] = operation
    return extra
