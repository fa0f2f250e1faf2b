import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Iterator, Optional

SUBSYSTEM = "centreon"

# Structured fields attached to every record emitted in the current context.
LOG_FIELDS_CONTEXT: ContextVar[Dict[str, Any]] = ContextVar("log_fields", default={})


def get_log_fields() -> Dict[str, Any]:
    """Return the structured fields bound in the current context."""
    return dict(LOG_FIELDS_CONTEXT.get())


@contextmanager
def bind_log_fields(**fields: Any) -> Iterator[Dict[str, Any]]:
    """Bind structured fields to all log records emitted inside the block.

    Nested blocks extend the outer fields; the previous set is restored on
    exit.

    Examples:
        >>> with bind_log_fields(operation="create", host="web01"):
        ...     logger.info("Creating host")
    """
    merged = {**LOG_FIELDS_CONTEXT.get(), **fields}
    token = LOG_FIELDS_CONTEXT.set(merged)
    try:
        yield merged
    finally:
        LOG_FIELDS_CONTEXT.reset(token)


def format_log_fields(fields: Dict[str, Any]) -> str:
    """Render fields as ``key=value`` pairs in a stable order."""
    return " ".join(f"{key}={fields[key]}" for key in sorted(fields))


class SubsystemFormatter(logging.Formatter):
    """Log formatter that includes the subsystem tag and bound fields.

    Format: timestamp [subsystem] level logger_name: message key=value ...
    Example: 2025-08-07 14:30:15,123 [centreon] INFO centreon_provider.api_client: Created host operation=create
    """

    def __init__(self, fmt: Optional[str] = None, datefmt: Optional[str] = None):
        if fmt is None:
            fmt = "%(asctime)s [%(subsystem)s] %(levelname)s %(name)s: %(message)s%(fields)s"
        elif "%(fields)s" not in fmt:
            fmt = fmt + "%(fields)s"

        super().__init__(fmt, datefmt)

    def format(self, record: logging.LogRecord) -> str:
        if not getattr(record, "subsystem", None):
            record.subsystem = SUBSYSTEM

        fields = get_log_fields()
        fields.update(getattr(record, "extra_fields", None) or {})
        record.fields = f" {format_log_fields(fields)}" if fields else ""

        return super().format(record)


def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None):
    """
    Set up logging for the application.

    Args:
        log_level (str): Logging level as a string (e.g., 'DEBUG', 'INFO').
        log_file (str): Optional file to write log records to in addition
            to the console.
    """
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {log_level}")

    formatter = SubsystemFormatter()

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


class SubsystemLoggerAdapter(logging.LoggerAdapter):
    """Adapter that tags records with the subsystem and optional fields."""

    def process(self, msg, kwargs):
        extra = kwargs.setdefault("extra", {})
        extra.setdefault("subsystem", self.extra.get("subsystem", SUBSYSTEM))
        fields = kwargs.pop("fields", None)
        if fields:
            extra["extra_fields"] = fields
        return msg, kwargs


def get_subsystem_logger(name: str, subsystem: str = SUBSYSTEM) -> SubsystemLoggerAdapter:
    """Get a logger whose records carry the subsystem tag.

    Structured fields can be passed per call with the ``fields`` keyword:

        >>> logger = get_subsystem_logger(__name__)
        >>> logger.info("Fetching hosts", fields={"limit": 10})
    """
    return SubsystemLoggerAdapter(logging.getLogger(name), {"subsystem": subsystem})
