"""
Structured logging configuration.

JSON log lines for map transitions and request cycles. Log messages across
the engine carry ``[key=value]`` prefixes (``[context=earth] [component=map]``);
the formatter lifts those into top-level fields.
"""

import json
import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional, Tuple


_TAG_PATTERN = re.compile(r"\[(\w+)=([^\]]*)\]\s*")

NOISY_LOGGERS = ("httpcore", "httpx", "openai")


def split_tags(message: str) -> Tuple[Dict[str, str], str]:
    """
    Separate leading ``[key=value]`` tags from a log message.

    Returns:
        Tuple of (tags, remaining message)
    """
    tags: Dict[str, str] = {}
    pos = 0
    while True:
        match = _TAG_PATTERN.match(message, pos)
        if match is None:
            break
        tags[match.group(1)] = match.group(2)
        pos = match.end()
    return tags, message[pos:]


class StructuredFormatter(logging.Formatter):
    """
    Formats records as one JSON object per line.

    Fields: timestamp, level, logger, message, any ``[key=value]`` tags
    found at the start of the message, the ``extra`` payload attached by
    log_state_transition, and exception text when present.
    """

    def format(self, record: logging.LogRecord) -> str:
        tags, message = split_tags(record.getMessage())
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": message,
        }
        entry.update(tags)

        payload = getattr(record, "extra", None)
        if payload is not None:
            entry["extra"] = payload

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    logger_name: str = "cosmoscope",
    quiet: Iterable[str] = NOISY_LOGGERS,
) -> logging.Logger:
    """
    Route the engine's logs through the JSON formatter.

    Args:
        level: Level for the engine logger
        log_file: Also write to this file when given
        logger_name: Root of the logger tree to configure
        quiet: Third-party loggers raised to WARNING

    Returns:
        The configured logger.
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    logger.handlers = []

    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)

    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logger


def summarize_map_state(state: Dict[str, Any]) -> Dict[str, Any]:
    """Mode kind, zoom and center of a dumped MapViewState."""
    mode = state.get("mode") or {}
    return {
        "mode": mode.get("kind"),
        "zoom": state.get("zoom"),
        "center": state.get("center"),
    }


def log_state_transition(
    event: str,
    state: Dict[str, Any],
    extra: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Log a map state transition at INFO.

    Args:
        event: Transition name ("select_location", "show_route", ...)
        state: The new MapViewState as a dict
        extra: Additional context for the entry
        logger: Logger to use, defaults to the engine logger
    """
    if logger is None:
        logger = logging.getLogger("cosmoscope")

    payload: Dict[str, Any] = {"event": event, "state_summary": summarize_map_state(state)}
    if extra:
        payload["extra"] = extra

    logger.info(f"State transition: {event}", extra={"extra": payload})
