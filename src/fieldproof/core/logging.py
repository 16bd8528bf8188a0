# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Structured logging configuration for fieldproof.

Provides:
- JSON formatter for machine-parseable output (log files, pipelines)
- Plain formatter for terminals
- Correlation IDs so every decision made for one command or request
  can be grouped together
- DecisionLogger for recording eligibility outcomes without dumping
  whole field values into the log
"""

from __future__ import annotations

import json
import logging
import re
import sys
import uuid
from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)

# Spoofed values hide the real host behind long whitespace runs
_WHITESPACE_RUN = re.compile(r"\s{4,}")

PREVIEW_LENGTH = 200


def get_correlation_id() -> str | None:
    """Get the correlation ID of the current context.

    Returns:
        The active correlation ID, or None outside any correlation context
    """
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None) -> None:
    """Set the correlation ID for the current context.

    Args:
        correlation_id: ID to attach to subsequent records, or None to clear it
    """
    _correlation_id.set(correlation_id)


@contextmanager
def correlation_context(
    correlation_id: str | None = None,
) -> Generator[str, None, None]:
    """Scope a correlation ID to a block of work.

    Args:
        correlation_id: ID to use; a UUID4 is generated when omitted

    Yields:
        The correlation ID in effect inside the block

    Example:
        with correlation_context() as cid:
            logger.info("Checking profile fields")  # tagged with cid
    """
    cid = correlation_id or str(uuid.uuid4())
    token = _correlation_id.set(cid)
    try:
        yield cid
    finally:
        _correlation_id.reset(token)


def preview_value(value: Any, limit: int = PREVIEW_LENGTH) -> Any:
    """Shorten a field value for logging.

    Whitespace runs of four or more characters are replaced by a marker
    giving their length, so a padded spoof stays readable in one line.

    Args:
        value: Field value as stored; non-strings are returned unchanged
        limit: Maximum length of the returned preview, before the ellipsis

    Returns:
        The shortened value
    """
    if not isinstance(value, str):
        return value
    collapsed = _WHITESPACE_RUN.sub(lambda m: f"[{len(m.group())} whitespace]", value)
    if len(collapsed) > limit:
        return collapsed[:limit] + "..."
    return collapsed


class JSONFormatter(logging.Formatter):
    """Emit each record as a single JSON object.

    Records logged with ``extra={"extra_data": {...}}`` carry that mapping
    under the ``extra`` key.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Serialize a record.

        Args:
            record: Record to serialize

        Returns:
            One line of JSON
        """
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        correlation_id = get_correlation_id()
        if correlation_id:
            log_data["correlation_id"] = correlation_id

        # Source location only where someone is likely to go looking
        if record.levelno >= logging.WARNING:
            log_data["source"] = {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extra_data = getattr(record, "extra_data", None)
        if extra_data is not None:
            log_data["extra"] = extra_data

        return json.dumps(log_data, default=str)


class StandardFormatter(logging.Formatter):
    """Human-readable formatter for terminals.

    Args:
        use_colors: Colour the level name; ignored when stderr is not a TTY
    """

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        """Render a record as one text line.

        Args:
            record: Record to render; left untouched for other handlers

        Returns:
            Formatted line, prefixed with a short correlation ID when one is set
        """
        record = logging.makeLogRecord(record.__dict__)

        correlation_id = get_correlation_id()
        if correlation_id:
            record.msg = f"[{correlation_id[:8]}] {record.msg}"

        if self.use_colors:
            color = self.COLORS.get(record.levelname, "")
            record.levelname = f"{color}{record.levelname}{self.RESET}"

        return super().format(record)


def _resolve_level(level: str | int | None, default: str) -> int:
    if level is None:
        level = default
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def _resolve_json(json_format: bool | None, log_format: str) -> bool:
    if json_format is not None:
        return json_format
    log_format = log_format.lower()
    if log_format in ("json", "text"):
        return log_format == "json"
    return not sys.stderr.isatty()


def configure_logging(
    level: str | int | None = None,
    json_format: bool | None = None,
    log_file: str | None = None,
) -> None:
    """Install fieldproof's handlers on the root logger.

    Existing root handlers are replaced. Output goes to stderr, and
    additionally to ``log_file`` (always as JSON) when one is configured.

    Args:
        level: Level name or number. Defaults to FIELDPROOF_LOG_LEVEL.
        json_format: Force JSON (True) or plain text (False). Defaults to
            FIELDPROOF_LOG_FORMAT; ``auto`` picks JSON when stderr is not a TTY.
        log_file: Extra JSON log file. Defaults to FIELDPROOF_LOG_FILE.
    """
    from .config import get_config

    config = get_config()

    root_logger = logging.getLogger()
    root_logger.setLevel(_resolve_level(level, config.log_level))
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    use_json = _resolve_json(json_format, config.log_format)
    console_handler.setFormatter(JSONFormatter() if use_json else StandardFormatter())
    root_logger.addHandler(console_handler)

    log_file = config.log_file if log_file is None else log_file
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(file_handler)


class DecisionLogger:
    """Logger for eligibility decisions.

    Each decision is one DEBUG record whose ``extra_data`` carries the
    outcome, the identity kind and a preview of the value.

    Args:
        logger: Destination logger; defaults to ``fieldproof.decisions``
    """

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger("fieldproof.decisions")

    def log_decision(
        self,
        value: Any,
        is_local: bool,
        reason: str | None = None,
        url: str | None = None,
        level: int = logging.DEBUG,
    ) -> None:
        """Log the outcome of classifying one value.

        Args:
            value: The value that was classified
            is_local: Whether it belongs to a local identity
            reason: Ineligibility reason, or None when the value is eligible
            url: The eligible URL, if any
            level: Log level
        """
        if reason is None:
            msg = f"Value eligible for verification: {url}"
        else:
            msg = f"Value ineligible for verification: {reason}"

        self.logger.log(
            level,
            msg,
            extra={
                "extra_data": {
                    "eligible": reason is None,
                    "reason": reason,
                    "local": is_local,
                    "value": preview_value(value),
                }
            },
        )
