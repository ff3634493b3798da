"""
CLI helper utilities.

This module provides shared utilities for CLI commands including:
- Logging setup (text or JSON lines on stderr, optional rotating log file)
- Console output helpers (headers, entity tables)
"""

import json
import logging
import os
import sys
import tempfile
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Sequence, Tuple

from vocabgen.constants import CLIConfig, LoggingConfig

# Type alias for log levels
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Attributes every LogRecord has; anything else arrived through ``extra=``
_RECORD_ATTRIBUTES = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """
    One JSON object per record.

    Fields passed with ``extra=`` (the pipeline adds ``vocabulary``) are
    copied into the object; values json cannot encode are stringified.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(
                LoggingConfig.JSON_DATE_FORMAT
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRIBUTES and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


_MANAGED_HANDLERS: List[logging.Handler] = []


def get_default_config_path() -> str:
    """Configuration file used when --config is not given (in the working directory)."""
    return str(Path.cwd() / CLIConfig.DEFAULT_CONFIG_FILE)


def _clear_managed_handlers() -> None:
    """Remove handlers that were added by this module."""
    global _MANAGED_HANDLERS
    root_logger = logging.getLogger()
    for handler in _MANAGED_HANDLERS:
        root_logger.removeHandler(handler)
        handler.close()
    _MANAGED_HANDLERS = []


def _positive_int(value: Any, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def _open_log_file(
    path: str,
    rotation: Dict[str, Any],
) -> Tuple[Optional[logging.Handler], Optional[str]]:
    """
    Open ``path`` for logging, falling back to the temp and home directories.

    Returns:
        Tuple of (handler, path actually used), or (None, None) when no
        location is writable
    """
    name = os.path.basename(path) or "vocabgen.log"
    candidates = [path, os.path.join(tempfile.gettempdir(), name), os.path.join(str(Path.home()), name)]
    rotate = rotation.get('enabled', LoggingConfig.ROTATION_ENABLED)
    max_bytes = _positive_int(rotation.get('max_mb'), LoggingConfig.MAX_LOG_FILE_MB) * 1024 * 1024
    backups = _positive_int(rotation.get('backup_count'), LoggingConfig.LOG_BACKUP_COUNT)

    for candidate in candidates:
        try:
            directory = os.path.dirname(candidate)
            if directory:
                os.makedirs(directory, exist_ok=True)
            if rotate:
                handler: logging.Handler = RotatingFileHandler(
                    candidate, maxBytes=max_bytes, backupCount=backups, encoding='utf-8'
                )
            else:
                handler = logging.FileHandler(candidate, encoding='utf-8')
        except OSError as exc:
            print(f"  Could not create log at {candidate}: {exc}", file=sys.stderr)
            continue
        if candidate != path:
            print(f"Note: Using fallback log file: {candidate}", file=sys.stderr)
        return handler, candidate

    print(f"Warning: Could not write log file {path}, logging to console only", file=sys.stderr)
    return None, None


def setup_logging(
    level: Optional[LogLevel] = None,
    log_file: Optional[str] = None,
    *,
    config: Optional[Dict[str, Any]] = None,
) -> Optional[str]:
    """
    Configure the root logger for a CLI run.

    Console output goes to stderr so that command output on stdout stays
    parseable. Explicit ``level`` / ``log_file`` arguments (from the
    command line) win over the ``logging`` section of the configuration
    file. Calling this again replaces the handlers installed by the
    previous call.

    Args:
        level: Log level override.
        log_file: Log file override.
        config: ``logging`` configuration section with keys ``level``,
            ``file``, ``format`` ('text' or 'json') and ``rotation``
            ({enabled, max_mb, backup_count}).

    Returns:
        The log file path used, or None when logging to the console only.
    """
    settings = dict(config or {})
    level_name = str(level or settings.get('level', LoggingConfig.DEFAULT_LOG_LEVEL)).upper()
    log_level = logging.getLevelName(level_name)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    style = str(settings.get('format', LoggingConfig.DEFAULT_FORMAT_STYLE)).lower()
    if style == 'json':
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(fmt=LoggingConfig.LOG_FORMAT, datefmt=LoggingConfig.DATE_FORMAT)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    path = log_file if log_file is not None else settings.get('file')
    used_file = None
    if path:
        rotation = settings.get('rotation')
        handler, used_file = _open_log_file(str(path), rotation if isinstance(rotation, dict) else {})
        if handler is not None:
            handlers.append(handler)

    _clear_managed_handlers()
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    logging.captureWarnings(True)
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
        _MANAGED_HANDLERS.append(handler)

    logger = logging.getLogger(__name__)
    if style not in LoggingConfig.SUPPORTED_FORMATS:
        logger.warning(f"Unknown log format '{style}', using text")
    if used_file:
        logger.info(f"Logging to: {used_file}")
    return used_file


def print_header(title: str, width: int = CLIConfig.HEADER_WIDTH) -> None:
    """Print a formatted header with the given title."""
    print("\n" + "=" * width)
    print(title)
    print("=" * width)


def print_footer(width: int = CLIConfig.HEADER_WIDTH) -> None:
    """Print a footer line."""
    print("=" * width + "\n")


def format_table(rows: Sequence[Sequence[Any]], headers: Sequence[str]) -> str:
    """
    Format rows as a left-aligned text table.

    Args:
        rows: Table rows; cells are converted with str().
        headers: Column headings.

    Returns:
        Multi-line string with a heading separator.
    """
    cells = [[str(c) for c in row] for row in rows]
    widths = [len(h) for h in headers]
    for row in cells:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def _line(values: Sequence[str]) -> str:
        return "  ".join(v.ljust(widths[i]) for i, v in enumerate(values)).rstrip()

    lines = [_line(headers), _line(["-" * w for w in widths])]
    lines.extend(_line(row) for row in cells)
    return "\n".join(lines)
