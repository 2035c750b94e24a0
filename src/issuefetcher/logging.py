"""Logging setup for issuefetcher.

All components log under the ``issuefetcher`` logger. ``setup_logging`` sends
those records to a rotating file (and optionally the console) through a
filter that masks GitHub credentials, so an access token that ends up in an
exception message or URL never reaches a log file.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable
from logging.handlers import RotatingFileHandler
from pathlib import Path

ROOT_LOGGER = "issuefetcher"

DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_FILE = "issuefetcher.log"
DEFAULT_MAX_BYTES = 5 * 1024 * 1024  # 5MB
DEFAULT_BACKUP_COUNT = 3
DEFAULT_LOG_LEVEL = "INFO"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

REDACTED = "[REDACTED]"

_TOKEN_PATTERNS = [
    (re.compile(r"ghp_[a-zA-Z0-9]{36}"), "[GITHUB_TOKEN]"),  # classic PAT
    (re.compile(r"gho_[a-zA-Z0-9]{36}"), "[GITHUB_TOKEN]"),  # OAuth
    (re.compile(r"github_pat_[a-zA-Z0-9_]{82}"), "[GITHUB_TOKEN]"),  # fine-grained PAT
    (re.compile(r"(?i)bearer [a-zA-Z0-9._-]+"), f"bearer {REDACTED}"),
    (re.compile(r"(?i)token [a-zA-Z0-9_]{20,}"), f"token {REDACTED}"),
    (re.compile(r"token=[a-zA-Z0-9._-]+"), f"token={REDACTED}"),
]


def sanitize_for_log(text: str, secrets: Iterable[str] = ()) -> str:
    """Mask GitHub tokens and authorization values in text bound for a log.

    ``secrets`` are exact strings (such as the configured access token) that
    are masked wherever they appear, whatever their format.
    """
    result = text
    for secret in secrets:
        if secret:
            result = result.replace(secret, REDACTED)
    for pattern, replacement in _TOKEN_PATTERNS:
        result = pattern.sub(replacement, result)
    return result


class RedactingFilter(logging.Filter):
    """Rewrites each record's message through ``sanitize_for_log``."""

    def __init__(self, secrets: Iterable[str] = ()) -> None:
        super().__init__()
        self.secrets = {s for s in secrets if s}

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        sanitized = sanitize_for_log(message, self.secrets)
        if sanitized != message:
            record.msg = sanitized
            record.args = None
        return True


def setup_logging(
    log_dir: str | Path | None = None,
    log_file: str = DEFAULT_LOG_FILE,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    level: str | None = None,
    console: bool = True,
    secrets: Iterable[str] = (),
) -> logging.Logger:
    """Configure the ``issuefetcher`` logger.

    Args:
        log_dir: Directory for the log file. ISSUEFETCHER_LOG_DIR overrides
                 the default of 'logs'.
        log_file: Log file name.
        max_bytes: Size at which the file is rotated.
        backup_count: Rotated files to keep.
        level: DEBUG, INFO, WARNING or ERROR. ISSUEFETCHER_LOG_LEVEL
               overrides the default of INFO.
        console: Also log to stderr.
        secrets: Exact values to mask in every record, e.g. the access token.

    Returns:
        The ``issuefetcher`` logger.
    """
    if log_dir is None:
        log_dir = os.environ.get("ISSUEFETCHER_LOG_DIR", DEFAULT_LOG_DIR)
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    if level is None:
        level = os.environ.get("ISSUEFETCHER_LOG_LEVEL", DEFAULT_LOG_LEVEL)
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(log_level)

    # Reconfiguring replaces the previous handlers rather than stacking them
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    redactor = RedactingFilter(secrets)

    log_path = log_dir / log_file
    handlers: list[logging.Handler] = [
        RotatingFileHandler(
            log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
    ]
    if console:
        handlers.append(logging.StreamHandler())

    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        handler.addFilter(redactor)
        logger.addHandler(handler)

    logger.info("issuefetcher logging initialized (level=%s, file=%s)", level, log_path)
    return logger


def truncate_output(output: str, max_length: int = 2000) -> str:
    """Shorten long payloads (e.g. GraphQL error bodies) before logging them."""
    if len(output) <= max_length:
        return output
    return output[:max_length] + f"\n... [truncated, {len(output) - max_length} more chars]"
