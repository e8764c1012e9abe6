"""
Logging Configuration Module.

Provides centralized logging setup with rotating file handler.
Logs are saved to the project's logs directory unless another directory is given.
Includes automatic masking of sensitive data (tokens, e-mails, bank account numbers).
"""

import logging
import re
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


# --- Constants ---
LOG_FILENAME = "hr_console.log"
MAX_BYTES = 10 * 1024 * 1024  # 10 MB
BACKUP_COUNT = 5
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# --- Sensitive Data Patterns ---
# Patterns for data that should be masked in logs
SENSITIVE_PATTERNS = [
    # Key-value pairs with sensitive keys (password=xxx, token: xxx, etc.)
    (
        re.compile(
            r"(password|secret|token|access_token|refresh_token|api_key|apikey|"
            r"authorization|cookie|credential)\s*[:=]\s*['\"]?([^'\"\s&]+)['\"]?",
            re.IGNORECASE
        ),
        r"\1=***"
    ),
    # Bearer tokens in headers (including full JWT with dots)
    (
        re.compile(r"(Bearer\s+)([A-Za-z0-9\-_\.]+)", re.IGNORECASE),
        r"\1***"
    ),
    # JWT tokens standalone (eyJ...)
    (
        re.compile(r"\beyJ[A-Za-z0-9\-_]+\.[A-Za-z0-9\-_]+\.[A-Za-z0-9\-_]+"),
        r"***JWT***"
    ),
    # Bank account numbers (10+ digits, keep last 4)
    (
        re.compile(r"\b\d{6,}(\d{4})\b"),
        r"******\1"
    ),
    # Email addresses (partial mask: first 2 chars + *** + @domain)
    (
        re.compile(r"\b([a-zA-Z0-9._%+-]{2})([a-zA-Z0-9._%+-]*)(@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})\b"),
        r"\1***\3"
    ),
]


class SensitiveDataFormatter(logging.Formatter):
    """
    Custom log formatter that masks sensitive data.

    Automatically detects and masks:
    - Tokens, secrets, API keys
    - Authorization headers (Bearer tokens) and bare JWTs
    - Bank account numbers
    - Email addresses (partial masking)
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record, masking any sensitive data."""
        masked_msg = super().format(record)
        for pattern, replacement in SENSITIVE_PATTERNS:
            masked_msg = pattern.sub(replacement, masked_msg)
        return masked_msg


def get_log_path(log_dir: Optional[Path] = None) -> Path:
    """
    Get the path for log files.

    Defaults to the project's logs directory.
    """
    if log_dir is None:
        log_dir = Path(__file__).resolve().parent.parent / "logs"

    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / LOG_FILENAME


def _parse_level(level: int | str) -> int:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            return logging.INFO
    return level


def setup_logging(
    log_level: int | str = logging.INFO,
    log_dir: Optional[Path] = None,
    console_level: int | str | None = None,
) -> None:
    """
    Configure application logging with rotation.

    Args:
        log_level: The logging level, as int or level name (default: logging.INFO).
        log_dir: Directory for the rotating log file.
        console_level: Level of the stdout handler; defaults to log_level.
    """
    log_level = _parse_level(log_level)
    console_level = log_level if console_level is None else _parse_level(console_level)

    log_file_path = get_log_path(log_dir)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear existing handlers to avoid duplicates
    root_logger.handlers.clear()

    formatter = SensitiveDataFormatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    # --- File Handler (Rotating) ---
    file_handler = RotatingFileHandler(
        filename=str(log_file_path),
        maxBytes=MAX_BYTES,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    # --- Console Handler ---
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    root_logger.debug(f"Logging initialized. Log file: {log_file_path}")

    # Suppress noisy loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
