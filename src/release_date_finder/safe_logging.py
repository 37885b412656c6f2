"""Secret-safe logging utilities for release-date-finder.

Provides utilities to ensure logs do not leak credentials or PII:
- API key redaction in request URLs
- Sensitive field redaction
- File path hashing/relativization
"""

from __future__ import annotations

import hashlib
import logging
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

# Fields that should be redacted in logs
REDACT_FIELDS = frozenset(
    {
        "password",
        "secret",
        "token",
        "api_key",
        "apikey",
        "auth",
        "authorization",
        "credential",
        "access_token",
    }
)

# Regex patterns for sensitive data
PATTERNS = {
    "email": re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b"),
    "api_key_param": re.compile(r"(api_key=)[^&\s\"']+", re.I),
}

# Loggers of HTTP libraries that echo full request URLs
HTTP_LOGGERS = ("httpx", "httpcore")


def hash_path(file_path: Path | str, length: int = 12) -> str:
    """Hash a file path for logging.

    Creates a deterministic, non-reversible hash of the full path.
    """
    path_str = str(file_path)
    return hashlib.sha256(path_str.encode()).hexdigest()[:length]


def safe_path(file_path: Path | str, use_hash: bool = False) -> str:
    """Get a safe representation of a path for logging.

    Args:
        file_path: Path to represent
        use_hash: If True, return hash instead of parent/filename

    Returns:
        Safe path representation
    """
    if use_hash:
        return f"file:{hash_path(file_path)}"
    path = Path(file_path)
    if path.parent.name:
        return f"{path.parent.name}/{path.name}"
    return path.name


def redact_value(value: str, visible_chars: int = 4) -> str:
    """Redact a sensitive value, showing only first few characters.

    Returns:
        Redacted string (e.g., "sk-a***")
    """
    if len(value) <= visible_chars:
        return "***"
    return f"{value[:visible_chars]}***"


def redact_dict(
    data: dict[str, Any],
    redact_fields: frozenset[str] | None = None,
) -> dict[str, Any]:
    """Recursively redact sensitive fields in a dictionary.

    Args:
        data: Dictionary to redact
        redact_fields: Set of field names to redact (case-insensitive)

    Returns:
        New dictionary with sensitive fields redacted
    """
    if redact_fields is None:
        redact_fields = REDACT_FIELDS

    result: dict[str, Any] = {}
    for key, value in data.items():
        key_lower = key.lower()

        should_redact = key_lower in redact_fields or any(
            field in key_lower for field in redact_fields
        )

        if should_redact and isinstance(value, str):
            result[key] = redact_value(value)
        elif isinstance(value, dict):
            result[key] = redact_dict(value, redact_fields)
        elif isinstance(value, list):
            result[key] = [
                redact_dict(item, redact_fields) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            result[key] = value

    return result


def sanitize_message(message: str) -> str:
    """Remove API keys and PII patterns from a log message."""
    result = PATTERNS["api_key_param"].sub(r"\1***", message)
    result = PATTERNS["email"].sub("[EMAIL]", result)
    return result


class SafeLogFormatter(logging.Formatter):
    """Log formatter that redacts secrets.

    Sanitizes the message and its formatting arguments, so URLs logged by
    httpx never expose the TMDb API key.
    """

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        hash_paths: bool = False,
    ):
        super().__init__(fmt, datefmt)
        self.hash_paths = hash_paths

    def format(self, record: logging.LogRecord) -> str:
        # Copy so other handlers see the original record
        record = logging.makeLogRecord(record.__dict__)
        record.msg = sanitize_message(str(record.msg))
        if record.args:
            record.args = self._sanitize_args(record.args)
        return super().format(record)

    def _sanitize_args(
        self, args: tuple[Any, ...] | Mapping[str, Any]
    ) -> tuple[Any, ...] | dict[str, Any]:
        if isinstance(args, Mapping):
            return {k: self._sanitize_value(v) for k, v in args.items()}
        return tuple(self._sanitize_value(arg) for arg in args)

    def _sanitize_value(self, value: Any) -> Any:
        if isinstance(value, Path):
            return safe_path(value, use_hash=self.hash_paths)
        if isinstance(value, str):
            return sanitize_message(value)
        # httpx passes request URLs as httpx.URL objects
        if type(value).__name__ == "URL":
            return sanitize_message(str(value))
        return value


def configure_rich_logging(
    level: int = logging.WARNING,
    hash_paths: bool = False,
    show_time: bool = True,
    show_path: bool = False,
) -> None:
    """Configure logging through a Rich handler on stderr.

    Replaces any Rich handler already installed on the root logger.
    """
    console = Console(stderr=True)
    handler = RichHandler(
        console=console,
        show_time=show_time,
        show_path=show_path,
        rich_tracebacks=False,
        markup=False,
    )
    handler.setFormatter(SafeLogFormatter(fmt="%(message)s", hash_paths=hash_paths))

    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        if isinstance(existing, RichHandler):
            root_logger.removeHandler(existing)
    root_logger.setLevel(level)
    root_logger.addHandler(handler)


def quiet_http_loggers(level: int = logging.WARNING) -> None:
    for name in HTTP_LOGGERS:
        logging.getLogger(name).setLevel(level)


## Tests


def test_sanitize_message_redacts_api_key():
    msg = 'HTTP Request: GET https://api.themoviedb.org/3/find/tt1?api_key=abcdef123&external_source=imdb_id "HTTP/1.1 200 OK"'
    sanitized = sanitize_message(msg)

    assert "abcdef123" not in sanitized
    assert "api_key=***&external_source=imdb_id" in sanitized


def test_sanitize_message_redacts_email():
    sanitized = sanitize_message("Contact user@example.com")
    assert "[EMAIL]" in sanitized
    assert "user@example.com" not in sanitized


def test_redact_dict():
    redacted = redact_dict(
        {"api_key": "sk-secret-12345", "base_url": "https://x", "nested": {"token": "abc"}}
    )

    assert redacted["api_key"] == "sk-s***"
    assert redacted["base_url"] == "https://x"
    assert redacted["nested"]["token"] == "***"


def test_safe_path():
    path = Path("/home/user/.config/release-dates/config.toml")
    assert safe_path(path) == "release-dates/config.toml"
    assert safe_path(path, use_hash=True).startswith("file:")


def test_safe_log_formatter_sanitizes_args():
    formatter = SafeLogFormatter(fmt="%(message)s")
    record = logging.LogRecord(
        name="httpx",
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg="HTTP Request: %s %s",
        args=("GET", "https://api.themoviedb.org/3/tv/1?api_key=secret42"),
        exc_info=None,
    )

    formatted = formatter.format(record)
    assert "secret42" not in formatted
    assert "api_key=***" in formatted
