"""
Logging for copyright-waiver.

Three named loggers: ``copyright_waiver`` for run progress,
``copyright_waiver.http`` for forge API traffic and ``copyright_waiver.git``
for the git commands executed. API tokens and private keys are masked
before anything reaches a handler.
"""

import logging
import re
from typing import Any

_root_logger = logging.getLogger("copyright_waiver")
_http_logger = logging.getLogger("copyright_waiver.http")
_git_logger = logging.getLogger("copyright_waiver.git")

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
REDACTED = "[REDACTED]"

_SENSITIVE_PATTERNS = [
    # PEM and OpenSSH private keys
    (re.compile(r"-----BEGIN[^-]*PRIVATE KEY-----.*?-----END[^-]*PRIVATE KEY-----", re.DOTALL), "[PRIVATE_KEY_REDACTED]"),
    # GitHub classic and fine-grained tokens
    (re.compile(r"\b(gh[pousr]_[A-Za-z0-9]{20,}|github_pat_[A-Za-z0-9_]{20,})\b"), "[TOKEN_REDACTED]"),
    # Authorization header values
    (re.compile(r"(Bearer|token)\s+[A-Za-z0-9_\-\.]{8,}"), r"\1 " + REDACTED),
    # Quoted key=value / key: value secrets
    (re.compile(r"(secret|token|password|api_key)['\"]?\s*[:=]\s*['\"][^'\"]+['\"]", re.IGNORECASE), r"\1: " + REDACTED),
]

_SENSITIVE_KEYS = {"authorization", "token", "secret", "password", "private_key", "api_key"}


def configure_logging(
    level: int = logging.INFO,
    http_level: int | None = None,
    git_level: int | None = None,
    handler: logging.Handler | None = None,
    format_string: str | None = None,
) -> None:
    """
    Attach a single handler to the package logger and set levels.

    Calling it again replaces the previous handler.

    Args:
        level: Level for the package logger and, by default, its children
        http_level: Level for ``copyright_waiver.http``
        git_level: Level for ``copyright_waiver.git``
        handler: Handler to attach (default: StreamHandler on stderr)
        format_string: Log format (default: DEFAULT_FORMAT)

    Example:
        ```python
        # Progress at INFO, but show every git command line
        configure_logging(level=logging.INFO, git_level=logging.DEBUG)
        ```
    """
    handler = handler or logging.StreamHandler()
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))

    for existing in list(_root_logger.handlers):
        _root_logger.removeHandler(existing)
    _root_logger.addHandler(handler)
    _root_logger.setLevel(level)

    _http_logger.setLevel(level if http_level is None else http_level)
    _git_logger.setLevel(level if git_level is None else git_level)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger, or the child ``copyright_waiver.<name>``."""
    if name is None:
        return _root_logger
    return logging.getLogger(f"copyright_waiver.{name}")


def mask_sensitive_data(text: str) -> str:
    """Replace private keys, tokens and quoted secrets in ``text``."""
    for pattern, replacement in _SENSITIVE_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def _is_sensitive_key(key: str, sensitive_keys: set[str]) -> bool:
    lowered = key.lower()
    return any(sensitive in lowered for sensitive in sensitive_keys)


def safe_log_dict(data: dict[str, Any], sensitive_keys: set[str] | None = None) -> dict[str, Any]:
    """
    Copy ``data`` with the values of sensitive keys replaced by "[REDACTED]".

    A key is sensitive when it contains one of ``sensitive_keys``
    (case-insensitive). Nested dicts, including dicts inside lists, are
    masked too; the input is not modified.
    """
    keys = _SENSITIVE_KEYS if sensitive_keys is None else sensitive_keys

    def mask(value: Any) -> Any:
        if isinstance(value, dict):
            return safe_log_dict(value, keys)
        if isinstance(value, list):
            return [mask(item) for item in value]
        return value

    return {
        key: REDACTED if _is_sensitive_key(key, keys) else mask(value)
        for key, value in data.items()
    }


def log_http_request(
    method: str,
    url: str,
    headers: dict[str, str] | None = None,
    params: dict[str, Any] | None = None,
) -> None:
    """DEBUG-log an outgoing API request with headers and params masked."""
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    parts = [f"{method} {mask_sensitive_data(url)}"]
    if params:
        parts.append(f"params={safe_log_dict(params)}")
    if headers:
        parts.append(f"headers={safe_log_dict(headers)}")
    _http_logger.debug(" | ".join(parts))


def log_http_response(
    status_code: int,
    url: str,
    elapsed_ms: float | None = None,
    item_count: int | None = None,
) -> None:
    """
    DEBUG-log an API response.

    Bodies are never logged; for listings only the number of items is.
    """
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    parts = [f"Response {status_code} from {mask_sensitive_data(url)}"]
    if elapsed_ms is not None:
        parts.append(f"elapsed={elapsed_ms:.2f}ms")
    if item_count is not None:
        parts.append(f"items={item_count}")
    _http_logger.debug(" | ".join(parts))


def log_git_command(args: list[str], cwd: str | None = None) -> None:
    """DEBUG-log a git argument vector and its working directory."""
    if not _git_logger.isEnabledFor(logging.DEBUG):
        return

    line = mask_sensitive_data(" ".join(args))
    if cwd:
        line = f"{line} | cwd={cwd}"
    _git_logger.debug(line)


__all__ = [
    "configure_logging",
    "get_logger",
    "mask_sensitive_data",
    "safe_log_dict",
    "log_http_request",
    "log_http_response",
    "log_git_command",
]
