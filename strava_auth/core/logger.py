"""Loguru setup for strava_auth with credential redaction.

Every record goes through a patcher that masks OAuth credentials: values of
client_secret / access_token / refresh_token / code in "key=value" or JSON
form, plus any literal secret handed to setup_logger (e.g. the configured
client secret).
"""

from __future__ import annotations

import re
import sys
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from loguru import logger

if TYPE_CHECKING:
    from strava_auth.config.settings import Settings

REDACTED = "***"

_CREDENTIAL_PATTERN = re.compile(
    r"""(?P<key>\b(?:client_secret|access_token|refresh_token|code)\b["']?\s*[:=]\s*["']?)(?P<value>[^"'&,\s}]+)"""
)

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def redact(message: str, secrets: Iterable[str] = ()) -> str:
    """Mask credentials in a log message."""
    for secret in secrets:
        if secret:
            message = message.replace(secret, REDACTED)
    return _CREDENTIAL_PATTERN.sub(lambda m: f"{m['key']}{REDACTED}", message)


def _redacting_patcher(secrets: Iterable[str]) -> Callable[[dict[str, Any]], None]:
    known = tuple(s for s in secrets if s)

    def patcher(record: dict[str, Any]) -> None:
        record["message"] = redact(record["message"], known)

    return patcher


def setup_logger(
    level: str = "INFO",
    log_file: str | None = None,
    secrets: Iterable[str] = (),
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """Configure loguru with a console sink and an optional rotating file sink.

    The library never calls this itself; the CLI does.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file. If None, only console logging.
        secrets: Literal values to mask wherever they appear
        rotation: Log rotation size (e.g., "10 MB", "1 day")
        retention: Log retention period (e.g., "7 days", "1 month")
    """
    logger.remove()
    logger.configure(patcher=_redacting_patcher(secrets))

    # diagnose stays off: it dumps local variables, client_secret included
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True, diagnose=False)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            format=FILE_FORMAT,
            level=level,
            rotation=rotation,
            retention=retention,
            compression="zip",
            diagnose=False,
        )


def setup_logger_from_settings(settings: Settings) -> None:
    """Configure logging from LOG_LEVEL / LOG_FILE, masking the client secret."""
    setup_logger(
        level=settings.log_level,
        log_file=settings.log_file,
        secrets=(settings.strava_client_secret,),
    )
