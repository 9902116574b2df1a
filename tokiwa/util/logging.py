"""Logging helpers for the application."""

import logging
import sys

from tokiwa.config import Settings


def setup_logging(settings: Settings) -> None:
    """Configure standard library logging.

    Route modules log through ``logging``; logfire picks these records up
    once it is configured.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    # Set third-party loggers to WARNING to reduce noise
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logging.getLogger("tokiwa").setLevel(level)


def mask_email(email: str | None) -> str:
    """Redact the local part of an email for logs.

    ``alice@example.com`` becomes ``a***@example.com``.
    """
    if not email:
        return ""
    local, sep, domain = email.partition("@")
    if not sep:
        return "***"
    return f"{local[:1]}***@{domain}"
