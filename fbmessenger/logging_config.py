"""Centralized logging configuration with Pydantic Logfire integration."""

import logging
from typing import Any

import logfire
from fastapi import FastAPI

from fbmessenger.config import get_settings
from fbmessenger.constants import REDACTED_QUERY_PARAMS


def setup_logfire(app: FastAPI | None = None) -> None:
    """
    Initialize and configure Pydantic Logfire for observability.

    Sets up:
    - FastAPI instrumentation when a webhook app is given
    - Pydantic instrumentation (model validation logging)
    - Environment-aware Python logging
    """
    settings = get_settings()

    logfire_config: dict[str, Any] = {
        "environment": settings.env,
    }

    # Add token if provided (for cloud logging)
    if settings.logfire_token:
        logfire_config["token"] = settings.logfire_token
    else:
        logfire_config["send_to_logfire"] = "if-token-present"

    logfire.configure(**logfire_config)

    if app is not None:
        logfire.instrument_fastapi(app)
    logfire.instrument_pydantic()

    if settings.env == "local":
        # Local: Console formatting for development
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
    else:
        # Production: Logfire handles structured formatting
        logging.basicConfig(level=logging.INFO, format="%(message)s")


def mask_pii(value: str | None, mask_char: str = "*", visible: int = 2) -> str:
    """Mask an id or token for logging, keeping ``visible`` characters at each end."""
    if not value:
        return ""

    hidden = len(value) - 2 * visible
    if hidden <= 0:
        return mask_char * len(value)
    return f"{value[:visible]}{mask_char * hidden}{value[-visible:]}"


def redact_tokens(params: dict[str, Any]) -> dict[str, Any]:
    """Copy of Graph API query parameters with credentials masked."""
    return {
        key: mask_pii(value) if key in REDACTED_QUERY_PARAMS else value
        for key, value in params.items()
    }
