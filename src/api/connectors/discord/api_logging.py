"""Helpers de logging para a REST API do Discord (sem tokens)."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .api_errors import DiscordApiError

logger = logging.getLogger(__name__)

# webhooks/{application_id}/{token}/... carrega o token da interação na URL
_WEBHOOK_TOKEN_PATTERN = re.compile(r"(webhooks/[^/]+/)[^/?]+")


def redact_endpoint(endpoint: str) -> str:
    """Remove o token de interação de endpoints de webhook."""
    return _WEBHOOK_TOKEN_PATTERN.sub(r"\1<token>", endpoint)


def log_api_error(
    api_error: DiscordApiError,
    method: str,
    endpoint: str,
) -> None:
    """Loga erro da API sem expor dados sensíveis."""
    logger.warning(
        "discord_api_error",
        extra={
            "method": method,
            "endpoint": redact_endpoint(endpoint),
            "status_code": api_error.status_code,
            "error_code": api_error.error_code,
            "error_message": api_error.error_message,
        },
    )


def log_success(
    method: str,
    endpoint: str,
    status_code: int,
) -> None:
    """Loga sucesso sem expor dados sensíveis."""
    logger.debug(
        "discord_api_success",
        extra={
            "method": method,
            "endpoint": redact_endpoint(endpoint),
            "status_code": status_code,
        },
    )
