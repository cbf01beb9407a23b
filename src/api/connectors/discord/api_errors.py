"""Erros e helpers de parsing para a REST API do Discord."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class DiscordApiError:
    """Erro retornado pela REST API do Discord."""

    status_code: int
    error_code: int
    error_message: str
    errors: dict[str, Any] | None = None


def parse_discord_error(status_code: int, response_data: Any) -> DiscordApiError | None:
    """Extrai informações de erro de uma resposta não-2xx.

    Formato Discord: {"code": 50035, "message": "Invalid Form Body", "errors": {...}}

    Args:
        status_code: Status HTTP recebido
        response_data: Body JSON decodificado (ou None)

    Returns:
        DiscordApiError se status indica erro, None se sucesso
    """
    if status_code < 400:
        return None

    if not isinstance(response_data, dict):
        return DiscordApiError(
            status_code=status_code,
            error_code=0,
            error_message="Erro desconhecido",
        )

    errors = response_data.get("errors")
    return DiscordApiError(
        status_code=status_code,
        error_code=int(response_data.get("code", 0) or 0),
        error_message=str(response_data.get("message", "Erro desconhecido")),
        errors=errors if isinstance(errors, dict) else None,
    )
