"""Bootstrap da aplicação — inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings
e monta os componentes Discord.

Uso:
    from app.bootstrap import initialize_app, validate_runtime_settings

    # Na inicialização do serviço
    initialize_app()
    validate_runtime_settings()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import get_base_settings, get_discord_settings
from utils.errors import ConfigurationError

if TYPE_CHECKING:
    from config.settings import BaseSettings, DiscordSettings

# Nome do serviço para logs
SERVICE_NAME = "pyloto_slash"

logger = logging.getLogger(__name__)


def initialize_app(base: BaseSettings | None = None) -> None:
    """Inicializa a aplicação (logging estruturado JSON com correlation_id).

    Deve ser chamada uma vez no início do serviço.
    """
    base = base or get_base_settings()
    configure_logging(
        level=base.log_level,
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings(
    discord: DiscordSettings | None = None,
    base: BaseSettings | None = None,
) -> list[str]:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.

    Raises:
        ConfigurationError: Configuração inválida em modo estrito

    Returns:
        Lista de erros encontrados (vazia = OK).
    """
    base = base or get_base_settings()
    discord = discord or get_discord_settings()
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"discord: {error}" for error in discord.validate())

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": base.environment},
        )
        return errors

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": base.environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if base.is_strict:
        details = "\n".join(f"- {error}" for error in errors)
        raise ConfigurationError(f"Configuração inválida para {base.environment}:\n{details}")
    return errors
