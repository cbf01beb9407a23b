"""Settings específicas de Discord.

Configurações do endpoint de interações (webhook) e da REST API do Discord.
Credenciais vêm de variáveis de ambiente; nenhuma é logada.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from utils.errors import ConfigurationError

# Constantes da Discord API
DISCORD_API_VERSION: str = "v10"
DISCORD_API_BASE_URL: str = "https://discord.com/api"

DEFAULT_UNROUTABLE_REPLY: str = "Este comando não está disponível no momento."


@dataclass(frozen=True)
class DiscordSettings:
    """Configurações do canal Discord.

    Attributes:
        bot_token: Token do bot (header Authorization da REST API)
        application_id: ID da aplicação (endereçamento de comandos e follow-ups)
        public_key: Chave pública Ed25519 (hex) para verificação de interações
        guild_id: ID do servidor padrão para comandos de guild (opcional)
        api_version: Versão da API
        api_base_url: URL base da API
        request_timeout_seconds: Timeout para requisições HTTP
        max_rate_limit_retries: Limite de reenvios após 429 (None = ilimitado)
        unroutable_reply: Texto efêmero enviado quando não há handler
    """

    # Credenciais
    bot_token: str = ""
    application_id: str = ""
    public_key: str = ""
    guild_id: str = ""

    # API
    api_version: str = DISCORD_API_VERSION
    api_base_url: str = DISCORD_API_BASE_URL

    # Timeouts e rate limit
    request_timeout_seconds: float = 30.0
    max_rate_limit_retries: int | None = None

    # Roteamento
    unroutable_reply: str = DEFAULT_UNROUTABLE_REPLY

    @property
    def api_endpoint(self) -> str:
        """URL base completa da API com versão."""
        return f"{self.api_base_url}/{self.api_version}/"

    def require_bot_token(self) -> str:
        """Retorna o bot token ou levanta ConfigurationError."""
        if not self.bot_token.strip():
            raise ConfigurationError("DISCORD_BOT_TOKEN não configurado")
        return self.bot_token

    def require_public_key(self) -> str:
        """Retorna a chave pública ou levanta ConfigurationError."""
        if not self.public_key.strip():
            raise ConfigurationError("DISCORD_PUBLIC_KEY não configurado")
        return self.public_key

    def validate(self) -> list[str]:
        """Valida configurações mínimas de Discord.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []
        if not self.bot_token:
            errors.append("DISCORD_BOT_TOKEN não configurado")
        if not self.public_key:
            errors.append("DISCORD_PUBLIC_KEY não configurado")
        elif not _is_hex_key(self.public_key):
            errors.append("DISCORD_PUBLIC_KEY deve ter 64 caracteres hexadecimais")
        if not self.application_id:
            errors.append("DISCORD_APPLICATION_ID não configurado")
        if self.request_timeout_seconds <= 0:
            errors.append("DISCORD_REQUEST_TIMEOUT_SECONDS deve ser positivo")
        if self.max_rate_limit_retries is not None and self.max_rate_limit_retries < 0:
            errors.append("DISCORD_MAX_RATE_LIMIT_RETRIES não pode ser negativo")
        return errors


def _is_hex_key(value: str) -> bool:
    if len(value) != 64:
        return False
    try:
        bytes.fromhex(value)
    except ValueError:
        return False
    return True


def _parse_optional_int(raw: str | None) -> int | None:
    if raw is None or not raw.strip():
        return None
    return int(raw)


def _load_from_env() -> DiscordSettings:
    """Carrega DiscordSettings de variáveis de ambiente."""
    return DiscordSettings(
        bot_token=os.getenv("DISCORD_BOT_TOKEN", ""),
        application_id=os.getenv("DISCORD_APPLICATION_ID", ""),
        public_key=os.getenv("DISCORD_PUBLIC_KEY", ""),
        guild_id=os.getenv("DISCORD_GUILD_ID", ""),
        api_version=os.getenv("DISCORD_API_VERSION", DISCORD_API_VERSION),
        api_base_url=os.getenv("DISCORD_API_BASE_URL", DISCORD_API_BASE_URL),
        request_timeout_seconds=float(os.getenv("DISCORD_REQUEST_TIMEOUT_SECONDS", "30")),
        max_rate_limit_retries=_parse_optional_int(os.getenv("DISCORD_MAX_RATE_LIMIT_RETRIES")),
        unroutable_reply=os.getenv("DISCORD_UNROUTABLE_REPLY", DEFAULT_UNROUTABLE_REPLY),
    )


@lru_cache(maxsize=1)
def get_discord_settings() -> DiscordSettings:
    """Retorna instância cacheada de DiscordSettings."""
    return _load_from_env()
