"""Cliente REST especializado para a API do Discord.

Estende RateLimitedHttpClient com:
- URL base versionada e endpoints relativos
  (ex: "applications/{id}/commands", "webhooks/{id}/{token}")
- Headers Authorization (Bot) e User-Agent exigidos pelo Discord
- Decodificação JSON e conversão de status de erro em TransportError
- Logging estruturado sem tokens
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from api.connectors.discord.api_errors import parse_discord_error
from api.connectors.discord.api_logging import log_api_error, log_success
from api.connectors.discord.http_base import HttpClientConfig, RateLimitedHttpClient
from utils.errors import ConfigurationError, TransportError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    import httpx

    from config.settings import DiscordSettings

logger: logging.Logger = logging.getLogger(__name__)

LIBRARY_URL = "https://github.com/pyloto/pyloto-slash"
LIBRARY_VERSION = "1.0.0"
USER_AGENT = f"DiscordBot ({LIBRARY_URL}, {LIBRARY_VERSION})"


class DiscordRestClient(RateLimitedHttpClient):
    """Cliente REST do Discord com retry transparente de 429.

    Usado pelo registro de comandos e pelos follow-ups de interação.
    O chamador observa apenas o JSON de sucesso ou um TransportError.
    """

    def __init__(
        self,
        bot_token: str,
        config: HttpClientConfig | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        """Inicializa o cliente.

        Args:
            bot_token: Token do bot (sem o prefixo "Bot ")
            config: Configuração HTTP; base_url deve apontar para /api/vN/
            http_client: AsyncClient compartilhado (opcional)
            sleep: Função de espera para 429 (injetável em testes)

        Raises:
            ConfigurationError: Se bot_token estiver vazio
        """
        if not bot_token or not bot_token.strip():
            raise ConfigurationError("DISCORD_BOT_TOKEN é obrigatório para a REST API")
        super().__init__(config, http_client=http_client, sleep=sleep)
        self._auth_headers = {
            "Authorization": f"Bot {bot_token}",
            "User-Agent": USER_AGENT,
        }

    async def request(
        self,
        method: str,
        endpoint: str,
        json: Any = None,
    ) -> Any:
        """Executa a chamada e devolve o JSON decodificado.

        Args:
            method: GET, POST, PATCH ou DELETE
            endpoint: Caminho relativo à URL base da API
            json: Corpo JSON (opcional)

        Returns:
            JSON decodificado, ou None para respostas sem corpo (204)

        Raises:
            TransportError: Status de erro (exceto 429) ou falha de conexão
        """
        method = method.upper()
        url = self._build_url(endpoint)
        response = await self.send(method, url, json=json, headers=self._auth_headers)
        return self._process_response(response, method, endpoint)

    async def get(self, endpoint: str) -> Any:
        return await self.request("GET", endpoint)

    async def post(self, endpoint: str, json: Any = None) -> Any:
        return await self.request("POST", endpoint, json)

    async def patch(self, endpoint: str, json: Any = None) -> Any:
        return await self.request("PATCH", endpoint, json)

    async def delete(self, endpoint: str) -> Any:
        return await self.request("DELETE", endpoint)

    def _build_url(self, endpoint: str) -> str:
        base = self.config.base_url
        if not base:
            return endpoint
        return f"{base.rstrip('/')}/{endpoint.lstrip('/')}"

    def _process_response(
        self,
        response: httpx.Response,
        method: str,
        endpoint: str,
    ) -> Any:
        """Decodifica a resposta ou converte erro em TransportError."""
        body: Any = None
        if response.content:
            try:
                body = response.json()
            except ValueError:
                body = response.text

        api_error = parse_discord_error(response.status_code, body)
        if api_error is not None:
            log_api_error(api_error, method, endpoint)
            raise TransportError(
                f"Discord API error: {api_error.status_code} ({api_error.error_code})",
                status_code=api_error.status_code,
                body=body,
            )

        if not 200 <= response.status_code < 300:
            # 1xx/3xx inesperados (redirects não são seguidos)
            raise TransportError(
                "unexpected_status",
                status_code=response.status_code,
                body=body,
            )

        log_success(method, endpoint, response.status_code)
        return body


def create_discord_rest_client(
    settings: DiscordSettings | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> DiscordRestClient:
    """Factory para criar o cliente REST com config padrão.

    Args:
        settings: DiscordSettings opcional. Se None, carrega do ambiente.
        http_client: AsyncClient compartilhado (opcional)

    Returns:
        Cliente REST configurado.

    Raises:
        ConfigurationError: Se o bot token não estiver configurado
    """
    # Import local para evitar dependência circular
    from config.settings import get_discord_settings

    discord = settings or get_discord_settings()
    config = HttpClientConfig(
        base_url=discord.api_endpoint,
        timeout_seconds=discord.request_timeout_seconds,
        max_rate_limit_retries=discord.max_rate_limit_retries,
        default_headers={"Content-Type": "application/json"},
    )
    return DiscordRestClient(
        discord.require_bot_token(),
        config,
        http_client=http_client,
    )
