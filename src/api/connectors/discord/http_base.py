"""Cliente HTTP base com retry transparente para 429.

Regras:
- 429: lê o tempo de espera informado pelo servidor, suspende apenas a
  tarefa corrente (asyncio.sleep) e reenvia a requisição idêntica
- Demais status: devolvidos ao chamador sem retry
- Falha de conexão/timeout: TransportError sem retry
- Sem limite de reenvios por padrão (max_rate_limit_retries=None)
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx

from utils.errors import RateLimitedError, TransportError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

# Espera usada quando o 429 não informa duração
DEFAULT_RETRY_AFTER_SECONDS = 1.0

RATE_LIMIT_RESET_HEADER = "x-ratelimit-reset-after"
RETRY_AFTER_HEADER = "retry-after"


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    base_url: str = ""
    timeout_seconds: float = 30.0
    max_rate_limit_retries: int | None = None
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True


class RateLimitedHttpClient:
    """Cliente HTTP assíncrono que absorve respostas 429."""

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        """Inicializa o cliente.

        Args:
            config: Configuração HTTP
            http_client: AsyncClient compartilhado (se None, um por requisição)
            sleep: Função de espera (injetável em testes)
        """
        self._config = config or HttpClientConfig()
        self._http_client = http_client
        self._sleep = sleep

    @property
    def config(self) -> HttpClientConfig:
        return self._config

    async def send(
        self,
        method: str,
        url: str,
        *,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Envia a requisição, reenviando após cada 429.

        Raises:
            TransportError: Falha de conexão ou limite de reenvios excedido
        """
        merged_headers = {**self._config.default_headers, **(headers or {})}
        rate_limited_count = 0
        while True:
            response = await self._send_once(method, url, json=json, headers=merged_headers)
            try:
                _raise_for_rate_limit(response)
            except RateLimitedError as exc:
                rate_limited_count += 1
                limit = self._config.max_rate_limit_retries
                if limit is not None and rate_limited_count > limit:
                    raise TransportError(
                        "rate_limit_retries_exhausted",
                        status_code=response.status_code,
                        body=_safe_json(response),
                    ) from exc
                logger.warning(
                    "http_rate_limited",
                    extra={
                        "method": method,
                        "retry_after_seconds": exc.retry_after,
                        "attempt": rate_limited_count,
                    },
                )
                await self._sleep(exc.retry_after)
                continue
            return response

    async def aclose(self) -> None:
        """Fecha o AsyncClient compartilhado, se houver."""
        if self._http_client is not None:
            await self._http_client.aclose()

    async def _send_once(
        self,
        method: str,
        url: str,
        *,
        json: Any,
        headers: dict[str, str],
    ) -> httpx.Response:
        kwargs: dict[str, Any] = {
            "headers": headers,
            "timeout": self._config.timeout_seconds,
        }
        if json is not None:
            kwargs["json"] = json
        try:
            if self._http_client is not None:
                return await self._http_client.request(method, url, **kwargs)
            async with httpx.AsyncClient(verify=self._config.verify_ssl) as client:
                return await client.request(method, url, **kwargs)
        except httpx.TransportError as exc:
            logger.warning(
                "http_connection_error",
                extra={"method": method, "error_type": type(exc).__name__},
            )
            raise TransportError("http_connection_error") from exc


def _raise_for_rate_limit(response: httpx.Response) -> None:
    if response.status_code == 429:
        raise RateLimitedError(parse_retry_after(response))


def parse_retry_after(response: httpx.Response) -> float:
    """Extrai o tempo de espera (segundos fracionários) de um 429.

    Ordem: header X-RateLimit-Reset-After, campo `retry_after` do JSON,
    header Retry-After. Sem nenhum deles, DEFAULT_RETRY_AFTER_SECONDS.
    """
    candidates: list[Any] = [response.headers.get(RATE_LIMIT_RESET_HEADER)]
    body = _safe_json(response)
    if isinstance(body, dict):
        candidates.append(body.get("retry_after"))
    candidates.append(response.headers.get(RETRY_AFTER_HEADER))

    for candidate in candidates:
        if candidate is None:
            continue
        try:
            return max(float(candidate), 0.0)
        except (TypeError, ValueError):
            continue
    return DEFAULT_RETRY_AFTER_SECONDS


def _safe_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None
