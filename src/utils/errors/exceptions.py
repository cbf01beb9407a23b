"""Exceções de domínio do serviço de interações Discord.

Taxonomia:
- AuthenticationError: assinatura ausente ou inválida (sempre 401, nunca retentado)
- ValidationError: schema de opção ou conteúdo de mensagem inválido (antes da rede)
- RoutingError: nenhum handler para o caminho do comando
- RateLimitedError: 429 interno, absorvido pelo cliente REST
- TransportError: falha REST não-2xx ou falha de conexão
- ConfigurationError: token, chave pública ou application id ausentes
"""

from __future__ import annotations

from typing import Any


class InteractionsError(Exception):
    """Base para todos os erros do serviço."""


class AuthenticationError(InteractionsError):
    """Assinatura do webhook ausente ou inválida."""


class InvalidPayloadError(InteractionsError):
    """Body do webhook não é uma interação válida."""


class ValidationError(InteractionsError, ValueError):
    """Schema rejeitado antes de qualquer chamada de rede.

    Attributes:
        field: Caminho do campo ofensivo (ex: "options[0].type")
        reason: Motivo curto, seguro para logs
    """

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason


class RoutingError(InteractionsError):
    """Falha de roteamento recuperável."""


class CommandNotFoundError(RoutingError, LookupError):
    """Nenhum handler registrado para o caminho invocado."""

    def __init__(self, path: tuple[str, ...]) -> None:
        super().__init__("/".join(path) or "<empty>")
        self.path = path


class RegistryError(InteractionsError):
    """Erro na fase de registro de handlers."""


class DuplicateRegistrationError(RegistryError):
    """O nó terminal do caminho já possui handler."""

    def __init__(self, path: tuple[str, ...]) -> None:
        super().__init__("/".join(path))
        self.path = path


class RegistryFrozenError(RegistryError):
    """Registro tentado depois do início do tráfego."""


class ResponseAlreadySentError(RuntimeError):
    """Segunda conclusão do ResponseSink (erro de programação)."""


class RateLimitedError(InteractionsError):
    """Resposta 429 do Discord. Nunca chega ao chamador do cliente REST."""

    def __init__(self, retry_after: float) -> None:
        super().__init__(f"retry_after={retry_after}")
        self.retry_after = retry_after


class TransportError(InteractionsError):
    """Falha REST (status não-2xx exceto 429) ou falha de conexão.

    Attributes:
        status_code: Status HTTP (None para falha de conexão)
        body: Corpo da resposta decodificado, quando disponível
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ConfigurationError(InteractionsError):
    """Configuração obrigatória ausente."""
