"""Contexto entregue a cada handler de comando."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from api.payload_builders.discord import build_message_body, validate_message_body
from app.interactions.responses import InteractionResponse
from utils.errors import ConfigurationError

if TYPE_CHECKING:
    from api.connectors.discord.models import Interaction, InteractionDataOption
    from app.commands.registry import ResolvedCommand
    from app.interactions.followup import InteractionFollowUp
    from app.interactions.response_sink import ResponseSink


class InteractionContext:
    """Interação roteada + capacidade única de resposta.

    O handler responde exatamente uma vez via reply() ou acknowledge();
    conteúdo posterior segue por `followup`.
    """

    __slots__ = ("_followup", "_interaction", "_resolved", "_sink")

    def __init__(
        self,
        interaction: Interaction,
        resolved: ResolvedCommand,
        sink: ResponseSink,
        followup: InteractionFollowUp | None = None,
    ) -> None:
        self._interaction = interaction
        self._resolved = resolved
        self._sink = sink
        self._followup = followup

    @property
    def interaction(self) -> Interaction:
        return self._interaction

    @property
    def path(self) -> tuple[str, ...]:
        return self._resolved.path

    @property
    def options(self) -> tuple[InteractionDataOption, ...]:
        """Opções do nível folha (após descer nos subcomandos)."""
        return self._resolved.options

    @property
    def sink(self) -> ResponseSink:
        return self._sink

    @property
    def responded(self) -> bool:
        return self._sink.responded

    @property
    def followup(self) -> InteractionFollowUp:
        """Follow-ups da interação.

        Raises:
            ConfigurationError: Serviço iniciado sem bot token
        """
        if self._followup is None:
            raise ConfigurationError("follow-ups exigem DISCORD_BOT_TOKEN configurado")
        return self._followup

    def option(self, name: str, default: Any = None) -> Any:
        """Valor de uma opção folha pelo nome."""
        for option in self._resolved.options:
            if option.name == name:
                return option.value
        return default

    def acknowledge(self, ephemeral: bool = False) -> None:
        """Responde com DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE.

        Raises:
            ResponseAlreadySentError: Interação já respondida
        """
        self._sink.complete(InteractionResponse.deferred(ephemeral))

    def reply(
        self,
        content: str | dict[str, Any] | None = None,
        *,
        tts: bool | None = None,
        embeds: list[Any] | None = None,
        allowed_mentions: dict[str, Any] | None = None,
        components: list[Any] | None = None,
        attachments: list[Any] | None = None,
        flags: int | None = None,
        ephemeral: bool = False,
    ) -> None:
        """Responde com CHANNEL_MESSAGE_WITH_SOURCE.

        Raises:
            ValidationError: Campo desconhecido ou tipo inválido
            ResponseAlreadySentError: Interação já respondida
        """
        body = build_message_body(
            content,
            tts=tts,
            embeds=embeds,
            allowed_mentions=allowed_mentions,
            components=components,
            attachments=attachments,
            flags=flags,
            ephemeral=ephemeral,
        )
        validate_message_body(body, require_content=False)
        self._sink.complete(InteractionResponse.channel_message(body))
