"""Mensagens posteriores à resposta síncrona de uma interação.

Endereçadas por (application_id, token) — o token de continuação vale por
uma janela controlada pelo Discord, não por este serviço.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from api.connectors.discord.endpoints import (
    ORIGINAL_MESSAGE_ID,
    webhook_endpoint,
    webhook_message_endpoint,
)
from api.payload_builders.discord import build_message_body, validate_message_body

if TYPE_CHECKING:
    from api.connectors.discord.http_client import DiscordRestClient

logger = logging.getLogger(__name__)


class InteractionFollowUp:
    """Edição da resposta original e follow-ups de uma interação."""

    def __init__(
        self,
        rest_client: DiscordRestClient,
        application_id: str,
        token: str,
    ) -> None:
        self._rest = rest_client
        self._application_id = application_id
        self._token = token

    async def get_original_response(self) -> dict[str, Any]:
        return await self._rest.get(self._message_endpoint(ORIGINAL_MESSAGE_ID))

    async def update_original_response(
        self,
        content: str | dict[str, Any] | None = None,
        *,
        embeds: list[Any] | None = None,
        allowed_mentions: dict[str, Any] | None = None,
        components: list[Any] | None = None,
        attachments: list[Any] | None = None,
    ) -> dict[str, Any]:
        """Edita a resposta original (conteúdo de um acknowledge deferred).

        Raises:
            ValidationError: Campo desconhecido ou tipo inválido
            TransportError: Falha da REST API
        """
        body = build_message_body(
            content,
            embeds=embeds,
            allowed_mentions=allowed_mentions,
            components=components,
            attachments=attachments,
        )
        validate_message_body(body, require_content=False)
        message = await self._rest.patch(self._message_endpoint(ORIGINAL_MESSAGE_ID), body)
        logger.info("original_response_updated")
        return message

    async def delete_original_response(self) -> None:
        await self._rest.delete(self._message_endpoint(ORIGINAL_MESSAGE_ID))
        logger.info("original_response_deleted")

    async def send_followup_message(
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
    ) -> dict[str, Any]:
        """Cria uma mensagem de follow-up.

        Raises:
            ValidationError: Sem content/embeds, campo desconhecido ou tipo inválido
            TransportError: Falha da REST API
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
        validate_message_body(body, require_content=True)
        message = await self._rest.post(
            webhook_endpoint(self._application_id, self._token), body
        )
        logger.info("followup_message_sent")
        return message

    async def update_followup_message(
        self,
        message_id: str,
        content: str | dict[str, Any] | None = None,
        *,
        embeds: list[Any] | None = None,
        allowed_mentions: dict[str, Any] | None = None,
        components: list[Any] | None = None,
        attachments: list[Any] | None = None,
    ) -> dict[str, Any]:
        body = build_message_body(
            content,
            embeds=embeds,
            allowed_mentions=allowed_mentions,
            components=components,
            attachments=attachments,
        )
        validate_message_body(body, require_content=False)
        message = await self._rest.patch(self._message_endpoint(message_id), body)
        logger.info("followup_message_updated")
        return message

    async def delete_followup_message(self, message_id: str) -> None:
        await self._rest.delete(self._message_endpoint(message_id))
        logger.info("followup_message_deleted")

    def _message_endpoint(self, message_id: str) -> str:
        return webhook_message_endpoint(self._application_id, self._token, message_id)
