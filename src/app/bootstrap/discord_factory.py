"""Factory de wiring para Discord (bootstrap)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from api.connectors.discord.http_client import create_discord_rest_client
from app.commands.registration import CommandRegistrationService
from app.interactions.dispatcher import InteractionDispatcher

if TYPE_CHECKING:
    from api.connectors.discord.http_client import DiscordRestClient
    from app.commands.registry import CommandRegistry
    from config.settings import DiscordSettings


def create_rest_client(settings: DiscordSettings) -> DiscordRestClient | None:
    """Cria o cliente REST com AsyncClient compartilhado.

    Returns:
        None se DISCORD_BOT_TOKEN não estiver configurado (sem follow-ups).
    """
    if not settings.bot_token.strip():
        return None
    http_client = httpx.AsyncClient(timeout=settings.request_timeout_seconds)
    return create_discord_rest_client(settings, http_client=http_client)


def create_interaction_dispatcher(
    registry: CommandRegistry,
    settings: DiscordSettings,
    rest_client: DiscordRestClient | None = None,
) -> InteractionDispatcher:
    """Cria o dispatcher (congela o registro)."""
    return InteractionDispatcher(
        registry,
        public_key=settings.public_key or None,
        rest_client=rest_client,
        unroutable_reply=settings.unroutable_reply,
    )


def create_registration_service(
    settings: DiscordSettings,
    rest_client: DiscordRestClient,
) -> CommandRegistrationService:
    """Cria o serviço de registro de comandos.

    Sem DISCORD_APPLICATION_ID, o ID é descoberto na primeira operação.
    """
    return CommandRegistrationService(
        rest_client,
        application_id=settings.application_id or None,
    )
