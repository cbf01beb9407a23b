"""Conector Discord — assinatura, modelos wire e cliente REST."""

from api.connectors.discord.http_base import HttpClientConfig, RateLimitedHttpClient
from api.connectors.discord.http_client import DiscordRestClient, create_discord_rest_client
from api.connectors.discord.models import (
    Command,
    CommandOption,
    CommandOptionChoice,
    CommandOptionType,
    Interaction,
    InteractionData,
    InteractionDataOption,
    InteractionType,
)
from api.connectors.discord.signature import verify_interaction_signature

__all__ = [
    "Command",
    "CommandOption",
    "CommandOptionChoice",
    "CommandOptionType",
    "DiscordRestClient",
    "HttpClientConfig",
    "Interaction",
    "InteractionData",
    "InteractionDataOption",
    "InteractionType",
    "RateLimitedHttpClient",
    "create_discord_rest_client",
    "verify_interaction_signature",
]
