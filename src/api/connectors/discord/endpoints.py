"""Endpoints relativos da REST API do Discord usados pelo serviço."""

from __future__ import annotations

CURRENT_APPLICATION = "oauth2/applications/@me"
ORIGINAL_MESSAGE_ID = "@original"


def commands_endpoint(
    application_id: str,
    guild_id: str | None = None,
    command_id: str | None = None,
) -> str:
    """applications/{id}[/guilds/{guild_id}]/commands[/{command_id}]."""
    endpoint = f"applications/{application_id}"
    if guild_id is not None:
        endpoint += f"/guilds/{guild_id}"
    endpoint += "/commands"
    if command_id is not None:
        endpoint += f"/{command_id}"
    return endpoint


def webhook_endpoint(application_id: str, token: str) -> str:
    """webhooks/{application_id}/{token} — criação de follow-ups."""
    return f"webhooks/{application_id}/{token}"


def webhook_message_endpoint(application_id: str, token: str, message_id: str) -> str:
    """webhooks/{application_id}/{token}/messages/{message_id|@original}."""
    return f"{webhook_endpoint(application_id, token)}/messages/{message_id}"
