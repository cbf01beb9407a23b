"""Fakes para testes Discord: chave Ed25519 de teste e REST API em memória."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any

import httpx
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from api.connectors.discord.http_base import HttpClientConfig
from api.connectors.discord.http_client import DiscordRestClient

API_BASE = "https://discord.test/api/v10/"
APPLICATION_ID = "1100"
INTERACTION_TOKEN = "interaction-token"


class InteractionSigner:
    """Par de chaves Ed25519 gerado por teste."""

    def __init__(self) -> None:
        self._private_key = Ed25519PrivateKey.generate()
        raw = self._private_key.public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )
        self.public_key_hex = raw.hex()

    def sign(self, body: bytes, timestamp: str = "1700000000") -> dict[str, str]:
        signature = self._private_key.sign(timestamp.encode("utf-8") + body)
        return {
            "x-signature-ed25519": signature.hex(),
            "x-signature-timestamp": timestamp,
        }


def interaction_payload(
    interaction_type: int = 2,
    *,
    name: str | None = "ping",
    options: list[dict[str, Any]] | None = None,
    interaction_id: str = "9001",
    **extra: Any,
) -> dict[str, Any]:
    """Monta o JSON de uma interação no formato entregue pelo Discord."""
    payload: dict[str, Any] = {
        "id": interaction_id,
        "application_id": APPLICATION_ID,
        "type": interaction_type,
        "token": INTERACTION_TOKEN,
        "version": 1,
    }
    if interaction_type != 1:
        payload["data"] = {"id": "500", "name": name, "type": 1, "options": options or []}
    payload.update(extra)
    return payload


@dataclass
class FakeDiscordApi:
    """REST API em memória para httpx.MockTransport.

    Mantém o catálogo de comandos e registra toda chamada recebida.
    Respostas enfileiradas em `scripted` têm precedência sobre o catálogo.
    """

    application_id: str = APPLICATION_ID
    commands: dict[str, dict[str, Any]] = field(default_factory=dict)
    calls: list[httpx.Request] = field(default_factory=list)
    scripted: list[httpx.Response] = field(default_factory=list)
    _next_id: int = 2000

    def client(
        self,
        *,
        max_rate_limit_retries: int | None = None,
        sleep: Any = None,
    ) -> DiscordRestClient:
        config = HttpClientConfig(base_url=API_BASE, max_rate_limit_retries=max_rate_limit_retries)
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(self.handle))
        kwargs: dict[str, Any] = {"http_client": http_client}
        if sleep is not None:
            kwargs["sleep"] = sleep
        return DiscordRestClient("bot-token", config, **kwargs)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        if self.scripted:
            return self.scripted.pop(0)

        path = request.url.path.removeprefix("/api/v10/")
        body = json.loads(request.content) if request.content else None

        if path == "oauth2/applications/@me":
            return httpx.Response(200, json={"id": self.application_id, "name": "app"})

        match = re.fullmatch(
            r"applications/(?P<app>\w+)(?:/guilds/(?P<guild>\w+))?/commands(?:/(?P<cmd>\w+))?",
            path,
        )
        if match:
            return self._commands(request.method, match, body)

        if path.startswith("webhooks/"):
            if request.method == "DELETE":
                return httpx.Response(204)
            return httpx.Response(200, json={"id": "7000", **(body or {})})

        return httpx.Response(404, json={"code": 10002, "message": "Unknown Application"})

    def _commands(self, method: str, match: re.Match[str], body: Any) -> httpx.Response:
        guild_id = match["guild"]
        command_id = match["cmd"]
        scoped = [c for c in self.commands.values() if c.get("guild_id") == guild_id]

        if method == "GET" and command_id is None:
            return httpx.Response(200, json=scoped)
        if method == "POST":
            self._next_id += 1
            command = {
                "id": str(self._next_id),
                "application_id": match["app"],
                **body,
            }
            if guild_id is not None:
                command["guild_id"] = guild_id
            self.commands[command["id"]] = command
            return httpx.Response(201, json=command)

        command = self.commands.get(command_id or "")
        if command is None:
            return httpx.Response(404, json={"code": 10063, "message": "Unknown application command"})
        if method == "GET":
            return httpx.Response(200, json=command)
        if method == "PATCH":
            command.update(body)
            return httpx.Response(200, json=command)
        if method == "DELETE":
            del self.commands[command_id]
            return httpx.Response(204)
        return httpx.Response(405)
