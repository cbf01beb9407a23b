"""Gestão do catálogo de comandos no Discord via REST.

Cada operação valida o schema localmente e só então emite uma única
chamada REST. Falhas de validação nunca chegam à rede.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import pydantic

from api.connectors.discord.endpoints import CURRENT_APPLICATION, commands_endpoint
from api.connectors.discord.models import Command, CommandOption
from app.commands.validation import validate_command_fields, validate_options
from utils.errors import TransportError

if TYPE_CHECKING:
    from api.connectors.discord.http_client import DiscordRestClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandScope:
    """Escopo de um comando: global (guild_id=None) ou de uma guild."""

    guild_id: str | None = None

    @classmethod
    def global_(cls) -> CommandScope:
        return cls()

    @classmethod
    def guild(cls, guild_id: str) -> CommandScope:
        if not guild_id:
            raise ValueError("guild_id é obrigatório para escopo de guild")
        return cls(guild_id=str(guild_id))

    @property
    def is_global(self) -> bool:
        return self.guild_id is None

    @property
    def label(self) -> str:
        return "global" if self.is_global else "guild"


class CommandRegistrationService:
    """Cria, lista, atualiza e remove comandos da aplicação."""

    def __init__(
        self,
        rest_client: DiscordRestClient,
        application_id: str | None = None,
    ) -> None:
        """Inicializa o serviço.

        Args:
            rest_client: Cliente REST com retry de 429
            application_id: ID da aplicação; se None, é descoberto via
                oauth2/applications/@me na primeira operação
        """
        self._rest = rest_client
        self._application_id = application_id or None

    async def get_application_id(self) -> str:
        """Retorna o ID da aplicação, consultando o Discord se necessário."""
        if self._application_id is None:
            application = await self._rest.get(CURRENT_APPLICATION)
            if not isinstance(application, Mapping) or not application.get("id"):
                raise TransportError("unexpected_application_payload", body=application)
            self._application_id = str(application["id"])
            logger.info("application_id_discovered", extra={"component": "registration"})
        return self._application_id

    async def list_commands(self, guild_id: str | None = None) -> list[Command]:
        """Lista os comandos globais ou de uma guild."""
        application_id = await self.get_application_id()
        response = await self._rest.get(commands_endpoint(application_id, guild_id))
        if not isinstance(response, list):
            raise TransportError("unexpected_commands_payload", body=response)
        return [_to_command(item, application_id, guild_id) for item in response]

    async def get_command(self, command_id: str, guild_id: str | None = None) -> Command:
        """Busca um comando pelo ID."""
        application_id = await self.get_application_id()
        response = await self._rest.get(commands_endpoint(application_id, guild_id, command_id))
        return _to_command(response, application_id, guild_id)

    async def create_command(
        self,
        scope: CommandScope,
        name: str,
        description: str,
        options: Sequence[CommandOption | Mapping[str, Any]] | None = None,
    ) -> Command:
        """Cria um comando global ou de guild.

        Args:
            scope: CommandScope.global_() ou CommandScope.guild(id)
            name: Nome do comando (1–32 caracteres)
            description: Descrição exibida no cliente
            options: Árvore de opções (modelos ou dicts no formato da API)

        Raises:
            ValidationError: Schema inválido (nenhuma chamada de rede)
            TransportError: Falha da REST API
        """
        validate_command_fields(name, description)
        validated = validate_options(options)

        application_id = await self.get_application_id()
        body = {
            "name": name,
            "description": description,
            "options": [option.to_payload() for option in validated],
        }
        response = await self._rest.post(commands_endpoint(application_id, scope.guild_id), body)
        command = _to_command(response, application_id, scope.guild_id)
        logger.info(
            "command_created",
            extra={"command_name": command.name, "scope": scope.label},
        )
        return command

    async def update_command(self, command: Command) -> Command:
        """Reenvia a árvore completa do comando (escopo inferido de guild_id).

        Raises:
            ValidationError: Schema inválido (nenhuma chamada de rede)
            TransportError: Falha da REST API
        """
        validate_command_fields(command.name, command.description)
        validated = validate_options(command.options)
        updated = command.model_copy(update={"options": validated})

        application_id = await self.get_application_id()
        endpoint = commands_endpoint(application_id, command.guild_id, command.id)
        response = await self._rest.patch(endpoint, updated.to_payload())
        logger.info(
            "command_updated",
            extra={"command_name": command.name, "scope": "global" if command.is_global else "guild"},
        )
        if isinstance(response, Mapping):
            return _to_command(response, application_id, command.guild_id)
        return updated

    async def delete_command(self, command: Command) -> None:
        """Remove o comando do Discord."""
        application_id = await self.get_application_id()
        await self._rest.delete(commands_endpoint(application_id, command.guild_id, command.id))
        logger.info(
            "command_deleted",
            extra={"command_name": command.name, "scope": "global" if command.is_global else "guild"},
        )


def _to_command(payload: Any, application_id: str, guild_id: str | None) -> Command:
    """Converte resposta da API em Command, fixando o escopo consultado."""
    if not isinstance(payload, Mapping):
        raise TransportError("unexpected_command_payload", body=payload)
    data = dict(payload)
    data.setdefault("application_id", application_id)
    if guild_id is not None:
        data["guild_id"] = str(guild_id)
    try:
        return Command.model_validate(data)
    except pydantic.ValidationError as exc:
        raise TransportError("unexpected_command_payload", body=payload) from exc
