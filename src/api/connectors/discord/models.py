"""Modelos wire da API de interações do Discord.

Entidades explícitas no lugar de dicts abertos:
- Command / CommandOption / CommandOptionChoice: catálogo de comandos (REST)
- Interaction / InteractionData / InteractionDataOption: evento inbound

Campos desconhecidos enviados pelo Discord são ignorados (extra="ignore");
schemas submetidos pelo chamador são checados em app/commands/validation.py.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator

COMMAND_NAME_MAX_LENGTH = 32


class CommandOptionType(IntEnum):
    """Tipos de opção aceitos no registro de comandos."""

    SUB_COMMAND = 1
    SUB_COMMAND_GROUP = 2
    STRING = 3
    INTEGER = 4
    BOOLEAN = 5
    USER = 6
    CHANNEL = 7
    ROLE = 8


CONTAINER_OPTION_TYPES: frozenset[int] = frozenset({
    CommandOptionType.SUB_COMMAND,
    CommandOptionType.SUB_COMMAND_GROUP,
})


class InteractionType(IntEnum):
    """Tipos de interação entregues pelo Discord."""

    PING = 1
    APPLICATION_COMMAND = 2
    MESSAGE_COMPONENT = 3
    APPLICATION_COMMAND_AUTOCOMPLETE = 4
    MODAL_SUBMIT = 5


class CommandOptionChoice(BaseModel):
    """Escolha pré-definida de uma opção folha."""

    model_config = ConfigDict(extra="ignore")

    name: StrictStr
    value: StrictStr | StrictInt


class CommandOption(BaseModel):
    """Opção de comando (recursiva para subcomandos)."""

    model_config = ConfigDict(extra="ignore")

    type: CommandOptionType
    name: StrictStr
    description: StrictStr = ""
    required: bool = False
    default: bool | None = None
    choices: list[CommandOptionChoice] = Field(default_factory=list)
    options: list[CommandOption] = Field(default_factory=list)

    @property
    def is_container(self) -> bool:
        """True para SUB_COMMAND e SUB_COMMAND_GROUP."""
        return self.type in CONTAINER_OPTION_TYPES

    def to_payload(self) -> dict[str, Any]:
        """Serializa para o formato da API (sem campos vazios)."""
        payload: dict[str, Any] = {
            "type": int(self.type),
            "name": self.name,
            "description": self.description,
        }
        if self.required:
            payload["required"] = True
        if self.default is not None:
            payload["default"] = self.default
        if self.choices:
            payload["choices"] = [choice.model_dump() for choice in self.choices]
        if self.options:
            payload["options"] = [option.to_payload() for option in self.options]
        return payload


class Command(BaseModel):
    """Comando declarado no Discord.

    guild_id ausente significa escopo global.
    """

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: str
    application_id: str
    guild_id: str | None = None
    name: str
    description: str = ""
    options: list[CommandOption] = Field(default_factory=list)

    @property
    def is_global(self) -> bool:
        return self.guild_id is None

    def to_payload(self) -> dict[str, Any]:
        """Corpo para POST/PATCH (sem id, application_id e guild_id)."""
        return {
            "name": self.name,
            "description": self.description,
            "options": [option.to_payload() for option in self.options],
        }


class InteractionDataOption(BaseModel):
    """Opção resolvida recebida numa interação."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str
    type: int | None = None
    value: Any = None
    options: tuple[InteractionDataOption, ...] = ()
    focused: bool | None = None

    @property
    def is_container(self) -> bool:
        return self.type in CONTAINER_OPTION_TYPES


class InteractionData(BaseModel):
    """Campo `data` de interações que não são PING."""

    model_config = ConfigDict(extra="ignore", frozen=True, coerce_numbers_to_str=True)

    id: str | None = None
    name: str | None = None
    type: int | None = None
    options: tuple[InteractionDataOption, ...] = ()
    resolved: dict[str, Any] | None = None
    custom_id: str | None = None
    component_type: int | None = None
    values: tuple[str, ...] | None = None


class Interaction(BaseModel):
    """Evento inbound, construído uma vez por requisição e imutável."""

    model_config = ConfigDict(extra="ignore", frozen=True, coerce_numbers_to_str=True)

    id: str
    application_id: str
    type: int
    token: str
    data: InteractionData | None = None
    guild_id: str | None = None
    channel_id: str | None = None
    member: dict[str, Any] | None = None
    user: dict[str, Any] | None = None
    version: int = 1
    message: dict[str, Any] | None = None
    locale: str | None = None
    guild_locale: str | None = None

    @field_validator("type")
    @classmethod
    def _known_type(cls, value: int) -> int:
        # Tipos novos do Discord seguem como int e caem em UNROUTABLE
        try:
            return InteractionType(value)
        except ValueError:
            return value

    @property
    def invoker_id(self) -> str | None:
        """ID de quem disparou a interação (member em guild, user em DM)."""
        source = (self.member or {}).get("user") or self.user or {}
        user_id = source.get("id")
        return str(user_id) if user_id is not None else None
