"""Validação de schemas de comando antes de qualquer chamada REST.

Aceita opções como CommandOption ou dicts crus (formato da API) e devolve
modelos tipados. Qualquer violação vira ValidationError nomeando o campo
(ex: "options[0].options[1].type").
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import pydantic

from api.connectors.discord.models import (
    COMMAND_NAME_MAX_LENGTH,
    CONTAINER_OPTION_TYPES,
    CommandOption,
    CommandOptionType,
)
from utils.errors import ValidationError

ALLOWED_OPTION_KEYS = frozenset({
    "type",
    "name",
    "description",
    "default",
    "required",
    "choices",
    "options",
})
ALLOWED_CHOICE_KEYS = frozenset({"name", "value"})

_VALID_OPTION_TYPES = frozenset(int(member) for member in CommandOptionType)


def validate_command_fields(name: Any, description: Any) -> None:
    """Valida nome (1–32 caracteres) e descrição de um comando.

    Raises:
        ValidationError: Campo inválido
    """
    _check_name(name, "name")
    if not isinstance(description, str):
        raise ValidationError("description", "must be a string")


def validate_options(
    options: Sequence[CommandOption | Mapping[str, Any]] | None,
) -> list[CommandOption]:
    """Valida recursivamente uma árvore de opções.

    Args:
        options: Opções de topo do comando

    Raises:
        ValidationError: Tipo fora dos oito permitidos, choice inválida,
            campo desconhecido ou aninhamento inválido

    Returns:
        Lista de CommandOption validadas
    """
    if options is None:
        return []
    if isinstance(options, str | bytes | Mapping) or not isinstance(options, Sequence):
        raise ValidationError("options", "must be a list")

    raw_options = [_as_mapping(option, f"options[{i}]") for i, option in enumerate(options)]
    _check_option_list(raw_options, "options", parent_type=None)

    validated: list[CommandOption] = []
    for i, raw in enumerate(raw_options):
        try:
            validated.append(CommandOption.model_validate(raw))
        except pydantic.ValidationError as exc:
            raise _from_pydantic(exc, f"options[{i}]") from exc
    return validated


def _check_option_list(
    options: list[Mapping[str, Any]],
    field: str,
    parent_type: CommandOptionType | None,
) -> None:
    seen: set[str] = set()
    for i, option in enumerate(options):
        option_field = f"{field}[{i}]"
        option_type = _check_option(option, option_field)

        if parent_type is CommandOptionType.SUB_COMMAND and option_type in CONTAINER_OPTION_TYPES:
            raise ValidationError(f"{option_field}.type", "subcommand cannot nest subcommands")
        if (
            parent_type is CommandOptionType.SUB_COMMAND_GROUP
            and option_type not in CONTAINER_OPTION_TYPES
        ):
            raise ValidationError(
                f"{option_field}.type", "subcommand group accepts only subcommands"
            )

        name = option["name"]
        if name in seen:
            raise ValidationError(f"{option_field}.name", "duplicate option name")
        seen.add(name)


def _check_option(option: Mapping[str, Any], field: str) -> CommandOptionType:
    unknown = sorted(set(option) - ALLOWED_OPTION_KEYS)
    if unknown:
        raise ValidationError(f"{field}.{unknown[0]}", "unknown field")

    raw_type = option.get("type")
    if isinstance(raw_type, bool) or not isinstance(raw_type, int) or raw_type not in _VALID_OPTION_TYPES:
        raise ValidationError(f"{field}.type", "must be one of the eight option types")
    option_type = CommandOptionType(raw_type)

    _check_name(option.get("name"), f"{field}.name")
    if not isinstance(option.get("description", ""), str):
        raise ValidationError(f"{field}.description", "must be a string")
    for flag in ("required", "default"):
        value = option.get(flag)
        if value is not None and not isinstance(value, bool):
            raise ValidationError(f"{field}.{flag}", "must be a boolean")

    choices = option.get("choices") or []
    nested = option.get("options") or []
    if not isinstance(choices, list):
        raise ValidationError(f"{field}.choices", "must be a list")
    if not isinstance(nested, list):
        raise ValidationError(f"{field}.options", "must be a list")

    if option_type in CONTAINER_OPTION_TYPES:
        if choices:
            raise ValidationError(f"{field}.choices", "subcommands do not take choices")
    elif nested:
        raise ValidationError(f"{field}.options", "only subcommands may contain options")

    for i, choice in enumerate(choices):
        _check_choice(choice, f"{field}.choices[{i}]")

    nested_raw = [_as_mapping(child, f"{field}.options[{i}]") for i, child in enumerate(nested)]
    _check_option_list(nested_raw, f"{field}.options", parent_type=option_type)
    return option_type


def _check_choice(choice: Any, field: str) -> None:
    if not isinstance(choice, Mapping):
        raise ValidationError(field, "must be an object")
    unknown = sorted(set(choice) - ALLOWED_CHOICE_KEYS)
    if unknown:
        raise ValidationError(f"{field}.{unknown[0]}", "unknown field")
    if not isinstance(choice.get("name"), str):
        raise ValidationError(f"{field}.name", "must be a string")
    value = choice.get("value")
    if isinstance(value, bool) or not isinstance(value, str | int):
        raise ValidationError(f"{field}.value", "must be a string or an integer")


def _check_name(name: Any, field: str) -> None:
    if not isinstance(name, str):
        raise ValidationError(field, "must be a string")
    if not 1 <= len(name) <= COMMAND_NAME_MAX_LENGTH:
        raise ValidationError(field, f"must have 1-{COMMAND_NAME_MAX_LENGTH} characters")


def _as_mapping(option: Any, field: str) -> Mapping[str, Any]:
    if isinstance(option, CommandOption):
        return option.model_dump()
    if not isinstance(option, Mapping):
        raise ValidationError(field, "must be an object")
    return option


def _from_pydantic(exc: pydantic.ValidationError, prefix: str) -> ValidationError:
    first = exc.errors()[0]
    field = prefix
    for part in first.get("loc", ()):
        field += f"[{part}]" if isinstance(part, int) else f".{part}"
    return ValidationError(field, first.get("msg", "invalid value"))
