"""Testes da validação de schema de comandos."""

from __future__ import annotations

import pytest

from api.connectors.discord.models import CommandOption, CommandOptionType
from app.commands.validation import validate_command_fields, validate_options
from utils.errors import ValidationError


def _field(options) -> str:
    with pytest.raises(ValidationError) as exc_info:
        validate_options(options)
    return exc_info.value.field


class TestValidateOptions:
    def test_valid_tree_returns_typed_models(self) -> None:
        options = validate_options([
            {
                "type": 1,
                "name": "set",
                "description": "define",
                "options": [
                    {
                        "type": 3,
                        "name": "key",
                        "description": "chave",
                        "required": True,
                        "choices": [{"name": "A", "value": "a"}, {"name": "B", "value": 2}],
                    },
                ],
            },
        ])

        assert options[0].type is CommandOptionType.SUB_COMMAND
        leaf = options[0].options[0]
        assert leaf.required is True
        assert [choice.value for choice in leaf.choices] == ["a", 2]

    def test_accepts_models(self) -> None:
        option = CommandOption(type=CommandOptionType.BOOLEAN, name="loud", description="x")
        assert validate_options([option]) == [option]

    def test_none_is_empty(self) -> None:
        assert validate_options(None) == []

    @pytest.mark.parametrize("option_type", [0, 9, 11, "3", None, True])
    def test_type_outside_the_eight_is_rejected(self, option_type) -> None:
        assert _field([{"type": option_type, "name": "x", "description": ""}]) == "options[0].type"

    def test_nested_field_path_is_reported(self) -> None:
        field = _field([
            {
                "type": 1,
                "name": "set",
                "description": "",
                "options": [
                    {"type": 3, "name": "ok", "description": ""},
                    {"type": 42, "name": "bad", "description": ""},
                ],
            },
        ])
        assert field == "options[0].options[1].type"

    def test_unknown_key_rejected(self) -> None:
        assert _field([{"type": 3, "name": "x", "description": "", "min": 1}]) == "options[0].min"

    def test_float_choice_value_rejected(self) -> None:
        field = _field([
            {"type": 4, "name": "n", "description": "", "choices": [{"name": "pi", "value": 3.14}]}
        ])
        assert field == "options[0].choices[0].value"

    def test_choices_on_subcommand_rejected(self) -> None:
        field = _field([
            {"type": 1, "name": "s", "description": "", "choices": [{"name": "a", "value": "a"}]}
        ])
        assert field == "options[0].choices"

    def test_children_on_leaf_rejected(self) -> None:
        field = _field([
            {"type": 3, "name": "s", "description": "", "options": [{"type": 3, "name": "t"}]}
        ])
        assert field == "options[0].options"

    def test_subcommand_cannot_nest_subcommand(self) -> None:
        field = _field([
            {"type": 1, "name": "s", "description": "", "options": [{"type": 1, "name": "t"}]}
        ])
        assert field == "options[0].options[0].type"

    def test_group_accepts_only_subcommands(self) -> None:
        field = _field([
            {"type": 2, "name": "g", "description": "", "options": [{"type": 3, "name": "t"}]}
        ])
        assert field == "options[0].options[0].type"

    def test_duplicate_sibling_names_rejected(self) -> None:
        field = _field([
            {"type": 3, "name": "x", "description": ""},
            {"type": 4, "name": "x", "description": ""},
        ])
        assert field == "options[1].name"

    def test_name_longer_than_32_rejected(self) -> None:
        assert _field([{"type": 3, "name": "n" * 33, "description": ""}]) == "options[0].name"

    def test_required_must_be_bool(self) -> None:
        field = _field([{"type": 3, "name": "x", "description": "", "required": "yes"}])
        assert field == "options[0].required"

    def test_options_must_be_a_list(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_options({"type": 3, "name": "x"})
        assert exc_info.value.field == "options"


class TestValidateCommandFields:
    def test_valid(self) -> None:
        validate_command_fields("ping", "responde pong")

    @pytest.mark.parametrize("name", ["", "n" * 33, None])
    def test_invalid_name(self, name) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_command_fields(name, "desc")
        assert exc_info.value.field == "name"

    def test_description_must_be_string(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_command_fields("ping", 1)
        assert exc_info.value.field == "description"
