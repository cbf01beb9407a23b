"""Comandos — registro local de handlers e catálogo remoto."""

from app.commands.registration import CommandRegistrationService, CommandScope
from app.commands.registry import CommandRegistry, RegisteredNode, ResolvedCommand
from app.commands.validation import validate_command_fields, validate_options

__all__ = [
    "CommandRegistrationService",
    "CommandRegistry",
    "CommandScope",
    "RegisteredNode",
    "ResolvedCommand",
    "validate_command_fields",
    "validate_options",
]
