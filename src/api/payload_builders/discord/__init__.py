"""Builders de payload para mensagens Discord."""

from .message import EPHEMERAL_FLAG, build_message_body, validate_message_body

__all__ = ["EPHEMERAL_FLAG", "build_message_body", "validate_message_body"]
