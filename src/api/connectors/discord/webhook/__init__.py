"""Webhook de interações Discord — verificação e parse."""

from .receive import InvalidJsonError, InvalidSignatureError, parse_interaction_request

__all__ = [
    "InvalidJsonError",
    "InvalidSignatureError",
    "parse_interaction_request",
]
