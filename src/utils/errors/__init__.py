"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    AuthenticationError,
    CommandNotFoundError,
    ConfigurationError,
    DuplicateRegistrationError,
    InteractionsError,
    InvalidPayloadError,
    RateLimitedError,
    RegistryError,
    RegistryFrozenError,
    ResponseAlreadySentError,
    RoutingError,
    TransportError,
    ValidationError,
)

__all__ = [
    "AuthenticationError",
    "CommandNotFoundError",
    "ConfigurationError",
    "DuplicateRegistrationError",
    "InteractionsError",
    "InvalidPayloadError",
    "RateLimitedError",
    "RegistryError",
    "RegistryFrozenError",
    "ResponseAlreadySentError",
    "RoutingError",
    "TransportError",
    "ValidationError",
]
