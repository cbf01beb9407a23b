"""Envelopes de resposta síncrona a uma interação."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from api.payload_builders.discord import EPHEMERAL_FLAG


class InteractionResponseType(IntEnum):
    """Tipos de resposta aceitos pelo Discord."""

    PONG = 1
    CHANNEL_MESSAGE_WITH_SOURCE = 4
    DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE = 5


@dataclass(frozen=True, slots=True)
class InteractionResponse:
    """Resposta única de uma interação (corpo do 200 do webhook)."""

    type: InteractionResponseType
    data: dict[str, Any] | None = None

    @classmethod
    def pong(cls) -> InteractionResponse:
        return cls(InteractionResponseType.PONG)

    @classmethod
    def deferred(cls, ephemeral: bool = False) -> InteractionResponse:
        """Reserva o slot de resposta; o conteúdo vem depois via follow-up."""
        data = {"flags": EPHEMERAL_FLAG} if ephemeral else None
        return cls(InteractionResponseType.DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE, data)

    @classmethod
    def channel_message(cls, body: dict[str, Any]) -> InteractionResponse:
        return cls(InteractionResponseType.CHANNEL_MESSAGE_WITH_SOURCE, dict(body))

    @property
    def is_deferred(self) -> bool:
        return self.type is InteractionResponseType.DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"type": int(self.type)}
        if self.data is not None:
            payload["data"] = self.data
        return payload
