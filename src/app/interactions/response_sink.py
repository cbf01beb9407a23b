"""Primitiva de conclusão única da resposta de uma interação."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from utils.errors import ResponseAlreadySentError

if TYPE_CHECKING:
    from app.interactions.responses import InteractionResponse


class ResponseSink:
    """Canal de capacidade um entre o handler e o transporte.

    A primeira chamada de complete() entrega a resposta; qualquer chamada
    seguinte levanta ResponseAlreadySentError. Deve ser criado dentro do
    event loop que vai aguardá-lo.
    """

    __slots__ = ("_future",)

    def __init__(self) -> None:
        self._future: asyncio.Future[InteractionResponse] = (
            asyncio.get_running_loop().create_future()
        )

    @property
    def responded(self) -> bool:
        return self._future.done()

    def complete(self, response: InteractionResponse) -> None:
        """Entrega a resposta.

        Raises:
            ResponseAlreadySentError: Se a interação já foi respondida
        """
        if self._future.done():
            raise ResponseAlreadySentError("interação já respondida")
        self._future.set_result(response)

    async def wait(self) -> InteractionResponse:
        """Aguarda a conclusão (sem timeout próprio)."""
        return await asyncio.shield(self._future)

    def result(self) -> InteractionResponse:
        """Resposta entregue; levanta InvalidStateError se ainda pendente."""
        return self._future.result()
