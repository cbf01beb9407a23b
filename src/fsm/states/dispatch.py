"""
Estados do ciclo de vida de uma interação no dispatcher.

Cada requisição de webhook percorre:
    RECEIVED → VERIFIED → ROUTED → RESPONDED

com saídas terminais REJECTED (assinatura inválida) e UNROUTABLE
(nenhum handler para o comando).
"""

from enum import StrEnum


class DispatchState(StrEnum):
    """
    Estados canônicos de uma interação.

    Estados não-terminais:
        - RECEIVED: Body bruto recebido, ainda não autenticado
        - VERIFIED: Assinatura válida, interação parseada
        - ROUTED: Handler resolvido e invocado, aguardando resposta

    Estados terminais:
        - RESPONDED: Envelope de resposta produzido
        - REJECTED: Assinatura ausente ou inválida
        - UNROUTABLE: Nenhum handler para o caminho invocado
    """

    RECEIVED = "RECEIVED"
    VERIFIED = "VERIFIED"
    ROUTED = "ROUTED"

    RESPONDED = "RESPONDED"
    REJECTED = "REJECTED"
    UNROUTABLE = "UNROUTABLE"

    def __str__(self) -> str:
        return self.value


TERMINAL_STATES: frozenset[DispatchState] = frozenset({
    DispatchState.RESPONDED,
    DispatchState.REJECTED,
    DispatchState.UNROUTABLE,
})

DEFAULT_INITIAL_STATE: DispatchState = DispatchState.RECEIVED


def is_terminal(state: DispatchState) -> bool:
    """
    Verifica se o estado é terminal.

    Args:
        state: Estado a ser verificado

    Returns:
        True se o estado é terminal
    """
    return state in TERMINAL_STATES
