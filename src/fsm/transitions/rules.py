"""
Regras de transição válidas entre estados do dispatcher.

Define o grafo da máquina de estados de uma interação.
"""

from fsm.states.dispatch import TERMINAL_STATES, DispatchState

TransitionMap = dict[DispatchState, frozenset[DispatchState]]

# Chave: estado de origem
# Valor: conjunto de estados de destino permitidos
VALID_TRANSITIONS: TransitionMap = {
    # RECEIVED: autenticado ou rejeitado
    DispatchState.RECEIVED: frozenset({
        DispatchState.VERIFIED,
        DispatchState.REJECTED,
    }),

    # VERIFIED: PING responde direto; comandos seguem para roteamento
    DispatchState.VERIFIED: frozenset({
        DispatchState.RESPONDED,
        DispatchState.ROUTED,
        DispatchState.UNROUTABLE,
    }),

    # ROUTED: o handler completa o sink
    DispatchState.ROUTED: frozenset({
        DispatchState.RESPONDED,
    }),

    DispatchState.RESPONDED: frozenset(),
    DispatchState.REJECTED: frozenset(),
    DispatchState.UNROUTABLE: frozenset(),
}


def get_valid_targets(state: DispatchState) -> frozenset[DispatchState]:
    """
    Retorna os estados de destino válidos para um estado de origem.

    Args:
        state: Estado de origem

    Returns:
        Conjunto de estados de destino permitidos (vazio se terminal)
    """
    return VALID_TRANSITIONS.get(state, frozenset())


def is_transition_valid(from_state: DispatchState, to_state: DispatchState) -> bool:
    """
    Verifica se uma transição é permitida.

    Args:
        from_state: Estado de origem
        to_state: Estado de destino

    Returns:
        True se a transição é permitida
    """
    if from_state in TERMINAL_STATES:
        return False
    return to_state in get_valid_targets(from_state)


def validate_transition_map() -> list[str]:
    """
    Valida a integridade do mapa de transições.

    Returns:
        Lista de erros encontrados (vazia se válido)
    """
    errors: list[str] = []

    for state in DispatchState:
        if state not in VALID_TRANSITIONS:
            errors.append(f"Estado {state.name} ausente em VALID_TRANSITIONS")

    for state in TERMINAL_STATES:
        targets = VALID_TRANSITIONS.get(state, frozenset())
        if targets:
            errors.append(
                f"Estado terminal {state.name} não deveria ter transições: {targets}"
            )

    return errors
