"""
Módulo FSM — máquina de estados do dispatch de interações.

Estrutura:
    - states/: Estados (DispatchState enum)
    - transitions/: Regras de transição (VALID_TRANSITIONS)
    - manager/: Máquina de estados (DispatchStateMachine)
    - types/: Tipos de dados (StateTransition, TransitionResult)
"""

from fsm.manager import DispatchStateMachine
from fsm.states import (
    DEFAULT_INITIAL_STATE,
    TERMINAL_STATES,
    DispatchState,
    is_terminal,
)
from fsm.transitions import (
    VALID_TRANSITIONS,
    get_valid_targets,
    is_transition_valid,
    validate_transition_map,
)
from fsm.types import (
    StateTransition,
    TransitionResult,
)

__all__ = [
    "DEFAULT_INITIAL_STATE",
    "TERMINAL_STATES",
    "VALID_TRANSITIONS",
    "DispatchState",
    "DispatchStateMachine",
    "StateTransition",
    "TransitionResult",
    "get_valid_targets",
    "is_terminal",
    "is_transition_valid",
    "validate_transition_map",
]
