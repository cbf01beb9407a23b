"""
Exports públicos do módulo fsm/states.
"""

from fsm.states.dispatch import (
    DEFAULT_INITIAL_STATE,
    TERMINAL_STATES,
    DispatchState,
    is_terminal,
)

__all__ = [
    "DEFAULT_INITIAL_STATE",
    "TERMINAL_STATES",
    "DispatchState",
    "is_terminal",
]
