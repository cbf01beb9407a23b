"""
Exports públicos do módulo fsm/manager.
"""

from fsm.manager.machine import DispatchStateMachine

__all__ = [
    "DispatchStateMachine",
]
