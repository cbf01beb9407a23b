"""
Máquina de estados (DispatchStateMachine) de uma interação.

Uma instância por requisição: registra as transições do dispatcher e
fornece o resumo usado no log final.
"""

from typing import Any

from fsm.states.dispatch import (
    DEFAULT_INITIAL_STATE,
    DispatchState,
    is_terminal,
)
from fsm.transitions.rules import get_valid_targets, is_transition_valid
from fsm.types.transition import StateTransition, TransitionResult


class DispatchStateMachine:
    """
    Máquina de estados de dispatch.

    Attributes:
        current_state: Estado atual da máquina
        history: Histórico de transições realizadas
    """

    __slots__ = ("_current_state", "_history", "_interaction_id")

    def __init__(
        self,
        initial_state: DispatchState | None = None,
        interaction_id: str = "",
    ) -> None:
        """
        Inicializa a máquina de estados.

        Args:
            initial_state: Estado inicial (usa RECEIVED se None)
            interaction_id: ID da interação para logs (vazio antes do parse)
        """
        self._current_state = initial_state or DEFAULT_INITIAL_STATE
        self._history: list[StateTransition] = []
        self._interaction_id = interaction_id

    @property
    def current_state(self) -> DispatchState:
        """Estado atual da máquina."""
        return self._current_state

    @property
    def history(self) -> list[StateTransition]:
        """Histórico de transições (cópia para evitar mutação externa)."""
        return list(self._history)

    @property
    def interaction_id(self) -> str:
        return self._interaction_id

    @interaction_id.setter
    def interaction_id(self, value: str) -> None:
        self._interaction_id = value

    @property
    def is_terminal(self) -> bool:
        """Verifica se está em estado terminal."""
        return is_terminal(self._current_state)

    def transition(
        self,
        target: DispatchState,
        trigger: str,
        metadata: dict[str, Any] | None = None,
    ) -> TransitionResult:
        """
        Tenta realizar uma transição de estado.

        Args:
            target: Estado de destino
            trigger: Identificador do gatilho
            metadata: Dados adicionais para auditoria

        Returns:
            TransitionResult com sucesso/falha e dados da transição
        """
        if not is_transition_valid(self._current_state, target):
            return TransitionResult(
                success=False,
                error_reason=(
                    f"Transição inválida: {self._current_state.name} → {target.name}"
                ),
            )

        transition = StateTransition(
            from_state=self._current_state,
            to_state=target,
            trigger=trigger,
            metadata=metadata or {},
        )
        self._current_state = target
        self._history.append(transition)

        return TransitionResult(success=True, transition=transition)

    def advance(
        self,
        target: DispatchState,
        trigger: str,
        metadata: dict[str, Any] | None = None,
    ) -> StateTransition:
        """
        Transição obrigatória: levanta RuntimeError se for inválida.

        O dispatcher só pede transições do grafo; falha aqui é bug.
        """
        result = self.transition(target, trigger, metadata)
        if not result.success:
            raise RuntimeError(result.error_reason)
        assert result.transition is not None
        return result.transition

    def get_state_summary(self) -> dict[str, Any]:
        """
        Retorna resumo do estado atual para observability.

        Returns:
            Dict com informações do estado (seguro para logs)
        """
        return {
            "interaction_id": self._interaction_id,
            "final_state": self._current_state.name,
            "is_terminal": self.is_terminal,
            "transition_count": len(self._history),
            "valid_targets": sorted(s.name for s in get_valid_targets(self._current_state)),
        }

    def get_history_summary(self) -> list[dict[str, Any]]:
        """Retorna histórico em formato seguro para logs."""
        return [t.to_log_dict() for t in self._history]
