"""
Tipos para representar e rastrear transições da máquina de dispatch.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from fsm.states.dispatch import DispatchState


@dataclass(frozen=True, slots=True)
class StateTransition:
    """
    Registro imutável de uma mudança de estado.

    Attributes:
        from_state: Estado de origem
        to_state: Estado de destino
        trigger: Gatilho da transição (ex: 'signature_valid', 'handler_reply')
        metadata: Dados para auditoria (nunca tokens ou bodies)
        timestamp: Momento da transição (UTC)
    """

    from_state: DispatchState
    to_state: DispatchState
    trigger: str
    metadata: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(
        default_factory=lambda: datetime.now(UTC)
    )

    def __post_init__(self) -> None:
        if not self.trigger or not self.trigger.strip():
            raise ValueError("trigger não pode ser vazio")

    def to_log_dict(self) -> dict[str, Any]:
        """
        Retorna representação segura para logs.

        Returns:
            Dict com dados seguros para logging estruturado
        """
        return {
            "from_state": self.from_state.name,
            "to_state": self.to_state.name,
            "trigger": self.trigger,
            "timestamp": self.timestamp.isoformat(),
            "metadata": self.metadata,
        }


@dataclass(frozen=True, slots=True)
class TransitionResult:
    """
    Resultado de uma tentativa de transição.

    Attributes:
        success: Se a transição foi bem-sucedida
        transition: Dados da transição (se success=True)
        error_reason: Motivo da falha (se success=False)
    """

    success: bool
    transition: StateTransition | None = None
    error_reason: str | None = None

    def __post_init__(self) -> None:
        if self.success and self.transition is None:
            raise ValueError("Transição bem-sucedida deve incluir transition")
        if not self.success and self.error_reason is None:
            raise ValueError("Transição falha deve incluir error_reason")
