"""
Testes da máquina de estados de dispatch.

Cobre estados, grafo de transições e DispatchStateMachine.
"""

import pytest

from fsm import (
    DEFAULT_INITIAL_STATE,
    TERMINAL_STATES,
    VALID_TRANSITIONS,
    DispatchState,
    DispatchStateMachine,
    StateTransition,
    get_valid_targets,
    is_terminal,
    is_transition_valid,
    validate_transition_map,
)


class TestStatesAndGraph:
    """
    Estrutura do enum e integridade do grafo.
    """

    def test_terminal_states(self) -> None:
        assert frozenset({
            DispatchState.RESPONDED,
            DispatchState.REJECTED,
            DispatchState.UNROUTABLE,
        }) == TERMINAL_STATES
        assert DEFAULT_INITIAL_STATE is DispatchState.RECEIVED
        assert is_terminal(DispatchState.REJECTED)
        assert not is_terminal(DispatchState.ROUTED)

    def test_transition_map_is_complete_and_consistent(self) -> None:
        assert validate_transition_map() == []
        assert set(VALID_TRANSITIONS) == set(DispatchState)

    def test_happy_path_edges(self) -> None:
        assert is_transition_valid(DispatchState.RECEIVED, DispatchState.VERIFIED)
        assert is_transition_valid(DispatchState.VERIFIED, DispatchState.ROUTED)
        assert is_transition_valid(DispatchState.ROUTED, DispatchState.RESPONDED)

    def test_rejected_only_from_received(self) -> None:
        assert is_transition_valid(DispatchState.RECEIVED, DispatchState.REJECTED)
        assert not is_transition_valid(DispatchState.VERIFIED, DispatchState.REJECTED)
        assert not is_transition_valid(DispatchState.ROUTED, DispatchState.REJECTED)

    def test_terminals_have_no_targets(self) -> None:
        for state in TERMINAL_STATES:
            assert get_valid_targets(state) == frozenset()


class TestDispatchStateMachine:
    """
    Transições registradas, recusa de arestas inválidas e resumo para logs.
    """

    def test_full_command_path(self) -> None:
        machine = DispatchStateMachine(interaction_id="9001")

        machine.advance(DispatchState.VERIFIED, "signature_valid")
        machine.advance(DispatchState.ROUTED, "command_resolved", {"command_path": "ping"})
        machine.advance(DispatchState.RESPONDED, "handler_responded")

        assert machine.is_terminal
        assert [t.to_state for t in machine.history] == [
            DispatchState.VERIFIED,
            DispatchState.ROUTED,
            DispatchState.RESPONDED,
        ]
        summary = machine.get_state_summary()
        assert summary["final_state"] == "RESPONDED"
        assert summary["interaction_id"] == "9001"
        assert summary["transition_count"] == 3

    def test_invalid_transition_returns_failure_without_changing_state(self) -> None:
        machine = DispatchStateMachine()

        result = machine.transition(DispatchState.RESPONDED, "skip")

        assert result.success is False
        assert "RECEIVED" in (result.error_reason or "")
        assert machine.current_state is DispatchState.RECEIVED
        assert machine.history == []

    def test_advance_raises_on_invalid_transition(self) -> None:
        machine = DispatchStateMachine(initial_state=DispatchState.REJECTED)

        with pytest.raises(RuntimeError):
            machine.advance(DispatchState.VERIFIED, "late")

    def test_history_is_a_copy(self) -> None:
        machine = DispatchStateMachine()
        machine.advance(DispatchState.REJECTED, "signature_invalid")

        machine.history.clear()

        assert len(machine.history) == 1
        assert machine.get_history_summary()[0]["trigger"] == "signature_invalid"

    def test_transition_requires_trigger(self) -> None:
        with pytest.raises(ValueError):
            StateTransition(
                from_state=DispatchState.RECEIVED,
                to_state=DispatchState.VERIFIED,
                trigger=" ",
            )
