"""Dispatcher de interações: verificação → roteamento → resposta.

Fluxo por requisição:
1. Verifica assinatura Ed25519 e parseia o body (RECEIVED → VERIFIED)
2. PING → PONG, sem consultar o registro
3. Resolve o handler (→ ROUTED) ou responde efêmero (→ UNROUTABLE)
4. Aguarda a primeira conclusão do ResponseSink (→ RESPONDED); se o
   handler falha antes de responder, devolve a mesma resposta efêmera
   do caminho UNROUTABLE

O handler pode continuar rodando depois da resposta (follow-ups); a
task fica sob HandlerTaskTracker até terminar.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from api.connectors.discord.models import InteractionType
from api.connectors.discord.webhook import (
    InvalidJsonError,
    InvalidSignatureError,
    parse_interaction_request,
)
from api.payload_builders.discord import build_message_body
from app.interactions.context import InteractionContext
from app.interactions.followup import InteractionFollowUp
from app.interactions.handler_tasks import HandlerTaskTracker
from app.interactions.response_sink import ResponseSink
from app.interactions.responses import InteractionResponse
from app.observability import reset_correlation_id, set_correlation_id
from config.settings.discord import DEFAULT_UNROUTABLE_REPLY
from fsm import DispatchState, DispatchStateMachine
from utils.errors import CommandNotFoundError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from api.connectors.discord.http_client import DiscordRestClient
    from api.connectors.discord.models import Interaction
    from app.commands.registry import CommandRegistry, ResolvedCommand

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DispatchResult:
    """Resultado de uma requisição processada."""

    state: DispatchState
    response: InteractionResponse
    interaction_id: str
    command_path: tuple[str, ...] = ()


class InteractionDispatcher:
    """Processa webhooks de interação contra um CommandRegistry congelado."""

    def __init__(
        self,
        registry: CommandRegistry,
        *,
        public_key: str | None,
        rest_client: DiscordRestClient | None = None,
        unroutable_reply: str = DEFAULT_UNROUTABLE_REPLY,
    ) -> None:
        """Inicializa o dispatcher e congela o registro.

        Args:
            registry: Registro de handlers (congelado aqui)
            public_key: Chave pública Ed25519 (hex) da aplicação
            rest_client: Cliente REST para follow-ups (None desabilita)
            unroutable_reply: Texto efêmero para comandos sem handler e
                handlers que falham antes de responder
        """
        registry.freeze()
        self._registry = registry
        self._public_key = public_key
        self._rest = rest_client
        self._unroutable_reply = unroutable_reply
        self._tasks = HandlerTaskTracker()

    @property
    def pending_tasks(self) -> int:
        return len(self._tasks)

    async def handle_webhook(
        self,
        raw_body: bytes,
        headers: Mapping[str, str],
    ) -> DispatchResult:
        """Processa uma requisição HTTP de webhook.

        Args:
            raw_body: Corpo bruto (exatamente os bytes assinados)
            headers: Headers com chaves em minúsculas

        Raises:
            InvalidSignatureError: Assinatura ausente ou inválida
            InvalidJsonError: Body não é uma interação
        """
        machine = DispatchStateMachine()
        try:
            interaction, _ = parse_interaction_request(raw_body, headers, self._public_key)
        except InvalidSignatureError as exc:
            machine.advance(DispatchState.REJECTED, "signature_invalid")
            logger.warning("interaction_rejected", extra={"reason": str(exc)})
            raise
        except InvalidJsonError as exc:
            machine.advance(DispatchState.REJECTED, "payload_invalid")
            logger.warning("interaction_payload_invalid", extra={"reason": str(exc)})
            raise

        machine.advance(DispatchState.VERIFIED, "signature_valid")
        return await self._dispatch(interaction, machine)

    async def dispatch(self, interaction: Interaction) -> DispatchResult:
        """Processa uma interação já verificada pelo chamador."""
        machine = DispatchStateMachine(initial_state=DispatchState.VERIFIED)
        return await self._dispatch(interaction, machine)

    async def drain(self, timeout_seconds: float = 30.0) -> None:
        """Aguarda handlers ainda em execução (shutdown)."""
        await self._tasks.drain(timeout_seconds)

    async def _dispatch(
        self,
        interaction: Interaction,
        machine: DispatchStateMachine,
    ) -> DispatchResult:
        token = set_correlation_id(interaction.id)
        machine.interaction_id = interaction.id
        try:
            if interaction.type is InteractionType.PING:
                machine.advance(DispatchState.RESPONDED, "ping")
                return self._finish(machine, InteractionResponse.pong())

            if interaction.type is not InteractionType.APPLICATION_COMMAND or interaction.data is None:
                return self._unroutable(machine, (), reason="unsupported_interaction_type")

            try:
                resolved = self._registry.resolve(interaction.data)
            except CommandNotFoundError as exc:
                return self._unroutable(machine, exc.path, reason="command_not_found")

            machine.advance(
                DispatchState.ROUTED,
                "command_resolved",
                {"command_path": resolved.path_label},
            )
            try:
                response = await self._run_handler(interaction, resolved)
            except Exception as exc:
                logger.exception(
                    "interaction_handler_failed",
                    extra={
                        "interaction_id": interaction.id,
                        "command_path": resolved.path_label,
                        "error_type": type(exc).__name__,
                    },
                )
                machine.advance(DispatchState.RESPONDED, "handler_failed")
                return self._finish(machine, self._fallback_reply(), resolved.path)

            machine.advance(DispatchState.RESPONDED, "handler_responded")
            return self._finish(machine, response, resolved.path)
        finally:
            reset_correlation_id(token)

    async def _run_handler(
        self,
        interaction: Interaction,
        resolved: ResolvedCommand,
    ) -> InteractionResponse:
        """Executa o handler e devolve a primeira resposta entregue ao sink.

        Se o handler levanta antes de responder, o erro propaga para
        _dispatch, que devolve a resposta efêmera padrão. Se retorna
        sem responder, a espera continua: não há timeout próprio.
        """
        sink = ResponseSink()
        followup = None
        if self._rest is not None:
            followup = InteractionFollowUp(self._rest, interaction.application_id, interaction.token)
        context = InteractionContext(interaction, resolved, sink, followup)

        handler_task = asyncio.ensure_future(resolved.handler(context))
        sink_wait = asyncio.ensure_future(sink.wait())
        try:
            done, _ = await asyncio.wait(
                {handler_task, sink_wait},
                return_when=asyncio.FIRST_COMPLETED,
            )
            if sink_wait not in done:
                handler_task.result()
                logger.warning(
                    "handler_returned_without_response",
                    extra={"interaction_id": interaction.id, "command_path": resolved.path_label},
                )
            response = await sink_wait
        except BaseException:
            handler_task.cancel()
            sink_wait.cancel()
            raise

        self._tasks.track(handler_task, interaction_id=interaction.id)
        return response

    def _unroutable(
        self,
        machine: DispatchStateMachine,
        path: tuple[str, ...],
        *,
        reason: str,
    ) -> DispatchResult:
        response = self._fallback_reply()
        machine.advance(DispatchState.UNROUTABLE, reason)
        logger.warning(
            "interaction_unroutable",
            extra={
                "interaction_id": machine.interaction_id,
                "command_path": " ".join(path),
                "reason": reason,
            },
        )
        return self._finish(machine, response, path)

    def _fallback_reply(self) -> InteractionResponse:
        return InteractionResponse.channel_message(
            build_message_body(self._unroutable_reply, ephemeral=True)
        )

    def _finish(
        self,
        machine: DispatchStateMachine,
        response: InteractionResponse,
        path: tuple[str, ...] = (),
    ) -> DispatchResult:
        summary = machine.get_state_summary()
        logger.info(
            "interaction_dispatched",
            extra={
                "interaction_id": machine.interaction_id,
                "command_path": " ".join(path),
                "final_state": summary["final_state"],
                "response_type": int(response.type),
            },
        )
        logger.debug(
            "interaction_transitions",
            extra={
                "interaction_id": machine.interaction_id,
                "transitions": machine.get_history_summary(),
            },
        )
        return DispatchResult(
            state=machine.current_state,
            response=response,
            interaction_id=machine.interaction_id,
            command_path=path,
        )
