"""Controle das tasks de handler que seguem após a resposta síncrona."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Any

logger = logging.getLogger(__name__)


class HandlerTaskTracker:
    """Mantém referência às tasks de handler ainda em execução.

    Um handler que responde (ou faz acknowledge) pode continuar rodando
    para enviar follow-ups; a task fica aqui até terminar ou até o drain
    no shutdown.
    """

    def __init__(self) -> None:
        self._active: set[asyncio.Task[Any]] = set()

    def __len__(self) -> int:
        return len(self._active)

    def track(self, task: asyncio.Task[Any], *, interaction_id: str = "") -> None:
        if task.done():
            self._log_failure(task, interaction_id)
            return
        self._active.add(task)
        task.add_done_callback(lambda done: self._on_done(done, interaction_id))
        logger.debug(
            "handler_task_detached",
            extra={"interaction_id": interaction_id, "active_tasks": len(self._active)},
        )

    def _on_done(self, task: asyncio.Task[Any], interaction_id: str) -> None:
        self._active.discard(task)
        self._log_failure(task, interaction_id)

    def _log_failure(self, task: asyncio.Task[Any], interaction_id: str) -> None:
        with contextlib.suppress(asyncio.CancelledError):
            exc = task.exception()
            if exc is not None:
                logger.error(
                    "handler_task_failed",
                    extra={
                        "interaction_id": interaction_id,
                        "error_type": type(exc).__name__,
                        "active_tasks": len(self._active),
                    },
                )

    async def drain(self, timeout_seconds: float = 30.0) -> None:
        """Aguarda tasks pendentes durante shutdown do processo."""
        if not self._active:
            return

        pending_now = list(self._active)
        logger.info(
            "handler_tasks_shutdown_wait",
            extra={"pending_tasks": len(pending_now), "timeout_seconds": timeout_seconds},
        )
        _, pending = await asyncio.wait(pending_now, timeout=timeout_seconds)
        if not pending:
            return

        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        logger.warning("handler_tasks_cancelled", extra={"cancelled_tasks": len(pending)})
