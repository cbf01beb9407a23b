"""Árvore de handlers de comando, indexada por caminho de nomes.

Os nós vivem numa arena (lista) e cada nó guarda o índice nome→id dos
filhos. A árvore é montada no startup e congelada antes do tráfego;
depois disso só há leituras, sem lock.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from utils.errors import (
    CommandNotFoundError,
    DuplicateRegistrationError,
    RegistryFrozenError,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterator, Sequence

    from api.connectors.discord.models import InteractionData, InteractionDataOption
    from app.interactions.context import InteractionContext

    CommandHandler = Callable[[InteractionContext], Awaitable[None]]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RegisteredNode:
    """Entrada de roteamento: nome, handler opcional e filhos."""

    name: str
    handler: CommandHandler | None = None
    children: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ResolvedCommand:
    """Resultado do roteamento de uma interação."""

    handler: CommandHandler
    path: tuple[str, ...]
    options: tuple[InteractionDataOption, ...]

    @property
    def path_label(self) -> str:
        return " ".join(self.path)


class CommandRegistry:
    """Registro hierárquico de handlers.

    Construído explicitamente no startup e passado ao dispatcher;
    não existe instância global.
    """

    def __init__(self) -> None:
        self._nodes: list[RegisteredNode] = []
        self._roots: dict[str, int] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Encerra a fase de registro. Idempotente."""
        if not self._frozen:
            self._frozen = True
            logger.info("command_registry_frozen", extra={"handler_count": len(self)})

    def register(self, path: Sequence[str] | str, handler: CommandHandler) -> None:
        """Registra um handler no nó alcançado por `path`.

        Nós intermediários são criados quando necessário.

        Args:
            path: Caminho de nomes (ex: ["config", "set"]) ou nome único
            handler: Coroutine function que recebe o InteractionContext

        Raises:
            RegistryFrozenError: Se o registro já foi congelado
            DuplicateRegistrationError: Se o nó terminal já tem handler
            ValueError: Caminho vazio ou com nome vazio
            TypeError: Handler não é assíncrono
        """
        if self._frozen:
            raise RegistryFrozenError("registro congelado: tráfego já iniciado")
        names = _normalize_path(path)
        if not _is_async_handler(handler):
            raise TypeError("handler deve ser uma coroutine function (async def)")

        index = self._roots
        node: RegisteredNode | None = None
        for name in names:
            node_id = index.get(name)
            if node_id is None:
                node_id = len(self._nodes)
                self._nodes.append(RegisteredNode(name=name))
                index[name] = node_id
            node = self._nodes[node_id]
            index = node.children

        assert node is not None
        if node.handler is not None:
            raise DuplicateRegistrationError(names)
        node.handler = handler
        logger.debug("command_handler_registered", extra={"command_path": " ".join(names)})

    def command(self, *path: str) -> Callable[[CommandHandler], CommandHandler]:
        """Decorator equivalente a register(path, handler)."""

        def decorator(handler: CommandHandler) -> CommandHandler:
            self.register(path, handler)
            return handler

        return decorator

    def resolve(self, data: InteractionData) -> ResolvedCommand:
        """Encontra o handler para os dados de uma interação de comando.

        Casa `data.name` nas raízes; enquanto o elemento corrente tiver uma
        sub-opção SUB_COMMAND/SUB_COMMAND_GROUP, desce na primeira delas.
        Ao parar, devolve o handler do nó corrente e as opções do nível folha.

        Raises:
            CommandNotFoundError: Nenhum nó casa ou o nó final não tem handler
        """
        if not data.name:
            raise CommandNotFoundError(())

        path = [data.name]
        node_id = self._roots.get(data.name)
        if node_id is None:
            raise CommandNotFoundError(tuple(path))

        options = data.options
        while True:
            nested = next((option for option in options if option.is_container), None)
            if nested is None:
                break
            path.append(nested.name)
            node_id = self._nodes[node_id].children.get(nested.name)
            if node_id is None:
                raise CommandNotFoundError(tuple(path))
            options = nested.options

        handler = self._nodes[node_id].handler
        if handler is None:
            raise CommandNotFoundError(tuple(path))
        return ResolvedCommand(handler=handler, path=tuple(path), options=tuple(options))

    def paths(self) -> Iterator[tuple[str, ...]]:
        """Itera os caminhos que possuem handler (ordem de inserção)."""
        stack = [((name,), node_id) for name, node_id in reversed(self._roots.items())]
        while stack:
            path, node_id = stack.pop()
            node = self._nodes[node_id]
            if node.handler is not None:
                yield path
            stack.extend(
                ((*path, name), child_id)
                for name, child_id in reversed(node.children.items())
            )

    def __contains__(self, path: object) -> bool:
        if isinstance(path, str):
            path = (path,)
        if not isinstance(path, tuple | list):
            return False
        index = self._roots
        node: RegisteredNode | None = None
        for name in path:
            node_id = index.get(name)
            if node_id is None:
                return False
            node = self._nodes[node_id]
            index = node.children
        return node is not None and node.handler is not None

    def __len__(self) -> int:
        return sum(1 for node in self._nodes if node.handler is not None)


def _normalize_path(path: Sequence[str] | str) -> tuple[str, ...]:
    names = (path,) if isinstance(path, str) else tuple(path)
    if not names:
        raise ValueError("caminho de comando vazio")
    for name in names:
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"nome de comando inválido: {name!r}")
    return names


def _is_async_handler(handler: object) -> bool:
    # Aceita também objetos com `async def __call__`
    return inspect.iscoroutinefunction(handler) or inspect.iscoroutinefunction(
        getattr(handler, "__call__", None)
    )
