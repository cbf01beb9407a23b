"""Entrypoint da aplicação pyloto-slash.

Monta a aplicação ASGI (FastAPI) a partir de um CommandRegistry
construído pelo chamador.

Uso (produção):
    uvicorn --factory app.app:create_app --host 0.0.0.0 --port 8080

Uso em código:
    registry = CommandRegistry()

    @registry.command("ping")
    async def ping(ctx: InteractionContext) -> None:
        ctx.reply("pong")

    app = create_app(registry)
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from api.routes import create_api_router
from app.bootstrap import initialize_app, validate_runtime_settings
from app.bootstrap.discord_factory import create_interaction_dispatcher, create_rest_client
from app.commands.registry import CommandRegistry
from config.logging import get_logger
from config.settings import get_base_settings, get_discord_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from config.settings import DiscordSettings

logger = get_logger(__name__)

SHUTDOWN_DRAIN_TIMEOUT_SECONDS = 30.0


def create_app(
    registry: CommandRegistry | None = None,
    *,
    settings: DiscordSettings | None = None,
) -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Args:
        registry: Handlers de comando (congelado no startup). Se None,
            o serviço só responde PING e a mensagem de comando indisponível.
        settings: DiscordSettings; se None, carrega do ambiente.

    Returns:
        Aplicação FastAPI configurada.
    """
    registry = registry if registry is not None else CommandRegistry()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Startup: valida settings, cria cliente REST e dispatcher.

        Shutdown: aguarda handlers pendentes e fecha o cliente REST.
        """
        service = get_base_settings().service_name
        logger.info("app_starting", extra={"service": service})
        discord = settings or get_discord_settings()
        validate_runtime_settings(discord)

        app.state.rest_client = create_rest_client(discord)
        if app.state.rest_client is None:
            logger.warning("rest_client_not_configured", extra={"service": service})
        app.state.interaction_dispatcher = create_interaction_dispatcher(
            registry, discord, app.state.rest_client
        )

        yield

        logger.info("app_shutting_down", extra={"service": service})
        await app.state.interaction_dispatcher.drain(SHUTDOWN_DRAIN_TIMEOUT_SECONDS)
        if app.state.rest_client is not None:
            await app.state.rest_client.aclose()

    fastapi_app = FastAPI(
        title="pyloto-slash",
        description="Webhook de interações e registro de comandos Discord",
        version="1.0.0",
        lifespan=lifespan,
    )
    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"handler_count": len(registry)})
    return fastapi_app


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    initialize_app()
    logger.info("Starting pyloto-slash in development mode")
    uvicorn.run(
        "app.app:create_app",
        factory=True,
        host="0.0.0.0",
        port=8080,
        reload=True,
    )


if __name__ == "__main__":
    main()
