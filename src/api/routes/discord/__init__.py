"""Rotas HTTP do Discord."""

from api.routes.discord.router import router

__all__ = ["router"]
