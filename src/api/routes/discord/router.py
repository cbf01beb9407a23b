"""Router principal do Discord — agrega os endpoints do canal."""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.discord.interactions import router as interactions_router

router = APIRouter()

router.include_router(interactions_router)
