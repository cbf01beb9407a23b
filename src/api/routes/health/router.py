"""Endpoints de health check."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config.settings import get_base_settings, get_discord_settings

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Resultado de checagem de dependência."""

    status: Literal["ok", "degraded", "failed"]
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {"status": self.status, "error": self.error}


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe — verifica se o serviço está rodando."""
    return HealthResponse(
        status="healthy",
        service=get_base_settings().service_name,
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness probe: dispatcher montado e configuração Discord válida.

    A ausência do cliente REST degrada (sem follow-ups) mas não bloqueia.
    """
    settings_check = _check_settings()
    dispatcher_check = _check_present(
        getattr(request.app.state, "interaction_dispatcher", None), missing="failed"
    )
    rest_check = _check_present(
        getattr(request.app.state, "rest_client", None), missing="degraded"
    )

    ready = settings_check.status == "ok" and dispatcher_check.status == "ok"
    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {
            "settings": settings_check.as_dict(),
            "dispatcher": dispatcher_check.as_dict(),
            "rest_client": rest_check.as_dict(),
        },
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)


def _check_settings() -> DependencyCheck:
    errors = get_discord_settings().validate()
    if errors:
        logger.warning("readiness_settings_invalid", extra={"error_count": len(errors)})
        return DependencyCheck(status="failed", error="invalid_settings")
    return DependencyCheck(status="ok")


def _check_present(
    dependency: Any | None,
    *,
    missing: Literal["degraded", "failed"],
) -> DependencyCheck:
    if dependency is None:
        return DependencyCheck(status=missing, error="not_configured")
    return DependencyCheck(status="ok")
