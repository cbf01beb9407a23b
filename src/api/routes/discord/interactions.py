"""Endpoint de webhook de interações do Discord.

Endpoint:
- POST /webhook/discord/interactions: recebe interações assinadas

Segurança:
- Assinatura Ed25519 obrigatória; falha → 401 sem ler o payload
- Responde dentro da mesma requisição (janela de 3s do Discord)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse

from api.connectors.discord.webhook import InvalidJsonError, InvalidSignatureError

if TYPE_CHECKING:
    from app.interactions import InteractionDispatcher

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/interactions", response_model=None)
async def receive_interaction(request: Request) -> Response:
    """Recebimento de interações.

    Returns:
        JSON do envelope de resposta, ou Response de erro
        (401 assinatura, 400 payload, 503 sem dispatcher, 500 erro inesperado).
        Falhas de handler já chegam aqui como envelope efêmero (200).
    """
    dispatcher: InteractionDispatcher | None = getattr(
        request.app.state, "interaction_dispatcher", None
    )
    if dispatcher is None:
        logger.error("interaction_dispatcher_unavailable")
        return Response(
            content="Service Unavailable",
            media_type="text/plain",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    raw_body = await request.body()
    headers = dict(request.headers)

    try:
        result = await dispatcher.handle_webhook(raw_body, headers)
    except InvalidSignatureError:
        return Response(
            content="Unauthorized",
            media_type="text/plain",
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    except InvalidJsonError:
        return Response(
            content="Bad Request",
            media_type="text/plain",
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    except Exception as exc:
        logger.exception(
            "interaction_processing_failed",
            extra={"error_type": type(exc).__name__},
        )
        return JSONResponse(
            content={"status": "internal_error"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return JSONResponse(content=result.response.to_dict())
