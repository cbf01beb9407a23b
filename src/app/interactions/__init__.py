"""Interações — contexto do handler, resposta única e dispatcher."""

from app.interactions.context import InteractionContext
from app.interactions.dispatcher import DispatchResult, InteractionDispatcher
from app.interactions.followup import InteractionFollowUp
from app.interactions.handler_tasks import HandlerTaskTracker
from app.interactions.response_sink import ResponseSink
from app.interactions.responses import InteractionResponse, InteractionResponseType

__all__ = [
    "DispatchResult",
    "HandlerTaskTracker",
    "InteractionContext",
    "InteractionDispatcher",
    "InteractionFollowUp",
    "InteractionResponse",
    "InteractionResponseType",
    "ResponseSink",
]
