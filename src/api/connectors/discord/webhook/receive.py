"""Parse e validação inicial do webhook de interações (sem PII)."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pydantic

from utils.errors import AuthenticationError, InvalidPayloadError

from ..models import Interaction
from ..signature import SignatureResult, verify_request_signature

if TYPE_CHECKING:
    from collections.abc import Mapping


class InvalidSignatureError(AuthenticationError):
    """Assinatura inválida do webhook."""


class InvalidJsonError(InvalidPayloadError):
    """JSON inválido ou fora do formato de interação."""


def parse_interaction_request(
    raw_body: bytes,
    headers: Mapping[str, str],
    public_key: str | None,
) -> tuple[Interaction, SignatureResult]:
    """Valida assinatura e parseia o body em uma Interaction.

    A assinatura é checada antes de qualquer parse; o body nunca é
    interpretado se a verificação falhar.

    Args:
        raw_body: Corpo bruto do request
        headers: Headers recebidos (chaves em minúsculas)
        public_key: Chave pública Ed25519 (hex)

    Raises:
        InvalidSignatureError: Se assinatura for inválida ou ausente
        InvalidJsonError: Se o JSON estiver inválido ou não for uma interação

    Returns:
        (Interaction, SignatureResult)
    """
    signature_result = verify_request_signature(raw_body, headers, public_key)
    if not signature_result.valid:
        raise InvalidSignatureError(signature_result.error or "invalid_signature")

    try:
        payload = json.loads(raw_body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidJsonError("invalid_json") from exc

    if not isinstance(payload, dict):
        raise InvalidJsonError("payload_not_object")

    try:
        interaction = Interaction.model_validate(payload)
    except pydantic.ValidationError as exc:
        raise InvalidJsonError("payload_not_interaction") from exc

    return interaction, signature_result
