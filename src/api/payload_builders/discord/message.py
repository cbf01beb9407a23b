"""Builder e validação de corpos de mensagem Discord.

Embeds, components e attachments são blobs opacos: apenas o tipo de
cada campo é checado, nunca o conteúdo.
"""

from __future__ import annotations

from typing import Any

from utils.errors import ValidationError

EPHEMERAL_FLAG = 1 << 6

# Campo -> tipos aceitos
MESSAGE_FIELD_TYPES: dict[str, tuple[type, ...]] = {
    "content": (str,),
    "tts": (bool,),
    "embeds": (list,),
    "allowed_mentions": (dict,),
    "components": (list,),
    "attachments": (list,),
    "flags": (int,),
}


def build_message_body(
    content: str | dict[str, Any] | None = None,
    *,
    tts: bool | None = None,
    embeds: list[Any] | None = None,
    allowed_mentions: dict[str, Any] | None = None,
    components: list[Any] | None = None,
    attachments: list[Any] | None = None,
    flags: int | None = None,
    ephemeral: bool = False,
) -> dict[str, Any]:
    """Monta o corpo de mensagem, omitindo campos não informados.

    Args:
        content: Texto da mensagem ou um dict já montado (repassado como está)
        tts: Text-to-speech
        embeds: Lista de embeds (opaca)
        allowed_mentions: Política de menções (opaca)
        components: Componentes de UI (opacos)
        attachments: Metadados de anexos (opacos)
        flags: Bitfield de flags da mensagem
        ephemeral: Se True, liga o flag EPHEMERAL (64)

    Returns:
        Dict pronto para envio
    """
    if isinstance(content, dict):
        body = dict(content)
    else:
        body = {
            key: value
            for key, value in (
                ("content", content),
                ("tts", tts),
                ("embeds", embeds),
                ("allowed_mentions", allowed_mentions),
                ("components", components),
                ("attachments", attachments),
                ("flags", flags),
            )
            if value is not None
        }

    if ephemeral:
        body["flags"] = int(body.get("flags") or 0) | EPHEMERAL_FLAG
    return body


def validate_message_body(
    body: dict[str, Any],
    *,
    require_content: bool = True,
) -> dict[str, Any]:
    """Valida chaves e tipos de um corpo de mensagem.

    Args:
        body: Corpo a validar
        require_content: Exige `content` ou `embeds` (criação de follow-up)

    Raises:
        ValidationError: Campo desconhecido, tipo inválido ou conteúdo ausente

    Returns:
        O próprio body
    """
    if not isinstance(body, dict):
        raise ValidationError("message", "must be an object")

    for key, value in body.items():
        allowed_types = MESSAGE_FIELD_TYPES.get(key)
        if allowed_types is None:
            raise ValidationError(key, "unknown field")
        if value is None:
            continue
        if isinstance(value, bool) and bool not in allowed_types:
            raise ValidationError(key, "invalid type")
        if not isinstance(value, allowed_types):
            raise ValidationError(key, "invalid type")

    if require_content and body.get("content") is None and body.get("embeds") is None:
        raise ValidationError("content", "one of content, embeds is required")
    return body
