"""Verificação de assinatura Ed25519 das interações do Discord.

O Discord assina `X-Signature-Timestamp || body` com a chave privada da
aplicação; validamos com a chave pública configurada (hex).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

if TYPE_CHECKING:
    from collections.abc import Mapping

SIGNATURE_HEADER = "x-signature-ed25519"
TIMESTAMP_HEADER = "x-signature-timestamp"


@dataclass(frozen=True, slots=True)
class SignatureResult:
    """Resultado da verificação (sem dados sensíveis)."""

    valid: bool
    error: str | None = None


def verify_interaction_signature(
    raw_body: bytes,
    signature_hex: str | None,
    timestamp: str | None,
    public_key_hex: str | None,
) -> bool:
    """Valida a assinatura Ed25519 de uma interação.

    Função pura: qualquer entrada malformada (hex inválido, header ausente,
    chave de tamanho errado) resulta em False, nunca em exceção.

    Args:
        raw_body: Corpo bruto da requisição
        signature_hex: Header X-Signature-Ed25519
        timestamp: Header X-Signature-Timestamp
        public_key_hex: Chave pública da aplicação em hex

    Returns:
        True se a assinatura é válida
    """
    if not signature_hex or not timestamp or not public_key_hex:
        return False

    try:
        public_key = Ed25519PublicKey.from_public_bytes(bytes.fromhex(public_key_hex))
        signature = bytes.fromhex(signature_hex)
        public_key.verify(signature, timestamp.encode("utf-8") + raw_body)
    except (InvalidSignature, ValueError):
        return False
    return True


def verify_request_signature(
    raw_body: bytes,
    headers: Mapping[str, str],
    public_key_hex: str | None,
) -> SignatureResult:
    """Extrai os headers de assinatura e valida o request.

    Args:
        raw_body: Corpo bruto da requisição
        headers: Headers recebidos (chaves em minúsculas)
        public_key_hex: Chave pública da aplicação em hex

    Returns:
        SignatureResult com motivo curto em caso de falha
    """
    signature_hex = headers.get(SIGNATURE_HEADER)
    timestamp = headers.get(TIMESTAMP_HEADER)

    if not public_key_hex:
        return SignatureResult(valid=False, error="missing_public_key")
    if not signature_hex or not timestamp:
        return SignatureResult(valid=False, error="missing_signature_headers")

    if not verify_interaction_signature(raw_body, signature_hex, timestamp, public_key_hex):
        return SignatureResult(valid=False, error="signature_mismatch")
    return SignatureResult(valid=True)
