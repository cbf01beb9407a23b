"""Testes da verificação Ed25519 das interações."""

from __future__ import annotations

from api.connectors.discord.signature import (
    verify_interaction_signature,
    verify_request_signature,
)
from tests.fakes.discord_api import InteractionSigner

BODY = b'{"type":1}'
TIMESTAMP = "1700000000"


def _flip_first_byte(hex_value: str) -> str:
    first = int(hex_value[:2], 16) ^ 0x01
    return f"{first:02x}{hex_value[2:]}"


class TestVerifyInteractionSignature:
    """Função pura: True só para assinatura correta."""

    def test_valid_signature_passes(self) -> None:
        signer = InteractionSigner()
        headers = signer.sign(BODY, TIMESTAMP)

        assert verify_interaction_signature(
            BODY, headers["x-signature-ed25519"], TIMESTAMP, signer.public_key_hex
        )

    def test_flipped_signature_byte_fails(self) -> None:
        signer = InteractionSigner()
        signature = _flip_first_byte(signer.sign(BODY, TIMESTAMP)["x-signature-ed25519"])

        assert not verify_interaction_signature(BODY, signature, TIMESTAMP, signer.public_key_hex)

    def test_tampered_body_fails(self) -> None:
        signer = InteractionSigner()
        signature = signer.sign(BODY, TIMESTAMP)["x-signature-ed25519"]

        assert not verify_interaction_signature(
            b'{"type":2}', signature, TIMESTAMP, signer.public_key_hex
        )

    def test_timestamp_is_part_of_signed_message(self) -> None:
        signer = InteractionSigner()
        signature = signer.sign(BODY, TIMESTAMP)["x-signature-ed25519"]

        assert not verify_interaction_signature(BODY, signature, "1700000001", signer.public_key_hex)

    def test_other_key_fails(self) -> None:
        signature = InteractionSigner().sign(BODY, TIMESTAMP)["x-signature-ed25519"]

        assert not verify_interaction_signature(
            BODY, signature, TIMESTAMP, InteractionSigner().public_key_hex
        )

    def test_malformed_inputs_return_false(self) -> None:
        """Hex inválido, tamanho errado ou ausência nunca levantam."""
        signer = InteractionSigner()
        signature = signer.sign(BODY, TIMESTAMP)["x-signature-ed25519"]

        assert not verify_interaction_signature(BODY, "zz" * 64, TIMESTAMP, signer.public_key_hex)
        assert not verify_interaction_signature(BODY, signature[:10], TIMESTAMP, signer.public_key_hex)
        assert not verify_interaction_signature(BODY, signature, TIMESTAMP, "abc")
        assert not verify_interaction_signature(BODY, signature, TIMESTAMP, "00" * 16)
        assert not verify_interaction_signature(BODY, None, TIMESTAMP, signer.public_key_hex)
        assert not verify_interaction_signature(BODY, signature, None, signer.public_key_hex)
        assert not verify_interaction_signature(BODY, signature, TIMESTAMP, None)


class TestVerifyRequestSignature:
    """Extração de headers e motivo da falha."""

    def test_valid_request(self) -> None:
        signer = InteractionSigner()

        result = verify_request_signature(BODY, signer.sign(BODY), signer.public_key_hex)

        assert result.valid is True
        assert result.error is None

    def test_missing_headers(self) -> None:
        signer = InteractionSigner()

        result = verify_request_signature(BODY, {}, signer.public_key_hex)

        assert result.valid is False
        assert result.error == "missing_signature_headers"

    def test_missing_public_key(self) -> None:
        signer = InteractionSigner()

        result = verify_request_signature(BODY, signer.sign(BODY), None)

        assert result.error == "missing_public_key"

    def test_mismatch(self) -> None:
        signer = InteractionSigner()
        headers = signer.sign(BODY)

        result = verify_request_signature(b"{}", headers, signer.public_key_hex)

        assert result.valid is False
        assert result.error == "signature_mismatch"
