import json

import pytest

from api.connectors.discord.models import InteractionType
from api.connectors.discord.webhook import (
    InvalidJsonError,
    InvalidSignatureError,
    parse_interaction_request,
)
from tests.fakes.discord_api import InteractionSigner, interaction_payload


def test_parse_interaction_request_ok() -> None:
    signer = InteractionSigner()
    body = json.dumps(interaction_payload(name="config")).encode("utf-8")

    interaction, result = parse_interaction_request(body, signer.sign(body), signer.public_key_hex)

    assert result.valid is True
    assert interaction.type is InteractionType.APPLICATION_COMMAND
    assert interaction.data is not None
    assert interaction.data.name == "config"


def test_parse_interaction_request_ignores_unknown_fields() -> None:
    signer = InteractionSigner()
    body = json.dumps(interaction_payload(1, app_permissions="8", entitlements=[])).encode()

    interaction, _ = parse_interaction_request(body, signer.sign(body), signer.public_key_hex)

    assert interaction.type is InteractionType.PING


def test_parse_interaction_request_keeps_unknown_type_as_int() -> None:
    signer = InteractionSigner()
    body = json.dumps(interaction_payload(42)).encode()

    interaction, _ = parse_interaction_request(body, signer.sign(body), signer.public_key_hex)

    assert interaction.type == 42
    assert not isinstance(interaction.type, InteractionType)


def test_parse_interaction_request_invalid_signature() -> None:
    signer = InteractionSigner()
    body = json.dumps(interaction_payload(1)).encode()
    headers = signer.sign(body)
    headers["x-signature-ed25519"] = "00" * 64

    with pytest.raises(InvalidSignatureError, match="signature_mismatch"):
        parse_interaction_request(body, headers, signer.public_key_hex)


def test_parse_interaction_request_checks_signature_before_json() -> None:
    """Body inválido sem assinatura válida é 401, não 400."""
    signer = InteractionSigner()

    with pytest.raises(InvalidSignatureError):
        parse_interaction_request(b"{invalid}", {}, signer.public_key_hex)


def test_parse_interaction_request_invalid_json() -> None:
    signer = InteractionSigner()
    body = b"{invalid}"

    with pytest.raises(InvalidJsonError, match="invalid_json"):
        parse_interaction_request(body, signer.sign(body), signer.public_key_hex)


def test_parse_interaction_request_not_an_object() -> None:
    signer = InteractionSigner()
    body = b"[1, 2]"

    with pytest.raises(InvalidJsonError, match="payload_not_object"):
        parse_interaction_request(body, signer.sign(body), signer.public_key_hex)


def test_parse_interaction_request_missing_fields() -> None:
    signer = InteractionSigner()
    body = json.dumps({"type": 2}).encode()

    with pytest.raises(InvalidJsonError, match="payload_not_interaction"):
        parse_interaction_request(body, signer.sign(body), signer.public_key_hex)
