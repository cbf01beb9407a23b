"""Testes de follow-ups e edição da resposta original."""

from __future__ import annotations

import json

import pytest

from app.interactions.followup import InteractionFollowUp
from tests.fakes.discord_api import APPLICATION_ID, INTERACTION_TOKEN, FakeDiscordApi
from utils.errors import ValidationError

BASE_PATH = f"/api/v10/webhooks/{APPLICATION_ID}/{INTERACTION_TOKEN}"


def _followup(api: FakeDiscordApi) -> InteractionFollowUp:
    return InteractionFollowUp(api.client(), APPLICATION_ID, INTERACTION_TOKEN)


class TestOriginalResponse:
    @pytest.mark.asyncio
    async def test_update_original_patches_original_message(self) -> None:
        api = FakeDiscordApi()

        message = await _followup(api).update_original_response("pronto")

        request = api.calls[0]
        assert request.method == "PATCH"
        assert request.url.path == f"{BASE_PATH}/messages/@original"
        assert json.loads(request.content) == {"content": "pronto"}
        assert message["content"] == "pronto"

    @pytest.mark.asyncio
    async def test_get_and_delete_original(self) -> None:
        api = FakeDiscordApi()
        followup = _followup(api)

        await followup.get_original_response()
        await followup.delete_original_response()

        assert [(r.method, r.url.path) for r in api.calls] == [
            ("GET", f"{BASE_PATH}/messages/@original"),
            ("DELETE", f"{BASE_PATH}/messages/@original"),
        ]


class TestFollowupMessages:
    @pytest.mark.asyncio
    async def test_send_followup_posts_to_webhook(self) -> None:
        api = FakeDiscordApi()

        await _followup(api).send_followup_message("mais", ephemeral=True)

        request = api.calls[0]
        assert request.method == "POST"
        assert request.url.path == BASE_PATH
        assert json.loads(request.content) == {"content": "mais", "flags": 64}

    @pytest.mark.asyncio
    async def test_send_followup_requires_content_or_embeds(self) -> None:
        api = FakeDiscordApi()

        with pytest.raises(ValidationError):
            await _followup(api).send_followup_message(tts=True)

        assert api.calls == []

    @pytest.mark.asyncio
    async def test_send_followup_rejects_unknown_fields(self) -> None:
        api = FakeDiscordApi()

        with pytest.raises(ValidationError) as exc_info:
            await _followup(api).send_followup_message({"content": "x", "avatar_url": "y"})

        assert exc_info.value.field == "avatar_url"
        assert api.calls == []

    @pytest.mark.asyncio
    async def test_update_and_delete_followup(self) -> None:
        api = FakeDiscordApi()
        followup = _followup(api)

        await followup.update_followup_message("7000", embeds=[{"title": "t"}])
        await followup.delete_followup_message("7000")

        assert [(r.method, r.url.path) for r in api.calls] == [
            ("PATCH", f"{BASE_PATH}/messages/7000"),
            ("DELETE", f"{BASE_PATH}/messages/7000"),
        ]
