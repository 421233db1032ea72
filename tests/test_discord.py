"""Tests for embed formatting and webhook delivery."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from raid_relay.discord import DiscordNotifier, build_raid_message
from raid_relay.errors import DeliveryError
from raid_relay.raids import get_raid
from tests.conftest import WEBHOOK_URL


def _player_values(message):
    fields = message["embeds"][0]["fields"]
    return [f["value"] for f in fields if f["name"].startswith("Игрок")]


def test_message_layout():
    raid = get_raid("The Canyon Colossus")
    message = build_raid_message(raid, ["A", "B", "C", "D"])

    assert message["content"] is None
    assert message["attachments"] == []
    embed = message["embeds"][0]
    assert embed["title"] == "Завершение: The Canyon Colossus"
    assert embed["thumbnail"]["url"] == raid.icon_url
    assert embed["author"]["name"] == "Guild Raid Notification"
    assert [f["name"] for f in embed["fields"]] == [
        "Игрок 1", "Игрок 2", "\t", "Игрок 3", "Игрок 4",
    ]
    assert _player_values(message) == ["A", "B", "C", "D"]


def test_missing_players_render_placeholder():
    message = build_raid_message(get_raid("Nest of the Grootslangs"), ["A", "B"])
    assert _player_values(message) == ["A", "B", "N/A", "N/A"]


def test_extra_players_are_not_rendered():
    message = build_raid_message(get_raid("Nest of the Grootslangs"), list("ABCDE"))
    assert _player_values(message) == ["A", "B", "C", "D"]


def test_unknown_raid_lookup():
    assert get_raid("Unknown Raid") is None
    assert get_raid("the canyon colossus") is None


@pytest.mark.asyncio
async def test_notify_posts_json():
    mock_resp = MagicMock()
    mock_resp.raise_for_status = MagicMock()
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.post = AsyncMock(return_value=mock_resp)

    message = {"content": None, "embeds": []}
    await DiscordNotifier(mock_client, WEBHOOK_URL).notify(message)

    mock_client.post.assert_awaited_once_with(WEBHOOK_URL, json=message, timeout=15)


@pytest.mark.asyncio
async def test_notify_raises_on_error_status():
    request = httpx.Request("POST", WEBHOOK_URL)
    mock_resp = MagicMock()
    mock_resp.raise_for_status = MagicMock(
        side_effect=httpx.HTTPStatusError(
            "bad request", request=request, response=httpx.Response(400, request=request)
        )
    )
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.post = AsyncMock(return_value=mock_resp)

    with pytest.raises(DeliveryError, match="400"):
        await DiscordNotifier(mock_client, WEBHOOK_URL).notify({})


@pytest.mark.asyncio
async def test_notify_raises_on_transport_error():
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.post = AsyncMock(side_effect=httpx.ReadTimeout("timed out"))

    with pytest.raises(DeliveryError):
        await DiscordNotifier(mock_client, WEBHOOK_URL).notify({})
