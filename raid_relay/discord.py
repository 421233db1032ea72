"""Discord embed formatting and webhook delivery."""

from typing import Any, Protocol, Sequence

import httpx

from raid_relay.errors import DeliveryError
from raid_relay.raids import RaidType

TITLE_TEMPLATE = "Завершение: {raid}"
PLAYER_LABEL = "Игрок {n}"
MISSING_PLAYER = "N/A"
AUTHOR_NAME = "Guild Raid Notification"
AUTHOR_ICON_URL = "https://i.imgur.com/PTI0zxK.png"

PARTY_SIZE = 4


def _player_field(players: Sequence[str], index: int) -> dict[str, Any]:
    value = players[index] if index < len(players) else MISSING_PLAYER
    return {"name": PLAYER_LABEL.format(n=index + 1), "value": value, "inline": True}


def build_raid_message(raid: RaidType, players: Sequence[str]) -> dict[str, Any]:
    # Two inline players per row; the blank non-inline field breaks the row.
    fields = [
        _player_field(players, 0),
        _player_field(players, 1),
        {"name": "\t", "value": "\t"},
        _player_field(players, 2),
        _player_field(players, 3),
    ]
    return {
        "content": None,
        "embeds": [
            {
                "title": TITLE_TEMPLATE.format(raid=raid.name),
                "color": None,
                "fields": fields,
                "author": {"name": AUTHOR_NAME, "icon_url": AUTHOR_ICON_URL},
                "thumbnail": {"url": raid.icon_url},
            }
        ],
        "attachments": [],
    }


class Notifier(Protocol):
    async def notify(self, message: dict[str, Any]) -> None:
        ...


class DiscordNotifier:
    def __init__(self, client: httpx.AsyncClient, webhook_url: str, timeout: float = 15):
        self._client = client
        self._webhook_url = webhook_url
        self._timeout = timeout

    async def notify(self, message: dict[str, Any]) -> None:
        try:
            resp = await self._client.post(
                self._webhook_url, json=message, timeout=self._timeout
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise DeliveryError(
                f"Discord webhook returned {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise DeliveryError(f"Discord webhook request failed: {e}") from e
