import pytest
from fastapi.testclient import TestClient

from raid_relay.config import Settings
from raid_relay.cooldown import CooldownGate
from raid_relay.errors import DeliveryError, DirectoryError
from raid_relay.main import create_app

WEBHOOK_URL = "https://discord.com/api/webhooks/123456789/abc-DEF_123"

SAMPLE_GUILD_RESPONSE = {
    "name": "Test Guild",
    "prefix": "TG",
    "members": {
        "total": 4,
        "owner": {"u1": {"username": "Salted"}},
        "chief": {"u2": {"username": "Aerrihn"}},
        "recruit": {
            "u3": {"username": "Nepmia"},
            "u4": {"username": "Kaizuu"},
        },
    },
}

SAMPLE_REPORT = {
    "raidType": "The Canyon Colossus",
    "players": ["A", "B", "C", "D"],
    "reporterUuid": "u1",
}


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeDirectory:
    def __init__(self, data=None):
        self.data = data if data is not None else SAMPLE_GUILD_RESPONSE
        self.fail = False
        self.calls: list[str] = []

    async def fetch_group_members(self, group: str):
        self.calls.append(group)
        if self.fail:
            raise DirectoryError(f"Failed to fetch members of guild '{group}'")
        return self.data


class FakeNotifier:
    def __init__(self):
        self.fail = False
        self.messages: list[dict] = []

    async def notify(self, message: dict) -> None:
        self.messages.append(message)
        if self.fail:
            raise DeliveryError("Discord webhook returned 500")


@pytest.fixture
def settings():
    return Settings(webhook_url=WEBHOOK_URL, guild="Test Guild")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def directory():
    return FakeDirectory()


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def gate(clock):
    return CooldownGate(window=60, clock=clock)


@pytest.fixture
def app(settings, directory, notifier, gate):
    return create_app(settings, directory=directory, notifier=notifier, gate=gate)


@pytest.fixture
def client(app):
    return TestClient(app, raise_server_exceptions=False)
