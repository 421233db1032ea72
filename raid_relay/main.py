import sys
from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from raid_relay.config import Settings, load_settings
from raid_relay.cooldown import CooldownGate
from raid_relay.discord import DiscordNotifier, Notifier
from raid_relay.errors import ConfigError, InvalidReportError, RelayError
from raid_relay.logger import logger
from raid_relay.membership import GroupDirectory, MembershipCache, MembershipDirectory
from raid_relay.models import RaidReport
from raid_relay.relay import RaidRelay


def create_app(
    settings: Settings | None = None,
    *,
    directory: GroupDirectory | None = None,
    notifier: Notifier | None = None,
    gate: CooldownGate | None = None,
    membership: MembershipCache | None = None,
) -> FastAPI:
    """Build the relay app. Raises ConfigError if settings are invalid."""
    settings = settings or load_settings()

    # Shared client for outbound calls, only needed when a real collaborator
    # is built here.
    client = None
    if (directory is None and membership is None) or notifier is None:
        client = httpx.AsyncClient()

    if membership is None:
        directory = directory or MembershipDirectory(
            client, settings.directory_base_url, settings.http_timeout_seconds
        )
        membership = MembershipCache(
            directory, settings.guild, ttl=settings.membership_ttl_seconds
        )
    if notifier is None:
        notifier = DiscordNotifier(
            client, settings.webhook_url, settings.http_timeout_seconds
        )
    if gate is None:
        gate = CooldownGate(
            window=settings.cooldown_seconds, stripes=settings.cooldown_stripes
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Relaying raids for guild '{settings.guild}'")
        yield
        if client is not None:
            await client.aclose()

    app = FastAPI(title="Raid Relay", lifespan=lifespan)
    app.state.relay = RaidRelay(membership, gate, notifier)

    @app.get("/health")
    async def health():
        return {
            "status": "ok",
            "cooldown_keys": gate.size,
            "members": membership.size,
        }

    @app.post("/raid")
    async def handle_raid(request: Request):
        relay: RaidRelay = request.app.state.relay
        try:
            report = await _parse_report(request)
            await relay.process(report)
        except RelayError as e:
            if e.status_code >= 500:
                logger.error(e.message)
            else:
                logger.warning(e.message)
            return JSONResponse(
                status_code=e.status_code,
                content={"error": e.code, "detail": e.message},
            )

        return {"processed": True, "raid": report.raid_type}

    return app


async def _parse_report(request: Request) -> RaidReport:
    try:
        payload = await request.json()
    except (ValueError, RecursionError) as e:
        # ValueError covers JSONDecodeError and UnicodeDecodeError.
        raise InvalidReportError(f"Raid report is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise InvalidReportError("Raid report must be a JSON object")

    try:
        return RaidReport(**payload)
    except ValidationError as e:
        fields = ", ".join(".".join(map(str, err["loc"])) for err in e.errors())
        raise InvalidReportError(f"Raid report parse error: {fields}") from e


def run() -> None:
    try:
        settings = load_settings()
        app = create_app(settings)
    except ConfigError as e:
        logger.critical(str(e))
        sys.exit(1)

    uvicorn.run(app, host=settings.host, port=settings.port)
