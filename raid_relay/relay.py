"""Admission pipeline for one raid report."""

from typing import Callable

from raid_relay.cooldown import CooldownGate
from raid_relay.discord import Notifier, build_raid_message
from raid_relay.errors import (
    CooldownActiveError,
    DirectoryError,
    UnauthorizedReporterError,
    UnknownRaidError,
)
from raid_relay.logger import log_report, logger
from raid_relay.membership import MembershipCache
from raid_relay.models import RaidPartyKey, RaidReport
from raid_relay.raids import RaidType, get_raid


class RaidRelay:
    def __init__(
        self,
        membership: MembershipCache,
        gate: CooldownGate,
        notifier: Notifier,
        lookup_raid: Callable[[str], RaidType | None] = get_raid,
    ):
        self.membership = membership
        self.gate = gate
        self.notifier = notifier
        self._lookup_raid = lookup_raid

    async def process(self, report: RaidReport) -> None:
        """Relay a report or raise the RelayError that rejects it.

        Checks run cheapest first: raid type, membership, cooldown. A report
        that passes the cooldown consumes the window even if delivery fails.
        """
        raid = self._lookup_raid(report.raid_type)
        if raid is None:
            raise UnknownRaidError(f"Unknown raid type: {report.raid_type}")

        try:
            authorized = await self.membership.is_member(report.reporter_uuid)
        except DirectoryError as e:
            logger.error(f"[membership] {e}")
            raise UnauthorizedReporterError(
                f"Could not verify guild membership of {report.reporter_uuid}"
            ) from e
        if not authorized:
            raise UnauthorizedReporterError(
                f"Unauthorized raid report from UUID: {report.reporter_uuid}"
            )

        if not self.gate.admit(RaidPartyKey.from_report(report)):
            raise CooldownActiveError(
                f"Raid message from {report.reporter_uuid} ignored due to cooldown"
            )

        await self.notifier.notify(build_raid_message(raid, report.players))
        log_report(raid.name, list(report.players), report.reporter_uuid)
