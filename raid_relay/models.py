from pydantic import BaseModel, ConfigDict, Field


class RaidReport(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    raid_type: str = Field(alias="raidType", min_length=1)
    players: tuple[str, ...] = Field(min_length=1)
    reporter_uuid: str = Field(alias="reporterUuid", min_length=1)


class RaidPartyKey(BaseModel):
    """Cooldown key for one raid party.

    Many parties can run the same raid at once, so the first player's name is
    part of the key. Two parties sharing a first player collapse into one key.
    """

    model_config = ConfigDict(frozen=True)

    raid_name: str
    first_player: str

    @classmethod
    def from_report(cls, report: RaidReport) -> "RaidPartyKey":
        return cls(raid_name=report.raid_type, first_player=report.players[0])
