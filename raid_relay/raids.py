"""Registry of raids the relay accepts reports for."""

from pydantic import BaseModel


class RaidType(BaseModel):
    name: str
    icon_url: str


_WIKI_IMAGES = "https://static.wikia.nocookie.net/wynncraft_gamepedia_en/images"

RAIDS: list[RaidType] = [
    RaidType(
        name="The Canyon Colossus",
        icon_url=f"{_WIKI_IMAGES}/2/2d/TheCanyonColossusIcon.png",
    ),
    RaidType(
        name="The Nameless Anomaly",
        icon_url=f"{_WIKI_IMAGES}/9/92/TheNamelessAnomalyIcon.png",
    ),
    RaidType(
        name="Orphion's Nexus of Light",
        icon_url=f"{_WIKI_IMAGES}/6/63/Orphion%27sNexusofLightIcon.png",
    ),
    RaidType(
        name="Nest of the Grootslangs",
        icon_url=f"{_WIKI_IMAGES}/5/52/NestoftheGrootslangsIcon.png",
    ),
]

_by_name: dict[str, RaidType] = {r.name: r for r in RAIDS}


def get_raid(name: str) -> RaidType | None:
    return _by_name.get(name)
