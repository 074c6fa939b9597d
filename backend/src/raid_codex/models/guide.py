"""Build guide models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ContentArea(str, Enum):
    """Guide content areas, in canonical display order."""

    GENERAL = "General"
    CLAN_BOSS = "Clan Boss"
    ARENA = "Arena"
    DUNGEONS = "Dungeons"
    HYDRA = "Hydra"
    DOOM_TOWER = "Doom Tower"
    FACTION_WARS = "Faction Wars"


class MasteryTree(str, Enum):
    """Allowed mastery tree pairings (primary + secondary)."""

    OFFENSE_SUPPORT = "Offense + Support"
    OFFENSE_DEFENSE = "Offense + Defense"
    DEFENSE_SUPPORT = "Defense + Support"
    DEFENSE_OFFENSE = "Defense + Offense"
    SUPPORT_OFFENSE = "Support + Offense"
    SUPPORT_DEFENSE = "Support + Defense"


@dataclass
class GuideRecord:
    """A generated build recommendation for one content area."""

    content_area: ContentArea
    gear_sets: list[str]
    stat_priorities: list[str]
    gauntlets_main: str
    chestplate_main: str
    boots_main: str
    mastery_tree: MasteryTree
    notes: str = ""
    skill_booking_order: Optional[list[int]] = field(default=None)

    def fingerprint(self) -> tuple:
        """Mechanical identity of the build (ignores area and notes)."""
        return (
            tuple(self.gear_sets),
            tuple(self.stat_priorities),
            self.gauntlets_main,
            self.chestplate_main,
            self.boots_main,
            self.mastery_tree,
            tuple(self.skill_booking_order) if self.skill_booking_order is not None else None,
        )

    def to_dict(self) -> dict:
        data = {
            "content_area": self.content_area.value,
            "gear_sets": list(self.gear_sets),
            "stat_priorities": list(self.stat_priorities),
            "gauntlets_main": self.gauntlets_main,
            "chestplate_main": self.chestplate_main,
            "boots_main": self.boots_main,
            "mastery_tree": self.mastery_tree.value,
            "notes": self.notes,
        }
        if self.skill_booking_order is not None:
            data["skill_booking_order"] = list(self.skill_booking_order)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "GuideRecord":
        order = data.get("skill_booking_order")
        return cls(
            content_area=ContentArea(data["content_area"]),
            gear_sets=list(data.get("gear_sets", [])),
            stat_priorities=list(data.get("stat_priorities", [])),
            gauntlets_main=data.get("gauntlets_main", ""),
            chestplate_main=data.get("chestplate_main", ""),
            boots_main=data.get("boots_main", ""),
            mastery_tree=MasteryTree(data["mastery_tree"]),
            notes=data.get("notes", ""),
            skill_booking_order=list(order) if order is not None else None,
        )
