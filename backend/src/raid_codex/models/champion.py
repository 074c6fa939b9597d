"""Champion catalog models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Affinity(str, Enum):
    """Champion affinities."""

    MAGIC = "Magic"
    FORCE = "Force"
    SPIRIT = "Spirit"
    VOID = "Void"


class Rarity(str, Enum):
    """Champion rarities, weakest first."""

    COMMON = "Common"
    UNCOMMON = "Uncommon"
    RARE = "Rare"
    EPIC = "Epic"
    LEGENDARY = "Legendary"
    MYTHICAL = "Mythical"


class Role(str, Enum):
    """Champion roles (the stat a champion scales from)."""

    ATTACK = "Attack"
    DEFENSE = "Defense"
    HP = "HP"
    SUPPORT = "Support"


RARITY_ORDER = [r.value for r in Rarity]


def rarity_rank(rarity: str) -> int:
    """Position of a rarity in RARITY_ORDER, -1 if unknown."""
    try:
        return RARITY_ORDER.index(rarity)
    except ValueError:
        return -1


@dataclass
class ChampionStats:
    """Base stats at a given star level."""

    hp: float
    atk: float
    def_: float
    spd: float
    crit_rate: float  # percent
    crit_dmg: float  # percent
    res: float
    acc: float

    def to_dict(self) -> dict:
        return {
            "hp": self.hp,
            "atk": self.atk,
            "def": self.def_,
            "spd": self.spd,
            "crit_rate": self.crit_rate,
            "crit_dmg": self.crit_dmg,
            "res": self.res,
            "acc": self.acc,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ChampionStats":
        return cls(
            hp=data.get("hp", 0),
            atk=data.get("atk", 0),
            def_=data.get("def", 0),
            spd=data.get("spd", 0),
            crit_rate=data.get("crit_rate", 0),
            crit_dmg=data.get("crit_dmg", 0),
            res=data.get("res", 0),
            acc=data.get("acc", 0),
        )


@dataclass
class ChampionSkill:
    """A single skill; list position gives the A1..An order."""

    name: str
    description: str = ""
    cooldown: Optional[int] = None
    multiplier: Optional[str] = None
    effects: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        data: dict = {"name": self.name, "description": self.description}
        if self.cooldown is not None:
            data["cooldown"] = self.cooldown
        if self.multiplier is not None:
            data["multiplier"] = self.multiplier
        if self.effects:
            data["effects"] = list(self.effects)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ChampionSkill":
        return cls(
            name=data.get("name", ""),
            description=data.get("description", ""),
            cooldown=data.get("cooldown"),
            multiplier=data.get("multiplier"),
            effects=list(data.get("effects") or []),
        )


@dataclass
class ChampionRecord:
    """Canonical champion entry in the catalog."""

    id: str
    name: str
    slug: str
    faction: str
    affinity: str
    rarity: str
    role: str
    avatar_url: str = ""
    stats: dict[str, ChampionStats] = field(default_factory=dict)
    skills: list[ChampionSkill] = field(default_factory=list)
    # Sparse: a missing key means "unrated", never zero
    ratings: dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "faction": self.faction,
            "affinity": self.affinity,
            "rarity": self.rarity,
            "role": self.role,
            "avatar_url": self.avatar_url,
            "stats": {level: s.to_dict() for level, s in self.stats.items()},
            "skills": [s.to_dict() for s in self.skills],
            "ratings": {k: v for k, v in self.ratings.items() if v is not None},
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ChampionRecord":
        slug = data.get("slug") or data.get("id", "")
        return cls(
            id=data.get("id") or slug,
            name=data.get("name", ""),
            slug=slug,
            faction=data.get("faction", ""),
            affinity=data.get("affinity", ""),
            rarity=data.get("rarity", ""),
            role=data.get("role", ""),
            avatar_url=data.get("avatar_url") or "",
            stats={
                str(level): ChampionStats.from_dict(s)
                for level, s in (data.get("stats") or {}).items()
            },
            skills=[ChampionSkill.from_dict(s) for s in data.get("skills") or []],
            ratings={
                k: float(v)
                for k, v in (data.get("ratings") or {}).items()
                if v is not None
            },
        )
