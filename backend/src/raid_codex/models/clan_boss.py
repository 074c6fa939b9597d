"""Models for the Clan Boss speed-tune and damage simulator."""

from dataclasses import dataclass, field
from typing import Literal, Optional


@dataclass(frozen=True)
class ClanBossDifficulty:
    """A Clan Boss difficulty tier."""

    name: str
    speed: int
    hp: int


CB_DIFFICULTIES = [
    ClanBossDifficulty(name="Normal", speed=130, hp=7_500_000),
    ClanBossDifficulty(name="Hard", speed=150, hp=18_000_000),
    ClanBossDifficulty(name="Brutal", speed=160, hp=35_000_000),
    ClanBossDifficulty(name="Nightmare", speed=170, hp=50_000_000),
    ClanBossDifficulty(name="Ultra-Nightmare", speed=190, hp=75_000_000),
]


def get_difficulty(name: str) -> Optional[ClanBossDifficulty]:
    """Look up a difficulty by name (case-insensitive)."""
    wanted = name.strip().lower()
    for difficulty in CB_DIFFICULTIES:
        if difficulty.name.lower() == wanted:
            return difficulty
    return None


@dataclass
class CBSlot:
    """One player champion in the Clan Boss team."""

    name: str
    speed: int
    role: Literal["DPS", "Support", "Debuffer", "Tank"] = "DPS"
    damage_per_hit: float = 20000
    hits_per_turn: int = 1
    poison_chance: float = 0  # 0-100
    poison_count: int = 0  # stacks placed per proc
    champion_id: Optional[str] = None


@dataclass
class TurnEntry:
    """A single action in the simulated turn sequence."""

    turn: int
    actor: str
    actor_index: int  # -1 for the boss
    is_boss: bool


@dataclass
class ChampionDamage:
    """Damage attributed to one slot."""

    name: str
    direct_damage: float = 0.0
    poison_damage: float = 0.0

    @property
    def total(self) -> float:
        return self.direct_damage + self.poison_damage


@dataclass
class DamageEstimate:
    """Result of a damage estimation run."""

    total_damage: float
    boss_turns: int
    estimated_keys: int
    per_champion: list[ChampionDamage] = field(default_factory=list)
