"""Data models for Raid Codex."""

from raid_codex.models.champion import (
    RARITY_ORDER,
    Affinity,
    ChampionRecord,
    ChampionSkill,
    ChampionStats,
    Rarity,
    Role,
    rarity_rank,
)
from raid_codex.models.guide import ContentArea, GuideRecord, MasteryTree
from raid_codex.models.similarity import SimilarityResult
from raid_codex.models.clan_boss import (
    CB_DIFFICULTIES,
    CBSlot,
    ChampionDamage,
    ClanBossDifficulty,
    DamageEstimate,
    TurnEntry,
    get_difficulty,
)

__all__ = [
    "RARITY_ORDER",
    "Affinity",
    "ChampionRecord",
    "ChampionSkill",
    "ChampionStats",
    "Rarity",
    "Role",
    "rarity_rank",
    "ContentArea",
    "GuideRecord",
    "MasteryTree",
    "SimilarityResult",
    "CB_DIFFICULTIES",
    "CBSlot",
    "ChampionDamage",
    "ClanBossDifficulty",
    "DamageEstimate",
    "TurnEntry",
    "get_difficulty",
]
