"""Business logic services."""

from raid_codex.services.identity_reconciler import (
    NameMatcher,
    ReconcileResult,
    ReconcileSummary,
    normalize_name,
    patch_ratings,
    reconcile,
)
from raid_codex.services.guide_synthesizer import GuideSynthesizer
from raid_codex.services.similarity_ranker import SimilarityRanker
from raid_codex.services.clan_boss_simulator import (
    InvalidSpeedError,
    estimate_damage,
    simulate_turn_order,
)
from raid_codex.services.champion_sources import ChampionSourceClient, SourceFetchError

__all__ = [
    "NameMatcher",
    "ReconcileResult",
    "ReconcileSummary",
    "normalize_name",
    "patch_ratings",
    "reconcile",
    "GuideSynthesizer",
    "SimilarityRanker",
    "InvalidSpeedError",
    "estimate_damage",
    "simulate_turn_order",
    "ChampionSourceClient",
    "SourceFetchError",
]
