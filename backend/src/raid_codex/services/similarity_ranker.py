"""Similar-champion search over content ratings.

Similarity is a weighted closeness of the content ratings two champions share,
boosted for matching role and affinity. The top of the ranking is then
diversified so the result is not one rarity or affinity cluster.
"""

from typing import Iterable, Optional

from raid_codex.models.champion import ChampionRecord, Rarity, rarity_rank
from raid_codex.models.similarity import SimilarityResult

# Content importance: higher = more identity-defining
RATING_WEIGHTS: dict[str, int] = {
    "clan_boss": 3,
    "hydra": 3,
    "arena_offense": 3,
    "spider": 2,
    "fire_knight": 2,
    "iron_twins": 2,
    "doom_tower": 2,
    "dungeons": 1,
    "dragon": 1,
    "ice_golem": 1,
    "sand_devil": 1,
    "phantom_grove": 1,
    "chimera": 1,
    "faction_wars": 1,
}

RATING_LABELS: dict[str, str] = {
    "clan_boss": "Clan Boss",
    "hydra": "Hydra",
    "chimera": "Chimera",
    "arena_offense": "Arena",
    "spider": "Spider",
    "dragon": "Dragon",
    "fire_knight": "Fire Knight",
    "ice_golem": "Ice Golem",
    "iron_twins": "Iron Twins",
    "sand_devil": "Sand Devil",
    "phantom_grove": "Phantom Shogun",
    "doom_tower": "Doom Tower",
    "faction_wars": "Faction Wars",
    "dungeons": "Dungeons",
}

MAX_RATING = 5.0
ROLE_MATCH_BONUS = 1.25
AFFINITY_MATCH_BONUS = 1.03
MIN_ELIGIBLE_RATING = 2.0
SHARED_STRENGTH_RATING = 3.5
DEFAULT_RESULT_COUNT = 6
CANDIDATE_POOL_SIZE = 20
TOP_MATCHES_KEPT = 2


def has_qualifying_ratings(champion: ChampionRecord) -> bool:
    """True if any weighted content rating is at least 2."""
    return any(
        (champion.ratings.get(key) or 0) >= MIN_ELIGIBLE_RATING
        for key in RATING_WEIGHTS
    )


def similarity_score(a: ChampionRecord, b: ChampionRecord) -> float:
    """Weighted rating closeness of two champions, with role/affinity bonuses.

    Only rating keys both champions have count. Returns 0.0 when they share
    none, i.e. they are incomparable.
    """
    weighted_sum = 0.0
    total_weight = 0
    for key, weight in RATING_WEIGHTS.items():
        rating_a = a.ratings.get(key)
        rating_b = b.ratings.get(key)
        if rating_a is None or rating_b is None:
            continue
        closeness = (MAX_RATING - abs(rating_a - rating_b)) / MAX_RATING
        weighted_sum += closeness * weight
        total_weight += weight

    if total_weight == 0:
        return 0.0

    score = weighted_sum / total_weight
    if a.role == b.role:
        score *= ROLE_MATCH_BONUS
    if a.affinity == b.affinity:
        score *= AFFINITY_MATCH_BONUS
    return score


def shared_strengths(a: ChampionRecord, b: ChampionRecord) -> list[str]:
    """Labels of content areas where both champions rate 3.5 or higher."""
    strengths = []
    for key in RATING_WEIGHTS:
        rating_a = a.ratings.get(key)
        rating_b = b.ratings.get(key)
        if rating_a is None or rating_b is None:
            continue
        if rating_a >= SHARED_STRENGTH_RATING and rating_b >= SHARED_STRENGTH_RATING:
            strengths.append(RATING_LABELS.get(key, key))
    return strengths


class SimilarityRanker:
    """Ranks catalog champions by similarity to a target."""

    def __init__(self, champions: Iterable[ChampionRecord]):
        self.champions = list(champions)

    def score_candidates(self, target: ChampionRecord) -> list[SimilarityResult]:
        """All eligible champions with a positive score, best first.

        The sort is stable, so equal scores keep catalog order.
        """
        scored = []
        for champion in self.champions:
            if champion.id == target.id:
                continue
            if not has_qualifying_ratings(champion):
                continue
            score = similarity_score(target, champion)
            if score > 0:
                scored.append(
                    SimilarityResult(
                        champion=champion,
                        score=score,
                        shared_strengths=shared_strengths(target, champion),
                    )
                )
        scored.sort(key=lambda r: r.score, reverse=True)
        return scored

    def get_similar_champions(
        self, target: ChampionRecord, count: int = DEFAULT_RESULT_COUNT
    ) -> list[SimilarityResult]:
        """Up to `count` similar champions, diversified by affinity and rarity.

        Selection fills slots greedily in priority order:
        1. the two best matches,
        2. the best match of an affinity not yet represented,
        3. a budget alternative (lower rarity than the target) if none is in yet,
        4. the best Rare when the target is above Rare and no Rare is in yet,
        5. the rest of the pool by score.
        """
        if count <= 0 or not has_qualifying_ratings(target):
            return []

        scored = self.score_candidates(target)
        pool = scored[:CANDIDATE_POOL_SIZE]
        if len(pool) <= count:
            return pool

        target_rank = rarity_rank(target.rarity)
        rare_rank = rarity_rank(Rarity.RARE.value)
        result: list[SimilarityResult] = []
        selected: set[str] = set()

        def add(candidate: Optional[SimilarityResult]) -> None:
            if candidate is None or len(result) >= count:
                return
            if candidate.champion.id in selected:
                return
            result.append(candidate)
            selected.add(candidate.champion.id)

        for candidate in pool[:TOP_MATCHES_KEPT]:
            add(candidate)

        represented = {r.champion.affinity for r in result}
        add(next((r for r in pool if r.champion.affinity not in represented), None))

        def is_lower_rarity(r: SimilarityResult) -> bool:
            return 0 <= rarity_rank(r.champion.rarity) < target_rank

        if not any(is_lower_rarity(r) for r in result):
            # Prefer the pool, but fall back to the full list so one is always offered
            budget = next((r for r in pool if is_lower_rarity(r)), None)
            if budget is None:
                budget = next((r for r in scored if is_lower_rarity(r)), None)
            add(budget)

        if target_rank > rare_rank and not any(r.champion.rarity == Rarity.RARE.value for r in result):
            add(next((r for r in scored if r.champion.rarity == Rarity.RARE.value), None))

        for candidate in pool:
            if len(result) >= count:
                break
            add(candidate)

        # Score descending, ties in catalog order
        ranking = {r.champion.id: i for i, r in enumerate(scored)}
        result.sort(key=lambda r: ranking[r.champion.id])
        return result[:count]
