"""Tests for similar-champion ranking."""
import pytest
from raid_codex.models.champion import ChampionRecord
from raid_codex.services.similarity_ranker import (
    AFFINITY_MATCH_BONUS,
    ROLE_MATCH_BONUS,
    SimilarityRanker,
    has_qualifying_ratings,
    shared_strengths,
    similarity_score,
)

TOP_RATINGS = {"clan_boss": 5.0, "hydra": 5.0, "arena_offense": 5.0}


def champ(slug, ratings, role="Attack", affinity="Magic", rarity="Legendary"):
    return ChampionRecord(
        id=slug, name=slug.title(), slug=slug, faction="Dark Elves",
        affinity=affinity, rarity=rarity, role=role, ratings=dict(ratings),
    )


class TestScore:
    def test_identical_ratings_same_role_reference_value(self):
        a = champ("a", {"clan_boss": 4.0, "hydra": 3.0}, affinity="Magic")
        b = champ("b", {"clan_boss": 4.0, "hydra": 3.0, "spider": 5.0}, affinity="Void")
        assert similarity_score(a, b) == pytest.approx(ROLE_MATCH_BONUS)
        assert similarity_score(a, b) == pytest.approx(1.25)

    def test_affinity_bonus(self):
        a = champ("a", {"clan_boss": 4.0})
        b = champ("b", {"clan_boss": 4.0})
        assert similarity_score(a, b) == pytest.approx(ROLE_MATCH_BONUS * AFFINITY_MATCH_BONUS)

    def test_weighted_closeness(self):
        a = champ("a", {"clan_boss": 5.0, "dungeons": 5.0}, role="Attack", affinity="Magic")
        b = champ("b", {"clan_boss": 0.0, "dungeons": 5.0}, role="Support", affinity="Void")
        # clan_boss weight 3 at closeness 0, dungeons weight 1 at closeness 1
        assert similarity_score(a, b) == pytest.approx(0.25)

    def test_no_shared_keys(self):
        a = champ("a", {"clan_boss": 4.0})
        b = champ("b", {"hydra": 4.0})
        assert similarity_score(a, b) == 0.0


def test_has_qualifying_ratings():
    assert has_qualifying_ratings(champ("a", {"hydra": 2.0}))
    assert not has_qualifying_ratings(champ("b", {"hydra": 1.5}))
    assert not has_qualifying_ratings(champ("c", {"overall": 5.0}))


def test_shared_strengths_labels():
    a = champ("a", {"clan_boss": 4.0, "phantom_grove": 3.5, "hydra": 5.0})
    b = champ("b", {"clan_boss": 3.5, "phantom_grove": 4.0, "hydra": 3.0})
    assert shared_strengths(a, b) == ["Clan Boss", "Phantom Shogun"]


class TestGetSimilarChampions:
    def test_excludes_target_and_ineligible(self):
        target = champ("target", TOP_RATINGS)
        catalog = [
            target,
            champ("close", TOP_RATINGS),
            champ("weak", {"clan_boss": 1.5}),
            champ("overall-only", {"overall": 5.0}),
            champ("far", {"clan_boss": 2.0}, role="Support", affinity="Void"),
        ]

        result = SimilarityRanker(catalog).get_similar_champions(target)
        slugs = [r.champion.slug for r in result]

        assert slugs == ["close", "far"]
        assert "target" not in slugs

    def test_ineligible_target_gets_nothing(self):
        target = champ("target", {"overall": 5.0})
        catalog = [target, champ("other", TOP_RATINGS)]
        assert SimilarityRanker(catalog).get_similar_champions(target) == []

    def test_ties_keep_catalog_order(self):
        target = champ("target", TOP_RATINGS)
        catalog = [target] + [champ(f"twin-{i}", TOP_RATINGS) for i in range(4)]
        result = SimilarityRanker(catalog).get_similar_champions(target, count=3)
        assert [r.champion.slug for r in result] == ["twin-0", "twin-1", "twin-2"]

    def test_deterministic(self):
        target = champ("target", TOP_RATINGS)
        catalog = [target] + [
            champ(f"c{i}", {"clan_boss": 5.0 - i * 0.25, "hydra": 3.0}, affinity="Force")
            for i in range(12)
        ]
        ranker = SimilarityRanker(catalog)
        first = [r.champion.slug for r in ranker.get_similar_champions(target)]
        second = [r.champion.slug for r in ranker.get_similar_champions(target)]
        assert first == second

    def test_diversified_by_affinity_and_rarity(self):
        target = champ("target", TOP_RATINGS)
        clones = [champ(f"clone-{i}", TOP_RATINGS) for i in range(8)]
        catalog = [target] + clones + [
            champ("void-legend", TOP_RATINGS, affinity="Void"),
            champ("epic", {"clan_boss": 4.0, "hydra": 5.0, "arena_offense": 5.0}, rarity="Epic"),
            champ("rare", {"clan_boss": 3.0, "hydra": 3.0, "arena_offense": 3.0},
                  role="Support", rarity="Rare"),
        ]

        result = SimilarityRanker(catalog).get_similar_champions(target, count=6)

        assert [r.champion.slug for r in result] == [
            "clone-0", "clone-1", "clone-2", "void-legend", "epic", "rare",
        ]
        scores = [r.score for r in result]
        assert scores == sorted(scores, reverse=True)

    def test_small_pool_returned_whole(self):
        target = champ("target", TOP_RATINGS)
        catalog = [target, champ("a", TOP_RATINGS), champ("b", {"hydra": 4.0})]
        result = SimilarityRanker(catalog).get_similar_champions(target, count=6)
        assert [r.champion.slug for r in result] == ["a", "b"]
