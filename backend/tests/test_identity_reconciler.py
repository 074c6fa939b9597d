"""Tests for merging the stats and ratings sources."""
import pytest
from raid_codex.models.champion import ChampionRecord
from raid_codex.services.identity_reconciler import (
    NameMatcher,
    normalize_affinity,
    normalize_name,
    patch_ratings,
    ratings_from_source_b,
    reconcile,
    skills_from_source_b,
)


def stats_record(name: str, **overrides) -> dict:
    record = {
        "name": f'<a href="https://www.inteleria.com/champion-list/{name.lower()}/">{name}</a>',
        "image": f'<img src="https://cdn.example.com/{name.lower()}.png">',
        "faction": "Dark Elves",
        "affinity": "Magic",
        "rarity": "Rare",
        "type": "Attack",
        "HP": 13710,
        "ATK": 1200,
        "DEF": 914,
        "SPD": 103,
        "CRATE": 0.15,
        "CDMG": 0.5,
        "RES": 30,
        "ACC": 0,
    }
    record.update(overrides)
    return record


class TestNormalizeName:
    def test_diacritics_quotes_and_case(self):
        assert normalize_name("Ûrsula Queen’s") == normalize_name("ursula queens")

    def test_punctuation_removed(self):
        assert normalize_name("Ma'Shalled") == "mashalled"
        assert normalize_name("Ûrsula-Queen's") == "ursulaqueens"

    def test_whitespace_collapsed(self):
        assert normalize_name("  Lady   Mikage ") == "lady mikage"


class TestNameMatcher:
    def test_exact_then_normalized(self):
        matcher = NameMatcher([{"champion": "Ma’Shalled", "hydra": 4}])
        assert matcher.match("Ma’Shalled")["hydra"] == 4
        assert matcher.match("mashalled")["hydra"] == 4
        assert matcher.match("Kael") is None

    def test_duplicate_keys_first_wins(self):
        matcher = NameMatcher([
            {"champion": "Kael", "hydra": 1},
            {"champion": "Kael!", "hydra": 5},
        ])
        assert matcher.match("kael")["hydra"] == 1
        assert matcher.duplicate_keys == ["kael"]
        assert len(matcher) == 1

    def test_unnamed_records_ignored(self):
        matcher = NameMatcher([{"champion": ""}, {"hydra": 3}])
        assert len(matcher) == 0


def test_ratings_keep_only_positive_numbers():
    raw = {"overall_user": 4.5, "clan_boss": 0, "hydra": "n/a", "arena_rating": 3, "spider": True}
    assert ratings_from_source_b(raw) == {"overall": 4.5, "arena_offense": 3.0}


def test_skills_from_source_b():
    skills = skills_from_source_b([
        {"name": "Dark Bolt", "description": "<b>Attacks</b> 1 enemy.", "cooldown": 0},
        {"name": "Disintegrate", "description": "Attacks all enemies.", "cooldown": "4"},
        {"description": "no name"},
    ])
    assert [s.name for s in skills] == ["Dark Bolt", "Disintegrate"]
    assert skills[0].description == "Attacks 1 enemy."
    assert skills[0].cooldown is None
    assert skills[1].cooldown == 4


def test_skills_from_source_b_tolerates_malformed_entries():
    skills = skills_from_source_b([
        {"name": "Bolt", "description": 5},
        {"name": 7, "description": "numeric name"},
        "not a skill",
        {"name": "Swift Strike", "description": None},
    ])
    assert [s.name for s in skills] == ["Bolt", "Swift Strike"]
    assert [s.description for s in skills] == ["", ""]


@pytest.mark.parametrize(
    "raw, expected",
    [("magic", "Magic"), (" VOID ", "Void"), ("Force", "Force"), ("", ""), (None, ""), ("Chaos", "Chaos")],
)
def test_normalize_affinity(raw, expected):
    assert normalize_affinity(raw) == expected


class TestReconcile:
    def test_every_name_matched(self):
        source_a = [stats_record("Kael"), stats_record("Athel"), stats_record("Galek")]
        source_b = [{"champion": "Galek"}, {"champion": "Kael"}, {"champion": "Athel"}]

        result = reconcile(source_a, source_b)

        assert len(result.champions) == len(source_a)
        assert result.summary.matched == 3
        assert result.summary.unmatched_a == 0
        assert result.summary.source_b_only == 0

    def test_kael_end_to_end(self):
        result = reconcile(
            [stats_record("Kael")],
            [{"champion": "Kael", "clan_boss": 4, "arena_rating": 3}],
        )

        kael = result.champions[0]
        assert kael.slug == "kael"
        assert kael.ratings["clan_boss"] == 4
        assert kael.ratings["arena_offense"] == 3
        assert kael.stats["6"].atk == 1200
        assert kael.stats["6"].spd == 103
        assert kael.stats["6"].crit_rate == 15
        assert kael.stats["6"].crit_dmg == 50
        assert kael.avatar_url == "https://cdn.example.com/kael.png"
        assert result.source_b_by_slug["kael"]["clan_boss"] == 4

    def test_fuzzy_name_match(self):
        result = reconcile(
            [stats_record("Ûrsula Queen’s")],
            [{"champion": "Ursula Queens", "hydra": 3.5}],
        )
        assert result.summary.matched == 1
        assert result.champions[0].ratings == {"hydra": 3.5}

    def test_role_is_normalized(self):
        result = reconcile([stats_record("Kael", type="ATK")], [])
        assert result.champions[0].role == "Attack"

    def test_overall_falls_back_to_stats_source_rating(self):
        result = reconcile([stats_record("Kael", rating_avg="4.2")], [])
        assert result.champions[0].ratings == {"overall": 4.2}

    def test_slug_collision_gets_affinity_suffix(self):
        result = reconcile(
            [stats_record("Ninja", affinity="Magic"), stats_record("Ninja", affinity="Void")],
            [],
        )
        assert [c.slug for c in result.champions] == ["ninja", "ninja-void"]

    def test_slug_collision_without_affinity_gets_number(self):
        result = reconcile(
            [stats_record("Ninja", affinity=""), stats_record("Ninja", affinity="")],
            [],
        )
        assert [c.slug for c in result.champions] == ["ninja", "ninja-2"]

    def test_affinity_is_canonicalized(self):
        result = reconcile(
            [stats_record("Kael", affinity="magic")],
            [{"champion": "Athel", "affinity_index": "force"}],
        )
        assert [c.affinity for c in result.champions] == ["Magic", "Force"]

    def test_source_b_only_records_appended(self):
        result = reconcile(
            [stats_record("Kael")],
            [
                {"champion": "Kael", "clan_boss": 4},
                {
                    "champion": "Siphi the Lost Bride",
                    "faction_index": "undead-hordes",
                    "affinity_index": "Magic",
                    "rarity": "Legendary",
                    "role": "Support",
                    "clan_boss": 5,
                },
            ],
        )

        assert result.summary.source_b_only == 1
        siphi = result.champions[1]
        assert siphi.slug == "siphi-the-lost-bride"
        assert siphi.faction == "Undead Hordes"
        assert siphi.stats == {}
        assert siphi.ratings == {"clan_boss": 5.0}

    def test_source_b_slug_collision_skipped(self):
        result = reconcile(
            [stats_record("Kael")],
            [{"champion": "Kael"}, {"champion": "KAEL!"}],
        )
        assert len(result.champions) == 1
        assert result.summary.skipped_duplicates == 1

    def test_unnamed_records_skipped(self):
        result = reconcile([stats_record("Kael"), {"name": ""}], [{"champion": "  "}])
        assert len(result.champions) == 1
        assert result.summary.skipped_unnamed == 2


class TestPatchRatings:
    def test_replaces_ratings_and_keeps_overall(self):
        kael = ChampionRecord(
            id="kael", name="Kael", slug="kael", faction="Dark Elves",
            affinity="Magic", rarity="Rare", role="Attack",
            ratings={"overall": 4.0, "hydra": 2.0},
        )
        athel = ChampionRecord(
            id="athel", name="Athel", slug="athel", faction="High Elves",
            affinity="Magic", rarity="Rare", role="Attack",
            ratings={"overall": 3.0},
        )

        updated = patch_ratings(
            [kael, athel],
            [{"champion": "Kael", "clan_boss": 5, "hydra": 0, "spider": "n/a"}],
        )

        assert updated == 1
        assert kael.ratings == {"clan_boss": 5.0, "overall": 4.0}
        assert athel.ratings == {"overall": 3.0}

    def test_new_overall_wins(self):
        kael = ChampionRecord(
            id="kael", name="Kael", slug="kael", faction="", affinity="",
            rarity="", role="", ratings={"overall": 4.0},
        )
        patch_ratings([kael], [{"champion": "Kael", "overall_user": 4.5}])
        assert kael.ratings["overall"] == pytest.approx(4.5)
