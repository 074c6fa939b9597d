"""Tests for the JSON-backed catalog repository."""
import json

import pytest
from raid_codex.models.champion import ChampionRecord, ChampionStats
from raid_codex.models.guide import ContentArea
from raid_codex.repositories.catalog_repository import CatalogRepository
from raid_codex.services.guide_synthesizer import GuideSynthesizer


def champion_dict(slug, name, **overrides):
    data = {
        "id": slug,
        "name": name,
        "slug": slug,
        "faction": "Dark Elves",
        "affinity": "Magic",
        "rarity": "Rare",
        "role": "Attack",
        "avatar_url": f"/champions/{slug}.png",
        "stats": {"6": {"hp": 13710, "atk": 1200, "def": 914, "spd": 103,
                        "crit_rate": 15, "crit_dmg": 50, "res": 30, "acc": 0}},
        "skills": [{"name": "Dark Bolt", "description": "Attacks 1 enemy."}],
        "ratings": {"overall": 4.0, "clan_boss": 4.0},
    }
    data.update(overrides)
    return data


@pytest.fixture
def data_dir(tmp_path):
    champions = [
        champion_dict("kael", "Kael"),
        champion_dict("athel", "Athel", faction="High Elves", ratings={"overall": 3.0}),
        champion_dict("siphi", "Siphi the Lost Bride", faction="Undead Hordes",
                      rarity="Legendary", role="Support", ratings={"overall": 5.0, "hydra": 2.0}),
        champion_dict("coldheart", "Coldheart", rarity="Epic", affinity="Void"),
    ]
    (tmp_path / "champions.json").write_text(json.dumps(champions))

    guides = {
        "kael": [
            {"content_area": "General", "gear_sets": ["Lifesteal", "Speed"],
             "stat_priorities": ["SPD", "ATK%"], "gauntlets_main": "C.RATE",
             "chestplate_main": "ATK%", "boots_main": "SPD",
             "mastery_tree": "Offense + Support", "notes": "", "skill_booking_order": [2, 1]},
            {"content_area": "Clan Boss", "gear_sets": ["Lifesteal", "Speed"],
             "stat_priorities": ["SPD", "DEF%"], "gauntlets_main": "DEF%",
             "chestplate_main": "DEF%", "boots_main": "SPD",
             "mastery_tree": "Offense + Defense", "notes": ""},
            {"content_area": "Hydra", "gear_sets": ["Relentless", "Speed"],
             "stat_priorities": ["SPD", "ACC"], "gauntlets_main": "C.RATE",
             "chestplate_main": "ACC", "boots_main": "SPD",
             "mastery_tree": "Offense + Support", "notes": ""},
        ]
    }
    (tmp_path / "guides.json").write_text(json.dumps(guides))
    return tmp_path


@pytest.fixture
def repo(data_dir):
    return CatalogRepository(data_dir)


def test_get_all_champions(repo):
    champions = repo.get_all_champions()
    assert [c.slug for c in champions] == ["kael", "athel", "siphi", "coldheart"]
    assert champions[0].stats["6"].def_ == 914


def test_get_champion_by_slug(repo):
    assert repo.get_champion_by_slug("siphi").name == "Siphi the Lost Bride"
    assert repo.get_champion_by_slug("nobody") is None


def test_unique_values(repo):
    assert repo.get_unique_factions() == ["Dark Elves", "High Elves", "Undead Hordes"]
    assert repo.get_unique_affinities() == ["Magic", "Void"]
    assert repo.get_unique_rarities() == ["Rare", "Epic", "Legendary"]
    assert repo.get_unique_roles() == ["Attack", "Support"]


def test_get_guides_for_champion(repo):
    guides = repo.get_guides_for_champion("kael")
    assert [g.content_area for g in guides] == [
        ContentArea.GENERAL, ContentArea.CLAN_BOSS, ContentArea.HYDRA,
    ]
    assert guides[0].skill_booking_order == [2, 1]
    assert guides[1].skill_booking_order is None
    assert repo.get_guides_for_champion("athel") == []


def test_filtered_guides_drop_non_qualifying_areas(repo):
    kael = repo.get_champion_by_slug("kael")
    guides = repo.get_filtered_guides_for_champion("kael", kael.ratings)
    assert [g.content_area for g in guides] == [ContentArea.GENERAL, ContentArea.CLAN_BOSS]

    guides = repo.get_filtered_guides_for_champion("kael", {})
    assert [g.content_area for g in guides] == [ContentArea.GENERAL]


def test_guide_counts(repo):
    assert repo.get_all_guided_champion_slugs() == ["kael"]
    assert repo.get_guide_count() == 3


def test_missing_files_give_empty_catalog(tmp_path):
    repo = CatalogRepository(tmp_path / "empty")
    assert repo.get_all_champions() == []
    assert repo.get_champion_by_slug("kael") is None
    assert repo.get_guides_for_champion("kael") == []


def test_save_and_reload(tmp_path):
    repo = CatalogRepository(tmp_path)
    kael = ChampionRecord(
        id="kael", name="Kael", slug="kael", faction="Dark Elves", affinity="Magic",
        rarity="Rare", role="Attack",
        stats={"6": ChampionStats(hp=13710, atk=1200, def_=914, spd=103,
                                  crit_rate=15, crit_dmg=50, res=30, acc=0)},
        ratings={"overall": 4.0, "clan_boss": 4.0},
    )

    repo.save_champions([kael])
    repo.save_guides(GuideSynthesizer().generate_all([kael]))

    raw = json.loads((tmp_path / "champions.json").read_text())
    assert raw[0]["stats"]["6"]["def"] == 914
    assert "def_" not in raw[0]["stats"]["6"]

    reloaded = CatalogRepository(tmp_path)
    assert reloaded.get_champion_by_slug("kael") == kael
    assert reloaded.get_guide_count() == 2


def test_save_clears_cache(repo):
    assert len(repo.get_all_champions()) == 4
    repo.save_champions(repo.get_all_champions()[:1])
    assert len(repo.get_all_champions()) == 1
