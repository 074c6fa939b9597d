"""Rule-based build guide generation.

Turns a champion's role, content ratings and skill count into a General
build plus one specialized build per content area the champion is rated
B-tier or better in. Everything is table driven and deterministic.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from raid_codex.models.champion import ChampionRecord, Role
from raid_codex.models.guide import ContentArea, GuideRecord, MasteryTree
from raid_codex.utils.role_normalizer import normalize_role_or_default

logger = logging.getLogger(__name__)

# B-tier or better qualifies a champion for a content-area build
QUALIFYING_RATING = 2.5

STARTER_SLUGS = frozenset({"kael", "athel", "elhain", "galek"})
STARTER_GEAR = ["Lifesteal", "Speed"]
STARTER_NOTE_PREFIX = "As a starter champion, Lifesteal gear is essential for early progression. "

ARENA_NUKER_THRESHOLD = 4.5
ARENA_NUKER_GEAR = ["Savage", "Cruel"]

# Canonical order of specialized guides after General
SPECIALIZED_AREAS = [
    ContentArea.CLAN_BOSS,
    ContentArea.ARENA,
    ContentArea.DUNGEONS,
    ContentArea.HYDRA,
    ContentArea.DOOM_TOWER,
    ContentArea.FACTION_WARS,
]

# Rating keys backing each area; an area with several keys uses the best one
AREA_RATING_KEYS: dict[ContentArea, tuple[str, ...]] = {
    ContentArea.CLAN_BOSS: ("clan_boss",),
    ContentArea.ARENA: ("arena_offense", "arena_defense"),
    ContentArea.DUNGEONS: ("dungeons",),
    ContentArea.HYDRA: ("hydra",),
    ContentArea.DOOM_TOWER: ("doom_tower",),
    ContentArea.FACTION_WARS: ("faction_wars",),
}


@dataclass(frozen=True)
class RoleTemplate:
    """Default build for a role."""

    gear_sets: tuple[str, str]
    stat_priorities: tuple[str, ...]
    gauntlets_main: str
    chestplate_main: str
    boots_main: str
    mastery_tree: MasteryTree


ROLE_TEMPLATES: dict[Role, RoleTemplate] = {
    Role.ATTACK: RoleTemplate(
        gear_sets=("Savage", "Cruel"),
        stat_priorities=("SPD", "ATK%", "C.RATE", "C.DMG"),
        gauntlets_main="C.RATE",
        chestplate_main="ATK%",
        boots_main="SPD",
        mastery_tree=MasteryTree.OFFENSE_SUPPORT,
    ),
    Role.DEFENSE: RoleTemplate(
        gear_sets=("Speed", "Resilience"),
        stat_priorities=("SPD", "DEF%", "HP%", "ACC"),
        gauntlets_main="DEF%",
        chestplate_main="DEF%",
        boots_main="SPD",
        mastery_tree=MasteryTree.DEFENSE_SUPPORT,
    ),
    Role.HP: RoleTemplate(
        gear_sets=("Immortal", "Speed"),
        stat_priorities=("SPD", "HP%", "DEF%", "ACC"),
        gauntlets_main="HP%",
        chestplate_main="HP%",
        boots_main="SPD",
        mastery_tree=MasteryTree.DEFENSE_SUPPORT,
    ),
    Role.SUPPORT: RoleTemplate(
        gear_sets=("Speed", "Perception"),
        stat_priorities=("SPD", "ACC", "HP%", "DEF%"),
        gauntlets_main="HP%",
        chestplate_main="ACC",
        boots_main="SPD",
        mastery_tree=MasteryTree.SUPPORT_DEFENSE,
    ),
}

# Gear sets per (area, role)
CONTENT_GEAR_SETS: dict[tuple[ContentArea, Role], tuple[str, str]] = {
    (ContentArea.CLAN_BOSS, Role.ATTACK): ("Lifesteal", "Speed"),
    (ContentArea.CLAN_BOSS, Role.DEFENSE): ("Lifesteal", "Speed"),
    (ContentArea.CLAN_BOSS, Role.HP): ("Lifesteal", "Immortal"),
    (ContentArea.CLAN_BOSS, Role.SUPPORT): ("Lifesteal", "Perception"),
    (ContentArea.ARENA, Role.ATTACK): ("Savage", "Cruel"),
    (ContentArea.ARENA, Role.DEFENSE): ("Stone Skin", "Resilience"),
    (ContentArea.ARENA, Role.HP): ("Swift Parry", "Immortal"),
    (ContentArea.ARENA, Role.SUPPORT): ("Speed", "Perception"),
    (ContentArea.DUNGEONS, Role.ATTACK): ("Savage", "Speed"),
    (ContentArea.DUNGEONS, Role.DEFENSE): ("Speed", "Accuracy"),
    (ContentArea.DUNGEONS, Role.HP): ("Regeneration", "Immortal"),
    (ContentArea.DUNGEONS, Role.SUPPORT): ("Speed", "Perception"),
    (ContentArea.HYDRA, Role.ATTACK): ("Relentless", "Speed"),
    (ContentArea.HYDRA, Role.DEFENSE): ("Relentless", "Perception"),
    (ContentArea.HYDRA, Role.HP): ("Regeneration", "Perception"),
    (ContentArea.HYDRA, Role.SUPPORT): ("Relentless", "Perception"),
    (ContentArea.DOOM_TOWER, Role.ATTACK): ("Savage", "Perception"),
    (ContentArea.DOOM_TOWER, Role.DEFENSE): ("Speed", "Perception"),
    (ContentArea.DOOM_TOWER, Role.HP): ("Regeneration", "Perception"),
    (ContentArea.DOOM_TOWER, Role.SUPPORT): ("Speed", "Perception"),
    (ContentArea.FACTION_WARS, Role.ATTACK): ("Lifesteal", "Speed"),
    (ContentArea.FACTION_WARS, Role.DEFENSE): ("Lifesteal", "Speed"),
    (ContentArea.FACTION_WARS, Role.HP): ("Lifesteal", "Immortal"),
    (ContentArea.FACTION_WARS, Role.SUPPORT): ("Speed", "Perception"),
}

CONTENT_STAT_FOCUS: dict[ContentArea, tuple[str, ...]] = {
    ContentArea.CLAN_BOSS: ("SPD", "DEF%", "HP%", "ACC"),
    ContentArea.ARENA: ("SPD", "ATK%", "C.RATE", "C.DMG"),
    ContentArea.DUNGEONS: ("SPD", "ACC", "HP%", "C.RATE"),
    ContentArea.HYDRA: ("SPD", "ACC", "HP%", "DEF%"),
    ContentArea.DOOM_TOWER: ("SPD", "ACC", "HP%", "DEF%"),
    ContentArea.FACTION_WARS: ("SPD", "HP%", "ACC", "DEF%"),
}

# (gauntlets, chestplate) exceptions; other combinations keep the role template
MAIN_STAT_OVERRIDES: dict[tuple[ContentArea, Role], tuple[str, str]] = {
    (ContentArea.CLAN_BOSS, Role.ATTACK): ("DEF%", "DEF%"),
    (ContentArea.CLAN_BOSS, Role.DEFENSE): ("HP%", "DEF%"),
    (ContentArea.CLAN_BOSS, Role.HP): ("HP%", "DEF%"),
    (ContentArea.CLAN_BOSS, Role.SUPPORT): ("HP%", "DEF%"),
    (ContentArea.ARENA, Role.ATTACK): ("C.RATE", "ATK%"),
    (ContentArea.HYDRA, Role.ATTACK): ("C.RATE", "ACC"),
    (ContentArea.HYDRA, Role.DEFENSE): ("HP%", "ACC"),
    (ContentArea.HYDRA, Role.HP): ("HP%", "ACC"),
    (ContentArea.HYDRA, Role.SUPPORT): ("HP%", "ACC"),
}

MASTERY_OVERRIDES: dict[tuple[ContentArea, Role], MasteryTree] = {
    (ContentArea.CLAN_BOSS, Role.ATTACK): MasteryTree.OFFENSE_DEFENSE,
    (ContentArea.ARENA, Role.ATTACK): MasteryTree.OFFENSE_SUPPORT,
}

# Specialized builds always run speed boots
SPECIALIZED_BOOTS = "SPD"

CONTENT_NOTE_SUFFIX: dict[ContentArea, str] = {
    ContentArea.CLAN_BOSS: "Speed-tune to your Clan Boss team composition. Lifesteal ensures survivability over long fights.",
    ContentArea.ARENA: "Speed is king in Arena: go first or build tanky enough to survive the opener.",
    ContentArea.DUNGEONS: "Balance speed with survivability for consistent dungeon clears.",
    ContentArea.HYDRA: "Accuracy is critical for landing debuffs on Hydra heads. Build tanky to survive head slams.",
    ContentArea.DOOM_TOWER: "Doom Tower bosses require specific mechanics, so adapt gear to the floor and rotation.",
    ContentArea.FACTION_WARS: "Faction Wars limits your roster to one faction, so survivability and self-sustain are key.",
}

ROLE_DESCRIPTIONS: dict[Role, str] = {
    Role.ATTACK: "{name} is a {tier} damage dealer who excels at dealing burst or sustained damage.",
    Role.DEFENSE: "{name} is a {tier} defensive champion who provides tankiness and control for the team.",
    Role.HP: "{name} is a {tier} HP-based champion who brings durability and sustain to the roster.",
    Role.SUPPORT: "{name} is a {tier} support champion who provides buffs, debuffs, or healing to the team.",
}

ROLE_ADVICE: dict[Role, str] = {
    Role.ATTACK: (
        " Prioritize critical rate to 100%, then stack critical damage and attack for maximum output."
        " Speed boots ensure consistent turn cycling."
    ),
    Role.DEFENSE: (
        " Build with high defense and HP substats for survivability."
        " Accuracy is important if the kit includes debuffs or crowd control."
    ),
    Role.HP: (
        " Stack HP% and defense substats for maximum survivability."
        " Speed keeps the champion cycling abilities frequently."
    ),
    Role.SUPPORT: (
        " Speed and accuracy are the top priorities to ensure debuffs land and abilities cycle quickly."
        " Build tanky enough to survive."
    ),
}

ROLE_VERBS: dict[Role, str] = {
    Role.ATTACK: "deals heavy damage in",
    Role.DEFENSE: "provides defensive utility in",
    Role.HP: "offers strong survivability in",
    Role.SUPPORT: "enables the team in",
}


def resolve_role(role: Optional[str]) -> Role:
    """Canonical role for rule lookups; unknown roles use the Attack template."""
    return Role(normalize_role_or_default(role, Role.ATTACK.value))


def area_rating(ratings: dict[str, float], area: ContentArea) -> Optional[float]:
    """Best rating among the keys backing `area`, or None when unrated."""
    values = [ratings[key] for key in AREA_RATING_KEYS.get(area, ()) if ratings.get(key) is not None]
    return max(values) if values else None


def qualifying_content_areas(ratings: dict[str, float]) -> list[ContentArea]:
    """Content areas a champion is rated B-tier or better in, canonical order."""
    qualified = []
    for area in SPECIALIZED_AREAS:
        rating = area_rating(ratings, area)
        if rating is not None and rating >= QUALIFYING_RATING:
            qualified.append(area)
    return qualified


def skill_booking_order(skill_count: int) -> Optional[list[int]]:
    """Book the last skill first, then the second-to-last.

    Returns None when there is nothing worth booking (one skill or none).
    """
    if skill_count >= 3:
        return [skill_count - 1, skill_count - 2]
    if skill_count == 2:
        return [1]
    return None


def _tier_word(overall: float) -> str:
    if overall >= 4.5:
        return "top-tier"
    if overall >= 4:
        return "strong"
    if overall >= 3:
        return "solid"
    return "niche"


class GuideSynthesizer:
    """Generates build guides from the rule tables above."""

    def general_note(self, name: str, role: Role, overall: float) -> str:
        note = ROLE_DESCRIPTIONS[role].format(name=name, tier=_tier_word(overall))
        return note + ROLE_ADVICE[role]

    def content_note(self, name: str, role: Role, area: ContentArea) -> str:
        return f"{name} {ROLE_VERBS[role]} {area.value}. {CONTENT_NOTE_SUFFIX[area]}"

    def build_general(
        self,
        name: str,
        slug: str,
        role: Role,
        ratings: dict[str, float],
        booking: Optional[list[int]],
    ) -> GuideRecord:
        template = ROLE_TEMPLATES[role]
        guide = GuideRecord(
            content_area=ContentArea.GENERAL,
            gear_sets=list(template.gear_sets),
            stat_priorities=list(template.stat_priorities),
            gauntlets_main=template.gauntlets_main,
            chestplate_main=template.chestplate_main,
            boots_main=template.boots_main,
            mastery_tree=template.mastery_tree,
            notes=self.general_note(name, role, ratings.get("overall") or 0),
            skill_booking_order=list(booking) if booking else None,
        )

        # Special cases, applied in order
        if slug in STARTER_SLUGS:
            guide.gear_sets = list(STARTER_GEAR)
            guide.notes = STARTER_NOTE_PREFIX + guide.notes
        if role == Role.ATTACK and (ratings.get("arena_offense") or 0) >= ARENA_NUKER_THRESHOLD:
            guide.gear_sets = list(ARENA_NUKER_GEAR)

        return guide

    def build_specialized(
        self,
        name: str,
        role: Role,
        area: ContentArea,
        booking: Optional[list[int]],
    ) -> GuideRecord:
        template = ROLE_TEMPLATES[role]
        gauntlets, chestplate = MAIN_STAT_OVERRIDES.get(
            (area, role), (template.gauntlets_main, template.chestplate_main)
        )
        return GuideRecord(
            content_area=area,
            gear_sets=list(CONTENT_GEAR_SETS[(area, role)]),
            stat_priorities=list(CONTENT_STAT_FOCUS[area]),
            gauntlets_main=gauntlets,
            chestplate_main=chestplate,
            boots_main=SPECIALIZED_BOOTS,
            mastery_tree=MASTERY_OVERRIDES.get((area, role), template.mastery_tree),
            notes=self.content_note(name, role, area),
            skill_booking_order=list(booking) if booking else None,
        )

    def synthesize(
        self,
        name: str,
        slug: str,
        role: Optional[str],
        ratings: dict[str, float],
        skill_count: int,
    ) -> list[GuideRecord]:
        """Generate the General guide plus deduplicated specialized guides."""
        canonical_role = resolve_role(role)
        booking = skill_booking_order(skill_count)

        general = self.build_general(name, slug, canonical_role, ratings, booking)
        guides = [general]
        general_fingerprint = general.fingerprint()

        for area in qualifying_content_areas(ratings):
            guide = self.build_specialized(name, canonical_role, area, booking)
            if guide.fingerprint() == general_fingerprint:
                logger.debug(f"{slug}: {area.value} build matches General, dropped")
                continue
            guides.append(guide)

        return guides

    def generate_for_champion(self, champion: ChampionRecord) -> list[GuideRecord]:
        return self.synthesize(
            name=champion.name,
            slug=champion.slug,
            role=champion.role,
            ratings=champion.ratings,
            skill_count=len(champion.skills),
        )

    def generate_all(self, champions: list[ChampionRecord]) -> dict[str, list[GuideRecord]]:
        """Guides for every champion that has a positive overall rating."""
        guides: dict[str, list[GuideRecord]] = {}
        for champion in champions:
            if (champion.ratings.get("overall") or 0) <= 0:
                continue
            guides[champion.slug] = self.generate_for_champion(champion)

        specialized = sum(1 for g in guides.values() if len(g) > 1)
        logger.info(
            f"Generated {sum(len(g) for g in guides.values())} guides for {len(guides)} champions "
            f"({specialized} with specialized builds)"
        )
        return guides
