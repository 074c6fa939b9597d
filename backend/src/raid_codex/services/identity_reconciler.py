"""Merge the stats source and the ratings source into one champion catalog.

The two sources format champion names inconsistently (curly quotes, accents,
stray punctuation), so records are matched by a normalized name key. The stats
source ("source A") supplies identity, classification, base stats and avatar;
the ratings source ("source B") supplies content ratings and, later, skills.
"""

import logging
import math
import re
import unicodedata
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from raid_codex.models.champion import Affinity, ChampionRecord, ChampionSkill, ChampionStats
from raid_codex.utils.html_text import (
    extract_image_from_html,
    extract_name_from_html,
    parse_cooldown,
    slugify,
    strip_html,
)
from raid_codex.utils.role_normalizer import normalize_role

logger = logging.getLogger(__name__)

_CURLY_QUOTES = re.compile("[‘’“”]")
_NON_ALNUM_SPACE = re.compile(r"[^a-z0-9 ]")
_WHITESPACE = re.compile(r"\s+")

# Ratings-source faction keys -> display names
HH_FACTION_MAP = {
    "banner-lords": "Banner Lords",
    "high-elves": "High Elves",
    "the-sacred-order": "The Sacred Order",
    "barbarians": "Barbarians",
    "ogryn-tribes": "Ogryn Tribes",
    "lizardmen": "Lizardmen",
    "skinwalkers": "Skinwalkers",
    "orcs": "Orcs",
    "demonspawn": "Demonspawn",
    "undead-hordes": "Undead Hordes",
    "dark-elves": "Dark Elves",
    "knight-revenant": "Knight Revenant",
    "dwarves": "Dwarves",
    "shadowkin": "Shadowkin",
    "sylvan-watchers": "Sylvan Watchers",
    "knights-of-magaava": "Knights of Magaava",
}

# Ratings-source field -> catalog rating key
HH_RATING_FIELDS = {
    "overall_user": "overall",
    "clan_boss": "clan_boss",
    "hydra": "hydra",
    "chimera": "chimera",
    "arena_rating": "arena_offense",
    "dungeon_overall": "dungeons",
    "spider": "spider",
    "dragon": "dragon",
    "fire_knight": "fire_knight",
    "ice_golem": "ice_golem",
    "iron_twins": "iron_twins",
    "sand_devil": "sand_devil",
    "phantom_grove": "phantom_grove",
    "doom_tower": "doom_tower",
    "fw_primary_rating": "faction_wars",
}


def normalize_name(name: str) -> str:
    """Reduce a champion name to its matching key.

    Lowercases, strips diacritics and curly quotes, drops anything that is not
    a letter, digit or space, and collapses whitespace. Two names refer to the
    same champion iff their keys are equal.

    Examples:
        >>> normalize_name("Ûrsula-Queen's")
        'ursulaqueens'
        >>> normalize_name("  Lady  Mikage ")
        'lady mikage'
    """
    decomposed = unicodedata.normalize("NFD", name.lower())
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    stripped = _CURLY_QUOTES.sub("", stripped)
    stripped = _NON_ALNUM_SPACE.sub("", stripped)
    return _WHITESPACE.sub(" ", stripped).strip()


def _positive_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value) if value > 0 else None


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def ratings_from_source_b(raw: dict) -> dict[str, float]:
    """Extract the positive numeric ratings from a ratings-source record."""
    ratings: dict[str, float] = {}
    for source_key, rating_key in HH_RATING_FIELDS.items():
        value = _positive_number(raw.get(source_key))
        if value is not None:
            ratings[rating_key] = value
    return ratings


def skills_from_source_b(raw_skills: Iterable[dict]) -> list[ChampionSkill]:
    """Convert ratings-source skill payloads to catalog skills."""
    skills = []
    for s in raw_skills:
        if not isinstance(s, dict):
            continue
        name = s.get("name")
        if not isinstance(name, str) or not name.strip():
            continue
        description = s.get("description")
        skills.append(
            ChampionSkill(
                name=name.strip(),
                description=strip_html(description) if isinstance(description, str) else "",
                cooldown=parse_cooldown(s.get("cooldown")),
            )
        )
    return skills


def normalize_affinity(value: Any) -> str:
    """Canonical affinity name (case-insensitive); unknown values pass through trimmed."""
    raw = str(value or "").strip()
    for affinity in Affinity:
        if affinity.value.lower() == raw.lower():
            return affinity.value
    return raw


class NameMatcher:
    """Looks up ratings-source records by champion name.

    Exact (case-insensitive) matches win over normalized matches. When two
    records share a key the first one seen is kept; the ratings source has
    been observed to list a few champions twice, so this is logged.
    """

    def __init__(self, records: Iterable[dict], name_field: str = "champion"):
        self._exact: dict[str, dict] = {}
        self._normalized: dict[str, dict] = {}
        self.duplicate_keys: list[str] = []

        for record in records:
            name = str(record.get(name_field) or "")
            if not name.strip():
                continue
            exact_key = name.strip().lower()
            self._exact.setdefault(exact_key, record)

            key = normalize_name(name)
            if key in self._normalized:
                self.duplicate_keys.append(key)
                logger.warning(f"Duplicate normalized name '{key}' in source; keeping first")
                continue
            self._normalized[key] = record

    def match(self, name: str) -> Optional[dict]:
        """Return the record for `name`, or None."""
        exact = self._exact.get(name.strip().lower())
        if exact is not None:
            return exact
        return self._normalized.get(normalize_name(name))

    def __len__(self) -> int:
        return len(self._normalized)


@dataclass
class ReconcileSummary:
    """Operational counts from a reconcile run."""

    source_a_count: int = 0
    source_b_count: int = 0
    matched: int = 0
    unmatched_a: int = 0
    source_b_only: int = 0
    skipped_duplicates: int = 0
    skipped_unnamed: int = 0

    @property
    def total(self) -> int:
        return self.matched + self.unmatched_a + self.source_b_only


@dataclass
class ReconcileResult:
    """Merged catalog plus the ratings-source record each champion matched."""

    champions: list[ChampionRecord]
    summary: ReconcileSummary
    # slug -> ratings-source record, used later for skill enrichment
    source_b_by_slug: dict[str, dict] = field(default_factory=dict)


def _unique_slug(name: str, affinity: str, seen: set[str]) -> str:
    slug = slugify(name)
    if slug in seen and affinity:
        slug = f"{slug}-{affinity.lower()}"
    base, counter = slug, 2
    while slug in seen:
        slug = f"{base}-{counter}"
        counter += 1
    return slug


def _stats_from_source_a(raw: dict) -> ChampionStats:
    return ChampionStats(
        hp=raw.get("HP") or 0,
        atk=raw.get("ATK") or 0,
        def_=raw.get("DEF") or 0,
        spd=raw.get("SPD") or 0,
        crit_rate=_round_half_up((raw.get("CRATE") or 0) * 100),
        crit_dmg=_round_half_up((raw.get("CDMG") or 0) * 100),
        res=raw.get("RES") or 0,
        acc=raw.get("ACC") or 0,
    )


def _fallback_overall(raw: dict) -> Optional[float]:
    try:
        value = float(raw.get("rating_avg") or 0)
    except (TypeError, ValueError):
        return None
    return value if value > 0 else None


def reconcile(source_a: list[dict], source_b: list[dict]) -> ReconcileResult:
    """Merge stats-source and ratings-source champion lists.

    Every named source-A record yields one champion (with ratings when a
    source-B record matches). Source-B records that no source-A record
    matched are appended as stats-less champions unless their slug is
    already taken.
    """
    matcher = NameMatcher(source_b)
    summary = ReconcileSummary(source_a_count=len(source_a), source_b_count=len(source_b))
    champions: list[ChampionRecord] = []
    source_b_by_slug: dict[str, dict] = {}
    seen_slugs: set[str] = set()
    matched_ids: set[int] = set()

    for raw in source_a:
        name = extract_name_from_html(str(raw.get("name") or ""))
        if not name:
            summary.skipped_unnamed += 1
            continue

        affinity = normalize_affinity(raw.get("affinity"))
        slug = _unique_slug(name, affinity, seen_slugs)
        seen_slugs.add(slug)

        match = matcher.match(name)
        ratings = ratings_from_source_b(match) if match is not None else {}
        if "overall" not in ratings:
            overall = _fallback_overall(raw)
            if overall is not None:
                ratings["overall"] = overall

        source_role = str(raw.get("type") or "")
        champions.append(
            ChampionRecord(
                id=slug,
                name=name,
                slug=slug,
                faction=str(raw.get("faction") or ""),
                affinity=affinity,
                rarity=str(raw.get("rarity") or ""),
                role=normalize_role(source_role) or source_role,
                avatar_url=extract_image_from_html(str(raw.get("image") or "")),
                stats={"6": _stats_from_source_a(raw)},
                ratings=ratings,
            )
        )

        if match is not None:
            summary.matched += 1
            matched_ids.add(id(match))
            source_b_by_slug[slug] = match
        else:
            summary.unmatched_a += 1

    for raw in source_b:
        if id(raw) in matched_ids:
            continue
        name = str(raw.get("champion") or "").strip()
        if not name:
            summary.skipped_unnamed += 1
            continue
        slug = slugify(name)
        if slug in seen_slugs:
            summary.skipped_duplicates += 1
            continue
        seen_slugs.add(slug)

        faction_key = str(raw.get("faction_index") or "")
        source_role = str(raw.get("role") or "")
        champions.append(
            ChampionRecord(
                id=slug,
                name=name,
                slug=slug,
                faction=HH_FACTION_MAP.get(faction_key, faction_key),
                affinity=normalize_affinity(raw.get("affinity_index")),
                rarity=str(raw.get("rarity") or ""),
                role=normalize_role(source_role) or source_role,
                ratings=ratings_from_source_b(raw),
            )
        )
        source_b_by_slug[slug] = raw
        summary.source_b_only += 1

    logger.info(
        f"Reconciled {summary.total} champions: {summary.matched} matched, "
        f"{summary.unmatched_a} stats-only, {summary.source_b_only} ratings-only, "
        f"{summary.skipped_duplicates} duplicate slugs skipped"
    )
    return ReconcileResult(champions=champions, summary=summary, source_b_by_slug=source_b_by_slug)


def patch_ratings(champions: list[ChampionRecord], source_b: list[dict]) -> int:
    """Refresh ratings on an existing catalog in place.

    Champions without a ratings-source match are left untouched. The previous
    overall rating is kept when the source has none.

    Returns:
        Number of champions whose ratings were replaced
    """
    matcher = NameMatcher(source_b)
    updated = 0
    for champion in champions:
        match = matcher.match(champion.name)
        if match is None:
            continue
        ratings = ratings_from_source_b(match)
        if "overall" not in ratings and "overall" in champion.ratings:
            ratings["overall"] = champion.ratings["overall"]
        champion.ratings = ratings
        updated += 1

    logger.info(f"Patched ratings for {updated}/{len(champions)} champions")
    return updated
