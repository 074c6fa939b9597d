"""Read/write access to the persisted champion and guide snapshot."""

import json
import logging
from pathlib import Path
from typing import Optional

from raid_codex.models.champion import RARITY_ORDER, ChampionRecord
from raid_codex.models.guide import ContentArea, GuideRecord
from raid_codex.services.guide_synthesizer import qualifying_content_areas

logger = logging.getLogger(__name__)

CHAMPIONS_FILE = "champions.json"
GUIDES_FILE = "guides.json"


class CatalogRepository:
    """Champion catalog and generated guides backed by two JSON files.

    The snapshot is loaded lazily on first access and is read-only for the
    lookups; only the offline pipeline writes it back.
    """

    def __init__(self, data_dir: Optional[Path] = None):
        if data_dir is None:
            data_dir = Path(__file__).parents[4] / "data"
        self.data_dir = Path(data_dir)
        self._champions: Optional[list[ChampionRecord]] = None
        self._by_slug: dict[str, ChampionRecord] = {}
        self._guides: Optional[dict[str, list[GuideRecord]]] = None

    @property
    def champions_path(self) -> Path:
        return self.data_dir / CHAMPIONS_FILE

    @property
    def guides_path(self) -> Path:
        return self.data_dir / GUIDES_FILE

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def _load_champions(self) -> list[ChampionRecord]:
        if self._champions is None:
            champions: list[ChampionRecord] = []
            if self.champions_path.exists():
                with open(self.champions_path, encoding="utf-8") as f:
                    champions = [ChampionRecord.from_dict(c) for c in json.load(f)]
            else:
                logger.warning(f"{CHAMPIONS_FILE} not found at {self.champions_path}")
            self._champions = champions
            self._by_slug = {}
            for champion in champions:
                self._by_slug.setdefault(champion.slug, champion)
        return self._champions

    def _load_guides(self) -> dict[str, list[GuideRecord]]:
        if self._guides is None:
            guides: dict[str, list[GuideRecord]] = {}
            if self.guides_path.exists():
                with open(self.guides_path, encoding="utf-8") as f:
                    data = json.load(f)
                guides = {
                    slug: [GuideRecord.from_dict(g) for g in entries]
                    for slug, entries in data.items()
                }
            else:
                logger.warning(f"{GUIDES_FILE} not found at {self.guides_path}")
            self._guides = guides
        return self._guides

    def reload(self) -> None:
        """Drop cached data so the next lookup re-reads the files."""
        self._champions = None
        self._by_slug = {}
        self._guides = None

    # ------------------------------------------------------------------
    # Champion lookups
    # ------------------------------------------------------------------
    def get_all_champions(self) -> list[ChampionRecord]:
        return list(self._load_champions())

    def get_champion_by_slug(self, slug: str) -> Optional[ChampionRecord]:
        self._load_champions()
        return self._by_slug.get(slug)

    def get_unique_factions(self) -> list[str]:
        return sorted({c.faction for c in self._load_champions() if c.faction})

    def get_unique_affinities(self) -> list[str]:
        return sorted({c.affinity for c in self._load_champions() if c.affinity})

    def get_unique_rarities(self) -> list[str]:
        """Rarities present in the catalog, weakest first."""
        present = {c.rarity for c in self._load_champions() if c.rarity}
        ordered = [r for r in RARITY_ORDER if r in present]
        return ordered + sorted(present - set(ordered))

    def get_unique_roles(self) -> list[str]:
        return sorted({c.role for c in self._load_champions() if c.role})

    # ------------------------------------------------------------------
    # Guide lookups
    # ------------------------------------------------------------------
    def get_guides_for_champion(self, slug: str) -> list[GuideRecord]:
        return list(self._load_guides().get(slug, []))

    def get_filtered_guides_for_champion(
        self, slug: str, ratings: dict[str, float]
    ) -> list[GuideRecord]:
        """General guide plus the content guides `ratings` qualify for."""
        allowed = {ContentArea.GENERAL, *qualifying_content_areas(ratings)}
        return [g for g in self.get_guides_for_champion(slug) if g.content_area in allowed]

    def get_all_guided_champion_slugs(self) -> list[str]:
        return list(self._load_guides().keys())

    def get_guide_count(self) -> int:
        return sum(len(g) for g in self._load_guides().values())

    # ------------------------------------------------------------------
    # Persistence (offline pipeline only)
    # ------------------------------------------------------------------
    def save_champions(self, champions: list[ChampionRecord]) -> Path:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        with open(self.champions_path, "w", encoding="utf-8") as f:
            json.dump([c.to_dict() for c in champions], f, indent=2, ensure_ascii=False)
        self._champions = None
        logger.info(f"Wrote {len(champions)} champions to {self.champions_path}")
        return self.champions_path

    def save_guides(self, guides: dict[str, list[GuideRecord]]) -> Path:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        payload = {slug: [g.to_dict() for g in entries] for slug, entries in guides.items()}
        with open(self.guides_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)
        self._guides = None
        logger.info(f"Wrote guides for {len(guides)} champions to {self.guides_path}")
        return self.guides_path
