"""Similar-champion result model."""

from dataclasses import dataclass, field

from raid_codex.models.champion import ChampionRecord


@dataclass
class SimilarityResult:
    """A champion judged similar to a query target."""

    champion: ChampionRecord
    score: float
    shared_strengths: list[str] = field(default_factory=list)
