"""Utility modules for raid_codex."""

from raid_codex.utils.role_normalizer import (
    CANONICAL_ROLES,
    ROLE_ALIASES,
    normalize_role,
    normalize_role_or_default,
    is_valid_role,
)
from raid_codex.utils.html_text import (
    decode_html_entities,
    extract_detail_slug,
    extract_image_from_html,
    extract_name_from_html,
    parse_cooldown,
    parse_skills_html,
    slugify,
    strip_html,
)

__all__ = [
    "CANONICAL_ROLES",
    "ROLE_ALIASES",
    "normalize_role",
    "normalize_role_or_default",
    "is_valid_role",
    "decode_html_entities",
    "extract_detail_slug",
    "extract_image_from_html",
    "extract_name_from_html",
    "parse_cooldown",
    "parse_skills_html",
    "slugify",
    "strip_html",
]
