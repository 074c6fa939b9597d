"""Centralized role normalization utility.

All role normalization in the codebase should use this module to ensure
consistency. The canonical format is the display name used by the game:
Attack, Defense, HP, Support.
"""

from typing import Optional

# Canonical roles - the standard format used throughout the application
CANONICAL_ROLES = frozenset({"Attack", "Defense", "HP", "Support"})

# Mapping from any known source format to the canonical role
ROLE_ALIASES: dict[str, str] = {
    # Attack variations
    "Attack": "Attack",
    "ATK": "Attack",
    "Atk": "Attack",

    # Defense variations
    "Defense": "Defense",
    "DEF": "Defense",
    "Def": "Defense",
    "defence": "Defense",

    # HP variations
    "HP": "HP",
    "Health": "HP",

    # Support variations
    "Support": "Support",
    "Supp": "Support",
    "SUP": "Support",
    # Unreleased champions are listed as "TBC" by the stats source
    "TBC": "Support",
}

# Lowercase index for case-insensitive lookups
_LOWER_ALIASES = {alias.lower(): role for alias, role in ROLE_ALIASES.items()}


def normalize_role(role: Optional[str]) -> Optional[str]:
    """Normalize a role string to its canonical name.

    Args:
        role: Role string in any known format (e.g., "ATK", "Def", "Supp")

    Returns:
        Canonical role (Attack/Defense/HP/Support) or None if invalid/None

    Examples:
        >>> normalize_role("ATK")
        'Attack'
        >>> normalize_role("Supp")
        'Support'
        >>> normalize_role(None)
        None
    """
    if role is None:
        return None

    stripped = role.strip()

    # Try direct lookup first
    if stripped in ROLE_ALIASES:
        return ROLE_ALIASES[stripped]

    # Try lowercase lookup
    return _LOWER_ALIASES.get(stripped.lower())


def normalize_role_or_default(role: Optional[str], default: str = "Attack") -> str:
    """Normalize a role, falling back to `default` for unknown values."""
    return normalize_role(role) or default


def is_valid_role(role: Optional[str]) -> bool:
    """Check if a role string can be normalized to a canonical role."""
    return normalize_role(role) is not None
