"""Text extraction helpers for the HTML fragments the champion sources return.

The stats source embeds champion names and avatars inside anchor and image
markup, and both sources put HTML into skill descriptions. Each helper handles
one fragment shape.
"""

import re

_NAMED_ENTITIES = {
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&apos;": "'",
    "&rsquo;": "’",
    "&lsquo;": "‘",
    "&ndash;": "–",
    "&mdash;": "—",
}

_NUMERIC_ENTITY = re.compile(r"&#(\d+);")
_ANCHOR_TEXT = re.compile(r">([^<]+)<")
_IMG_SRC = re.compile(r"src=['\"]([^'\"]+)['\"]")
_HREF = re.compile(r"href=['\"]([^'\"]+)['\"]")
_TAG = re.compile(r"<[^>]+>")
_BR = re.compile(r"<br\s*/?>", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")

_SKILL_BLOCK = re.compile(r'<div class="skills">([\s\S]*?)</div>')
_SKILL_NAME = re.compile(r"<h5><b>([^<]+)</b>")
_SKILL_COOLDOWN = re.compile(r"\(Cooldown:\s*(\d+)\)")
_SKILL_DESCRIPTION = re.compile(r"<p>([\s\S]*?)</p>")
# Trailing sections of a detail-page description that are not skill text
_DESCRIPTION_CUTS = ("Damage based on:", "Upgrades:")


def decode_html_entities(text: str) -> str:
    """Decode numeric entities and the handful of named ones the sources use."""
    text = _NUMERIC_ENTITY.sub(lambda m: chr(int(m.group(1))), text)
    for entity, char in _NAMED_ENTITIES.items():
        text = text.replace(entity, char)
    return text


def extract_name_from_html(html: str) -> str:
    """Extract the display name from markup like `<a href="...">Name</a>`."""
    match = _ANCHOR_TEXT.search(html)
    raw = match.group(1).strip() if match else html.strip()
    return decode_html_entities(raw)


def extract_image_from_html(html: str) -> str:
    """Extract the `src` attribute of an embedded `<img>` tag."""
    match = _IMG_SRC.search(html)
    return match.group(1) if match else ""


def extract_detail_slug(html: str) -> str:
    """Extract the detail-page slug from `href='.../champion-list/<slug>/'`."""
    match = _HREF.search(html)
    if not match or "champion-list/" not in match.group(1):
        return ""
    return re.sub(r".*champion-list/", "", match.group(1)).strip("/")


def strip_html(html: str) -> str:
    """Drop tags and collapse whitespace."""
    return _WHITESPACE.sub(" ", _TAG.sub("", html)).strip()


def strip_html_keep_breaks(html: str) -> str:
    """Drop tags, turning `<br>` into newlines (at most one blank line)."""
    text = _TAG.sub("", _BR.sub("\n", html))
    return re.sub(r"\n{3,}", "\n\n", text).strip()


def slugify(name: str) -> str:
    """Lowercase, hyphen-separated ASCII slug."""
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def parse_cooldown(value) -> int | None:
    """Coerce a source cooldown (int, numeric string, or junk) to int or None."""
    if value is None or value == "" or value == 0:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value) or None
    match = re.match(r"\s*(\d+)", str(value))
    if not match:
        return None
    return int(match.group(1)) or None


def parse_skills_html(html: str) -> list[dict]:
    """Parse skills out of a stats-source champion detail page.

    Each skill sits in a `<div class="skills">` block with its name in
    `<h5><b>...</b>`, an optional `(Cooldown: N)` marker and the description
    in the following `<p>`. Blocks without a name or description are skipped.
    """
    skills: list[dict] = []
    for block in _SKILL_BLOCK.findall(html):
        name_match = _SKILL_NAME.search(block)
        description_match = _SKILL_DESCRIPTION.search(block)
        if not name_match or not description_match:
            continue

        name = decode_html_entities(name_match.group(1).strip())
        description = decode_html_entities(strip_html_keep_breaks(description_match.group(1)))
        cut_at = min(
            (description.find(marker) for marker in _DESCRIPTION_CUTS if marker in description),
            default=-1,
        )
        if cut_at >= 0:
            description = description[:cut_at].strip()
        if not name or not description:
            continue

        skill: dict = {"name": name, "description": description}
        cooldown_match = _SKILL_COOLDOWN.search(block)
        if cooldown_match:
            skill["cooldown"] = int(cooldown_match.group(1))
        skills.append(skill)
    return skills
