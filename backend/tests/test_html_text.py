"""Tests for HTML fragment helpers."""
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


def test_extract_name_from_anchor():
    html = '<a href="https://www.inteleria.com/champion-list/kael/">Kael</a>'
    assert extract_name_from_html(html) == "Kael"


def test_extract_name_decodes_entities():
    assert extract_name_from_html('<a href="#">Ma&#039;Shalled</a>') == "Ma'Shalled"
    assert extract_name_from_html('<a href="#">Sir Nicholas &amp; Co</a>') == "Sir Nicholas & Co"


def test_extract_name_plain_text():
    """Names without markup are returned as-is."""
    assert extract_name_from_html("  Kael ") == "Kael"


def test_extract_image_from_html():
    html = '<img class="avatar" src="https://cdn.example.com/kael.png" alt="Kael">'
    assert extract_image_from_html(html) == "https://cdn.example.com/kael.png"
    assert extract_image_from_html("<span>no image</span>") == ""


def test_extract_detail_slug():
    html = "<a href='https://www.inteleria.com/champion-list/lady-mikage/'>Lady Mikage</a>"
    assert extract_detail_slug(html) == "lady-mikage"
    assert extract_detail_slug('<a href="https://example.com/other/">x</a>') == ""
    assert extract_detail_slug("Kael") == ""


def test_decode_numeric_and_named_entities():
    assert decode_html_entities("A&#8217;B &lt;3") == "A’B <3"


def test_strip_html_collapses_whitespace():
    assert strip_html("<b>Deals</b>   damage\n<i>twice</i>") == "Deals damage twice"


def test_slugify():
    assert slugify("Lady Mikage") == "lady-mikage"
    assert slugify("Ma'Shalled") == "ma-shalled"
    assert slugify("  Ninja!  ") == "ninja"


def test_parse_cooldown():
    assert parse_cooldown(3) == 3
    assert parse_cooldown("4 turns") == 4
    assert parse_cooldown(0) is None
    assert parse_cooldown("") is None
    assert parse_cooldown("n/a") is None
    assert parse_cooldown(None) is None
    assert parse_cooldown(True) is None


DETAIL_PAGE = """
<html><body>
<div class="skills"><h5><b>Dark Bolt</b></h5>
<p>Attacks 1 enemy. Has a 30% chance of placing a 5% Poison debuff for 2 turns.<br>Damage based on: ATK</p></div>
<div class="skills"><h5><b>Disintegrate</b> (Cooldown: 4)</h5>
<p>Attacks all enemies.<br><br>Upgrades: Lvl. 2 Damage +5%</p></div>
<div class="skills"><h5><b>Broken Block</b></h5></div>
</body></html>
"""


def test_parse_skills_html():
    skills = parse_skills_html(DETAIL_PAGE)

    assert [s["name"] for s in skills] == ["Dark Bolt", "Disintegrate"]
    assert skills[0]["description"] == (
        "Attacks 1 enemy. Has a 30% chance of placing a 5% Poison debuff for 2 turns."
    )
    assert "cooldown" not in skills[0]
    assert skills[1]["description"] == "Attacks all enemies."
    assert skills[1]["cooldown"] == 4


def test_parse_skills_html_no_blocks():
    assert parse_skills_html("<html><body>Not found</body></html>") == []
