"""Unit tests for section composition and placeholder substitution."""

from __future__ import annotations

from bs4 import BeautifulSoup

from fundpages.content.composer import (
    compose_section,
    compose_sections,
    find_placeholder_ids,
)
from fundpages.content.models import Section, Table


def _overview() -> Section:
    return Section(
        id="s-overview",
        title="Overview",
        description="<p>See {{overview-2}} below.</p>",
        tables=[
            Table(title="Pricing", headers=["Plan"], rows=[["Free"]]),
            Table(title="Limits", headers=["Plan", "Cap"], rows=[["Free", "10"]]),
        ],
    )


def test_find_placeholder_ids() -> None:
    """Distinct, well-formed tokens are collected."""
    actual = find_placeholder_ids("{{a-1}} {{b_2}} {{a-1}} {{bad token}} {{}}")
    assert actual == {"a-1", "b_2"}, f"unexpected identifiers {actual!r}"


def test_referenced_table_is_inlined_and_omitted() -> None:
    """A referenced table replaces its token; the other remains separate."""
    composed = compose_section(_overview())
    soup = BeautifulSoup(composed.description, "html.parser")
    inlined = soup.find("div", id="overview-2")
    assert inlined is not None, "expected the Limits table inlined"
    assert "Limits" in inlined.get_text(), "expected Limits heading inline"
    assert "{{overview-2}}" not in composed.description, "expected token replaced"
    assert [table.title for table in composed.tables] == ["Pricing"], (
        "expected only the unreferenced Pricing table to remain"
    )
    assert composed.tables[0].table_id == "overview-1", "expected derived id"


def test_unmatched_placeholder_is_preserved() -> None:
    """Unknown tokens stay in the description verbatim."""
    section = _overview()
    section.description = "<p>{{does-not-exist}}</p>"
    composed = compose_section(section)
    assert composed.description == "<p>{{does-not-exist}}</p>", (
        f"expected token left untouched, got {composed.description!r}"
    )
    assert len(composed.tables) == 2, "expected both tables to remain separate"


def test_inactive_tables_never_contribute() -> None:
    """Inactive tables get no identifier and never render."""
    section = Section(
        id="s",
        title="S",
        description="{{s-1}} {{s-2}}",
        tables=[
            Table(title="Hidden", is_active=False, headers=["H"], rows=[["x"]]),
            Table(title="Shown", headers=["S"], rows=[["y"]]),
        ],
    )
    composed = compose_section(section)
    assert "Shown" in composed.description, "expected first active table as s-1"
    assert "Hidden" not in composed.description, "expected inactive table skipped"
    assert "{{s-2}}" in composed.description, "expected s-2 to have no table"
    assert composed.tables == [], "expected no remaining tables"


def test_cells_are_sanitized_without_changing_shape() -> None:
    """Cell styling is normalised while row and column counts are preserved."""
    section = Section(
        id="s",
        title="Caps",
        tables=[
            Table(
                title="Caps",
                headers=["Plan", "Cap"],
                rows=[['<span style="white-space:pre">Free</span>', "<font>10</font>"]],
            )
        ],
    )
    composed = compose_section(section)
    assert composed.tables[0].rows == [["Free", "10"]], (
        f"expected sanitized cells, got {composed.tables[0].rows!r}"
    )


def test_description_is_sanitized() -> None:
    """The description goes through the style filter before substitution."""
    section = Section(id="s", title="S", description='<p style="color:red">Hi</p>')
    assert compose_section(section).description == "<p>Hi</p>", (
        "expected colour styling removed from the description"
    )


def test_table_of_content_fallbacks() -> None:
    """Labels fall back to the title, then to an empty string."""
    section = Section(
        id="s",
        title="Guide",
        tables=[
            Table(title="Pricing"),
            Table(title="Limits", table_of_content="Caps"),
            Table(title=""),
        ],
    )
    labels = [table.table_of_content for table in compose_section(section).tables]
    assert labels == ["Pricing", "Caps", ""], f"unexpected labels {labels!r}"


def test_repeated_placeholder_renders_each_occurrence() -> None:
    """Every occurrence of a token is substituted."""
    section = Section(
        id="s",
        title="S",
        description="<p>{{s-1}}</p><p>{{s-1}}</p>",
        tables=[Table(title="Only", headers=["A"], rows=[["1"]])],
    )
    soup = BeautifulSoup(compose_section(section).description, "html.parser")
    assert len(soup.find_all("table")) == 2, "expected the table rendered twice"


def test_empty_section_composes_cleanly() -> None:
    """No description and no tables is a valid, empty composition."""
    composed = compose_section(Section(id="s", title="Empty"))
    assert composed.description == "", "expected empty description"
    assert composed.tables == [], "expected no tables"
    assert 'id="empty"' in composed.html, "expected section anchored on its slug"


def test_compose_is_deterministic() -> None:
    """Composing identical input twice gives identical output."""
    assert compose_section(_overview()) == compose_section(_overview()), (
        "expected identical compositions"
    )


def test_section_html_includes_remaining_tables() -> None:
    """The section block renders the description and unreferenced tables."""
    composed = compose_section(_overview())
    soup = BeautifulSoup(composed.html, "html.parser")
    section = soup.find("section", id="overview")
    assert section is not None, "expected section block anchored on the title slug"
    assert section.find("h2").get_text(strip=True) == "Overview", "expected heading"
    remaining = section.select_one(".section-tables")
    assert remaining.find("div", id="overview-1") is not None, (
        "expected Pricing rendered after the description"
    )
    assert remaining.find("div", id="overview-2") is None, (
        "expected Limits only inline"
    )


def test_compose_sections_assigns_unique_anchors() -> None:
    """Colliding or empty slugs receive distinct anchors."""
    composed = compose_sections(
        [
            Section(id="a", title="FAQ"),
            Section(id="b", title="FAQ"),
            Section(id="c", title="!!!"),
            Section(id="d", title="Ignored", table_of_content="Fees & Caps"),
        ]
    )
    anchors = [section.anchor for section in composed]
    assert anchors == ["faq", "faq-2", "section-3", "fees-caps"], (
        f"unexpected anchors {anchors!r}"
    )


def test_faq_extras_end_to_end() -> None:
    """The single table of "FAQ Extras" is inlined where its token sits."""
    section = Section(
        id="faq",
        title="FAQ Extras",
        description="<p>Limits: {{faq-extras-1}}</p>",
        tables=[
            Table(
                title="Limits",
                headers=["Plan", "Cap"],
                rows=[["Free", "10"], ["Pro", "1000"]],
            )
        ],
    )
    composed = compose_section(section)
    assert composed.description.startswith("<p>Limits: <div"), (
        "expected the token replaced in place"
    )
    assert "{{faq-extras-1}}" not in composed.description, "expected no token left"
    soup = BeautifulSoup(composed.description, "html.parser")
    headers = [th.get_text() for th in soup.select("table thead th")]
    assert headers == ["Plan", "Cap"], f"unexpected headers {headers!r}"
    assert len(soup.select("table tbody tr")) == 2, "expected two body rows"
    assert composed.tables == [], "expected the only table to be inlined"


def test_compose_sections_keeps_table_ids_off_section_anchors() -> None:
    """Table wrappers and section blocks share one id namespace."""
    composed = compose_sections(
        [
            Section(id="a", title="Overview", tables=[Table(title="P"), Table(title="L")]),
            Section(id="b", title="Overview 2"),
            Section(
                id="c",
                title="Overview",
                description="{{overview-1}}",
                tables=[Table(title="Fees")],
            ),
        ]
    )
    assert [table.anchor for table in composed[0].tables] == [
        "overview-1",
        "overview-2",
    ], "expected the first tables to keep their identifiers"
    assert composed[1].anchor == "overview-2-2", "expected the section to yield"
    assert composed[2].anchor == "overview-3", "expected a fresh section anchor"
    soup = BeautifulSoup(composed[2].description, "html.parser")
    wrapper = soup.select_one(".section-table")
    assert wrapper["id"] == "overview-1-2", f"unexpected wrapper id {wrapper['id']!r}"
    assert composed[2].tables == [], "expected the placeholder to match the bare id"
