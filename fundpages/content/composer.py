"""Compose section descriptions with their referenced tables inlined.

Authors embed tables in a section description by writing the table's derived
identifier between double braces, for example ``{{revenue-1}}``. Composition
sanitizes the description and every table cell, replaces each recognised
placeholder with the rendered table, and returns the tables that were never
referenced so callers can display them after the description.

The whole pass is pure and synchronous: identical input always produces
byte-identical output, so server-rendered pages and admin previews agree.

Example
-------
>>> from fundpages.content.models import Section, Table
>>> from fundpages.content.composer import compose_section
>>> section = Section(
...     id="s1",
...     title="Overview",
...     description="<p>See {{overview-2}} below.</p>",
...     tables=[Table(title="Pricing"), Table(title="Limits")],
... )
>>> composed = compose_section(section)
>>> [table.title for table in composed.tables]
['Pricing']
"""

from __future__ import annotations

import collections.abc as cabc
import re
import typing as typ

from fundpages._constants import FALLBACK_SECTION_SLUG, PLACEHOLDER_PATTERN

from .models import ComposedSection, ComposedTable
from .renderer import TableHtmlRenderer
from .sanitizer import sanitize_html
from .table_ids import derive_table_id

if typ.TYPE_CHECKING:
    from .models import Section, Table


def find_placeholder_ids(description: str | None) -> set[str]:
    """Return the distinct identifiers referenced by ``{{...}}`` tokens."""
    if not description:
        return set()
    return {match.group(1) for match in PLACEHOLDER_PATTERN.finditer(description)}


def section_anchor(section: Section) -> str:
    """Return the slug used as the HTML id of a rendered section."""
    label = section.table_of_content or section.title or ""
    return re.sub(r"[^a-z0-9]+", "-", label.lower()).strip("-")


class SectionComposer:
    """Turn stored sections into composed, render-ready sections."""

    def __init__(self, renderer: TableHtmlRenderer | None = None) -> None:
        self.renderer = renderer or TableHtmlRenderer()

    def compose(
        self,
        section: Section,
        *,
        anchor: str | None = None,
        used_ids: set[str] | None = None,
    ) -> ComposedSection:
        """Compose ``section`` into its public form.

        Parameters
        ----------
        section : Section
            Snapshot of a section with its tables in display order. Inactive
            tables are ignored entirely.
        anchor : str, optional
            HTML id for the rendered section block; defaults to the slug of
            the section label.
        used_ids : set[str], optional
            HTML ids already taken on the page. Table wrappers whose
            identifier collides get a numeric suffix, and every id given out
            is added to the set. Placeholders still match the bare
            identifier.

        Returns
        -------
        ComposedSection
            Sanitized description with referenced tables inlined, plus the
            tables that were not referenced, each annotated with its
            derived identifier.
        """
        tables = self.assign_table_ids(section)
        if used_ids is not None:
            for table in tables:
                table.anchor = _unique_anchor(table.table_id, used_ids)
        description = self.inject_tables(sanitize_html(section.description), tables)
        referenced = find_placeholder_ids(section.description)
        remaining = [table for table in tables if table.table_id not in referenced]
        composed = ComposedSection(
            id=section.id,
            title=section.title,
            table_of_content=section.table_of_content or section.title or "",
            is_table_of_content_visible=section.is_table_of_content_visible,
            anchor=anchor or section_anchor(section) or FALLBACK_SECTION_SLUG,
            description=description,
            tables=remaining,
            html="",
        )
        composed.html = self.renderer.render_section(composed)
        return composed

    def compose_many(self, sections: cabc.Iterable[Section]) -> list[ComposedSection]:
        """Compose ``sections`` in order with ids unique across the page.

        Section anchors and table wrapper ids share one namespace, so a
        section titled "Overview 2" cannot clash with the second table of
        "Overview".
        """
        used: set[str] = set()
        composed: list[ComposedSection] = []
        for idx, section in enumerate(sections, start=1):
            base = section_anchor(section) or f"{FALLBACK_SECTION_SLUG}-{idx}"
            anchor = _unique_anchor(base, used)
            composed.append(self.compose(section, anchor=anchor, used_ids=used))
        return composed

    @staticmethod
    def assign_table_ids(section: Section) -> list[ComposedTable]:
        """Derive identifiers and sanitize cells for the section's active tables."""
        active = [table for table in section.tables if table.is_active]
        return [
            _compose_table(table, derive_table_id(section.title, ordinal))
            for ordinal, table in enumerate(active, start=1)
        ]

    def inject_tables(
        self, description: str, tables: cabc.Sequence[ComposedTable]
    ) -> str:
        """Replace each known placeholder in ``description`` with its table.

        Unknown placeholders are left verbatim so authoring mistakes stay
        visible on the page.
        """
        if not description:
            return ""
        by_id: dict[str, ComposedTable] = {}
        for table in tables:
            by_id.setdefault(table.table_id, table)

        def _repl(match: re.Match[str]) -> str:
            table = by_id.get(match.group(1))
            if table is None:
                return match.group(0)
            return self.renderer.render_table(table)

        return PLACEHOLDER_PATTERN.sub(_repl, description)


def _compose_table(table: Table, table_id: str) -> ComposedTable:
    return ComposedTable(
        table_id=table_id,
        title=table.title,
        table_of_content=table.table_of_content or table.title or "",
        headers=list(table.headers),
        rows=[
            [sanitize_html(cell) if isinstance(cell, str) else cell for cell in row]
            for row in table.rows
        ],
        caption=table.caption,
        is_table_of_content_visible=table.is_table_of_content_visible,
    )


def _unique_anchor(base: str, used: set[str]) -> str:
    """Return a unique anchor, appending numeric suffixes and mutating ``used``."""
    candidate = base
    suffix = 2
    while candidate in used:
        candidate = f"{base}-{suffix}"
        suffix += 1
    used.add(candidate)
    return candidate


def compose_section(section: Section) -> ComposedSection:
    """Compose a single section with a default renderer."""
    return SectionComposer().compose(section)


def compose_sections(sections: cabc.Iterable[Section]) -> list[ComposedSection]:
    """Compose several sections with unique anchors and a shared renderer."""
    return SectionComposer().compose_many(sections)


__all__ = [
    "SectionComposer",
    "compose_section",
    "compose_sections",
    "find_placeholder_ids",
    "section_anchor",
]
