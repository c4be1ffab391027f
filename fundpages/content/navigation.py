"""Build the table of contents shown beside composed sections."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from .models import ComposedSection


@dc.dataclass(slots=True)
class NavEntry:
    """A table-of-contents link and its nested entries.

    Attributes
    ----------
    label : str
        Link text.
    href : str
        In-page fragment link (``#anchor``).
    children : list[NavEntry]
        Nested entries; tables listed under their section.
    """

    label: str
    href: str
    children: list[NavEntry] = dc.field(default_factory=list)


def build_table_of_contents(
    sections: cabc.Sequence[ComposedSection],
) -> list[NavEntry]:
    """Return navigation entries for the visible sections and their tables.

    Only tables left in ``section.tables`` are listed; inlined tables live
    inside the description and are reached through their section.
    """
    entries: list[NavEntry] = []
    for section_idx, section in enumerate(sections, start=1):
        if not section.is_table_of_content_visible:
            continue
        children = [
            NavEntry(
                label=_clean_label(table.table_of_content) or f"Table {table_idx}",
                href=f"#{table.anchor}",
            )
            for table_idx, table in enumerate(section.tables, start=1)
            if table.is_table_of_content_visible
        ]
        entries.append(
            NavEntry(
                label=_clean_label(section.table_of_content) or f"Section {section_idx}",
                href=f"#{section.anchor}",
                children=children,
            )
        )
    return entries


def _clean_label(label: str) -> str:
    """Trim surrounding whitespace and trailing colons from nav labels."""
    return label.strip().rstrip(":").strip()


__all__ = ["NavEntry", "build_table_of_contents"]
