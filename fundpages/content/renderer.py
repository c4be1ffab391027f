"""Render composed tables, sections, and the sections page as HTML."""

from __future__ import annotations

import collections.abc as cabc
import datetime as dt
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

if typ.TYPE_CHECKING:
    from fundpages.config import ThemeConfig

    from .models import ComposedSection, ComposedTable
    from .navigation import NavEntry

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"


def prepare_rows(rows: cabc.Sequence[cabc.Sequence[str]]) -> list[list[str]]:
    """Return the body rows that should be rendered for a table.

    Rows whose cells are all empty or whitespace-only are dropped. Trailing
    whitespace is trimmed from the cells of the last remaining row only,
    which is where rich text editors leave stray line breaks.
    """
    kept = [
        list(row)
        for row in rows
        if any(isinstance(cell, str) and cell.strip() for cell in row)
    ]
    if kept:
        kept[-1] = [
            cell.rstrip() if isinstance(cell, str) else cell for cell in kept[-1]
        ]
    return kept


class TableHtmlRenderer:
    """Render section building blocks with the shared Jinja templates."""

    def __init__(self, *, templates_dir: Path | None = None) -> None:
        """Initialize the Jinja environment.

        Parameters
        ----------
        templates_dir : Path, optional
            Directory containing ``table.jinja``, ``section.jinja`` and
            ``sections_page.jinja``. Defaults to ``fundpages/templates``.
        """
        self.templates_dir = templates_dir or DEFAULT_TEMPLATES_DIR
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._table_template = self.env.get_template("table.jinja")
        self._section_template = self.env.get_template("section.jinja")

    def render_table(self, table: ComposedTable) -> str:
        """Render ``table`` as a titled ``<table>`` block.

        Header text is escaped; cell HTML is emitted verbatim since it has
        already been through the style sanitizer.
        """
        return self._table_template.render(
            table=table, rows=prepare_rows(table.rows)
        )

    def render_section(self, section: ComposedSection) -> str:
        """Render the section heading, description, and remaining tables."""
        tables_html = [self.render_table(table) for table in section.tables]
        return self._section_template.render(section=section, tables_html=tables_html)

    def render_page(
        self,
        sections: cabc.Sequence[ComposedSection],
        navigation: cabc.Sequence[NavEntry],
        theme: ThemeConfig,
        *,
        generated_at: dt.datetime | None = None,
    ) -> str:
        """Render the standalone sections page with its table of contents."""
        template = self.env.get_template("sections_page.jinja")
        return template.render(
            sections=sections,
            navigation=navigation,
            theme=theme,
            generated_at=generated_at or dt.datetime.now(dt.UTC),
        )


__all__ = ["DEFAULT_TEMPLATES_DIR", "TableHtmlRenderer", "prepare_rows"]
