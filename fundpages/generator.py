"""Build the public sections page and its JSON export.

This module coordinates reading sections from the :class:`SectionStore`,
composing them with :class:`SectionComposer`, and writing two artefacts into
the configured output directory: a standalone HTML page with a table of
contents, and a JSON document holding every composed section (the same shape
the admin preview consumes).

Example
-------
>>> from pathlib import Path
>>> from fundpages.config import load_site_config
>>> from fundpages.generator import SectionsPageBuilder
>>> config = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> SectionsPageBuilder(config).run()  # doctest: +SKIP
[PosixPath('public/sections.html'), PosixPath('public/sections.json')]
"""

from __future__ import annotations

import datetime as dt
import logging
import typing as typ

import msgspec.json

from fundpages._constants import EXPORT_INDENT
from fundpages.content.composer import SectionComposer
from fundpages.content.navigation import build_table_of_contents
from fundpages.content.renderer import TableHtmlRenderer
from fundpages.store import SectionStore

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from fundpages.config import SiteConfig
    from fundpages.content.models import ComposedSection

logger = logging.getLogger(__name__)


def encode_sections(
    sections: ComposedSection | cabc.Sequence[ComposedSection],
) -> bytes:
    """Return indented JSON for one or more composed sections."""
    return msgspec.json.format(msgspec.json.encode(sections), indent=EXPORT_INDENT)


class SectionsPageBuilder:
    """Compose stored sections and write the HTML page and JSON export."""

    def __init__(
        self,
        site_config: SiteConfig,
        *,
        store: SectionStore | None = None,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the builder.

        Parameters
        ----------
        site_config : SiteConfig
            Resolved configuration naming the store and output paths.
        store : SectionStore, optional
            Pre-built store; defaults to one reading ``site_config.store_path``.
        templates_dir : Path, optional
            Directory containing Jinja templates; defaults to the package
            templates.
        """
        self.site_config = site_config
        self.store = store or SectionStore(site_config.store_path)
        self.renderer = TableHtmlRenderer(templates_dir=templates_dir)
        self.composer = SectionComposer(self.renderer)

    def compose_all(self) -> list[ComposedSection]:
        """Compose every active section in display order."""
        sections = self.store.list_sections()
        logger.debug("composing %d section(s) from %s", len(sections), self.store.path)
        return self.composer.compose_many(sections)

    def compose_one(
        self, *, section_id: str | None = None, title: str | None = None
    ) -> ComposedSection:
        """Compose the section matching ``section_id`` or ``title``.

        Raises
        ------
        SectionNotFoundError
            If the store holds no matching section.
        """
        section = self.store.get_section(section_id=section_id, title=title)
        return self.composer.compose(section)

    def run(self, *, generated_at: dt.datetime | None = None) -> list[Path]:
        """Write the sections page and JSON export, returning their paths."""
        composed = self.compose_all()
        navigation = build_table_of_contents(composed)
        html = self.renderer.render_page(
            composed,
            navigation,
            self.site_config.theme,
            generated_at=generated_at,
        )
        self.site_config.output_dir.mkdir(parents=True, exist_ok=True)
        page_path = self.site_config.page_path
        page_path.write_text(html, encoding="utf-8")
        export_path = self.site_config.export_path
        export_path.write_bytes(encode_sections(composed))
        logger.debug("wrote %s and %s", page_path, export_path)
        return [page_path, export_path]


__all__ = ["SectionsPageBuilder", "encode_sections"]
