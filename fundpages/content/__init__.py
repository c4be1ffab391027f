"""Section and table composition: identifiers, sanitizing, and rendering."""

from .composer import (
    SectionComposer,
    compose_section,
    compose_sections,
    find_placeholder_ids,
)
from .models import (
    ComposedSection,
    ComposedTable,
    ContentError,
    Section,
    Table,
    section_from_mapping,
    table_from_mapping,
)
from .navigation import NavEntry, build_table_of_contents
from .renderer import TableHtmlRenderer
from .sanitizer import sanitize_html
from .table_ids import derive_table_id

__all__ = [
    "ComposedSection",
    "ComposedTable",
    "ContentError",
    "NavEntry",
    "Section",
    "SectionComposer",
    "Table",
    "TableHtmlRenderer",
    "build_table_of_contents",
    "compose_section",
    "compose_sections",
    "derive_table_id",
    "find_placeholder_ids",
    "sanitize_html",
    "section_from_mapping",
    "table_from_mapping",
]
