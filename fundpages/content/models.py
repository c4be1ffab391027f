"""Dataclasses describing sections, their tables, and composed output."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import datetime as dt
import typing as typ


class ContentError(ValueError):
    """Raised when a section or table payload cannot be interpreted."""


@dc.dataclass(slots=True)
class Table:
    """A titled grid of HTML cells owned by exactly one section.

    Attributes
    ----------
    title : str
        Display name; also the heading of the rendered table.
    table_of_content : str | None
        Optional short navigation label; falls back to ``title``.
    headers : list[str]
        Column names, one per column.
    rows : list[list[str]]
        Rows of raw HTML cells aligned positionally with ``headers``.
    caption : str | None
        Optional caption rendered below the table body.
    is_active : bool
        Soft-visibility flag; inactive tables are never rendered.
    is_table_of_content_visible : bool
        Whether the table is listed in generated navigation.
    created_at : datetime | None
        Creation timestamp used to order tables within a section.
    """

    title: str
    table_of_content: str | None = None
    headers: list[str] = dc.field(default_factory=list)
    rows: list[list[str]] = dc.field(default_factory=list)
    caption: str | None = None
    is_active: bool = True
    is_table_of_content_visible: bool = True
    created_at: dt.datetime | None = None


@dc.dataclass(slots=True)
class Section:
    """A titled block of rich content with its owned tables."""

    id: str
    title: str
    description: str = ""
    table_of_content: str | None = None
    is_active: bool = True
    is_table_of_content_visible: bool = True
    tables: list[Table] = dc.field(default_factory=list)
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


@dc.dataclass(slots=True)
class ComposedTable:
    """An active table annotated with its derived identifier.

    ``rows`` hold sanitized cell HTML; ``table_of_content`` is already
    resolved against the title. ``table_id`` is what placeholders match,
    while ``anchor`` is the HTML id of the rendered wrapper; it equals
    ``table_id`` unless that id is already taken elsewhere on the page.
    """

    table_id: str
    title: str
    table_of_content: str
    headers: list[str]
    rows: list[list[str]]
    caption: str | None = None
    is_table_of_content_visible: bool = True
    anchor: str = ""

    def __post_init__(self) -> None:
        if not self.anchor:
            self.anchor = self.table_id


@dc.dataclass(slots=True)
class ComposedSection:
    """A section whose description has its referenced tables inlined.

    Attributes
    ----------
    id : str
        Identifier of the source section.
    title : str
        Section title.
    table_of_content : str
        Navigation label (the section label, else the title).
    is_table_of_content_visible : bool
        Whether the section is listed in generated navigation.
    anchor : str
        HTML id of the rendered section block.
    description : str
        Sanitized description with placeholders substituted.
    tables : list[ComposedTable]
        Tables that were not referenced from the description, in order.
    html : str
        Full rendered section block.
    """

    id: str
    title: str
    table_of_content: str
    is_table_of_content_visible: bool
    anchor: str
    description: str
    tables: list[ComposedTable]
    html: str


_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "table_of_content": ("table_of_content", "tableOfContent"),
    "is_active": ("is_active", "isActive"),
    "is_table_of_content_visible": (
        "is_table_of_content_visible",
        "isTableOfContentVisible",
    ),
    "created_at": ("created_at", "createdAt"),
    "updated_at": ("updated_at", "updatedAt"),
}


def _pick(
    payload: cabc.Mapping[str, typ.Any], field: str, default: object = None
) -> typ.Any:
    """Return ``field`` from ``payload`` accepting snake_case or camelCase keys."""
    for key in _FIELD_ALIASES.get(field, (field,)):
        if key in payload and payload[key] is not None:
            return payload[key]
    return default


def _optional_text(value: object) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


def _cell_text(value: object) -> str:
    return "" if value is None else str(value)


def _sequence(value: object, key: str) -> cabc.Sequence[typ.Any]:
    """Return ``value`` as a list-like field, treating ``None`` as empty."""
    if value is None:
        return []
    if isinstance(value, str) or not isinstance(value, cabc.Sequence):
        msg = f"Table '{key}' must be a list, got {type(value).__name__}."
        raise ContentError(msg)
    return value


def _parse_timestamp(value: object) -> dt.datetime | None:
    """Return a timezone-aware UTC datetime parsed from ``value``, or None."""
    match value:
        case dt.datetime():
            parsed = value
        case str() as text:
            sanitized = text.strip()
            if not sanitized:
                return None
            if sanitized.endswith("Z"):
                sanitized = sanitized[:-1] + "+00:00"
            try:
                parsed = dt.datetime.fromisoformat(sanitized)
            except ValueError:
                return None
        case _:
            return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=dt.UTC)
    return parsed.astimezone(dt.UTC)


def table_from_mapping(payload: object) -> Table:
    """Build a :class:`Table` from a YAML or JSON payload.

    Raises
    ------
    ContentError
        If ``payload`` is not a mapping or its rows are not sequences.
    """
    if not isinstance(payload, cabc.Mapping):
        msg = f"Table payload must be a mapping, got {type(payload).__name__}."
        raise ContentError(msg)
    raw_rows = _sequence(payload.get("rows"), "rows")
    raw_headers = _sequence(payload.get("headers"), "headers")
    rows: list[list[str]] = []
    for row in raw_rows:
        if isinstance(row, str) or not isinstance(row, cabc.Sequence):
            msg = "Table rows must be sequences of cells."
            raise ContentError(msg)
        rows.append([_cell_text(cell) for cell in row])
    return Table(
        title=_cell_text(payload.get("title")),
        table_of_content=_optional_text(_pick(payload, "table_of_content")),
        headers=[_cell_text(header) for header in raw_headers],
        rows=rows,
        caption=_optional_text(payload.get("caption")),
        is_active=bool(_pick(payload, "is_active", default=True)),
        is_table_of_content_visible=bool(
            _pick(payload, "is_table_of_content_visible", default=True)
        ),
        created_at=_parse_timestamp(_pick(payload, "created_at")),
    )


def section_from_mapping(payload: object) -> Section:
    """Build a :class:`Section` (and its tables) from a YAML or JSON payload."""
    if not isinstance(payload, cabc.Mapping):
        msg = f"Section payload must be a mapping, got {type(payload).__name__}."
        raise ContentError(msg)
    raw_tables = payload.get("tables") or []
    if not isinstance(raw_tables, cabc.Sequence) or isinstance(raw_tables, str):
        msg = "Section 'tables' must be a list of table mappings."
        raise ContentError(msg)
    return Section(
        id=_cell_text(payload.get("id")),
        title=_cell_text(payload.get("title")),
        description=_cell_text(payload.get("description")),
        table_of_content=_optional_text(_pick(payload, "table_of_content")),
        is_active=bool(_pick(payload, "is_active", default=True)),
        is_table_of_content_visible=bool(
            _pick(payload, "is_table_of_content_visible", default=True)
        ),
        tables=[table_from_mapping(item) for item in raw_tables],
        created_at=_parse_timestamp(_pick(payload, "created_at")),
        updated_at=_parse_timestamp(_pick(payload, "updated_at")),
    )


def _format_timestamp(value: dt.datetime | None) -> str | None:
    if value is None:
        return None
    return value.astimezone(dt.UTC).isoformat().replace("+00:00", "Z")


def table_to_mapping(table: Table) -> dict[str, typ.Any]:
    """Return the storage mapping for ``table``."""
    payload: dict[str, typ.Any] = {
        "title": table.title,
        "table_of_content": table.table_of_content,
        "headers": list(table.headers),
        "rows": [list(row) for row in table.rows],
        "caption": table.caption,
        "is_active": table.is_active,
        "is_table_of_content_visible": table.is_table_of_content_visible,
        "created_at": _format_timestamp(table.created_at),
    }
    return {key: value for key, value in payload.items() if value is not None}


def section_to_mapping(section: Section) -> dict[str, typ.Any]:
    """Return the storage mapping for ``section`` including its tables."""
    payload: dict[str, typ.Any] = {
        "id": section.id,
        "title": section.title,
        "table_of_content": section.table_of_content,
        "description": section.description,
        "is_active": section.is_active,
        "is_table_of_content_visible": section.is_table_of_content_visible,
        "created_at": _format_timestamp(section.created_at),
        "updated_at": _format_timestamp(section.updated_at),
        "tables": [table_to_mapping(table) for table in section.tables],
    }
    return {key: value for key, value in payload.items() if value is not None}


__all__ = [
    "ComposedSection",
    "ComposedTable",
    "ContentError",
    "Section",
    "Table",
    "section_from_mapping",
    "section_to_mapping",
    "table_from_mapping",
    "table_to_mapping",
]
