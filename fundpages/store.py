"""YAML-backed storage for sections and their owned tables.

Sections live in a single YAML document under a top-level ``sections`` list.
Reads use the safe loader; writes go through the round-trip dumper so the
file stays readable in code review. The store mirrors how the admin console
edits content: every update deletes a section's tables and recreates them
from the submitted list, so tables have no identity across edits.

Example
-------
.. code-block:: python

    from pathlib import Path
    from fundpages.store import SectionStore

    store = SectionStore(Path("content/sections.yaml"))
    section = store.create_section(
        {"title": "Overview", "description": "<p>{{overview-1}}</p>",
         "tables": [{"title": "Pricing", "headers": ["Plan"], "rows": [["Free"]]}]}
    )
    store.get_section(section_id=section.id).title
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import datetime as dt
import logging
import typing as typ
import uuid

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from fundpages.content.models import (
    ContentError,
    Section,
    Table,
    section_from_mapping,
    section_to_mapping,
    table_from_mapping,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

_EPOCH = dt.datetime.min.replace(tzinfo=dt.UTC)


class ContentStoreError(ContentError):
    """Raised when the sections document is malformed."""


class SectionNotFoundError(LookupError):
    """Raised when no section matches the requested id or title."""


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.UTC)


def _new_id() -> str:
    return uuid.uuid4().hex


def _build_roundtrip_yaml() -> YAML:
    yaml = YAML()
    yaml.preserve_quotes = True
    yaml.width = 120
    yaml.indent(mapping=2, sequence=4, offset=2)
    return yaml


def _created_key(item: typ.Any) -> dt.datetime:
    return item.created_at or _EPOCH


class SectionStore:
    """Persist sections in a YAML file and serve ordered, active-only reads."""

    def __init__(
        self,
        path: Path,
        *,
        clock: cabc.Callable[[], dt.datetime] | None = None,
        id_factory: cabc.Callable[[], str] | None = None,
    ) -> None:
        """Initialise the store.

        Parameters
        ----------
        path : Path
            YAML file holding the ``sections`` list; created on first write.
        clock : Callable[[], datetime], optional
            Source of timestamps for created/updated fields. Defaults to the
            current UTC time.
        id_factory : Callable[[], str], optional
            Source of opaque section identifiers. Defaults to UUID4 hex.
        """
        self.path = path
        self._clock = clock or _utcnow
        self._id_factory = id_factory or _new_id

    def list_sections(self, *, include_inactive: bool = False) -> list[Section]:
        """Return sections ordered by creation time with active tables only.

        Tables are ordered by creation time as well; ties keep their stored
        order, which is the order they were submitted in.
        """
        sections = self._load()
        if not include_inactive:
            sections = [section for section in sections if section.is_active]
        for section in sections:
            section.tables = sorted(
                (table for table in section.tables if table.is_active),
                key=_created_key,
            )
        return sorted(sections, key=_created_key)

    def get_section(
        self, *, section_id: str | None = None, title: str | None = None
    ) -> Section:
        """Return the section matching ``section_id``, else ``title``.

        Raises
        ------
        SectionNotFoundError
            If neither lookup matches a stored section.
        """
        if not section_id and not title:
            msg = "Either a section id or a title is required."
            raise ValueError(msg)
        for section in self.list_sections(include_inactive=True):
            if section_id and section.id == section_id:
                return section
            if not section_id and section.title == title:
                return section
        target = section_id or title
        msg = f"Section '{target}' not found."
        raise SectionNotFoundError(msg)

    def create_section(self, payload: cabc.Mapping[str, typ.Any]) -> Section:
        """Create a section and its tables from an admin payload."""
        sections = self._load()
        section = self._build_new_section(payload)
        sections.append(section)
        self._dump(sections)
        logger.info("created section %s (%s)", section.id, section.title)
        return section

    def update_section(
        self, payload: cabc.Mapping[str, typ.Any]
    ) -> tuple[Section, bool]:
        """Replace a section's fields and tables, creating it when unknown.

        Returns
        -------
        tuple[Section, bool]
            The stored section and ``True`` when it had to be created.

        Notes
        -----
        Existing tables are discarded and recreated from ``payload`` in the
        submitted order, all with the same creation timestamp.
        """
        sections = self._load()
        section_id = str(payload.get("id") or "")
        index = next(
            (idx for idx, item in enumerate(sections) if item.id == section_id),
            None,
        )
        if index is None:
            section = self._build_new_section(payload)
            sections.append(section)
            self._dump(sections)
            logger.info("created section %s (%s)", section.id, section.title)
            return section, True

        existing = sections[index]
        submitted = section_from_mapping(payload)
        now = self._clock()
        updated = dc.replace(
            submitted,
            id=existing.id,
            is_active=existing.is_active,
            tables=self._recreate_tables(payload, now),
            created_at=existing.created_at,
            updated_at=now,
        )
        sections[index] = updated
        self._dump(sections)
        logger.info(
            "updated section %s, replaced %d table(s) with %d",
            updated.id,
            len(existing.tables),
            len(updated.tables),
        )
        return updated, False

    def delete_section(self, section_id: str) -> Section:
        """Delete a section together with every table it owns."""
        sections = self._load()
        for idx, section in enumerate(sections):
            if section.id == section_id:
                del sections[idx]
                self._dump(sections)
                logger.info("deleted section %s", section_id)
                return section
        msg = f"Section '{section_id}' not found."
        raise SectionNotFoundError(msg)

    def _build_new_section(self, payload: cabc.Mapping[str, typ.Any]) -> Section:
        now = self._clock()
        submitted = section_from_mapping(payload)
        return dc.replace(
            submitted,
            id=self._id_factory(),
            tables=self._recreate_tables(payload, now),
            created_at=now,
            updated_at=now,
        )

    @staticmethod
    def _recreate_tables(
        payload: cabc.Mapping[str, typ.Any], now: dt.datetime
    ) -> list[Table]:
        tables = [table_from_mapping(item) for item in payload.get("tables") or []]
        return [dc.replace(table, created_at=now) for table in tables]

    def _load(self) -> list[Section]:
        if not self.path.exists():
            return []
        loader = YAML(typ="safe")
        loader.version = (1, 2)
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                document = loader.load(handle) or {}
        except YAMLError as exc:
            msg = f"Sections file '{self.path}' is not valid YAML: {exc}"
            raise ContentStoreError(msg) from exc
        if not isinstance(document, cabc.Mapping):
            msg = f"Sections file '{self.path}' must contain a mapping."
            raise ContentStoreError(msg)
        raw_sections = document.get("sections") or []
        if not isinstance(raw_sections, list):
            msg = f"'sections' in '{self.path}' must be a list."
            raise ContentStoreError(msg)
        try:
            return [section_from_mapping(item) for item in raw_sections]
        except ContentError as exc:
            msg = f"Invalid section in '{self.path}': {exc}"
            raise ContentStoreError(msg) from exc

    def _dump(self, sections: list[Section]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        document = {"sections": [section_to_mapping(item) for item in sections]}
        with self.path.open("w", encoding="utf-8") as handle:
            _build_roundtrip_yaml().dump(document, handle)


__all__ = ["ContentStoreError", "SectionNotFoundError", "SectionStore"]
