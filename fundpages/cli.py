"""Cyclopts CLI entrypoint for managing and publishing sections.

The ``sections`` console script edits the YAML section store the way the
admin console does (create-or-replace, delete) and renders the composed
sections into static HTML and JSON. Typical usage runs ``sections upsert``
with an edited payload, then ``sections generate`` in CI.

Examples
--------
Render every active section with the default configuration:

>>> from fundpages.cli import main
>>> main()  # doctest: +SKIP

Preview one composed section as JSON:

>>> from fundpages.cli import app
>>> app(["show", "--title", "Overview"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import os
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter
from ruamel.yaml import YAML

from .config import load_site_config
from .generator import SectionsPageBuilder, encode_sections
from .store import SectionNotFoundError, SectionStore

DEFAULT_CONFIG = Path("config/site.yaml")
LOG_LEVEL_ENV = "FUNDPAGES_LOG_LEVEL"

app = App(name="sections", config=cyclopts.config.Env("FUNDPAGES_", command=False))  # type: ignore[unknown-argument]

ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to site config", env_var="FUNDPAGES_CONFIG")
]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _open_store(config: Path) -> SectionStore:
    return SectionStore(load_site_config(config).store_path)


def _read_payload(path: Path) -> dict[str, typ.Any]:
    """Load a section payload from YAML or JSON."""
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        payload = loader.load(handle)
    if not isinstance(payload, dict):
        msg = f"Section payload '{path}' must be a mapping."
        raise TypeError(msg)
    return payload


@app.command(help="Render active sections into an HTML page and JSON export.")
def generate(*, config: ConfigOption = DEFAULT_CONFIG) -> None:
    """Compose every active section and write the configured artefacts.

    Parameters
    ----------
    config : Path, optional
        Path to the site configuration file (overridable via
        ``FUNDPAGES_CONFIG``).
    """
    site_config = load_site_config(config)
    for path in SectionsPageBuilder(site_config).run():
        print(f"wrote {_format_path(path)}")


@app.command(help="Print one composed section as JSON.")
def show(
    *,
    section_id: typ.Annotated[
        str | None, Parameter(name="--id", help="Section identifier")
    ] = None,
    title: typ.Annotated[str | None, Parameter(help="Section title")] = None,
    config: ConfigOption = DEFAULT_CONFIG,
) -> None:
    """Compose a single section and print it, exiting 1 when it is missing."""
    if not section_id and not title:
        print("Pass --id or --title to choose a section.", file=sys.stderr)
        raise SystemExit(1)
    builder = SectionsPageBuilder(load_site_config(config))
    try:
        composed = builder.compose_one(section_id=section_id, title=title)
    except SectionNotFoundError as exc:
        print(exc, file=sys.stderr)
        raise SystemExit(1) from exc
    print(encode_sections(composed).decode("utf-8"))


@app.command(help="Create a section, or replace it and all of its tables.")
def upsert(payload: Path, *, config: ConfigOption = DEFAULT_CONFIG) -> None:
    """Store the section described by the ``payload`` file.

    Parameters
    ----------
    payload : Path
        YAML or JSON file holding the section fields and its ``tables`` list.
        When it carries the ``id`` of a stored section that section's tables
        are deleted and recreated; otherwise a new section is created.
    config : Path, optional
        Path to the site configuration file.
    """
    store = _open_store(config)
    section, created = store.update_section(_read_payload(payload))
    action = "created" if created else "updated"
    print(f"{action} section {section.id} ({section.title})")


@app.command(help="Delete a section and its tables.")
def delete(section_id: str, *, config: ConfigOption = DEFAULT_CONFIG) -> None:
    """Delete ``section_id``, exiting 1 when it is missing."""
    store = _open_store(config)
    try:
        section = store.delete_section(section_id)
    except SectionNotFoundError as exc:
        print(exc, file=sys.stderr)
        raise SystemExit(1) from exc
    print(f"deleted section {section.id} ({section.title})")


@app.command(name="list", help="List stored sections in display order.")
def list_sections(
    *,
    include_inactive: bool = False,
    config: ConfigOption = DEFAULT_CONFIG,
) -> None:
    """Print one line per section with its id, title, and table count."""
    store = _open_store(config)
    for section in store.list_sections(include_inactive=include_inactive):
        marker = "" if section.is_active else " [inactive]"
        print(f"{section.id}\t{section.title}\t{len(section.tables)} table(s){marker}")


def main() -> None:
    """Configure logging and invoke the Cyclopts application.

    The log level is read from ``FUNDPAGES_LOG_LEVEL`` and defaults to
    ``WARNING``, which is also used for unrecognised level names.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    level = os.getenv(LOG_LEVEL_ENV, "WARNING").upper()
    if not isinstance(logging.getLevelName(level), int):
        level = "WARNING"
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
