"""Shared fixtures for sections tests."""

from __future__ import annotations

import typing as typ
from pathlib import Path
from textwrap import dedent

import pytest


class SiteFiles(typ.NamedTuple):
    """Paths of a throwaway site configuration and its sections store."""

    config: Path
    store: Path
    output_dir: Path


SECTIONS_YAML = dedent(
    """\
    sections:
      - id: overview
        title: Overview
        description: '<p style="color: red">See {{overview-2}} below.</p>'
        created_at: '2025-01-01T00:00:00Z'
        tables:
          - title: Pricing
            headers: [Plan]
            rows: [[Free], [Pro]]
          - title: Limits
            headers: [Plan, Cap]
            rows: [[Free, '10']]
      - id: faq
        title: FAQ
        table_of_content: Questions
        description: <p>Nothing to see.</p>
        created_at: '2025-01-02T00:00:00Z'
      - id: archived
        title: Archived
        is_active: false
        created_at: '2024-12-01T00:00:00Z'
    """
)


@pytest.fixture
def site_files(tmp_path: Path) -> SiteFiles:
    """Write a site config pointing at a seeded sections store."""
    store = tmp_path / "content" / "sections.yaml"
    store.parent.mkdir(parents=True)
    store.write_text(SECTIONS_YAML, encoding="utf-8")
    output_dir = tmp_path / "public"
    config = tmp_path / "site.yaml"
    config.write_text(
        dedent(
            f"""\
            defaults:
              store_path: {store}
              output_dir: {output_dir}
            theme:
              site_name: Fundraise Directory
              page_title: Guides
            """
        ),
        encoding="utf-8",
    )
    return SiteFiles(config=config, store=store, output_dir=output_dir)
