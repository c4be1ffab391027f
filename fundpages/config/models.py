"""Typed dataclasses describing the sections site configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class ThemeConfig:
    """Copy and labels applied to the generated sections page."""

    site_name: str = "Fundraise Directory"
    page_title: str = "Guides"
    toc_heading: str = "Table of Contents"


@dc.dataclass(slots=True)
class SiteConfig:
    """Resolved paths and theming for a sections build."""

    store_path: Path = Path("content/sections.yaml")
    output_dir: Path = Path("public")
    page_filename: str = "sections.html"
    export_filename: str = "sections.json"
    theme: ThemeConfig = dc.field(default_factory=ThemeConfig)

    @property
    def page_path(self) -> Path:
        """Return the path of the rendered sections page."""
        return self.output_dir / self.page_filename

    @property
    def export_path(self) -> Path:
        """Return the path of the composed sections JSON export."""
        return self.output_dir / self.export_filename


__all__ = ["SiteConfig", "SiteConfigError", "ThemeConfig"]
