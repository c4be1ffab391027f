"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .models import SiteConfig, SiteConfigError, ThemeConfig


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing where sections live and render.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``config/site.yaml``).

    Returns
    -------
    SiteConfig
        Parsed configuration with defaults applied for missing keys.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If an output filename is empty or contains a path separator.

    Examples
    --------
    >>> from pathlib import Path
    >>> from fundpages.config import load_site_config
    >>> config = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
    >>> config.page_path  # doctest: +SKIP
    PosixPath('public/sections.html')
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    defaults = _mapping(raw.get("defaults"), "defaults")
    base = SiteConfig()

    return SiteConfig(
        store_path=Path(defaults.get("store_path", base.store_path)),
        output_dir=Path(defaults.get("output_dir", base.output_dir)),
        page_filename=_filename(defaults, "page_filename", base.page_filename),
        export_filename=_filename(defaults, "export_filename", base.export_filename),
        theme=_build_theme_config(_mapping(raw.get("theme"), "theme")),
    )


def _mapping(value: object, key: str) -> cabc.Mapping[str, typ.Any]:
    if value is None:
        return {}
    if not isinstance(value, cabc.Mapping):
        msg = f"'{key}' must be a mapping."
        raise SiteConfigError(msg)
    return value


def _filename(payload: cabc.Mapping[str, typ.Any], key: str, default: str) -> str:
    """Return a bare output filename, rejecting empty values and directories."""
    value = str(payload.get(key, default) or "").strip()
    if not value or "/" in value or "\\" in value:
        msg = f"'{key}' must be a plain filename, got {value!r}."
        raise SiteConfigError(msg)
    return value


def _build_theme_config(payload: cabc.Mapping[str, typ.Any]) -> ThemeConfig:
    """Build a ThemeConfig instance from the provided mapping payload."""
    base = ThemeConfig()
    return ThemeConfig(
        site_name=payload.get("site_name", base.site_name),
        page_title=payload.get("page_title", base.page_title),
        toc_heading=payload.get("toc_heading", base.toc_heading),
    )


__all__ = ["load_site_config"]
