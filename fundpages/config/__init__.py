"""Load and validate the site configuration YAML for sections builds.

The primary entry point is :func:`load_site_config`, which reads
``config/site.yaml``, applies defaults, and returns a :class:`SiteConfig`
describing where the sections store lives and where rendered artefacts go.

Examples
--------
>>> from pathlib import Path
>>> from fundpages.config import load_site_config
>>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> site.store_path  # doctest: +SKIP
PosixPath('content/sections.yaml')
"""

from .loader import load_site_config
from .models import SiteConfig, SiteConfigError, ThemeConfig

__all__ = ["SiteConfig", "SiteConfigError", "ThemeConfig", "load_site_config"]
