"""Derive stable, URL-safe identifiers for section tables.

Identifiers are not stored; they are recomputed from the owning section's
title and the table's 1-based position among the section's active tables.
Authors reference them from section descriptions as ``{{identifier}}``.

Example
-------
>>> from fundpages.content.table_ids import derive_table_id
>>> derive_table_id("My Revenue Table!", 1)
'my-revenue-table-1'
>>> derive_table_id("", 3)
'table-3'
"""

from __future__ import annotations

import re

from fundpages._constants import FALLBACK_TABLE_SLUG

_WHITESPACE_RUN = re.compile(r"\s+")
_DISALLOWED_CHARS = re.compile(r"[^a-z0-9-]")
_HYPHEN_RUN = re.compile(r"-+")


def _slugify_seed(seed: object) -> str:
    if not seed or not isinstance(seed, str):
        return FALLBACK_TABLE_SLUG
    slug = _WHITESPACE_RUN.sub("-", seed.lower())
    slug = _DISALLOWED_CHARS.sub("", slug)
    slug = _HYPHEN_RUN.sub("-", slug).strip("-")
    return slug or FALLBACK_TABLE_SLUG


def derive_table_id(seed: object, ordinal: int) -> str:
    """Return ``{slug}-{ordinal}`` for a table seeded by its section title.

    Parameters
    ----------
    seed : str
        Usually the section title. Empty or non-string seeds, and seeds made
        only of punctuation, fall back to ``"table"``.
    ordinal : int
        1-based position of the table among the section's active tables.

    Returns
    -------
    str
        Lowercase identifier made of ``[a-z0-9-]`` characters.
    """
    return f"{_slugify_seed(seed)}-{int(ordinal)}"


__all__ = ["derive_table_id"]
