"""Common literal values used across fundpages.

The placeholder grammar and identifier fallbacks are shared between the
composer and the table identifier helpers.

Examples
--------
>>> from fundpages import _constants
>>> bool(_constants.PLACEHOLDER_PATTERN.fullmatch("{{overview-2}}"))
True
>>> _constants.FALLBACK_TABLE_SLUG
'table'
"""

import re

PLACEHOLDER_PATTERN = re.compile(r"\{\{([a-zA-Z0-9_-]+)\}\}")
FALLBACK_TABLE_SLUG = "table"
FALLBACK_SECTION_SLUG = "section"
EXPORT_INDENT = 2
