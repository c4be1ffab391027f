"""Normalise presentation markup pasted into section descriptions and cells.

Admins paste rich text from spreadsheets and word processors, which drags in
inline colour and font styling that clashes with the site theme. This
module strips that styling with a short table of regex rules. It is a
presentation filter, not a security sanitizer: script handling is left to
the rich text editor that produced the markup.

The rule table is applied until nothing changes, so
``sanitize_html(sanitize_html(x))`` equals ``sanitize_html(x)`` and stored
content can be re-sanitized on each read.

Example
-------
>>> from fundpages.content.sanitizer import sanitize_html
>>> sanitize_html('<td class="x" style="color: red">1</td>')
'<td>1</td>'
>>> sanitize_html('<span style="white-space: pre-wrap">kept</span>')
'kept'
"""

from __future__ import annotations

import re

STYLE_ATTRIBUTE = re.compile(r'(\s*)(?<![\w-])style="([^"]*)"', re.IGNORECASE)
STRIPPED_DECLARATIONS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(rf'(?<![\w-]){name}\s*:[^;"]*;?', re.IGNORECASE)
    for name in ("color", "font-family", "font-size")
)
FONT_TAG = re.compile(r"</?font\b[^>]*>", re.IGNORECASE)
TABLE_TAG = re.compile(r"<(table|tr|th|td)\b([^>]*)>", re.IGNORECASE)
TABLE_TAG_ATTRIBUTES: tuple[re.Pattern[str], ...] = (
    re.compile(r'\s*(?<![\w-])style="[^"]*"', re.IGNORECASE),
    re.compile(r'\s*(?<![\w-])class="[^"]*"', re.IGNORECASE),
)
SPAN_TAG = re.compile(r"<span\b[^>]*>|</span\s*>", re.IGNORECASE)
WHITE_SPACE_STYLE = re.compile(r'style="[^"]*white-space', re.IGNORECASE)


def _strip_style_declarations(html: str) -> str:
    """Drop colour and font declarations from inline ``style`` attributes."""

    def _repl(match: re.Match[str]) -> str:
        leading, declarations = match.groups()
        for pattern in STRIPPED_DECLARATIONS:
            declarations = pattern.sub("", declarations)
        if not declarations.strip():
            return ""
        return f'{leading}style="{declarations}"'

    return STYLE_ATTRIBUTE.sub(_repl, html)


def _remove_font_tags(html: str) -> str:
    return FONT_TAG.sub("", html)


def _strip_table_attributes(html: str) -> str:
    """Remove ``style`` and ``class`` attributes from table structure tags."""

    def _repl(match: re.Match[str]) -> str:
        tag, attrs = match.groups()
        for pattern in TABLE_TAG_ATTRIBUTES:
            attrs = pattern.sub("", attrs)
        return f"<{tag}{attrs.rstrip()}>"

    return TABLE_TAG.sub(_repl, html)


def _unwrap_white_space_spans(html: str) -> str:
    """Unwrap spans whose style declares ``white-space``, keeping their content.

    Spans are matched with a stack so nested spans close against the right
    opener; stray closing tags are passed through unchanged.
    """
    pieces: list[str] = []
    stack: list[bool] = []
    cursor = 0
    for match in SPAN_TAG.finditer(html):
        pieces.append(html[cursor : match.start()])
        cursor = match.end()
        tag = match.group(0)
        if tag[1] != "/":
            unwrap = bool(WHITE_SPACE_STYLE.search(tag))
            stack.append(unwrap)
            if not unwrap:
                pieces.append(tag)
        elif stack:
            if not stack.pop():
                pieces.append(tag)
        else:
            pieces.append(tag)
    pieces.append(html[cursor:])
    return "".join(pieces)


SANITIZE_RULES = (
    _remove_font_tags,
    _unwrap_white_space_spans,
    _strip_style_declarations,
    _strip_table_attributes,
)


def sanitize_html(html: str | None) -> str:
    """Apply every presentation rule to ``html`` and return the result.

    Never raises on malformed markup; unrecognised fragments pass through.
    Rules only ever delete text, and removing one tag can splice together
    another (``<<font>font>``), so the table is reapplied until a pass
    leaves the markup unchanged.
    """
    if not html:
        return ""
    previous = None
    cleaned = html
    while cleaned != previous:
        previous = cleaned
        for rule in SANITIZE_RULES:
            cleaned = rule(cleaned)
    return cleaned


__all__ = ["SANITIZE_RULES", "sanitize_html"]
