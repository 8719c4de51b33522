# -*- coding: utf-8 -*-
"""
Markdown helpers: plain-text stripping, word counting and a small
Markdown to HTML converter.

The converter supports a fixed subset (horizontal rules, pipe tables,
headers 1-3, bold, italic, links, inline code, flat lists, paragraphs).
Rules run in that order, each on the output of the previous one.
"""
import logging
import re

logger = logging.getLogger(__name__)

# Stripping rules, applied in order
_FENCED_CODE = re.compile(r"```[\s\S]*?```")
_INLINE_CODE = re.compile(r"`([^`]+)`")
_BOLD = re.compile(r"\*\*(.*?)\*\*")
_ITALIC = re.compile(r"\*(.*?)\*")
_HEADER_MARKER = re.compile(r"^#{1,6}\s+", re.MULTILINE)
_LIST_MARKER = re.compile(r"^[-*+]\s+", re.MULTILINE)
_LINK = re.compile(r"\[(.*?)\]\(.*?\)")
_HTML_TAG = re.compile(r"<[^>]*>")

# Conversion rules
_HR = re.compile(r"^---+$", re.MULTILINE)
_TABLE = re.compile(
    r"^\|(.+)\|[ \t]*\n\|[-:\s|]+\|[ \t]*\n((?:\|.+\|[ \t]*(?:\n|$))*)",
    re.MULTILINE,
)
_H3 = re.compile(r"^### (.+)$", re.MULTILINE)
_H2 = re.compile(r"^## (.+)$", re.MULTILINE)
_H1 = re.compile(r"^# (.+)$", re.MULTILINE)
_HTML_ITALIC = re.compile(r"(?<!\*)\*(?!\s)([^*\n]+?)(?<!\s)\*(?!\*)")
_HTML_LINK = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
_UNORDERED_ITEM = re.compile(r"^(\s*)([-*])\s+(.+)$")
_ORDERED_ITEM = re.compile(r"^(\s*)\d+\.\s+(.+)$")
_BLANK_LINE = re.compile(r"\n[ \t]*\n")

_BLOCK_PREFIXES = ("<h", "<ul", "<ol", "<table", "<div", "<hr", "<pre")
_BLOCK_CLOSERS = ("</ul>", "</ol>", "</table>", "</h1>", "</h2>", "</h3>", "</pre>")

_TABLE_STYLE = 'border="1" style="border-collapse: collapse; width: 100%;"'
_TH_STYLE = 'style="border: 1px solid #ddd; padding: 8px; background-color: #f2f2f2;"'
_TD_STYLE = 'style="border: 1px solid #ddd; padding: 8px;"'


def strip_markdown(text: str | None) -> str:
    """
    Remove Markdown formatting from a string.

    Handles fenced and inline code, bold, italics, headers, list markers,
    links and HTML tags. Bold is removed before italics so the single
    asterisks left by ``**`` are never treated as emphasis.
    """
    if not text:
        return ""

    cleaned = _FENCED_CODE.sub("", text)
    cleaned = _INLINE_CODE.sub(r"\1", cleaned)
    cleaned = _BOLD.sub(r"\1", cleaned)
    cleaned = _ITALIC.sub(r"\1", cleaned)
    cleaned = _HEADER_MARKER.sub("", cleaned)
    cleaned = _LIST_MARKER.sub("", cleaned)
    cleaned = _LINK.sub(r"\1", cleaned)
    cleaned = _HTML_TAG.sub("", cleaned)

    return cleaned


def count_words(text: str | None) -> int:
    """Count whitespace-separated words; blank text has zero words."""
    if not text:
        return 0
    return len(text.split())


def _split_cells(row: str) -> list[str]:
    return [cell.strip() for cell in row.split("|") if cell.strip()]


def _table_to_html(match: re.Match) -> str:
    headers = _split_cells(match.group(1))
    body = match.group(2)
    rows = [row for row in body.strip().split("\n") if row.strip()]

    parts = [f"<table {_TABLE_STYLE}>"]

    if headers:
        parts.append("  <thead>")
        parts.append("    <tr>")
        for header in headers:
            parts.append(f"      <th {_TH_STYLE}>{header}</th>")
        parts.append("    </tr>")
        parts.append("  </thead>")

    if rows:
        parts.append("  <tbody>")
        for row in rows:
            cells = _split_cells(row)
            if not cells:
                continue
            parts.append("    <tr>")
            for cell in cells:
                parts.append(f"      <td {_TD_STYLE}>{cell}</td>")
            parts.append("    </tr>")
        parts.append("  </tbody>")

    parts.append("</table>")

    # Keep the line break the match consumed so following text stays on its own line
    trailing = "\n" if match.group(0).endswith("\n") else ""
    return "\n".join(parts) + trailing


def inline_markdown_to_html(text: str | None) -> str:
    """Convert inline Markdown (bold, italic, links, code) without block wrapping."""
    if not text:
        return ""

    html = _BOLD.sub(r"<strong>\1</strong>", text)
    html = _HTML_ITALIC.sub(r"<em>\1</em>", html)
    html = _HTML_LINK.sub(r'<a href="\2">\1</a>', html)
    html = _INLINE_CODE.sub(r"<code>\1</code>", html)
    return html


def _convert_lists(html: str) -> str:
    """Wrap contiguous bullet or numbered lines in flat <ul>/<ol> lists."""
    processed: list[str] = []
    in_unordered = False
    in_ordered = False

    for line in html.split("\n"):
        unordered = _UNORDERED_ITEM.match(line)
        ordered = _ORDERED_ITEM.match(line)

        if unordered:
            if in_ordered:
                processed.append("</ol>")
                in_ordered = False
            if not in_unordered:
                processed.append("<ul>")
                in_unordered = True
            processed.append(f"  <li>{unordered.group(3)}</li>")
        elif ordered:
            if in_unordered:
                processed.append("</ul>")
                in_unordered = False
            if not in_ordered:
                processed.append("<ol>")
                in_ordered = True
            processed.append(f"  <li>{ordered.group(2)}</li>")
        else:
            if in_unordered:
                processed.append("</ul>")
                in_unordered = False
            if in_ordered:
                processed.append("</ol>")
                in_ordered = False
            processed.append(line)

    if in_unordered:
        processed.append("</ul>")
    if in_ordered:
        processed.append("</ol>")

    return "\n".join(processed)


def _is_block(chunk: str) -> bool:
    return chunk.startswith(_BLOCK_PREFIXES) or any(tag in chunk for tag in _BLOCK_CLOSERS)


def markdown_to_html(markdown: str | None) -> str:
    """
    Convert the supported Markdown subset to HTML.

    Args:
        markdown: Markdown source

    Returns:
        HTML where every chunk that is not already a block element
        is wrapped in <p>, with inner line breaks turned into <br>.
    """
    if not markdown:
        return ""

    html = _HR.sub("<hr>", markdown)
    html = _TABLE.sub(_table_to_html, html)

    html = _H3.sub(r"<h3>\1</h3>", html)
    html = _H2.sub(r"<h2>\1</h2>", html)
    html = _H1.sub(r"<h1>\1</h1>", html)

    html = inline_markdown_to_html(html)
    html = _convert_lists(html)

    chunks = [chunk.strip() for chunk in _BLANK_LINE.split(html) if chunk.strip()]
    paragraphs = [
        chunk if _is_block(chunk) else "<p>" + chunk.replace("\n", "<br>") + "</p>"
        for chunk in chunks
    ]

    logger.debug("Markdown converted", extra={"chunks": len(paragraphs)})
    return "\n\n".join(paragraphs)
