# -*- coding: utf-8 -*-
"""
Content shape resolution for generated content values.

The generation API returns content in several loosely-typed shapes
(plain strings, structured headline/sections objects, headline lists,
wrapper objects with metadata, legacy ``{"text": ...}`` responses).
Every caller goes through ``classify_content`` so the branching lives
in one place.
"""
import json
import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel

from .markdown import count_words, strip_markdown

logger = logging.getLogger(__name__)

# Keys checked, in order, on legacy/alternate response objects
TEXT_KEYS = ("text", "content", "output", "message")

# Keys carried by wrappers produced by persona restyling
WRAPPER_METADATA_KEYS = ("seoMetadata", "faqSchema", "seo_metadata", "faq_schema")

BULLET = "• "
INVALID_CONTENT_TEXT = "Invalid content format"
UNDISPLAYABLE_CONTENT_TEXT = "Unable to display content"
NO_CONTENT_TEXT = "No content available"

_JSON_CODE_BLOCK = re.compile(r"```(?:json)?\s*([\s\S]*?)```")
_EDGE_FENCES = re.compile(r"^```|```$")


class ContentShape(str, Enum):
    """Shape of a generated content value."""

    EMPTY = "empty"
    STRUCTURED = "structured"
    HEADLINES = "headlines"
    FAQ_SCHEMA = "faq_schema"
    WRAPPED = "wrapped"
    PLAIN_TEXT = "plain_text"
    UNRECOGNIZED = "unrecognized"


@dataclass
class NormalizedContent:
    """Plain-text rendering of a content value with its word count."""

    text: str
    word_count: int
    shape: ContentShape
    is_structured: bool = False
    structured_content: dict[str, Any] | None = None
    word_count_accuracy: int | None = None
    seo_metadata: dict[str, Any] | None = None
    faq_schema: dict[str, Any] | None = None


def _as_plain(value: Any) -> Any:
    """Turn pydantic models and one-shot iterables into plain data."""
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, exclude_none=True)
    if isinstance(value, (str, bytes, Mapping)):
        return value
    if isinstance(value, Iterable):
        return list(value)
    return value


def _is_structured(value: Any) -> bool:
    return (
        isinstance(value, Mapping)
        and isinstance(value.get("headline"), str)
        and isinstance(value.get("sections"), list)
    )


def _text_property(value: Mapping) -> str | None:
    for key in TEXT_KEYS:
        candidate = value.get(key)
        if isinstance(candidate, str):
            return candidate
    return None


def classify_content(value: Any) -> ContentShape:
    """Classify a generated content value into a ContentShape."""
    value = _as_plain(value)

    if value is None:
        return ContentShape.EMPTY
    if isinstance(value, str):
        return ContentShape.PLAIN_TEXT
    if isinstance(value, Mapping):
        if _is_structured(value):
            return ContentShape.STRUCTURED
        if value.get("@type") == "FAQPage":
            return ContentShape.FAQ_SCHEMA
        if _text_property(value) is not None:
            return ContentShape.WRAPPED
        return ContentShape.UNRECOGNIZED
    if isinstance(value, list):
        if all(isinstance(entry, str) for entry in value):
            return ContentShape.HEADLINES
        return ContentShape.UNRECOGNIZED
    return ContentShape.PLAIN_TEXT


def _metadata(wrapper: Mapping, *keys: str) -> dict[str, Any] | None:
    """First non-empty metadata object under one of ``keys``; other types are dropped."""
    for key in keys:
        candidate = wrapper.get(key)
        if not candidate:
            continue
        if isinstance(candidate, Mapping):
            return dict(candidate)
        logger.debug("Ignored wrapper metadata that is not an object", extra={"key": key})
    return None


def unwrap_content(value: Any) -> tuple[Any, dict[str, Any] | None, dict[str, Any] | None]:
    """
    Unwrap one level of ``{"content": ..., "seoMetadata": ..., "faqSchema": ...}``.

    Returns:
        Tuple of (inner content, seo metadata, faq schema). Values that are not
        wrappers are returned unchanged with no metadata.
    """
    value = _as_plain(value)

    if not isinstance(value, Mapping) or "content" not in value or _is_structured(value):
        return value, None, None

    # {"content": "..."} alone is a legacy text response, not a wrapper
    has_metadata = any(key in value for key in WRAPPER_METADATA_KEYS)
    if isinstance(value["content"], str) and not has_metadata:
        return value, None, None

    seo_metadata = _metadata(value, "seoMetadata", "seo_metadata")
    faq_schema = _metadata(value, "faqSchema", "faq_schema")
    logger.debug(
        "Unwrapped nested content",
        extra={"has_seo_metadata": bool(seo_metadata), "has_faq_schema": bool(faq_schema)},
    )
    return _as_plain(value["content"]), seo_metadata or None, faq_schema or None


def _structured_text(structured: Mapping, strip: bool) -> str:
    def clean(value: Any) -> str:
        text = value if isinstance(value, str) else str(value)
        return strip_markdown(text) if strip else text

    text = clean(structured["headline"]) + "\n\n"

    for section in structured["sections"]:
        # Sections without a title are not rendered
        if not isinstance(section, Mapping) or not section.get("title"):
            continue
        text += clean(section["title"]) + "\n"
        if section.get("content"):
            text += clean(section["content"]) + "\n\n"
        elif isinstance(section.get("listItems"), list):
            for entry in section["listItems"]:
                text += BULLET + clean(entry) + "\n"
            text += "\n"

    return text


def _normalized(text: str, shape: ContentShape, **kwargs) -> NormalizedContent:
    return NormalizedContent(text=text, word_count=count_words(text), shape=shape, **kwargs)


def resolve_content(value: Any) -> NormalizedContent:
    """
    Resolve a content value of unknown shape into stripped text and a word count.

    Wrappers are unwrapped first and their SEO metadata / FAQ schema are kept
    on the result. Unknown shapes fall back to pretty-printed JSON.
    """
    inner, seo_metadata, faq_schema = unwrap_content(value)
    metadata = {"seo_metadata": seo_metadata, "faq_schema": faq_schema}
    shape = classify_content(inner)

    if shape is ContentShape.EMPTY:
        return NormalizedContent(text="", word_count=0, shape=shape, **metadata)

    if shape is ContentShape.STRUCTURED:
        return _normalized(
            _structured_text(inner, strip=True),
            shape,
            is_structured=True,
            structured_content=dict(inner),
            word_count_accuracy=inner.get("wordCountAccuracy"),
            **metadata,
        )

    if shape is ContentShape.WRAPPED:
        return _normalized(strip_markdown(_text_property(inner)), shape, **metadata)

    if shape is ContentShape.PLAIN_TEXT:
        return _normalized(strip_markdown(str(inner)), shape, **metadata)

    # Headline lists, FAQ schema objects and anything else
    try:
        formatted = json.dumps(inner, indent=2, ensure_ascii=False)
    except (TypeError, ValueError, RecursionError) as e:
        logger.warning(f"Content could not be serialized: {e}")
        return NormalizedContent(text=INVALID_CONTENT_TEXT, word_count=0, shape=shape, **metadata)

    return _normalized(formatted, shape, **metadata)


def to_plain_text(value: Any) -> str:
    """
    Render a content value as export text, keeping its Markdown.

    Headline lists become a numbered list and structured copy is laid out
    as headline, section titles and bodies.
    """
    value = _as_plain(value)
    shape = classify_content(value)

    if shape is ContentShape.EMPTY:
        return NO_CONTENT_TEXT
    if shape is ContentShape.PLAIN_TEXT:
        return str(value)
    if shape is ContentShape.HEADLINES:
        return "\n".join(f"{index}. {entry}" for index, entry in enumerate(value, start=1))
    if shape is ContentShape.STRUCTURED:
        return _structured_text(value, strip=False).strip()
    if shape is ContentShape.WRAPPED:
        return _text_property(value)

    try:
        return json.dumps(value, indent=2, ensure_ascii=False)
    except (TypeError, ValueError, RecursionError) as e:
        logger.warning(f"Content could not be displayed: {e}")
        return UNDISPLAYABLE_CONTENT_TEXT


def is_content_empty(value: Any) -> bool:
    """Return True when a content value has nothing worth rendering."""
    value = _as_plain(value)

    if not value:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, Mapping):
        if "content" in value:
            return is_content_empty(value["content"])
        if _is_structured(value):
            return not value["headline"].strip() and not value["sections"]
        for key in ("text", "message", "output"):
            if value.get(key):
                candidate = value[key]
                return not candidate.strip() if isinstance(candidate, str) else False
        return False
    if isinstance(value, list):
        return all(not entry.strip() if isinstance(entry, str) else not entry for entry in value)
    return False


def clean_json_response(text: str) -> str:
    """
    Extract a JSON document from a response that may be wrapped in a
    Markdown code fence (```json ... ```).
    """
    try:
        json.loads(text)
        return text
    except json.JSONDecodeError:
        logger.debug("Response is not bare JSON, looking for a code fence")

    match = _JSON_CODE_BLOCK.search(text)
    if match and match.group(1):
        return match.group(1).strip()

    cleaned = _EDGE_FENCES.sub("", text).strip()
    if cleaned.startswith("json"):
        cleaned = cleaned[4:].strip()
    return cleaned
