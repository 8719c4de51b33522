# -*- coding: utf-8 -*-
"""
FAQ extraction and schema.org FAQPage JSON-LD generation.

Extraction is a best-effort, line-oriented heuristic: a single forward
pass with no backtracking.
"""
import copy
import logging
import re
from typing import Any

from .markdown import strip_markdown
from .models import FaqItem

logger = logging.getLogger(__name__)

# Question formats, one capture group each:
# 1. "1. What is this?" (numbered, ending with a question mark)
# 2. "**What is this?**" (whole line bold)
# 3. "<b>What is this?</b>" (whole line bold tag)
# 4. "Question: What is this?"
_QUESTION = re.compile(
    r"^(?:\d+\.?\s*(.+\?)\s*$|\*\*(.+?)\*\*\s*$|<b>(.+?)</b>\s*$|Question:\s*(.*))",
    re.IGNORECASE,
)
_NUMBER_PREFIX = re.compile(r"^\d+\.\s*")
_WHITESPACE = re.compile(r"\s+")


def extract_faq_content(text: str | None) -> list[FaqItem]:
    """
    Extract question/answer pairs from free text.

    Non-empty lines following a question form its answer; a question is
    only kept once it has at least one answer line.
    """
    faqs: list[FaqItem] = []
    if not text:
        return faqs

    current_question: str | None = None
    current_answer: list[str] = []

    def flush():
        if current_question and current_answer:
            faqs.append(
                FaqItem(
                    question=strip_markdown(current_question),
                    answer=strip_markdown(" ".join(current_answer).strip()),
                )
            )

    for raw_line in text.split("\n"):
        line = raw_line.strip()
        match = _QUESTION.match(line)

        if match:
            flush()
            current_answer = []
            current_question = next((group for group in match.groups() if group), line)
        elif current_question and line:
            current_answer.append(line)

    flush()

    logger.debug(f"Extracted {len(faqs)} FAQ items")
    return faqs


def generate_faq_schema(faqs: list[FaqItem]) -> dict[str, Any]:
    """Build a FAQPage JSON-LD object; no items gives an empty object."""
    if not faqs:
        return {}

    return {
        "@context": "https://schema.org",
        "@type": "FAQPage",
        "mainEntity": [
            {
                "@type": "Question",
                "name": faq.question,
                "acceptedAnswer": {
                    "@type": "Answer",
                    "text": faq.answer,
                },
            }
            for faq in faqs
        ],
    }


def sanitize_faq_schema(faq_schema: dict[str, Any] | None, max_length: int = 400) -> dict[str, Any] | None:
    """
    Clean up questions and answers of a FAQPage schema.

    Args:
        faq_schema: FAQPage JSON-LD object (left untouched)
        max_length: Answers longer than this are cut and end with "..."

    Returns:
        A sanitized copy, or the schema itself when it has no mainEntity.
    """
    if not faq_schema or not isinstance(faq_schema.get("mainEntity"), list):
        return faq_schema

    sanitized = copy.deepcopy(faq_schema)

    for entry in sanitized["mainEntity"]:
        if not isinstance(entry, dict):
            continue

        name = _NUMBER_PREFIX.sub("", str(entry.get("name") or ""))
        entry["name"] = _WHITESPACE.sub(" ", name).strip()

        answer = entry.get("acceptedAnswer")
        if not isinstance(answer, dict):
            continue

        answer_text = _WHITESPACE.sub(" ", str(answer.get("text") or "")).strip()
        if len(answer_text) > max_length:
            answer_text = answer_text[:max_length].strip() + "..."
        if not answer_text.endswith((".", "!", "?")):
            answer_text += "."
        answer["text"] = answer_text

    return sanitized


def is_faq_schema(value: Any) -> bool:
    """Check whether a value is a FAQPage JSON-LD object."""
    return isinstance(value, dict) and value.get("@type") == "FAQPage"
