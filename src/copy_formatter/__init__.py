# -*- coding: utf-8 -*-
"""
Copy Formatter - normalization and export formatting for AI-generated copy.
"""
__version__ = "1.0.0"

from .content import NormalizedContent, ContentShape, classify_content, resolve_content, to_plain_text  # noqa: E402
from .faq import extract_faq_content, generate_faq_schema, sanitize_faq_schema  # noqa: E402
from .formatters import (  # noqa: E402
    format_copy_result_as_html,
    format_copy_result_as_markdown,
    format_item_as_plain_text,
    format_single_item_as_html,
)
from .markdown import count_words, markdown_to_html, strip_markdown  # noqa: E402
from .scoring import calculate_word_count_accuracy, word_count_status  # noqa: E402

__all__ = [
    "ContentShape",
    "NormalizedContent",
    "calculate_word_count_accuracy",
    "classify_content",
    "count_words",
    "extract_faq_content",
    "format_copy_result_as_html",
    "format_copy_result_as_markdown",
    "format_item_as_plain_text",
    "format_single_item_as_html",
    "generate_faq_schema",
    "markdown_to_html",
    "resolve_content",
    "sanitize_faq_schema",
    "strip_markdown",
    "to_plain_text",
    "word_count_status",
    "__version__",
]
