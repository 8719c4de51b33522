# -*- coding: utf-8 -*-
"""
Document formatters for generated copy.

Builds the Markdown and HTML exports of a generation session, the HTML of
a single generated item (with SEO metadata, score and FAQ schema embedded
as comments / JSON-LD) and the plain text used by the copy action.
"""
import html as html_lib
import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from .content import ContentShape, classify_content, resolve_content, to_plain_text, unwrap_content
from .faq import is_faq_schema
from .markdown import inline_markdown_to_html, markdown_to_html
from .models import (
    ContentQualityScore,
    CopyResult,
    FormState,
    GeneratedContentItem,
    GeneratedContentItemType,
    GeoScoreData,
    PromptEvaluation,
    ScoreData,
    SeoMetadata,
)
from .scoring import calculate_word_count_accuracy

logger = logging.getLogger(__name__)

# (field, markdown heading, comment heading, recommended max length)
SEO_FIELDS = [
    ("url_slugs", "URL Slugs", "URL SLUGS", 60),
    ("meta_descriptions", "Meta Descriptions", "META DESCRIPTIONS", 160),
    ("h1_variants", "H1 (Page Titles)", "H1 PAGE TITLES", 60),
    ("h2_headings", "H2 Headings", "H2 HEADINGS", 70),
    ("h3_headings", "H3 Headings", "H3 HEADINGS", 70),
    ("og_titles", "Open Graph Titles", "OPEN GRAPH TITLES", 60),
    ("og_descriptions", "Open Graph Descriptions", "OPEN GRAPH DESCRIPTIONS", 110),
]

# GEO suggestions are only listed below this overall score
GEO_SUGGESTION_THRESHOLD = 80

PRE_WRAP = '<div style="white-space: pre-wrap;">'


def _as_seo_metadata(value: Any) -> SeoMetadata | None:
    if value is None or isinstance(value, SeoMetadata):
        return value
    try:
        return SeoMetadata.model_validate(value)
    except ValidationError as e:
        logger.warning("Ignored malformed SEO metadata", extra={"errors": e.error_count()})
        return None


def _pretty_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def _word_count_label(form_state: FormState) -> str:
    if form_state.word_count == "Custom":
        return f"{form_state.word_count} ({form_state.custom_word_count})"
    return form_state.word_count


def _key_information(form_state: FormState) -> list[tuple[str, str]]:
    """Labelled form fields listed under "Key Information"."""
    info = [
        ("Language", form_state.language),
        ("Tone", form_state.tone),
        ("Word Count", _word_count_label(form_state)),
    ]
    optional = [
        ("Target Audience", form_state.target_audience),
        ("Key Message", form_state.key_message),
        ("Call to Action", form_state.call_to_action),
        ("Desired Emotion", form_state.desired_emotion),
        ("Brand Values", form_state.brand_values),
        ("Keywords", form_state.keywords),
    ]
    return info + [(label, value) for label, value in optional if value]


# =============================================================================
# Markdown blocks
# =============================================================================


def format_quality_score_as_markdown(score: ContentQualityScore, title: str) -> str:
    """Format an input quality score (score + tips) as Markdown."""
    markdown = f"### {title}\n\n"
    markdown += f"**Score:** {score.score}/100\n\n"

    if score.tips:
        markdown += "**Improvement Tips:**\n\n"
        for tip in score.tips:
            markdown += f"- {tip}\n"
        markdown += "\n"

    return markdown


def format_score_data_as_markdown(score: ScoreData, title: str) -> str:
    """Format a generated item's score as Markdown."""
    markdown = f"### {title}\n\n"
    markdown += f"**Overall:** {score.overall}/100\n"
    markdown += f"**Clarity:** {score.clarity}\n"
    markdown += f"**Persuasiveness:** {score.persuasiveness}\n"
    markdown += f"**Tone Match:** {score.tone_match}\n"
    markdown += f"**Engagement:** {score.engagement}\n"

    if score.improvement_explanation:
        markdown += f"\n**Why it's improved:** {score.improvement_explanation}\n\n"

    return markdown


def format_geo_score_as_markdown(geo_score: GeoScoreData, title: str) -> str:
    """Format a GEO score with its breakdown and suggestions as Markdown."""
    markdown = f"### {title}\n\n"
    markdown += f"**Overall GEO Score:** {geo_score.overall}/100\n\n"

    if geo_score.breakdown:
        markdown += "**GEO Score Breakdown:**\n\n"
        for item in geo_score.breakdown:
            status = "✓" if item.detected else "✗"
            markdown += f"- **{item.criterion}** {status} {item.score} points: {item.explanation}\n"
        markdown += "\n"

    if geo_score.suggestions and geo_score.overall < GEO_SUGGESTION_THRESHOLD:
        markdown += "**GEO Optimization Suggestions:**\n\n"
        for suggestion in geo_score.suggestions:
            markdown += f"- {suggestion}\n"
        markdown += "\n"

    return markdown


def format_seo_metadata_as_markdown(seo_metadata: SeoMetadata, heading_level: str = "###") -> str:
    """Format SEO metadata variants as numbered Markdown lists with length hints."""
    markdown = ""

    for field_name, heading, _comment, limit in SEO_FIELDS:
        values = getattr(seo_metadata, field_name)
        if not values:
            continue
        markdown += f"{heading_level} {heading}\n\n"
        for index, value in enumerate(values, start=1):
            # Slugs are shown as code
            shown = f"`{value}`" if field_name == "url_slugs" else value
            markdown += f"{index}. {shown} ({len(value)}/{limit} chars)\n"
        markdown += "\n"

    return markdown


def format_seo_metadata_as_comment(seo_metadata: SeoMetadata, name: str) -> str:
    """Format SEO metadata as an HTML comment block, invisible once pasted."""
    comment = f"<!-- SEO METADATA FOR {name}\n\n"

    for field_name, _heading, label, limit in SEO_FIELDS:
        values = getattr(seo_metadata, field_name)
        if not values:
            continue
        comment += f"{label}:\n"
        for index, value in enumerate(values, start=1):
            comment += f"{index}. {value} ({len(value)}/{limit} chars)\n"
        comment += "\n"

    comment += "-->\n\n"
    return comment


# =============================================================================
# Markdown document
# =============================================================================


def _format_inputs_as_markdown(form_state: FormState, original_input_score: ScoreData | None) -> str:
    markdown = "## Input Content\n\n"

    if form_state.tab == "create":
        markdown += "### Business Description\n\n"
        markdown += f"{form_state.business_description or 'No business description provided'}\n\n"
        if form_state.business_description_score:
            markdown += format_quality_score_as_markdown(
                form_state.business_description_score, "Business Description Score"
            )
    else:
        markdown += "### Original Copy\n\n"
        markdown += f"{form_state.original_copy or 'No original copy provided'}\n\n"
        if form_state.original_copy_score:
            markdown += format_quality_score_as_markdown(form_state.original_copy_score, "Original Copy Score")

    if original_input_score:
        markdown += "### Original Input Quality Score\n\n"
        markdown += f"**Overall:** {original_input_score.overall}/100\n"
        markdown += f"**Clarity:** {original_input_score.clarity}\n"
        markdown += f"**Persuasiveness:** {original_input_score.persuasiveness}\n"
        markdown += f"**Tone Match:** {original_input_score.tone_match}\n"
        markdown += f"**Engagement:** {original_input_score.engagement}\n"
        if original_input_score.improvement_explanation:
            markdown += f"\n**Assessment:** {original_input_score.improvement_explanation}\n"
        markdown += "\n"

    markdown += "### Key Information\n\n"
    for label, value in _key_information(form_state):
        markdown += f"- **{label}:** {value}\n"
    markdown += "\n"

    return markdown


def _format_prompt_evaluation_as_markdown(prompt_evaluation: PromptEvaluation) -> str:
    markdown = "## Prompt Evaluation\n\n"
    markdown += f"**Score:** {prompt_evaluation.score}/100\n\n"

    if prompt_evaluation.tips:
        markdown += "**Improvement Tips:**\n\n"
        for tip in prompt_evaluation.tips:
            markdown += f"- {tip}\n"
        markdown += "\n"

    return markdown


def _format_item_as_markdown(item: GeneratedContentItem) -> str:
    title = item.display_name
    markdown = f"## {title}\n\n"

    content, nested_seo, nested_faq = unwrap_content(item.content)
    markdown += f"{to_plain_text(content)}\n\n"

    if item.modification_instruction:
        markdown += f"**Modification Applied:** {item.modification_instruction}\n\n"

    if item.score:
        markdown += format_score_data_as_markdown(item.score, f"{title} Score")

    if item.geo_score:
        markdown += format_geo_score_as_markdown(item.geo_score, f"{title} GEO Score")

    faq_schema = item.faq_schema or nested_faq
    if faq_schema:
        markdown += f"### {title} FAQ Schema (JSON-LD)\n\n"
        markdown += f"```json\n{_pretty_json(faq_schema)}\n```\n\n"

    seo = _as_seo_metadata(nested_seo) if nested_seo else None
    if seo:
        markdown += f"### SEO Metadata for {title}\n\n"
        markdown += format_seo_metadata_as_markdown(seo, "####")

    return markdown


def format_copy_result_as_markdown(
        form_state: FormState,
        items: list[GeneratedContentItem],
        original_input_score: ScoreData | None = None,
        prompt_evaluation: PromptEvaluation | None = None,
        include_inputs: bool = True,
) -> str:
    """
    Format generated content items as a single Markdown document.

    Args:
        form_state: Form values (input content and key information)
        items: Generated content items, in display order
        original_input_score: Score of the original input, if evaluated
        prompt_evaluation: Prompt evaluation, if available
        include_inputs: Whether to include the "Input Content" section

    Returns:
        Markdown document. Dedicated SEO metadata items come first, then
        one section per content item.
    """
    markdown = "# Generated Copy\n\n"

    if include_inputs:
        markdown += _format_inputs_as_markdown(form_state, original_input_score)

    if prompt_evaluation:
        markdown += _format_prompt_evaluation_as_markdown(prompt_evaluation)

    seo_items = [item for item in items if item.type is GeneratedContentItemType.SEO_METADATA]
    content_items = [item for item in items if item.type is not GeneratedContentItemType.SEO_METADATA]

    for item in seo_items:
        if item.seo_metadata:
            markdown += f"## SEO Metadata for {item.source_display_name or item.type.value}\n\n"
            markdown += format_seo_metadata_as_markdown(item.seo_metadata, "###")

    for item in content_items:
        markdown += _format_item_as_markdown(item)

    logger.debug(
        "Markdown export built",
        extra={"seo_items": len(seo_items), "content_items": len(content_items)},
    )
    return markdown


# =============================================================================
# HTML document
# =============================================================================


def _format_tips_as_html(tips: list[str]) -> str:
    if not tips:
        return ""
    html = "<p><strong>Improvement Tips:</strong></p><ul>"
    for tip in tips:
        html += f"<li>{tip}</li>"
    return html + "</ul>"


def _format_quality_score_as_html(score: ContentQualityScore, title: str) -> str:
    html = f"<h4>{title}</h4>"
    html += f"<p><strong>Score:</strong> {score.score}/100</p>"
    return html + _format_tips_as_html(score.tips)


def format_score_data_as_html(score: ScoreData, title: str) -> str:
    """Format a generated item's score as HTML."""
    html = f"<h3>{title}</h3>"
    html += f"<p><strong>Overall:</strong> {score.overall}/100</p>"
    html += f"<p><strong>Clarity:</strong> {score.clarity}</p>"
    html += f"<p><strong>Persuasiveness:</strong> {score.persuasiveness}</p>"
    html += f"<p><strong>Tone Match:</strong> {score.tone_match}</p>"
    html += f"<p><strong>Engagement:</strong> {score.engagement}</p>"

    if score.improvement_explanation:
        html += f"<p><strong>Why it's improved:</strong> {score.improvement_explanation}</p>"

    return html


def _pre_wrap(content: Any) -> str:
    return f"{PRE_WRAP}{to_plain_text(content)}</div>"


def _headline_list_html(title: str, headlines: list[str]) -> str:
    html = f"<h2>{title}</h2><ol>"
    for headline in headlines:
        html += f"<li>{headline}</li>"
    return html + "</ol>"


def _format_alternatives_as_html(copy_result: CopyResult, selected_persona: str | None) -> str:
    html = ""

    if copy_result.alternative_versions:
        for index, version in enumerate(copy_result.alternative_versions):
            number = index + 1
            html += f"<h2>{number}.) Alternative Version</h2>"
            html += _pre_wrap(version)

            score = _at(copy_result.alternative_version_scores, index)
            if score:
                html += format_score_data_as_html(score, f"Alternative Version {number} Score")

            restyled = _at(copy_result.restyled_alternative_versions, index)
            if restyled and selected_persona:
                html += f"<h3>{number}.) Alternative Version ({selected_persona}'s Voice)</h3>"
                html += _pre_wrap(restyled)

                restyled_score = _at(copy_result.restyled_alternative_version_scores, index)
                if restyled_score:
                    html += format_score_data_as_html(
                        restyled_score, f"{selected_persona}'s Alternative Version {number} Score"
                    )
    elif copy_result.alternative_copy:
        html += "<h2>Alternative Copy</h2>"
        html += _pre_wrap(copy_result.alternative_copy)

        if copy_result.alternative_copy_score:
            html += format_score_data_as_html(copy_result.alternative_copy_score, "Alternative Copy Score")

        if copy_result.restyled_alternative_copy and selected_persona:
            html += f"<h2>Alternative Copy ({selected_persona}'s Voice)</h2>"
            html += _pre_wrap(copy_result.restyled_alternative_copy)

            if copy_result.restyled_alternative_copy_score:
                html += format_score_data_as_html(
                    copy_result.restyled_alternative_copy_score,
                    f"{selected_persona}'s Alternative Copy Score",
                )

    return html


def _at(values: list, index: int):
    return values[index] if index < len(values) else None


def format_copy_result_as_html(
        form_state: FormState,
        copy_result: CopyResult,
        prompt_evaluation: PromptEvaluation | None = None,
        selected_persona: str | None = None,
) -> str:
    """
    Format a copy result as an HTML document for rich text copying.

    Tags are built directly from the plain-text rendering of each version
    (kept in pre-wrapped divs), not through the Markdown converter.
    """
    html = "<h1>Generated Copy</h1>"
    html += "<h2>Input Content</h2>"

    if form_state.tab == "create":
        html += "<h3>Business Description</h3>"
        html += f"{PRE_WRAP}{form_state.business_description or 'No business description provided'}</div>"
        if form_state.business_description_score:
            html += _format_quality_score_as_html(
                form_state.business_description_score, "Business Description Score"
            )
    else:
        html += "<h3>Original Copy</h3>"
        html += f"{PRE_WRAP}{form_state.original_copy or 'No original copy provided'}</div>"
        if form_state.original_copy_score:
            html += _format_quality_score_as_html(form_state.original_copy_score, "Original Copy Score")

    html += "<h3>Key Information</h3><ul>"
    for label, value in _key_information(form_state):
        html += f"<li><strong>{label}:</strong> {value}</li>"
    html += "</ul>"

    if prompt_evaluation:
        html += "<h2>Prompt Evaluation</h2>"
        html += f"<p><strong>Score:</strong> {prompt_evaluation.score}/100</p>"
        html += _format_tips_as_html(prompt_evaluation.tips)

    if copy_result.improved_copy:
        html += "<h2>Improved Copy</h2>"
        html += _pre_wrap(copy_result.improved_copy)
        if copy_result.improved_copy_score:
            html += format_score_data_as_html(copy_result.improved_copy_score, "Improved Copy Score")

    if copy_result.restyled_improved_versions:
        for index, version in enumerate(copy_result.restyled_improved_versions):
            html += f"<h2>Improved Copy ({version.persona}'s Voice)</h2>"
            html += _pre_wrap(version.content)
            # Only the primary restyled version has a score
            if index == 0 and copy_result.restyled_improved_copy_score:
                html += format_score_data_as_html(
                    copy_result.restyled_improved_copy_score, f"{version.persona}'s Voice Score"
                )
    elif copy_result.restyled_improved_copy and (copy_result.restyled_improved_copy_persona or selected_persona):
        persona = selected_persona or copy_result.restyled_improved_copy_persona
        html += f"<h2>Improved Copy ({persona}'s Voice)</h2>"
        html += _pre_wrap(copy_result.restyled_improved_copy)
        if copy_result.restyled_improved_copy_score:
            html += format_score_data_as_html(copy_result.restyled_improved_copy_score, f"{persona}'s Voice Score")

    html += _format_alternatives_as_html(copy_result, selected_persona)

    if copy_result.headlines:
        html += _headline_list_html("Headline Ideas", copy_result.headlines)

    if copy_result.restyled_headlines_versions:
        for version in copy_result.restyled_headlines_versions:
            html += _headline_list_html(f"Headline Ideas ({version.persona}'s Voice)", version.headlines)
    elif copy_result.restyled_headlines and (copy_result.restyled_headlines_persona or selected_persona):
        persona = selected_persona or copy_result.restyled_headlines_persona
        html += _headline_list_html(f"Headline Ideas ({persona}'s Voice)", copy_result.restyled_headlines)

    return html


# =============================================================================
# Single item
# =============================================================================


def _structured_to_html(structured: Mapping) -> str:
    html = f"<h1>{inline_markdown_to_html(str(structured['headline']))}</h1>\n\n"

    for section in structured["sections"]:
        if not isinstance(section, Mapping) or not section.get("title"):
            continue
        html += f"<h2>{inline_markdown_to_html(str(section['title']))}</h2>\n"

        if section.get("content"):
            html += f"{markdown_to_html(str(section['content']))}\n"

        if isinstance(section.get("listItems"), list):
            html += "<ul>\n"
            for entry in section["listItems"]:
                html += f"  <li>{inline_markdown_to_html(str(entry))}</li>\n"
            html += "</ul>\n"

    return html


def _format_score_as_comment(score: ScoreData) -> str:
    comment = f"\n\n<!-- QUALITY SCORE: {score.overall}/100\n\n"

    if score.improvement_explanation:
        comment += f"WHY IT'S IMPROVED:\n{score.improvement_explanation}\n\n"

    comment += "SCORE DETAILS:\n"
    comment += f"- Clarity: {score.clarity}\n"
    comment += f"- Persuasiveness: {score.persuasiveness}\n"
    comment += f"- Tone Match: {score.tone_match}\n"
    comment += f"- Engagement: {score.engagement}\n"

    if score.word_count_accuracy is not None:
        comment += f"- Word Count Accuracy: {score.word_count_accuracy}/100\n"

    comment += "\n-->\n"
    return comment


def format_single_item_as_html(item: GeneratedContentItem, target_word_count: int | None = None) -> str:
    """
    Format a single generated content item as HTML.

    SEO metadata is prepended as an HTML comment; score, modification
    instruction and word count are appended as comments and the FAQ schema
    as a JSON-LD script tag, so only the content itself shows when pasted
    into a rich text editor.

    Args:
        item: Generated content item
        target_word_count: Requested word count, reported with its accuracy

    Returns:
        HTML string. SEO metadata items produce only the comment block.
    """
    content, nested_seo, nested_faq = unwrap_content(item.content)
    seo_metadata = item.seo_metadata or _as_seo_metadata(nested_seo)
    name = item.source_display_name or item.type.value

    html = format_seo_metadata_as_comment(seo_metadata, name) if seo_metadata else ""

    if is_faq_schema(content):
        html += "<h2>FAQ Schema (JSON-LD)</h2>\n"
        html += f"<pre><code>{html_lib.escape(_pretty_json(content), quote=False)}</code></pre>\n"
        return html

    if item.type is GeneratedContentItemType.SEO_METADATA and item.seo_metadata:
        return html

    shape = classify_content(content)
    if shape is ContentShape.HEADLINES:
        html += "<ol>\n"
        for headline in content:
            html += f"  <li>{inline_markdown_to_html(headline)}</li>\n"
        html += "</ol>"
    elif shape is ContentShape.STRUCTURED:
        html += _structured_to_html(content)
    else:
        html += markdown_to_html(to_plain_text(content))

    if item.modification_instruction:
        html += f"\n\n<!-- MODIFICATION APPLIED: {item.modification_instruction} -->\n"

    if item.score:
        html += _format_score_as_comment(item.score)

    if target_word_count and shape is not ContentShape.HEADLINES:
        word_count = resolve_content(content).word_count
        accuracy = calculate_word_count_accuracy(word_count, target_word_count)
        html += f"\n\n<!-- WORD COUNT: {word_count} (target: {target_word_count}, accuracy: {accuracy}/100) -->\n"

    faq_schema = item.faq_schema or nested_faq
    if faq_schema:
        html += "\n\n<!-- FAQ SCHEMA (JSON-LD) -->\n"
        html += f'<script type="application/ld+json">\n{_pretty_json(faq_schema)}\n</script>\n'

    return html


def format_item_as_plain_text(item: GeneratedContentItem) -> str:
    """Plain text of an item for the clipboard, followed by its score if any."""
    text = resolve_content(item.content).text

    if item.score:
        score = item.score
        text += f"\n\n---\n\nQuality Score: {score.overall}/100\n"
        if score.improvement_explanation:
            text += f"\nWhy it's improved: {score.improvement_explanation}\n"
        text += "\nScore Details:"
        text += f"\n- Clarity: {score.clarity}"
        text += f"\n- Persuasiveness: {score.persuasiveness}"
        text += f"\n- Tone Match: {score.tone_match}"
        text += f"\n- Engagement: {score.engagement}"
        if score.word_count_accuracy is not None:
            text += f"\n- Word Count Accuracy: {score.word_count_accuracy}/100"

    return text
