# -*- coding: utf-8 -*-
"""
Pydantic data models for generated content, scores and the API.

Field names are snake_case; the camelCase keys used by the generation API
are accepted as aliases and produced again with ``by_alias=True``.
"""
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model accepting both snake_case and camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class GeneratedContentItemType(str, Enum):
    """Kind of generated content item."""

    IMPROVED = "improved"
    ALTERNATIVE = "alternative"
    RESTYLED_IMPROVED = "restyled_improved"
    RESTYLED_ALTERNATIVE = "restyled_alternative"
    SEO_METADATA = "seo_metadata"
    FAQ_SCHEMA = "faq_schema"


# =============================================================================
# Content shapes
# =============================================================================


class StructuredCopySection(CamelModel):
    """One titled section of structured copy."""

    title: str = ""
    content: str | None = None
    list_items: list[str] | None = None


class StructuredCopy(CamelModel):
    """Headline plus titled sections."""

    headline: str
    sections: list[StructuredCopySection] = Field(default_factory=list)
    word_count_accuracy: int | None = None


class FaqItem(BaseModel):
    """A single question/answer pair."""

    question: str
    answer: str


# =============================================================================
# Scores and metadata
# =============================================================================


class ContentQualityScore(CamelModel):
    """Quality score of a form input (business description, original copy)."""

    score: int
    tips: list[str] = Field(default_factory=list)


class PromptEvaluation(CamelModel):
    """Evaluation of the prompt built from the form."""

    score: int
    tips: list[str] = Field(default_factory=list)


class ScoreData(CamelModel):
    """Quality score of a generated content item."""

    overall: int = Field(..., ge=0, le=100)
    clarity: str
    persuasiveness: str
    tone_match: str
    engagement: str
    word_count_accuracy: int | None = Field(default=None, ge=0, le=100)
    improvement_explanation: str | None = None


class GeoScoreCriterion(CamelModel):
    """One weighted Generative Engine Optimization criterion."""

    criterion: str
    score: int | float
    detected: bool
    explanation: str = ""


class GeoScoreData(CamelModel):
    """Generative Engine Optimization score with breakdown and suggestions."""

    overall: int
    breakdown: list[GeoScoreCriterion] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)


class SeoMetadata(CamelModel):
    """SEO metadata variants generated for a piece of content."""

    url_slugs: list[str] = Field(default_factory=list)
    meta_descriptions: list[str] = Field(default_factory=list)
    h1_variants: list[str] = Field(default_factory=list)
    h2_headings: list[str] = Field(default_factory=list)
    h3_headings: list[str] = Field(default_factory=list)
    og_titles: list[str] = Field(default_factory=list)
    og_descriptions: list[str] = Field(default_factory=list)


# =============================================================================
# Generated items and form context
# =============================================================================


class GeneratedContentItem(CamelModel):
    """One produced artifact: initial copy, alternative, restyled version..."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    type: GeneratedContentItemType
    content: Any = None
    persona: str | None = None
    score: ScoreData | None = None
    geo_score: GeoScoreData | None = None
    seo_metadata: SeoMetadata | None = None
    faq_schema: dict[str, Any] | None = None
    modification_instruction: str | None = None

    # Link to the item this one was generated from
    source_id: str | None = None
    source_type: GeneratedContentItemType | None = None
    source_index: int | None = None
    source_display_name: str | None = None

    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def display_name(self) -> str:
        """Heading used for this item in exported documents."""
        name = self.source_display_name or self.type.value
        if self.persona:
            name += f" ({self.persona}'s Voice)"
        return name


class FormState(CamelModel):
    """Form values read by the document formatters."""

    tab: Literal["create", "improve", "copyMaker"] = "create"
    language: str = "English"
    tone: str = "Professional"
    word_count: str = "Medium: 100-200"
    custom_word_count: int | None = None
    business_description: str | None = None
    original_copy: str | None = None
    target_audience: str | None = None
    key_message: str | None = None
    call_to_action: str | None = None
    desired_emotion: str | None = None
    brand_values: str | None = None
    keywords: str | None = None
    business_description_score: ContentQualityScore | None = None
    original_copy_score: ContentQualityScore | None = None
    selected_persona: str | None = None


class PersonaVersion(CamelModel):
    """Content restyled in a persona's voice."""

    content: Any = None
    persona: str


class PersonaHeadlines(CamelModel):
    """Headline ideas restyled in a persona's voice."""

    headlines: list[str] = Field(default_factory=list)
    persona: str


class CopyResult(CamelModel):
    """Result of a generation session, including legacy single-version fields."""

    improved_copy: Any = None
    alternative_copy: Any = None
    headlines: list[str] | None = None
    generated_versions: list[GeneratedContentItem] = Field(default_factory=list)

    restyled_improved_copy: Any = None
    restyled_improved_copy_persona: str | None = None
    restyled_improved_versions: list[PersonaVersion] = Field(default_factory=list)

    restyled_alternative_copy: Any = None
    restyled_alternative_copy_persona: str | None = None

    restyled_headlines: list[str] | None = None
    restyled_headlines_persona: str | None = None
    restyled_headlines_versions: list[PersonaHeadlines] = Field(default_factory=list)

    improved_copy_score: ScoreData | None = None
    alternative_copy_score: ScoreData | None = None
    restyled_improved_copy_score: ScoreData | None = None
    restyled_alternative_copy_score: ScoreData | None = None

    alternative_versions: list[Any] = Field(default_factory=list)
    alternative_version_scores: list[ScoreData | None] = Field(default_factory=list)
    restyled_alternative_versions: list[Any] = Field(default_factory=list)
    restyled_alternative_version_scores: list[ScoreData | None] = Field(default_factory=list)

    word_count_accuracy: int | None = None
    seo_metadata: SeoMetadata | None = None
    geo_score: GeoScoreData | None = None


# =============================================================================
# API schemas
# =============================================================================


class ContentRequest(BaseModel):
    """Request carrying a generated content value of any shape."""

    content: Any = None


class NormalizedContentResponse(BaseModel):
    """Normalized content returned by /content/resolve."""

    text: str
    word_count: int
    shape: str
    is_structured: bool
    structured_content: dict[str, Any] | None = None
    word_count_accuracy: int | None = None
    seo_metadata: dict[str, Any] | None = None
    faq_schema: dict[str, Any] | None = None


class TextRequest(BaseModel):
    """Request carrying a text or Markdown string."""

    text: str = ""


class TextResponse(BaseModel):
    """Plain text with its word count."""

    text: str
    word_count: int = 0


class MarkdownRequest(BaseModel):
    """Markdown to convert to HTML."""

    markdown: str = ""


class HtmlResponse(BaseModel):
    """Converted HTML fragment."""

    html: str


class WordCountRequest(BaseModel):
    """Actual and target word counts."""

    actual: int = Field(..., ge=0)
    target: int


class WordCountStatusResponse(BaseModel):
    """Display bucket for a word count compared to its target."""

    level: Literal["perfect", "close", "near", "far"]
    message: str
    difference: int
    percent_difference: float


class WordCountResponse(BaseModel):
    """Word count accuracy score and display status."""

    accuracy: int
    status: WordCountStatusResponse | None = None


class FaqExtractRequest(BaseModel):
    """Free text to scan for question/answer pairs."""

    text: str = ""
    sanitize: bool | None = None
    max_length: int | None = Field(default=None, ge=1)


class FaqExtractResponse(BaseModel):
    """Extracted FAQ items and their JSON-LD schema."""

    model_config = ConfigDict(populate_by_name=True)

    items: list[FaqItem]
    faq_schema: dict[str, Any] = Field(default_factory=dict, alias="schema")


class MarkdownExportRequest(BaseModel):
    """Inputs of the Markdown document export."""

    form_state: FormState = Field(default_factory=FormState)
    items: list[GeneratedContentItem] = Field(default_factory=list)
    original_input_score: ScoreData | None = None
    prompt_evaluation: PromptEvaluation | None = None
    include_inputs: bool = True


class HtmlExportRequest(BaseModel):
    """Inputs of the full HTML document export."""

    form_state: FormState = Field(default_factory=FormState)
    copy_result: CopyResult = Field(default_factory=CopyResult)
    prompt_evaluation: PromptEvaluation | None = None
    selected_persona: str | None = None


class ItemExportRequest(BaseModel):
    """A single generated item to export."""

    item: GeneratedContentItem
    target_word_count: int | None = None


class ExportResponse(BaseModel):
    """Exported document."""

    format: Literal["markdown", "html", "text"]
    content: str


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    version: str
