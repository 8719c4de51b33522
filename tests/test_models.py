# -*- coding: utf-8 -*-
"""
Tests for the Pydantic models.
"""
import pytest
from pydantic import ValidationError

from copy_formatter.models import (
    FaqExtractResponse,
    FaqItem,
    FormState,
    GeneratedContentItem,
    GeneratedContentItemType,
    ScoreData,
    SeoMetadata,
    StructuredCopy,
)


class TestModels:
    """Tests for the Pydantic models."""

    def test_camel_case_aliases(self):
        """Models accept the camelCase keys of the generation API."""
        item = GeneratedContentItem.model_validate(
            {"type": "restyled_improved", "content": "Hi", "sourceDisplayName": "Copy 1", "persona": "Ava"}
        )
        assert item.type is GeneratedContentItemType.RESTYLED_IMPROVED
        assert item.source_display_name == "Copy 1"

    def test_item_defaults(self):
        """Items get an id and a timestamp."""
        first = GeneratedContentItem(type=GeneratedContentItemType.IMPROVED)
        second = GeneratedContentItem(type=GeneratedContentItemType.IMPROVED)
        assert first.id != second.id
        assert first.generated_at.tzinfo is not None
        assert first.content is None

    def test_display_name(self):
        """Display name falls back to the type and adds the persona voice."""
        assert GeneratedContentItem(type="alternative").display_name == "alternative"
        item = GeneratedContentItem(type="alternative", source_display_name="Alt 2", persona="Ben")
        assert item.display_name == "Alt 2 (Ben's Voice)"

    def test_score_bounds(self):
        """Overall and word count accuracy scores are between 0 and 100."""
        fields = {"clarity": "a", "persuasiveness": "b", "toneMatch": "c", "engagement": "d"}
        assert ScoreData(overall=100, **fields).tone_match == "c"
        with pytest.raises(ValidationError):
            ScoreData(overall=101, **fields)
        with pytest.raises(ValidationError):
            ScoreData(overall=50, wordCountAccuracy=-1, **fields)

    def test_seo_metadata_dump_by_alias(self):
        """SEO metadata round-trips through its camelCase form."""
        seo = SeoMetadata(urlSlugs=["a-b"], ogTitles=["T"])
        dumped = seo.model_dump(by_alias=True)
        assert dumped["urlSlugs"] == ["a-b"]
        assert dumped["h2Headings"] == []
        assert SeoMetadata.model_validate(dumped) == seo

    def test_structured_copy_sections(self):
        """Structured sections default to empty titles."""
        copy = StructuredCopy.model_validate({"headline": "H", "sections": [{"listItems": ["x"]}]})
        assert copy.sections[0].title == ""
        assert copy.sections[0].list_items == ["x"]

    def test_form_state_defaults(self):
        """Form state has usable defaults."""
        state = FormState()
        assert state.tab == "create"
        assert state.word_count == "Medium: 100-200"

    def test_form_state_rejects_unknown_tab(self):
        """Unknown tabs are rejected."""
        with pytest.raises(ValidationError):
            FormState(tab="settings")

    def test_faq_response_alias(self):
        """The FAQ schema is exposed as "schema"."""
        response = FaqExtractResponse(items=[FaqItem(question="Q", answer="A")], faq_schema={"@type": "FAQPage"})
        assert response.model_dump(by_alias=True)["schema"] == {"@type": "FAQPage"}
        assert FaqExtractResponse.model_validate({"items": [], "schema": {"a": 1}}).faq_schema == {"a": 1}
