# -*- coding: utf-8 -*-
"""
Pytest configuration and fixtures.
"""
import pytest
from fastapi.testclient import TestClient

from copy_formatter.api import app
from copy_formatter.models import (
    ContentQualityScore,
    FormState,
    GeneratedContentItem,
    GeneratedContentItemType,
    ScoreData,
    SeoMetadata,
)


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def structured_copy():
    """Structured copy as returned by the generation API."""
    return {
        "headline": "# Grow **Faster**",
        "sections": [
            {"title": "Why us", "content": "We ship *every* week."},
            {"title": "Benefits", "listItems": ["Fast setup", "**No** lock-in"]},
            {"content": "Untitled sections are skipped."},
        ],
        "wordCountAccuracy": 85,
    }


@pytest.fixture
def score():
    """Score data for a generated item."""
    return ScoreData(
        overall=82,
        clarity="Clear and direct",
        persuasiveness="Strong call to action",
        tone_match="Matches the professional tone",
        engagement="High",
        word_count_accuracy=95,
        improvement_explanation="Tighter structure and a clearer offer.",
    )


@pytest.fixture
def seo_metadata():
    """SEO metadata with a few variants."""
    return SeoMetadata(
        url_slugs=["grow-faster"],
        meta_descriptions=["Grow your business faster with weekly releases."],
        h1_variants=["Grow Faster"],
        og_titles=["Grow Faster Today"],
    )


@pytest.fixture
def form_state():
    """Form state of a "create" session."""
    return FormState(
        tab="create",
        language="English",
        tone="Friendly",
        word_count="Custom",
        custom_word_count=150,
        business_description="A SaaS tool that automates invoicing.",
        target_audience="Freelancers",
        keywords="invoicing, automation",
        business_description_score=ContentQualityScore(score=70, tips=["Mention pricing"]),
    )


@pytest.fixture
def improved_item(score):
    """Improved copy item with a score."""
    return GeneratedContentItem(
        type=GeneratedContentItemType.IMPROVED,
        content="Invoicing made **simple**.\n\nGet paid faster.",
        source_display_name="Generated Copy 1",
        score=score,
    )


@pytest.fixture
def seo_item(seo_metadata):
    """Dedicated SEO metadata item (metadata only, no content)."""
    return GeneratedContentItem(
        type=GeneratedContentItemType.SEO_METADATA,
        seo_metadata=seo_metadata,
        source_display_name="Generated Copy 1",
    )
