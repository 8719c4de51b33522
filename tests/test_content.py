# -*- coding: utf-8 -*-
"""
Tests for content shape classification and resolution.
"""
from copy_formatter.content import (
    INVALID_CONTENT_TEXT,
    NO_CONTENT_TEXT,
    UNDISPLAYABLE_CONTENT_TEXT,
    ContentShape,
    classify_content,
    clean_json_response,
    is_content_empty,
    resolve_content,
    to_plain_text,
    unwrap_content,
)
from copy_formatter.models import StructuredCopy


class TestClassifyContent:
    """Tests for classify_content."""

    def test_none_is_empty(self):
        """None should classify as EMPTY."""
        assert classify_content(None) is ContentShape.EMPTY

    def test_string(self):
        """Strings are plain text."""
        assert classify_content("Hello") is ContentShape.PLAIN_TEXT

    def test_structured_dict(self, structured_copy):
        """A headline string plus a sections list is structured."""
        assert classify_content(structured_copy) is ContentShape.STRUCTURED

    def test_structured_model(self):
        """Pydantic structured copy should classify like its dict form."""
        model = StructuredCopy(headline="H", sections=[{"title": "S1", "content": "Body"}])
        assert classify_content(model) is ContentShape.STRUCTURED

    def test_headline_list(self):
        """A list of strings is a headline list."""
        assert classify_content(["One", "Two"]) is ContentShape.HEADLINES

    def test_headline_generator(self):
        """Any iterable of strings is materialized and treated as headlines."""
        assert classify_content(h for h in ["One", "Two"]) is ContentShape.HEADLINES

    def test_faq_schema(self):
        """A FAQPage object is detected by its @type."""
        assert classify_content({"@type": "FAQPage", "mainEntity": []}) is ContentShape.FAQ_SCHEMA

    def test_text_property_object(self):
        """Objects with a string text property are wrapped text."""
        assert classify_content({"output": "Hi"}) is ContentShape.WRAPPED

    def test_unrecognized(self):
        """Other objects and mixed lists are unrecognized."""
        assert classify_content({"foo": 1}) is ContentShape.UNRECOGNIZED
        assert classify_content([1, "two"]) is ContentShape.UNRECOGNIZED

    def test_numbers_coerce_to_text(self):
        """Scalars other than strings are treated as text."""
        assert classify_content(42) is ContentShape.PLAIN_TEXT


class TestUnwrapContent:
    """Tests for unwrap_content."""

    def test_wrapper_with_metadata(self, structured_copy):
        """Should return the inner content and its metadata."""
        wrapper = {
            "content": structured_copy,
            "seoMetadata": {"urlSlugs": ["grow"]},
            "faqSchema": {"@type": "FAQPage", "mainEntity": []},
        }

        inner, seo, faq = unwrap_content(wrapper)

        assert inner == structured_copy
        assert seo == {"urlSlugs": ["grow"]}
        assert faq["@type"] == "FAQPage"

    def test_wrapper_without_metadata(self):
        """Non-string content should be unwrapped even without metadata."""
        inner, seo, faq = unwrap_content({"content": ["A", "B"]})

        assert inner == ["A", "B"]
        assert seo is None
        assert faq is None

    def test_legacy_content_string_is_not_unwrapped(self):
        """A bare {"content": "..."} stays a text response."""
        value = {"content": "Hello"}
        assert unwrap_content(value) == (value, None, None)

    def test_structured_is_not_unwrapped(self, structured_copy):
        """Structured copy is never treated as a wrapper."""
        assert unwrap_content(structured_copy)[0] is structured_copy


class TestResolveContent:
    """Tests for resolve_content."""

    def test_structured_round_trip(self):
        """Structured copy should be laid out with exact whitespace."""
        result = resolve_content({"headline": "H", "sections": [{"title": "S1", "content": "Body text here"}]})

        assert result.text == "H\n\nS1\nBody text here\n\n"
        assert result.word_count == 5
        assert result.is_structured is True
        assert result.shape is ContentShape.STRUCTURED

    def test_structured_with_lists_and_markdown(self, structured_copy):
        """Should strip Markdown, bullet list items and skip untitled sections."""
        result = resolve_content(structured_copy)

        assert result.text == (
            "Grow Faster\n\n"
            "Why us\nWe ship every week.\n\n"
            "Benefits\n• Fast setup\n• No lock-in\n\n"
        )
        assert "Untitled" not in result.text
        assert result.word_count == 15
        assert result.word_count_accuracy == 85
        assert result.structured_content == structured_copy

    def test_plain_string(self):
        """Markdown strings are stripped before counting."""
        result = resolve_content("# Title\n\n**Bold** words here")

        assert result.text == "Title\n\nBold words here"
        assert result.word_count == 4
        assert result.is_structured is False

    def test_none(self):
        """None resolves to empty text."""
        result = resolve_content(None)

        assert result.text == ""
        assert result.word_count == 0

    def test_whitespace_only_has_no_words(self):
        """Word count is zero for blank text."""
        assert resolve_content("   \n  ").word_count == 0

    def test_text_property_priority(self):
        """Should prefer text over content, output and message."""
        result = resolve_content({"message": "ignored", "text": "**Used** here"})

        assert result.text == "Used here"
        assert result.shape is ContentShape.WRAPPED

    def test_wrapper_keeps_metadata(self, structured_copy):
        """Unwrapped content should carry the wrapper metadata."""
        result = resolve_content({"content": structured_copy, "seoMetadata": {"urlSlugs": ["grow"]}})

        assert result.is_structured is True
        assert result.seo_metadata == {"urlSlugs": ["grow"]}
        assert result.faq_schema is None

    def test_wrapped_string_with_metadata(self):
        """A wrapped string is resolved as text."""
        result = resolve_content({"content": "Hello **world**", "faqSchema": {"@type": "FAQPage"}})

        assert result.text == "Hello world"
        assert result.shape is ContentShape.PLAIN_TEXT
        assert result.faq_schema == {"@type": "FAQPage"}

    def test_headline_list_falls_back_to_json(self):
        """Lists are pretty-printed as JSON with a 2-space indent."""
        result = resolve_content(["A", "B"])

        assert result.text == '[\n  "A",\n  "B"\n]'
        assert result.word_count == 4

    def test_unrecognized_object_falls_back_to_json(self):
        """Unknown objects are pretty-printed as JSON."""
        result = resolve_content({"foo": "bar"})

        assert result.text == '{\n  "foo": "bar"\n}'
        assert result.shape is ContentShape.UNRECOGNIZED

    def test_unserializable_content(self):
        """Serialization failures give a fixed message and no words."""
        result = resolve_content({"foo": object()})

        assert result.text == INVALID_CONTENT_TEXT
        assert result.word_count == 0

    def test_deeply_nested_content(self):
        """Content nested too deep to serialize gives the fixed message."""
        value = []
        for _ in range(5000):
            value = [value]

        result = resolve_content(value)

        assert result.text == INVALID_CONTENT_TEXT
        assert result.word_count == 0

    def test_wrapper_with_non_object_metadata(self):
        """Metadata that is not an object is dropped."""
        result = resolve_content({"content": "Hi", "seoMetadata": "x", "faqSchema": ["y"]})

        assert result.text == "Hi"
        assert result.seo_metadata is None
        assert result.faq_schema is None

    def test_structured_with_non_string_fields(self):
        """Numbers in titles, bodies and list items are rendered as text."""
        result = resolve_content(
            {"headline": "H", "sections": [{"title": 3, "content": 7}, {"title": "L", "listItems": [1, "two"]}]}
        )

        assert result.text == "H\n\n3\n7\n\nL\n• 1\n• two\n\n"

    def test_list_items_not_a_list(self):
        """A listItems value that is not a list is ignored."""
        result = resolve_content({"headline": "H", "sections": [{"title": "S", "listItems": "abc"}]})

        assert result.text == "H\n\nS\n"


class TestToPlainText:
    """Tests for to_plain_text."""

    def test_none(self):
        """Missing content has a placeholder."""
        assert to_plain_text(None) == NO_CONTENT_TEXT

    def test_string_keeps_markdown(self):
        """Strings are returned unchanged."""
        assert to_plain_text("**Bold**") == "**Bold**"

    def test_headlines_numbered(self):
        """Headline lists become a numbered list."""
        assert to_plain_text(["First", "Second"]) == "1. First\n2. Second"

    def test_headlines_from_generator(self):
        """One-shot iterables are read once and numbered."""
        assert to_plain_text(h for h in ["One", "Two"]) == "1. One\n2. Two"

    def test_deeply_nested_content(self):
        """Content nested too deep to display gives the fixed message."""
        value = []
        for _ in range(5000):
            value = [value]

        assert to_plain_text(value) == UNDISPLAYABLE_CONTENT_TEXT

    def test_structured_keeps_markdown(self, structured_copy):
        """Structured copy keeps its Markdown and is trimmed."""
        assert to_plain_text(structured_copy) == (
            "# Grow **Faster**\n\n"
            "Why us\nWe ship *every* week.\n\n"
            "Benefits\n• Fast setup\n• **No** lock-in"
        )

    def test_wrapped_text(self):
        """Text properties are returned as is."""
        assert to_plain_text({"text": "*Hi*"}) == "*Hi*"

    def test_unserializable(self):
        """Serialization failures give a fixed message."""
        assert to_plain_text({"foo": object()}) == UNDISPLAYABLE_CONTENT_TEXT


class TestIsContentEmpty:
    """Tests for is_content_empty."""

    def test_empty_values(self):
        """Blank or missing values are empty."""
        assert is_content_empty(None)
        assert is_content_empty("")
        assert is_content_empty("   ")
        assert is_content_empty({})
        assert is_content_empty([])
        assert is_content_empty(["", "  "])
        assert is_content_empty({"content": "  "})
        assert is_content_empty({"headline": " ", "sections": []})

    def test_non_empty_values(self, structured_copy):
        """Values with something to render are not empty."""
        assert not is_content_empty("Hi")
        assert not is_content_empty(["Headline"])
        assert not is_content_empty({"text": "Hi"})
        assert not is_content_empty(structured_copy)
        assert not is_content_empty({"content": structured_copy})


class TestCleanJsonResponse:
    """Tests for clean_json_response."""

    def test_bare_json_unchanged(self):
        """Valid JSON is returned as is."""
        assert clean_json_response('{"a": 1}') == '{"a": 1}'

    def test_code_fence(self):
        """JSON inside a fenced block is extracted."""
        assert clean_json_response('Here you go:\n```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_leading_json_marker(self):
        """A stray "json" language marker is removed."""
        assert clean_json_response('json {"a": 1') == '{"a": 1'
