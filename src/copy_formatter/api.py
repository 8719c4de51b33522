# -*- coding: utf-8 -*-
"""
FastAPI API exposing the content formatting functions.
"""
import logging
from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from . import __version__
from .config import settings
from .content import resolve_content, to_plain_text
from .faq import extract_faq_content, generate_faq_schema, sanitize_faq_schema
from .formatters import (
    format_copy_result_as_html,
    format_copy_result_as_markdown,
    format_item_as_plain_text,
    format_single_item_as_html,
)
from .logging_config import setup_logging
from .markdown import count_words, markdown_to_html, strip_markdown
from .middleware import PayloadSizeMiddleware, RequestContextMiddleware
from .models import (
    ContentRequest,
    ExportResponse,
    FaqExtractRequest,
    FaqExtractResponse,
    HealthResponse,
    HtmlExportRequest,
    HtmlResponse,
    ItemExportRequest,
    MarkdownExportRequest,
    MarkdownRequest,
    NormalizedContentResponse,
    TextRequest,
    TextResponse,
    WordCountRequest,
    WordCountResponse,
    WordCountStatusResponse,
)
from .scoring import calculate_word_count_accuracy, word_count_status

# Setup structured logging
setup_logging()
logger = logging.getLogger(__name__)


# noinspection PyUnusedLocal
@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application lifecycle management."""
    logger.info("Starting Copy Formatter service")
    yield
    logger.info("Shutting down Copy Formatter service")


app = FastAPI(
    title="Copy Formatter Service",
    description="Normalizes AI-generated copy and formats it as text, Markdown, HTML and FAQ JSON-LD",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.DOCS_ENABLED else None,
    redoc_url="/redoc" if settings.DOCS_ENABLED else None,
)

# Middleware stack (order matters: last added = first executed)
app.add_middleware(GZipMiddleware, minimum_size=settings.GZIP_MIN_SIZE)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(PayloadSizeMiddleware)
app.add_middleware(RequestContextMiddleware)


def _check_size(text: str | None) -> None:
    """Reject text payloads larger than the configured limit."""
    if text and len(text) > settings.MAX_CONTENT_CHARS:
        logger.warning("Payload too large", extra={"length": len(text)})
        raise HTTPException(
            status_code=413,
            detail=f"Content exceeds {settings.MAX_CONTENT_CHARS} characters",
        )


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Service health endpoint."""
    return HealthResponse(status="healthy", version=__version__)


@app.post("/content/resolve", response_model=NormalizedContentResponse)
async def resolve(request: ContentRequest) -> NormalizedContentResponse:
    """
    Resolve generated content of any shape into stripped text and a word count.

    - **content**: string, structured copy, headline list or wrapper object
    """
    normalized = resolve_content(request.content)
    data = asdict(normalized)
    data["shape"] = normalized.shape.value
    return NormalizedContentResponse(**data)


@app.post("/content/plain-text", response_model=TextResponse)
async def plain_text(request: ContentRequest) -> TextResponse:
    """Render generated content as export text (Markdown kept)."""
    text = to_plain_text(request.content)
    return TextResponse(text=text, word_count=count_words(text))


@app.post("/content/word-count", response_model=WordCountResponse)
async def word_count(request: WordCountRequest) -> WordCountResponse:
    """Score a word count against its target."""
    status = word_count_status(request.actual, request.target)
    return WordCountResponse(
        accuracy=calculate_word_count_accuracy(request.actual, request.target),
        status=WordCountStatusResponse(**asdict(status)) if status else None,
    )


@app.post("/markdown/strip", response_model=TextResponse)
async def strip(request: TextRequest) -> TextResponse:
    """Remove Markdown formatting and count the remaining words."""
    _check_size(request.text)
    text = strip_markdown(request.text)
    return TextResponse(text=text, word_count=count_words(text))


@app.post("/markdown/html", response_model=HtmlResponse)
async def to_html(request: MarkdownRequest) -> HtmlResponse:
    """Convert Markdown to HTML."""
    _check_size(request.markdown)
    return HtmlResponse(html=markdown_to_html(request.markdown))


@app.post("/faq/extract", response_model=FaqExtractResponse)
async def extract_faq(request: FaqExtractRequest) -> FaqExtractResponse:
    """
    Extract question/answer pairs from text and build their FAQPage schema.

    - **sanitize**: clean the schema (defaults to SANITIZE_FAQ_SCHEMA)
    - **max_length**: answer length limit (defaults to FAQ_ANSWER_MAX_LENGTH)
    """
    _check_size(request.text)

    items = extract_faq_content(request.text)
    schema = generate_faq_schema(items)

    sanitize = settings.SANITIZE_FAQ_SCHEMA if request.sanitize is None else request.sanitize
    if sanitize:
        schema = sanitize_faq_schema(schema, request.max_length or settings.FAQ_ANSWER_MAX_LENGTH)

    logger.info("FAQ extracted", extra={"items": len(items), "sanitized": sanitize})
    return FaqExtractResponse(items=items, faq_schema=schema)


@app.post("/export/markdown", response_model=ExportResponse)
async def export_markdown(request: MarkdownExportRequest) -> ExportResponse:
    """Export generated items as a Markdown document."""
    content = format_copy_result_as_markdown(
        request.form_state,
        request.items,
        original_input_score=request.original_input_score,
        prompt_evaluation=request.prompt_evaluation,
        include_inputs=request.include_inputs,
    )
    logger.info("Markdown export", extra={"items": len(request.items), "length": len(content)})
    return ExportResponse(format="markdown", content=content)


@app.post("/export/html", response_model=ExportResponse)
async def export_html(request: HtmlExportRequest) -> ExportResponse:
    """Export a copy result as an HTML document."""
    content = format_copy_result_as_html(
        request.form_state,
        request.copy_result,
        prompt_evaluation=request.prompt_evaluation,
        selected_persona=request.selected_persona,
    )
    return ExportResponse(format="html", content=content)


@app.post("/export/item/html", response_model=ExportResponse)
async def export_item_html(request: ItemExportRequest) -> ExportResponse:
    """Export one generated item as HTML with embedded metadata comments."""
    content = format_single_item_as_html(request.item, request.target_word_count)
    return ExportResponse(format="html", content=content)


@app.post("/export/item/text", response_model=ExportResponse)
async def export_item_text(request: ItemExportRequest) -> ExportResponse:
    """Export one generated item as plain text for the clipboard."""
    return ExportResponse(format="text", content=format_item_as_plain_text(request.item))
