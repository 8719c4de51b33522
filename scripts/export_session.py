#!/usr/bin/env python3
"""
Functional export test - Formats a saved generation session.

Reads a session JSON file ({"form_state": {...}, "items": [...]}) and runs
it through the document formatters:
- Content resolution (word count per item)
- Markdown document export
- Single item HTML export (SEO metadata, score and FAQ schema as comments)

Usage:
    python scripts/export_session.py SESSION.json [--html] [--save]

Example:
    python scripts/export_session.py tests/samples/session.json
    python scripts/export_session.py tests/samples/session.json --html --save
"""
import json
import sys
from pathlib import Path

from pydantic import ValidationError

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from copy_formatter.content import resolve_content
from copy_formatter.formatters import format_copy_result_as_markdown, format_single_item_as_html
from copy_formatter.models import MarkdownExportRequest


def export_session(path: Path, html: bool = False, save: bool = False) -> None:
    """Format a saved session as Markdown, or as one HTML fragment per item."""
    print(f"\n{'=' * 60}")
    print(f"📄 Session: {path}")
    print(f"{'=' * 60}\n")

    try:
        session = MarkdownExportRequest.model_validate(json.loads(path.read_text(encoding="utf-8")))
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        print(f"❌ Invalid session file: {e}")
        return

    print("📊 Items:")
    for item in session.items:
        normalized = resolve_content(item.content)
        print(f"   - {item.display_name}: {normalized.shape.value}, {normalized.word_count} words")

    if html:
        target = session.form_state.custom_word_count
        output = "\n\n".join(format_single_item_as_html(item, target) for item in session.items)
        suffix = ".html"
    else:
        output = format_copy_result_as_markdown(
            session.form_state,
            session.items,
            original_input_score=session.original_input_score,
            prompt_evaluation=session.prompt_evaluation,
            include_inputs=session.include_inputs,
        )
        suffix = ".md"

    if save:
        filepath = path.with_suffix(suffix)
        filepath.write_text(output, encoding="utf-8")
        print(f"\n💾 Saved: {filepath}")
    else:
        print(f"\n{'─' * 60}")
        print("📄 EXPORT:")
        print(f"{'─' * 60}\n")
        print(output)


def main():
    args = sys.argv[1:]
    html = "--html" in args
    save = "--save" in args
    args = [a for a in args if a not in ("--html", "--save")]
    if not args:
        print(__doc__)
        sys.exit(1)
    export_session(Path(args[0]), html=html, save=save)


if __name__ == "__main__":
    main()
