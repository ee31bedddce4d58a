"""Compile poems from Word documents into one combined document.

Pipeline
--------
1) Keep only ``.docx`` inputs (others are reported and ignored).
2) Convert each document with mammoth and split it into poems.
3) Append the poems to one collection, skipping duplicates.
4) Render the collection with a linked table of contents and write it out as
   ``.html``, or as ``.docx`` holding the same HTML (Word opens it as a
   document).

A JSON report with the appended / duplicate / error counts is printed last.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Tuple

# Ensure repository root is on sys.path so 'poembook' imports resolve when running as a script
_REPO_ROOT = Path(__file__).resolve().parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from poembook.collection.manager import PoemCollection  # noqa: E402
from poembook.config import load_config  # noqa: E402
from poembook.export.render import render_document  # noqa: E402
from poembook.ingestion.batch import process_documents  # noqa: E402

_FORMATS = ("html", "docx")


def _split_inputs(paths: List[str]) -> Tuple[List[Path], List[Path]]:
    valid: List[Path] = []
    ignored: List[Path] = []
    for raw in paths:
        p = Path(raw)
        if p.suffix.lower() == ".docx" and p.is_file():
            valid.append(p)
        else:
            ignored.append(p)
    return valid, ignored


def _output_path(output: str, fmt: str) -> Path:
    path = Path(output)
    if path.suffix.lower() != f".{fmt}":
        path = path.with_name(f"{path.name}.{fmt}")
    return path


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Combine poems from Word documents")
    parser.add_argument("inputs", nargs="+", help="Word (.docx) documents, processed in order")
    parser.add_argument(
        "--output",
        "-o",
        default="Combined_Poems",
        help="Output file (extension added from --format; default: Combined_Poems)",
    )
    parser.add_argument(
        "--format", choices=_FORMATS, default="html", help="Export format (default: html)"
    )
    parser.add_argument("--config", default=None, help="Optional YAML config file")
    parser.add_argument("--title", default=None, help="Heading of the combined document")
    parser.add_argument("--progress", action="store_true", help="Show a progress bar")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)
    valid, ignored = _split_inputs(args.inputs)
    if ignored:
        print(
            f"{len(ignored)} invalid file(s) ignored. Only .docx files are supported.",
            file=sys.stderr,
        )
    if not valid:
        print("Please select Word documents first!", file=sys.stderr)
        return 1

    collection = PoemCollection(dedup_min_length=config.dedup_min_length)
    report = process_documents(
        [(p.read_bytes(), p.name) for p in valid],
        collection,
        config=config.segmentation,
        show_progress=args.progress or config.show_progress,
    )

    print("=== Poem Compilation Summary ===")
    print(report.summary_message())
    for name, message in report.errors:
        print(f"{name}: {message}", file=sys.stderr)

    records = collection.snapshot()
    written = None
    if records:
        out_path = _output_path(args.output, args.format)
        out_path.write_text(
            render_document(records, title=args.title or config.document_title),
            encoding="utf-8",
        )
        written = str(out_path)
        print(f"Wrote {len(records)} poem(s) to {out_path}")
        for i, record in enumerate(records, start=1):
            print(f"{i:>3}. {record.title} ({record.word_count} words, from {record.source_name})")

    print("\n=== Compilation Report (JSON) ===")
    print(
        json.dumps(
            {
                "appended": report.appended,
                "duplicates": report.duplicates,
                "errors": [list(e) for e in report.errors],
                "output": written,
            },
            indent=2,
        )
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
