"""Render an ordered poem list as one combined HTML document.

The output starts with a table of contents that links to one section per poem.
Each section is addressable by a stable anchor derived from the poem's 1-based
position and its id (``poem-{position}-{id}``), so the same snapshot always
renders to the same document.

Functions
---------
anchor_id(position, record) -> str
	Anchor for the poem at 1-based ``position``.
render_table_of_contents(records) -> str
	Heading plus ordered list of links; empty string for no records.
render_document(records, title="A Collection of Poems") -> str
	Full standalone HTML page with table of contents and poem sections.

Poem markup is inserted as-is; titles and source names are escaped.
"""

from __future__ import annotations

import html
from typing import List, Sequence

from poembook.collection.records import PoemRecord

__all__ = ["DEFAULT_DOCUMENT_TITLE", "anchor_id", "render_table_of_contents", "render_document"]

DEFAULT_DOCUMENT_TITLE = "A Collection of Poems"

_STYLE = """
body { font-family: 'Inter', sans-serif; line-height: 1.6; margin: 20px auto; max-width: 800px; padding: 0 20px; color: #333; }
h1 { text-align: center; font-size: 3em; color: #1a202c; margin-bottom: 30px; }
h2 { font-size: 2em; color: #333; margin-top: 40px; margin-bottom: 15px; border-bottom: 1px solid #eee; padding-bottom: 5px; }
p { margin-bottom: 1em; }
.poem-container { margin-bottom: 40px; padding-bottom: 20px; border-bottom: 1px dashed #ddd; page-break-inside: avoid; }
.poem-container:last-of-type { border-bottom: none; margin-bottom: 0; }
.poem-source { font-style: italic; color: #666; font-size: 0.9em; margin-top: -10px; margin-bottom: 15px; }
.table-of-contents { margin-bottom: 50px; padding: 20px; background-color: #f9f9f9; border: 1px solid #eee; border-radius: 8px; }
.table-of-contents a { color: #007bff; text-decoration: none; }
.page-break-after { page-break-after: always; }
""".strip()


def anchor_id(position: int, record: PoemRecord) -> str:
	"""Anchor for the poem at 1-based ``position``."""
	if position < 1:
		raise ValueError("position is 1-based")
	return f"poem-{position}-{record.id}"


def render_table_of_contents(records: Sequence[PoemRecord]) -> str:
	if not records:
		return ""
	lines: List[str] = [
		"<h2>Table of Contents</h2>",
		"<ol>",
	]
	for position, record in enumerate(records, start=1):
		lines.append(
			f'<li><a href="#{anchor_id(position, record)}">{html.escape(record.title)}</a></li>'
		)
	lines.append("</ol>")
	lines.append('<div class="page-break-after"></div>')
	return "\n".join(lines) + "\n"


def _render_section(position: int, record: PoemRecord) -> str:
	return "\n".join(
		[
			f'<div class="poem-container" id="{anchor_id(position, record)}">',
			f"<h2>{html.escape(record.title)}</h2>",
			f'<p class="poem-source">From: {html.escape(record.source_name)}</p>',
			record.markup,
			"</div>",
		]
	)


def render_document(records: Sequence[PoemRecord], title: str = DEFAULT_DOCUMENT_TITLE) -> str:
	"""Render ``records`` (in order) as a complete HTML page.

	Parameters
	----------
	records : sequence of PoemRecord
		Typically ``PoemCollection.snapshot()``.
	title : str, optional
		Heading and page title of the combined document.

	Returns
	-------
	str
		HTML document. Poems are separated by page-break divs so printed or
		PDF output starts each poem on a new page.
	"""
	parts: List[str] = [
		"<!DOCTYPE html>",
		'<html lang="en">',
		"<head>",
		'<meta charset="UTF-8">',
		'<meta name="viewport" content="width=device-width, initial-scale=1.0">',
		f"<title>{html.escape(title)}</title>",
		f"<style>\n{_STYLE}\n</style>",
		"</head>",
		"<body>",
		f"<h1>{html.escape(title)}</h1>",
		'<div class="table-of-contents">',
		render_table_of_contents(records),
		"</div>",
	]
	for position, record in enumerate(records, start=1):
		parts.append(_render_section(position, record))
		if position < len(records):
			parts.append('<div class="page-break-after"></div>')
	parts.extend(["</body>", "</html>"])
	return "\n".join(parts) + "\n"
