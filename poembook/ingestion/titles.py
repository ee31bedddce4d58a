"""Title inference for whole documents.

Used when no segmentation strategy splits a document, so the document becomes
a single poem and needs one title. Rules are tried in order and the first one
that yields text wins:

1. The first heading whose trimmed text is 1-150 characters long.
2. Among the first three paragraphs, the first bold or centered one whose
   trimmed text is 1-150 characters long.
3. The first line of the first paragraph, if 1-150 characters long.
4. The source file name without its document extension, with underscores and
   hyphens turned into spaces.
5. ``"Untitled Poem"``.

The result always has whitespace runs collapsed and is capped at 150
characters (147 plus ``"..."``).
"""

from __future__ import annotations

import re
from typing import List, Optional

from .blocks import Block

__all__ = ["DEFAULT_TITLE", "infer_title", "clean_title", "title_from_filename"]

DEFAULT_TITLE = "Untitled Poem"
TITLE_MAX_LENGTH = 150

_DOC_EXTENSION = re.compile(r"\.(docx|doc|odt|rtf|html?|txt)$", re.IGNORECASE)


def _fits(text: str, max_length: int) -> bool:
	return 0 < len(text) <= max_length


def clean_title(title: str, max_length: int = TITLE_MAX_LENGTH) -> str:
	"""Collapse whitespace and cap ``title`` at ``max_length`` characters."""
	title = re.sub(r"\s+", " ", title).strip()
	if len(title) > max_length:
		title = title[: max_length - 3] + "..."
	return title


def title_from_filename(name: str) -> str:
	"""``"my_best-poems.docx"`` -> ``"my best poems"``."""
	stem = _DOC_EXTENSION.sub("", name or "")
	return re.sub(r"[_-]", " ", stem).strip()


def _from_blocks(blocks: List[Block], max_length: int) -> Optional[str]:
	for block in blocks:
		if block.is_heading and _fits(block.stripped, max_length):
			return block.stripped

	paragraphs = [b for b in blocks if b.is_paragraph]
	for block in paragraphs[:3]:
		if _fits(block.stripped, max_length) and (block.is_bold or block.is_centered):
			return block.stripped

	if paragraphs:
		first_line = paragraphs[0].stripped.split("\n")[0].strip()
		if _fits(first_line, max_length):
			return first_line
	return None


def infer_title(
	blocks: List[Block],
	fallback_name: str,
	max_length: int = TITLE_MAX_LENGTH,
) -> str:
	"""Infer a display title for a document.

	Parameters
	----------
	blocks : list[Block]
		The document's blocks, in order.
	fallback_name : str
		Source file name, used when the blocks carry no usable title.
	max_length : int, optional
		Maximum title length (default 150).

	Returns
	-------
	str
		A non-empty, whitespace-normalized title.
	"""
	if not isinstance(blocks, list):
		raise TypeError("blocks must be a list of Block")

	title = _from_blocks(blocks, max_length) or title_from_filename(fallback_name)
	return clean_title(title, max_length) or DEFAULT_TITLE
