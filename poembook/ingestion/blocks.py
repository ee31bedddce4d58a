"""Structural block model for converted documents.

A converted document is an ordered list of :class:`Block` objects, one per
top-level element of the document markup, plus the markup itself. Blocks are
immutable once produced by the adapter; every later stage (title inference,
segmentation) only reads them.

Block kinds
-----------
- ``HEADING``: a level 1-3 heading (``h1``-``h3``). ``level`` holds 1, 2 or 3.
- ``PARAGRAPH``: a ``p`` element.
- ``OTHER``: any other top-level element (lists, tables, deeper headings).
  These still count as content between two headings, but paragraph based
  heuristics ignore them.

:class:`PoemSpan` is the transient output of a segmentation strategy: a title,
the trimmed plain text and the concatenated markup of the blocks it covers.
"""

from __future__ import annotations

import enum
import html
from dataclasses import dataclass
from typing import Optional

__all__ = ["BlockKind", "Block", "PoemSpan", "heading", "paragraph"]


class BlockKind(enum.Enum):
	HEADING = "heading"
	PARAGRAPH = "paragraph"
	OTHER = "other"


@dataclass(frozen=True)
class Block:
	"""One top-level element of a converted document.

	Attributes
	----------
	kind : BlockKind
		Structural type of the element.
	text : str
		Raw text content of the element (not trimmed).
	markup : str
		Outer markup of the element, as found in the document.
	is_bold : bool
		Whether the element contains bold/strong formatting.
	is_centered : bool
		Whether the element is center-aligned.
	level : int
		Heading level (1-3) for ``HEADING`` blocks, 0 otherwise.
	"""

	kind: BlockKind
	text: str
	markup: str = ""
	is_bold: bool = False
	is_centered: bool = False
	level: int = 0

	def __post_init__(self) -> None:
		if self.kind is BlockKind.HEADING and self.level not in (1, 2, 3):
			raise ValueError(f"heading level must be 1-3, got {self.level!r}")

	@property
	def stripped(self) -> str:
		return self.text.strip()

	@property
	def is_heading(self) -> bool:
		return self.kind is BlockKind.HEADING

	@property
	def is_paragraph(self) -> bool:
		return self.kind is BlockKind.PARAGRAPH


@dataclass(frozen=True)
class PoemSpan:
	"""A candidate poem cut out of one document."""

	title: str
	content: str
	markup: str


def heading(text: str, level: int = 1, markup: Optional[str] = None) -> Block:
	"""Build a heading block, synthesizing ``<hN>`` markup when none is given."""
	if markup is None:
		markup = f"<h{level}>{html.escape(text)}</h{level}>"
	return Block(kind=BlockKind.HEADING, text=text, markup=markup, level=level)


def paragraph(
	text: str,
	bold: bool = False,
	centered: bool = False,
	markup: Optional[str] = None,
) -> Block:
	"""Build a paragraph block, synthesizing ``<p>`` markup when none is given."""
	if markup is None:
		inner = html.escape(text)
		if bold:
			inner = f"<strong>{inner}</strong>"
		attrs = ' style="text-align: center;"' if centered else ""
		markup = f"<p{attrs}>{inner}</p>"
	return Block(
		kind=BlockKind.PARAGRAPH,
		text=text,
		markup=markup,
		is_bold=bold,
		is_centered=centered,
	)
