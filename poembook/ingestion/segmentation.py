"""Poem segmentation for converted documents.

A document may hold one poem or many. This module decides how many poems a
document contains, where each starts and ends, and what each is called. It
relies only on structural and typographic signals; there is no attempt at
rhyme, meter or stanza analysis.

Strategy chain
--------------
Three strategies are tried in a fixed order. The first one that finds more
than one poem wins and the rest are not consulted; results are never blended.

1. :class:`HeadingStrategy` - one poem per level 1-3 heading, covering every
   block up to the next heading.
2. :class:`ParagraphStrategy` - poems are runs of paragraphs separated by
   empty (or very short) paragraphs; a short, title-like first paragraph names
   the poem.
3. :class:`SeparatorStrategy` - the raw markup is split on visual separator
   lines (``***``, ``---``, ``___``, ``===``, ``~~~``) or on runs of four
   newlines.

If no strategy qualifies, :func:`segment_document` returns an empty list and
the caller treats the whole document as one poem via
:func:`whole_document_span`.

Minimum content
---------------
A span is only kept when its trimmed plain text is longer than
``SegmentationConfig.min_content_length`` (10 characters by default).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Pattern, Sequence

from .adapter import html_to_text
from .blocks import Block, PoemSpan
from .interface import SegmentationStrategy
from .titles import infer_title

logger = logging.getLogger(__name__)

__all__ = [
	"SegmentationConfig",
	"HeadingStrategy",
	"ParagraphStrategy",
	"SeparatorStrategy",
	"SEPARATOR_PATTERNS",
	"default_strategies",
	"segment_document",
	"whole_document_span",
]


@dataclass
class SegmentationConfig:
	"""Thresholds used by the segmentation strategies.

	Attributes
	----------
	min_content_length : int
		Spans whose trimmed text is not longer than this are dropped. Default 10.
	title_max_length : int
		Maximum length of an inferred whole-document title. Default 150.
	candidate_title_max_length : int
		Paragraphs (and separator-part first lines) must be shorter than this
		to be used as a title. Default 100.
	break_max_length : int
		A non-empty paragraph shorter than this ends the current poem once the
		poem has content. Default 10.
	min_paragraphs : int
		Paragraph separation needs strictly more paragraphs than this. Default 3.
	"""

	min_content_length: int = 10
	title_max_length: int = 150
	candidate_title_max_length: int = 100
	break_max_length: int = 10
	min_paragraphs: int = 3


def _join_text(blocks: Sequence[Block]) -> str:
	return "\n".join(b.text for b in blocks).strip()


def _join_markup(blocks: Sequence[Block]) -> str:
	return "\n".join(b.markup for b in blocks)


class HeadingStrategy:
	"""One poem per heading; the heading text is the title."""

	name = "headings"

	def __init__(self, config: SegmentationConfig | None = None) -> None:
		self.config = config or SegmentationConfig()

	def split(self, blocks: List[Block], markup: str) -> List[PoemSpan]:
		positions = [i for i, block in enumerate(blocks) if block.is_heading]
		if len(positions) < 2:
			return []

		spans: List[PoemSpan] = []
		for n, start in enumerate(positions):
			end = positions[n + 1] if n + 1 < len(positions) else len(blocks)
			body = blocks[start + 1 : end]
			content = _join_text(body)
			if len(content) <= self.config.min_content_length:
				logger.debug("headings: dropping short span under %r", blocks[start].stripped)
				continue
			title = blocks[start].stripped or f"Poem {n + 1}"
			spans.append(PoemSpan(title=title, content=content, markup=_join_markup(body)))

		return spans if len(spans) > 1 else []


_TITLE_CASE = re.compile(r"[A-Z][^.!?]*")


class ParagraphStrategy:
	"""Poems are runs of paragraphs separated by empty or very short paragraphs.

	Paragraphs are scanned in order while accumulating the current poem:

	- An empty paragraph, or one shorter than ``break_max_length`` once the
	  current poem has content, closes the current poem.
	- A title-like paragraph (short, and bold, centered, or capitalized with no
	  sentence punctuation) opening a new poem becomes its title. It also stays
	  part of the poem's content.
	- Anything else is poem content.

	Poems without a title are numbered ``Poem 1``, ``Poem 2``... in the order
	they are kept.
	"""

	name = "paragraphs"

	def __init__(self, config: SegmentationConfig | None = None) -> None:
		self.config = config or SegmentationConfig()

	def _might_be_title(self, block: Block) -> bool:
		text = block.stripped
		if not 0 < len(text) < self.config.candidate_title_max_length:
			return False
		return block.is_bold or block.is_centered or _TITLE_CASE.fullmatch(text) is not None

	def split(self, blocks: List[Block], markup: str) -> List[PoemSpan]:
		paragraphs = [b for b in blocks if b.is_paragraph]
		if len(paragraphs) <= self.config.min_paragraphs:
			return []

		spans: List[PoemSpan] = []
		current: List[Block] = []
		title = ""

		def flush() -> None:
			content = _join_text(current)
			if len(content) > self.config.min_content_length:
				spans.append(
					PoemSpan(
						title=title or f"Poem {len(spans) + 1}",
						content=content,
						markup=_join_markup(current),
					)
				)

		for block in paragraphs:
			text = block.stripped
			is_break = not text or (len(text) < self.config.break_max_length and bool(current))
			if is_break:
				if current:
					flush()
					current = []
					title = ""
			elif not current and self._might_be_title(block):
				title = text
				current.append(block)
			else:
				current.append(block)

		if current:
			flush()

		return spans if len(spans) > 1 else []


SEPARATOR_PATTERNS: List[Pattern[str]] = [
	re.compile(r"\n\s*\*{3,}\s*\n"),
	re.compile(r"\n\s*-{3,}\s*\n"),
	re.compile(r"\n\s*_{3,}\s*\n"),
	re.compile(r"\n\s*={3,}\s*\n"),
	re.compile(r"\n\s*~{3,}\s*\n"),
	re.compile(r"\n\s*\n\s*\n\s*\n"),
]


class SeparatorStrategy:
	"""Split the raw markup on separator lines such as ``***`` or ``---``.

	Patterns are tried in order; the first pattern whose split yields at least
	two usable parts wins. Each part is titled by its first non-empty line, or
	``Poem {k}`` where ``k`` is the part's 1-based position in the split
	(skipped short parts still count).
	"""

	name = "separators"

	def __init__(
		self,
		config: SegmentationConfig | None = None,
		patterns: Optional[Sequence[Pattern[str]]] = None,
	) -> None:
		self.config = config or SegmentationConfig()
		self.patterns = list(patterns) if patterns is not None else list(SEPARATOR_PATTERNS)

	def _part_title(self, content: str, index: int) -> str:
		lines = [line.strip() for line in content.split("\n") if line.strip()]
		first = lines[0] if lines else ""
		if 0 < len(first) < self.config.candidate_title_max_length:
			return first
		return f"Poem {index + 1}"

	def _spans_from_parts(self, parts: List[str]) -> List[PoemSpan]:
		spans: List[PoemSpan] = []
		for index, part in enumerate(parts):
			part = part.strip()
			content = html_to_text(part).strip()
			if len(content) <= self.config.min_content_length:
				continue
			spans.append(PoemSpan(title=self._part_title(content, index), content=content, markup=part))
		return spans

	def split(self, blocks: List[Block], markup: str) -> List[PoemSpan]:
		for pattern in self.patterns:
			parts = pattern.split(markup)
			if len(parts) < 2:
				continue
			spans = self._spans_from_parts(parts)
			if len(spans) > 1:
				logger.debug("separators: pattern %r produced %d spans", pattern.pattern, len(spans))
				return spans
		return []


def default_strategies(config: SegmentationConfig | None = None) -> List[SegmentationStrategy]:
	"""Return the standard strategy chain: headings, paragraphs, separators."""
	config = config or SegmentationConfig()
	return [HeadingStrategy(config), ParagraphStrategy(config), SeparatorStrategy(config)]


def segment_document(
	blocks: List[Block],
	markup: str,
	source_name: str = "",
	strategies: Optional[Sequence[SegmentationStrategy]] = None,
	config: SegmentationConfig | None = None,
) -> List[PoemSpan]:
	"""Split one document into poem spans.

	Parameters
	----------
	blocks : list[Block]
		Top-level blocks of the converted document, in order.
	markup : str
		Raw markup of the whole document.
	source_name : str, optional
		Document name, used for log messages only.
	strategies : sequence of SegmentationStrategy, optional
		Strategy chain to try; defaults to :func:`default_strategies`.
	config : SegmentationConfig, optional
		Thresholds for the default strategies. Ignored when ``strategies`` is
		given.

	Returns
	-------
	list[PoemSpan]
		Spans from the first strategy that found more than one poem, or an
		empty list when none did (the document is then a single poem).
	"""
	if not isinstance(blocks, list) or not all(isinstance(b, Block) for b in blocks):
		raise TypeError("blocks must be a list of Block")
	if not isinstance(markup, str):
		raise TypeError("markup must be a str")

	chain = list(strategies) if strategies is not None else default_strategies(config)
	for strategy in chain:
		spans = strategy.split(blocks, markup)
		if len(spans) > 1:
			logger.debug("%s: split by %s into %d poems", source_name or "<document>", strategy.name, len(spans))
			return spans

	logger.debug("%s: no strategy split the document", source_name or "<document>")
	return []


def whole_document_span(
	blocks: List[Block],
	markup: str,
	plain_text: str,
	source_name: str,
	config: SegmentationConfig | None = None,
) -> Optional[PoemSpan]:
	"""Treat the whole document as one poem.

	The title comes from :func:`~poembook.ingestion.titles.infer_title`.
	Returns ``None`` when the document text is too short to be a poem.
	"""
	config = config or SegmentationConfig()
	content = plain_text.strip()
	if len(content) <= config.min_content_length:
		return None
	title = infer_title(blocks, source_name, max_length=config.title_max_length)
	return PoemSpan(title=title, content=content, markup=markup)
