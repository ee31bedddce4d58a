"""Poem records: the persistent unit held by a :class:`PoemCollection`.

:func:`make_record` turns a segmentation span into a record, computing its
word count and assigning a fresh identifier and timestamp. Records are frozen;
the collection reorders them but never edits them.
"""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List

from poembook.ingestion.blocks import PoemSpan

__all__ = ["PoemRecord", "make_record", "count_words", "new_record_id", "MIN_CONTENT_LENGTH"]

PREVIEW_LENGTH = 100
MIN_CONTENT_LENGTH = 10


def count_words(text: str) -> int:
	"""Count whitespace-delimited tokens: ``"one  two\\tthree"`` -> 3."""
	tokens: List[str] = re.split(r"\s+", text or "")
	return sum(1 for t in tokens if t)


def new_record_id() -> str:
	return uuid.uuid4().hex


@dataclass(frozen=True)
class PoemRecord:
	"""One poem in the collection.

	Attributes
	----------
	id : str
		Opaque identifier, generated once and never reused.
	title : str
		Display title.
	content : str
		Trimmed plain text of the poem.
	markup : str
		Raw markup of the poem as it appeared in the source document.
	source_name : str
		Name of the document the poem came from.
	word_count : int
		Number of whitespace-delimited tokens in ``content``.
	added_at : datetime
		UTC creation time.
	"""

	id: str
	title: str
	content: str
	markup: str
	source_name: str
	word_count: int
	added_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

	@property
	def preview(self) -> str:
		"""First line of the poem, cut to 100 characters with a trailing ``...``."""
		if len(self.content) > PREVIEW_LENGTH:
			return self.content[:PREVIEW_LENGTH].split("\n")[0] + "..."
		return self.content.split("\n")[0]


def make_record(span: PoemSpan, source_name: str, min_content_length: int = MIN_CONTENT_LENGTH) -> PoemRecord:
	"""Build a :class:`PoemRecord` from a segmentation span.

	Raises ``ValueError`` when the trimmed content is not longer than
	``min_content_length``.
	"""
	if not isinstance(span, PoemSpan):
		raise TypeError("span must be a PoemSpan")
	if len(span.content.strip()) <= min_content_length:
		raise ValueError(f"poem content must be longer than {min_content_length} characters")
	return PoemRecord(
		id=new_record_id(),
		title=span.title,
		content=span.content,
		markup=span.markup,
		source_name=source_name,
		word_count=count_words(span.content),
		added_at=datetime.now(timezone.utc),
	)
