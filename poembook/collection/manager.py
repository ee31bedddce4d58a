"""Ordered, deduplicated collection of poem records.

:class:`PoemCollection` is the only owner of the poem list. Insertion order is
display and export order; the list changes only through :meth:`append`,
:meth:`move_to`, :meth:`remove_at` and :meth:`clear`.

Duplicate rule
--------------
A record is a duplicate of an existing one when both titles are equal ignoring
case AND the existing record's trimmed content is longer than
``dedup_min_length`` (50 by default) and identical to the new record's trimmed
content. Short identical poems are never treated as duplicates.

The collection is not safe for concurrent mutation; callers issue one mutation
at a time.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Tuple

from poembook.errors import IndexOutOfRange
from .records import PoemRecord

logger = logging.getLogger(__name__)

__all__ = ["PoemCollection", "DEDUP_MIN_LENGTH"]

DEDUP_MIN_LENGTH = 50


class PoemCollection:
	"""In-memory ordered poem list with duplicate suppression.

	Parameters
	----------
	dedup_min_length : int
		Content length above which identical poems with the same title are
		rejected as duplicates. Default 50.
	"""

	def __init__(self, dedup_min_length: int = DEDUP_MIN_LENGTH) -> None:
		self.dedup_min_length = dedup_min_length
		self._records: List[PoemRecord] = []

	def __len__(self) -> int:
		return len(self._records)

	def __iter__(self) -> Iterator[PoemRecord]:
		return iter(tuple(self._records))

	def _check_index(self, index: int) -> None:
		if not 0 <= index < len(self._records):
			raise IndexOutOfRange(index, len(self._records))

	def is_duplicate(self, record: PoemRecord) -> bool:
		title = record.title.lower()
		content = record.content.strip()
		for existing in self._records:
			existing_content = existing.content.strip()
			if (
				existing.title.lower() == title
				and len(existing_content) > self.dedup_min_length
				and existing_content == content
			):
				return True
		return False

	def append(self, record: PoemRecord) -> bool:
		"""Add ``record`` at the end unless it duplicates an existing poem.

		Returns
		-------
		bool
			``True`` if the record was inserted, ``False`` if it was skipped as
			a duplicate.

		Raises
		------
		ValueError
			If a record with the same ``id`` is already in the collection.
		"""
		if not isinstance(record, PoemRecord):
			raise TypeError("record must be a PoemRecord")
		if any(existing.id == record.id for existing in self._records):
			raise ValueError(f"record id {record.id!r} is already in the collection")
		if self.is_duplicate(record):
			logger.warning("Duplicate poem detected and skipped: %s", record.title or "Untitled")
			return False
		self._records.append(record)
		logger.info("Added %r from %s", record.title, record.source_name)
		return True

	def move_to(self, from_index: int, to_index: int) -> None:
		"""Move the record at ``from_index`` so it ends up at ``to_index``.

		This is a remove-then-insert, not a swap: records between the two
		positions shift by one.
		"""
		self._check_index(from_index)
		self._check_index(to_index)
		moved = self._records.pop(from_index)
		self._records.insert(to_index, moved)
		logger.info("Moved %r from position %d to %d", moved.title, from_index + 1, to_index + 1)

	def move_up(self, index: int) -> bool:
		"""Move one position toward the start; ``False`` if already first."""
		self._check_index(index)
		if index == 0:
			return False
		self.move_to(index, index - 1)
		return True

	def move_down(self, index: int) -> bool:
		"""Move one position toward the end; ``False`` if already last."""
		self._check_index(index)
		if index == len(self._records) - 1:
			return False
		self.move_to(index, index + 1)
		return True

	def remove_at(self, index: int) -> PoemRecord:
		self._check_index(index)
		removed = self._records.pop(index)
		logger.info("Removed %r", removed.title)
		return removed

	def clear(self) -> None:
		self._records.clear()
		logger.info("All poems cleared")

	def snapshot(self) -> Tuple[PoemRecord, ...]:
		"""Current records in order, as an immutable tuple."""
		return tuple(self._records)
