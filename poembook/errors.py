"""Exception types shared across the poembook pipeline.

Per-file failures (``ConversionError`` and its ``EmptyDocument`` subclass) are
recoverable at batch level: the batch runner records them and moves on to the
next document. ``IndexOutOfRange`` signals a caller bug against the collection
and is not meant to be caught by user-facing code.
"""

from __future__ import annotations

__all__ = [
	"PoembookError",
	"ConversionError",
	"EmptyDocument",
	"IndexOutOfRange",
]


class PoembookError(Exception):
	"""Base class for all poembook errors."""


class ConversionError(PoembookError):
	"""Raised when a document cannot be turned into blocks and markup."""


class EmptyDocument(ConversionError):
	"""Raised when a converted document has too little text to hold a poem."""


class IndexOutOfRange(PoembookError, IndexError):
	"""Raised when a collection position is outside ``[0, len(collection))``."""

	def __init__(self, index: int, length: int) -> None:
		super().__init__(f"index {index} out of range for collection of length {length}")
		self.index = index
		self.length = length
