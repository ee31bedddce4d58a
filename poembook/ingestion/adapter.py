"""Document adapter: raw document bytes -> blocks, markup and plain text.

Word documents are converted to HTML with ``mammoth`` and the HTML is then
flattened into a list of :class:`~poembook.ingestion.blocks.Block` objects with
BeautifulSoup. Only the top-level elements of the HTML fragment become blocks;
nested elements contribute to their parent's text and markup.

Empty paragraphs are kept during conversion because blank paragraphs are the
main structural signal for paragraph-separated poems.
"""

from __future__ import annotations

import io
import logging
import re
from dataclasses import dataclass
from typing import List

import mammoth
from bs4 import BeautifulSoup, Tag

from poembook.errors import ConversionError, EmptyDocument
from .blocks import Block, BlockKind

logger = logging.getLogger(__name__)

__all__ = ["ConvertedDocument", "convert_docx", "convert_html", "html_to_text"]

MIN_DOCUMENT_LENGTH = 10

_HEADING_LEVEL = {"h1": 1, "h2": 2, "h3": 3}
_BOLD_TAGS = ["strong", "b"]
_CENTERED_STYLE = re.compile(r"text-align\s*:\s*center", re.IGNORECASE)


@dataclass(frozen=True)
class ConvertedDocument:
	blocks: List[Block]
	markup: str
	plain_text: str


def _is_centered(tag: Tag) -> bool:
	style = tag.get("style") or ""
	if _CENTERED_STYLE.search(str(style)):
		return True
	return str(tag.get("align") or "").lower() == "center"


def _to_block(tag: Tag) -> Block:
	name = (tag.name or "").lower()
	text = tag.get_text()
	if name in _HEADING_LEVEL:
		return Block(
			kind=BlockKind.HEADING,
			text=text,
			markup=str(tag),
			level=_HEADING_LEVEL[name],
		)
	kind = BlockKind.PARAGRAPH if name == "p" else BlockKind.OTHER
	return Block(
		kind=kind,
		text=text,
		markup=str(tag),
		is_bold=tag.find(_BOLD_TAGS) is not None,
		is_centered=_is_centered(tag),
	)


def html_to_text(markup: str) -> str:
	"""Return the plain text content of an HTML fragment (not trimmed)."""
	if not isinstance(markup, str):
		raise TypeError("markup must be a str")
	return BeautifulSoup(markup, "html.parser").get_text()


def convert_html(markup: str, min_length: int = MIN_DOCUMENT_LENGTH) -> ConvertedDocument:
	"""Parse an HTML fragment into a :class:`ConvertedDocument`.

	Parameters
	----------
	markup : str
		HTML fragment, typically the body produced by ``mammoth``.
	min_length : int, optional
		Minimum trimmed plain-text length (default 10). Shorter documents raise
		:class:`~poembook.errors.EmptyDocument`.

	Returns
	-------
	ConvertedDocument
		Top-level blocks in document order, the markup unchanged, and the
		trimmed plain text of the whole fragment.
	"""
	if not isinstance(markup, str):
		raise TypeError("markup must be a str")
	try:
		soup = BeautifulSoup(markup, "html.parser")
	except Exception as exc:
		raise ConversionError(f"could not parse document markup: {exc}") from exc

	blocks = [_to_block(child) for child in soup.children if isinstance(child, Tag)]
	plain_text = soup.get_text().strip()
	if len(plain_text) < min_length:
		raise EmptyDocument("Document appears to be empty or too short after extraction.")
	return ConvertedDocument(blocks=blocks, markup=markup, plain_text=plain_text)


def convert_docx(raw: bytes, min_length: int = MIN_DOCUMENT_LENGTH) -> ConvertedDocument:
	"""Convert ``.docx`` bytes with ``mammoth`` and parse the resulting HTML."""
	if not isinstance(raw, (bytes, bytearray)):
		raise TypeError("raw must be bytes")
	try:
		result = mammoth.convert_to_html(io.BytesIO(bytes(raw)), ignore_empty_paragraphs=False)
	except Exception as exc:
		raise ConversionError(f"could not read Word document: {exc}") from exc

	for message in result.messages:
		logger.debug("mammoth %s: %s", message.type, message.message)
	if not result.value:
		raise ConversionError("No content extracted from document.")
	return convert_html(result.value, min_length=min_length)
