"""Batch entry point: documents in, poem records appended to a collection.

Documents are processed strictly one after another:

1) Convert the raw bytes into blocks and markup (``convert_docx`` by default).
2) Segment the document into poem spans.
3) If no strategy split it, treat the whole document as a single poem.
4) Turn each span into a record and append it to the collection.

Conversion failures and documents without a usable poem are recorded per file
and never abort the batch. Poems from document N always precede poems from
document N+1, and poems from one document keep the order segmentation emitted
them in.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Tuple

from tqdm import tqdm

from poembook.collection.manager import PoemCollection
from poembook.collection.records import make_record
from poembook.errors import ConversionError
from .adapter import ConvertedDocument, convert_docx
from .blocks import PoemSpan
from .segmentation import SegmentationConfig, segment_document, whole_document_span

logger = logging.getLogger(__name__)

__all__ = ["BatchReport", "process_documents", "NO_POEMS_MESSAGE"]

NO_POEMS_MESSAGE = "No valid poems found"

Converter = Callable[[bytes], ConvertedDocument]
ProgressFn = Callable[[int, int, str], None]


def _plural(count: int, word: str) -> str:
	return f"{count} {word}{'s' if count != 1 else ''}"


@dataclass
class BatchReport:
	appended: int = 0
	duplicates: int = 0
	errors: List[Tuple[str, str]] = field(default_factory=list)

	def summary_message(self) -> str:
		"""One-line outcome, worded for end users."""
		if self.appended > 0:
			message = f"Successfully processed {_plural(self.appended, 'new poem')}!"
			if self.duplicates > 0:
				message += f" ({_plural(self.duplicates, 'duplicate')} skipped)"
			return message
		if self.duplicates > 0:
			return "All uploaded poems were duplicates or had no new content."
		return "No new poems found in the uploaded documents!"


def _document_spans(doc: ConvertedDocument, source_name: str, config: SegmentationConfig) -> List[PoemSpan]:
	spans = segment_document(doc.blocks, doc.markup, source_name, config=config)
	if not spans:
		single = whole_document_span(doc.blocks, doc.markup, doc.plain_text, source_name, config=config)
		spans = [single] if single is not None else []
	return [s for s in spans if s.content.strip()]


def process_documents(
	documents: Iterable[Tuple[bytes, str]],
	collection: PoemCollection,
	converter: Converter = convert_docx,
	config: SegmentationConfig | None = None,
	on_progress: Optional[ProgressFn] = None,
	show_progress: bool = False,
) -> BatchReport:
	"""Extract poems from each document and append them to ``collection``.

	Parameters
	----------
	documents : iterable of (bytes, str)
		``(raw_bytes, source_name)`` pairs, processed in the given order.
	collection : PoemCollection
		Target collection; duplicates of existing poems are skipped.
	converter : callable, optional
		Document adapter turning bytes into a :class:`ConvertedDocument`.
		Defaults to :func:`~poembook.ingestion.adapter.convert_docx`.
	config : SegmentationConfig, optional
		Segmentation thresholds.
	on_progress : callable, optional
		Called as ``on_progress(done, total, source_name)`` after each document.
	show_progress : bool, optional
		Show a ``tqdm`` progress bar on stderr.

	Returns
	-------
	BatchReport
		Counts of appended and duplicate poems, plus ``(source_name, message)``
		for every document that failed or held no usable poem.
	"""
	config = config or SegmentationConfig()
	items = list(documents)
	total = len(items)
	report = BatchReport()

	for done, (raw, source_name) in enumerate(
		tqdm(items, desc="Processing documents", unit="doc", disable=not show_progress),
		start=1,
	):
		try:
			doc = converter(raw)
		except ConversionError as exc:
			message = f'Failed to extract content from "{source_name}": {exc}'
			logger.warning("Error processing %s: %s", source_name, exc)
			report.errors.append((source_name, message))
		else:
			spans = _document_spans(doc, source_name, config)
			if not spans:
				logger.warning("%s: %s", source_name, NO_POEMS_MESSAGE)
				report.errors.append((source_name, NO_POEMS_MESSAGE))
			for span in spans:
				if collection.append(make_record(span, source_name, config.min_content_length)):
					report.appended += 1
				else:
					report.duplicates += 1

		if on_progress is not None:
			on_progress(done, total, source_name)

	logger.info(
		"Batch finished: %d appended, %d duplicates, %d errors",
		report.appended,
		report.duplicates,
		len(report.errors),
	)
	return report
