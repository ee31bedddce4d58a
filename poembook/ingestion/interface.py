"""Minimal segmentation strategy protocol.

Every way of cutting a document into poems implements this protocol, so the
segmentation engine can try an ordered list of strategies without knowing
which heuristics each one applies.
"""

from __future__ import annotations

from typing import List, Protocol

from .blocks import Block, PoemSpan


class SegmentationStrategy(Protocol):
    """Interface for one segmentation heuristic.

    Implementations return the spans they found, in document order. A result
    with fewer than two spans means the strategy does not apply to the
    document; the engine then moves on to the next strategy.
    """

    name: str

    def split(self, blocks: List[Block], markup: str) -> List[PoemSpan]:
        """Split a document's blocks (or raw markup) into poem spans."""
        ...
