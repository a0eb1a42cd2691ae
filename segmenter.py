import re
import logging
from typing import List, Optional, Sequence, Tuple

from matchers import PatternMatcher, default_anchor_matchers
from parser_config import COLUMN_HEADER_PHRASE

logger = logging.getLogger(__name__)


class BlockSegmenter:
    """Slices canonical statement text into one block per transaction."""

    def __init__(self, anchor_matchers: Optional[Sequence[PatternMatcher]] = None):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.anchor_matchers = list(anchor_matchers) if anchor_matchers else default_anchor_matchers()
        self.column_header = re.compile(COLUMN_HEADER_PHRASE, re.IGNORECASE)

    def segment(self, text: str) -> List[str]:
        """
        Split canonical text into transaction blocks.

        Every anchor starts a new block that runs up to the next anchor or
        the end of the text. Blocks that are empty after trimming, or that
        still carry the column-header phrase, are dropped.

        Args:
            text: Output of TextNormalizer.normalize

        Returns:
            Blocks in document order, possibly empty
        """
        blocks = []
        for start, end in self.spans(text):
            block = text[start:end].strip()
            if not block:
                continue
            if self.column_header.search(block):
                self.logger.debug(f"Dropping block at offset {start}: column header")
                continue
            blocks.append(block)

        self.logger.info(f"Found {len(blocks)} transaction blocks")
        return blocks

    def spans(self, text: str) -> List[Tuple[int, int]]:
        """(start, end) offsets of each block before trimming."""
        starts = self.anchor_offsets(text)
        return [
            (start, starts[i + 1] if i + 1 < len(starts) else len(text))
            for i, start in enumerate(starts)
        ]

    def anchor_offsets(self, text: str) -> List[int]:
        """Start offsets of all anchors, merged across matchers."""
        if not text:
            return []

        matches = []
        for priority, matcher in enumerate(self.anchor_matchers):
            for match in matcher.find_all(text):
                matches.append((match.start(), priority, match.end()))

        # Earliest match wins; anything starting inside it is dropped
        matches.sort()
        offsets = []
        covered_until = -1
        for start, _, end in matches:
            if start < covered_until:
                continue
            offsets.append(start)
            covered_until = end
        return offsets
