import re
from decimal import Decimal
from typing import List, Optional, Sequence
import logging

from matchers import (
    AmountMatcher,
    DateAnchorMatcher,
    DescriptionLabelMatcher,
    DirectionMatcher,
    KeywordDirectionMatcher,
    PatternMatcher,
)
from schema import Direction, ExtractedFields, Transaction

logger = logging.getLogger(__name__)

TRAILING_BOILERPLATE = r'This is (?:a system|an automatically) generated statement[\s\S]*$'


class TransactionExtractor:
    """Extracts transaction records from segmented text blocks."""

    def __init__(
        self,
        currency_symbols: Optional[Sequence[str]] = None,
        description_labels: Optional[Sequence[str]] = None,
        description_fallback_line: int = 2,
        keyword_direction: bool = False,
        date_matchers: Optional[Sequence[PatternMatcher]] = None,
    ):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.trailing_boilerplate = re.compile(TRAILING_BOILERPLATE, re.IGNORECASE)

        self.date_matchers = list(date_matchers) if date_matchers else [DateAnchorMatcher()]
        self.amount_matcher = AmountMatcher(currency_symbols)
        self.direction_matcher = DirectionMatcher()
        self.description_matcher = DescriptionLabelMatcher(description_labels)
        self.description_fallback_line = description_fallback_line

        # Consulted only when no explicit CREDIT/DEBIT marker is present
        self.keyword_direction_matcher = KeywordDirectionMatcher() if keyword_direction else None

    def extract_all(self, blocks: List[str]) -> List[Transaction]:
        """
        Extract one transaction per block.

        Args:
            blocks: Transaction blocks in document order

        Returns:
            List of transactions in the same order
        """
        self.logger.info(f"Extracting transactions from {len(blocks)} blocks")
        transactions = [self.extract(block) for block in blocks]
        self.logger.info(f"Extracted {len(transactions)} transactions")
        return transactions

    def extract(self, block: str) -> Transaction:
        """Build a Transaction from one block; absent amounts become 0."""
        fields = self.extract_fields(block)
        return Transaction(
            date=fields.date,
            description=fields.description,
            amount=fields.amount if fields.amount is not None else Decimal('0'),
            direction=fields.direction,
        )

    def extract_fields(self, block: str) -> ExtractedFields:
        """
        Run every field matcher over one block.

        Args:
            block: One transaction block

        Returns:
            ExtractedFields with None for each field that did not match
        """
        block = self.trailing_boilerplate.sub('', block)

        fields = ExtractedFields(
            date=self._extract_date(block),
            amount=self.amount_matcher.extract(block),
            direction=self._extract_direction(block),
            description=self._extract_description(block),
        )
        self.logger.debug(f"Block fields: {fields}")
        return fields

    def _extract_date(self, block: str) -> Optional[str]:
        """Earliest date found by any date matcher, without the time of day."""
        matches = [m for m in (matcher.first(block) for matcher in self.date_matchers) if m]
        if not matches:
            return None
        return min(matches, key=lambda m: m.start()).group('date')

    def _extract_direction(self, block: str) -> Direction:
        direction = self.direction_matcher.extract(block)
        if direction is Direction.UNKNOWN and self.keyword_direction_matcher:
            direction = self.keyword_direction_matcher.extract(block)
        return direction

    def _extract_description(self, block: str) -> Optional[str]:
        """Labeled phrase first, then the fixed fallback line of the block."""
        description = self.description_matcher.extract(block)
        if description:
            return description

        lines = block.split('\n')
        if len(lines) > self.description_fallback_line:
            fallback = lines[self.description_fallback_line].strip()
            if fallback:
                return fallback
        return None
