"""
Named regex matchers used by the segmenter and the field extractor.

Each matcher wraps one compiled pattern behind the same small interface
(``find_all`` / ``first``) plus a typed ``extract`` helper, so new statement
formats can be supported by adding a matcher rather than editing the
segmentation or extraction loops.
"""
import re
import logging
from decimal import Decimal, InvalidOperation
from typing import Iterator, List, Optional, Sequence, Tuple

from parser_config import CURRENCY_SYMBOLS, DESCRIPTION_LABELS
from schema import Direction

logger = logging.getLogger(__name__)

MONTH_NAMES = r'(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Sept|Oct|Nov|Dec)[a-z]*'


class PatternMatcher:
    """Base matcher over one compiled regular expression."""

    name = 'pattern'

    def __init__(self, pattern: str, flags: int = 0):
        self.pattern = re.compile(pattern, flags)

    def find_all(self, text: str) -> Iterator[re.Match]:
        """Yield all non-overlapping matches in document order."""
        return self.pattern.finditer(text)

    def first(self, text: str) -> Optional[re.Match]:
        return self.pattern.search(text)

    def __repr__(self):
        return f"{self.__class__.__name__}({self.pattern.pattern!r})"


class DateAnchorMatcher(PatternMatcher):
    """
    Month-name date that starts a transaction, e.g. ``Nov 01, 2025 06:05 pm``.

    The time of day is optional and may sit on the following line. Only the
    date part is returned by ``extract``.
    """

    name = 'date_anchor'

    def __init__(self):
        super().__init__(
            r'\b(?P<date>' + MONTH_NAMES + r'\s+\d{1,2},?\s+\d{4})'
            r'(?:\s*\n?\s*\d{1,2}:\d{2}\s*(?:am|pm))?',
            re.IGNORECASE,
        )

    def extract(self, text: str) -> Optional[str]:
        match = self.first(text)
        return match.group('date') if match else None


class NumericDateMatcher(PatternMatcher):
    """Numeric dates such as ``01/11/2025``, ``1-11-25`` or ``2025-11-01``."""

    name = 'numeric_date'

    def __init__(self):
        super().__init__(
            r'\b(?P<date>\d{1,2}[/\-.]\d{1,2}[/\-.]\d{2,4}|\d{4}[/\-.]\d{1,2}[/\-.]\d{1,2})\b'
        )

    def extract(self, text: str) -> Optional[str]:
        match = self.first(text)
        return match.group('date') if match else None


class AmountMatcher(PatternMatcher):
    """Currency-marked numeral, e.g. ``₹1,500`` or ``$ 12,345.67``."""

    name = 'amount'

    def __init__(self, currency_symbols: Optional[Sequence[str]] = None):
        symbols = currency_symbols or CURRENCY_SYMBOLS
        # Longest first so multi-character markers win over their prefixes
        alternatives = '|'.join(re.escape(s) for s in sorted(symbols, key=len, reverse=True))
        super().__init__(r'(?:' + alternatives + r')\s*(?P<number>\d[\d,]*(?:\.\d+)?)')
        self.currency_symbols = list(symbols)

    def extract(self, text: str) -> Optional[Decimal]:
        match = self.first(text)
        if not match:
            return None
        return parse_number(match.group('number'))


class DirectionMatcher:
    """
    Direction from explicit markers, checked in order; the first marker found wins.

    ``CREDIT`` is checked before ``DEBIT`` so a block carrying both resolves
    to a credit.
    """

    name = 'direction'

    def __init__(self, markers: Optional[Sequence[Tuple[Direction, str]]] = None):
        markers = markers or [(Direction.CREDIT, 'CREDIT'), (Direction.DEBIT, 'DEBIT')]
        self.markers = [
            (direction, re.compile(re.escape(marker), re.IGNORECASE))
            for direction, marker in markers
        ]

    def extract(self, text: str) -> Direction:
        for direction, pattern in self.markers:
            if pattern.search(text):
                return direction
        return Direction.UNKNOWN


class KeywordDirectionMatcher(DirectionMatcher):
    """Whole-word direction keywords such as ``received`` or ``paid``."""

    name = 'keyword_direction'

    CREDIT_WORDS = ['cr', 'credit', 'credited', 'received', 'deposit']
    DEBIT_WORDS = ['dr', 'debit', 'paid', 'purchased', 'spent', 'withdrawn', 'payment']

    def __init__(self):
        self.markers = [
            (Direction.CREDIT, re.compile(r'\b(?:' + '|'.join(self.CREDIT_WORDS) + r')\b', re.IGNORECASE)),
            (Direction.DEBIT, re.compile(r'\b(?:' + '|'.join(self.DEBIT_WORDS) + r')\b', re.IGNORECASE)),
        ]


class DescriptionLabelMatcher(PatternMatcher):
    """Labeled counterparty phrase running to end of line, e.g. ``Paid to ACME``."""

    name = 'description_label'

    def __init__(self, labels: Optional[Sequence[str]] = None):
        labels = labels or DESCRIPTION_LABELS
        alternatives = '|'.join(re.escape(label) for label in labels)
        super().__init__(r'(?:' + alternatives + r')[^\n]+', re.IGNORECASE)
        self.labels = list(labels)

    def extract(self, text: str) -> Optional[str]:
        match = self.first(text)
        if not match:
            return None
        return match.group(0).strip() or None


def parse_number(raw: str) -> Optional[Decimal]:
    """
    Parse a numeral with thousands separators, e.g. ``1,234,567.50``.

    Args:
        raw: Digits, commas and an optional decimal fraction

    Returns:
        Decimal value, or None if nothing numeric remains
    """
    cleaned = raw.replace(',', '').strip()
    if not cleaned:
        return None
    try:
        return Decimal(cleaned)
    except InvalidOperation:
        logger.warning(f"Could not parse amount: {raw}")
        return None


def default_anchor_matchers(numeric_dates: bool = False) -> List[PatternMatcher]:
    """Anchor matchers in priority order."""
    matchers: List[PatternMatcher] = [DateAnchorMatcher()]
    if numeric_dates:
        matchers.append(NumericDateMatcher())
    return matchers
