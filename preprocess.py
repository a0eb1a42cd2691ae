import re
from typing import List, Optional, Sequence
import logging

from parser_config import BOILERPLATE_PATTERNS, COLUMN_HEADER_PATTERN, PAGE_FOOTER_PATTERN
from schema import RawDocument

logger = logging.getLogger(__name__)

class TextNormalizer:
    """Cleans raw statement text into a canonical stream before segmentation."""

    def __init__(self, boilerplate_patterns: Optional[Sequence[str]] = None):
        self.logger = logging.getLogger(self.__class__.__name__)
        if boilerplate_patterns is None:
            boilerplate_patterns = BOILERPLATE_PATTERNS
        self.boilerplate_patterns = self._compile(boilerplate_patterns)

        self.page_footer = re.compile(PAGE_FOOTER_PATTERN, re.IGNORECASE)
        self.column_header = re.compile(COLUMN_HEADER_PATTERN, re.IGNORECASE)
        self.blank_lines = re.compile(r'\n{2,}')

    @staticmethod
    def _compile(patterns: Sequence[str]) -> List[re.Pattern]:
        return [re.compile(p, re.IGNORECASE) for p in patterns]

    def normalize(self, text: str) -> str:
        """
        Normalize raw statement text.

        Args:
            text: Full raw text of one document

        Returns:
            Canonical text with page footers, column headers and
            disclaimers removed and blank lines collapsed
        """
        return self._normalize(text, self.boilerplate_patterns)

    def normalize_document(self, document: RawDocument) -> str:
        """Normalize a RawDocument using the boilerplate patterns it carries."""
        return self._normalize(document.text, self._compile(document.boilerplate_patterns))

    def _normalize(self, text: str, boilerplate: List[re.Pattern]) -> str:
        if not text:
            return ""

        cleaned = text.replace('\r\n', '\n').replace('\r', '\n')
        cleaned = cleaned.replace('\u00a0', ' ')
        cleaned = self.page_footer.sub('', cleaned)
        cleaned = self.column_header.sub('', cleaned)

        # Disclaimers repeat on every page and can hold date-like text
        for pattern in boilerplate:
            cleaned = pattern.sub('', cleaned)

        # Collapse last: removals above can leave empty lines behind
        cleaned = self.blank_lines.sub('\n', cleaned)

        self.logger.debug(f"Normalized text: {len(text)} -> {len(cleaned)} characters")
        return cleaned
