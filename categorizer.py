import re
import logging
from typing import List, Optional, Sequence, Tuple

from rapidfuzz import fuzz

from parser_config import CATEGORY_KEYWORDS, CURRENCY_SYMBOLS, OTHER_CATEGORY
from schema import Transaction

logger = logging.getLogger(__name__)

class TransactionCategorizer:
    """Categorizes transactions by keyword lookup on their description."""

    def __init__(
        self,
        category_keywords: Optional[Sequence[Tuple[str, Sequence[str]]]] = None,
        fuzzy_threshold: Optional[int] = None,
        currency_symbols: Optional[Sequence[str]] = None,
    ):
        self.logger = logging.getLogger(self.__class__.__name__)
        if category_keywords is None:
            category_keywords = CATEGORY_KEYWORDS

        # Table order is match order
        self.category_keywords: List[Tuple[str, List[str]]] = [
            (category, [k.lower() for k in keywords]) for category, keywords in category_keywords
        ]
        self.fuzzy_threshold = fuzzy_threshold

        symbols = currency_symbols or CURRENCY_SYMBOLS
        self.strip_pattern = re.compile('|'.join([','] + [re.escape(s) for s in symbols]))

    def normalize(self, description: Optional[str]) -> str:
        return self.strip_pattern.sub('', description or '').lower().strip()

    def categorize(self, description: Optional[str]) -> str:
        """
        Pick the category for a description.

        Args:
            description: Transaction description, may be None

        Returns:
            First category in table order with a keyword contained in the
            description, or ``Other``
        """
        text = self.normalize(description)
        if not text:
            return OTHER_CATEGORY

        for category, keywords in self.category_keywords:
            if any(keyword in text for keyword in keywords):
                return category

        if self.fuzzy_threshold is not None:
            category = self._categorize_fuzzy(text)
            if category:
                return category

        return OTHER_CATEGORY

    def categorize_transaction(self, transaction: Transaction) -> Transaction:
        """Return a copy of the transaction with its category set."""
        category = self.categorize(transaction.description)
        return transaction.model_copy(update={'category': category})

    def categorize_all(self, transactions: List[Transaction]) -> List[Transaction]:
        categorized = [self.categorize_transaction(t) for t in transactions]
        self.logger.info(f"Categorized {len(categorized)} transactions")
        return categorized

    def _categorize_fuzzy(self, text: str) -> Optional[str]:
        """Best partial-ratio keyword match at or above the threshold."""
        best_category = None
        best_score = 0

        for category, keywords in self.category_keywords:
            for keyword in keywords:
                score = fuzz.partial_ratio(keyword, text)
                if score >= self.fuzzy_threshold and score > best_score:
                    best_category = category
                    best_score = score

        if best_category:
            self.logger.debug(f"Fuzzy categorization: {text!r} -> {best_category} (score: {best_score:.0f})")
        return best_category
