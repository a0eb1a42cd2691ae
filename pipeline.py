"""
Statement parsing pipeline: normalize, segment, extract, filter, categorize, summarize.
"""
import logging
from datetime import datetime
from typing import List, Optional, Tuple

from aggregator import TransactionAggregator
from categorizer import TransactionCategorizer
from extractor import TransactionExtractor
from matchers import default_anchor_matchers
from parser_config import ParserConfig
from preprocess import TextNormalizer
from schema import ParseResult, RawDocument, Summary, Transaction
from segmenter import BlockSegmenter

logger = logging.getLogger(__name__)


class StatementParser:
    """Runs the parsing stages over one document at a time."""

    def __init__(self, config: Optional[ParserConfig] = None):
        self.config = config or ParserConfig()
        self.normalizer = TextNormalizer(self.config.boilerplate_patterns)
        anchors = default_anchor_matchers(self.config.numeric_date_anchors)
        self.segmenter = BlockSegmenter(anchors)
        self.extractor = TransactionExtractor(
            currency_symbols=self.config.currency_symbols,
            description_labels=self.config.description_labels,
            description_fallback_line=self.config.description_fallback_line,
            keyword_direction=self.config.keyword_direction,
            date_matchers=anchors,
        )
        self.categorizer = TransactionCategorizer(
            self.config.category_keywords,
            fuzzy_threshold=self.config.fuzzy_threshold,
            currency_symbols=self.config.currency_symbols,
        )
        self.aggregator = TransactionAggregator(top_n=self.config.top_categories)

    def parse(self, raw_text: str) -> Tuple[List[Transaction], Summary]:
        """
        Parse raw statement text.

        Args:
            raw_text: Concatenated text of one document

        Returns:
            Tuple of (transactions in document order, summary)
        """
        canonical = self.normalizer.normalize(raw_text)
        transactions, _ = self._run(canonical)
        return transactions, self.aggregator.summarize(transactions)

    def parse_document(self, document: RawDocument) -> ParseResult:
        """Parse a RawDocument into a ParseResult with processing metadata."""
        canonical = self.normalizer.normalize_document(document)
        transactions, stats = self._run(canonical)
        summary = self.aggregator.summarize(transactions)

        metadata = {
            'source': document.source,
            'processing_date': str(datetime.now()),
            **stats,
        }
        return ParseResult(
            transactions=transactions,
            summary=summary,
            total_count=len(transactions),
            status=f"Parsed {len(transactions)} transactions",
            processing_metadata=metadata,
        )

    def is_plausible(self, transaction: Transaction) -> bool:
        return self.config.min_amount < transaction.amount < self.config.max_amount

    def _run(self, canonical: str) -> Tuple[List[Transaction], dict]:
        blocks = self.segmenter.segment(canonical)
        extracted = self.extractor.extract_all(blocks)

        kept = [t for t in extracted if self.is_plausible(t)]
        discarded = len(extracted) - len(kept)
        if discarded:
            logger.debug(f"Discarded {discarded} transactions with implausible amounts")

        transactions = self.categorizer.categorize_all(kept)
        stats = {
            'blocks_found': len(blocks),
            'raw_transactions_found': len(extracted),
            'discarded_transactions': discarded,
            'valid_transactions': len(transactions),
        }
        return transactions, stats


_default_parser: Optional[StatementParser] = None


def parse(raw_text: str) -> Tuple[List[Transaction], Summary]:
    """Parse raw statement text with the default configuration."""
    global _default_parser
    if _default_parser is None:
        _default_parser = StatementParser()
    return _default_parser.parse(raw_text)
