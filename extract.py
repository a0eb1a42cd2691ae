"""
Main entry point for the bank statement processing pipeline.
"""
import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

import pandas as pd

from aggregator import TransactionAggregator, format_amount
from file_loader import FileLoader
from parser_config import ParserConfig, load_category_table
from pipeline import StatementParser
from schema import ParseResult, RawDocument, Transaction

logger = logging.getLogger(__name__)

ERROR_STATUS = "Error parsing file - see log"


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    """Configure the root logger for command-line runs."""
    if verbose:
        level = logging.DEBUG
    else:
        level = getattr(logging, os.getenv('FINSIGHT_LOG_LEVEL', 'INFO').upper(), logging.INFO)

    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
    )


class BankStatementProcessor:
    """Main processor for bank statements."""

    def __init__(self, config: Optional[ParserConfig] = None):
        self.file_loader = FileLoader()
        self.parser = StatementParser(config)

    def process_file(self, file_path: str) -> ParseResult:
        """
        Process a bank statement file end-to-end.

        Any failure while loading or parsing yields an empty result whose
        ``error`` is set; no partial transactions are returned.

        Args:
            file_path: Path to the bank statement file

        Returns:
            ParseResult with transactions, summary and status
        """
        logger.info(f"Starting processing of file: {file_path}")

        try:
            document = self.file_loader.load(file_path)
            result = self.parser.parse_document(document)
        except Exception as e:
            logger.error(f"Error processing file {file_path}: {str(e)}")
            return ParseResult.failed(ERROR_STATUS, str(e), {'source_file': file_path})

        result.processing_metadata['source_file'] = file_path
        logger.info(result.status)
        return result

    def process_text(self, text: str, source: Optional[str] = None) -> ParseResult:
        """Process already-extracted statement text."""
        try:
            result = self.parser.parse_document(RawDocument(text=text, source=source))
        except Exception as e:
            logger.error(f"Error processing text from {source or 'input'}: {str(e)}")
            return ParseResult.failed(ERROR_STATUS, str(e), {'source': source})

        logger.info(result.status)
        return result


def transactions_to_frame(transactions: List[Transaction]) -> pd.DataFrame:
    """Tabular view of transactions with an ISO date column."""
    columns = ['date', 'iso_date', 'description', 'category', 'direction', 'amount']
    rows = []
    for t in transactions:
        record = t.to_record()
        record['iso_date'] = t.iso_date() or ''
        rows.append(record)
    return pd.DataFrame(rows, columns=columns)


def print_summary(result: ParseResult, aggregator: TransactionAggregator) -> None:
    summary = result.summary
    print(f"\nSummary:")
    print(f"- Status: {result.status}")
    print(f"- Total transactions: {result.total_count}")
    print(f"- Credits: {format_amount(summary.credits)}")
    print(f"- Debits: {format_amount(summary.debits)}")
    print(f"- Net: {format_amount(summary.net)}")

    ranked = aggregator.rank_categories(summary.category_totals)
    if ranked:
        print(f"\nTop Categories:")
        for entry in ranked:
            print(f"- {entry.category}: {format_amount(entry.amount)}")

    print(f"\n{summary.insight}")


def build_config(args: argparse.Namespace) -> ParserConfig:
    config = ParserConfig.from_json_file(args.config) if args.config else ParserConfig()

    overrides = {}
    if args.categories:
        overrides['category_keywords'] = load_category_table(args.categories)
    if args.numeric_dates:
        overrides['numeric_date_anchors'] = True
    if args.keyword_direction:
        overrides['keyword_direction'] = True
    if args.top is not None:
        overrides['top_categories'] = args.top

    if overrides:
        config = ParserConfig(**{**config.model_dump(), **overrides})
    return config


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(description='Extract transactions from bank statements')
    parser.add_argument('file_path', help='Path to bank statement file (.pdf, .csv, .txt, .docx)')
    parser.add_argument('-o', '--output', help='Output JSON file path')
    parser.add_argument('--csv', help='Export the transaction table to this CSV path')
    parser.add_argument('--config', help='JSON file with parser config overrides')
    parser.add_argument('--categories', help='JSON file mapping category -> keyword list')
    parser.add_argument('--numeric-dates', action='store_true', help='Also start blocks at numeric dates')
    parser.add_argument('--keyword-direction', action='store_true',
                        help='Infer direction from words like "paid" when no CREDIT/DEBIT marker exists')
    parser.add_argument('--top', type=int, help='Number of categories to list')
    parser.add_argument('--log-file', help='Also write logs to this file')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')

    args = parser.parse_args(argv)
    setup_logging(args.verbose, args.log_file)

    # Validate input file
    if not Path(args.file_path).exists():
        print(f"Error: File not found - {args.file_path}")
        return 1

    try:
        config = build_config(args)
    except (OSError, ValueError) as e:
        logger.error(f"Invalid configuration: {str(e)}")
        print(f"Error: {str(e)}")
        return 1

    processor = BankStatementProcessor(config)
    result = processor.process_file(args.file_path)
    if not result.ok:
        print(result.status)
        return 1

    output_data = result.to_output()
    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            json.dump(output_data, f, indent=2, ensure_ascii=False)
        print(f"Results written to: {args.output}")
    else:
        print(json.dumps(output_data, indent=2, ensure_ascii=False))

    if args.csv:
        transactions_to_frame(result.transactions).to_csv(args.csv, index=False)
        print(f"Transactions exported to: {args.csv}")

    print_summary(result, processor.parser.aggregator)
    return 0


if __name__ == "__main__":
    sys.exit(main())
