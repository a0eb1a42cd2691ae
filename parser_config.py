"""
Default tables and tunables for the statement parsing pipeline.
"""
import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

logger = logging.getLogger(__name__)

# Ordered: the first category whose keyword matches wins.
CATEGORY_KEYWORDS: List[Tuple[str, List[str]]] = [
    ('Food', ['zomato', 'swiggy', 'restaurant', 'hungry', 'cafe', 'dominos']),
    ('Groceries', ['bigbasket', 'dmart', 'grocery', 'supermarket', 'reliance']),
    ('Transport', ['uber', 'ola', 'irctc', 'metro', 'bus', 'flight', 'indigo']),
    ('Bills', ['electricity', 'water', 'bill', 'gtpl', 'hathway', 'broadband']),
    ('Salary', ['salary', 'credited', 'payroll', 'deposit', 'freelance']),
    ('Shopping', ['amazon', 'flipkart', 'myntra', 'ajio', 'store', 'shopping']),
    ('Rent', ['rent', 'landlord']),
    ('Health', ['clinic', 'hospital', 'pharmacy', 'doctor']),
    ('Entertainment', ['movie', 'cinema', 'spotify', 'bookmyshow']),
]

OTHER_CATEGORY = 'Other'

# Recurring statement footers, each removed up to end of line.
BOILERPLATE_PATTERNS: List[str] = [
    r'This is a system generated statement[^\n]*(?:\n|$)',
    r'This is an automatically generated statement[^\n]*(?:\n|$)',
    r'Customer\(s\)[^\n]*(?:\n|$)',
    r'Disclaimer\s*:\s*Do not fall prey[^\n]*(?:\n|$)',
]

PAGE_FOOTER_PATTERN = r'Page \d+ of \d+'
COLUMN_HEADER_PATTERN = r'Date\s+Transaction\s+Details\s+Type\s+Amount'
COLUMN_HEADER_PHRASE = r'Date\s+Transaction\s+Details'

CURRENCY_SYMBOLS: List[str] = ['₹', '$', '€', '£']

DESCRIPTION_LABELS: List[str] = [
    'Paid to',
    'Received from',
    'Payment to',
    'Transfer to',
    'Transfer from',
]


class ParserConfig(BaseModel):
    """Every tunable of the parsing pipeline, with validated defaults."""

    model_config = ConfigDict(frozen=True)

    category_keywords: List[Tuple[str, List[str]]] = Field(
        default_factory=lambda: [(name, list(words)) for name, words in CATEGORY_KEYWORDS],
        description="Ordered (category, keywords) table",
    )
    boilerplate_patterns: List[str] = Field(default_factory=lambda: list(BOILERPLATE_PATTERNS))
    currency_symbols: List[str] = Field(default_factory=lambda: list(CURRENCY_SYMBOLS))
    description_labels: List[str] = Field(default_factory=lambda: list(DESCRIPTION_LABELS))
    description_fallback_line: int = Field(2, ge=0, description="Zero-based block line used when no label matches")
    min_amount: Decimal = Field(Decimal('0'), description="Exclusive lower bound of plausible amounts")
    max_amount: Decimal = Field(Decimal('1e9'), description="Exclusive upper bound of plausible amounts")
    top_categories: int = Field(6, ge=1)
    numeric_date_anchors: bool = False
    keyword_direction: bool = False
    fuzzy_threshold: Optional[int] = Field(None, ge=0, le=100)

    @field_validator('category_keywords')
    @classmethod
    def validate_category_table(cls, v):
        """Category names must be unique and non-empty, keywords non-empty."""
        seen = set()
        cleaned = []
        for name, keywords in v:
            name = name.strip()
            if not name:
                raise ValueError('Category names must not be empty')
            if name in seen:
                raise ValueError(f'Duplicate category: {name}')
            seen.add(name)
            words = [k.strip().lower() for k in keywords if k and k.strip()]
            if not words:
                raise ValueError(f'Category {name} has no keywords')
            cleaned.append((name, words))
        return cleaned

    @field_validator('currency_symbols', 'description_labels')
    @classmethod
    def validate_not_empty(cls, v):
        if not v:
            raise ValueError('At least one entry is required')
        return v

    @model_validator(mode='after')
    def validate_amount_bounds(self):
        if self.max_amount <= self.min_amount:
            raise ValueError('max_amount must be greater than min_amount')
        return self

    @classmethod
    def from_json_file(cls, file_path: Union[str, Path]) -> 'ParserConfig':
        """
        Load configuration overrides from a JSON file.

        Args:
            file_path: Path to a JSON object whose keys are ParserConfig fields

        Returns:
            Validated ParserConfig
        """
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a JSON object: {file_path}")
        logger.info(f"Loaded parser config overrides: {sorted(data)}")
        return cls(**data)


def load_category_table(file_path: Union[str, Path]) -> List[Tuple[str, List[str]]]:
    """
    Load a category table from a JSON object ``{category: [keywords, ...]}``.

    Key order in the file is the match order.
    """
    with open(file_path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Category table must be a JSON object: {file_path}")

    table = []
    for name, keywords in data.items():
        if isinstance(keywords, str):
            keywords = [keywords]
        if not isinstance(keywords, list) or not all(isinstance(k, str) for k in keywords):
            raise ValueError(f"Keywords for {name} must be a list of strings")
        table.append((name, keywords))
    logger.info(f"Loaded {len(table)} categories from {file_path}")
    return table
