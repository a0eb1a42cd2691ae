from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator
from datetime import datetime
from decimal import Decimal
from enum import Enum

from dateutil import parser as date_parser

from parser_config import BOILERPLATE_PATTERNS, OTHER_CATEGORY

UNKNOWN_DATE = "Unknown"
MISSING_DESCRIPTION = "N/A"


class Direction(str, Enum):
    """Money flow of a transaction as marked in the statement text."""
    CREDIT = "credit"
    DEBIT = "debit"
    UNKNOWN = "unknown"


class RawDocument(BaseModel):
    """Text stream of one source document plus the boilerplate to strip from it."""
    text: str = ""
    source: Optional[str] = Field(None, description="File name or label of the source")
    boilerplate_patterns: List[str] = Field(default_factory=lambda: list(BOILERPLATE_PATTERNS))

    @classmethod
    def from_pages(cls, pages: List[str], **kwargs) -> "RawDocument":
        """Join per-page text in reading order."""
        return cls(text="\n".join(pages), **kwargs)


class ExtractedFields(BaseModel):
    """Per-field extraction result for one block; ``None`` means the field was absent."""
    model_config = ConfigDict(frozen=True)

    date: Optional[str] = None
    amount: Optional[Decimal] = None
    direction: Direction = Direction.UNKNOWN
    description: Optional[str] = None


class Transaction(BaseModel):
    """Individual transaction record with validation."""
    model_config = ConfigDict(frozen=True)

    date: Optional[str] = Field(None, description="Matched date literal, None when absent")
    description: Optional[str] = Field(None, description="Counterparty or purpose, None when absent")
    amount: Decimal = Field(Decimal("0"), ge=0, description="Non-negative amount")
    direction: Direction = Direction.UNKNOWN
    category: Optional[str] = Field(None, description="Category label, None until categorized")

    @field_validator("amount", mode="before")
    @classmethod
    def clean_amount(cls, v):
        """Absent amounts are 0; floats go through str to keep their printed value."""
        if v is None:
            return Decimal("0")
        if isinstance(v, float):
            return Decimal(str(v))
        return v

    @field_validator("date", "description", "category")
    @classmethod
    def blank_to_none(cls, v):
        if v is not None and not v.strip():
            return None
        return v

    @property
    def display_date(self) -> str:
        return self.date or UNKNOWN_DATE

    @property
    def display_description(self) -> str:
        return self.description or MISSING_DESCRIPTION

    @property
    def display_category(self) -> str:
        return self.category or OTHER_CATEGORY

    def iso_date(self) -> Optional[str]:
        """
        Best-effort calendar date in YYYY-MM-DD format.

        Returns:
            ISO date string, or None when the literal cannot be parsed
        """
        if not self.date:
            return None
        try:
            return date_parser.parse(self.date).strftime("%Y-%m-%d")
        except (ValueError, OverflowError):
            return None

    def to_record(self) -> Dict[str, object]:
        """Flat record with sentinels substituted, for tables and JSON."""
        return {
            "date": self.display_date,
            "description": self.display_description,
            "amount": float(self.amount),
            "direction": self.direction.value,
            "category": self.display_category,
        }


class CategoryTotal(BaseModel):
    """One category's summed amount, used for rankings and chart slices."""
    model_config = ConfigDict(frozen=True)

    category: str
    amount: Decimal
    share: Optional[float] = Field(None, description="Fraction of the charted total")


class Summary(BaseModel):
    """Totals derived from one parse run."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    credits: Decimal = Decimal("0")
    debits: Decimal = Decimal("0")
    category_totals: Dict[str, Decimal] = Field(default_factory=dict, alias="catMap")
    insight: str = ""

    @property
    def net(self) -> Decimal:
        return self.credits - self.debits

    @field_serializer("credits", "debits")
    def serialize_total(self, v: Decimal) -> float:
        return float(v)

    @field_serializer("category_totals")
    def serialize_category_totals(self, v: Dict[str, Decimal]) -> Dict[str, float]:
        return {k: float(amount) for k, amount in v.items()}


class ParseResult(BaseModel):
    """Transactions and summary of one document."""
    transactions: List[Transaction]
    summary: Summary = Field(default_factory=Summary)
    total_count: int = Field(0, description="Total number of transactions")
    status: str = ""
    error: Optional[str] = None
    processing_metadata: Optional[dict] = Field(None, description="Processing information")

    @model_validator(mode="after")
    def validate_count(self):
        """Ensure count matches actual transaction list length."""
        if self.total_count != len(self.transactions):
            self.total_count = len(self.transactions)
        return self

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_output(self) -> dict:
        """JSON-ready dict with sentinel-substituted transaction records."""
        return {
            "transactions": [t.to_record() for t in self.transactions],
            "summary": {
                "credits": float(self.summary.credits),
                "debits": float(self.summary.debits),
                "net": float(self.summary.net),
                "catMap": {k: float(v) for k, v in self.summary.category_totals.items()},
                "insight": self.summary.insight,
            },
            "total_count": self.total_count,
            "status": self.status,
            "error": self.error,
            "processing_metadata": self.processing_metadata,
        }

    @classmethod
    def failed(cls, status: str, error: str, metadata: Optional[dict] = None) -> "ParseResult":
        return cls(
            transactions=[],
            status=status,
            error=error,
            processing_metadata=metadata or {"failed_at": str(datetime.now())},
        )
