import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Mapping, Sequence, Union

from parser_config import OTHER_CATEGORY
from schema import CategoryTotal, Summary, Transaction

logger = logging.getLogger(__name__)

NO_TRANSACTIONS_INSIGHT = "No transactions detected."


class TransactionAggregator:
    """Computes totals, per-category sums and the spending insight."""

    def __init__(self, top_n: int = 6, currency: str = "₹"):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.top_n = top_n
        self.currency = currency

    def summarize(self, transactions: Sequence[Transaction]) -> Summary:
        """
        Summarize filtered transactions.

        Credits are amounts whose direction contains ``credit``; every other
        amount, unknown direction included, counts as a debit. Category sums
        mix both directions.

        Args:
            transactions: Transactions in document order

        Returns:
            Summary with totals, category sums and insight text
        """
        credits = Decimal("0")
        debits = Decimal("0")
        category_totals: Dict[str, Decimal] = {}

        for t in transactions:
            if "credit" in t.direction.value.lower().strip():
                credits += t.amount
            else:
                debits += t.amount
            category = t.category or OTHER_CATEGORY
            category_totals[category] = category_totals.get(category, Decimal("0")) + t.amount

        insight = self.make_insight(debits, category_totals)
        self.logger.info(f"Summary: credits={credits} debits={debits} categories={len(category_totals)}")
        return Summary(credits=credits, debits=debits, category_totals=category_totals, insight=insight)

    def make_insight(self, debits: Decimal, category_totals: Mapping[str, Decimal]) -> str:
        """Name the largest category and its share of total debits."""
        ranked = self.rank_categories(category_totals, top_n=1)
        if not ranked:
            return NO_TRANSACTIONS_INSIGHT

        top = ranked[0]
        pct = (top.amount / max(debits, Decimal("1")) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        return (
            f"Largest spending category: {top.category} "
            f"({format_amount(top.amount, self.currency)}, {pct}% of total debits)."
        )

    def rank_categories(self, category_totals: Mapping[str, Decimal], top_n: int = None) -> List[CategoryTotal]:
        """Categories by descending amount; ties keep first-occurrence order."""
        if top_n is None:
            top_n = self.top_n
        ranked = sorted(category_totals.items(), key=lambda item: item[1], reverse=True)
        return [CategoryTotal(category=c, amount=a) for c, a in ranked[:top_n]]

    def chart_slices(self, category_totals: Mapping[str, Decimal]) -> List[CategoryTotal]:
        """Positive category totals, descending, with their share of the whole."""
        positive = [(c, a) for c, a in category_totals.items() if a > 0]
        positive.sort(key=lambda item: item[1], reverse=True)
        total = sum((a for _, a in positive), Decimal("0"))
        return [CategoryTotal(category=c, amount=a, share=float(a / total)) for c, a in positive]


def format_amount(value: Union[Decimal, int, float], currency: str = "₹") -> str:
    """
    Format an amount with Indian digit grouping, e.g. ``₹12,34,567.5``.

    Args:
        value: Amount to format
        currency: Symbol placed before the digits

    Returns:
        Formatted string with at most two fraction digits and a leading
        minus sign for negative values
    """
    q = Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if q < 0 else ""
    whole, _, fraction = f"{abs(q):.2f}".partition(".")
    fraction = fraction.rstrip("0")

    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        whole = ",".join(groups + [tail])

    return f"{sign}{currency}{whole}" + (f".{fraction}" if fraction else "")
