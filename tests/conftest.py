import pytest


# Two-page export with footers, a column header and per-page disclaimers
PHONEPE_STYLE_TEXT = (
    "Transaction Statement for 98XXXXXX10\n"
    "Date Transaction Details Type Amount\n"
    "Nov 01, 2025\n"
    "06:05 pm\n"
    "DEBIT ₹1,500 Paid to GTPL HATHWAY LIMITED\n"
    "Transaction ID T2511011805\n"
    "\n"
    "Nov 01, 2025\n"
    "06:04 pm\n"
    "CREDIT ₹1,500 Received from Dad\n"
    "This is a system generated statement. No signature required.\n"
    "Page 1 of 2\n"
    "\r\n"
    "Oct 10, 2025\n"
    "06:30 pm\n"
    "DEBIT ₹7,000 Paid to Gouri Aunty\n"
    "Oct 09, 2025\n"
    "08:34 pm\n"
    "DEBIT ₹1,101 Paid to HUNGRY BIRDS\n"
    "Customer(s) are advised to verify entries\n"
    "Disclaimer : Do not fall prey to fictitious offers\n"
    "Page 2 of 2\n"
)


@pytest.fixture
def statement_text() -> str:
    return PHONEPE_STYLE_TEXT
