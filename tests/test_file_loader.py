from decimal import Decimal

import pytest
from docx import Document

import file_loader
from file_loader import FileLoader
from pipeline import parse
from schema import Direction


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        FileLoader().load(str(tmp_path / "missing.txt"))


def test_unsupported_extension_raises(tmp_path):
    path = tmp_path / "statement.xlsx"
    path.write_bytes(b"data")
    with pytest.raises(ValueError, match="Unsupported file type"):
        FileLoader().load(str(path))


def test_txt_utf8(tmp_path):
    path = tmp_path / "statement.txt"
    path.write_text("Nov 01, 2025\nDEBIT ₹1,500 Paid to GTPL\n", encoding="utf-8")
    document = FileLoader().load(str(path))
    assert document.text == "Nov 01, 2025\nDEBIT ₹1,500 Paid to GTPL\n"
    assert document.source == "statement.txt"


def test_txt_falls_back_to_latin1(tmp_path):
    path = tmp_path / "statement.TXT"
    path.write_bytes("Café £5".encode("latin1"))
    assert FileLoader().load(str(path)).text == "Café £5"


def test_csv_rows_become_lines(tmp_path):
    path = tmp_path / "export.csv"
    path.write_text(
        'Date,Transaction Details,Type,Amount\n'
        '"Nov 01, 2025",Paid to GTPL HATHWAY LIMITED,DEBIT,"₹1,500"\n'
        '"Nov 01, 2025",Received from Dad,CREDIT,"₹1,500"\n',
        encoding="utf-8",
    )
    document = FileLoader().load(str(path))
    assert document.text.split("\n") == [
        "Date,Transaction Details,Type,Amount",
        "Nov 01, 2025,Paid to GTPL HATHWAY LIMITED,DEBIT,₹1,500",
        "Nov 01, 2025,Received from Dad,CREDIT,₹1,500",
    ]


def test_csv_unquoted_amount_keeps_thousands_separator(tmp_path):
    path = tmp_path / "export.csv"
    path.write_text("Nov 01 2025,DEBIT,₹1,500,Paid to GTPL\n", encoding="utf-8")
    document = FileLoader().load(str(path))
    assert document.text == "Nov 01 2025,DEBIT,₹1,500,Paid to GTPL"

    transactions, summary = parse(document.text)
    assert len(transactions) == 1
    assert transactions[0].amount == Decimal("1500")
    assert transactions[0].direction is Direction.DEBIT
    assert summary.debits == Decimal("1500")


def test_csv_with_title_line_is_read_as_text(tmp_path):
    content = (
        "Transaction Statement for 98XXXXXX10\n"
        '"Nov 01, 2025",Paid to GTPL HATHWAY LIMITED,DEBIT,"₹1,500"\n'
    )
    path = tmp_path / "export.csv"
    path.write_text(content, encoding="utf-8")
    document = FileLoader().load(str(path))
    assert document.text == content

    transactions, _ = parse(document.text)
    assert [t.amount for t in transactions] == [Decimal("1500")]
    assert transactions[0].date == "Nov 01, 2025"
    assert transactions[0].direction is Direction.DEBIT


def test_empty_csv_gives_empty_text(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")
    assert FileLoader().load(str(path)).text == ""


def test_docx_paragraphs_and_tables(tmp_path):
    doc = Document()
    doc.add_paragraph("Nov 01, 2025")
    doc.add_paragraph("   ")
    table = doc.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "DEBIT ₹1,500"
    table.rows[0].cells[1].text = "Paid to GTPL"
    path = tmp_path / "statement.docx"
    doc.save(str(path))

    assert FileLoader().load(str(path)).text == "Nov 01, 2025\nDEBIT ₹1,500 | Paid to GTPL"


class FakePage:
    def __init__(self, text):
        self.text = text

    def extract_text(self):
        return self.text


class FakePDF:
    def __init__(self, pages):
        self.pages = pages

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


def test_pdf_pages_joined_and_blank_pages_skipped(tmp_path, monkeypatch):
    path = tmp_path / "statement.pdf"
    path.write_bytes(b"%PDF-1.4")
    pages = [FakePage("Nov 01, 2025 DEBIT ₹5"), FakePage(None), FakePage("Nov 02, 2025 CREDIT ₹7")]
    monkeypatch.setattr(file_loader.pdfplumber, "open", lambda _: FakePDF(pages))

    document = FileLoader().load(str(path))
    assert document.text == "Nov 01, 2025 DEBIT ₹5\nNov 02, 2025 CREDIT ₹7"


def test_unreadable_pdf_raises_value_error(tmp_path, monkeypatch):
    path = tmp_path / "broken.pdf"
    path.write_bytes(b"not a pdf")

    def fail(_):
        raise OSError("bad xref")

    monkeypatch.setattr(file_loader.pdfplumber, "open", fail)
    with pytest.raises(ValueError, match="Error reading PDF file"):
        FileLoader().load(str(path))
