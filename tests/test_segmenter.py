from matchers import DateAnchorMatcher, NumericDateMatcher
from preprocess import TextNormalizer
from segmenter import BlockSegmenter


def test_two_anchors_give_two_blocks():
    text = (
        "Nov 01, 2025 06:05 pm\nDEBIT ₹1,500 Paid to GTPL HATHWAY LIMITED\n"
        "Nov 01, 2025 06:04 pm\nCREDIT ₹1,500 Received from Dad\n"
    )
    blocks = BlockSegmenter().segment(text)
    assert blocks == [
        "Nov 01, 2025 06:05 pm\nDEBIT ₹1,500 Paid to GTPL HATHWAY LIMITED",
        "Nov 01, 2025 06:04 pm\nCREDIT ₹1,500 Received from Dad",
    ]


def test_no_anchors_gives_no_blocks():
    assert BlockSegmenter().segment("DEBIT ₹1,500 Paid to someone\nno dates here\n") == []
    assert BlockSegmenter().segment("") == []


def test_text_before_first_anchor_is_dropped():
    blocks = BlockSegmenter().segment("Statement for account 1234\nJan 5, 2024\nDEBIT $10")
    assert blocks == ["Jan 5, 2024\nDEBIT $10"]


def test_full_month_names_and_missing_comma():
    blocks = BlockSegmenter().segment("January 5 2024 A\nSeptember 12, 2024 B\nsept 13, 2024 C")
    assert blocks == ["January 5 2024 A", "September 12, 2024 B", "sept 13, 2024 C"]


def test_time_on_next_line_stays_in_block():
    blocks = BlockSegmenter().segment("Oct 09, 2025\n08:34 pm\nDEBIT ₹1,101 Paid to HUNGRY BIRDS")
    assert len(blocks) == 1
    assert blocks[0].startswith("Oct 09, 2025\n08:34 pm")


def test_blocks_never_contain_a_second_anchor(statement_text):
    matcher = DateAnchorMatcher()
    blocks = BlockSegmenter().segment(TextNormalizer().normalize(statement_text))
    assert len(blocks) == 4
    for block in blocks:
        assert len(list(matcher.find_all(block))) == 1


def test_block_with_column_header_is_discarded():
    text = "Nov 01, 2025 Date Transaction Details\nNov 02, 2025 DEBIT ₹5"
    assert BlockSegmenter().segment(text) == ["Nov 02, 2025 DEBIT ₹5"]


def test_dangling_date_is_still_a_block():
    blocks = BlockSegmenter().segment("Nov 01, 2025 DEBIT ₹5\nDec 31, 2025")
    assert blocks[-1] == "Dec 31, 2025"


def test_spans_cover_text_from_first_anchor():
    text = "xx Nov 01, 2025 a Nov 02, 2025 b"
    spans = BlockSegmenter().spans(text)
    assert spans == [(3, 18), (18, len(text))]


def test_numeric_anchor_merge_keeps_earliest_non_overlapping():
    segmenter = BlockSegmenter([DateAnchorMatcher(), NumericDateMatcher()])
    text = "01/11/2025 DEBIT $5\nNov 02, 2025 DEBIT $6\n2025-11-03 CREDIT $7"
    assert segmenter.segment(text) == [
        "01/11/2025 DEBIT $5",
        "Nov 02, 2025 DEBIT $6",
        "2025-11-03 CREDIT $7",
    ]
