import os
import logging
from typing import List
import pandas as pd
import pdfplumber
from docx import Document
from pathlib import Path

from schema import RawDocument

logger = logging.getLogger(__name__)

class FileLoader:
    """Loads statement files into a single text stream."""

    SUPPORTED_EXTENSIONS = {'.csv', '.pdf', '.txt', '.docx'}
    ENCODINGS = ['utf-8', 'utf-8-sig', 'latin1', 'cp1252']

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    def load(self, file_path: str) -> RawDocument:
        """
        Load file based on extension and return its text as a RawDocument.

        Args:
            file_path: Path to the file

        Returns:
            RawDocument with the concatenated text in reading order
        """
        if not os.path.exists(file_path):
            raise FileNotFoundError(f"File not found: {file_path}")

        file_ext = Path(file_path).suffix.lower()

        if file_ext not in self.SUPPORTED_EXTENSIONS:
            raise ValueError(f"Unsupported file type: {file_ext}")

        self.logger.info(f"Loading {file_ext} file: {file_path}")
        source = Path(file_path).name

        try:
            if file_ext == '.csv':
                return RawDocument(text=self._load_csv(file_path), source=source)
            elif file_ext == '.pdf':
                return RawDocument.from_pages(self._load_pdf(file_path), source=source)
            elif file_ext == '.docx':
                return RawDocument(text=self._load_docx(file_path), source=source)
            else:
                return RawDocument(text=self._load_txt(file_path), source=source)
        except Exception as e:
            self.logger.error(f"Error loading file {file_path}: {str(e)}")
            raise

    def _load_txt(self, file_path: str) -> str:
        """Decode a text file, trying common encodings in order."""
        with open(file_path, 'rb') as f:
            data = f.read()

        for encoding in self.ENCODINGS:
            try:
                text = data.decode(encoding)
                self.logger.info(f"Successfully decoded text with {encoding} encoding")
                return text
            except UnicodeDecodeError:
                continue

        raise ValueError(f"Could not decode text file with any of the tried encodings: {self.ENCODINGS}")

    def _load_csv(self, file_path: str) -> str:
        """
        Load CSV file with robust encoding detection, one line per row.

        Cells are rejoined with commas so unquoted amounts like ``₹1,500``
        keep their thousands separator. Files whose rows have uneven field
        counts (a title line above the table) are read as plain text.
        """
        for encoding in self.ENCODINGS:
            try:
                df = pd.read_csv(
                    file_path,
                    encoding=encoding,
                    header=None,
                    dtype=str,
                    keep_default_na=False,
                    skip_blank_lines=True,
                )
                self.logger.info(f"Successfully loaded CSV with {encoding} encoding")
                break
            except UnicodeDecodeError:
                continue
            except pd.errors.EmptyDataError:
                self.logger.warning(f"CSV file is empty: {file_path}")
                return ""
            except pd.errors.ParserError as e:
                self.logger.warning(f"Uneven CSV rows in {file_path}, reading as text: {str(e)}")
                return self._load_txt(file_path)
        else:
            raise ValueError(f"Could not decode CSV file with any of the tried encodings: {self.ENCODINGS}")

        lines = []
        for row in df.itertuples(index=False):
            cells = [str(cell).strip() for cell in row if str(cell).strip()]
            if cells:
                lines.append(','.join(cells))

        self.logger.info(f"Rendered {len(lines)} CSV rows as text")
        return '\n'.join(lines)

    def _load_pdf(self, file_path: str) -> List[str]:
        """Extract text from PDF using pdfplumber."""
        pages_text = []

        try:
            with pdfplumber.open(file_path) as pdf:
                for i, page in enumerate(pdf.pages):
                    text = page.extract_text()
                    if text and text.strip():
                        pages_text.append(text)
                        self.logger.debug(f"Extracted text from page {i+1}")
                    else:
                        self.logger.warning(f"No text on page {i+1}")
                self.logger.info(f"Extracted text from {len(pages_text)} of {len(pdf.pages)} pages")

            if not pages_text:
                self.logger.warning("No text extracted from PDF - may be a scanned document")

            return pages_text

        except Exception as e:
            raise ValueError(f"Error reading PDF file: {str(e)}")

    def _load_docx(self, file_path: str) -> str:
        """Extract text from DOCX file."""
        try:
            doc = Document(file_path)
            full_text = []

            # Extract text from paragraphs
            for paragraph in doc.paragraphs:
                if paragraph.text.strip():
                    full_text.append(paragraph.text)

            # Extract text from tables
            for table in doc.tables:
                for row in table.rows:
                    row_text = []
                    for cell in row.cells:
                        if cell.text.strip():
                            row_text.append(cell.text.strip())
                    if row_text:
                        full_text.append(' | '.join(row_text))

            combined_text = '\n'.join(full_text)
            self.logger.info(f"Extracted {len(full_text)} text blocks from DOCX")

            return combined_text

        except Exception as e:
            raise ValueError(f"Error reading DOCX file: {str(e)}")
