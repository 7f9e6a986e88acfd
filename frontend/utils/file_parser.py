"""Text extraction for uploaded study material.

The create-block page receives a ``TextExtractor`` instead of reaching for a
global PDF library, so other extractors (or fakes) can be passed in.
"""

import io
from typing import Optional

from PyPDF2 import PdfReader

PDF_TYPES = ("application/pdf",)
TEXT_TYPES = ("text/plain",)


class UnsupportedFileType(ValueError):
    def __init__(self, content_type: Optional[str]):
        super().__init__(
            f"Unsupported file type: {content_type}. Please upload a PDF or text file."
        )
        self.content_type = content_type


class TextExtractor:
    """Turns an uploaded PDF or plain-text file into study content."""

    def extract(self, filename: str, content_type: Optional[str], data: bytes) -> str:
        kind = self._detect(filename, content_type)
        if kind == "text":
            return data.decode("utf-8", errors="ignore")
        return self._extract_pdf(data)

    @staticmethod
    def _detect(filename: str, content_type: Optional[str]) -> str:
        name = (filename or "").lower()
        if content_type in TEXT_TYPES or (not content_type and name.endswith(".txt")):
            return "text"
        if content_type in PDF_TYPES or (not content_type and name.endswith(".pdf")):
            return "pdf"
        raise UnsupportedFileType(content_type or name.rsplit(".", 1)[-1])

    @staticmethod
    def _extract_pdf(data: bytes) -> str:
        reader = PdfReader(io.BytesIO(data))
        full_text = ""
        # one line per page, like the page-by-page reader it replaces
        for page in reader.pages:
            full_text += (page.extract_text() or "") + "\n"
        return full_text
