"""Document loading: page text from PDF, DOCX and plain-text files."""

import logging
import re
from pathlib import Path
from typing import List, Union

import chardet
import docx
import fitz  # PyMuPDF
from docx.enum.text import WD_PARAGRAPH_ALIGNMENT
from docx.text.paragraph import Paragraph

from ..exceptions import ExtractionError
from .section_extractor import SectionExtractor

logger = logging.getLogger(__name__)


class DocumentLoader:
    """Handles loading page text from policy documents."""

    def _is_cover_page(self, paragraphs: List[Paragraph]) -> bool:
        """Check if the first paragraph is a cover page."""
        if len(paragraphs) < 3:
            return False

        first_para = paragraphs[0].text.strip()
        if not first_para:
            return False

        if paragraphs[0].alignment == WD_PARAGRAPH_ALIGNMENT.CENTER:
            return True

        cover_phrases = [
            r'^prepared by:',
            r'^submitted to:',
            r'^date:',
            r'^version',
            r'^confidential',
        ]
        return any(re.match(pattern, first_para, re.IGNORECASE) for pattern in cover_phrases)

    @staticmethod
    def _clean_paragraph(text: str) -> str:
        return ' '.join(text.split())

    def _load_pdf(self, file_path: Path) -> List[str]:
        with fitz.open(file_path) as doc:
            pages = [page.get_text() for page in doc]
        logger.info(f"PDF {file_path.name} loaded with {len(pages)} pages")
        return pages

    def _load_docx(self, file_path: Path) -> List[str]:
        doc = docx.Document(file_path)
        start_idx = 1 if self._is_cover_page(doc.paragraphs) else 0

        cleaned_paragraphs = []
        for para in doc.paragraphs[start_idx:]:
            text = self._clean_paragraph(para.text)
            if text:
                cleaned_paragraphs.append(text)

        # Word documents carry no reliable page numbers
        return ['\n'.join(cleaned_paragraphs)]

    def _load_txt(self, file_path: Path) -> List[str]:
        raw = file_path.read_bytes()
        encoding = chardet.detect(raw)['encoding'] or 'utf-8'
        text = raw.decode(encoding, errors='replace')
        return SectionExtractor.split_pages(text)

    def load_pages(self, file_path: Union[str, Path]) -> List[str]:
        """Load a document and extract the text of each page.

        Args:
            file_path: Path to the document file

        Returns:
            Page texts, first page first

        Raises:
            ExtractionError: If the file type is not supported or reading fails
        """
        file_path = Path(file_path)
        suffix = file_path.suffix.lower()
        loaders = {
            '.pdf': self._load_pdf,
            '.docx': self._load_docx,
            '.txt': self._load_txt,
        }
        if suffix not in loaders:
            raise ExtractionError(f"Unsupported file type: {file_path.suffix}", file_path.name)

        try:
            pages = loaders[suffix](file_path)
        except Exception as e:
            raise ExtractionError(f"Text extraction failed for {file_path.name}: {str(e)}", file_path.name) from e

        if not any(page.strip() for page in pages):
            raise ExtractionError(f"No text extracted from {file_path.name}", file_path.name)
        return pages
