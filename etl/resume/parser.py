"""
Multi-format Resume Reader - turn an uploaded resume into text for the oracle.

Supports:
- JSON (.json) / YAML (.yaml, .yml): structured dict + JSON text
- Plain Text (.txt): text only
- Word Documents (.docx): paragraphs and table rows
- PDF (.pdf): text of every page

Uploads arrive as bytes, so every format is read from memory; ``parse`` is a
thin wrapper for files on disk.
"""
import io
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Dict, Any

import yaml
from docx import Document
from pypdf import PdfReader

logger = logging.getLogger(__name__)


@dataclass
class ParsedResume:
    """Result of reading a resume.

    Attributes:
        data: Structured dict for JSON/YAML uploads, None otherwise
        text: Text handed to the resume parsing oracle
        format: Detected format ('json', 'yaml', 'txt', 'docx', 'pdf')
        file_name: Name the file was uploaded under
    """
    data: Optional[Dict[str, Any]]
    text: str
    format: str
    file_name: str


class ResumeParser:
    """Format detection by extension, then extraction to text.

    Raises ValueError for unsupported, empty or unreadable files.
    """

    SUPPORTED_FORMATS = {
        '.json', '.yaml', '.yml', '.txt', '.docx', '.pdf'
    }

    def parse(self, file_path: str) -> ParsedResume:
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Resume file not found: {file_path}")
        return self.parse_bytes(path.read_bytes(), path.name)

    def parse_bytes(self, content: bytes, file_name: str) -> ParsedResume:
        """Extract text (and structure where available) from uploaded bytes.

        Args:
            content: Raw file content
            file_name: Original file name, used only for format detection

        Returns:
            ParsedResume with non-empty text
        """
        ext = Path(file_name).suffix.lower()
        if ext not in self.SUPPORTED_FORMATS:
            supported = ', '.join(sorted(self.SUPPORTED_FORMATS))
            raise ValueError(f"Unsupported resume format: {ext or file_name}. Supported formats: {supported}")
        if not content:
            raise ValueError(f"Empty resume file: {file_name}")

        logger.info(f"Reading resume {file_name} ({len(content)} bytes, format: {ext})")

        if ext in ('.json', '.yaml', '.yml'):
            parsed = self._read_structured(content, file_name, ext)
        elif ext == '.txt':
            parsed = ParsedResume(data=None, text=self._decode(content, file_name), format='txt', file_name=file_name)
        elif ext == '.docx':
            parsed = ParsedResume(data=None, text=self._read_docx(content, file_name), format='docx', file_name=file_name)
        else:
            parsed = ParsedResume(data=None, text=self._read_pdf(content, file_name), format='pdf', file_name=file_name)

        if not parsed.text.strip():
            raise ValueError(
                f"No text could be extracted from {file_name}. "
                f"The file may be a scanned image or empty."
            )
        return parsed

    def _decode(self, content: bytes, file_name: str) -> str:
        try:
            return content.decode('utf-8')
        except UnicodeDecodeError as e:
            raise ValueError(f"File encoding issue in {file_name}: {e}. Ensure file is UTF-8 encoded.")

    def _read_structured(self, content: bytes, file_name: str, ext: str) -> ParsedResume:
        text = self._decode(content, file_name)
        fmt = 'json' if ext == '.json' else 'yaml'
        try:
            data = json.loads(text) if fmt == 'json' else yaml.safe_load(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in resume file: {e}. Check line {e.lineno}, column {e.colno}")
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in resume file: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"Structured resume must contain a mapping, got {type(data).__name__}")

        return ParsedResume(
            data=data,
            text=json.dumps(data, indent=2, ensure_ascii=False),
            format=fmt,
            file_name=file_name,
        )

    def _read_docx(self, content: bytes, file_name: str) -> str:
        try:
            doc = Document(io.BytesIO(content))
        except Exception as e:
            raise ValueError(f"Failed to read DOCX file {file_name}: {e}")

        paragraphs = [p.text.strip() for p in doc.paragraphs if p.text.strip()]

        # Tables are common in resumes
        for table in doc.tables:
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if cells:
                    paragraphs.append(' '.join(cells))

        return '\n\n'.join(paragraphs)

    def _read_pdf(self, content: bytes, file_name: str) -> str:
        try:
            reader = PdfReader(io.BytesIO(content))
            pages = reader.pages
        except Exception as e:
            raise ValueError(f"Failed to read PDF file {file_name}: {e}")

        if len(pages) == 0:
            raise ValueError(f"PDF file {file_name} has no pages")

        pages_text = []
        for i, page in enumerate(pages):
            try:
                page_text = page.extract_text()
            except Exception as e:
                logger.warning(f"Failed to extract text from page {i + 1} of {file_name}: {e}")
                continue
            if page_text and page_text.strip():
                pages_text.append(page_text.strip())

        logger.debug(f"Read PDF {file_name}: {len(pages)} pages")
        return '\n\n'.join(pages_text)

    def is_supported(self, file_name: str) -> bool:
        return Path(file_name).suffix.lower() in self.SUPPORTED_FORMATS

    @classmethod
    def get_supported_formats(cls) -> list[str]:
        return sorted(cls.SUPPORTED_FORMATS)
