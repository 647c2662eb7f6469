"""Text extraction from uploaded TXT, PDF and DOCX documents."""
import enum
import logging
from pathlib import Path
from typing import Callable

import docx
import PyPDF2

from navlearn.core.tracing import get_tracer, safe_span_attributes
from navlearn.kb.errors import ExtractionError, UnsupportedFileTypeError

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)


class DocumentFormat(enum.Enum):
    """Supported upload formats with their MIME types and file extension."""

    TEXT = ("TXT", (".txt",), ("text/plain",))
    PDF = ("PDF", (".pdf",), ("application/pdf",))
    DOCX = (
        "DOCX",
        (".docx",),
        ("application/vnd.openxmlformats-officedocument.wordprocessingml.document",),
    )

    def __init__(self, label: str, extensions: tuple[str, ...], mime_types: tuple[str, ...]):
        self.label = label
        self.extensions = extensions
        self.mime_types = mime_types


SUPPORTED_FORMATS_MESSAGE = "Unsupported file type. Supported formats: " + ", ".join(
    f.label for f in DocumentFormat
)


def resolve_format(mime_type: str | None, original_name: str | None) -> DocumentFormat:
    """
    Pick the document format from the MIME type, falling back to the extension.

    Raises:
        UnsupportedFileTypeError: If neither identifies a supported format
    """
    mime = (mime_type or "").split(";")[0].strip().lower()
    for fmt in DocumentFormat:
        if mime in fmt.mime_types:
            return fmt

    extension = Path(original_name or "").suffix.lower()
    for fmt in DocumentFormat:
        if extension in fmt.extensions:
            return fmt

    raise UnsupportedFileTypeError(SUPPORTED_FORMATS_MESSAGE)


def _read_text(path: Path) -> str:
    return path.read_bytes().decode("utf-8")


def _read_pdf(path: Path) -> str:
    with path.open("rb") as f:
        reader = PyPDF2.PdfReader(f)
        pages = [page.extract_text() or "" for page in reader.pages]
    return "\n".join(p for p in pages if p)


def _read_docx(path: Path) -> str:
    document = docx.Document(str(path))
    return "\n\n".join(p.text for p in document.paragraphs)


_DECODERS: dict[DocumentFormat, Callable[[Path], str]] = {
    DocumentFormat.TEXT: _read_text,
    DocumentFormat.PDF: _read_pdf,
    DocumentFormat.DOCX: _read_docx,
}


def extract_text(path: str | Path, mime_type: str | None, original_name: str | None) -> str:
    """
    Extract the text of an uploaded file.

    Args:
        path: Location of the uploaded file on disk
        mime_type: Declared MIME type of the upload
        original_name: Client-side filename, used for its extension when the
            MIME type is not recognised

    Returns:
        Extracted text; may be empty for PDF and DOCX files without text

    Raises:
        UnsupportedFileTypeError: For anything other than TXT, PDF or DOCX
        ExtractionError: If the file cannot be read or parsed
    """
    with tracer.start_as_current_span("kb.extract_text") as span:
        fmt = resolve_format(mime_type, original_name)
        span.set_attributes(safe_span_attributes(
            format=fmt.label,
            mime_type=mime_type,
        ))

        try:
            text = _DECODERS[fmt](Path(path))
        except Exception as e:
            logger.error(f"Failed to extract {fmt.label} text from {original_name}: {e}")
            span.set_attribute("error.type", type(e).__name__)
            raise ExtractionError(f"Failed to extract text from {fmt.label} file: {e}") from e

        span.set_attribute("text_length", len(text))
        logger.info(f"Extracted {len(text)} characters from {fmt.label} file {original_name}")
        return text
