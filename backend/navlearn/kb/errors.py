"""Exceptions raised by the knowledge base."""


class KnowledgeError(Exception):
    """Base exception for knowledge base errors."""

    def __init__(self, message: str, status_code: int = 400, error_code: str = "knowledge_error"):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        super().__init__(self.message)


class ExtractionError(KnowledgeError):
    """Raised when a supported document cannot be parsed."""

    def __init__(self, message: str = "Failed to extract text from document"):
        super().__init__(message=message, status_code=400, error_code="extraction_failed")


class UnsupportedFileTypeError(ExtractionError):
    """Raised for uploads that are not TXT, PDF or DOCX."""

    def __init__(self, message: str = "Unsupported file type. Supported formats: TXT, PDF, DOCX"):
        KnowledgeError.__init__(self, message=message, status_code=400, error_code="unsupported_file_type")


class EmptyDocumentError(KnowledgeError):
    """Raised when extraction succeeded but produced no text."""

    def __init__(self, message: str = "Document contains no readable text"):
        super().__init__(message=message, status_code=400, error_code="empty_document")


class KnowledgeEntryNotFoundError(KnowledgeError):
    """Raised when deleting an entry id that is not in the store."""

    def __init__(self, entry_id: str):
        super().__init__(
            message=f"Knowledge entry not found: {entry_id}",
            status_code=404,
            error_code="knowledge_entry_not_found",
        )
