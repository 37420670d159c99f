"""Custom exceptions for the policy answer engine."""

from typing import Optional

class ChatError(Exception):
    """Base exception for answer-related errors."""
    pass

class ModelError(ChatError):
    """Exception for generative model errors."""
    pass

class LLMUnavailable(ModelError):
    """The generative model could not produce an answer."""
    pass

class LLMTimeout(ModelError):
    """The generative model did not answer before the deadline."""
    pass

class ContextError(ChatError):
    """Exception for context assembly errors."""
    pass

class EmptyCorpus(ContextError):
    """No sections could be extracted from any document."""
    pass

class DocumentProcessingError(ChatError):
    """Exception for document processing errors."""
    pass

class ExtractionError(DocumentProcessingError):
    """Text or section extraction failed for one document."""

    def __init__(self, message: str, document_id: Optional[str] = None):
        super().__init__(message)
        self.document_id = document_id

class MalformedCitation(ChatError):
    """A bracket in generated text is not a citation marker."""

    def __init__(self, message: str, position: int):
        super().__init__(message)
        self.position = position
