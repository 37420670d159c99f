"""Chat package for answering policy questions."""

from .orchestrator import AnswerOrchestrator
from ..exceptions import (
    ChatError,
    ModelError,
    LLMUnavailable,
    LLMTimeout,
    ContextError,
    EmptyCorpus,
    DocumentProcessingError,
    ExtractionError,
    MalformedCitation
)

__all__ = [
    'AnswerOrchestrator',
    'ChatError',
    'ModelError',
    'LLMUnavailable',
    'LLMTimeout',
    'ContextError',
    'EmptyCorpus',
    'DocumentProcessingError',
    'ExtractionError',
    'MalformedCitation'
]
