"""Models package for shared data structures."""

from .section import DocumentInfo, DocumentRecord, Position, ScoredSection, Section
from .citation import Answer, AnswerOutcome, Citation

__all__ = [
    'Answer',
    'AnswerOutcome',
    'Citation',
    'DocumentInfo',
    'DocumentRecord',
    'Position',
    'ScoredSection',
    'Section'
]
