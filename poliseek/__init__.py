"""
Policy document retrieval and answer engine.
"""

from .models import Answer, Citation, Section
from .retrieval import LexicalScorer, rank
from .context import assemble, build_system_prompt
from .citations import extract_citations
from .chat import AnswerOrchestrator

__all__ = [
    'Answer',
    'AnswerOrchestrator',
    'Citation',
    'LexicalScorer',
    'Section',
    'assemble',
    'build_system_prompt',
    'extract_citations',
    'rank'
]
