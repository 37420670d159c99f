"""Retrieval package for lexical section ranking."""

from .scorer import LexicalScorer, rank, tokenize_query

__all__ = ['LexicalScorer', 'rank', 'tokenize_query']
