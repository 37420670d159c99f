"""Lexical relevance scoring of policy sections.

Sections are scored against a free-text query with weighted token matches in
titles and content, verbatim phrase bonuses, a boost for structured
(article + section) excerpts and a proximity bonus for multi-token queries.
Scoring is pure: the same query and sections always produce the same ranking.
"""

import logging
import math
import re
from collections import Counter
from typing import Iterable, List, Optional, Sequence, Tuple

from ..config import DEFAULT_MAX_RESULTS, DEFAULT_MIN_SCORE
from ..models.section import ScoredSection, Section

logger = logging.getLogger(__name__)

DOMAIN_KEYWORDS = frozenset([
    'policy', 'procedure', 'regulation', 'rule', 'guideline',
    'requirement', 'mandatory', 'prohibited', 'permission', 'approval',
    'student', 'faculty', 'staff', 'admin', 'academic', 'conduct', 'discipline',
])
KEYWORD_WEIGHT = 2.0
DEFAULT_WEIGHT = 1.0
MIN_TOKEN_LENGTH = 3

TITLE_TOKEN_POINTS = 10
TITLE_PHRASE_BONUS = 30
CONTENT_BASE_POINTS = 5
CONTENT_LOG_FACTOR = 2
CONTENT_MAX_POINTS = 15
STRUCTURED_MULTIPLIER = 1.2
CONTENT_PHRASE_BONUS = 20

# (window upper bound, bonus), checked in order
PROXIMITY_BONUSES = ((100, 15), (300, 10), (600, 5))

_PUNCTUATION = re.compile(r'[^\w\s]')


def normalize_text(text: str) -> str:
    """Lowercase, strip punctuation and collapse whitespace."""
    text = _PUNCTUATION.sub('', text.lower())
    return ' '.join(text.split())


def tokenize_query(query: str) -> List[str]:
    """Split a query into normalized tokens longer than two characters."""
    return [token for token in normalize_text(query).split() if len(token) >= MIN_TOKEN_LENGTH]


def token_weight(token: str) -> float:
    return KEYWORD_WEIGHT if token in DOMAIN_KEYWORDS else DEFAULT_WEIGHT


def count_word_occurrences(token: str, text: str) -> int:
    """Count whole-word occurrences of ``token`` in ``text``."""
    return len(re.findall(rf'\b{re.escape(token)}\b', text))


def _find_all(text: str, token: str) -> List[int]:
    positions = []
    pos = text.find(token)
    while pos != -1:
        positions.append(pos)
        pos = text.find(token, pos + 1)
    return positions


def minimal_window(text: str, tokens: Iterable[str]) -> Optional[int]:
    """Find the smallest character window covering every distinct token.

    Occurrence start positions of all tokens are sorted and a sliding window
    is moved over them. The window length is measured from the first to the
    last occurrence start, inclusive.

    Args:
        text: Normalized text to search
        tokens: Query tokens

    Returns:
        Window length in characters, or None if any token never occurs
    """
    distinct = list(dict.fromkeys(tokens))
    if not distinct:
        return None

    occurrences: List[Tuple[int, str]] = []
    for token in distinct:
        starts = _find_all(text, token)
        if not starts:
            return None
        occurrences.extend((pos, token) for pos in starts)
    occurrences.sort()

    counts: Counter = Counter()
    covered = 0
    left = 0
    best = None
    for pos, token in occurrences:
        counts[token] += 1
        if counts[token] == 1:
            covered += 1
        while covered == len(distinct):
            left_pos, left_token = occurrences[left]
            width = pos - left_pos + 1
            if best is None or width < best:
                best = width
            counts[left_token] -= 1
            if counts[left_token] == 0:
                covered -= 1
            left += 1
    return best


def proximity_bonus(text: str, tokens: Sequence[str]) -> int:
    """Map the minimal token window in ``text`` to a bonus."""
    window = minimal_window(text, tokens)
    if window is None:
        return 0
    for limit, bonus in PROXIMITY_BONUSES:
        if window < limit:
            return bonus
    return 0


class LexicalScorer:
    """Ranks document sections against a query with weighted lexical matching."""

    def __init__(
        self,
        max_results: int = DEFAULT_MAX_RESULTS,
        min_score: float = DEFAULT_MIN_SCORE
    ):
        """Initialize the scorer.

        Args:
            max_results: Maximum number of sections returned by ``rank``
            min_score: Sections must score strictly above this to be returned
        """
        self.max_results = max_results
        self.min_score = min_score

    def score_section(
        self,
        section: Section,
        weighted_tokens: Sequence[Tuple[str, float]],
        query_normalized: str
    ) -> float:
        """Score a single section for an already tokenized query."""
        title = normalize_text(section.title)
        content = normalize_text(section.content)

        score = 0.0
        for token, weight in weighted_tokens:
            if token in title:
                score += TITLE_TOKEN_POINTS * weight

            matches = count_word_occurrences(token, content)
            if matches > 0:
                points = CONTENT_BASE_POINTS + CONTENT_LOG_FACTOR * math.log2(matches + 1)
                score += min(CONTENT_MAX_POINTS, points) * weight

        if query_normalized in title:
            score += TITLE_PHRASE_BONUS

        if section.is_structured:
            score *= STRUCTURED_MULTIPLIER

        if query_normalized in content:
            score += CONTENT_PHRASE_BONUS

        distinct_tokens = list(dict.fromkeys(token for token, _ in weighted_tokens))
        if len(distinct_tokens) > 1:
            score += proximity_bonus(content, distinct_tokens)

        return score

    def score_sections(self, query: str, sections: Sequence[Section]) -> List[ScoredSection]:
        """Score every section and sort by descending score.

        The sort is stable, so sections with equal scores keep their corpus
        order.

        Args:
            query: Free-text user query
            sections: Candidate sections

        Returns:
            All sections with their scores, best first; empty if the query
            has no usable tokens
        """
        tokens = tokenize_query(query)
        if not tokens or not sections:
            logger.info("No query tokens or sections to score")
            return []

        logger.info(f"Scoring {len(sections)} sections for tokens: {tokens}")
        weighted_tokens = [(token, token_weight(token)) for token in tokens]
        query_normalized = normalize_text(query)

        scored = []
        for section in sections:
            score = self.score_section(section, weighted_tokens, query_normalized)
            logger.debug(f"Section '{section.title[:40]}' scored {score:.2f}")
            scored.append(ScoredSection(section=section, score=score))

        return sorted(scored, key=lambda item: item.score, reverse=True)

    def rank_scored(self, query: str, sections: Sequence[Section]) -> List[ScoredSection]:
        """Return the significant scored sections, best first."""
        significant = [
            item for item in self.score_sections(query, sections)
            if item.score > self.min_score
        ][:self.max_results]

        for item in significant:
            logger.info(f"Match: '{item.section.title[:60]}' (score: {item.score:.2f})")
        logger.info(f"Found {len(significant)} significant matches for query")
        return significant

    def rank(self, query: str, sections: Sequence[Section]) -> List[Section]:
        """Rank sections by relevance to the query.

        Args:
            query: Free-text user query
            sections: Candidate sections

        Returns:
            At most ``max_results`` sections scoring above ``min_score``,
            best first
        """
        return [item.section for item in self.rank_scored(query, sections)]


def rank(query: str, sections: Sequence[Section]) -> List[Section]:
    """Rank sections with the default scorer settings."""
    return LexicalScorer().rank(query, sections)
