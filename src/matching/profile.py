"""
Query profile extraction.

Turns a query (free text or a hot-topic record) into the three signals the
scorers consume: search tokens, thematic dimensions, and eras.
"""

from dataclasses import dataclass
from typing import List, Tuple

from ..models import HotTopic, QueryInput, RawText
from ..vocabulary import Dynasty, SimilarityDimension
from .detection import detect_dimensions, detect_dynasties
from .tokenizer import normalize_text, tokenize


@dataclass(frozen=True)
class QueryProfile:
    """Extracted query signals (derived, never persisted)"""
    tokens: Tuple[str, ...]
    dimensions: Tuple[SimilarityDimension, ...]
    dynasties: Tuple[Dynasty, ...]

    @property
    def is_empty(self) -> bool:
        return not (self.tokens or self.dimensions or self.dynasties)


def as_query(query: QueryInput):
    """Wrap a bare string as RawText; pass query models through."""
    if isinstance(query, str):
        return RawText(text=query)
    return query


def _query_fields(query: QueryInput) -> List[str]:
    """Text fields of the query, tokenized one by one."""
    query = as_query(query)
    if query.kind == "hot_topic":
        topic: HotTopic = query
        return [topic.title, topic.summary or "", *topic.keywords]
    return [query.text]


def extract_profile(query: QueryInput) -> QueryProfile:
    """
    Extract tokens, dimensions and eras from a query.

    Detection runs over the joined text (title, summary, keywords). Tokens
    come from splitting each field separately, so a prefix never spans the
    boundary between two fields.

    Never raises: empty input gives an empty profile.

    Examples:
        >>> profile = extract_profile("财政 改革 宋朝争议")
        >>> profile.tokens
        ('财政', '改革', '宋朝争议')
        >>> profile.dimensions
        ('财政', '制度')
    """
    fields = _query_fields(query)
    text = normalize_text(" ".join(fields))

    return QueryProfile(
        tokens=tuple(tokenize(fields)),
        dimensions=tuple(detect_dimensions(text)),
        dynasties=tuple(detect_dynasties(text)),
    )
