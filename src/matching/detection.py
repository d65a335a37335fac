"""Domain-term detection: eras (dynasties) and thematic dimensions."""

from typing import List

from .tokenizer import uniq
from ..vocabulary import DIMENSION_HINTS, DIMENSIONS, DYNASTIES, Dynasty, SimilarityDimension


def detect_dynasties(text: str) -> List[Dynasty]:
    """Era labels appearing literally in normalized (lowercase) text."""
    return [d for d in DYNASTIES if d.lower() in text]


def detect_dimensions(text: str) -> List[SimilarityDimension]:
    """
    Detect thematic dimensions in normalized (lowercase) text.

    A dimension is detected when its own label appears in the text, or when
    any word from its hint list does ("改革" implies 制度, "ai" implies 技术).

    Returns:
        Label hits in DIMENSIONS order, then hint hits in DIMENSION_HINTS
        order, deduplicated

    Examples:
        >>> detect_dimensions("财政 改革 宋朝争议")
        ['财政', '制度']

        >>> detect_dimensions("ai 芯片出口管制")
        ['技术']
    """
    out: List[SimilarityDimension] = [d for d in DIMENSIONS if d.lower() in text]

    for dim, words in DIMENSION_HINTS.items():
        if any(w in text for w in words):
            out.append(dim)

    return uniq(out)
