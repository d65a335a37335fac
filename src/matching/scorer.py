"""
Relevance scorers for library materials and comparison cards.

Lexical substring matching with hand-tuned weights (no IDF, no embeddings).

Material score:
    Σ field_weight × token_weight(hit)   over title/people/events/excerpt/notes
  + 1                                    if any token occurs in the url
  + 6 × min(|query dims ∩ record dims|, 3)
  + 4 × min(|query eras ∩ record eras|, 2)
  + credibility adjustment (高 +1, 中 0, 低 -1)

Comparison-card score:
    Σ 5 × token_weight(hit)              over one combined text field
  + 3 × min(|query eras ∩ card eras|, 2)
  + 2 × min(|query dims ∩ dims detected in card text|, 3)

Token weight rewards longer, more specific tokens:
    len ≥ 6 → 2.2, len ≥ 4 → 1.8, len ≥ 2 → 1.2, else 0.8

Scores are rounded half-up to one decimal. The weights are fixed: there is
no relevance dataset to tune them against.
"""

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, List, Mapping, Sequence, Tuple

from ..models import CompareCard, MatchReason, Material
from .detection import detect_dimensions
from .profile import QueryProfile
from .tokenizer import normalize_text, uniq

# Per-hit multipliers: curated fields outweigh free text
MATERIAL_FIELD_WEIGHTS: Mapping[str, float] = MappingProxyType({
    "title": 8,
    "people": 6,
    "events": 6,
    "excerpt": 4,
    "notes": 3,
})
URL_BONUS = 1.0
MATERIAL_DIMENSION_BONUS, MATERIAL_DIMENSION_CAP = 6, 3
MATERIAL_DYNASTY_BONUS, MATERIAL_DYNASTY_CAP = 4, 2
CREDIBILITY_ADJUSTMENT: Mapping[str, float] = MappingProxyType({"高": 1.0, "中": 0.0, "低": -1.0})

CARD_FIELD_WEIGHT = 5
CARD_DYNASTY_BONUS, CARD_DYNASTY_CAP = 3, 2
CARD_DIMENSION_BONUS, CARD_DIMENSION_CAP = 2, 3

REASON_TOKEN_LIMIT = 10


def token_weight(token: str) -> float:
    """
    Per-hit weight of a token by length.

    Examples:
        >>> token_weight("青苗法改革争")
        2.2
        >>> token_weight("限购政策")
        1.8
        >>> token_weight("财政")
        1.2
    """
    length = len(token)
    if length >= 6:
        return 2.2
    if length >= 4:
        return 1.8
    if length >= 2:
        return 1.2
    return 0.8


def find_hits(haystack: str, tokens: Iterable[str]) -> List[str]:
    """Tokens occurring as substrings of haystack, in token order."""
    return [t for t in tokens if t and t in haystack]


def round_score(score: float) -> float:
    """Round half-up to one decimal (2.25 → 2.3, where round() gives 2.2)."""
    return math.floor(score * 10 + 0.5) / 10


def _clamp(n: int, low: int, high: int) -> int:
    return max(low, min(high, n))


def _join(parts: Iterable[str]) -> str:
    return normalize_text(" ".join(parts))


@dataclass(frozen=True)
class MaterialText:
    """Normalized text fields of a material"""
    title: str
    excerpt: str
    notes: str
    people: str
    events: str
    tags: str  # Assembled for display/filtering, carries no weight
    url: str

    @classmethod
    def from_material(cls, m: Material) -> "MaterialText":
        citation = ""
        if m.citation is not None:
            citation = _join([m.citation.work, m.citation.locator or "", m.citation.canonical_url or ""])

        return cls(
            title=normalize_text(m.title),
            excerpt=normalize_text(m.excerpt or ""),
            notes=normalize_text(m.notes or ""),
            people=_join(m.people),
            events=_join(m.events),
            tags=_join([m.source_type, m.credibility, *m.dynasties, *m.dimensions, citation]),
            url=normalize_text(m.url or ""),
        )


def compare_card_text(card: CompareCard) -> str:
    """All searchable text of a comparison card as one normalized string."""
    sources = " ".join(f"{s.title} {s.url or ''}" for s in card.sources)
    return _join([
        card.topic_title,
        card.event_title,
        " ".join(card.dynasties),
        card.timeline or "",
        card.core_conflict or "",
        " ".join(card.key_people),
        card.outcome or "",
        card.controversies or "",
        sources,
    ])


def _weighted(hits: Sequence[str], field_weight: float) -> float:
    return sum(field_weight * token_weight(hit) for hit in hits)


def score_material(profile: QueryProfile, material: Material) -> Tuple[float, MatchReason]:
    """
    Score one material against a query profile.

    Args:
        profile: Extracted query signals
        material: Candidate record (not modified)

    Returns:
        (rounded score, reason). The score may be ≤ 0; the ranker drops those.
    """
    text = MaterialText.from_material(material)
    tokens = profile.tokens

    field_hits = {
        field: find_hits(getattr(text, field), tokens)
        for field in MATERIAL_FIELD_WEIGHTS
    }

    score = 0.0
    for field, weight in MATERIAL_FIELD_WEIGHTS.items():
        score += _weighted(field_hits[field], weight)

    if text.url and find_hits(text.url, tokens):
        score += URL_BONUS

    dim_hits = [d for d in profile.dimensions if d in material.dimensions]
    score += _clamp(len(dim_hits), 0, MATERIAL_DIMENSION_CAP) * MATERIAL_DIMENSION_BONUS

    dyn_hits = [d for d in profile.dynasties if d in material.dynasties]
    score += _clamp(len(dyn_hits), 0, MATERIAL_DYNASTY_CAP) * MATERIAL_DYNASTY_BONUS

    score += CREDIBILITY_ADJUSTMENT.get(material.credibility, 0.0)

    matched_tokens = uniq(hit for hits in field_hits.values() for hit in hits)
    reason = MatchReason(
        tokens=matched_tokens[:REASON_TOKEN_LIMIT],
        dimensions=dim_hits[:MATERIAL_DIMENSION_CAP],
        dynasties=dyn_hits[:MATERIAL_DYNASTY_CAP],
    )
    return round_score(score), reason


def score_compare_card(profile: QueryProfile, card: CompareCard) -> Tuple[float, MatchReason]:
    """
    Score one comparison card against a query profile.

    Cards carry no dimension field, so dimensions are re-detected from the
    card's own text and intersected with the query's.
    """
    haystack = compare_card_text(card)

    hits = find_hits(haystack, profile.tokens)
    score = _weighted(hits, CARD_FIELD_WEIGHT)

    dyn_hits = [d for d in profile.dynasties if d in card.dynasties]
    score += _clamp(len(dyn_hits), 0, CARD_DYNASTY_CAP) * CARD_DYNASTY_BONUS

    dim_hits = [d for d in detect_dimensions(haystack) if d in profile.dimensions]
    score += _clamp(len(dim_hits), 0, CARD_DIMENSION_CAP) * CARD_DIMENSION_BONUS

    reason = MatchReason(
        tokens=uniq(hits)[:REASON_TOKEN_LIMIT],
        dimensions=dim_hits[:CARD_DIMENSION_CAP],
        dynasties=dyn_hits[:CARD_DYNASTY_CAP],
    )
    return round_score(score), reason
