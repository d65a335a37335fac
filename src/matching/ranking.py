"""
Ranked matching of materials and comparison cards against a query.

Every call is pure: no I/O, no shared state, candidates are only read.
Results are sorted by descending score with a stable sort, so candidates
with equal scores keep their input order.
"""

import logging
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar, Union

from ..models import CompareCard, CompareMatch, MatchReason, Material, MaterialMatch, QueryInput
from .profile import QueryProfile, extract_profile
from .scorer import score_compare_card, score_material

logger = logging.getLogger(__name__)

DEFAULT_MATERIAL_LIMIT = 10
DEFAULT_CARD_LIMIT = 5
# Materials shown next to the comparison-card editor
DEFAULT_RECOMMENDED_MATERIAL_LIMIT = 8

R = TypeVar("R")
M = TypeVar("M")


def _as_profile(query: Union[QueryInput, QueryProfile]) -> QueryProfile:
    if isinstance(query, QueryProfile):
        return query
    return extract_profile(query)


def _rank(
    profile: QueryProfile,
    candidates: Sequence[R],
    score_fn: Callable[[QueryProfile, R], Tuple[float, MatchReason]],
    build: Callable[[R, float, MatchReason], M],
    limit: int,
) -> List[M]:
    # Without any query signal only the credibility adjustment would score
    if profile.is_empty:
        logger.debug(f"Empty query profile, skipping {len(candidates)} candidates")
        return []

    scored = []
    for record in candidates:
        score, reason = score_fn(profile, record)
        if score <= 0:
            continue
        scored.append((score, build(record, score, reason)))

    # sorted() is stable: ties keep candidate order
    scored = sorted(scored, key=lambda item: item[0], reverse=True)
    results = [match for _, match in scored[:max(limit, 0)]]

    logger.debug(
        f"Ranked {len(candidates)} candidates: {len(scored)} matched, "
        f"{len(results)} returned (tokens={len(profile.tokens)}, "
        f"dimensions={list(profile.dimensions)}, dynasties={list(profile.dynasties)})"
    )
    return results


def match_materials(
    query: Union[QueryInput, QueryProfile],
    materials: Sequence[Material],
    limit: Optional[int] = None,
) -> List[MaterialMatch]:
    """
    Rank library materials by relevance to a query.

    Args:
        query: Free text, RawText, HotTopic or an already extracted QueryProfile
        materials: Candidate records (not modified)
        limit: Max results (default: 10)

    Returns:
        Matches with score > 0, best first, at most `limit`.
        Each match references the caller's Material object.
    """
    profile = _as_profile(query)
    return _rank(
        profile,
        materials,
        score_material,
        lambda m, score, reason: MaterialMatch(material=m, score=score, reason=reason),
        DEFAULT_MATERIAL_LIMIT if limit is None else limit,
    )


def match_compare_cards(
    query: Union[QueryInput, QueryProfile],
    cards: Sequence[CompareCard],
    limit: Optional[int] = None,
) -> List[CompareMatch]:
    """
    Rank comparison cards by relevance to a query.

    Args:
        query: Free text, RawText, HotTopic or an already extracted QueryProfile
        cards: Candidate cards (not modified)
        limit: Max results (default: 5)

    Returns:
        Matches with score > 0, best first, at most `limit`
    """
    profile = _as_profile(query)
    return _rank(
        profile,
        cards,
        score_compare_card,
        lambda c, score, reason: CompareMatch(card=c, score=score, reason=reason),
        DEFAULT_CARD_LIMIT if limit is None else limit,
    )


def recommend_for_topic(
    query: Union[QueryInput, QueryProfile],
    cards: Sequence[CompareCard],
    materials: Sequence[Material],
    card_limit: int = DEFAULT_CARD_LIMIT,
    material_limit: int = DEFAULT_RECOMMENDED_MATERIAL_LIMIT,
) -> Tuple[List[CompareMatch], List[MaterialMatch]]:
    """
    Existing comparison cards and supporting materials for one hot topic.

    Used while drafting a new comparison card: shows what has already been
    mapped and which library materials could back it.
    """
    profile = _as_profile(query)
    return (
        match_compare_cards(profile, cards, limit=card_limit),
        match_materials(profile, materials, limit=material_limit),
    )
