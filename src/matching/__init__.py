"""
Relevance matching of library materials and comparison cards.

Lexical matcher for free-text or hot-topic queries. No embeddings, no
index: it scans an in-memory list of records supplied by the caller.

Components:
- tokenizer: delimiter split plus 4/6-character prefixes (no segmentation)
- detection: era (dynasty) and thematic dimension detection
- profile: query → tokens, dimensions, dynasties
- scorer: weighted substring scoring with match reasons
- ranking: filter, stable sort, limit
"""

from .tokenizer import normalize_text, split_tokens, tokenize
from .detection import detect_dimensions, detect_dynasties
from .profile import QueryProfile, extract_profile
from .scorer import score_compare_card, score_material, token_weight
from .ranking import match_compare_cards, match_materials, recommend_for_topic

__all__ = [
    "normalize_text",
    "split_tokens",
    "tokenize",
    "detect_dimensions",
    "detect_dynasties",
    "QueryProfile",
    "extract_profile",
    "score_material",
    "score_compare_card",
    "token_weight",
    "match_materials",
    "match_compare_cards",
    "recommend_for_topic",
]
