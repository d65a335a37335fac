"""
Tokenizer for query text.

Tokenization pipeline:
1. Split on delimiters (ASCII/full-width commas, newlines, CJK sentence
   punctuation, pipe, slashes, whitespace)
2. Emit each piece, plus its 4- and 6-character prefixes when long enough
3. Normalize (lowercase, collapse whitespace, trim)
4. Drop tokens shorter than 2 characters
5. Deduplicate (first-seen order) and cap at MAX_TOKENS

There is no word segmentation. CJK topic phrases are usually compounds whose
prefix carries the meaning ("宋朝争议" → "宋朝争议"; "青苗法改革争议" →
"青苗法改", "青苗法改革争"), so prefixes stand in for real segmentation.
"""

import re
from typing import Iterable, List, TypeVar

T = TypeVar("T")

MAX_TOKENS = 50
MIN_TOKEN_LENGTH = 2
PREFIX_LENGTHS = (4, 6)

_DELIMITERS = re.compile(r"[,\n，。！？、\s|/\\]+")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Lowercase, collapse whitespace runs to one space, trim."""
    return _WHITESPACE.sub(" ", (text or "").lower()).strip()


def uniq(items: Iterable[T]) -> List[T]:
    """Deduplicate preserving first-seen order."""
    return list(dict.fromkeys(items))


def split_tokens(text: str) -> List[str]:
    """
    Split raw text into pieces and their prefixes (not yet normalized).

    Examples:
        >>> split_tokens("财政 改革")
        ['财政', '改革']

        >>> split_tokens("限购政策，王安石变法")
        ['限购政策', '限购政策', '王安石变法', '王安石变']

        >>> split_tokens("   ")
        []
    """
    trimmed = (text or "").strip()
    if not trimmed:
        return []

    out: List[str] = []
    for piece in _DELIMITERS.split(trimmed):
        if not piece:
            continue
        out.append(piece)
        for size in PREFIX_LENGTHS:
            if len(piece) >= size:
                out.append(piece[:size])
    return out


def tokenize(texts: Iterable[str]) -> List[str]:
    """
    Tokenize each text independently and merge the results.

    Texts are split one by one so prefixes never span two fields.

    Args:
        texts: Raw text fragments (title, summary, each keyword, ...)

    Returns:
        Normalized, deduplicated tokens, at most MAX_TOKENS
    """
    raw: List[str] = []
    for text in texts:
        raw.extend(split_tokens(text))

    tokens = [normalize_text(t) for t in raw]
    tokens = [t for t in tokens if len(t) >= MIN_TOKEN_LENGTH]
    return uniq(tokens)[:MAX_TOKENS]
