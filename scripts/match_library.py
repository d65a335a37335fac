#!/usr/bin/env python3
"""
Rank an exported studio library against a query from the command line.

Reads JSON exports of the browser store (arrays of camelCase records) and
prints ranked materials and/or comparison cards with scores and reasons.

Usage:
    python scripts/match_library.py "限购政策 财政" --materials materials.json
    python scripts/match_library.py "限购政策" --cards cards.json --limit 3
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List

from pydantic import TypeAdapter, ValidationError

# Add project root to path for src imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.matching import extract_profile, match_compare_cards, match_materials  # noqa: E402
from src.models import CompareCard, Material, MatchReason  # noqa: E402

_materials_adapter = TypeAdapter(List[Material])
_cards_adapter = TypeAdapter(List[CompareCard])


def load_records(path: Path, adapter: TypeAdapter) -> list:
    """Load and validate a JSON array of records."""
    with open(path, "r", encoding="utf-8") as f:
        return adapter.validate_python(json.load(f))


def format_reason(reason: MatchReason) -> str:
    parts = []
    if reason.tokens:
        parts.append("命中词：" + "、".join(reason.tokens))
    if reason.dimensions:
        parts.append("维度：" + "、".join(reason.dimensions))
    if reason.dynasties:
        parts.append("朝代：" + "、".join(reason.dynasties))
    return "；".join(parts) or "-"


def main():
    parser = argparse.ArgumentParser(description="Rank library materials and comparison cards against a query")
    parser.add_argument("query", help="Hot-topic title or keywords")
    parser.add_argument("--materials", type=Path, help="JSON export of library materials")
    parser.add_argument("--cards", type=Path, help="JSON export of comparison cards")
    parser.add_argument("--limit", type=int, default=None, help="Max results per list")
    args = parser.parse_args()

    if not args.materials and not args.cards:
        parser.error("at least one of --materials / --cards is required")

    profile = extract_profile(args.query)
    print(f"Tokens: {', '.join(profile.tokens) or '-'}")
    print(f"Dimensions: {', '.join(profile.dimensions) or '-'}  Dynasties: {', '.join(profile.dynasties) or '-'}")

    try:
        if args.materials:
            materials = load_records(args.materials, _materials_adapter)
            matches = match_materials(profile, materials, limit=args.limit)
            print(f"\nMaterials ({len(matches)}/{len(materials)}):")
            for i, m in enumerate(matches, start=1):
                print(f"  {i}. [{m.score:>5.1f}] {m.material.title} ({m.material.credibility})")
                print(f"      {format_reason(m.reason)}")

        if args.cards:
            cards = load_records(args.cards, _cards_adapter)
            card_matches = match_compare_cards(profile, cards, limit=args.limit)
            print(f"\nComparison cards ({len(card_matches)}/{len(cards)}):")
            for i, c in enumerate(card_matches, start=1):
                print(f"  {i}. [{c.score:>5.1f}] {c.card.topic_title} ⇄ {c.card.event_title}")
                print(f"      {format_reason(c.reason)}")
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        print(f"Failed to load records: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
