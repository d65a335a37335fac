"""Shared pytest configuration and record factories"""

import sys
from pathlib import Path

import pytest

# Add project root to path for src imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.models import CompareCard, Material, SourceRef


@pytest.fixture
def make_material():
    """
    Factory for materials with neutral defaults.

    Defaults give no text overlap with typical queries and no credibility
    adjustment (中), so each test only sets the fields it exercises.
    """
    counter = {"n": 0}

    def _make(**overrides) -> Material:
        counter["n"] += 1
        fields = {
            "id": f"mat_{counter['n']}",
            "title": "无关标题",
            "source_type": "研究",
            "credibility": "中",
            "created_at": "2025-01-01T00:00:00.000Z",
        }
        fields.update(overrides)
        return Material(**fields)

    return _make


@pytest.fixture
def make_card():
    """Factory for comparison cards with neutral defaults."""
    counter = {"n": 0}

    def _make(**overrides) -> CompareCard:
        counter["n"] += 1
        fields = {
            "id": f"card_{counter['n']}",
            "topic_title": "无关话题",
            "event_title": "无关事件",
            "created_at": "2025-01-01T00:00:00.000Z",
        }
        fields.update(overrides)
        return CompareCard(**fields)

    return _make


@pytest.fixture
def qingmiao_card(make_card):
    """Comparison card mapping a housing-policy topic to the Green Sprouts law"""
    return make_card(
        id="card_qingmiao",
        topic_id="hot_1",
        topic_title="限购政策争议",
        event_title="王安石变法·青苗法",
        dynasties=["宋元"],
        timeline="熙宁二年（1069）起推行",
        core_conflict="官府放贷与地方执行走样",
        key_people=["王安石", "司马光"],
        sources=[
            SourceRef(title="宋史·食货志", url="https://ctext.org/songshi"),
            SourceRef(title="续资治通鉴长编"),
        ],
    )
