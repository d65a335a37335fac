"""
Unit tests for ranked matching (filter, sort, limit).
"""

import pytest
from src.matching.profile import extract_profile
from src.matching.ranking import (
    DEFAULT_CARD_LIMIT,
    DEFAULT_MATERIAL_LIMIT,
    match_compare_cards,
    match_materials,
    recommend_for_topic,
)
from src.models import HotTopic


@pytest.fixture
def library(make_material):
    """Small library with distinct scores for the query 青苗法 王安石"""
    return [
        make_material(id="mat_excerpt", excerpt="青苗法的推行"),          # 4 × 1.2 = 4.8
        make_material(id="mat_none", title="盐铁论"),                      # 0, dropped
        make_material(id="mat_title", title="青苗法研究", people=["王安石"]),  # 9.6 + 7.2 = 16.8
        make_material(id="mat_people", people=["王安石"]),                 # 7.2
        make_material(id="mat_low", credibility="低"),                     # -1, dropped
    ]


class TestMatchMaterials:
    """Test material ranking"""

    def test_sorted_and_filtered(self, library):
        matches = match_materials("青苗法 王安石", library)

        assert [m.material.id for m in matches] == ["mat_title", "mat_people", "mat_excerpt"]
        assert [m.score for m in matches] == pytest.approx([16.8, 7.2, 4.8])

    def test_scores_descending(self, library):
        scores = [m.score for m in match_materials("青苗法 王安石", library)]
        assert all(a >= b for a, b in zip(scores, scores[1:]))

    def test_non_positive_excluded(self, library):
        ids = {m.material.id for m in match_materials("青苗法 王安石", library)}
        assert "mat_none" not in ids
        assert "mat_low" not in ids

    def test_references_caller_records(self, library):
        matches = match_materials("青苗法 王安石", library)
        assert matches[0].material is library[2]

    def test_ties_keep_input_order(self, make_material):
        a = make_material(id="a", title="青苗法")
        b = make_material(id="b", title="青苗法")

        assert [m.material.id for m in match_materials("青苗法", [a, b])] == ["a", "b"]
        assert [m.material.id for m in match_materials("青苗法", [b, a])] == ["b", "a"]

    def test_default_limit(self, make_material):
        materials = [make_material(title="青苗法") for _ in range(15)]
        assert len(match_materials("青苗法", materials)) == DEFAULT_MATERIAL_LIMIT

    @pytest.mark.parametrize("limit,expected", [(3, 3), (0, 0), (-2, 0), (100, 15)])
    def test_explicit_limit(self, make_material, limit, expected):
        materials = [make_material(title="青苗法") for _ in range(15)]
        assert len(match_materials("青苗法", materials, limit=limit)) == expected

    def test_deterministic(self, library):
        first = match_materials("青苗法 王安石", library)
        second = match_materials("青苗法 王安石", library)
        assert first == second

    @pytest.mark.parametrize("query", ["", "   ", "a"])
    def test_empty_query(self, make_material, query):
        """No query signal: nothing matches, not even high-credibility records"""
        materials = [make_material(title="青苗法", credibility="高")]
        assert match_materials(query, materials) == []

    def test_empty_candidates(self):
        assert match_materials("青苗法", []) == []

    def test_hot_topic_query(self, library):
        topic = HotTopic(title="青苗法", summary="王安石", keywords=[])
        assert [m.material.id for m in match_materials(topic, library)][0] == "mat_title"

    def test_accepts_extracted_profile(self, library):
        profile = extract_profile("青苗法 王安石")
        assert match_materials(profile, library) == match_materials("青苗法 王安石", library)

    def test_no_token_overlap_still_matches_on_credibility(self, make_material):
        """A high-credibility record scores +1 once the query carries any signal"""
        matches = match_materials("芯片", [make_material(credibility="高")])
        assert [m.score for m in matches] == [1.0]


class TestMatchCompareCards:
    """Test comparison-card ranking"""

    def test_scenario(self, qingmiao_card, make_card):
        other = make_card(topic_title="芯片出口管制", event_title="明代海禁")
        matches = match_compare_cards("限购政策", [other, qingmiao_card])

        assert [m.card.id for m in matches] == ["card_qingmiao"]
        assert matches[0].score > 0
        assert matches[0].card is qingmiao_card

    def test_default_limit(self, make_card):
        cards = [make_card(topic_title="限购政策") for _ in range(8)]
        assert len(match_compare_cards("限购政策", cards)) == DEFAULT_CARD_LIMIT

    def test_sorted(self, make_card):
        cards = [
            make_card(id="weak", outcome="宋元"),
            make_card(id="strong", topic_title="青苗法", dynasties=["宋元"]),
        ]
        matches = match_compare_cards("宋元 青苗法", cards)
        assert [m.card.id for m in matches] == ["strong", "weak"]
        assert matches[0].score > matches[1].score

    def test_empty_query(self, qingmiao_card):
        assert match_compare_cards("", [qingmiao_card]) == []


class TestRecommendForTopic:
    """Test the combined card + material recommendation"""

    def test_both_lists(self, qingmiao_card, make_material):
        materials = [make_material(title="限购政策史") for _ in range(10)]
        cards, mats = recommend_for_topic("限购政策", [qingmiao_card], materials)

        assert [c.card.id for c in cards] == ["card_qingmiao"]
        assert len(mats) == 8

    def test_profile_extracted_once(self, qingmiao_card, make_material, monkeypatch):
        """Cards and materials are ranked against one shared profile"""
        import src.matching.ranking as ranking

        calls = []

        def counting_extract(query):
            calls.append(query)
            return extract_profile(query)

        monkeypatch.setattr(ranking, "extract_profile", counting_extract)
        recommend_for_topic("限购政策", [qingmiao_card], [make_material(title="限购政策史")])

        assert calls == ["限购政策"]
