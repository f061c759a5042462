"""
Tests for the smart search executor
"""
from datetime import timedelta

import pytest
from conftest import NOW, make_record
from smart_search.models.search import IntentType, SmartSearchQuery
from smart_search.services.intent_extraction import parse_smart_search
from smart_search.services.smart_search import execute_smart_search


@pytest.fixture
def records():
    return [
        make_record(id=1, firstName="Ada", lastName="Lovelace", warmth=1, source="Referral",
                    org="Blackstone Group", title="Managing Director"),
        make_record(id=2, firstName="Grace", lastName="Hopper", warmth=2, source="LinkedIn",
                    org="Apollo", title="Analyst", createdAt=NOW - timedelta(days=2)),
        make_record(id=3, firstName="Alan", lastName="Turing", warmth=1, source="Warm Intro",
                    org="Blackstone", title="Partner"),
        make_record(id=4, firstName="Edsger", lastName="Dijkstra", warmth=0, source=None,
                    org=None, title=None),
    ]


def _search(query, records, orgs=("Blackstone", "Blackstone Group", "Apollo")):
    parsed = parse_smart_search(query, list(orgs))
    return execute_smart_search(parsed, records, now=NOW)


def test_warm_referrals_scenario(records):
    """Warmth (40) and exact source (50) add up to 90, explained in intent order"""
    results = _search("warm contacts from referrals", records)

    top = results[0]
    assert top.record_id == 1
    assert top.score == 90
    assert top.explanations == ["Warmth: Warm", "Source: Referral"]
    assert [i.type for i in top.matched_intents] == [IntentType.WARMTH, IntentType.SOURCE]


def test_category_match_ranks_below_exact(records):
    """A same-category source still counts, but lower"""
    results = _search("warm contacts from referrals", records)

    assert [r.record_id for r in results] == [1, 3]
    assert results[1].score == 70
    assert results[1].explanations == ["Warmth: Warm", "Source category: relationship"]


def test_filler_only_query_returns_nothing(records):
    """A query that strips down to nothing matches nothing"""
    assert _search("show me all the contacts", records) == []
    assert execute_smart_search(SmartSearchQuery(raw="", free_text="", intents=[]), records) == []


def test_owner_intent_never_contributes(records):
    """Owner intents are extracted but never matched; time still scores"""
    results = _search("sourced by Gabe this month", records)

    assert [r.record_id for r in results] == [2]
    assert results[0].score == 30
    assert all(i.type != IntentType.OWNER for i in results[0].matched_intents)


def test_name_intent_and_free_text_both_score(records):
    """Residual text scores once as a name intent and once as free text"""
    results = _search("grace", records)

    assert len(results) == 1
    assert results[0].record_id == 2
    assert results[0].score == 160
    assert results[0].explanations == ['Name starts with "grace"', 'Name starts with "grace"']


def test_ties_keep_record_order(records):
    """Equal scores preserve input order"""
    results = _search("blackstone", records, orgs=("Blackstone",))

    assert [r.record_id for r in results] == [3, 1]
    assert results[0].score == 100
    assert results[1].score == 80

    tied = _search("warm", records)
    assert [r.record_id for r in tied] == [1, 3]
    assert tied[0].score == tied[1].score == 40


def test_results_sorted_by_score(records):
    """Scores never increase down the list"""
    results = _search("warm partner at Blackstone", records)
    scores = [r.score for r in results]

    assert scores == sorted(scores, reverse=True)
    assert results[0].record_id == 3


def test_search_is_idempotent(records):
    """Same inputs, same output"""
    first = _search("hot analysts from LinkedIn", records)
    second = _search("hot analysts from LinkedIn", records)

    assert first == second
    assert first[0].record_id == 2


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
