"""
Tests for applying external classifier filters
"""
import logging
from datetime import timedelta

import pytest
from conftest import NOW, make_record
from smart_search.models.filters import (
    LLMFilters,
    FilterContext,
    OrgSectorEntry,
    ClassifierIntent,
    ClassifierResponse,
)
from smart_search.models.search import IntentType
from smart_search.services.filter_application import (
    apply_external_filters,
    apply_classifier_response,
    count_active_filters,
)


def test_all_filters_must_match():
    """Partial company (80) plus warmth (40) = 120"""
    filters = LLMFilters(company="Blackstone", warmth=[2, 3])
    record = make_record(org="Blackstone Group", warmth=2)

    results = apply_external_filters(filters, [record])

    assert len(results) == 1
    assert results[0].score == 120
    assert results[0].explanations == ['Organization matches "Blackstone"', "Warmth: Hot"]


def test_one_failing_filter_excludes_record():
    """Company matches but warmth does not -> excluded"""
    filters = LLMFilters(company="Blackstone", warmth=[2, 3])
    record = make_record(org="Blackstone Group", warmth=0)

    assert apply_external_filters(filters, [record]) == []


def test_empty_filters_return_nothing():
    """No populated filters means no results"""
    records = [make_record(id=1), make_record(id=2)]

    assert apply_external_filters(LLMFilters(), records) == []
    assert apply_external_filters(LLMFilters(warmth=[], tags=[]), records) == []


def test_active_filter_count_ignores_records(caplog):
    """Filter count comes from the filters, even with no records to score"""
    filters = LLMFilters(company="Blackstone", warmth=[2], org_sector="health")

    assert count_active_filters(filters) == 2
    assert count_active_filters(filters, FilterContext(org_sector_map={})) == 3
    assert count_active_filters(LLMFilters(deal_name="SpaceX"), FilterContext(matched_ids=[])) == 1

    with caplog.at_level(logging.INFO, logger="smart_search.services.filter_application"):
        assert apply_external_filters(filters, []) == []

    assert "Applied 2 classifier filters: 0 of 0 records matched" in caplog.text


def test_name_tiers():
    """Name filter: exact 100, prefix 80, substring 60"""
    record = make_record()

    assert apply_external_filters(LLMFilters(name="Ada Lovelace"), [record])[0].score == 100
    assert apply_external_filters(LLMFilters(name="love"), [record])[0].score == 80
    assert apply_external_filters(LLMFilters(name="a lov"), [record])[0].score == 60
    assert apply_external_filters(LLMFilters(name="grace"), [record]) == []


def test_source_filter_is_category_aware():
    """Exact source 50, same category 30"""
    exact = make_record(id=1, source="Referral")
    same_category = make_record(id=2, source="Co-Investor")
    other = make_record(id=3, source="Website")

    results = apply_external_filters(LLMFilters(source="Referral"), [same_category, other, exact])

    assert [(r.record_id, r.score) for r in results] == [(1, 50), (2, 30)]


def test_contact_fields():
    """Title, email, location and tags each add their weight"""
    record = make_record(
        title="Vice President",
        email="ada@blackstone.com",
        city="New York",
        state="NY",
        tags=["LP", "Healthcare"],
    )
    filters = LLMFilters(title="president", email="blackstone", location="new york", tags=["health", "crypto"])

    results = apply_external_filters(filters, [record])

    assert results[0].score == 60 + 50 + 30 + 40
    assert "Tags: health" in results[0].explanations
    assert 'Location matches "new york"' in results[0].explanations


def test_added_within_days(now):
    """Recency filter uses the injected clock"""
    fresh = make_record(id=1, createdAt=now - timedelta(days=5))
    stale = make_record(id=2, createdAt=now - timedelta(days=40))

    results = apply_external_filters(LLMFilters(added_within_days=30), [fresh, stale], now=now)

    assert [r.record_id for r in results] == [1]
    assert results[0].explanations == ["Added within last 30 days"]


def test_org_kind_exact_match():
    """Org kind compares case-insensitively and exactly"""
    fund = make_record(id=1, orgKind="Fund")
    bank = make_record(id=2, orgKind="bank")

    results = apply_external_filters(LLMFilters(org_kind=["fund", "broker"]), [fund, bank])

    assert [r.record_id for r in results] == [1]
    assert results[0].score == 70
    assert results[0].explanations == ["Organization type: Fund"]


def test_org_sector_needs_lookup():
    """Without a sector map the filter is not counted at all"""
    record = make_record(orgId=7)
    filters = LLMFilters(org_sector="health", warmth=[0])

    without_map = apply_external_filters(filters, [record])
    with_map = apply_external_filters(
        filters,
        [record],
        FilterContext(org_sector_map={7: OrgSectorEntry(sector=None, sub_sector="Healthcare IT")}),
    )
    missing_org = apply_external_filters(filters, [make_record(orgId=8)], FilterContext(org_sector_map={}))

    assert without_map[0].score == 40
    assert with_map[0].score == 110
    assert "Org sector: Healthcare IT" in with_map[0].explanations
    assert missing_org == []


def test_deal_context_uses_matched_ids():
    """Deal filters collapse to membership in the upstream id set"""
    records = [make_record(id=1), make_record(id=2)]
    context = FilterContext(matched_ids=[2])

    by_name = apply_external_filters(LLMFilters(deal_name="SpaceX"), records, context)
    by_sector = apply_external_filters(LLMFilters(deal_sector="tech"), records, context)
    by_status = apply_external_filters(LLMFilters(deal_status=["live"]), records, context)

    assert [r.record_id for r in by_name] == [2]
    assert by_name[0].score == 90
    assert by_name[0].explanations == ['Connected to deal "SpaceX"']
    assert by_sector[0].explanations == ["Connected to tech deal"]
    assert by_status[0].explanations == ["Connected to matching deal"]


def test_empty_deal_status_counts_with_matched_ids():
    """dealStatus: [] is an active deal filter once ids are resolved"""
    records = [make_record(id=1), make_record(id=2)]
    context = FilterContext(matched_ids=[1])

    results = apply_external_filters(LLMFilters(deal_status=[]), records, context)

    assert [r.record_id for r in results] == [1]
    assert results[0].explanations == ["Connected to matching deal"]


def test_deal_filter_ignored_without_ids():
    """Without resolved ids the deal filter is not counted"""
    records = [make_record(id=1, warmth=1)]

    results = apply_external_filters(LLMFilters(deal_name="SpaceX", warmth=[1]), records)

    assert results[0].score == 40


def test_matched_intents_come_from_classifier():
    """Classifier intent chips are attached; unknown types are dropped"""
    context = FilterContext(intents=[
        ClassifierIntent(type="warmth", label="Warmth: Warm"),
        ClassifierIntent(type="vibes", label="Vibes: good"),
    ])

    results = apply_external_filters(LLMFilters(warmth=[1]), [make_record(warmth=1)], context)

    assert len(results[0].matched_intents) == 1
    assert results[0].matched_intents[0].type == IntentType.WARMTH
    assert results[0].matched_intents[0].value == ""
    assert results[0].matched_intents[0].label == "Warmth: Warm"


def test_results_sorted_by_score():
    """Higher scores first, ties in record order"""
    records = [
        make_record(id=1, org="Apollo Global"),
        make_record(id=2, org="Apollo"),
        make_record(id=3, org="Apollo Management"),
    ]

    results = apply_external_filters(LLMFilters(company="apollo"), records)

    assert [r.record_id for r in results] == [2, 1, 3]


def test_apply_classifier_response():
    """The response's auxiliary data feeds the applier"""
    response = ClassifierResponse.model_validate({
        "filters": {"dealName": "SpaceX", "orgKind": ["fund"]},
        "explanation": "Funds on the SpaceX deal",
        "intents": [{"type": "dealName", "label": "Deal: SpaceX"}],
        "matchedPersonIds": [1],
    })
    records = [make_record(id=1, orgKind="fund"), make_record(id=2, orgKind="fund")]

    results = apply_classifier_response(response, records)

    assert [r.record_id for r in results] == [1]
    assert results[0].score == 160
    assert results[0].matched_intents[0].type == IntentType.DEAL_NAME


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
