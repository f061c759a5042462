"""
Tests for classifier response validation
"""
import json

import pytest
from smart_search.utils.validators import ClassifierResponseError, parse_classifier_response


def test_parse_valid_json_payload():
    """camelCase wire names map onto the model"""
    payload = json.dumps({
        "filters": {"company": "Blackstone", "addedWithinDays": 30, "orgKind": ["fund"]},
        "explanation": "Recent Blackstone contacts",
        "intents": [{"type": "company", "label": "Company: Blackstone"}],
        "matchedPersonIds": None,
        "orgSectorMap": {"3": {"sector": "Finance", "subSector": None}},
    })

    response = parse_classifier_response(payload)

    assert response.filters.company == "Blackstone"
    assert response.filters.added_within_days == 30
    assert response.filters.org_kind == ["fund"]
    assert response.org_sector_map[3].sector == "Finance"
    assert response.matched_person_ids is None


def test_parse_dict_payload():
    """Decoded objects are accepted directly"""
    response = parse_classifier_response({"filters": {}})

    assert response.explanation == ""
    assert response.intents == []


@pytest.mark.parametrize("payload", [
    "not json",
    b"{broken",
    "[1, 2, 3]",
    {"explanation": "no filters"},
    {"filters": None},
    {"filters": {"warmth": "hot"}},
])
def test_malformed_payloads_raise(payload):
    """Anything unusable is surfaced as an explicit error"""
    with pytest.raises(ClassifierResponseError):
        parse_classifier_response(payload)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
