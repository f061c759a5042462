"""
Deal Context Resolution
Builds the auxiliary data the filter applier needs from CRM deal and
organization listings: org sector lookups and the set of people connected
to deals that match the classifier's deal filters
"""
from typing import Any, Dict, Iterable, List, Optional
from smart_search.models.filters import LLMFilters, OrgSectorEntry
from smart_search.models.records import DealSummary, OrgSummary
from smart_search.config import settings
import logging

logger = logging.getLogger(__name__)


def build_org_sector_map(orgs: Iterable[OrgSummary]) -> Dict[int, OrgSectorEntry]:
    """Org id -> sector; organization listings carry no sub-sector"""
    return {org.id: OrgSectorEntry(sector=org.sector, sub_sector=None) for org in orgs}


def match_deals(filters: LLMFilters, deals: Iterable[DealSummary]) -> List[DealSummary]:
    """
    Narrow deals by the classifier's deal filters

    Args:
        filters: Classifier filters (dealName, dealSector, dealStatus)
        deals: All known deals, in listing order

    Returns:
        Deals matching every populated deal filter, listing order preserved
    """
    matching = list(deals)

    if filters.deal_name:
        name_lower = filters.deal_name.lower()
        matching = [d for d in matching if d.name and name_lower in d.name.lower()]

    if filters.deal_sector:
        sector_lower = filters.deal_sector.lower()
        matching = [d for d in matching if d.sector and sector_lower in d.sector.lower()]

    if filters.deal_status is not None:
        statuses = {s.lower() for s in filters.deal_status}
        matching = [d for d in matching if d.status and d.status.lower() in statuses]

    logger.debug(f"{len(matching)} deals match the deal filters")
    return matching


def _nested_id(item: Dict[str, Any], key: str) -> Optional[int]:
    nested = item.get(key)
    if isinstance(nested, dict) and nested.get("id"):
        return nested["id"]
    return None


def collect_person_ids(deal_details: Iterable[Optional[Dict[str, Any]]]) -> List[int]:
    """
    Person ids connected to deals as investors, sellers or outreach targets

    Args:
        deal_details: Deal detail payloads; missing (None) entries are skipped

    Returns:
        Distinct person ids in first-seen order
    """
    seen: Dict[int, None] = {}

    for detail in deal_details:
        if not detail:
            continue

        for interest in detail.get("interests") or []:
            for key in ("contact", "decisionMaker"):
                person_id = _nested_id(interest, key)
                if person_id:
                    seen.setdefault(person_id)

        for block in detail.get("blocks") or []:
            for key in ("contact", "brokerContact"):
                person_id = _nested_id(block, key)
                if person_id:
                    seen.setdefault(person_id)

        for target in detail.get("targets") or []:
            if target.get("targetType") == "Person" and target.get("targetId"):
                seen.setdefault(target["targetId"])

    return list(seen)


def deals_to_expand(filters: LLMFilters, deals: Iterable[DealSummary]) -> List[DealSummary]:
    """Matching deals whose details should be fetched, capped by settings.max_deal_details"""
    return match_deals(filters, deals)[:settings.max_deal_details]
