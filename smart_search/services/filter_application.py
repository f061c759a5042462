"""
External Filter Application
Applies classifier-resolved filters to the candidate set with AND semantics:
a record is kept only when every populated filter matches it
"""
from datetime import datetime
from typing import Callable, List, Optional, Sequence, Set, Tuple
from smart_search.models.filters import LLMFilters, FilterContext, ClassifierResponse
from smart_search.models.records import CandidateRecord
from smart_search.models.search import Intent, IntentType, MatchResult, SearchResult
from smart_search.services.intent_matching import WARMTH_LABELS, added_within, match_source
import logging

logger = logging.getLogger(__name__)


FILTER_SCORES = {
    "company": 100,
    "company_partial": 80,
    "name": 100,
    "name_prefix": 80,
    "name_contains": 60,
    "title": 60,
    "source": 50,
    "warmth": 40,
    "time": 30,
    "location": 30,
    "email": 50,
    "tags": 40,
    "org_kind": 70,
    "org_sector": 70,
    "deal": 90,
}

# (populated, match) for one filter field; populated=False means the field is unset
FilterOutcome = Tuple[bool, Optional[MatchResult]]

INACTIVE: FilterOutcome = (False, None)


# =============================================================================
# PER-FIELD CHECKS
# =============================================================================

def _check_company(filters: LLMFilters, record: CandidateRecord, **_) -> FilterOutcome:
    if not filters.company:
        return INACTIVE
    if not record.org:
        return True, None

    company_lower = filters.company.lower()
    org_lower = record.org.lower()

    if org_lower == company_lower:
        return True, MatchResult(score=FILTER_SCORES["company"], explanation=f"Works at {record.org}")
    if company_lower in org_lower or org_lower in company_lower:
        return True, MatchResult(
            score=FILTER_SCORES["company_partial"],
            explanation=f'Organization matches "{filters.company}"',
        )
    return True, None


def _check_name(filters: LLMFilters, record: CandidateRecord, **_) -> FilterOutcome:
    if not filters.name:
        return INACTIVE

    name_lower = filters.name.lower()
    full_name = record.full_name.lower()

    if full_name == name_lower:
        return True, MatchResult(score=FILTER_SCORES["name"], explanation=f'Name matches "{filters.name}"')
    if (
        full_name.startswith(name_lower)
        or record.first_name.lower().startswith(name_lower)
        or record.last_name.lower().startswith(name_lower)
    ):
        return True, MatchResult(
            score=FILTER_SCORES["name_prefix"],
            explanation=f'Name starts with "{filters.name}"',
        )
    if name_lower in full_name:
        return True, MatchResult(
            score=FILTER_SCORES["name_contains"],
            explanation=f'Name contains "{filters.name}"',
        )
    return True, None


def _check_title(filters: LLMFilters, record: CandidateRecord, **_) -> FilterOutcome:
    if not filters.title:
        return INACTIVE
    if record.title and filters.title.lower() in record.title.lower():
        return True, MatchResult(
            score=FILTER_SCORES["title"],
            explanation=f'Title "{record.title}" matches "{filters.title}"',
        )
    return True, None


def _check_source(filters: LLMFilters, record: CandidateRecord, **_) -> FilterOutcome:
    if not filters.source:
        return INACTIVE
    return True, match_source(record.source, filters.source)


def _check_warmth(filters: LLMFilters, record: CandidateRecord, **_) -> FilterOutcome:
    if not filters.warmth:
        return INACTIVE
    if record.warmth in filters.warmth:
        return True, MatchResult(
            score=FILTER_SCORES["warmth"],
            explanation=f"Warmth: {WARMTH_LABELS[record.warmth]}",
        )
    return True, None


def _check_added_within(
    filters: LLMFilters,
    record: CandidateRecord,
    now: Optional[datetime] = None,
    **_
) -> FilterOutcome:
    if not filters.added_within_days:
        return INACTIVE
    if added_within(record, filters.added_within_days, now):
        return True, MatchResult(
            score=FILTER_SCORES["time"],
            explanation=f"Added within last {filters.added_within_days} days",
        )
    return True, None


def _check_location(filters: LLMFilters, record: CandidateRecord, **_) -> FilterOutcome:
    if not filters.location:
        return INACTIVE
    if filters.location.lower() in record.location.lower():
        return True, MatchResult(
            score=FILTER_SCORES["location"],
            explanation=f'Location matches "{filters.location}"',
        )
    return True, None


def _check_email(filters: LLMFilters, record: CandidateRecord, **_) -> FilterOutcome:
    if not filters.email:
        return INACTIVE
    if record.email and filters.email.lower() in record.email.lower():
        return True, MatchResult(
            score=FILTER_SCORES["email"],
            explanation=f'Email matches "{filters.email}"',
        )
    return True, None


def _check_tags(filters: LLMFilters, record: CandidateRecord, **_) -> FilterOutcome:
    if not filters.tags:
        return INACTIVE

    record_tags = [t.lower() for t in record.tags]
    matched = [
        tag for tag in filters.tags
        if any(tag.lower() in record_tag for record_tag in record_tags)
    ]
    if matched:
        return True, MatchResult(score=FILTER_SCORES["tags"], explanation=f"Tags: {', '.join(matched)}")
    return True, None


def _check_org_kind(filters: LLMFilters, record: CandidateRecord, **_) -> FilterOutcome:
    if not filters.org_kind:
        return INACTIVE
    if record.org_kind:
        kind_lower = record.org_kind.lower()
        if any(kind.lower() == kind_lower for kind in filters.org_kind):
            return True, MatchResult(
                score=FILTER_SCORES["org_kind"],
                explanation=f"Organization type: {record.org_kind}",
            )
    return True, None


def _check_org_sector(
    filters: LLMFilters,
    record: CandidateRecord,
    context: Optional[FilterContext] = None,
    **_
) -> FilterOutcome:
    # Only counted when the sector lookup was supplied
    if not filters.org_sector or context is None or context.org_sector_map is None:
        return INACTIVE

    entry = context.org_sector_map.get(record.org_id) if record.org_id else None
    if entry is None:
        return True, None

    sector_lower = filters.org_sector.lower()
    if (
        (entry.sector and sector_lower in entry.sector.lower())
        or (entry.sub_sector and sector_lower in entry.sub_sector.lower())
    ):
        return True, MatchResult(
            score=FILTER_SCORES["org_sector"],
            explanation=f"Org sector: {entry.sector or entry.sub_sector}",
        )
    return True, None


def _check_deal(
    filters: LLMFilters,
    record: CandidateRecord,
    deal_ids: Optional[Set[int]] = None,
    **_
) -> FilterOutcome:
    # dealName/dealSector/dealStatus were already resolved to record ids upstream
    if deal_ids is None or not filters.has_deal_context:
        return INACTIVE
    if record.id not in deal_ids:
        return True, None

    if filters.deal_name:
        label = f'Connected to deal "{filters.deal_name}"'
    elif filters.deal_sector:
        label = f"Connected to {filters.deal_sector} deal"
    else:
        label = "Connected to matching deal"
    return True, MatchResult(score=FILTER_SCORES["deal"], explanation=label)


FILTER_CHECKS: List[Callable[..., FilterOutcome]] = [
    _check_company,
    _check_name,
    _check_title,
    _check_source,
    _check_warmth,
    _check_added_within,
    _check_location,
    _check_email,
    _check_tags,
    _check_org_kind,
    _check_org_sector,
    _check_deal,
]


# =============================================================================
# APPLIER
# =============================================================================

def _intents_from_context(context: Optional[FilterContext]) -> List[Intent]:
    """Classifier intent chips as Intent objects; unknown types are dropped"""
    if context is None:
        return []

    intents = []
    known = {t.value for t in IntentType}
    for chip in context.intents:
        if chip.type not in known:
            logger.warning(f"Dropping classifier intent with unknown type {chip.type!r}")
            continue
        intents.append(Intent(type=IntentType(chip.type), value="", label=chip.label))
    return intents


def count_active_filters(
    filters: LLMFilters,
    context: Optional[FilterContext] = None
) -> int:
    """Number of filters a record has to satisfy, independent of the records"""
    count = sum(1 for value in (
        filters.company,
        filters.name,
        filters.title,
        filters.source,
        filters.warmth,
        filters.added_within_days,
        filters.location,
        filters.email,
        filters.tags,
        filters.org_kind,
    ) if value)

    if filters.org_sector and context is not None and context.org_sector_map is not None:
        count += 1
    if filters.has_deal_context and context is not None and context.matched_ids is not None:
        count += 1
    return count


def apply_external_filters(
    filters: LLMFilters,
    records: Sequence[CandidateRecord],
    context: Optional[FilterContext] = None,
    now: Optional[datetime] = None
) -> List[SearchResult]:
    """
    Apply classifier filters to records

    Args:
        filters: Filters resolved by the external classifier
        records: Candidate records, in display order
        context: Deal-matched record ids, org sector lookup and intent chips
        now: Reference time for the addedWithinDays filter

    Returns:
        Records satisfying every populated filter, sorted by score
        descending. No populated filters means no results.
    """
    deal_ids = set(context.matched_ids) if context and context.matched_ids is not None else None
    matched_intents = _intents_from_context(context)

    filter_count = count_active_filters(filters, context)
    results = []

    if filter_count == 0:
        logger.info(f"No classifier filters populated: 0 of {len(records)} records matched")
        return results

    for record in records:
        score = 0
        explanations: List[str] = []
        match_count = 0

        for check in FILTER_CHECKS:
            active, match = check(filters, record, context=context, deal_ids=deal_ids, now=now)
            if active and match is not None:
                match_count += 1
                score += match.score
                explanations.append(match.explanation)

        if match_count == filter_count:
            results.append(SearchResult(
                record_id=record.id,
                score=score,
                explanations=explanations,
                matched_intents=list(matched_intents),
            ))

    ranked = sorted(results, key=lambda r: r.score, reverse=True)

    logger.info(
        f"Applied {filter_count} classifier filters: {len(ranked)} of {len(records)} records matched"
    )

    return ranked


def apply_classifier_response(
    response: ClassifierResponse,
    records: Sequence[CandidateRecord],
    now: Optional[datetime] = None
) -> List[SearchResult]:
    """Apply a validated classifier response, using its auxiliary data as context"""
    context = FilterContext(
        matched_ids=response.matched_person_ids,
        org_sector_map=response.org_sector_map,
        intents=response.intents,
    )
    return apply_external_filters(response.filters, records, context, now)
