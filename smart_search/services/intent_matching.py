"""
Intent Matching Module
Scores a single intent against a single candidate record
"""
from datetime import datetime, timedelta, timezone
from typing import Optional
from smart_search.models.records import CandidateRecord
from smart_search.models.search import Intent, IntentType, MatchResult
from smart_search.services.sources import resolve_source
import logging

logger = logging.getLogger(__name__)


# Score weights per intent type
INTENT_SCORES = {
    "company_exact": 100,
    "company_partial": 80,
    "source_exact": 50,
    "source_category": 30,
    "role": 60,
    "warmth": 40,
    "time": 30,
    "tag": 40,
}

# Free-text tiers, highest first
FREE_TEXT_SCORES = {
    "name_exact": 100,
    "name_prefix": 80,
    "name_contains": 60,
    "email": 50,
    "title": 40,
    "org": 40,
    "location": 30,
}

WARMTH_LABELS = ["Cold", "Warm", "Hot", "Champion"]


# =============================================================================
# HELPERS
# =============================================================================

def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with aware ones"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_time_ago(date: datetime, now: Optional[datetime] = None) -> str:
    """today / yesterday / N days ago / N weeks ago / N months ago"""
    now = as_utc(now or utc_now())
    diff_days = (now - as_utc(date)) // timedelta(days=1)

    if diff_days == 0:
        return "today"
    if diff_days == 1:
        return "yesterday"
    if diff_days < 7:
        return f"{diff_days} days ago"
    if diff_days < 30:
        return f"{diff_days // 7} weeks ago"
    return f"{diff_days // 30} months ago"


def added_within(record: CandidateRecord, days: int, now: Optional[datetime] = None) -> bool:
    """True when the record was created no earlier than ``days`` before now"""
    cutoff = as_utc(now or utc_now()) - timedelta(days=days)
    return as_utc(record.created_at) >= cutoff


def match_source(record_source: Optional[str], target: str) -> Optional[MatchResult]:
    """
    Category-aware source comparison

    Args:
        record_source: Free-text source stored on the record
        target: Source name being searched for

    Returns:
        50 for the same resolved source, 30 for a different source in the
        same category, None otherwise
    """
    if not record_source:
        return None

    resolved = resolve_source(record_source)
    if not resolved:
        return None

    if resolved.name.lower() == target.lower():
        return MatchResult(score=INTENT_SCORES["source_exact"], explanation=f"Source: {resolved.name}")

    target_source = resolve_source(target)
    if target_source and resolved.category == target_source.category:
        return MatchResult(
            score=INTENT_SCORES["source_category"],
            explanation=f"Source category: {resolved.category.value}",
        )

    return None


# =============================================================================
# FREE TEXT
# =============================================================================

def score_free_text(text: str, record: CandidateRecord) -> MatchResult:
    """
    Score loose text against name, email, title, org and location

    Args:
        text: Free text from the query
        record: Candidate record

    Returns:
        MatchResult for the first tier that applies; score 0 with an empty
        explanation when nothing does
    """
    lower = text.lower()
    first = record.first_name.lower()
    last = record.last_name.lower()
    full_name = record.full_name.lower()

    if full_name == lower:
        return MatchResult(score=FREE_TEXT_SCORES["name_exact"], explanation=f'Name matches "{text}"')

    if full_name.startswith(lower) or first.startswith(lower) or last.startswith(lower):
        return MatchResult(score=FREE_TEXT_SCORES["name_prefix"], explanation=f'Name starts with "{text}"')

    if lower in full_name:
        return MatchResult(score=FREE_TEXT_SCORES["name_contains"], explanation=f'Name contains "{text}"')

    if record.email and lower in record.email.lower():
        return MatchResult(score=FREE_TEXT_SCORES["email"], explanation=f'Email contains "{text}"')

    if record.title and lower in record.title.lower():
        return MatchResult(score=FREE_TEXT_SCORES["title"], explanation=f'Title contains "{text}"')

    if record.org and lower in record.org.lower():
        return MatchResult(score=FREE_TEXT_SCORES["org"], explanation=f'Organization contains "{text}"')

    if lower in record.location.lower():
        return MatchResult(score=FREE_TEXT_SCORES["location"], explanation=f'Location matches "{text}"')

    return MatchResult(score=0, explanation="")


# =============================================================================
# INTENT MATCHING
# =============================================================================

def _match_company(intent: Intent, record: CandidateRecord) -> Optional[MatchResult]:
    if not record.org:
        return None

    org_lower = record.org.lower()
    value_lower = intent.value.lower()

    if org_lower == value_lower:
        return MatchResult(score=INTENT_SCORES["company_exact"], explanation=f"Works at {record.org}")
    if value_lower in org_lower or org_lower in value_lower:
        return MatchResult(
            score=INTENT_SCORES["company_partial"],
            explanation=f'Organization matches "{intent.value}"',
        )
    return None


def _match_role(intent: Intent, record: CandidateRecord) -> Optional[MatchResult]:
    if not record.title:
        return None
    if intent.value.lower() in record.title.lower():
        return MatchResult(
            score=INTENT_SCORES["role"],
            explanation=f'Title "{record.title}" matches role "{intent.value}"',
        )
    return None


def _match_warmth(intent: Intent, record: CandidateRecord) -> Optional[MatchResult]:
    try:
        levels = {int(part) for part in intent.value.split(",")}
    except ValueError:
        logger.debug(f"Unparseable warmth intent value {intent.value!r}")
        return None

    if record.warmth in levels:
        return MatchResult(score=INTENT_SCORES["warmth"], explanation=f"Warmth: {WARMTH_LABELS[record.warmth]}")
    return None


def _match_time(intent: Intent, record: CandidateRecord, now: Optional[datetime]) -> Optional[MatchResult]:
    try:
        days = int(intent.value)
    except ValueError:
        logger.debug(f"Unparseable time intent value {intent.value!r}")
        return None

    if added_within(record, days, now):
        return MatchResult(
            score=INTENT_SCORES["time"],
            explanation=f"Added {format_time_ago(record.created_at, now)}",
        )
    return None


def _match_tag(intent: Intent, record: CandidateRecord) -> Optional[MatchResult]:
    if not record.tags:
        return None

    value_lower = intent.value.lower()
    for tag in record.tags:
        if value_lower in tag.lower():
            return MatchResult(score=INTENT_SCORES["tag"], explanation=f"Tagged: {tag}")
    return None


def match_intent(
    intent: Intent,
    record: CandidateRecord,
    now: Optional[datetime] = None
) -> Optional[MatchResult]:
    """
    Score one intent against one record

    Args:
        intent: Extracted intent
        record: Candidate record
        now: Reference time for time-window intents (defaults to current UTC)

    Returns:
        MatchResult, or None when the intent does not match
    """
    if intent.type == IntentType.COMPANY:
        return _match_company(intent, record)

    if intent.type == IntentType.SOURCE:
        return match_source(record.source, intent.value)

    if intent.type == IntentType.OWNER:
        # Records carry no owner field yet
        return None

    if intent.type == IntentType.ROLE:
        return _match_role(intent, record)

    if intent.type == IntentType.WARMTH:
        return _match_warmth(intent, record)

    if intent.type == IntentType.TIME:
        return _match_time(intent, record, now)

    if intent.type == IntentType.TAG:
        return _match_tag(intent, record)

    if intent.type == IntentType.NAME:
        result = score_free_text(intent.value, record)
        return result if result.score > 0 else None

    return None
