"""
Smart Search Executor
Runs a parsed query over a candidate set and ranks the matches
"""
from datetime import datetime
from typing import List, Optional, Sequence
from smart_search.models.records import CandidateRecord
from smart_search.models.search import Intent, SmartSearchQuery, SearchResult
from smart_search.services.intent_matching import match_intent, score_free_text
import logging

logger = logging.getLogger(__name__)


def score_record(
    parsed: SmartSearchQuery,
    record: CandidateRecord,
    now: Optional[datetime] = None
) -> Optional[SearchResult]:
    """
    Score one record against every intent plus the leftover free text

    Args:
        parsed: Parser output
        record: Candidate record
        now: Reference time for time-window intents

    Returns:
        SearchResult when the record scored above zero, otherwise None
    """
    score = 0
    explanations: List[str] = []
    matched_intents: List[Intent] = []

    for intent in parsed.intents:
        match = match_intent(intent, record, now)
        if match is not None:
            score += match.score
            explanations.append(match.explanation)
            matched_intents.append(intent)

    if parsed.free_text:
        free_text_match = score_free_text(parsed.free_text, record)
        if free_text_match.score > 0:
            score += free_text_match.score
            explanations.append(free_text_match.explanation)

    if score > 0 and (matched_intents or explanations):
        return SearchResult(
            record_id=record.id,
            score=score,
            explanations=explanations,
            matched_intents=matched_intents,
        )
    return None


def execute_smart_search(
    parsed: SmartSearchQuery,
    records: Sequence[CandidateRecord],
    now: Optional[datetime] = None
) -> List[SearchResult]:
    """
    Score and rank records against a parsed query

    Any matching intent counts (scores are additive). A query with no
    intents and no free text matches nothing.

    Args:
        parsed: Parser output
        records: Candidate records, in display order
        now: Reference time for time-window intents

    Returns:
        Matching results sorted by score descending; ties keep input order
    """
    if not parsed.intents and not parsed.free_text:
        logger.debug(f"Nothing to search for in {parsed.raw!r}")
        return []

    results = []
    for record in records:
        result = score_record(parsed, record, now)
        if result:
            results.append(result)

    # sorted() is stable, so equal scores keep record order
    ranked = sorted(results, key=lambda r: r.score, reverse=True)

    logger.info(f"Smart search {parsed.raw!r}: {len(ranked)} of {len(records)} records matched")

    return ranked
