"""
Intent Extraction Module
Parses a natural language people query into structured intents using an
ordered sequence of pattern tests. Each step claims the text it matched, so
later steps only see what earlier steps left behind.
"""
import re
from typing import List, Optional, Sequence, Tuple
from smart_search.models.search import Intent, IntentType, SmartSearchQuery
from smart_search.models.sources import Source
from smart_search.services.sources import get_all_sources
import logging

logger = logging.getLogger(__name__)


# Keyword tables (declaration order is match priority)
WARMTH_KEYWORDS = {
    "cold": [0],
    "warm": [1],
    "hot": [2],
    "champion": [3],
    "champions": [3],
    "engaged": [2, 3],
    "not cold": [1, 2, 3],
}

TIME_KEYWORDS = {
    "this week": 7,
    "this month": 30,
    "last week": 7,
    "last month": 30,
    "last quarter": 90,
    "this quarter": 90,
    "last year": 365,
    "this year": 365,
    "recent": 30,
    "recently": 30,
    "new": 14,
    "past week": 7,
    "past month": 30,
}

ROLE_KEYWORDS = [
    "ceo", "cfo", "coo", "cto", "cio", "cmo",
    "partner", "partners",
    "director", "directors",
    "managing director", "md",
    "vice president", "vp",
    "analyst", "analysts",
    "associate", "associates",
    "principal", "principals",
    "head of", "head",
    "manager", "managers",
    "founder", "founders", "co-founder",
    "president",
    "portfolio manager", "pm",
    "investor relations", "ir",
]

OWNER_NAMES = {
    "brendan": 1,
    "chris": 2,
    "gabe": 3,
    "gabriel": 3,
}

OWNER_PATTERNS = [
    r"sourced\s+by\s+{name}",
    r"{name}'s\s+(contacts|people|list)",
    r"assigned\s+to\s+{name}",
    r"owned\s+by\s+{name}",
]

SOURCE_CONTEXT_PATTERNS = [
    r"(?:from|via|through|sourced\s+from|source:?)\s*{name}",
    r"{name}\s+(?:contacts|people|source)",
]

COMPANY_CONTEXT_PATTERN = (
    r"(?:at|from|people\s+at|contacts\s+at|team\s+at|who\s+works?\s+at)\s+{name}"
)

FILLER_PATTERN = re.compile(
    r"\b(show|find|search|list|get|all|the|for|me|who|are|is|with|and|or|contacts|people|outreach)\b",
    re.IGNORECASE
)

# Placeholder rotation for search inputs
SMART_SEARCH_EXAMPLES = [
    "people at Blackstone",
    "warm contacts from referrals",
    "new this week",
    "directors at Goldman",
    "hot champions from LinkedIn",
    "sourced by Gabe this month",
    "analysts from conferences",
    "VP contacts at Apollo",
    "people at funds",
    "contacts related to SpaceX",
    "directors at companies in healthcare",
    "investors in live deals",
]

StepResult = Tuple[Optional[Intent], str]


def _consume(remaining: str, match: "re.Match") -> str:
    """Drop a matched span from the working text"""
    return (remaining[:match.start()] + remaining[match.end():]).strip()


def _word_pattern(text: str) -> "re.Pattern":
    return re.compile(rf"\b{re.escape(text)}\b", re.IGNORECASE)


# =============================================================================
# EXTRACTION STEPS
# =============================================================================

def extract_owner(remaining: str) -> StepResult:
    """'sourced by Gabe', "Brendan's contacts", 'assigned to Chris', ..."""
    for name, owner_id in OWNER_NAMES.items():
        for template in OWNER_PATTERNS:
            match = re.search(template.format(name=name), remaining, re.IGNORECASE)
            if match:
                intent = Intent(
                    type=IntentType.OWNER,
                    value=str(owner_id),
                    label=f"Owned by {name.capitalize()}",
                )
                return intent, _consume(remaining, match)
    return None, remaining


def extract_time(remaining: str, query_lower: str) -> StepResult:
    """
    Time windows are plain substring tests against the lowercased query,
    so 'new' also fires inside longer words.
    """
    for phrase, days in TIME_KEYWORDS.items():
        if phrase in query_lower:
            intent = Intent(type=IntentType.TIME, value=str(days), label=f"Added {phrase}")
            match = re.search(re.escape(phrase), remaining, re.IGNORECASE)
            if match:
                remaining = _consume(remaining, match)
            return intent, remaining
    return None, remaining


def extract_warmth(remaining: str) -> StepResult:
    for keyword, levels in WARMTH_KEYWORDS.items():
        match = _word_pattern(keyword).search(remaining)
        if match:
            intent = Intent(
                type=IntentType.WARMTH,
                value=",".join(str(level) for level in levels),
                label=f"Warmth: {keyword}",
            )
            return intent, _consume(remaining, match)
    return None, remaining


def extract_source(remaining: str, sources: Sequence[Source]) -> StepResult:
    """
    First source in registry order wins. Context phrases ('from LinkedIn',
    'Referral contacts') are tried before the bare name, and bare names of
    three characters or fewer are never matched on their own.
    """
    for source in sources:
        escaped = re.escape(source.name)
        intent = Intent(type=IntentType.SOURCE, value=source.name, label=f"Source: {source.name}")

        for template in SOURCE_CONTEXT_PATTERNS:
            match = re.search(template.format(name=escaped), remaining, re.IGNORECASE)
            if match:
                return intent, _consume(remaining, match)

        if len(source.name) > 3:
            match = _word_pattern(source.name).search(remaining)
            if match:
                return intent, _consume(remaining, match)

    return None, remaining


def extract_company(remaining: str, known_orgs: Sequence[str]) -> StepResult:
    """Longest org names first so 'Goldman Sachs' beats 'Goldman'"""
    for org in sorted(known_orgs, key=len, reverse=True):
        if len(org) < 2:
            continue

        escaped = re.escape(org)
        match = (
            re.search(COMPANY_CONTEXT_PATTERN.format(name=escaped), remaining, re.IGNORECASE)
            or _word_pattern(org).search(remaining)
        )
        if match:
            intent = Intent(type=IntentType.COMPANY, value=org, label=f"Company: {org}")
            return intent, _consume(remaining, match)

    return None, remaining


def extract_role(remaining: str) -> StepResult:
    for role in ROLE_KEYWORDS:
        match = _word_pattern(role).search(remaining)
        if match:
            intent = Intent(type=IntentType.ROLE, value=role, label=f"Role: {role}")
            return intent, _consume(remaining, match)
    return None, remaining


def strip_filler(remaining: str) -> str:
    """
    Remove filler words and collapse whitespace. A single character or
    bare punctuation counts as nothing.
    """
    cleaned = re.sub(r"\s+", " ", FILLER_PATTERN.sub("", remaining)).strip()
    if len(cleaned) <= 1 or not re.search(r"\w", cleaned):
        return ""
    return cleaned


# =============================================================================
# PARSER
# =============================================================================

def parse_smart_search(
    query: str,
    known_orgs: Sequence[str],
    sources: Optional[Sequence[Source]] = None
) -> SmartSearchQuery:
    """
    Parse a natural language query into structured intents

    Args:
        query: Raw query text
        known_orgs: Organization names to recognise as companies
        sources: Source catalog to recognise; defaults to the registry's
            default + custom sources

    Returns:
        SmartSearchQuery with intents in extraction order
        (owner, time, warmth, source, company, role, name)
    """
    if sources is None:
        sources = get_all_sources()

    remaining = query.strip()
    query_lower = remaining.lower()
    intents: List[Intent] = []

    steps = [
        lambda text: extract_owner(text),
        lambda text: extract_time(text, query_lower),
        lambda text: extract_warmth(text),
        lambda text: extract_source(text, sources),
        lambda text: extract_company(text, known_orgs),
        lambda text: extract_role(text),
    ]

    for step in steps:
        intent, remaining = step(remaining)
        if intent:
            intents.append(intent)

    free_text = strip_filler(remaining)
    if free_text:
        intents.append(Intent(
            type=IntentType.NAME,
            value=free_text,
            label=f'Name contains: "{free_text}"',
        ))

    logger.debug(f"Parsed {query!r} into {[i.label for i in intents]} (free text {free_text!r})")

    return SmartSearchQuery(raw=query, free_text=free_text, intents=intents)
