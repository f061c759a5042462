"""
Classifier Prompt
Instruction text for the external natural-language classifier that turns a
people query into LLMFilters
"""
import json
from typing import List, Sequence
from smart_search.config import settings

DEFAULT_SOURCE_HINT = (
    "LinkedIn, Conference, Referral, Cold Outreach, Email Campaign, Website, Warm Intro, "
    "Dinner/Event, Roadshow, Inbound, RFP, Co-Investor, Cold Call, Research, Existing Relationship"
)
DEFAULT_ORG_KINDS = "fund, company, bank, broker, service_provider, other"
DEFAULT_DEAL_STATUSES = "live, sourcing, closing, closed, dead"
NONE_PROVIDED = "(none provided)"

OUTPUT_FORMAT = """{
  "filters": {
    "name": string | null,            // substring to match against first/last name
    "company": string | null,          // substring to match against organization
    "title": string | null,            // substring to match against job title
    "source": string | null,           // exact source name (match to known sources)
    "warmth": number[] | null,         // warmth levels to include, e.g. [2, 3]
    "location": string | null,         // substring to match city/state/country
    "addedWithinDays": number | null,  // contacts added within N days
    "email": string | null,            // substring to match email
    "tags": string[] | null,           // tags to match
    "orgKind": string[] | null,        // organization types, e.g. ["fund", "company"]
    "orgSector": string | null,        // organization sector to match
    "dealName": string | null,         // deal name to match (finds people connected to this deal)
    "dealSector": string | null,       // deal sector to match (finds people connected to deals in this sector)
    "dealStatus": string[] | null      // deal statuses to match, e.g. ["live", "closing"]
  },
  "explanation": string,               // 1-sentence summary of what the query means
  "intents": [                         // parsed intent chips for UI display
    { "type": string, "label": string }
  ]
}"""

RULES = [
    "Only set filter fields that are relevant to the query. Set irrelevant fields to null.",
    'For warmth: Cold=0, Warm=1, Hot=2, Champion=3. "engaged" means [2,3]. "not cold" means [1,2,3].',
    'For source: match the user\'s input to the closest known source name. "LI" or "linkedin" -> "LinkedIn". '
    '"conference" -> "Conference".',
    'For time: "this week" = 7 days, "this month" = 30, "recently"/"new" = 14-30, "last quarter" = 90.',
    'For title: extract role keywords like "director", "VP", "analyst", "partner", "CEO", etc.',
    "For company: try to match to known organizations. If not found, use the company name as-is.",
    'For orgKind: when the user mentions "funds", "investors" (as an org type), "companies", "banks", '
    '"brokers", set the appropriate values. Use lowercase. "people at funds" -> orgKind: ["fund"].',
    "For orgSector: when the user mentions an industry/sector for the organization, set this. "
    '"companies in healthcare" -> orgSector: "healthcare".',
    "For dealName: when the user asks about people related to a specific deal, set this to the deal name. "
    'Match to known deal names when possible. "contacts related to SpaceX" -> dealName: "SpaceX".',
    "For dealSector: when the user asks about people connected to deals in a certain sector, set this. "
    '"investors in tech deals" -> dealSector: "technology".',
    "For dealStatus: when the user references deal status, set this. "
    '"investors in live deals" -> dealStatus: ["live"].',
    'The "intents" array should have one entry per active filter, with a human-readable label.',
    'Intent type should be one of: "company", "source", "role", "warmth", "time", "location", "name", '
    '"tag", "email", "orgKind", "orgSector", "dealName", "dealSector", "dealStatus".',
]

# Worked query -> JSON pairs; filters left out of an example are null
EXAMPLES = [
    (
        "directors at Blackstone",
        {"company": "Blackstone", "title": "director"},
        "People with Director in their title at Blackstone",
        [("role", "Role: Director"), ("company", "Company: Blackstone")],
    ),
    (
        "warm contacts from LinkedIn added recently",
        {"source": "LinkedIn", "warmth": [1], "addedWithinDays": 30},
        "Warm contacts sourced from LinkedIn that were added in the last 30 days",
        [("warmth", "Warmth: Warm"), ("source", "Source: LinkedIn"), ("time", "Added recently")],
    ),
    (
        "people at funds",
        {"orgKind": ["fund"]},
        "People who work at fund-type organizations",
        [("orgKind", "Org Type: Fund")],
    ),
    (
        "contacts related to SpaceX",
        {"dealName": "SpaceX"},
        "All people connected to the SpaceX deal as investors, sellers, or outreach targets",
        [("dealName", "Deal: SpaceX")],
    ),
    (
        "directors at companies in healthcare",
        {"title": "director", "orgKind": ["company"], "orgSector": "healthcare"},
        "Directors at company-type organizations in the healthcare sector",
        [("role", "Role: Director"), ("orgKind", "Org Type: Company"), ("orgSector", "Org Sector: Healthcare")],
    ),
    (
        "investors in live deals",
        {"dealStatus": ["live"]},
        "People who are investors in currently live deals",
        [("dealStatus", "Deal Status: Live")],
    ),
    (
        "VPs in New York",
        {"title": "VP", "location": "New York"},
        "Vice Presidents located in New York",
        [("role", "Role: VP"), ("location", "Location: New York")],
    ),
    (
        "john smith",
        {"name": "john smith"},
        "Searching for a person named John Smith",
        [("name", "Name: john smith")],
    ),
]

FILTER_FIELDS = [
    "name", "company", "title", "source", "warmth", "location", "addedWithinDays",
    "email", "tags", "orgKind", "orgSector", "dealName", "dealSector", "dealStatus",
]


def _render_example(query: str, filters: dict, explanation: str, intents: list) -> str:
    payload = {
        "filters": {field: filters.get(field) for field in FILTER_FIELDS},
        "explanation": explanation,
        "intents": [{"type": t, "label": label} for t, label in intents],
    }
    return f'Query: "{query}"\n' + json.dumps(payload, indent=2)


EXAMPLES_SECTION = "## Examples\n\n" + "\n\n".join(_render_example(*example) for example in EXAMPLES)


def _listing(values: Sequence[str], default: str, limit: int = 0) -> str:
    if not values:
        return default
    if limit:
        values = values[:limit]
    return ", ".join(values)


def build_system_prompt(
    known_orgs: Sequence[str],
    known_sources: Sequence[str],
    deal_names: Sequence[str],
    deal_sectors: Sequence[str],
    deal_statuses: Sequence[str],
    org_kinds: Sequence[str],
    org_sectors: Sequence[str]
) -> str:
    """
    Render the classifier's system prompt

    Args:
        known_orgs: Organization names (capped at settings.max_known_orgs)
        known_sources: Source names; the default catalog is described when empty
        deal_names: Deal names (capped at 50)
        deal_sectors: Deal sectors
        deal_statuses: Deal statuses
        org_kinds: Organization kinds
        org_sectors: Organization sectors (capped at 50)

    Returns:
        Prompt text ending with the instruction to parse the user query
    """
    sections: List[str] = [
        "You are a search query parser for a CRM (Customer Relationship Management) application "
        "focused on deal-making, investments, and relationship management. Your job is to interpret "
        "natural language search queries about people/contacts and return structured JSON filters.",

        "## Person Schema\n"
        "Each person has these fields:\n"
        "- firstName, lastName: person's name\n"
        '- title: job title (e.g., "Managing Director", "VP of Sales", "Analyst")\n'
        "- org: organization/company name\n"
        '- orgKind: type of organization (e.g., "fund", "company", "bank", "broker", "service_provider")\n'
        "- email: email address\n"
        "- warmth: relationship warmth level (0=Cold, 1=Warm, 2=Hot, 3=Champion)\n"
        "- source: how the contact was acquired\n"
        "- tags: array of tag strings\n"
        "- city, state, country: location fields\n"
        "- createdAt: when the contact was added\n"
        "- lastContactedAt: when they were last contacted",

        "## Business Context\n"
        "This CRM tracks deals (investments/transactions), organizations (funds, companies, banks, "
        "brokers), and people (contacts).\n"
        "- People can be connected to deals as investors (interests), sellers (blocks), or outreach targets.\n"
        "- Organizations have a kind (fund, company, bank, broker, service_provider) and may have a sector.\n"
        "- Deals have a name, sector, status, and kind.",

        "## Known Organizations\n" + _listing(known_orgs, NONE_PROVIDED, settings.max_known_orgs),
        "## Known Sources\n" + _listing(known_sources, DEFAULT_SOURCE_HINT),
        "## Known Organization Types\n" + _listing(org_kinds, DEFAULT_ORG_KINDS),
        "## Known Organization Sectors\n" + _listing(org_sectors, NONE_PROVIDED, 50),
        "## Known Deal Names\n" + _listing(deal_names, NONE_PROVIDED, 50),
        "## Known Deal Sectors\n" + _listing(deal_sectors, NONE_PROVIDED),
        "## Known Deal Statuses\n" + _listing(deal_statuses, DEFAULT_DEAL_STATUSES),

        "## Output Format\nReturn a JSON object with exactly these fields:\n" + OUTPUT_FORMAT,
        "## Rules\n" + "\n".join(f"- {rule}" for rule in RULES),
        EXAMPLES_SECTION,

        "Now parse the following user query and return the JSON:",
    ]
    return "\n\n".join(sections)
