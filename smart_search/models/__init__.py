"""
Data models for Smart Search
"""
from .requests import SmartSearchRequest, FilterSearchRequest, AddSourceRequest
from .responses import SmartSearchResponse, FilterSearchResponse, SourceListResponse
from .records import CandidateRecord, DealSummary, OrgSummary
from .search import (
    Intent,
    IntentType,
    SmartSearchQuery,
    MatchResult,
    SearchResult
)
from .sources import Source, SourceCategory, CategoryConfig
from .filters import (
    LLMFilters,
    OrgSectorEntry,
    ClassifierIntent,
    ClassifierResponse,
    FilterContext
)

__all__ = [
    # Request/Response
    "SmartSearchRequest",
    "FilterSearchRequest",
    "AddSourceRequest",
    "SmartSearchResponse",
    "FilterSearchResponse",
    "SourceListResponse",
    # Records
    "CandidateRecord",
    "DealSummary",
    "OrgSummary",
    # Search
    "Intent",
    "IntentType",
    "SmartSearchQuery",
    "MatchResult",
    "SearchResult",
    # Sources
    "Source",
    "SourceCategory",
    "CategoryConfig",
    # Classifier
    "LLMFilters",
    "OrgSectorEntry",
    "ClassifierIntent",
    "ClassifierResponse",
    "FilterContext",
]
