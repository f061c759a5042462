"""
Response models for the smart search API
"""
from pydantic import BaseModel, Field
from typing import Optional, List

from .search import SmartSearchQuery, SearchResult
from .sources import Source


class SmartSearchResponse(BaseModel):
    """Response from the deterministic search endpoint"""

    query_id: str = Field(..., alias="queryId")
    parsed: SmartSearchQuery
    results: List[SearchResult] = Field(default_factory=list)
    latency_ms: Optional[int] = Field(None, alias="latencyMs")

    class Config:
        populate_by_name = True


class FilterSearchResponse(BaseModel):
    """Response from the classifier-filter endpoint"""

    query_id: str = Field(..., alias="queryId")
    explanation: str = ""
    results: List[SearchResult] = Field(default_factory=list)
    latency_ms: Optional[int] = Field(None, alias="latencyMs")

    class Config:
        populate_by_name = True


class SourceListResponse(BaseModel):
    """Registered sources, defaults first"""

    added: Optional[bool] = None
    sources: List[Source] = Field(default_factory=list)
