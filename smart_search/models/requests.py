"""
Request models for the smart search API
"""
from pydantic import BaseModel, Field
from typing import Optional, Dict, Any, List

from .records import CandidateRecord
from .sources import Source


class SmartSearchRequest(BaseModel):
    """Request model for deterministic smart search"""

    query: str = Field(..., description="Raw search text")
    records: List[CandidateRecord] = Field(default_factory=list)
    known_orgs: Optional[List[str]] = Field(
        default=None,
        alias="knownOrgs",
        description="Organization names to recognise; derived from records when omitted"
    )

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "query": "warm contacts from referrals",
                "records": [
                    {
                        "id": 1,
                        "firstName": "Ada",
                        "lastName": "Lovelace",
                        "warmth": 1,
                        "source": "Referral",
                        "createdAt": "2024-01-01T00:00:00Z"
                    }
                ]
            }
        }


class FilterSearchRequest(BaseModel):
    """Request model for applying a classifier response to records"""

    classifier: Dict[str, Any] = Field(..., description="Raw classifier payload")
    records: List[CandidateRecord] = Field(default_factory=list)


class AddSourceRequest(Source):
    """Request model for registering a custom source"""
