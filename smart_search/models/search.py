"""
Search models
Intents extracted from a query and the ranked results they produce
"""
from pydantic import BaseModel, Field
from typing import List
from enum import Enum


class IntentType(str, Enum):
    """
    Kinds of structured meaning a query can carry.

    The deterministic parser only produces OWNER, TIME, WARMTH, SOURCE,
    COMPANY, ROLE and NAME. The remaining types arrive from the external
    classifier.
    """
    OWNER = "owner"
    ROLE = "role"
    WARMTH = "warmth"
    TIME = "time"
    SOURCE = "source"
    COMPANY = "company"
    TAG = "tag"
    NAME = "name"
    LOCATION = "location"
    EMAIL = "email"
    ORG_KIND = "orgKind"
    ORG_SECTOR = "orgSector"
    DEAL_NAME = "dealName"
    DEAL_SECTOR = "dealSector"
    DEAL_STATUS = "dealStatus"


class Intent(BaseModel):
    """
    A single typed piece of structured meaning.

    ``value`` is type specific: comma-joined warmth levels for WARMTH,
    a day count for TIME, the matched phrase otherwise.
    """

    type: IntentType
    value: str
    label: str = Field(..., description="Human-readable chip text")

    class Config:
        frozen = True


class SmartSearchQuery(BaseModel):
    """Parser output"""

    raw: str
    free_text: str = Field(default="", alias="freeText")
    intents: List[Intent] = Field(default_factory=list)

    class Config:
        populate_by_name = True


class MatchResult(BaseModel):
    """Score and explanation for one matched intent"""

    score: int
    explanation: str


class SearchResult(BaseModel):
    """One ranked record with the reasons it matched"""

    record_id: int = Field(..., alias="recordId")
    score: int
    explanations: List[str] = Field(default_factory=list)
    matched_intents: List[Intent] = Field(default_factory=list, alias="matchedIntents")

    class Config:
        populate_by_name = True
