"""
Record models
Read-only views of CRM entities the search engine scores against
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class CandidateRecord(BaseModel):
    """
    A contact ("Person") as seen by the search engine.
    Accepts camelCase wire names as well as snake_case attributes.
    """

    id: int
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    title: Optional[str] = None
    org: Optional[str] = None
    org_id: Optional[int] = Field(default=None, alias="orgId")
    org_kind: Optional[str] = Field(default=None, alias="orgKind")
    email: Optional[str] = None
    warmth: int = Field(default=0, ge=0, le=3, description="0=Cold, 1=Warm, 2=Hot, 3=Champion")
    source: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    created_at: datetime = Field(..., alias="createdAt")
    last_contacted_at: Optional[datetime] = Field(default=None, alias="lastContactedAt")

    class Config:
        populate_by_name = True
        frozen = True

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def location(self) -> str:
        """City, state and country joined with spaces, blanks skipped"""
        return " ".join(part for part in (self.city, self.state, self.country) if part)


class DealSummary(BaseModel):
    """Deal as listed by the CRM API"""

    id: int
    name: str = ""
    sector: Optional[str] = None
    status: str = ""
    kind: str = ""


class OrgSummary(BaseModel):
    """Organization as listed by the CRM API"""

    id: int
    name: str = ""
    kind: str = ""
    sector: Optional[str] = None
