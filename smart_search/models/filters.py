"""
External classifier models
Structured filters returned by the natural-language classifier
"""
from pydantic import BaseModel, Field
from typing import Optional, List, Dict


class LLMFilters(BaseModel):
    """
    Filters resolved by the external classifier.
    Every populated field must match for a record to be included.
    """

    name: Optional[str] = None
    company: Optional[str] = None
    title: Optional[str] = None
    source: Optional[str] = None
    warmth: Optional[List[int]] = None
    location: Optional[str] = None
    added_within_days: Optional[int] = Field(default=None, alias="addedWithinDays")
    email: Optional[str] = None
    tags: Optional[List[str]] = None
    org_kind: Optional[List[str]] = Field(default=None, alias="orgKind")
    org_sector: Optional[str] = Field(default=None, alias="orgSector")
    deal_name: Optional[str] = Field(default=None, alias="dealName")
    deal_sector: Optional[str] = Field(default=None, alias="dealSector")
    deal_status: Optional[List[str]] = Field(default=None, alias="dealStatus")

    class Config:
        populate_by_name = True

    @property
    def has_deal_context(self) -> bool:
        # An empty status list still counts, it just matches no deals
        return bool(self.deal_name or self.deal_sector) or self.deal_status is not None


class OrgSectorEntry(BaseModel):
    """Sector lookup for one organization"""

    sector: Optional[str] = None
    sub_sector: Optional[str] = Field(default=None, alias="subSector")

    class Config:
        populate_by_name = True


class ClassifierIntent(BaseModel):
    """Intent chip as returned by the classifier"""

    type: str
    label: str


class ClassifierResponse(BaseModel):
    """Full classifier payload plus the auxiliary data resolved alongside it"""

    filters: LLMFilters
    explanation: str = ""
    intents: List[ClassifierIntent] = Field(default_factory=list)
    matched_person_ids: Optional[List[int]] = Field(default=None, alias="matchedPersonIds")
    org_sector_map: Optional[Dict[int, OrgSectorEntry]] = Field(default=None, alias="orgSectorMap")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "filters": {"company": "Blackstone", "title": "director"},
                "explanation": "People with Director in their title at Blackstone",
                "intents": [
                    {"type": "role", "label": "Role: Director"},
                    {"type": "company", "label": "Company: Blackstone"}
                ],
                "matchedPersonIds": None,
                "orgSectorMap": {}
            }
        }


class FilterContext(BaseModel):
    """
    Auxiliary data resolved upstream of the filter applier.

    matched_ids holds record ids connected to deals matching the deal
    filters; org_sector_map maps org ids to their sectors.
    """

    matched_ids: Optional[List[int]] = Field(default=None, alias="matchedIds")
    org_sector_map: Optional[Dict[int, OrgSectorEntry]] = Field(default=None, alias="orgSectorMap")
    intents: List[ClassifierIntent] = Field(default_factory=list)

    class Config:
        populate_by_name = True
