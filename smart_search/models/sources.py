"""
Source models
Acquisition channels a contact can come in through
"""
from pydantic import BaseModel, Field
from typing import Optional
from enum import Enum


class SourceCategory(str, Enum):
    """Fixed grouping for acquisition channels"""
    RELATIONSHIP = "relationship"
    EVENT = "event"
    DIGITAL = "digital"
    OUTBOUND = "outbound"
    INBOUND = "inbound"
    OTHER = "other"


class Source(BaseModel):
    """A named acquisition channel"""

    name: str = Field(..., min_length=1, description="Display name, unique case-insensitively")
    category: SourceCategory = Field(..., description="Channel category")
    description: Optional[str] = None

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "name": "Referral",
                "category": "relationship",
                "description": "Introduced by existing contact"
            }
        }


class CategoryConfig(BaseModel):
    """Display metadata for a source category"""

    value: SourceCategory
    label: str
    color: str
    badge_style: str

    class Config:
        frozen = True
