"""
Analytics Schemas.
"""

from pydantic import BaseModel, Field


class AnalyticsResponse(BaseModel):
    """Global counters across all accounts."""

    users: int = Field(description="Registered accounts")
    notes: int = Field(description="Notes that are not archived")
    archived: int = Field(description="Archived notes")
    pinned: int = Field(description="Pinned notes, archived or not")
    tagged: int = Field(description="Notes with at least one tag")
