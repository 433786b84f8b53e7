"""
Calendar event models exchanged between the proxy and its client.
Field names follow the JSON contract (camelCase), like the Google models.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class CalendarEvent(BaseModel):
    """Canonical, UTC-based event as returned by the proxy"""
    id: str = Field(description="Provider-assigned opaque identifier")
    title: str = Field(description="Event title, placeholder when the provider has none")
    description: str = Field(default="", description="Free-text description")
    attendees: List[str] = Field(
        default_factory=list,
        description="Attendee emails, in provider order, not deduplicated"
    )
    startUtc: Optional[str] = Field(
        default=None,
        description="Start instant, UTC ISO-8601 (e.g. '2024-06-01T17:30:00.000Z')"
    )
    endUtc: Optional[str] = Field(
        default=None,
        description="End instant, UTC ISO-8601"
    )


class EventPayload(BaseModel):
    """
    Body of create and update requests.

    Nothing beyond types is validated: the caller and the provider are
    trusted. Updates replace the whole event, so absent optional fields are
    sent to the provider as empty values.
    """
    model_config = ConfigDict(extra='ignore')

    title: Optional[str] = None
    description: Optional[str] = None
    attendees: Optional[List[str]] = None
    startUtc: Optional[str] = None
    endUtc: Optional[str] = None
