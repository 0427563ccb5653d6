import logging
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

UrgencyLevel = Literal["low", "medium", "high"]
ResourceStatus = Literal["Available", "Busy"]

URGENCY_LEVELS = ("low", "medium", "high")


class ResourceType(str, Enum):
    AMBULANCE = "Ambulance"
    SHELTER = "Shelter"
    FOOD = "Food"
    POLICE = "Police"
    FIRE = "Fire"
    GENERAL = "General"

    @classmethod
    def from_label(cls, label: Optional[str]) -> Optional["ResourceType"]:
        """Case-insensitive lookup ("ambulance" -> AMBULANCE), no trimming. None when the label names no type."""
        key = (label or "").lower()
        for member in cls:
            if member.value.lower() == key:
                return member
        return None


class Coordinates(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float


class Resource(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: ResourceType
    lat: float
    lng: float
    status: ResourceStatus


class ExtractionResult(BaseModel):
    """Structured fields pulled out of one free-text message."""
    model_config = ConfigDict(frozen=True)

    need: str  # Ambulance | Shelter | Food | Police | Fire | General, or free text (e.g. "Medical")
    quantity: Optional[str] = None
    location: str
    urgency_level: UrgencyLevel
    urgency_reason: str

    @field_validator("quantity", mode="before")
    @classmethod
    def _quantity_as_text(cls, v):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("urgency_level", mode="before")
    @classmethod
    def _normalize_urgency_level(cls, v):
        level = v.strip().lower() if isinstance(v, str) else v
        if level in URGENCY_LEVELS:
            return level
        logger.warning("Unrecognized urgency_level %r from extraction; defaulting to 'low'", v)
        return "low"


class AnalyzedMessage(ExtractionResult):
    id: str
    original_content: str
    urgency_score: int = Field(ge=0, le=100)
    coordinates: Optional[Coordinates] = None
    matched_resource_id: Optional[str] = None
    matched_resource: Optional[Resource] = None  # full snapshot at match time


class BulkAnalyzeRequest(BaseModel):
    messages: List[str]


class TextAnalyzeRequest(BaseModel):
    text: str  # one message per line, as pasted into the dashboard


class BulkAnalyzeResponse(BaseModel):
    results: List[AnalyzedMessage]
