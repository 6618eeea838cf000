"""
Data models for the iNaturalist notifier.
"""
from datetime import datetime
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class TrackedTarget(BaseModel):
    """One taxon watched inside the run's place."""
    model_config = ConfigDict(frozen=True)

    taxon_id: int
    place_id: int


class Taxon(BaseModel):
    """The subset of taxon data requested from the API."""
    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    preferred_common_name: Optional[str] = None


class Observation(BaseModel):
    """A single observation as returned by /v2/observations."""
    model_config = ConfigDict(frozen=True)

    uuid: str
    id: int
    created_at: datetime
    created_time_zone: Optional[str] = None
    observed_on: Optional[str] = None
    observed_time_zone: Optional[str] = None
    geoprivacy: Optional[Any] = None
    location: Optional[str] = None
    mappable: bool = False
    obscured: bool = False
    place_guess: Optional[str] = None
    quality_grade: Optional[str] = None
    taxon: Taxon = Field(default_factory=Taxon)

    @field_validator("mappable", "obscured", mode="before")
    @classmethod
    def null_flag_is_false(cls, v):
        """The API sends null for flags it has no value for."""
        return False if v is None else v

    @field_validator("taxon", mode="before")
    @classmethod
    def null_taxon_is_empty(cls, v):
        return Taxon() if v is None else v

    @property
    def display_name(self) -> str:
        if self.taxon.preferred_common_name:
            return self.taxon.preferred_common_name
        if self.taxon.id is not None:
            return f"Taxon {self.taxon.id}"
        return "Unknown taxon"

    def obscured_as_string(self) -> str:
        return "yes" if self.obscured else "no"

    def notification_title(self) -> str:
        return f"{self.display_name} Observation"

    def notification_body(self) -> str:
        """
        Plain-text message body for ntfy.

        The creation time keeps the offset the API reported it in.
        """
        return (
            f"Observed On: {self.observed_on or ''}\n"
            f"Created At: {self.created_at.strftime('%Y-%m-%d %H:%M:%S')}\n"
            f"Location: {self.place_guess or ''}\n"
            f"Obscured: {self.obscured_as_string()}\n"
            f"Quality: {self.quality_grade or ''}"
        )


class ObservationsResponse(BaseModel):
    """Envelope of a /v2/observations page."""
    total_results: int = 0
    page: int = 1
    per_page: int = 0
    results: List[Observation] = Field(default_factory=list)
