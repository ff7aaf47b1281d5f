"""Pydantic request/response schemas for the Shipping API.

These are external contracts, kept separate from the internal Protean
commands. Timestamps without an offset are read as UTC.
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from shipping.handling.handling_event import ActivityType
from shipping.utils.timestamps import as_utc


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class LegSchema(BaseModel):
    voyage_number: str = Field(min_length=1, max_length=20)
    load_location: str = Field(min_length=5, max_length=5)
    unload_location: str = Field(min_length=5, max_length=5)
    load_time: datetime
    unload_time: datetime

    @field_validator("load_time", "unload_time")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class RouteCandidateSchema(BaseModel):
    legs: list[LegSchema]


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class BookCargoRequest(BaseModel):
    origin: str = Field(min_length=5, max_length=5)
    destination: str = Field(min_length=5, max_length=5)
    arrival_deadline: datetime

    @field_validator("arrival_deadline")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "origin": "SESTO",
                    "destination": "FIHEL",
                    "arrival_deadline": "2024-12-01T00:00:00Z",
                }
            ]
        }
    }


class AssignRouteRequest(BaseModel):
    legs: list[LegSchema]


class ChangeDestinationRequest(BaseModel):
    destination: str = Field(min_length=5, max_length=5)


class RegisterHandlingEventRequest(BaseModel):
    tracking_id: str
    activity_type: ActivityType
    location: str = Field(min_length=5, max_length=5)
    voyage_number: str | None = None
    completion_time: datetime

    @field_validator("completion_time")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class TrackingIdResponse(BaseModel):
    tracking_id: str


class HandlingEventIdResponse(BaseModel):
    handling_event_id: str


class LocationResponse(BaseModel):
    un_locode: str
    name: str


class StatusResponse(BaseModel):
    status: str = "ok"
