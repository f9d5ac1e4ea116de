"""Pydantic request/response schemas for the bed management API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands. Clients send camelCase keys; snake_case is
accepted too.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class PatientSnapshot(CamelModel):
    name: str | None = None
    diagnosis: str | None = None
    admit_date: datetime | None = None
    doctor: str | None = None
    patient_id: str | None = None


# ---------------------------------------------------------------------------
# Ward Request Schemas
# ---------------------------------------------------------------------------
class CreateWardRequest(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    prefix: str = Field(min_length=1, max_length=5)
    ward_type: str | None = Field(default=None, alias="type")
    rate_per_day: float | None = Field(default=None, ge=0)
    num_beds: int = Field(default=0, ge=0)
    description: str | None = None
    floor: str | None = None


class UpdateWardRequest(CamelModel):
    name: str | None = Field(default=None, max_length=255)
    prefix: str | None = Field(default=None, max_length=5)
    ward_type: str | None = Field(default=None, alias="type")
    rate_per_day: float | None = Field(default=None, ge=0)
    add_beds: int | None = Field(default=None, ge=0)
    description: str | None = None
    floor: str | None = None


# ---------------------------------------------------------------------------
# Bed Request Schemas
# ---------------------------------------------------------------------------
class AddBedsRequest(CamelModel):
    num_beds: int = Field(default=1, ge=0)  # 0 falls back to a single bed
    status: str | None = None


class UpdateBedRequest(CamelModel):
    """Raw override. An explicit ``"patient": null`` clears the occupant."""

    status: str | None = None
    patient: PatientSnapshot | None = None


class AssignPatientRequest(CamelModel):
    patient_name: str = Field(min_length=1, max_length=255)
    diagnosis: str | None = None
    doctor: str | None = None
    patient_id: str | None = None


class TransferRequest(CamelModel):
    from_bed_id: str = Field(min_length=1)
    to_bed_id: str = Field(min_length=1)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class SuccessResponse(BaseModel):
    success: bool = True
    data: Any = None
