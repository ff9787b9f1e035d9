"""
Pydantic models for travel data.

Travels are free-form: apart from the identifier the API does not
interpret their fields, so the models accept and return any extra
keys.  ``TravelCreate`` is used for both create and replace requests;
an ``id`` sent by the client is ignored by the storage layer.
``TravelRead`` adds the ``id`` assigned on creation.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from travel_list_api.app.core.db import is_id_field


class TravelBase(BaseModel):
    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={"example": {"name": "Andes trip", "destination": "Lima", "dates": "2025-09-01/2025-09-14"}},
    )


class TravelCreate(TravelBase):
    """Schema for creating or replacing a travel."""
    pass


class TravelRead(TravelBase):
    """Schema for reading a travel from the API."""

    id: str


class TravelFieldUpdate(BaseModel):
    """Schema for setting a single field of a travel."""

    field: str = Field(..., examples=["destination"])
    value: Any = Field(..., examples=["Cusco"])

    @field_validator("field")
    @classmethod
    def field_must_be_writable(cls, v: str) -> str:
        if not v or v.startswith("$"):
            raise ValueError("field must be a non-empty name not starting with '$'")
        if is_id_field(v):
            raise ValueError("the id of a travel cannot be changed")
        return v


class TravelFieldRead(BaseModel):
    id: str
    field: str
    value: Any = None


class HealthRead(BaseModel):
    status: str
