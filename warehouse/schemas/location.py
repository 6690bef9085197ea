from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LocationEntryCreate(BaseModel):
    sku: str
    location: str
    volume: int = Field(ge=1)


class LocationEntryUpdate(BaseModel):
    location: Optional[str] = None
    volume: Optional[int] = Field(None, ge=0)


class LocationEntryRead(BaseModel):
    id: int
    sku: str
    name: str
    location: str
    volume: int
    units_per_box: int
    quantity: int
    date: date

    model_config = ConfigDict(from_attributes=True)


class MoveRequest(BaseModel):
    source_location_id: int
    destination_location_name: str
    volume_to_move: int


class MoveResponse(BaseModel):
    source: Optional[LocationEntryRead] = None
    destination: LocationEntryRead
    volume: int


class MasterLocationCreate(BaseModel):
    name: str


class MasterLocationRead(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class AvailabilityRead(BaseModel):
    location: str
    status: str
