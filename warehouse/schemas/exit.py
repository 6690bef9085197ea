from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict

from warehouse.schemas.location import LocationEntryRead


class ExitCreate(BaseModel):
    exit_type: str
    volume_to_exit: int
    store: Optional[str] = None
    observation: Optional[str] = None


class ExitObservationUpdate(BaseModel):
    observation: str = ""


class ExitRead(BaseModel):
    id: int
    sku: str
    name: str
    quantity: int
    date: date
    exit_type: str
    store: Optional[str] = None
    observation: str = ""

    model_config = ConfigDict(from_attributes=True)


class ExitResponse(BaseModel):
    exit: ExitRead
    source: Optional[LocationEntryRead] = None
