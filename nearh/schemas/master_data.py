"""Master-data API schemas (locations, services, specialties)."""

from pydantic import BaseModel, ConfigDict, Field


class LocationCreate(BaseModel):
    city: str = Field(..., min_length=1, max_length=120)
    state: str = Field(..., min_length=1, max_length=120)


class LocationUpdate(BaseModel):
    city: str | None = Field(default=None, min_length=1, max_length=120)
    state: str | None = Field(default=None, min_length=1, max_length=120)


class LocationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    city: str
    state: str


class ServiceCreate(BaseModel):
    service_name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None


class ServiceUpdate(BaseModel):
    service_name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None


class ServiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    service_name: str
    description: str | None = None


class SpecialtyCreate(BaseModel):
    specialty_name: str = Field(..., min_length=1, max_length=255)


class SpecialtyUpdate(BaseModel):
    specialty_name: str | None = Field(default=None, min_length=1, max_length=255)


class SpecialtyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    specialty_name: str
