"""Hospital profile API schemas."""

from pydantic import BaseModel, EmailStr, Field, HttpUrl


class HospitalProfileUpdate(BaseModel):
    """Partial hospital update. service_ids, when present, replaces the offered services."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    official_email: EmailStr | None = None
    official_phone: str | None = Field(default=None, min_length=5, max_length=32)
    emergency_contact: str | None = Field(default=None, max_length=32)
    website_url: HttpUrl | None = None
    location_id: str | None = None
    has_ayushman_bharat: bool | None = None
    trauma_level: int | None = Field(default=None, ge=1, le=5)
    service_ids: list[str] | None = None

    def hospital_fields(self) -> dict[str, object]:
        """Columns explicitly sent by the client (service_ids excluded)."""
        return self.model_dump(exclude_unset=True, exclude={"service_ids"}, mode="json")


class HospitalProfileResponse(BaseModel):
    hospital_id: str
    message: str = "Profile updated successfully"
