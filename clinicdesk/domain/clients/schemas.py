"""Client domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_email, validate_percentage


class Client(BaseModel):
    """Stored client document"""

    id: str = ""
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    discount_percentage: float = Field(0.0, ge=0, le=100)
    # Treatment ids for which recurrence tracking is suppressed
    finished_treatments: list[str] = Field(default_factory=list)

    def has_finished(self, service_type_id: str) -> bool:
        return service_type_id in self.finished_treatments


class ClientCreate(BaseModel):
    """Schema for creating a new client"""

    name: str = Field(..., min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None
    discountPercentage: Optional[float] = 0.0
    finishedTreatments: Optional[list[str]] = None

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)

    @field_validator("discountPercentage")
    @classmethod
    def check_discount(cls, v):
        return validate_percentage(v)


class ClientUpdate(BaseModel):
    """Schema for updating an existing client"""

    name: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None
    discountPercentage: Optional[float] = None
    finishedTreatments: Optional[list[str]] = None

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)

    @field_validator("discountPercentage")
    @classmethod
    def check_discount(cls, v):
        if v is None:
            return v
        return validate_percentage(v)


class DeleteResponse(BaseModel):
    """Deletion result, warns about future appointments left pointing at the deleted entity"""

    message: str
    futureAppointments: int = 0
