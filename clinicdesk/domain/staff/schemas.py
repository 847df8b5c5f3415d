"""Staff domain schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class Staff(BaseModel):
    """Stored team member"""

    id: str = ""
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    specialties: list[str] = Field(default_factory=list)  # treatment ids
    default_rate: float = Field(0.0, ge=0)  # hourly
    rates: dict[str, float] = Field(default_factory=dict)  # treatment id -> hourly rate
    color: str = "bg-gray-100 text-gray-800"
    created_at: Optional[datetime] = None

    def hourly_rate_for(self, service_type_id: str) -> float:
        """Per-treatment override when present, otherwise the default rate"""
        rate = self.rates.get(service_type_id)
        return self.default_rate if rate is None else rate


class StaffCreate(BaseModel):
    """Schema for creating a new team member"""

    name: str = Field(..., min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    specialties: list[str] = Field(default_factory=list)
    defaultRate: float = Field(0.0, ge=0)
    rates: dict[str, float] = Field(default_factory=dict)
    color: Optional[str] = None


class StaffUpdate(BaseModel):
    """Schema for updating a team member"""

    name: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    specialties: Optional[list[str]] = None
    defaultRate: Optional[float] = Field(None, ge=0)
    rates: Optional[dict[str, float]] = None
    color: Optional[str] = None
