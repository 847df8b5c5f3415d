"""Treatment domain schemas"""

from typing import Optional

from pydantic import BaseModel, Field


class ServiceType(BaseModel):
    """
    Stored treatment (service type).

    Price and duration are defaults copied into appointments when they are
    booked; changing them never touches existing appointments.
    """

    id: str = ""
    name: str
    default_price: float = Field(0.0, ge=0)
    default_duration: int = Field(60, gt=0)  # minutes
    recurrence_days: int = Field(0, ge=0)  # 0 = non-recurring
    color: str = "bg-gray-100 text-gray-800"
    # Overrides the default "upcoming" window of the retention view
    upcoming_threshold_days: Optional[int] = Field(None, ge=0)

    @property
    def is_recurring(self) -> bool:
        return self.recurrence_days > 0


class TreatmentCreate(BaseModel):
    """Schema for creating a new treatment"""

    name: str = Field(..., min_length=1)
    defaultPrice: float = Field(0.0, ge=0)
    defaultDuration: int = Field(60, gt=0)
    recurrenceDays: int = Field(0, ge=0)
    color: Optional[str] = None
    upcomingThresholdDays: Optional[int] = Field(None, ge=0)


class TreatmentUpdate(BaseModel):
    """Schema for updating an existing treatment"""

    name: Optional[str] = Field(None, min_length=1)
    defaultPrice: Optional[float] = Field(None, ge=0)
    defaultDuration: Optional[int] = Field(None, gt=0)
    recurrenceDays: Optional[int] = Field(None, ge=0)
    color: Optional[str] = None
    upcomingThresholdDays: Optional[int] = Field(None, ge=0)
