"""Appointment domain schemas - Pydantic models for validation"""

import datetime as dt
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ...shared.validators import time_to_minutes, validate_percentage, validate_time


class Appointment(BaseModel):
    """
    Stored appointment.

    `base_price` and `discount_percentage` are snapshots taken when the
    appointment is saved and `price` is always derived from them on the same
    write path. The client/treatment/staff/status ids may point at entities
    that have since been deleted.
    """

    id: str = ""
    client_id: str
    service_type_id: str
    staff_id: Optional[str] = None
    status_id: str
    date: dt.date
    start_time: str = "09:00"
    duration_minutes: int = Field(60, gt=0)
    base_price: float = Field(0.0, ge=0)
    discount_percentage: float = Field(0.0, ge=0, le=100)
    price: float = 0.0
    booking_fee_paid: bool = False
    booking_fee_amount: float = Field(0.0, ge=0)
    notes: str = ""

    @field_validator("start_time")
    @classmethod
    def check_start_time(cls, v):
        return validate_time(v)

    @property
    def hours(self) -> float:
        return self.duration_minutes / 60

    @property
    def start_minutes(self) -> int:
        return time_to_minutes(self.start_time)

    @property
    def end_minutes(self) -> int:
        return self.start_minutes + self.duration_minutes


class AppointmentCreate(BaseModel):
    """
    Schema for booking an appointment.

    Client, treatment and date are required. Status, duration, base price and
    discount fall back to the initial status, the treatment defaults and the
    client's current discount.
    """

    clientId: str = Field(..., min_length=1)
    serviceTypeId: str = Field(..., min_length=1)
    date: dt.date
    staffId: Optional[str] = None
    statusId: Optional[str] = None
    startTime: str = "09:00"
    durationMinutes: Optional[int] = Field(None, gt=0)
    basePrice: Optional[float] = Field(None, ge=0)
    discountPercentage: Optional[float] = None
    bookingFeePaid: bool = False
    bookingFeeAmount: float = Field(0.0, ge=0)
    notes: Optional[str] = None

    @field_validator("startTime")
    @classmethod
    def check_start_time(cls, v):
        return validate_time(v)

    @field_validator("discountPercentage")
    @classmethod
    def check_discount(cls, v):
        if v is None:
            return v
        return validate_percentage(v)


class AppointmentUpdate(BaseModel):
    """Schema for editing an appointment; price is recomputed from base price and discount"""

    clientId: Optional[str] = Field(None, min_length=1)
    serviceTypeId: Optional[str] = Field(None, min_length=1)
    staffId: Optional[str] = None
    statusId: Optional[str] = Field(None, min_length=1)
    date: Optional[dt.date] = None
    startTime: Optional[str] = None
    durationMinutes: Optional[int] = Field(None, gt=0)
    basePrice: Optional[float] = Field(None, ge=0)
    discountPercentage: Optional[float] = None
    bookingFeePaid: Optional[bool] = None
    bookingFeeAmount: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None

    @field_validator("startTime")
    @classmethod
    def check_start_time(cls, v):
        if v is None:
            return v
        return validate_time(v)

    @field_validator("discountPercentage")
    @classmethod
    def check_discount(cls, v):
        if v is None:
            return v
        return validate_percentage(v)


class DropRequest(BaseModel):
    """Appointment dropped on a calendar slot; the caller chose move or copy"""

    date: dt.date
    hour: Optional[int] = Field(None, ge=0, le=23)
    startTime: Optional[str] = None
    mode: Literal["move", "copy"]

    @model_validator(mode="after")
    def check_slot(self):
        if self.startTime is None and self.hour is None:
            raise ValueError("Either hour or startTime is required")
        if self.startTime is not None:
            self.startTime = validate_time(self.startTime)
        return self

    @property
    def start_time(self) -> str:
        return self.startTime if self.startTime is not None else f"{self.hour:02d}:00"


class ResizeRequest(BaseModel):
    """Pointer delta of a finished resize gesture"""

    edge: Literal["top", "bottom"]
    deltaPixels: float = Field(..., allow_inf_nan=False)
    slotHeight: Optional[float] = Field(None, gt=0, allow_inf_nan=False)


class OverlapResponse(BaseModel):
    appointmentId: str
    conflicts: list[Appointment]
