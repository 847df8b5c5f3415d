"""Status domain schemas"""

from typing import Optional

from pydantic import BaseModel, Field


class AppStatus(BaseModel):
    """
    Stored appointment status.

    `is_billable` statuses count as realized revenue and as visits for the
    recurrence logic. `is_default` marks the quick-complete target and
    `is_initial` the status given to new appointments; at most one status
    should carry each flag but readers must tolerate zero or several.
    """

    id: str = ""
    name: str
    color: str = "bg-gray-100 text-gray-800"
    is_billable: bool = False
    is_default: bool = False
    is_initial: bool = False


class StatusCreate(BaseModel):
    name: str = Field(..., min_length=1)
    color: Optional[str] = None
    isBillable: bool = False
    isDefault: bool = False
    isInitial: bool = False


class StatusUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    color: Optional[str] = None
    isBillable: Optional[bool] = None
    isDefault: Optional[bool] = None
    isInitial: Optional[bool] = None
