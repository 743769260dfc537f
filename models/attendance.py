from datetime import datetime
from typing import Optional
from pydantic import field_validator

from .enums import AttendanceStatus
from .user import CamelModel


UNKNOWN_MEMBER_NAME = "Unknown"


# -------------------------------------------------
# Attendance (public.attendance joined with profiles.name)
# -------------------------------------------------
class Attendance(CamelModel):
    """
    One member's answer for one event.
    Keyed by (event_id, user_id); the store keeps only the latest write.
    """
    user_id: str
    user_name: str = UNKNOWN_MEMBER_NAME
    status: AttendanceStatus = AttendanceStatus.UNSET
    comment: Optional[str] = None
    updated_at: Optional[datetime] = None

    @field_validator("updated_at", mode="before")
    def parse_updated_at(cls, v):
        if isinstance(v, str) and v.endswith("Z"):
            return v.replace("Z", "+00:00")
        return v

    @classmethod
    def from_row(cls, row: dict) -> "Attendance":
        profile = row.get("profiles") or {}
        return cls(
            user_id=str(row["user_id"]),
            user_name=profile.get("name") or UNKNOWN_MEMBER_NAME,
            status=row.get("status") or AttendanceStatus.UNSET,
            comment=row.get("comment"),
            updated_at=row.get("updated_at"),
        )


# -------------------------------------------------
# Attendance form (event modal)
# -------------------------------------------------
class AttendanceUpdate(CamelModel):
    status: AttendanceStatus
    comment: Optional[str] = ""

    @field_validator("status")
    def status_must_be_chosen(cls, v):
        if v == AttendanceStatus.UNSET:
            raise ValueError("Select GOING, MAYBE or ABSENT")
        return v
