import datetime as dt
import re
from typing import Optional, List
from pydantic import Field, field_validator

from .enums import AttendanceStatus, EventType
from .attendance import Attendance
from .user import CamelModel, User


_TIME_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)(:[0-5]\d(\.\d+)?)?$")


def normalize_time(v):
    """'19:00' or Postgres '19:00:00' → '19:00'."""
    if isinstance(v, dt.time):
        return v.strftime("%H:%M")
    if not isinstance(v, str) or not _TIME_RE.match(v.strip()):
        raise ValueError("Time must be HH:MM")
    return v.strip()[:5]


# -------------------------------------------------
# Shared Fields (Supabase-safe)
# -------------------------------------------------
class EventBase(CamelModel):
    title: str
    type: EventType = EventType.PRACTICE
    date: dt.date
    start_time: str
    end_time: str
    location: str
    description: str = ""

    @field_validator("start_time", "end_time", mode="before")
    def parse_time(cls, v):
        return normalize_time(v)

    @field_validator("description", mode="before")
    def null_description(cls, v):
        return v or ""


# -------------------------------------------------
# Create Event (creation form)
# -------------------------------------------------
class EventCreate(EventBase):
    """
    Client sends this when creating an event.
    Supabase generates the id; attendees start empty.
    """

    @field_validator("title", "location")
    def required_text(cls, v):
        if not v or not v.strip():
            raise ValueError("Title and location are required")
        return v.strip()

    def to_row(self) -> dict:
        return self.model_dump(by_alias=False, mode="json")


# -------------------------------------------------
# Read Event (with attendees)
# -------------------------------------------------
class FutsalEvent(EventBase):
    id: str
    attendees: List[Attendance] = Field(default_factory=list)

    @field_validator("id", mode="before")
    def id_to_str(cls, v):
        return str(v)

    @classmethod
    def from_row(cls, row: dict, attendees: Optional[List[Attendance]] = None) -> "FutsalEvent":
        data = {k: v for k, v in row.items() if k in cls.model_fields and k != "attendees"}
        return cls(**data, attendees=attendees or [])

    def count(self, status: AttendanceStatus) -> int:
        return sum(1 for a in self.attendees if a.status == status)

    def attendance_of(self, user_id: str) -> Optional[Attendance]:
        return next((a for a in self.attendees if a.user_id == user_id), None)

    def going_names(self) -> List[str]:
        return [a.user_name for a in self.attendees if a.status == AttendanceStatus.GOING]


# -------------------------------------------------
# View shapes
# -------------------------------------------------
class EventCard(CamelModel):
    """List/calendar summary of one event."""
    id: str
    title: str
    type: EventType
    date: dt.date
    start_time: str
    end_time: str
    location: str
    going: int = 0
    maybe: int = 0
    absent: int = 0


class MemberAttendance(CamelModel):
    user: User
    attendance: Optional[Attendance] = None


class EventDetail(CamelModel):
    event: FutsalEvent
    my_status: AttendanceStatus = AttendanceStatus.UNSET
    my_comment: str = ""
    members: List[MemberAttendance] = Field(default_factory=list)


class TeamStats(CamelModel):
    total_events: int = 0
    active_members: int = 0
    average_attendance: float = 0.0
