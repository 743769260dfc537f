from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]


# -----------------------------------------------------
# USER ROLE
# -----------------------------------------------------
class UserRole(BaseStrEnum):
    """Team role. Admins approve, edit and remove members."""

    ADMIN = "ADMIN"
    MEMBER = "MEMBER"


# -----------------------------------------------------
# EVENT TYPE
# -----------------------------------------------------
class EventType(BaseStrEnum):
    """Kind of team event."""

    MATCH = "MATCH"
    PRACTICE = "PRACTICE"
    SOCIAL = "SOCIAL"
    OTHER = "OTHER"


# -----------------------------------------------------
# ATTENDANCE STATUS
# -----------------------------------------------------
class AttendanceStatus(BaseStrEnum):
    """A member's answer for one event. UNSET means no answer yet."""

    GOING = "GOING"
    MAYBE = "MAYBE"
    ABSENT = "ABSENT"
    UNSET = "UNSET"


# -----------------------------------------------------
# Display labels (UI)
# -----------------------------------------------------
EVENT_TYPE_LABELS = {
    EventType.MATCH: "試合",
    EventType.PRACTICE: "練習",
    EventType.SOCIAL: "交流会",
    EventType.OTHER: "その他",
}

ATTENDANCE_LABELS = {
    AttendanceStatus.GOING: "出席",
    AttendanceStatus.MAYBE: "未定",
    AttendanceStatus.ABSENT: "欠席",
    AttendanceStatus.UNSET: "回答なし",
}
