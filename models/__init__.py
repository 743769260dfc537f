# -------------------------
# Enums
# -------------------------
from .enums import (
    UserRole,
    EventType,
    AttendanceStatus,
    EVENT_TYPE_LABELS,
    ATTENDANCE_LABELS,
)

# -------------------------
# Profile Models
# -------------------------
from .user import (
    User,
    UserUpdate,
    ProfileUpdate,
)

# -------------------------
# Attendance Models
# -------------------------
from .attendance import (
    Attendance,
    AttendanceUpdate,
)

# -------------------------
# Event Models
# -------------------------
from .event import (
    EventCreate,
    FutsalEvent,
    EventCard,
    EventDetail,
    MemberAttendance,
    TeamStats,
)

# -------------------------
# Session Models
# -------------------------
from .session import (
    SessionState,
    Screen,
    SessionContext,
    SessionView,
    resolve_screen,
)
