# services/db_service.py

from collections import defaultdict
from typing import Dict, List, Optional

from supabase import Client

from core.errors import GatewayError, extract_supabase_error
from core.logging_config import logger
from core.utils import sanitize, utc_now_iso
from models.attendance import Attendance
from models.enums import AttendanceStatus, UserRole
from models.event import EventCreate, FutsalEvent
from models.user import User, UserUpdate


"""
REMOTE DATA GATEWAY (SUPABASE)

Tables:
  profiles    id, name, email, role, position, avatar, is_approved, created_at
  events      id, title, type, date, start_time, end_time, location, description
  attendance  event_id, user_id, status, comment, updated_at
              UNIQUE (event_id, user_id)

Rules:
  - Every failed call raises GatewayError; an empty list means no rows
  - Attendance is upserted on (event_id, user_id): latest write wins
  - Deleting a profile deletes that user's attendance rows first
"""

ATTENDANCE_CONFLICT_TARGET = "event_id,user_id"
AVATAR_URL_TEMPLATE = "https://picsum.photos/seed/{seed}/100/100"


class SupabaseGateway:
    """Typed CRUD over the team tables."""

    def __init__(self, client: Optional[Client]):
        self.client = client

    # -----------------------------------------------------
    # Helper — run one PostgREST call, normalize failures
    # -----------------------------------------------------
    def _execute(self, operation: str, build):
        if self.client is None:
            raise GatewayError(operation, "Supabase client not configured")
        try:
            return build(self.client).execute()
        except GatewayError:
            raise
        except Exception as e:
            detail = extract_supabase_error(e)
            logger.error(f"{operation}: {detail}")
            raise GatewayError(operation, detail) from e

    # =====================================================
    # PROFILES
    # =====================================================
    def list_users(self) -> List[User]:
        result = self._execute(
            "list users",
            lambda c: c.table("profiles").select("*").order("created_at"),
        )
        return [User.from_row(row) for row in (result.data or [])]

    def get_profile(self, user_id: str) -> Optional[User]:
        result = self._execute(
            "get profile",
            lambda c: c.table("profiles").select("*").eq("id", user_id).limit(1),
        )
        rows = result.data if result else None
        if not rows:
            return None
        return User.from_row(rows[0])

    def create_profile(self, user_id: str, name: str, email: str) -> User:
        """New sign-ups start as unapproved MEMBERs."""
        row = {
            "id": user_id,
            "name": name,
            "email": email,
            "avatar": AVATAR_URL_TEMPLATE.format(seed=email),
            "role": UserRole.MEMBER.value,
            "is_approved": False,
        }
        result = self._execute(
            "create profile",
            lambda c: c.table("profiles").insert(sanitize(row), returning="representation"),
        )
        return User.from_row(result.data[0] if result.data else row)

    def update_user(self, user_id: str, updates: UserUpdate) -> None:
        row = sanitize(updates.to_row())
        if not row:
            return
        self._execute(
            "update user",
            lambda c: c.table("profiles").update(row).eq("id", user_id),
        )

    def delete_user(self, user_id: str) -> None:
        self._execute(
            "delete user attendance",
            lambda c: c.table("attendance").delete().eq("user_id", user_id),
        )
        self._execute(
            "delete user",
            lambda c: c.table("profiles").delete().eq("id", user_id),
        )

    def count_admins(self) -> int:
        """Approved ADMIN profiles."""
        result = self._execute(
            "count admins",
            lambda c: (
                c.table("profiles")
                .select("id")
                .eq("role", UserRole.ADMIN.value)
                .eq("is_approved", True)
            ),
        )
        return len(result.data or [])

    # =====================================================
    # EVENTS
    # =====================================================
    def list_events(self) -> List[FutsalEvent]:
        events = self._execute(
            "list events",
            lambda c: c.table("events").select("*").order("date"),
        )
        attendance = self._execute(
            "list attendance",
            lambda c: c.table("attendance").select("*, profiles(name)"),
        )

        by_event: Dict[str, List[Attendance]] = defaultdict(list)
        for row in attendance.data or []:
            by_event[str(row["event_id"])].append(Attendance.from_row(row))

        return [
            FutsalEvent.from_row(row, by_event.get(str(row["id"]), []))
            for row in (events.data or [])
        ]

    def create_event(self, payload: EventCreate) -> FutsalEvent:
        row = sanitize(payload.to_row())
        row["description"] = row.get("description") or ""
        result = self._execute(
            "create event",
            lambda c: c.table("events").insert(row, returning="representation"),
        )
        if not result.data:
            raise GatewayError("create event", "Supabase insert returned no row")
        return FutsalEvent.from_row(result.data[0])

    # =====================================================
    # ATTENDANCE
    # =====================================================
    def upsert_attendance(
        self,
        event_id: str,
        user_id: str,
        status: AttendanceStatus,
        comment: Optional[str] = "",
        user_name: Optional[str] = None,
    ) -> Attendance:
        row = {
            "event_id": event_id,
            "user_id": user_id,
            "status": AttendanceStatus(status).value,
            "comment": comment or "",
            "updated_at": utc_now_iso(),
        }
        self._execute(
            "update attendance",
            lambda c: c.table("attendance").upsert(
                row, on_conflict=ATTENDANCE_CONFLICT_TARGET
            ),
        )
        return Attendance.from_row({**row, "profiles": {"name": user_name}})
