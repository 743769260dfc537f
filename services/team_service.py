# services/team_service.py

"""
Team state for the views: gateway calls plus incremental cache updates.

Mutations write to Supabase first; the cache is only touched after the
write succeeded, so a failed call leaves the previous state unchanged.
"""

from typing import List, Optional, Tuple

from core.cache import TeamCache
from core.logging_config import logger
from models.attendance import Attendance
from models.enums import AttendanceStatus, UserRole
from models.event import EventCreate, FutsalEvent
from models.user import User, UserUpdate
from services.db_service import SupabaseGateway


LOAD_ATTEMPTS = 3


class TeamService:
    def __init__(self, gateway: SupabaseGateway, cache: TeamCache):
        self.gateway = gateway
        self.cache = cache

    # -----------------------------------------------------
    # Loading
    # -----------------------------------------------------
    def load(self, force: bool = False) -> Tuple[List[FutsalEvent], List[User]]:
        """Cached events and users; full reload when cold, expired or forced."""
        if not force and self.cache.is_fresh():
            return self.cache.events(), self.cache.users()

        for attempt in range(1, LOAD_ATTEMPTS + 1):
            generation = self.cache.begin_load()
            events = self.gateway.list_events()
            users = self.gateway.list_users()

            if self.cache.store_snapshot(generation, events, users):
                return events, users
            logger.info(f"Team data changed during load, re-reading (attempt {attempt})")

        # Still racing with writers: serve the last full read without caching it
        logger.warning(f"Team snapshot not cached after {LOAD_ATTEMPTS} attempts")
        return events, users

    def events(self) -> List[FutsalEvent]:
        return self.load()[0]

    def users(self) -> List[User]:
        return self.load()[1]

    def get_event(self, event_id: str) -> Optional[FutsalEvent]:
        return next((e for e in self.events() if e.id == event_id), None)

    def get_user(self, user_id: str) -> Optional[User]:
        return next((u for u in self.users() if u.id == user_id), None)

    # -----------------------------------------------------
    # Events & attendance
    # -----------------------------------------------------
    def create_event(self, payload: EventCreate) -> FutsalEvent:
        event = self.gateway.create_event(payload)
        self.cache.put_event(event)
        logger.info(f"Event created: {event.id} ({event.title})")
        return event

    def set_attendance(
        self,
        event_id: str,
        user: User,
        status: AttendanceStatus,
        comment: Optional[str] = "",
    ) -> Attendance:
        attendance = self.gateway.upsert_attendance(
            event_id, user.id, status, comment, user_name=user.name
        )
        self.cache.apply_attendance(event_id, attendance)
        return attendance

    # -----------------------------------------------------
    # Members
    # -----------------------------------------------------
    def update_user(self, user_id: str, updates: UserUpdate) -> Optional[User]:
        self.gateway.update_user(user_id, updates)
        return self.cache.patch_user(user_id, updates)

    def approve_user(self, user_id: str) -> Optional[User]:
        return self.update_user(user_id, UserUpdate(is_approved=True))

    def toggle_role(self, user: User) -> Optional[User]:
        new_role = UserRole.MEMBER if user.role == UserRole.ADMIN else UserRole.ADMIN
        return self.update_user(user.id, UserUpdate(role=new_role))

    def delete_user(self, user_id: str) -> None:
        self.gateway.delete_user(user_id)
        self.cache.remove_user(user_id)
        logger.info(f"User deleted: {user_id}")

    def bootstrap_admin(self, user: User) -> User:
        """
        Promote the caller to approved ADMIN.
        Only valid while no approved ADMIN exists; the caller checks policy.
        """
        if self.gateway.count_admins() > 0:
            raise PermissionError("An approved admin already exists")
        updates = UserUpdate(role=UserRole.ADMIN, is_approved=True)
        self.gateway.update_user(user.id, updates)
        patched = self.cache.patch_user(user.id, updates)
        logger.warning(f"Admin bootstrap: {user.id} promoted to ADMIN")
        return patched or User.model_validate(
            {**user.model_dump(), **updates.model_dump(exclude_unset=True)}
        )

