# core/cache.py

"""
Normalized in-memory team cache.

Events and users are held by id and updated one record at a time after
each successful mutation, so views never need a full reload after an
edit. A full reload only runs when the cache is cold or past its TTL.

Full loads are guarded by a generation counter: a snapshot taken before
a mutation is discarded instead of overwriting the newer state.
"""

from datetime import datetime, timedelta
from threading import Lock
from typing import Dict, List, Optional

from core.config import settings
from core.logging_config import logger
from models.attendance import Attendance
from models.event import FutsalEvent
from models.user import User, UserUpdate


class TeamCache:
    """
    Events and users keyed by id, with TTL.

    Thread-safe for concurrent access.
    """

    def __init__(self, ttl_seconds: Optional[int] = None):
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.TEAM_CACHE_TTL_SECONDS
        self._events: Dict[str, FutsalEvent] = {}
        self._users: Dict[str, User] = {}
        self._user_order: List[str] = []
        self._loaded_at: Optional[datetime] = None
        self._generation = 0
        self._lock = Lock()

    # -----------------------------------------------------
    # Freshness / full loads
    # -----------------------------------------------------
    def is_fresh(self) -> bool:
        with self._lock:
            if self._loaded_at is None:
                return False
            return datetime.now() < self._loaded_at + timedelta(seconds=self.ttl_seconds)

    def begin_load(self) -> int:
        """Generation to hand back to store_snapshot() once the load finishes."""
        with self._lock:
            return self._generation

    def store_snapshot(self, generation: int, events: List[FutsalEvent], users: List[User]) -> bool:
        """
        Replace everything with a full load.
        Returns False (and keeps current state) if a mutation happened
        after begin_load().
        """
        with self._lock:
            if generation != self._generation:
                logger.info(
                    f"Discarding stale team snapshot (gen {generation}, now {self._generation})"
                )
                return False
            self._events = {e.id: e for e in events}
            self._users = {u.id: u for u in users}
            self._user_order = [u.id for u in users]
            self._loaded_at = datetime.now()
            return True

    def clear(self):
        """Clear all entries."""
        with self._lock:
            self._events.clear()
            self._users.clear()
            self._user_order.clear()
            self._loaded_at = None
            self._generation += 1

    # -----------------------------------------------------
    # Reads
    # -----------------------------------------------------
    def events(self) -> List[FutsalEvent]:
        """Events ordered by date."""
        with self._lock:
            return sorted(self._events.values(), key=lambda e: e.date)

    def get_event(self, event_id: str) -> Optional[FutsalEvent]:
        with self._lock:
            return self._events.get(event_id)

    def users(self) -> List[User]:
        """Users in creation order."""
        with self._lock:
            return [self._users[uid] for uid in self._user_order if uid in self._users]

    def get_user(self, user_id: str) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    # -----------------------------------------------------
    # Incremental updates (after a successful mutation)
    # -----------------------------------------------------
    def _bump(self):
        self._generation += 1

    def put_event(self, event: FutsalEvent):
        with self._lock:
            self._events[event.id] = event
            self._bump()

    def apply_attendance(self, event_id: str, attendance: Attendance):
        """Replace (or add) one member's answer on a cached event."""
        with self._lock:
            event = self._events.get(event_id)
            if event is not None:
                user = self._users.get(attendance.user_id)
                if user is not None:
                    attendance = attendance.model_copy(update={"user_name": user.name})
                others = [a for a in event.attendees if a.user_id != attendance.user_id]
                self._events[event_id] = event.model_copy(
                    update={"attendees": others + [attendance]}
                )
            # Always bump: an in-flight load may have read attendance before this write
            self._bump()

    def put_user(self, user: User):
        with self._lock:
            if user.id not in self._users:
                self._user_order.append(user.id)
            self._users[user.id] = user
            self._bump()

    def patch_user(self, user_id: str, updates: UserUpdate) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            if user is not None:
                user = User.model_validate(
                    {**user.model_dump(), **updates.model_dump(exclude_unset=True)}
                )
                self._users[user_id] = user
                self._rename_attendee(user)
            self._bump()
            return user

    def remove_user(self, user_id: str):
        """Drop the user and their answers, mirroring the store's cascade."""
        with self._lock:
            self._users.pop(user_id, None)
            if user_id in self._user_order:
                self._user_order.remove(user_id)
            for event_id, event in list(self._events.items()):
                kept = [a for a in event.attendees if a.user_id != user_id]
                if len(kept) != len(event.attendees):
                    self._events[event_id] = event.model_copy(update={"attendees": kept})
            self._bump()

    def _rename_attendee(self, user: User):
        for event_id, event in list(self._events.items()):
            if any(a.user_id == user.id and a.user_name != user.name for a in event.attendees):
                attendees = [
                    a.model_copy(update={"user_name": user.name}) if a.user_id == user.id else a
                    for a in event.attendees
                ]
                self._events[event_id] = event.model_copy(update={"attendees": attendees})


# Global cache instance
_team_cache = TeamCache()


def get_team_cache() -> TeamCache:
    """Get the global team cache instance."""
    return _team_cache


def cache_clear():
    _team_cache.clear()
