# services/presenters.py

import datetime as dt
from typing import Dict, List, Optional

from models.enums import AttendanceStatus
from models.event import EventCard, EventDetail, FutsalEvent, MemberAttendance, TeamStats
from models.user import User


def event_card(event: FutsalEvent) -> EventCard:
    return EventCard(
        id=event.id,
        title=event.title,
        type=event.type,
        date=event.date,
        start_time=event.start_time,
        end_time=event.end_time,
        location=event.location,
        going=event.count(AttendanceStatus.GOING),
        maybe=event.count(AttendanceStatus.MAYBE),
        absent=event.count(AttendanceStatus.ABSENT),
    )


def upcoming_events(events: List[FutsalEvent], today: Optional[dt.date] = None) -> List[FutsalEvent]:
    """Events on or after today, in date order."""
    today = today or dt.date.today()
    return [e for e in events if e.date >= today]


def event_detail(event: FutsalEvent, viewer: User, users: List[User]) -> EventDetail:
    """
    Event modal: the viewer's own answer plus one row per approved member,
    whether or not they answered.
    """
    mine = event.attendance_of(viewer.id)
    members = [
        MemberAttendance(user=u, attendance=event.attendance_of(u.id))
        for u in users
        if u.is_approved
    ]
    return EventDetail(
        event=event,
        my_status=mine.status if mine else AttendanceStatus.UNSET,
        my_comment=(mine.comment or "") if mine else "",
        members=members,
    )


def member_roster(users: List[User], viewer: User) -> Dict[str, List[User]]:
    """Approved roster for everyone; pending sign-ups only for admins."""
    roster = {"approved": [u for u in users if u.is_approved]}
    if viewer.is_admin:
        roster["pending"] = [u for u in users if not u.is_approved]
    return roster


def team_stats(events: List[FutsalEvent], users: List[User]) -> TeamStats:
    total = len(events)
    going = sum(e.count(AttendanceStatus.GOING) for e in events)
    return TeamStats(
        total_events=total,
        active_members=sum(1 for u in users if u.is_approved),
        average_attendance=round(going / total, 1) if total else 0.0,
    )
