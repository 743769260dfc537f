# routers/events.py
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from typing import List

from core.errors import GatewayError, handle_supabase_error, load_failed
from dependencies.auth import get_team_service, require_approved
from models.attendance import AttendanceUpdate
from models.event import EventCard, EventCreate, EventDetail, FutsalEvent
from models.session import SessionContext
from services.presenters import event_card, event_detail, upcoming_events
from services.strategy_advisor import get_team_strategy
from services.team_service import TeamService


router = APIRouter(
    prefix="/events",
    tags=["Events"],
)

"""
EVENTS ROUTER

Rules:
  - Approved members may list, create and answer events
  - Events are never edited or deleted here
  - Attendance is one answer per member per event (latest wins)
"""


class StrategyResponse(BaseModel):
    event_id: str
    advice: str


# -----------------------------------------------------
# Helper — event or 404
# -----------------------------------------------------
def _get_event_or_404(team: TeamService, event_id: str) -> FutsalEvent:
    try:
        event = team.get_event(event_id)
    except GatewayError as e:
        raise load_failed(e, "events")

    if event is None:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


# -----------------------------------------------------
# LIST EVENTS — upcoming by default
# -----------------------------------------------------
@router.get(
    "",
    summary="List events",
    response_model=List[EventCard],
)
def list_events(
    include_past: bool = False,
    team: TeamService = Depends(get_team_service),
    ctx: SessionContext = Depends(require_approved),
):
    try:
        events = team.events()
    except GatewayError as e:
        raise load_failed(e, "events")

    if not include_past:
        events = upcoming_events(events)
    return [event_card(e) for e in events]


# -----------------------------------------------------
# CREATE EVENT — any approved member
# -----------------------------------------------------
@router.post(
    "",
    response_model=FutsalEvent,
    status_code=201,
    summary="Create event",
)
def create_event(
    payload: EventCreate,
    team: TeamService = Depends(get_team_service),
    ctx: SessionContext = Depends(require_approved),
):
    try:
        return team.create_event(payload)
    except GatewayError as e:
        raise handle_supabase_error(e, "Create event")


# -----------------------------------------------------
# EVENT DETAIL — own answer + full member list
# -----------------------------------------------------
@router.get(
    "/{event_id}",
    response_model=EventDetail,
    summary="Event detail with attendance",
)
def get_event(
    event_id: str,
    team: TeamService = Depends(get_team_service),
    ctx: SessionContext = Depends(require_approved),
):
    event = _get_event_or_404(team, event_id)
    return event_detail(event, ctx.profile, team.users())


# -----------------------------------------------------
# ANSWER ATTENDANCE — caller's own row
# -----------------------------------------------------
@router.put(
    "/{event_id}/attendance",
    response_model=EventDetail,
    summary="Set my attendance for an event",
)
def update_attendance(
    event_id: str,
    payload: AttendanceUpdate,
    team: TeamService = Depends(get_team_service),
    ctx: SessionContext = Depends(require_approved),
):
    _get_event_or_404(team, event_id)

    try:
        team.set_attendance(event_id, ctx.profile, payload.status, payload.comment)
    except GatewayError as e:
        raise handle_supabase_error(e, "Update attendance")

    event = _get_event_or_404(team, event_id)
    return event_detail(event, ctx.profile, team.users())


# -----------------------------------------------------
# AI STRATEGY — never fails the screen
# -----------------------------------------------------
@router.post(
    "/{event_id}/strategy",
    response_model=StrategyResponse,
    summary="AI team strategy for an event",
)
def event_strategy(
    event_id: str,
    team: TeamService = Depends(get_team_service),
    ctx: SessionContext = Depends(require_approved),
):
    event = _get_event_or_404(team, event_id)
    return StrategyResponse(event_id=event.id, advice=get_team_strategy(event))
