# routers/calendar.py
import datetime as dt

from fastapi import APIRouter, Depends, HTTPException, Path

from core.errors import GatewayError, load_failed
from dependencies.auth import get_team_service, require_approved
from models.session import SessionContext
from services.calendar_view import CalendarMonth, month_grid
from services.team_service import TeamService


router = APIRouter(
    prefix="/calendar",
    tags=["Calendar"],
)


def _month(team: TeamService, year: int, month: int) -> CalendarMonth:
    try:
        events = team.events()
    except GatewayError as e:
        raise load_failed(e, "events")

    try:
        return month_grid(events, year, month)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("", response_model=CalendarMonth, summary="Current month")
def current_month(
    team: TeamService = Depends(get_team_service),
    ctx: SessionContext = Depends(require_approved),
):
    today = dt.date.today()
    return _month(team, today.year, today.month)


@router.get("/{year}/{month}", response_model=CalendarMonth, summary="Month grid")
def month_view(
    year: int = Path(..., ge=1, le=9999),
    month: int = Path(..., ge=1, le=12),
    team: TeamService = Depends(get_team_service),
    ctx: SessionContext = Depends(require_approved),
):
    return _month(team, year, month)
