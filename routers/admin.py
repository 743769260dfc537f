# routers/admin.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from core.config import settings
from core.errors import GatewayError, handle_supabase_error, load_failed
from core.logging_config import logger
from dependencies.auth import get_current_session, get_team_service, require_admin
from models.event import TeamStats
from models.session import SessionContext, SessionView
from models.user import User
from services.presenters import team_stats
from services.team_service import TeamService


router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
)


class AdminOverview(BaseModel):
    users: List[User]
    event_count: int
    pending_count: int
    stats: TeamStats


# -----------------------------------------------------
# OVERVIEW — admin control panel
# -----------------------------------------------------
@router.get("/overview", response_model=AdminOverview, summary="Admin: team overview")
def overview(
    team: TeamService = Depends(get_team_service),
    ctx: SessionContext = Depends(require_admin),
):
    try:
        events, users = team.load()
    except GatewayError as e:
        raise load_failed(e, "team data")

    return AdminOverview(
        users=users,
        event_count=len(events),
        pending_count=sum(1 for u in users if not u.is_approved),
        stats=team_stats(events, users),
    )


# -----------------------------------------------------
# BOOTSTRAP — first admin promotes themself
# -----------------------------------------------------
@router.post("/bootstrap", response_model=SessionView, summary="Promote myself to ADMIN (no admin yet)")
def bootstrap_admin(
    team: TeamService = Depends(get_team_service),
    ctx: SessionContext = Depends(get_current_session),
):
    """
    Open to any signed-in user, approved or not, but only while the
    team has no approved ADMIN. Disabled with ALLOW_ADMIN_BOOTSTRAP=false.
    """
    if not settings.ALLOW_ADMIN_BOOTSTRAP:
        raise HTTPException(403, "Admin bootstrap is disabled")

    try:
        promoted = team.bootstrap_admin(ctx.profile)
    except PermissionError as e:
        raise HTTPException(403, str(e))
    except GatewayError as e:
        raise handle_supabase_error(e, "Promote account")

    logger.info(f"Bootstrap admin: {promoted.id}")
    return SessionView.of(SessionContext.authenticated(promoted, ctx.access_token))
