# routers/settings.py

from fastapi import APIRouter, Depends

from core.errors import GatewayError, handle_supabase_error
from core.logging_config import logger
from dependencies.auth import get_team_service, require_approved
from models.session import SessionContext, SessionView
from models.user import ProfileUpdate
from services.session_bridge import lookup_session
from services.team_service import TeamService


router = APIRouter(
    prefix="/settings",
    tags=["Settings"],
)


@router.patch("/profile", response_model=SessionView, summary="Update my name / email")
def update_profile(
    payload: ProfileUpdate,
    team: TeamService = Depends(get_team_service),
    ctx: SessionContext = Depends(require_approved),
):
    """
    Self-service edit of the caller's own profile.
    Role and approval can only be changed by an admin.
    """
    updates = payload.to_user_update()
    if not updates.to_row():
        return SessionView.of(ctx)

    try:
        team.update_user(ctx.profile.id, updates)
    except GatewayError as e:
        raise handle_supabase_error(e, "Update profile")

    logger.info(f"User {ctx.profile.id} updated their profile")

    # Session reflects the stored row, not the request
    refreshed = lookup_session(team.gateway, ctx.profile.id, ctx.access_token)
    return SessionView.of(refreshed)
