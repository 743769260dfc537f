# routers/members.py

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from core.errors import GatewayError, handle_supabase_error, load_failed
from core.logging_config import logger
from dependencies.auth import get_team_service, require_admin, require_approved
from models.session import SessionContext
from models.user import User, UserUpdate
from services.presenters import member_roster
from services.team_service import TeamService


router = APIRouter(
    prefix="/members",
    tags=["Members"],
)


class MemberRoster(BaseModel):
    approved: List[User]
    # Admins only
    pending: Optional[List[User]] = None


# -----------------------------------------------------
# Helper — member or 404
# -----------------------------------------------------
def _get_member_or_404(team: TeamService, user_id: str) -> User:
    try:
        user = team.get_user(user_id)
    except GatewayError as e:
        raise load_failed(e, "members")

    if user is None:
        raise HTTPException(404, "Member not found")
    return user


# -----------------------------------------------------
# ROSTER
# -----------------------------------------------------
@router.get("", response_model=MemberRoster, response_model_exclude_none=True, summary="Member roster")
def list_members(
    team: TeamService = Depends(get_team_service),
    ctx: SessionContext = Depends(require_approved),
):
    try:
        users = team.users()
    except GatewayError as e:
        raise load_failed(e, "members")

    return MemberRoster(**member_roster(users, ctx.profile))


# -----------------------------------------------------
# APPROVE — admin
# -----------------------------------------------------
@router.post("/{user_id}/approve", response_model=User, summary="Admin: approve a sign-up")
def approve_member(
    user_id: str,
    team: TeamService = Depends(get_team_service),
    ctx: SessionContext = Depends(require_admin),
):
    user = _get_member_or_404(team, user_id)
    try:
        updated = team.approve_user(user_id)
    except GatewayError as e:
        raise handle_supabase_error(e, "Approve member")

    logger.info(f"{ctx.profile.id} approved {user_id}")
    return updated or user.model_copy(update={"is_approved": True})


# -----------------------------------------------------
# EDIT — admin
# -----------------------------------------------------
@router.patch("/{user_id}", response_model=User, summary="Admin: edit a member")
def update_member(
    user_id: str,
    payload: UserUpdate,
    team: TeamService = Depends(get_team_service),
    ctx: SessionContext = Depends(require_admin),
):
    user = _get_member_or_404(team, user_id)
    try:
        updated = team.update_user(user_id, payload)
    except GatewayError as e:
        raise handle_supabase_error(e, "Update member")

    return updated or user


# -----------------------------------------------------
# TOGGLE ROLE — admin
# -----------------------------------------------------
@router.post("/{user_id}/toggle-role", response_model=User, summary="Admin: switch ADMIN/MEMBER")
def toggle_member_role(
    user_id: str,
    team: TeamService = Depends(get_team_service),
    ctx: SessionContext = Depends(require_admin),
):
    user = _get_member_or_404(team, user_id)
    try:
        updated = team.toggle_role(user)
    except GatewayError as e:
        raise handle_supabase_error(e, "Update member")

    return updated or user


# -----------------------------------------------------
# DELETE — admin (also rejects pending sign-ups)
# -----------------------------------------------------
@router.delete("/{user_id}", summary="Admin: remove a member")
def delete_member(
    user_id: str,
    team: TeamService = Depends(get_team_service),
    ctx: SessionContext = Depends(require_admin),
):
    if user_id == ctx.profile.id:
        raise HTTPException(400, "Admins cannot delete their own account here")

    _get_member_or_404(team, user_id)
    try:
        team.delete_user(user_id)
    except GatewayError as e:
        raise handle_supabase_error(e, "Delete member")

    return {"status": "deleted", "id": user_id}
