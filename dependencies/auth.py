from typing import Optional, List

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from core.cache import get_team_cache
from core.logging_config import logger
from core.supabase_client import get_supabase_client
from models.enums import UserRole
from models.session import Screen, SessionContext, resolve_screen
from services.db_service import SupabaseGateway
from services.session_bridge import lookup_session
from services.team_service import TeamService


bearer_scheme = HTTPBearer(auto_error=False)


def _token(credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    return credentials.credentials if credentials else None


# ============================================================
# Gateway (PostgREST calls carry the caller's token for RLS)
# ============================================================
def get_gateway(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> SupabaseGateway:
    client = get_supabase_client(_token(credentials))
    if client is None:
        raise HTTPException(500, "Supabase client not configured")
    return SupabaseGateway(client)


def get_team_service(gateway: SupabaseGateway = Depends(get_gateway)) -> TeamService:
    return TeamService(gateway, get_team_cache())


# ============================================================
# SESSION (Supabase: validates JWT + fetches profile)
# ============================================================
def get_session_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    gateway: SupabaseGateway = Depends(get_gateway),
) -> SessionContext:
    """
    Unauthenticated when there is no token, the token is rejected,
    or no profile exists for the token's user.
    """
    token = _token(credentials)
    if not token:
        return SessionContext.unauthenticated()

    try:
        auth_resp = gateway.client.auth.get_user(token)
        auth_user = auth_resp.user if auth_resp else None
    except Exception as e:
        logger.info(f"Rejected access token: {type(e).__name__}")
        return SessionContext.unauthenticated()

    if auth_user is None:
        return SessionContext.unauthenticated()

    return lookup_session(gateway, auth_user.id, token)


def get_current_session(ctx: SessionContext = Depends(get_session_context)) -> SessionContext:
    if not ctx.is_authenticated:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"message": "Invalid or expired authentication token", "screen": Screen.LOGIN.value},
            headers={"WWW-Authenticate": "Bearer"},
        )
    return ctx


# ============================================================
# APPROVAL GATE (unapproved users only see the pending screen)
# ============================================================
def require_approved(ctx: SessionContext = Depends(get_current_session)) -> SessionContext:
    if resolve_screen(ctx) != Screen.MAIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={
                "message": "Your membership is awaiting admin approval",
                "screen": Screen.PENDING_APPROVAL.value,
            },
        )
    return ctx


# ============================================================
# ROLE CHECKER (basic role list guard)
# ============================================================
def requires_role(allowed_roles: List[UserRole]):
    def checker(ctx: SessionContext = Depends(require_approved)) -> SessionContext:
        if ctx.profile.role not in allowed_roles:
            raise HTTPException(
                status_code=403,
                detail=f"Requires one of: {[r.value for r in allowed_roles]}",
            )
        return ctx
    return checker


require_admin = requires_role([UserRole.ADMIN])
