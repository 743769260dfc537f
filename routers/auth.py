from fastapi import APIRouter, HTTPException, Depends
from fastapi.security import HTTPAuthorizationCredentials
from pydantic import BaseModel, EmailStr, field_validator
from typing import Optional

from core.errors import AuthError
from core.logging_config import logger
from dependencies.auth import bearer_scheme, get_gateway, get_session_context
from models.session import Screen, SessionContext, SessionView
from models.user import User
from services.db_service import SupabaseGateway
from services.session_bridge import SessionBridge


router = APIRouter(
    prefix="/auth",
    tags=["Auth"],
)


# ============================================================
# MODELS
# ============================================================
class LoginRequest(BaseModel):
    email: str
    password: str


class SignupRequest(BaseModel):
    name: str
    email: EmailStr
    password: str

    @field_validator("name")
    def name_required(cls, v):
        if not v.strip():
            raise ValueError("Name is required")
        return v.strip()


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    session: SessionView


class SignupResponse(BaseModel):
    status: str = "pending"
    screen: Screen = Screen.PENDING_APPROVAL
    profile: Optional[User] = None


# ============================================================
# LOGIN (SUPABASE AUTH)
# ============================================================
@router.post("/login", response_model=TokenResponse, summary="Authenticate member")
def login(payload: LoginRequest, gateway: SupabaseGateway = Depends(get_gateway)):
    bridge = SessionBridge(gateway.client, gateway)

    try:
        ctx = bridge.sign_in(payload.email, payload.password)
    except AuthError:
        raise HTTPException(
            status_code=401,
            detail="Invalid email or password"
        )

    if not ctx.is_authenticated:
        raise HTTPException(
            status_code=401,
            detail={"message": "No team profile for this account", "screen": Screen.LOGIN.value},
        )

    return TokenResponse(access_token=ctx.access_token, session=SessionView.of(ctx))


# ============================================================
# SIGN UP (profile starts unapproved)
# ============================================================
@router.post("/signup", response_model=SignupResponse, status_code=201, summary="Register and wait for approval")
def signup(payload: SignupRequest, gateway: SupabaseGateway = Depends(get_gateway)):
    bridge = SessionBridge(gateway.client, gateway)

    try:
        profile = bridge.sign_up(payload.name, payload.email, payload.password)
    except AuthError as e:
        raise HTTPException(status_code=400, detail=e.message or "Sign-up failed")

    logger.info(f"Sign-up received: {payload.email}")
    return SignupResponse(profile=profile)


# ============================================================
# LOGOUT
# ============================================================
@router.post("/logout", response_model=SessionView, summary="Sign out")
def logout(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    gateway: SupabaseGateway = Depends(get_gateway),
):
    """Revokes the bearer token's session; without a token only the client forgets it."""
    token = credentials.credentials if credentials else None
    ctx = SessionBridge(gateway.client, gateway).sign_out(token)
    return SessionView.of(ctx)


# ============================================================
# CURRENT SESSION (which screen to show)
# ============================================================
@router.get("/session", response_model=SessionView, summary="Current session and screen")
def read_session(ctx: SessionContext = Depends(get_session_context)):
    return SessionView.of(ctx)
