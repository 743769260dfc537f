from typing import Optional
from pydantic import BaseModel

from .enums import BaseStrEnum
from .user import User


class SessionState(BaseStrEnum):
    UNAUTHENTICATED = "UNAUTHENTICATED"
    AUTHENTICATED = "AUTHENTICATED"


class Screen(BaseStrEnum):
    """Which top-level screen the front-end shows."""

    LOGIN = "LOGIN"
    PENDING_APPROVAL = "PENDING_APPROVAL"
    MAIN = "MAIN"


class SessionContext(BaseModel):
    """
    Explicit session passed to every view.
    Two states only: unauthenticated (no profile) or authenticated
    with the caller's profile and the access token used for RLS.
    """
    state: SessionState = SessionState.UNAUTHENTICATED
    profile: Optional[User] = None
    access_token: Optional[str] = None

    @classmethod
    def unauthenticated(cls) -> "SessionContext":
        return cls()

    @classmethod
    def authenticated(cls, profile: User, access_token: Optional[str] = None) -> "SessionContext":
        return cls(
            state=SessionState.AUTHENTICATED,
            profile=profile,
            access_token=access_token,
        )

    @property
    def is_authenticated(self) -> bool:
        return self.state == SessionState.AUTHENTICATED and self.profile is not None


def resolve_screen(ctx: SessionContext) -> Screen:
    """Unapproved profiles go to the pending screen whatever their role."""
    if not ctx.is_authenticated:
        return Screen.LOGIN
    if not ctx.profile.is_approved:
        return Screen.PENDING_APPROVAL
    return Screen.MAIN


class SessionView(BaseModel):
    state: SessionState
    screen: Screen
    profile: Optional[User] = None

    @classmethod
    def of(cls, ctx: SessionContext) -> "SessionView":
        return cls(state=ctx.state, screen=resolve_screen(ctx), profile=ctx.profile)
