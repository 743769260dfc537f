# services/session_bridge.py

"""
Auth session bridge.

Maps Supabase Auth session-change notifications (SIGNED_IN, SIGNED_OUT,
TOKEN_REFRESHED, USER_UPDATED, ...) onto a two-state SessionContext:

    Unauthenticated  --session with a known profile-->  Authenticated(profile)
    Authenticated    --sign-out / no session-------->  Unauthenticated

A session whose profile cannot be found (missing row or failed lookup)
is treated as Unauthenticated. There is no retry.
"""

from typing import Callable, List, Optional

from supabase import Client

from core.errors import AuthError, GatewayError, extract_supabase_error
from core.logging_config import logger
from models.session import SessionContext
from models.user import User
from services.db_service import SupabaseGateway


SessionListener = Callable[[SessionContext], None]


def _session_user_id(session) -> Optional[str]:
    user = getattr(session, "user", None) if session is not None else None
    return getattr(user, "id", None) if user is not None else None


def _session_token(session) -> Optional[str]:
    return getattr(session, "access_token", None) if session is not None else None


def lookup_session(gateway: SupabaseGateway, user_id: Optional[str], access_token: Optional[str] = None) -> SessionContext:
    """Profile lookup for a signed-in user id. Never raises."""
    if not user_id:
        return SessionContext.unauthenticated()

    try:
        profile = gateway.get_profile(user_id)
    except GatewayError as e:
        logger.warning(f"Profile lookup failed for {user_id}: {e.detail}")
        return SessionContext.unauthenticated()

    if profile is None:
        logger.info(f"No profile for signed-in user {user_id}")
        return SessionContext.unauthenticated()

    return SessionContext.authenticated(profile, access_token)


class SessionBridge:
    """
    Holds the current SessionContext for one client and keeps it in
    sync with Supabase Auth for the bridge's lifetime.

        with SessionBridge(client, gateway) as bridge:
            bridge.add_listener(render)
            bridge.sign_in(email, password)
    """

    def __init__(self, client: Client, gateway: SupabaseGateway):
        self.client = client
        self.gateway = gateway
        self.context = SessionContext.unauthenticated()
        self._listeners: List[SessionListener] = []
        self._subscription = None

    # -----------------------------------------------------
    # Subscription lifecycle
    # -----------------------------------------------------
    def subscribe(self) -> None:
        if self._subscription is not None:
            return
        self._subscription = self.client.auth.on_auth_state_change(self.handle_auth_change)

    def unsubscribe(self) -> None:
        if self._subscription is None:
            return
        try:
            self._subscription.unsubscribe()
        finally:
            self._subscription = None

    def __enter__(self) -> "SessionBridge":
        self.subscribe()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.unsubscribe()

    # -----------------------------------------------------
    # Listeners
    # -----------------------------------------------------
    def add_listener(self, listener: SessionListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: SessionListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _set_context(self, ctx: SessionContext) -> None:
        self.context = ctx
        for listener in list(self._listeners):
            try:
                listener(ctx)
            except Exception as e:
                logger.error(f"Session listener failed: {e}", exc_info=True)

    # -----------------------------------------------------
    # Session-change notification
    # -----------------------------------------------------
    def handle_auth_change(self, event, session) -> SessionContext:
        logger.info(f"Auth state change: {event}")
        ctx = lookup_session(self.gateway, _session_user_id(session), _session_token(session))
        self._set_context(ctx)
        return ctx

    def refresh_profile(self) -> SessionContext:
        """Re-read the current user's profile after it was edited."""
        if not self.context.is_authenticated:
            return self.context
        ctx = lookup_session(self.gateway, self.context.profile.id, self.context.access_token)
        self._set_context(ctx)
        return ctx

    # -----------------------------------------------------
    # Email + password auth
    # -----------------------------------------------------
    def sign_in(self, email: str, password: str) -> SessionContext:
        email = email.strip().lower()
        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as e:
            logger.warning(f"Login attempt failed for {email}: {type(e).__name__}")
            raise AuthError(extract_supabase_error(e)) from e

        session = getattr(response, "session", None)
        if session is None or not getattr(session, "access_token", None):
            raise AuthError("Invalid email or password")

        return self.handle_auth_change("SIGNED_IN", session)

    def sign_up(self, name: str, email: str, password: str) -> Optional[User]:
        """
        Create the auth user and its pending profile.
        Returns the profile, or None when the provider returned no user
        (email confirmation flows).
        """
        email = email.strip().lower()
        try:
            response = self.client.auth.sign_up(
                {
                    "email": email,
                    "password": password,
                    "options": {"data": {"full_name": name}},
                }
            )
        except Exception as e:
            logger.warning(f"Sign-up failed for {email}: {type(e).__name__}")
            raise AuthError(extract_supabase_error(e)) from e

        user = getattr(response, "user", None)
        if user is None:
            return None

        try:
            return self.gateway.create_profile(user.id, name, email)
        except GatewayError as e:
            # Auth user exists; profile row can be fixed by an admin.
            logger.error(f"Profile creation error for {email}: {e.detail}")
            return None

    def sign_out(self, access_token: Optional[str] = None) -> SessionContext:
        """
        Revoke the session server-side. A bridge built per request holds
        no stored session, so the caller's token is revoked directly.
        """
        token = access_token or self.context.access_token
        try:
            if token:
                self.client.auth.admin.sign_out(token)
            else:
                self.client.auth.sign_out()
        except Exception as e:
            logger.warning(f"Sign-out failed: {extract_supabase_error(e)}")
        ctx = SessionContext.unauthenticated()
        self._set_context(ctx)
        return ctx
