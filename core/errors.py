# core/errors.py

from fastapi import HTTPException


class GatewayError(Exception):
    """
    A Supabase table operation failed (transport, PostgREST or RLS error).
    Never raised for "no rows": an empty result is a normal return.
    """

    def __init__(self, operation: str, detail: str):
        super().__init__(f"{operation}: {detail}")
        self.operation = operation
        self.detail = detail


class AuthError(Exception):
    """Supabase Auth (GoTrue) rejected a sign-in, sign-up or sign-out."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def extract_supabase_error(error: Exception) -> str:
    """
    Safely extract readable details from Supabase Python client errors.
    Handles:
      • PostgREST errors
      • GoTrue (Auth) errors
      • Generic Python exceptions
    """

    # Case 1 — Supabase Auth / GoTrue / PostgREST APIError
    if getattr(error, "message", None):
        try:
            return str(error.message)
        except Exception:
            pass

    # Case 2 — Supabase errors with args (common)
    if hasattr(error, "args") and error.args:
        try:
            return str(error.args[0])
        except Exception:
            pass

    # Case 3 — Plain string fallback
    try:
        return str(error) or type(error).__name__
    except Exception:
        return "Unknown Supabase error"


def handle_supabase_error(error: Exception, operation: str = "Database operation", status_code: int = 500) -> HTTPException:
    """
    Handle Supabase errors with consistent formatting.
    Returns HTTPException (doesn't raise) so caller can customize or re-raise.

    Args:
        error: The exception that occurred (GatewayError or raw client error)
        operation: Description of what operation failed (e.g., "Failed to create event")
        status_code: HTTP status code (default 500)

    Returns:
        HTTPException with standardized error message
    """
    from core.logging_config import logger

    if isinstance(error, GatewayError):
        error_detail = error.detail
    else:
        error_detail = extract_supabase_error(error)
    logger.error(f"{operation}: {error_detail}")

    # Provide user-friendly messages for common errors
    error_lower = error_detail.lower()
    if "duplicate" in error_lower or "unique" in error_lower:
        return HTTPException(status_code=400, detail=f"{operation}: Record already exists")
    elif "foreign key" in error_lower:
        return HTTPException(status_code=400, detail=f"{operation}: Invalid reference")
    elif "not found" in error_lower or "does not exist" in error_lower:
        return HTTPException(status_code=404, detail=f"{operation}: Resource not found")
    else:
        return HTTPException(status_code=status_code, detail=f"{operation} failed")


def load_failed(error: Exception, what: str) -> HTTPException:
    """
    Read-path failure. Distinct from an empty result so the view can
    show "could not load" instead of "nothing scheduled".
    """
    return handle_supabase_error(error, f"Load {what}", status_code=502)
