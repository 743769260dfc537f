# core/supabase_client.py

from typing import Optional

from supabase import create_client, Client
from core.config import settings
from core.logging_config import logger


TEAM_TABLES = ["profiles", "events", "attendance"]


# ============================================================
# Supabase Client Factory (published anon key)
# ============================================================

def get_supabase_client(access_token: Optional[str] = None) -> Optional[Client]:
    """
    Creates a Supabase client using the published ANON KEY.

    When an access token is given, PostgREST calls run as that user,
    so row-level security applies exactly as it did in the browser.
    Returns None when the project URL or key is missing.
    """
    try:
        supabase_url = settings.SUPABASE_URL
        supabase_key = settings.SUPABASE_ANON_KEY

        if not supabase_url or not supabase_key:
            logger.error("Missing Supabase credentials")
            logger.error(f"   URL: {supabase_url}")
            logger.error(f"   ANON KEY: {'SET' if supabase_key else 'MISSING'}")
            return None

        client = create_client(supabase_url, supabase_key)
        if access_token:
            client.postgrest.auth(access_token)
        return client

    except Exception as e:
        logger.error(f"Supabase Init Error: {e}", exc_info=True)
        return None


# ============================================================
# Ping Supabase for health checks
# ============================================================

def ping_supabase() -> dict:
    """
    Simple connectivity check over the team tables.
    Does NOT touch auth.
    """
    try:
        client = get_supabase_client()
        if client is None:
            return {"service": "Supabase", "status": "not_configured"}

        results = {}

        for t in TEAM_TABLES:
            try:
                res = client.table(t).select("*").limit(1).execute()
                results[t] = {
                    "status": "ok",
                    "rows_found": len(res.data or [])
                }
            except Exception as err:
                results[t] = {"status": "error", "detail": str(err)}

        overall = "ok" if all(r["status"] == "ok" for r in results.values()) else "degraded"

        return {
            "service": "Supabase",
            "status": overall,
            "tables": results,
        }

    except Exception as e:
        logger.error(f"Supabase Ping Error: {e}", exc_info=True)
        return {"service": "Supabase", "status": "error", "detail": str(e)}
