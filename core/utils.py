# core/utils.py

from datetime import date, datetime, timezone


def sanitize(data: dict) -> dict:
    """
    Sanitize a row before it is written to Supabase:
    - Strip string whitespace
    - Empty strings → None
    - Preserve booleans, None values
    - Dates / datetimes → ISO strings (PostgREST JSON)
    """
    clean = {}

    for k, v in data.items():
        if isinstance(v, str):
            stripped = v.strip()
            clean[k] = stripped if stripped else None
            continue

        if isinstance(v, datetime):
            clean[k] = v.isoformat()
            continue

        if isinstance(v, date):
            clean[k] = v.isoformat()
            continue

        clean[k] = v

    return clean


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
