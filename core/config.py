from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import AliasChoices, Field


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "Futsal Connect API"
    ENV: str = "development"

    # -------------------------------------------------
    # CORS (front-end origins)
    # -------------------------------------------------
    BACKEND_CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    # -------------------------------------------------
    # Supabase (DB & Auth)
    # The anon key is a published key; RLS does the gating.
    # -------------------------------------------------
    SUPABASE_URL: str = "https://zosehxuroaofnufehljo.supabase.co"
    SUPABASE_ANON_KEY: str = "sb_publishable_nfDXsZiqdjL__9S8QquxeKQ_tW3Xt-Im"

    # -------------------------------------------------
    # Gemini (team strategy advice)
    # -------------------------------------------------
    GEMINI_API_KEY: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "API_KEY"),
    )
    GEMINI_MODEL: str = "gemini-3-flash-preview"
    ADVISOR_LANGUAGE: str = Field(
        "Japanese",
        description="Language the strategy advice is written in",
    )

    # -------------------------------------------------
    # Team cache
    # -------------------------------------------------
    TEAM_CACHE_TTL_SECONDS: int = Field(
        300,
        description="Seconds before cached events/users are reloaded in full (default: 5 minutes)",
    )

    # -------------------------------------------------
    # Admin bootstrap
    # -------------------------------------------------
    ALLOW_ADMIN_BOOTSTRAP: bool = Field(
        True,
        description="Allow self-promotion to ADMIN while no approved ADMIN exists",
    )

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    class Config:
        case_sensitive = True
        populate_by_name = True


# Instantiate settings
settings = Settings()

settings.BACKEND_CORS_ORIGINS = sorted(
    set(o.rstrip("/") for o in settings.BACKEND_CORS_ORIGINS)
)
