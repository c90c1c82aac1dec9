from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional

from soloforge.auth.errors import SupabaseConfigError


def _env_first(*names: str) -> Optional[str]:
    for name in names:
        value = (os.getenv(name, "") or "").strip()
        if value:
            return value
    return None


def _parse_csv(value: str) -> List[str]:
    items = [x.strip().lower() for x in (value or "").split(",")]
    return [x for x in items if x]


@dataclass(frozen=True)
class AuthConfig:
    # Supabase project (public values; safe to ship to browsers)
    supabase_url: Optional[str]
    supabase_key: Optional[str]  # anon key, or publishable key as fallback

    # Admin console
    admin_emails: List[str]
    admin_app_url: str  # Origin serving /api/admin/me for the callback flow
    public_app_url: Optional[str]  # Link back to the public site from the console

    @property
    def supabase_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)


@lru_cache(maxsize=1)
def load_auth_config() -> AuthConfig:
    """
    Load authentication configuration from environment variables.

    Each value accepts the plain name first and the `NEXT_PUBLIC_` name used by the
    browser bundles second. The anon key wins over the publishable key.
    """
    admin_app_url = (_env_first("ADMIN_APP_URL", "NEXT_PUBLIC_ADMIN_APP_URL") or "http://localhost:3001").rstrip("/")

    return AuthConfig(
        supabase_url=_env_first("SUPABASE_URL", "NEXT_PUBLIC_SUPABASE_URL"),
        supabase_key=_env_first(
            "SUPABASE_ANON_KEY",
            "NEXT_PUBLIC_SUPABASE_ANON_KEY",
            "SUPABASE_PUBLISHABLE_KEY",
            "NEXT_PUBLIC_SUPABASE_PUBLISHABLE_KEY",
        ),
        admin_emails=_parse_csv(os.getenv("ADMIN_EMAILS", "")),
        admin_app_url=admin_app_url,
        public_app_url=_env_first("PUBLIC_APP_URL", "NEXT_PUBLIC_PUBLIC_APP_URL"),
    )


def require_supabase_credentials(cfg: AuthConfig) -> tuple[str, str]:
    """Return (url, key) for client construction; fail fast when either is missing."""
    if not cfg.supabase_url or not cfg.supabase_key:
        raise SupabaseConfigError(
            "Missing SUPABASE_URL or SUPABASE_ANON_KEY / SUPABASE_PUBLISHABLE_KEY"
        )
    return cfg.supabase_url, cfg.supabase_key
