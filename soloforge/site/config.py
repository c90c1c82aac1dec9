from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_SITE_URL = "https://soloforge.dev"
DEVELOPMENT_SITE_URL = "http://localhost:3000"


@dataclass(frozen=True)
class SiteConfig:
    site_url: str  # No trailing slash
    app_name: str
    preview_image: str


def resolve_site_url() -> str:
    """
    Base URL for canonical links, robots and the sitemap.

    Precedence: SITE_URL (or NEXT_PUBLIC_SITE_URL), then https://VERCEL_URL, then the
    local dev server when APP_ENV/NODE_ENV is development, then the production domain.
    """
    explicit = (os.getenv("SITE_URL", "") or os.getenv("NEXT_PUBLIC_SITE_URL", "") or "").strip()
    if explicit:
        explicit = explicit.rstrip("/")
        if explicit:
            return explicit

    vercel = (os.getenv("VERCEL_URL", "") or "").strip()
    if vercel:
        return f"https://{vercel}".rstrip("/")

    env = (os.getenv("APP_ENV", "") or os.getenv("NODE_ENV", "") or "").strip().lower()
    if env == "development":
        return DEVELOPMENT_SITE_URL

    return DEFAULT_SITE_URL


@lru_cache(maxsize=1)
def load_site_config() -> SiteConfig:
    return SiteConfig(
        site_url=resolve_site_url(),
        app_name="SoloForge",
        preview_image="/docs/imgs/image.jpg",
    )
