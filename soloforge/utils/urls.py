from __future__ import annotations

import os
from typing import Optional
from urllib.parse import urlsplit

# Hosts whose images may be proxied/optimised by the site.
KNOWN_IMAGE_HOSTS = frozenset(
    {
        "lh3.googleusercontent.com",
        "avatars.githubusercontent.com",
        "api.dicebear.com",
    }
)
SUPABASE_STORAGE_SUFFIX = ".supabase.co"

_LOCAL_HOST_MARKERS = ("localhost", "127.0.0.1")


def is_known_remote_image_url(url: Optional[str]) -> bool:
    """https URL on an allowlisted host or a Supabase storage subdomain. Malformed input is False."""
    raw = (url or "").strip()
    if not raw:
        return False
    try:
        parts = urlsplit(raw)
        host = (parts.hostname or "").lower()
    except ValueError:
        return False
    if parts.scheme.lower() != "https" or not host:
        return False
    if host in KNOWN_IMAGE_HOSTS:
        return True
    return host.endswith(SUPABASE_STORAGE_SUFFIX)


def normalize_api_base_url(raw: Optional[str]) -> Optional[str]:
    """
    `https://api.example.com/` -> `https://api.example.com/api`.

    Blank input yields None; an existing `/api` suffix is kept as-is.
    """
    trimmed = (raw or "").strip()
    if not trimmed:
        return None
    normalized = trimmed.rstrip("/")
    if not normalized:
        return None
    if normalized.endswith("/api"):
        return normalized
    return f"{normalized}/api"


def get_public_direct_backend_api_url() -> Optional[str]:
    """Backend URL advertised to browsers (NEXT_PUBLIC_ name first, then the server name)."""
    raw = (os.getenv("NEXT_PUBLIC_DIRECT_BACKEND_API_URL", "") or os.getenv("DIRECT_BACKEND_API_URL", "") or "").strip()
    return normalize_api_base_url(raw)


def get_direct_backend_api_url(host: Optional[str]) -> Optional[str]:
    """
    Backend URL for server-side calls made while serving `host`.

    Local development hosts always go through the site's own proxy routes, so they
    get None.
    """
    h = (host or "").strip().lower()
    if not h:
        return None
    if any(marker in h for marker in _LOCAL_HOST_MARKERS):
        return None
    return normalize_api_base_url(os.getenv("DIRECT_BACKEND_API_URL", ""))
