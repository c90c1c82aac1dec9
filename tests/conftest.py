"""
Pytest config.

Tests import the local `soloforge/` package straight from the repo root, whether or
not the project has been installed; pin the repo root on sys.path so a global
`pytest` entrypoint behaves the same.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def _ensure_repo_root_on_syspath() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    repo_root_str = str(repo_root)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


_ensure_repo_root_on_syspath()

_CONFIG_ENV_VARS = (
    "SUPABASE_URL",
    "NEXT_PUBLIC_SUPABASE_URL",
    "SUPABASE_ANON_KEY",
    "NEXT_PUBLIC_SUPABASE_ANON_KEY",
    "SUPABASE_PUBLISHABLE_KEY",
    "NEXT_PUBLIC_SUPABASE_PUBLISHABLE_KEY",
    "ADMIN_EMAILS",
    "ADMIN_APP_URL",
    "NEXT_PUBLIC_ADMIN_APP_URL",
    "PUBLIC_APP_URL",
    "NEXT_PUBLIC_PUBLIC_APP_URL",
    "SITE_URL",
    "NEXT_PUBLIC_SITE_URL",
    "VERCEL_URL",
    "APP_ENV",
    "NODE_ENV",
    "DIRECT_BACKEND_API_URL",
    "NEXT_PUBLIC_DIRECT_BACKEND_API_URL",
    "BACKEND_API_URL",
)


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch):
    """
    Config loaders are lru_cached and read the process environment.

    Start every test from an empty SoloForge environment and fresh caches, and clear
    the caches again afterwards so env set by one test never leaks into the next.
    """
    from soloforge.auth.config import load_auth_config
    from soloforge.site.config import load_site_config

    for name in _CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    load_auth_config.cache_clear()
    load_site_config.cache_clear()
    yield
    load_auth_config.cache_clear()
    load_site_config.cache_clear()
