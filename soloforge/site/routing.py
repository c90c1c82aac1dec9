from __future__ import annotations

from typing import List, Optional, Tuple

LOCALES: Tuple[str, ...] = ("en", "zh")
DEFAULT_LOCALE = "en"

# Every public pathname, locale-prefixed at runtime (`/en/products`, `/zh/products`).
# Bracketed segments are dynamic and never listed in the sitemap.
PATHNAMES: Tuple[str, ...] = (
    "/",
    "/products",
    "/products/[slug]",
    "/leaderboard",
    "/pricing",
    "/developer",
    "/developer/products/[id]",
    "/makers/[email]",
    "/profile",
    "/submit",
    "/about",
    "/feedback",
)


class UnknownLocaleError(ValueError):
    pass


def is_locale(value: Optional[str]) -> bool:
    return (value or "") in LOCALES


def normalize_locale(value: Optional[str]) -> str:
    """Known locales pass through; anything else maps to the default locale."""
    v = (value or "").strip().lower()
    return v if v in LOCALES else DEFAULT_LOCALE


def require_locale(value: Optional[str]) -> str:
    if not is_locale(value):
        raise UnknownLocaleError(f"Unknown locale: {value!r}")
    return str(value)


def static_pathnames() -> List[str]:
    return [p for p in PATHNAMES if "[" not in p]


def localized_path(locale: str, pathname: str) -> str:
    suffix = "" if pathname in ("", "/") else pathname
    return f"/{locale}{suffix}"


def alternate_paths(pathname: str) -> dict[str, str]:
    return {loc: localized_path(loc, pathname) for loc in LOCALES}
