from __future__ import annotations

import logging
import re
from typing import Callable, List, Mapping, Optional

from soloforge.auth import errors
from soloforge.auth.config import AuthConfig
from soloforge.auth.errors import AdminAuthError
from soloforge.auth.models import AdminUser
from soloforge.auth.supabase import SupabaseAuth

logger = logging.getLogger(__name__)

_BEARER_RE = re.compile(r"^Bearer\s+(.+)$", re.IGNORECASE)


def get_bearer_token(headers: Mapping[str, str]) -> Optional[str]:
    raw = headers.get("authorization") or headers.get("Authorization") or ""
    m = _BEARER_RE.match(raw)
    if not m:
        return None
    token = m.group(1).strip()
    return token or None


def get_admin_email_allowlist(cfg: AuthConfig) -> List[str]:
    return list(cfg.admin_emails)


def is_email_allowed(cfg: AuthConfig, email: Optional[str]) -> bool:
    """Allowlist check used by the login page before it contacts Supabase."""
    normalized = (email or "").strip().lower()
    allowlist = get_admin_email_allowlist(cfg)
    return bool(normalized) and len(allowlist) > 0 and normalized in allowlist


def require_user(headers: Mapping[str, str], get_auth: Callable[[], SupabaseAuth]) -> AdminUser:
    """
    Resolve the Supabase user behind the request's bearer token.

    `get_auth` is only called once a token is present, so a request without one
    never needs Supabase configuration.

    Raises:
        AdminAuthError: token missing, rejected by Supabase, or user has no email
        SupabaseConfigError: Supabase URL/key not configured
    """
    token = get_bearer_token(headers)
    if not token:
        raise AdminAuthError(errors.MISSING_BEARER)

    auth = get_auth()
    try:
        user = auth.get_user(token)
    except Exception as e:
        # supabase-py raises for expired/forged tokens; all of them read as an invalid session.
        logger.info("Supabase rejected access token: %s", str(e))
        raise AdminAuthError(errors.INVALID_SESSION) from e
    if user is None:
        raise AdminAuthError(errors.INVALID_SESSION)

    email = str(getattr(user, "email", "") or "").strip().lower()
    if not email:
        raise AdminAuthError(errors.INVALID_SESSION)

    return AdminUser(email=email, user_id=str(getattr(user, "id", "") or ""))


def require_admin(headers: Mapping[str, str], get_auth: Callable[[], SupabaseAuth], cfg: AuthConfig) -> AdminUser:
    """
    Resolve the request's user and check it against ADMIN_EMAILS.

    An empty allowlist is rejected before the token is even looked at.
    """
    allowlist = get_admin_email_allowlist(cfg)
    if not allowlist:
        raise AdminAuthError(errors.ALLOWLIST_NOT_CONFIGURED)

    user = require_user(headers, get_auth)
    if user.email not in allowlist:
        logger.info("Admin access denied for %s", user.email)
        raise AdminAuthError(errors.FORBIDDEN, status_code=403)
    return user
