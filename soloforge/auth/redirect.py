from __future__ import annotations

import logging
from typing import Optional

from soloforge.auth.storage import KeyValueStorage, discard_item, read_item, write_item

logger = logging.getLogger(__name__)

# Ephemeral (tab-scoped) storage key: written by the console guard, consumed by the callback.
POST_LOGIN_REDIRECT_KEY = "sf_admin_post_login_redirect"


def sanitize_next_path(next_path: Optional[str]) -> str:
    """
    Prevent open-redirects: allow only relative paths like `/products`.
    """
    p = (next_path or "").strip()
    if not p:
        return "/"
    if not p.startswith("/"):
        return "/"
    # Disallow scheme-relative: `//evil.com`, and the backslash variant browsers normalise.
    if p.startswith("//") or p.startswith("/\\"):
        return "/"
    p = p.replace("\r", "").replace("\n", "")
    return p or "/"


def remember_post_login_redirect(storage: KeyValueStorage, pathname: Optional[str]) -> None:
    """Record where to come back to before sending the user to `/login`."""
    write_item(storage, POST_LOGIN_REDIRECT_KEY, (pathname or "").strip() or "/")


def peek_post_login_redirect(storage: KeyValueStorage) -> str:
    return sanitize_next_path(read_item(storage, POST_LOGIN_REDIRECT_KEY))


def consume_post_login_redirect(storage: KeyValueStorage) -> str:
    """
    Read the pending redirect, delete it, and return a safe path.

    The key is removed even when the stored value is rejected.
    """
    raw = read_item(storage, POST_LOGIN_REDIRECT_KEY)
    target = sanitize_next_path(raw)
    if raw is not None and target == "/" and raw.strip() not in ("", "/"):
        logger.info("Ignoring untrusted post-login redirect %r", raw[:200])
    discard_item(storage, POST_LOGIN_REDIRECT_KEY)
    return target
