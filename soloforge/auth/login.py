"""
Admin console login page actions.

Both actions ask the console's allowlist route first, so addresses that can never
get in are turned away before Supabase is contacted. Password login then resumes
at the page that sent the user to login; the magic-link action only reports that
the email went out, and the callback page finishes the sign-in.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from soloforge.auth.callback import MSG_NETWORK_ERROR, AdminApiClient, Navigator, complete_login_redirect
from soloforge.auth.config import AuthConfig, load_auth_config
from soloforge.auth.storage import KeyValueStorage, read_item, write_item

logger = logging.getLogger(__name__)

# Persistent key prefilling the login form with the last address that signed in.
LOGIN_EMAIL_KEY = "sf_admin_login_email"

MSG_ENTER_EMAIL = "Please enter your email."
MSG_ENTER_PASSWORD = "Please enter your password."
MSG_LOGIN_FAILED = "Login failed."
MSG_SEND_FAILED = "Failed to send login email."
MSG_LINK_SENT = "Login link sent. Check your inbox and click the link to finish signing in."


class LoginAuth(Protocol):
    def sign_in_with_password(self, email: str, password: str) -> Optional[str]: ...

    def sign_in_with_otp(self, email: str, redirect_to: str) -> Optional[str]: ...


@dataclass(frozen=True)
class LoginOutcome:
    """What the login form shows after an action: an error, a notice, or a redirect."""

    ok: bool
    message: Optional[str] = None
    redirect_to: Optional[str] = None


def remembered_login_email(storage: KeyValueStorage) -> str:
    return (read_item(storage, LOGIN_EMAIL_KEY) or "").strip()


def magic_link_redirect_url(cfg: AuthConfig) -> str:
    return f"{cfg.admin_app_url}/auth/callback"


async def login_with_password(
    auth: LoginAuth,
    api: AdminApiClient,
    email: str,
    password: str,
    *,
    session_storage: KeyValueStorage,
    local_storage: KeyValueStorage,
    navigate: Navigator,
) -> LoginOutcome:
    """
    Allowlist check, password sign-in, then resume at the pending redirect.

    `session_storage` holds the pending redirect; `local_storage` remembers the email.
    """
    email = (email or "").strip()
    if not email:
        return LoginOutcome(ok=False, message=MSG_ENTER_EMAIL)
    if not password:
        return LoginOutcome(ok=False, message=MSG_ENTER_PASSWORD)

    try:
        allowed = await asyncio.to_thread(api.allowlist, email)
        if not allowed.ok:
            return LoginOutcome(ok=False, message=allowed.message)

        error = await asyncio.to_thread(auth.sign_in_with_password, email, password)
        if error is not None:
            logger.info("Password login rejected for %s", email)
            return LoginOutcome(ok=False, message=error or MSG_LOGIN_FAILED)
    except Exception as e:
        logger.warning("Password login failed: %s", str(e))
        return LoginOutcome(ok=False, message=MSG_NETWORK_ERROR)

    write_item(local_storage, LOGIN_EMAIL_KEY, email)
    target = complete_login_redirect(session_storage, navigate)
    return LoginOutcome(ok=True, redirect_to=target)


async def send_magic_link(
    auth: LoginAuth,
    api: AdminApiClient,
    email: str,
    *,
    cfg: Optional[AuthConfig] = None,
) -> LoginOutcome:
    """Allowlist check, then email a sign-in link that lands on the console's callback page."""
    email = (email or "").strip()
    if not email:
        return LoginOutcome(ok=False, message=MSG_ENTER_EMAIL)
    cfg = cfg or load_auth_config()

    try:
        allowed = await asyncio.to_thread(api.allowlist, email)
        if not allowed.ok:
            return LoginOutcome(ok=False, message=allowed.message)

        error = await asyncio.to_thread(auth.sign_in_with_otp, email, magic_link_redirect_url(cfg))
    except Exception as e:
        logger.warning("Magic link request failed: %s", str(e))
        return LoginOutcome(ok=False, message=MSG_NETWORK_ERROR)
    if error is not None:
        return LoginOutcome(ok=False, message=error or MSG_SEND_FAILED)
    return LoginOutcome(ok=True, message=MSG_LINK_SENT)
