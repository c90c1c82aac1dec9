"""
Post-login callback flows.

Both flows run when the identity provider sends the browser back to us:

- public site: touch the session so Supabase persists it, then go to `/{locale}`
- admin console: validate the session against `/api/admin/me`, then either sign
  out and explain why, or resume at the page that sent the user to login

The flows are plain coroutines. Whoever hosts the page supplies the auth client,
the tab storage, a navigator and a CancellationToken; the token is checked after
every await and before any visible update.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional, Protocol

import requests

from soloforge.auth.cancel import CancellationToken
from soloforge.auth.config import AuthConfig, load_auth_config
from soloforge.auth.models import AllowlistResult, AuthorizationResult, CallbackState, CallbackView, parse_api_response
from soloforge.auth.redirect import POST_LOGIN_REDIRECT_KEY, consume_post_login_redirect
from soloforge.auth.storage import KeyValueStorage, discard_item, get_auth_storage_preference
from soloforge.site.routing import normalize_locale

logger = logging.getLogger(__name__)

Navigator = Callable[[str], None]

LOGIN_PATH = "/login"

MSG_FINISHING = "Completing sign-in..."
MSG_CHECKING = "Checking admin access..."
MSG_REDIRECTING = "Redirecting..."
MSG_NO_SESSION = "No login session detected. Please go back and sign in again."
MSG_SIGN_IN_FIRST = "Please sign in before opening the admin console."
MSG_NOT_AUTHORIZED = "You are not authorized to access the admin console."
MSG_NETWORK_ERROR = "Network error. Please try again later."
MSG_CANNOT_VERIFY = "Unable to verify email permissions."
MSG_EMAIL_NOT_ALLOWED = "This email is not authorized to access the admin console."


class AuthClient(Protocol):
    def get_access_token(self) -> Optional[str]: ...

    def sign_out(self) -> None: ...


class BrowserClients(Protocol):
    def storage(self, kind: str = "local") -> KeyValueStorage: ...

    def browser(self, kind: str = "local") -> AuthClient: ...


class AdminApiClient:
    """Calls the console's own `/api/admin/*` routes."""

    def __init__(self, base_url: str, *, timeout: float = 10.0, session: Optional[requests.Session] = None) -> None:
        self._base_url = (base_url or "").strip().rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    @property
    def me_url(self) -> str:
        return f"{self._base_url}/api/admin/me"

    def me(self, access_token: str) -> AuthorizationResult:
        """
        Ask the console who the token belongs to.

        Network failures propagate as `requests.RequestException`. Any HTTP response,
        including non-JSON bodies, becomes an AuthorizationResult.
        """
        r = self._session.get(
            self.me_url,
            headers={"Authorization": f"Bearer {access_token}", "Cache-Control": "no-store"},
            timeout=self._timeout,
        )
        try:
            payload = r.json()
        except ValueError:
            payload = None

        parsed = parse_api_response(payload)
        email = (parsed.data.email or "").strip() if parsed and parsed.data else ""
        if not r.ok or parsed is None or not parsed.success or not email:
            return AuthorizationResult(ok=False, message=(parsed.message if parsed else None) or None)
        return AuthorizationResult(ok=True, email=email)

    @property
    def allowlist_url(self) -> str:
        return f"{self._base_url}/api/admin/allowlist"

    def allowlist(self, email: str) -> AuthorizationResult:
        """
        Ask the console whether `email` may sign in, before Supabase is contacted.

        Network failures propagate as `requests.RequestException`.
        """
        r = self._session.post(
            self.allowlist_url,
            json={"email": email},
            headers={"Cache-Control": "no-store"},
            timeout=self._timeout,
        )
        try:
            payload = r.json()
        except ValueError:
            payload = None

        parsed = parse_api_response(payload, AllowlistResult)
        if not r.ok or parsed is None or not parsed.success or parsed.data is None:
            return AuthorizationResult(ok=False, message=(parsed.message if parsed else None) or MSG_CANNOT_VERIFY)
        if not parsed.data.allowed:
            return AuthorizationResult(ok=False, message=MSG_EMAIL_NOT_ALLOWED)
        return AuthorizationResult(ok=True, email=email)


async def finish_public_callback(
    clients: BrowserClients,
    locale: str,
    navigate: Navigator,
    cancel: CancellationToken,
) -> Optional[str]:
    """
    Public site callback: read the session once, then always land on the locale root.

    There is no authorization gate on the public site, so a failed session read is
    logged and the redirect still happens. Returns the path navigated to, or None if
    the page was torn down first.
    """
    target = f"/{normalize_locale(locale)}"
    try:
        kind = get_auth_storage_preference(clients.storage("local"))
        auth = clients.browser(kind)
        await asyncio.to_thread(auth.get_access_token)
    except Exception as e:
        logger.warning("Session read failed during public callback: %s", str(e))
    finally:
        if cancel.cancelled:
            target = None
        else:
            navigate(target)
    return target


class AdminAuthCallback:
    """
    Admin console callback page.

    States: awaiting_session -> checking_authorization -> denied | network_error |
    redirecting, with no_session / network_error reachable straight from
    awaiting_session. Every terminal state is final for this instance.
    """

    def __init__(
        self,
        auth: AuthClient,
        api: AdminApiClient,
        storage: KeyValueStorage,
        navigate: Navigator,
        *,
        on_update: Optional[Callable[[CallbackView], None]] = None,
    ) -> None:
        self._auth = auth
        self._api = api
        self._storage = storage
        self._navigate = navigate
        self._on_update = on_update
        self.view = CallbackView(state=CallbackState.awaiting_session, message=MSG_FINISHING)

    def _show(self, cancel: CancellationToken, state: CallbackState, message: str, redirect_to: Optional[str] = None) -> bool:
        if cancel.cancelled:
            return False
        self.view = CallbackView(state=state, message=message, redirect_to=redirect_to)
        if self._on_update is not None:
            self._on_update(self.view)
        return True

    async def run(self, cancel: CancellationToken) -> CallbackView:
        try:
            token = await asyncio.to_thread(self._auth.get_access_token)
            if not token:
                self._show(cancel, CallbackState.no_session, MSG_NO_SESSION)
                return self.view

            self._show(cancel, CallbackState.checking_authorization, MSG_CHECKING)
            result = await asyncio.to_thread(self._api.me, token)
            if not result.ok:
                # Session is revoked before the denial becomes visible.
                await asyncio.to_thread(self._auth.sign_out)
                self._show(cancel, CallbackState.denied, result.message or MSG_NOT_AUTHORIZED)
                return self.view

            target = consume_post_login_redirect(self._storage)
            if self._show(cancel, CallbackState.redirecting, MSG_REDIRECTING, redirect_to=target):
                self._navigate(target)
            return self.view
        except Exception as e:
            logger.warning("Admin auth callback failed: %s", str(e))
            self._show(cancel, CallbackState.network_error, MSG_NETWORK_ERROR)
            return self.view
        finally:
            discard_item(self._storage, POST_LOGIN_REDIRECT_KEY)


async def check_admin_access(
    auth: AuthClient,
    api: AdminApiClient,
    cancel: CancellationToken,
) -> Optional[AuthorizationResult]:
    """
    Console layout gate: the same session + `/me` check as the callback, without
    signing out. Returns None when cancelled before completion.
    """
    try:
        try:
            token = await asyncio.to_thread(auth.get_access_token)
        except Exception as e:
            logger.info("No readable session for console guard: %s", str(e))
            token = None
        if not token:
            result = AuthorizationResult(ok=False, message=MSG_SIGN_IN_FIRST)
        else:
            result = await asyncio.to_thread(api.me, token)
            if not result.ok:
                result = AuthorizationResult(ok=False, message=result.message or MSG_NOT_AUTHORIZED)
    except Exception as e:
        logger.warning("Admin access check failed: %s", str(e))
        result = AuthorizationResult(ok=False, message=MSG_NETWORK_ERROR)
    if cancel.cancelled:
        return None
    return result


def create_admin_callback(
    clients: BrowserClients,
    navigate: Navigator,
    *,
    cfg: Optional[AuthConfig] = None,
    on_update: Optional[Callable[[CallbackView], None]] = None,
) -> AdminAuthCallback:
    cfg = cfg or load_auth_config()
    kind = get_auth_storage_preference(clients.storage("local"))
    return AdminAuthCallback(
        clients.browser(kind),
        AdminApiClient(cfg.admin_app_url),
        clients.storage("session"),
        navigate,
        on_update=on_update,
    )


def complete_login_redirect(storage: KeyValueStorage, navigate: Navigator) -> str:
    """After a password login succeeds: consume the pending redirect and go there."""
    target = consume_post_login_redirect(storage)
    navigate(target)
    return target
