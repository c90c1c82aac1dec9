from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from supabase import AuthError, Client, ClientOptions, create_client

from soloforge.auth.config import AuthConfig, require_supabase_credentials
from soloforge.auth.storage import KeyValueStorage, MemoryStorage, StorageKind

logger = logging.getLogger(__name__)


class SupabaseAuth:
    """
    The slice of the Supabase auth API this project uses.

    Flows depend on this wrapper rather than on a supabase-py `Client`, so tests can
    hand them any object with the same methods.
    """

    def __init__(self, client: Client) -> None:
        self._client = client

    def get_access_token(self) -> Optional[str]:
        """Current session's access token, or None when signed out."""
        session = self._client.auth.get_session()
        if session is None:
            return None
        token = str(getattr(session, "access_token", "") or "").strip()
        return token or None

    def sign_out(self) -> None:
        # Local scope: drop this client's session without revoking other devices.
        self._client.auth.sign_out({"scope": "local"})

    def get_user(self, access_token: str) -> Optional[Any]:
        resp = self._client.auth.get_user(access_token)
        if resp is None:
            return None
        return getattr(resp, "user", None)

    def sign_in_with_password(self, email: str, password: str) -> Optional[str]:
        """Password sign-in. Returns None on success, otherwise the provider's message (possibly empty)."""
        try:
            resp = self._client.auth.sign_in_with_password({"email": email, "password": password})
        except AuthError as e:
            return str(e)
        if resp is None or getattr(resp, "session", None) is None:
            return ""
        return None

    def sign_in_with_otp(self, email: str, redirect_to: str) -> Optional[str]:
        """Send a magic link that lands on `redirect_to`. Returns the rejection message, or None."""
        try:
            self._client.auth.sign_in_with_otp({"email": email, "options": {"email_redirect_to": redirect_to}})
        except AuthError as e:
            return str(e)
        return None


class SupabaseClients:
    """
    Builds and caches Supabase clients.

    One instance is created by the application's composition root and passed to
    whatever needs a client. Browser-style clients persist their session in the
    matching storage (`local` survives restarts, `session` is tab-scoped); the server
    client never persists anything and only validates tokens.
    """

    def __init__(
        self,
        cfg: AuthConfig,
        *,
        storages: Optional[Dict[StorageKind, KeyValueStorage]] = None,
        client_factory: Callable[..., Client] = create_client,
    ) -> None:
        # Fail fast: constructing the factory without credentials is a deployment error.
        self._url, self._key = require_supabase_credentials(cfg)
        self._storages: Dict[StorageKind, KeyValueStorage] = dict(storages or {})
        self._client_factory = client_factory
        self._browser: Dict[StorageKind, SupabaseAuth] = {}
        self._server: Optional[SupabaseAuth] = None

    def storage(self, kind: StorageKind = "local") -> KeyValueStorage:
        if kind not in self._storages:
            self._storages[kind] = MemoryStorage()
        return self._storages[kind]

    def browser(self, kind: StorageKind = "local") -> SupabaseAuth:
        cached = self._browser.get(kind)
        if cached is not None:
            return cached
        options = ClientOptions(
            persist_session=True,
            auto_refresh_token=True,
            storage=self.storage(kind),  # type: ignore[arg-type]
        )
        client = SupabaseAuth(self._client_factory(self._url, self._key, options=options))
        self._browser[kind] = client
        logger.debug("Created Supabase client (storage=%s)", kind)
        return client

    def server(self) -> SupabaseAuth:
        if self._server is None:
            options = ClientOptions(persist_session=False, auto_refresh_token=False)
            self._server = SupabaseAuth(self._client_factory(self._url, self._key, options=options))
        return self._server
