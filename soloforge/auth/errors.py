from __future__ import annotations


class SupabaseConfigError(RuntimeError):
    """Supabase URL or key is missing; raised when a client is constructed."""


class AdminAuthError(Exception):
    """
    Admin authorization failed on the server side.

    `message` is returned to the console verbatim, so keep it free of secrets.
    """

    def __init__(self, message: str, *, status_code: int = 401) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


FORBIDDEN = "Forbidden"
INVALID_SESSION = "Invalid session"
MISSING_BEARER = "Missing Authorization bearer token"
ALLOWLIST_NOT_CONFIGURED = "ADMIN_EMAILS is not configured"
