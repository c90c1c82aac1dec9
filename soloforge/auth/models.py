from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Generic, Optional, Type, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope used by every admin console API route."""

    success: bool = False
    data: Optional[T] = None
    message: Optional[str] = None


class AdminIdentity(BaseModel):
    email: Optional[str] = None


class AllowlistResult(BaseModel):
    allowed: bool


@dataclass(frozen=True)
class AdminUser:
    """Admin resolved from a Supabase access token (server side)."""

    email: str
    user_id: str


@dataclass(frozen=True)
class AuthorizationResult:
    """Outcome of one `/api/admin/me` call; never persisted."""

    ok: bool
    email: Optional[str] = None
    message: Optional[str] = None


class CallbackState(str, enum.Enum):
    awaiting_session = "awaiting_session"
    checking_authorization = "checking_authorization"
    no_session = "no_session"
    denied = "denied"
    network_error = "network_error"
    redirecting = "redirecting"

    @property
    def terminal(self) -> bool:
        return self in (
            CallbackState.no_session,
            CallbackState.denied,
            CallbackState.network_error,
            CallbackState.redirecting,
        )


@dataclass(frozen=True)
class CallbackView:
    """What the callback page shows: a state, a message, and where it navigated (if anywhere)."""

    state: CallbackState
    message: str
    redirect_to: Optional[str] = None


M = TypeVar("M", bound=BaseModel)


def parse_api_response(payload: Any, model: Type[M] = AdminIdentity) -> Optional[ApiResponse[M]]:  # type: ignore[assignment]
    """
    Parse an admin API body into `ApiResponse[model]`.

    Anything that is not a JSON object yields None. An object whose `data` does not
    fit `model` is read as a failure that still carries the server's `message`.
    """
    if not isinstance(payload, dict):
        return None
    try:
        return ApiResponse[model].model_validate(payload)  # type: ignore[valid-type]
    except ValueError:
        message = payload.get("message")
        return ApiResponse[model](success=False, message=message if isinstance(message, str) else None)  # type: ignore[valid-type]
