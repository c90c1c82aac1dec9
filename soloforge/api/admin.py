"""
Admin console API.

Routes the console's browser code calls with a Supabase access token:
- GET  /api/admin/me         who am I (allowlisted admins only)
- POST /api/admin/allowlist  may this email try to log in at all
- GET  /api/admin/runtime-config  public URLs for the console bundle
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from soloforge.api.server import install_request_logging, run_app
from soloforge.auth import errors
from soloforge.auth.admin import is_email_allowed, require_admin
from soloforge.auth.config import load_auth_config
from soloforge.auth.errors import AdminAuthError, SupabaseConfigError
from soloforge.auth.models import AdminIdentity, AllowlistResult
from soloforge.auth.supabase import SupabaseAuth, SupabaseClients

logger = logging.getLogger(__name__)


def _envelope(status_code: int, *, success: bool, data: Any = None, message: Optional[str] = None) -> JSONResponse:
    content: Dict[str, Any] = {"success": success}
    if data is not None:
        content["data"] = data
    if message is not None:
        content["message"] = message
    resp = JSONResponse(status_code=status_code, content=content)
    resp.headers["Cache-Control"] = "no-store"
    return resp


def create_app(clients: Optional[SupabaseClients] = None) -> FastAPI:
    """
    Composition root for the console API.

    `clients` is built from the environment on first use when not supplied, and
    owned by the returned app (`app.state.supabase`).
    """
    app = FastAPI(title="SoloForge admin console API")
    app.state.supabase = clients
    install_request_logging(app)

    def server_auth(request: Request) -> SupabaseAuth:
        if request.app.state.supabase is None:
            request.app.state.supabase = SupabaseClients(load_auth_config())
        return request.app.state.supabase.server()

    @app.get("/healthz")
    def healthz() -> Dict[str, Any]:
        return {"ok": True}

    @app.get("/api/admin/me")
    async def admin_me(request: Request) -> JSONResponse:
        cfg = load_auth_config()
        try:
            user = await asyncio.to_thread(require_admin, request.headers, lambda: server_auth(request), cfg)
        except AdminAuthError as e:
            return _envelope(e.status_code, success=False, message=e.message)
        except SupabaseConfigError as e:
            logger.error("Admin check impossible: %s", str(e))
            return _envelope(401, success=False, message=str(e))
        except Exception as e:
            # Provider failures (bad SUPABASE_URL, unreachable auth server) still answer with an envelope.
            logger.warning("Admin check failed: %s", str(e))
            return _envelope(401, success=False, message=str(e) or errors.INVALID_SESSION)
        return _envelope(200, success=True, data=AdminIdentity(email=user.email).model_dump())

    @app.post("/api/admin/allowlist")
    async def admin_allowlist(request: Request) -> JSONResponse:
        try:
            body = await request.json()
        except ValueError:
            body = None
        email = body.get("email") if isinstance(body, dict) else None
        allowed = is_email_allowed(load_auth_config(), str(email) if email is not None else None)
        return _envelope(200, success=True, data=AllowlistResult(allowed=allowed).model_dump())

    @app.get("/api/admin/runtime-config")
    def admin_runtime_config() -> Dict[str, Any]:
        """Public URLs the console needs in the browser: its own origin and the link back to the site."""
        cfg = load_auth_config()
        return {"ok": True, "adminAppUrl": cfg.admin_app_url, "publicAppUrl": cfg.public_app_url}

    return app


app = create_app()


def run(host: str = "0.0.0.0", port: int = 3001) -> None:
    run_app(app, name="admin console API", host=host, port=port)
