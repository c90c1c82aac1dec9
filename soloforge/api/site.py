"""
Public site server: crawler files and per-page SEO metadata.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import PlainTextResponse, Response

from soloforge.api.server import install_request_logging, run_app
from soloforge.site.backend import fetch_product
from soloforge.site.config import load_site_config
from soloforge.site.metadata import (
    PageMetadata,
    UnknownPageError,
    build_page_metadata,
    build_product_metadata,
    render_meta_tags,
    root_metadata,
)
from soloforge.site.routing import LOCALES, UnknownLocaleError, require_locale
from soloforge.site.seo import render_robots, render_sitemap, sitemap_entries
from soloforge.utils.urls import get_public_direct_backend_api_url

logger = logging.getLogger(__name__)

app = FastAPI(title="SoloForge public site")
install_request_logging(app)


def _metadata_payload(meta: PageMetadata) -> Dict[str, Any]:
    base = load_site_config().site_url
    return {"ok": True, "metadata": meta.to_dict(), "head": render_meta_tags(meta, base)}


@app.get("/healthz")
def healthz() -> Dict[str, Any]:
    return {"ok": True}


@app.get("/robots.txt", response_class=PlainTextResponse)
def robots_txt() -> str:
    return render_robots(load_site_config().site_url)


@app.get("/sitemap.xml")
def sitemap_xml() -> Response:
    body = render_sitemap(sitemap_entries(load_site_config().site_url))
    return Response(content=body, media_type="application/xml")


@app.get("/api/metadata")
def metadata_root() -> Dict[str, Any]:
    return {"ok": True, "metadata": root_metadata(), "locales": list(LOCALES)}


@app.get("/api/metadata/{locale}/products/{slug}")
async def metadata_product(request: Request, locale: str, slug: str) -> Dict[str, Any]:
    try:
        loc = require_locale(locale)
    except UnknownLocaleError:
        raise HTTPException(status_code=404, detail="Unknown locale")
    product = await asyncio.to_thread(fetch_product, slug, loc, host=request.headers.get("host"))
    if product is None:
        logger.info("No product data for %s, using generic metadata", slug)
    return _metadata_payload(build_product_metadata(loc, slug, product))


@app.get("/api/metadata/{locale}/{page}")
def metadata_page(locale: str, page: str) -> Dict[str, Any]:
    try:
        meta = build_page_metadata(locale, page)
    except UnknownLocaleError:
        raise HTTPException(status_code=404, detail="Unknown locale")
    except UnknownPageError:
        raise HTTPException(status_code=404, detail="Unknown page")
    return _metadata_payload(meta)


@app.get("/api/runtime-config")
def runtime_config() -> Dict[str, Any]:
    """Public values the browser bundle needs at runtime; returns no secrets."""
    return {"ok": True, "directBackendApiUrl": get_public_direct_backend_api_url()}


def run(host: str = "0.0.0.0", port: int = 3000) -> None:
    run_app(app, name="public site", host=host, port=port)
