from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests

from soloforge.utils.urls import get_direct_backend_api_url, normalize_api_base_url

logger = logging.getLogger(__name__)

DEFAULT_BACKEND_API_URL = "http://localhost:8080/api"


def backend_api_url(host: Optional[str] = None) -> str:
    """
    Base URL for the separate product API.

    Public deployments talk to DIRECT_BACKEND_API_URL; everything else (and local
    hosts) uses BACKEND_API_URL, defaulting to the local dev backend.
    """
    direct = get_direct_backend_api_url(host)
    if direct:
        return direct
    return normalize_api_base_url(os.getenv("BACKEND_API_URL", "")) or DEFAULT_BACKEND_API_URL


def fetch_product(slug: str, locale: str, *, host: Optional[str] = None, timeout: float = 10.0) -> Optional[Dict[str, Any]]:
    """
    Fetch one product for metadata purposes.

    Returns None (after logging) on any transport error, non-2xx status or
    unexpected body; metadata then falls back to generic values.
    """
    url = f"{backend_api_url(host)}/products/{quote(slug, safe='')}"
    try:
        r = requests.get(url, headers={"Accept-Language": locale}, timeout=timeout)
    except requests.RequestException as e:
        logger.warning("Product fetch failed for %s: %s", slug, str(e))
        return None
    if not r.ok:
        logger.info("Product fetch for %s returned status=%d", slug, r.status_code)
        return None
    try:
        body = r.json()
    except ValueError:
        logger.warning("Product fetch for %s returned non-JSON body", slug)
        return None
    data = body.get("data") if isinstance(body, dict) else None
    return data if isinstance(data, dict) else None
