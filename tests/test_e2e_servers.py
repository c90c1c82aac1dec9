"""E2E tests against running site and admin servers.

These tests require both servers (`python main.py --serve-site` and
`python main.py --serve-admin`) and are executed in CI or manually.
Run with: pytest -m e2e
"""

import os
import time
from typing import Generator

import pytest
import requests

SITE_URL = os.getenv("E2E_SITE_URL", "http://localhost:3000")
ADMIN_URL = os.getenv("E2E_ADMIN_URL", "http://localhost:3001")

pytestmark = pytest.mark.e2e


@pytest.fixture(scope="module")
def wait_for_servers() -> Generator[None, None, None]:
    """Wait for both servers to be ready."""
    for base in (SITE_URL, ADMIN_URL):
        max_retries = 30
        for i in range(max_retries):
            try:
                r = requests.get(f"{base}/healthz", timeout=2)
                if r.status_code == 200:
                    break
            except requests.RequestException:
                if i == max_retries - 1:
                    raise Exception(f"Server at {base} failed to start within 30 seconds")
                time.sleep(1)
    yield


def test_robots_and_sitemap(wait_for_servers):
    r = requests.get(f"{SITE_URL}/robots.txt", timeout=10)
    assert r.status_code == 200
    assert "Disallow: /admin" in r.text

    r = requests.get(f"{SITE_URL}/sitemap.xml", timeout=10)
    assert r.status_code == 200
    assert "<urlset" in r.text


def test_admin_me_requires_token(wait_for_servers):
    """Without a bearer token the console API never answers 200."""
    r = requests.get(f"{ADMIN_URL}/api/admin/me", timeout=10)
    assert r.status_code == 401
    assert r.json()["success"] is False
    assert r.headers.get("Cache-Control") == "no-store"


def test_admin_me_rejects_garbage_token(wait_for_servers):
    r = requests.get(f"{ADMIN_URL}/api/admin/me", headers={"Authorization": "Bearer not-a-jwt"}, timeout=10)
    assert r.status_code == 401


def test_allowlist_rejects_unknown_email(wait_for_servers):
    r = requests.post(f"{ADMIN_URL}/api/admin/allowlist", json={"email": "nobody@invalid.example"}, timeout=10)
    assert r.status_code == 200
    assert r.json() == {"success": True, "data": {"allowed": False}}
