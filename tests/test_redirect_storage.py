from __future__ import annotations

import logging

import pytest

from soloforge.auth.redirect import (
    POST_LOGIN_REDIRECT_KEY,
    consume_post_login_redirect,
    peek_post_login_redirect,
    sanitize_next_path,
)
from soloforge.auth.storage import (
    AUTH_STORAGE_PREFERENCE_KEY,
    MemoryStorage,
    discard_item,
    get_auth_storage_preference,
    read_item,
    set_auth_storage_preference,
    write_item,
)


class _BrokenStorage:
    def get_item(self, key: str):
        raise RuntimeError("quota exceeded")

    def set_item(self, key: str, value: str) -> None:
        raise RuntimeError("quota exceeded")

    def remove_item(self, key: str) -> None:
        raise RuntimeError("quota exceeded")


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("/products", "/products"),
        ("/en/dashboard?tab=2#top", "/en/dashboard?tab=2#top"),
        ("  /pricing  ", "/pricing"),
        (None, "/"),
        ("", "/"),
        ("products", "/"),
        ("https://evil.example", "/"),
        ("//evil.example", "/"),
        ("/\\evil.example", "/"),
        ("/a\r\nSet-Cookie: x=1", "/aSet-Cookie: x=1"),
    ],
)
def test_sanitize_next_path(raw, expected: str) -> None:
    assert sanitize_next_path(raw) == expected


def test_consume_removes_key_and_logs_rejected_value(caplog: pytest.LogCaptureFixture) -> None:
    storage = MemoryStorage({POST_LOGIN_REDIRECT_KEY: "https://evil.example"})
    with caplog.at_level(logging.INFO, logger="soloforge.auth.redirect"):
        assert consume_post_login_redirect(storage) == "/"
    assert POST_LOGIN_REDIRECT_KEY not in storage
    assert "untrusted post-login redirect" in caplog.text


def test_peek_keeps_key() -> None:
    storage = MemoryStorage({POST_LOGIN_REDIRECT_KEY: "/about"})
    assert peek_post_login_redirect(storage) == "/about"
    assert storage.get_item(POST_LOGIN_REDIRECT_KEY) == "/about"


def test_storage_failures_are_contained() -> None:
    broken = _BrokenStorage()
    assert read_item(broken, "k") is None
    assert write_item(broken, "k", "v") is False
    assert discard_item(broken, "k") is False
    assert consume_post_login_redirect(broken) == "/"


def test_storage_preference() -> None:
    storage = MemoryStorage()
    assert get_auth_storage_preference(storage) == "local"

    set_auth_storage_preference(storage, "session")
    assert storage.get_item(AUTH_STORAGE_PREFERENCE_KEY) == "session"
    assert get_auth_storage_preference(storage) == "session"

    storage.set_item(AUTH_STORAGE_PREFERENCE_KEY, "cookie")
    assert get_auth_storage_preference(storage) == "local"
    assert get_auth_storage_preference(_BrokenStorage()) == "local"
