from __future__ import annotations

import pytest

from soloforge.utils.text import plain_text_from_markdown
from soloforge.utils.urls import (
    get_direct_backend_api_url,
    get_public_direct_backend_api_url,
    is_known_remote_image_url,
    normalize_api_base_url,
)


@pytest.mark.parametrize(
    "md,expected",
    [
        ("**Fast** and _simple_ [docs](https://x.example) `cli`", "Fast and simple docs cli"),
        ("# Title\n> quote\n- item one\n2. item two", "Title quote item one item two"),
        ("<b>Bold</b> ~~old~~ new", "Bold old new"),
        ("line one\r\n\r\n   line two  ", "line one line two"),
        ("__strong__ *em*", "strong em"),
        ("**not closed", "**not closed"),
    ],
)
def test_plain_text_from_markdown(md: str, expected: str) -> None:
    assert plain_text_from_markdown(md) == expected


@pytest.mark.parametrize("value", [None, "", "   \n\t"])
def test_plain_text_from_blank(value) -> None:
    assert plain_text_from_markdown(value) == ""


def test_plain_text_is_stable_on_its_own_output() -> None:
    once = plain_text_from_markdown("## **Ship** [faster](https://x.example)\n\n* with `tools`")
    assert once == "Ship faster with tools"
    assert plain_text_from_markdown(once) == once


@pytest.mark.parametrize(
    "md,expected",
    [
        ("- - x", "x"),
        ("# # Title", "Title"),
        ("1. 2. step", "step"),
        ("[[a](b)](c)", "a"),
        ("> > quoted", "quoted"),
        ("***bold italic***", "bold italic"),
        ("~~**gone**~~ kept", "gone kept"),
    ],
)
def test_nested_markers_are_fully_unwrapped(md: str, expected: str) -> None:
    assert plain_text_from_markdown(md) == expected


@pytest.mark.parametrize(
    "md",
    [
        "- - x",
        "# # Title",
        "1. 2. step",
        "[[a](b)](c)",
        "> > quoted",
        "<em>**x**</em> and _*mixed*_",
        "* * [link](https://x.example) `code`",
        "<<b>>x",
        "> - 1. **deep** _list_",
        "**not closed",
    ],
)
def test_reducing_twice_equals_reducing_once(md: str) -> None:
    once = plain_text_from_markdown(md)
    assert plain_text_from_markdown(once) == once


@pytest.mark.parametrize(
    "url,allowed",
    [
        ("https://lh3.googleusercontent.com/a/photo.jpg", True),
        ("https://avatars.githubusercontent.com/u/1?v=4", True),
        ("https://API.DiceBear.com/7.x/shapes/svg", True),
        ("https://abcd.supabase.co/storage/v1/object/public/logo.png", True),
        ("http://avatars.githubusercontent.com/u/1", False),
        ("https://supabase.co.evil.example/x.png", False),
        ("https://evilsupabase.co/x.png", False),
        ("https://images.example.com/x.png", False),
        ("not a url", False),
        ("https://[::1", False),
        ("", False),
        (None, False),
    ],
)
def test_is_known_remote_image_url(url, allowed: bool) -> None:
    assert is_known_remote_image_url(url) is allowed


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("https://api.example.com/", "https://api.example.com/api"),
        ("https://api.example.com/api/", "https://api.example.com/api"),
        ("  http://backend:8080  ", "http://backend:8080/api"),
        ("/", None),
        ("   ", None),
        (None, None),
    ],
)
def test_normalize_api_base_url(raw, expected) -> None:
    assert normalize_api_base_url(raw) == expected


def test_direct_backend_url_skips_local_hosts(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DIRECT_BACKEND_API_URL", "https://api.soloforge.dev")

    assert get_direct_backend_api_url("soloforge.dev") == "https://api.soloforge.dev/api"
    assert get_direct_backend_api_url("localhost:3000") is None
    assert get_direct_backend_api_url("127.0.0.1:3000") is None
    assert get_direct_backend_api_url("") is None
    assert get_direct_backend_api_url(None) is None


def test_direct_backend_url_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    assert get_direct_backend_api_url("soloforge.dev") is None


def test_public_direct_backend_url_prefers_public_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DIRECT_BACKEND_API_URL", "https://internal.example")
    assert get_public_direct_backend_api_url() == "https://internal.example/api"

    monkeypatch.setenv("NEXT_PUBLIC_DIRECT_BACKEND_API_URL", "https://public.example/api")
    assert get_public_direct_backend_api_url() == "https://public.example/api"
