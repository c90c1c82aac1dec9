from __future__ import annotations

import pytest

from soloforge.site.config import SiteConfig
from soloforge.site.i18n import get_translations, translate
from soloforge.site.metadata import (
    PAGES,
    UnknownPageError,
    absolute_url,
    build_page_metadata,
    build_product_metadata,
    render_meta_tags,
)
from soloforge.site.routing import UnknownLocaleError

_CFG = SiteConfig(site_url="https://example.test", app_name="SoloForge", preview_image="/docs/imgs/image.jpg")


def test_home_title_is_app_name() -> None:
    meta = build_page_metadata("en", "home", cfg=_CFG)
    assert meta.title == "SoloForge"
    assert meta.description == "The Forge for Solo Makers' Products"
    assert meta.canonical == "/en"
    assert meta.languages == {"en": "/en", "zh": "/zh"}
    assert meta.images == ["/docs/imgs/image.jpg"]


def test_pricing_uses_pricing_copy() -> None:
    en = build_page_metadata("en", "pricing", cfg=_CFG)
    assert en.title == "Pricing - SoloForge"
    assert en.description == "Promote your product to makers and early adopters"


def test_about_is_an_article() -> None:
    assert build_page_metadata("en", "about", cfg=_CFG).og_type == "article"
    assert build_page_metadata("en", "terms", cfg=_CFG).og_type == "website"


def test_every_page_has_metadata_in_every_locale() -> None:
    for page in PAGES:
        for locale in ("en", "zh"):
            meta = build_page_metadata(locale, page, cfg=_CFG)
            assert meta.title
            # A missing translation would surface as the dotted key.
            assert "." not in meta.title.split(" - ")[0]


def test_unknown_locale_and_page() -> None:
    with pytest.raises(UnknownLocaleError):
        build_page_metadata("fr", "home", cfg=_CFG)
    with pytest.raises(UnknownPageError):
        build_page_metadata("en", "admin", cfg=_CFG)


def test_product_logo_must_be_on_known_host() -> None:
    product = {"name": "Forge", "slogan": "Build", "logo_url": "http://lh3.googleusercontent.com/logo.png"}
    meta = build_product_metadata("en", "forge", product, cfg=_CFG)
    assert meta.images == ["/docs/imgs/image.jpg"]

    product["logo_url"] = "https://lh3.googleusercontent.com/logo.png"
    meta = build_product_metadata("en", "forge", product, cfg=_CFG)
    assert meta.images == ["https://lh3.googleusercontent.com/logo.png"]


def test_product_without_slogan_uses_site_slogan() -> None:
    meta = build_product_metadata("zh", "forge", {"name": "Forge", "slogan": "  "}, cfg=_CFG)
    assert meta.title == "Forge - SoloForge"
    assert meta.description == "独立开发者的产品锻造坊"
    assert meta.canonical == "/zh/products/forge"


def test_meta_tags_are_escaped() -> None:
    product = {"name": 'A "B" <script>', "slogan": "x & y"}
    head = render_meta_tags(build_product_metadata("en", "ab", product, cfg=_CFG), _CFG.site_url)

    assert "<script>" not in head
    assert "<title>A &quot;B&quot; &lt;script&gt; - SoloForge</title>" in head
    assert '<meta name="description" content="x &amp; y">' in head
    assert '<link rel="alternate" hreflang="zh" href="https://example.test/zh/products/ab">' in head


def test_to_dict_shape() -> None:
    d = build_page_metadata("en", "leaderboard", cfg=_CFG).to_dict()
    assert d["openGraph"]["url"] == "/en/leaderboard"
    assert d["openGraph"]["images"] == [{"url": "/docs/imgs/image.jpg"}]
    assert d["twitter"]["card"] == "summary"


def test_absolute_url() -> None:
    assert absolute_url("https://example.test/", "/en") == "https://example.test/en"
    assert absolute_url("https://example.test", "https://cdn.test/x.png") == "https://cdn.test/x.png"


def test_translation_fallbacks() -> None:
    assert translate("zh", "nav", "products") == "产品"
    assert translate("fr", "nav", "products") == "Products"
    assert translate("en", "nav", "missing") == "nav.missing"
    assert get_translations("zh", "pricing")("title") == "定价"
