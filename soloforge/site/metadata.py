from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from soloforge.site.config import SiteConfig, load_site_config
from soloforge.site.i18n import get_translations
from soloforge.site.routing import DEFAULT_LOCALE, alternate_paths, localized_path, require_locale
from soloforge.utils.text import plain_text_from_markdown
from soloforge.utils.urls import is_known_remote_image_url


class UnknownPageError(KeyError):
    pass


@dataclass(frozen=True)
class PageMetadata:
    title: str
    description: str
    canonical: str  # Locale-prefixed path, e.g. /en/pricing
    languages: Dict[str, str]
    og_type: str = "website"
    images: List[str] = field(default_factory=list)
    twitter_card: str = "summary"

    def to_dict(self) -> Dict[str, Any]:
        """Same shape the page templates consume: alternates / openGraph / twitter blocks."""
        return {
            "title": self.title,
            "description": self.description,
            "alternates": {
                "canonical": self.canonical,
                "languages": dict(self.languages),
            },
            "openGraph": {
                "type": self.og_type,
                "title": self.title,
                "description": self.description,
                "url": self.canonical,
                "images": [{"url": u} for u in self.images],
            },
            "twitter": {
                "card": self.twitter_card,
                "title": self.title,
                "description": self.description,
                "images": list(self.images),
            },
        }


@dataclass(frozen=True)
class PageDef:
    pathname: str
    title: Callable[[str], str]
    description: Callable[[str], str]
    og_type: str = "website"


def _app_name(locale: str) -> str:
    return get_translations(locale, "common")("appName")


def _slogan(locale: str) -> str:
    return get_translations(locale, "common")("slogan")


def _suffixed(namespace: str, key: str) -> Callable[[str], str]:
    def _title(locale: str) -> str:
        return f"{get_translations(locale, namespace)(key)} - {_app_name(locale)}"

    return _title


PAGES: Dict[str, PageDef] = {
    "home": PageDef("/", title=_app_name, description=_slogan),
    "products": PageDef("/products", title=_suffixed("nav", "products"), description=_slogan),
    "leaderboard": PageDef("/leaderboard", title=_suffixed("nav", "leaderboard"), description=_slogan),
    "pricing": PageDef(
        "/pricing",
        title=_suffixed("pricing", "title"),
        description=lambda locale: get_translations(locale, "pricing")("subtitle"),
    ),
    "submit": PageDef("/submit", title=_suffixed("nav", "submit"), description=_slogan),
    "developer": PageDef("/developer", title=_suffixed("nav", "developer"), description=_slogan),
    "profile": PageDef("/profile", title=_suffixed("nav", "profile"), description=_slogan),
    "about": PageDef("/about", title=_suffixed("pages", "about"), description=_slogan, og_type="article"),
    "feedback": PageDef("/feedback", title=_suffixed("pages", "feedback"), description=_slogan),
    "terms": PageDef("/terms", title=_suffixed("pages", "terms"), description=_slogan),
    "privacy": PageDef("/privacy", title=_suffixed("pages", "privacy"), description=_slogan),
}


def build_page_metadata(locale: str, page: str, *, cfg: Optional[SiteConfig] = None) -> PageMetadata:
    """
    Metadata for one static page in one locale.

    Raises:
        UnknownLocaleError: locale is not served
        UnknownPageError: page has no metadata definition
    """
    loc = require_locale(locale)
    page_def = PAGES.get(page)
    if page_def is None:
        raise UnknownPageError(page)
    cfg = cfg or load_site_config()

    return PageMetadata(
        title=page_def.title(loc),
        description=page_def.description(loc),
        canonical=localized_path(loc, page_def.pathname),
        languages=alternate_paths(page_def.pathname),
        og_type=page_def.og_type,
        images=[cfg.preview_image],
    )


def build_product_metadata(
    locale: str,
    slug: str,
    product: Optional[Dict[str, Any]],
    *,
    cfg: Optional[SiteConfig] = None,
) -> PageMetadata:
    """
    Metadata for a product detail page.

    `product` is the backend's product object (or None when it could not be
    fetched, in which case the generic product-list wording is used). The slogan is
    reduced to plain text, and the logo is used as preview image only when it is
    on an allowlisted image host.
    """
    loc = require_locale(locale)
    cfg = cfg or load_site_config()
    pathname = f"/products/{slug}"

    name = str((product or {}).get("name") or "").strip()
    if name:
        title = f"{name} - {_app_name(loc)}"
        description = plain_text_from_markdown(str(product.get("slogan") or "")) or _slogan(loc)
    else:
        title = _suffixed("nav", "products")(loc)
        description = _slogan(loc)

    logo = str((product or {}).get("logo_url") or "").strip()
    image = logo if is_known_remote_image_url(logo) else cfg.preview_image

    return PageMetadata(
        title=title,
        description=description,
        canonical=localized_path(loc, pathname),
        languages=alternate_paths(pathname),
        og_type="website",
        images=[image],
    )


def root_metadata(*, cfg: Optional[SiteConfig] = None) -> Dict[str, Any]:
    """Site-wide defaults that page metadata is layered on."""
    cfg = cfg or load_site_config()
    slogan = _slogan(DEFAULT_LOCALE)
    return {
        "metadataBase": f"{cfg.site_url}/",
        "title": {"default": cfg.app_name, "template": f"%s · {cfg.app_name}"},
        "description": slogan,
        "alternates": {
            "canonical": localized_path(DEFAULT_LOCALE, "/"),
            "languages": alternate_paths("/"),
        },
        "openGraph": {
            "type": "website",
            "siteName": cfg.app_name,
            "title": cfg.app_name,
            "description": slogan,
            "images": [{"url": cfg.preview_image}],
        },
        "twitter": {
            "card": "summary",
            "title": cfg.app_name,
            "description": slogan,
            "images": [cfg.preview_image],
        },
        "icons": {"icon": cfg.preview_image, "apple": cfg.preview_image},
        "robots": {"index": True, "follow": True},
    }


def absolute_url(base_url: str, path: str) -> str:
    if path.startswith("http://") or path.startswith("https://"):
        return path
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def render_meta_tags(meta: PageMetadata, base_url: str) -> str:
    """Render <head> tags for a page; every attribute value is HTML-escaped."""
    e = html.escape
    lines = [
        f"<title>{e(meta.title)}</title>",
        f'<meta name="description" content="{e(meta.description)}">',
        f'<link rel="canonical" href="{e(absolute_url(base_url, meta.canonical))}">',
    ]
    for lang, path in meta.languages.items():
        lines.append(f'<link rel="alternate" hreflang="{e(lang)}" href="{e(absolute_url(base_url, path))}">')
    lines += [
        f'<meta property="og:type" content="{e(meta.og_type)}">',
        f'<meta property="og:title" content="{e(meta.title)}">',
        f'<meta property="og:description" content="{e(meta.description)}">',
        f'<meta property="og:url" content="{e(absolute_url(base_url, meta.canonical))}">',
    ]
    for img in meta.images:
        lines.append(f'<meta property="og:image" content="{e(absolute_url(base_url, img))}">')
    lines += [
        f'<meta name="twitter:card" content="{e(meta.twitter_card)}">',
        f'<meta name="twitter:title" content="{e(meta.title)}">',
        f'<meta name="twitter:description" content="{e(meta.description)}">',
    ]
    for img in meta.images:
        lines.append(f'<meta name="twitter:image" content="{e(absolute_url(base_url, img))}">')
    return "\n".join(lines)
