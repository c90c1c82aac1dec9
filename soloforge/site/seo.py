from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional
from xml.etree import ElementTree as ET

from soloforge.site.routing import LOCALES, localized_path, static_pathnames

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

# Never crawled: the admin console and every API route.
DISALLOWED_PATHS = ("/admin", "/api")


@dataclass(frozen=True)
class RobotsRule:
    user_agent: str
    allow: List[str]
    disallow: List[str]


@dataclass(frozen=True)
class SitemapEntry:
    url: str
    last_modified: datetime
    change_frequency: str
    priority: float


def robots_rules() -> List[RobotsRule]:
    return [RobotsRule(user_agent="*", allow=["/"], disallow=list(DISALLOWED_PATHS))]


def render_robots(base_url: str) -> str:
    lines: List[str] = []
    for rule in robots_rules():
        lines.append(f"User-Agent: {rule.user_agent}")
        lines += [f"Allow: {p}" for p in rule.allow]
        lines += [f"Disallow: {p}" for p in rule.disallow]
        lines.append("")
    lines.append(f"Sitemap: {base_url.rstrip('/')}/sitemap.xml")
    return "\n".join(lines) + "\n"


def sitemap_entries(base_url: str, *, now: Optional[datetime] = None) -> List[SitemapEntry]:
    """One entry per locale x static pathname; the locale root ranks highest."""
    base = base_url.rstrip("/")
    ts = now or datetime.now(timezone.utc)
    entries: List[SitemapEntry] = []
    for locale in LOCALES:
        for pathname in static_pathnames():
            is_root = pathname == "/"
            entries.append(
                SitemapEntry(
                    url=f"{base}{localized_path(locale, pathname)}",
                    last_modified=ts,
                    change_frequency="daily" if is_root else "weekly",
                    priority=1.0 if is_root else 0.7,
                )
            )
    return entries


def render_sitemap(entries: List[SitemapEntry]) -> str:
    urlset = ET.Element("urlset", xmlns=SITEMAP_NS)
    for entry in entries:
        url = ET.SubElement(urlset, "url")
        ET.SubElement(url, "loc").text = entry.url
        ET.SubElement(url, "lastmod").text = entry.last_modified.isoformat()
        ET.SubElement(url, "changefreq").text = entry.change_frequency
        ET.SubElement(url, "priority").text = f"{entry.priority:.1f}"
    body = ET.tostring(urlset, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}\n'
