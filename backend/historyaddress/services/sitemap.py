from datetime import datetime
from typing import Iterable, Optional
from urllib.parse import quote
from xml.sax.saxutils import escape

# (path, changefreq, priority)
STATIC_PAGES = [
    ("", "weekly", "1.0"),
    ("addresses.html", "daily", "0.9"),
    ("map.html", "weekly", "0.8"),
    ("calendar.html", "daily", "0.8"),
    ("about.html", "monthly", "0.7"),
]


def robots_txt(domain: str, admin_page: str) -> str:
    lines = [
        "User-agent: *",
        "Allow: /",
        "Allow: /favicon.ico",
        f"Disallow: /{admin_page}",
        "Disallow: /assets/",
        f"Sitemap: {domain}/sitemap.xml",
    ]
    return "\n".join(lines) + "\n"


def _url(loc: str, changefreq: str, priority: str, lastmod: Optional[str] = None) -> str:
    parts = ["  <url>", f"    <loc>{escape(loc)}</loc>"]
    if lastmod:
        parts.append(f"    <lastmod>{lastmod}</lastmod>")
    parts.append(f"    <changefreq>{changefreq}</changefreq>")
    parts.append(f"    <priority>{priority}</priority>")
    parts.append("  </url>")
    return "\n".join(parts)


def sitemap_xml(domain: str, homes: Iterable[tuple[str, Optional[datetime]]]) -> str:
    """static pages plus one address page per published home"""
    urls = [_url(f"{domain}/{path}", freq, prio) for path, freq, prio in STATIC_PAGES]
    for slug, updated_at in homes:
        lastmod = updated_at.date().isoformat() if updated_at else None
        urls.append(_url(f"{domain}/address.html?slug={quote(slug, safe='')}", "monthly", "0.6", lastmod))

    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
        + "\n".join(urls)
        + "\n</urlset>\n"
    )
