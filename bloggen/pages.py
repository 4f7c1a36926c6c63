from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Optional
from xml.sax.saxutils import escape as xml_escape

from .config import SiteConfig
from .content import Post
from .render import read_template, render_template
from .utils import join_url

EMPTY_STATE = "No posts yet."


@dataclass(frozen=True)
class SitemapEntry:
    loc: str
    lastmod: str


def build_post_cards(posts: list[Post]) -> str:
    if not posts:
        return f'<div class="empty">{EMPTY_STATE}</div>'
    cards = []
    for post in posts:
        cards.append(
            f'<a href="{html.escape(post.url)}" class="post-card">'
            f'<div class="post-date">{html.escape(post.date)}</div>'
            f'<div class="post-title">{html.escape(post.title)}</div>'
            f'<div class="post-summary">{html.escape(post.description)}</div>'
            '<div class="post-more">Read more &rarr;</div>'
            "</a>"
        )
    return "\n".join(cards)


def render_index(posts: list[Post], site: SiteConfig, today: str, template: Optional[str] = None) -> str:
    """Render the blog index page: one card per post inside the fixed page chrome."""
    if template is None:
        template = read_template("blog_index.html")
    index_url = f"/{site.index_name}"
    return render_template(
        template,
        title=html.escape(f"Blog | {site.site_name}"),
        site_name=html.escape(site.site_name),
        site_description=html.escape(site.site_description),
        canonical=html.escape(join_url(site.base_url, site.index_name)),
        index_url=html.escape(index_url),
        year=today[:4],
        cards=build_post_cards(posts),
    )


def sitemap_entries(posts: list[Post], site: SiteConfig, home_date: str, today: str) -> list[SitemapEntry]:
    entries = [
        SitemapEntry(join_url(site.base_url, ""), home_date),
        SitemapEntry(join_url(site.base_url, site.index_name), today),
    ]
    entries.extend(SitemapEntry(join_url(site.base_url, post.url), post.date) for post in posts)
    return entries


def render_sitemap(entries: list[SitemapEntry]) -> str:
    items = []
    for entry in entries:
        items.append(
            "\n".join(
                [
                    "  <url>",
                    f"    <loc>{xml_escape(entry.loc)}</loc>",
                    f"    <lastmod>{xml_escape(entry.lastmod)}</lastmod>",
                    "  </url>",
                ]
            )
        )
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">',
    ]
    lines.extend(items)
    lines.append("</urlset>")
    return "\n".join(lines) + "\n"


def render_robots(site: SiteConfig) -> str:
    return "\n".join(
        [
            "User-agent: *",
            "Allow: /",
            f"Sitemap: {join_url(site.base_url, site.sitemap_name)}",
            "",
        ]
    )
