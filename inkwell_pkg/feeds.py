"""
Feed-style outputs: RSS, XML sitemap, robots.txt and CNAME.

All functions return strings; writing them out is the builder's job.
"""

import re
from datetime import date
from typing import Optional, Sequence

from .settings import SiteConfig
from .utils import escape_xml, rfc822_date

STATIC_PAGES = ('', 'about/', 'writing/', 'now/')


def generate_rss_feed(config: SiteConfig, posts: Sequence) -> str:
    """
    RSS 2.0 feed of the newest posts.

    ``posts`` must already be sorted newest first; only the first
    ``config.posts_per_rss`` are included.
    """
    site_url = escape_xml(config.site_url)
    items = []
    for post in posts[:config.posts_per_rss]:
        link = escape_xml(config.post_url(post.slug))
        items.append(f'''    <item>
      <title>{escape_xml(post.title)}</title>
      <link>{link}</link>
      <guid isPermaLink="true">{link}</guid>
      <pubDate>{rfc822_date(post.date)}</pubDate>
      <description>{escape_xml(post.description)}</description>
    </item>''')

    return f'''<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:atom="http://www.w3.org/2005/Atom">
  <channel>
    <title>{escape_xml(config.site_title)}</title>
    <link>{site_url}/</link>
    <description>{escape_xml(config.site_description)}</description>
    <language>en</language>
    <atom:link href="{site_url}/rss.xml" rel="self" type="application/rss+xml"/>
{chr(10).join(items)}
  </channel>
</rss>'''


def format_xml_sitemap_entry(url: str, lastmod: str) -> str:
    """Format a single sitemap entry."""
    return f'''  <url>
    <loc>{escape_xml(url)}</loc>
    <lastmod>{escape_xml(lastmod)}</lastmod>
  </url>'''


def generate_xml_sitemap(config: SiteConfig, posts: Sequence, today: Optional[date] = None) -> str:
    """Sitemap of the static pages (dated today) and every post."""
    today = today or date.today()
    entries = [format_xml_sitemap_entry(f"{config.site_url}/{page}", today.isoformat())
               for page in STATIC_PAGES]
    entries.extend(format_xml_sitemap_entry(config.post_url(post.slug), post.updated or post.date)
                   for post in posts)

    return f'''<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
{chr(10).join(entries)}
</urlset>'''


def generate_robots_txt(config: SiteConfig) -> str:
    return f"""User-agent: *
Allow: /

Sitemap: {config.site_url}/sitemap.xml
"""


def generate_cname(config: SiteConfig) -> str:
    """Domain for the CNAME file: the site URL without its protocol."""
    return re.sub(r'^https?://', '', config.site_url) + '\n'
