"""
Page assembly: wraps page content in the base layout.

Also builds the JSON-LD structured data blocks that go into ``<head>``.
"""

import json
from datetime import datetime
from typing import Any, Dict, Optional
from urllib.parse import urlparse

from .settings import SiteConfig
from .template import render
from .utils import escape_html

SCHEMA_CONTEXT = 'https://schema.org'


def to_json(data: Dict[str, Any]) -> str:
    return json.dumps(data, ensure_ascii=False, separators=(',', ':'))


def website_json_ld(config: SiteConfig) -> str:
    return to_json({
        '@context': SCHEMA_CONTEXT,
        '@type': 'WebSite',
        'name': config.site_title,
        'url': config.site_url,
    })


def person_json_ld(config: SiteConfig) -> str:
    return to_json({
        '@context': SCHEMA_CONTEXT,
        '@type': 'Person',
        'name': config.author_name,
        'url': config.author_url,
    })


def blog_posting_json_ld(config: SiteConfig, post) -> str:
    data = {
        '@context': SCHEMA_CONTEXT,
        '@type': 'BlogPosting',
        'headline': post.title,
        'datePublished': post.date,
        'author': {'@type': 'Person', 'name': config.author_name, 'url': config.author_url},
        'mainEntityOfPage': config.post_url(post.slug),
    }
    if post.updated:
        data['dateModified'] = post.updated
    return to_json(data)


def wrap_json_ld(json_text: str) -> str:
    """
    Embed JSON in a script tag.

    Every ``<`` is written as the JSON escape ``\\u003c``, so neither ``</``
    nor ``<!--`` can reach the HTML parser. The JSON value is unchanged.
    """
    safe = json_text.replace('<', '\\u003c')
    return f'<script type="application/ld+json">{safe}</script>'


def root_prefix(depth: int) -> str:
    """Relative path from a page ``depth`` directories down back to the site root."""
    return '/' if depth <= 0 else '../' * depth


class PageAssembler:
    """Combines page content with the base layout for one site."""

    def __init__(self, config: SiteConfig, base_template: str, year: Optional[int] = None):
        self.config = config
        self.base_template = base_template
        self.year = year or datetime.now().year

    def asset_path(self, depth: int, subdir: str, name: str, ext: str) -> str:
        suffix = f'.min.{ext}' if self.config.minify else f'.{ext}'
        return f"{root_prefix(depth)}assets/{subdir}/{name}{suffix}"

    def umami_script(self) -> str:
        if not self.config.analytics_enabled:
            return ''
        return (f'<script defer src="{escape_html(self.config.umami_src)}" '
                f'data-website-id="{escape_html(self.config.umami_website_id)}"></script>')

    def umami_csp(self) -> str:
        """Origin of the analytics script, for the CSP ``script-src`` directive."""
        if not self.config.umami_src:
            return ''
        parsed = urlparse(self.config.umami_src)
        if not parsed.scheme or not parsed.netloc:
            return ''
        return escape_html(f"{parsed.scheme}://{parsed.netloc}")

    def assemble(self, content: str, title: str, description: str, canonical: str,
                 og_title: Optional[str] = None, og_description: Optional[str] = None,
                 og_type: str = 'website', depth: int = 0,
                 json_ld_extra: Optional[str] = None) -> str:
        """
        Render a full page.

        Args:
            content: Page-specific HTML, already rendered
            title: Document title (escaped here)
            description: Meta description (escaped here)
            canonical: Absolute canonical URL
            og_title: Open Graph title, defaults to ``title``
            og_description: Open Graph description, defaults to ``description``
            og_type: Open Graph type
            depth: Directory depth of the page below the site root
            json_ld_extra: Optional page-specific JSON-LD document

        Returns:
            Complete HTML document
        """
        json_ld_parts = [wrap_json_ld(website_json_ld(self.config))]
        if json_ld_extra:
            json_ld_parts.append(wrap_json_ld(json_ld_extra))

        variables = {
            'site_title': escape_html(self.config.site_title),
            'site_url': escape_html(self.config.site_url),
            'author_name': escape_html(self.config.author_name),
            'year': str(self.year),
            'root': root_prefix(depth),
            'css_path': self.asset_path(depth, 'css', 'styles', 'css'),
            'js_path': self.asset_path(depth, 'js', 'main', 'js'),
            'json_ld': '\n  '.join(json_ld_parts),
            'umami_script': self.umami_script(),
            'umami_csp': self.umami_csp(),
            'content': content,
            'og_type': og_type or 'website',
            'canonical': escape_html(canonical),
            'title': escape_html(title),
            'description': escape_html(description),
            'og_title': escape_html(og_title if og_title is not None else title),
            'og_description': escape_html(og_description if og_description is not None else description),
        }
        return render(self.base_template, variables)
