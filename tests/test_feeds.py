"""Tests for RSS, sitemap, robots.txt, CNAME and the shared helpers."""

import pytest
import os
from datetime import date

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from inkwell_pkg.feeds import (generate_cname, generate_robots_txt, generate_rss_feed,
                               generate_xml_sitemap)
from inkwell_pkg.settings import SiteConfig
from inkwell_pkg.utils import (display_date, escape_html, escape_xml, parse_iso_date,
                               reading_time, rfc822_date)


class TestRssFeed:
    """Test cases for generate_rss_feed."""

    def test_channel(self, site_config):
        rss = generate_rss_feed(site_config, [])

        assert rss.startswith('<?xml version="1.0" encoding="UTF-8"?>')
        assert '<title>Example Site</title>' in rss
        assert '<link>https://example.com/</link>' in rss
        assert '<atom:link href="https://example.com/rss.xml" rel="self" type="application/rss+xml"/>' in rss
        assert '<item>' not in rss

    def test_item(self, site_config, make_post):
        rss = generate_rss_feed(site_config, [make_post(slug='hello-world', title='Hello', date='2024-05-01',
                                                        description='Hi')])

        assert '<title>Hello</title>' in rss
        assert '<link>https://example.com/posts/hello-world/</link>' in rss
        assert '<guid isPermaLink="true">https://example.com/posts/hello-world/</guid>' in rss
        assert '<pubDate>Wed, 01 May 2024 12:00:00 GMT</pubDate>' in rss
        assert '<description>Hi</description>' in rss

    def test_xml_escaping(self, site_config, make_post):
        rss = generate_rss_feed(site_config, [make_post(title="Tom & Jerry's <show>")])

        assert '<title>Tom &amp; Jerry&apos;s &lt;show&gt;</title>' in rss

    def test_limited_to_posts_per_rss(self, make_post):
        config = SiteConfig(site_url='https://example.com', posts_per_rss=3)
        posts = [make_post(slug=f'p{i}') for i in range(5)]
        rss = generate_rss_feed(config, posts)

        assert rss.count('<item>') == 3
        assert '/posts/p2/' in rss
        assert '/posts/p3/' not in rss


class TestSitemap:
    """Test cases for generate_xml_sitemap."""

    def test_static_pages_dated_today(self, site_config):
        sitemap = generate_xml_sitemap(site_config, [], today=date(2024, 6, 1))

        for url in ('https://example.com/', 'https://example.com/about/',
                    'https://example.com/writing/', 'https://example.com/now/'):
            assert f'<loc>{url}</loc>' in sitemap
        assert sitemap.count('<lastmod>2024-06-01</lastmod>') == 4

    def test_post_lastmod_prefers_updated(self, site_config, make_post):
        posts = [make_post(slug='a', date='2024-01-01'),
                 make_post(slug='b', date='2024-01-01', updated='2024-03-03')]
        sitemap = generate_xml_sitemap(site_config, posts, today=date(2024, 6, 1))

        assert ('<loc>https://example.com/posts/a/</loc>\n    <lastmod>2024-01-01</lastmod>') in sitemap
        assert ('<loc>https://example.com/posts/b/</loc>\n    <lastmod>2024-03-03</lastmod>') in sitemap


class TestRobotsAndCname:
    """Test cases for robots.txt and CNAME."""

    def test_robots(self, site_config):
        robots = generate_robots_txt(site_config)

        assert robots.startswith('User-agent: *\nAllow: /\n')
        assert 'Sitemap: https://example.com/sitemap.xml' in robots

    @pytest.mark.parametrize('url,expected', [
        ('https://example.com', 'example.com\n'),
        ('http://blog.example.org/', 'blog.example.org\n'),
    ])
    def test_cname_strips_protocol(self, url, expected):
        assert generate_cname(SiteConfig(site_url=url)) == expected


class TestUtils:
    """Test cases for escaping, dates and reading time."""

    def test_escape_html(self):
        assert escape_html('<a href="x">&</a>') == '&lt;a href=&quot;x&quot;&gt;&amp;&lt;/a&gt;'
        assert escape_html(None) == ''

    def test_escape_xml_apostrophe(self):
        assert escape_xml("it's") == 'it&apos;s'

    def test_parse_iso_date(self):
        assert parse_iso_date('2024-02-29') == date(2024, 2, 29)
        assert parse_iso_date(date(2024, 1, 1)) == date(2024, 1, 1)
        with pytest.raises(ValueError):
            parse_iso_date('2023-02-29')

    @pytest.mark.parametrize('value', ['2024-5-1', '2024-05-1', ' 2024-05-01', '2024-05-01\n'])
    def test_parse_iso_date_requires_padding(self, value):
        with pytest.raises(ValueError):
            parse_iso_date(value)

    def test_display_date(self):
        assert display_date('2024-05-01') == 'May 1, 2024'
        assert display_date('2023-12-25') == 'December 25, 2023'

    def test_rfc822_date(self):
        assert rfc822_date('2024-05-01') == 'Wed, 01 May 2024 12:00:00 GMT'

    @pytest.mark.parametrize('words,minutes', [(0, 1), (1, 1), (200, 1), (201, 2), (1000, 5)])
    def test_reading_time(self, words, minutes):
        assert reading_time(' '.join(['word'] * words)) == minutes
