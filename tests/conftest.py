"""Test configuration and fixtures for Inkwell tests."""

import pytest
import tempfile
import shutil
import logging
import os
from datetime import date
from pathlib import Path

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from inkwell_pkg.frontmatter import Document
from inkwell_pkg.posts import Post
from inkwell_pkg.settings import SiteConfig

HELLO_POST = """---
title: Hello
date: 2024-05-01
description: Hi
tags: [a, b]
slug: hello-world
---

# Hi

This is **bold**.
"""


def post_source(title='Post', date='2024-01-01', description='A post', tags='[a]',
                slug='post', body='Body text.', **extra):
    """Build the text of a markdown post with front matter."""
    lines = ['---', f'title: {title}', f'date: {date}', f'description: {description}',
             f'tags: {tags}', f'slug: {slug}']
    lines.extend(f'{key}: {value}' for key, value in extra.items())
    lines.extend(['---', '', body, ''])
    return '\n'.join(lines)


@pytest.fixture(autouse=True)
def reset_inkwell_logger():
    """Drop handlers added by Inkwell so each test starts clean."""
    yield
    logger = logging.getLogger('Inkwell')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def site_config():
    """Synthetic site configuration."""
    return SiteConfig(
        site_url='https://example.com',
        site_title='Example Site',
        site_description='Writing about things.',
        author_name='Sam Writer',
        author_url='https://example.com/about/',
    )


@pytest.fixture
def mock_content_dir(temp_dir):
    """Create a content directory with a posts/ folder holding one post."""
    posts_dir = Path(temp_dir) / 'content' / 'posts'
    posts_dir.mkdir(parents=True)
    (posts_dir / 'hello.md').write_text(HELLO_POST, encoding='utf-8')
    return str(posts_dir.parent)


@pytest.fixture
def write_post(mock_content_dir):
    """Factory writing an extra post into the content directory."""
    def _write(filename, text):
        path = Path(mock_content_dir) / 'posts' / filename
        path.write_text(text, encoding='utf-8')
        return str(path)
    return _write


@pytest.fixture
def mock_templates_dir(temp_dir):
    """Create a minimal but complete templates directory."""
    templates_dir = Path(temp_dir) / 'templates'
    templates_dir.mkdir()

    (templates_dir / 'base.html').write_text(
        '<html><head><title>{{title}}</title>'
        '<link rel="stylesheet" href="{{css_path}}">{{json_ld}}</head>'
        '<body>{{content}}</body></html>'
    )
    (templates_dir / 'post.html').write_text(
        '<article><h1>{{post_title}}</h1><time datetime="{{date}}">{{date_display}}</time>'
        '{{updated_display}}<span>{{reading_time}} min</span>{{tags_html}}{{post_body}}</article>'
    )
    (templates_dir / 'writing.html').write_text('<ul>{{post_list}}</ul>')
    (templates_dir / 'home.html').write_text('<ul>{{recent_posts}}</ul>')
    (templates_dir / 'about.html').write_text('<p>About {{author_name}}</p>')
    (templates_dir / 'now.html').write_text('<p>Now</p>')
    (templates_dir / '404.html').write_text('<p>Not found. <a href="{{root}}">Home</a></p>')
    return str(templates_dir)


@pytest.fixture
def mock_output_dir(temp_dir):
    """Path for the generated site (not created)."""
    return str(Path(temp_dir) / 'docs')


@pytest.fixture
def mock_assets_dir(temp_dir):
    """Create an assets directory with a stylesheet and a script."""
    assets_dir = Path(temp_dir) / 'assets'
    (assets_dir / 'css').mkdir(parents=True)
    (assets_dir / 'js').mkdir(parents=True)
    (assets_dir / 'css' / 'styles.css').write_text('body {\n    color: red;\n}\n')
    (assets_dir / 'js' / 'main.js').write_text('function  hello ( ) {\n    return 1;\n}\n')
    return str(assets_dir)


@pytest.fixture
def make_post():
    """Factory for Post values without touching the filesystem."""
    def _make(slug='post', date='2024-01-01', title='Post', description='A post',
              tags=('a',), updated=None, html='<p>Body</p>'):
        metadata = {'title': title, 'date': date, 'description': description,
                    'tags': list(tags), 'slug': slug}
        if updated:
            metadata['updated'] = updated
        return Post(document=Document(metadata=metadata, body='Body'), html=html, reading_time=1,
                    source=f'{slug}.md')
    return _make


@pytest.fixture
def build_date():
    return date(2024, 6, 1)
