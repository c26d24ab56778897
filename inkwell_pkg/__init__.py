"""
Inkwell - a small static site generator for personal writing.

Inkwell takes markdown posts with a short front matter block and turns
them into a static site: post pages, home and archive lists, an RSS feed,
a sitemap and robots.txt. The markdown converter is built in and escapes
everything it does not understand.
"""

__version__ = "1.0.0"

from .converter import markdown_to_html
from .core import Inkwell
from .errors import FormatError, InkwellError, TemplateError, ValidationError
from .settings import InkwellSettings, SiteConfig

__all__ = [
    'Inkwell', 'InkwellSettings', 'SiteConfig', 'markdown_to_html',
    'InkwellError', 'FormatError', 'ValidationError', 'TemplateError',
]
