"""
Small helpers shared across Inkwell: escaping, dates and reading time.
"""

import calendar
import math
import re
from datetime import date, datetime
from email.utils import formatdate
from xml.sax.saxutils import escape

HTML_ENTITIES = {'"': '&quot;'}
XML_ENTITIES = {'"': '&quot;', "'": '&apos;'}

ISO_DATE_RE = re.compile(r'[0-9]{4}-[0-9]{2}-[0-9]{2}')

WORDS_PER_MINUTE = 200


def escape_html(text):
    """Escape ``& < > "`` for HTML text and attribute contexts."""
    if text is None:
        return ''
    return escape(str(text), HTML_ENTITIES)


def escape_xml(text):
    """Escape ``& < > " '`` for XML documents (RSS, sitemap)."""
    if text is None:
        return ''
    return escape(str(text), XML_ENTITIES)


def parse_iso_date(date_str):
    """Parse a ``YYYY-MM-DD`` string. Raises ValueError when malformed."""
    if isinstance(date_str, datetime):
        return date_str.date()
    if isinstance(date_str, date):
        return date_str
    # strptime alone accepts unpadded fields like 2024-5-1
    if not ISO_DATE_RE.fullmatch(str(date_str)):
        raise ValueError(f"Date {date_str!r} is not in YYYY-MM-DD form")
    return datetime.strptime(str(date_str), '%Y-%m-%d').date()


def display_date(date_str):
    """Format a date for humans, e.g. ``May 1, 2024``."""
    d = parse_iso_date(date_str)
    return f"{d:%B} {d.day}, {d.year}"


def rfc822_date(date_str):
    """Format a date as RFC-822 at noon UTC for RSS ``pubDate``."""
    d = parse_iso_date(date_str)
    timestamp = calendar.timegm((d.year, d.month, d.day, 12, 0, 0))
    return formatdate(timestamp, usegmt=True)


def reading_time(text):
    """Estimated reading time in whole minutes, never less than one."""
    words = len(text.split())
    return max(1, math.ceil(words / WORDS_PER_MINUTE))
