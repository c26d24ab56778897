"""
Inline markdown spans: bold, italic, code, images and links.

The formatter works on text that has already been HTML-escaped (unless the
document opted into raw HTML), so it only ever adds tags. Patterns are
applied in a fixed order and do not nest.
"""

import re

from .url_validator import is_safe_url

BOLD_RE = re.compile(r'\*\*(.+?)\*\*', re.DOTALL)
ITALIC_RE = re.compile(r'\*(.+?)\*', re.DOTALL)
CODE_RE = re.compile(r'`([^`]+)`')
IMAGE_RE = re.compile(r'!\[([^\]]*)\]\(([^)]+)\)')
LINK_RE = re.compile(r'\[([^\]]+)\]\(([^)]+)\)')


def _attr(url):
    # Escaped input never contains a bare quote; raw-HTML documents might
    return url.replace('"', '&quot;')


def _image(match):
    alt, url = match.group(1), match.group(2)
    if is_safe_url(url):
        return f'<img src="{_attr(url)}" alt="{_attr(alt)}" loading="lazy">'
    return alt


def _link(match):
    label, url = match.group(1), match.group(2)
    if is_safe_url(url):
        return f'<a href="{_attr(url)}">{label}</a>'
    return label


def inline_format(text: str) -> str:
    """
    Apply inline markdown to a run of text.

    Unsafe link and image URLs (anything outside the scheme allowlist)
    degrade to their visible text; this function never raises.
    """
    text = BOLD_RE.sub(r'<strong>\1</strong>', text)
    text = ITALIC_RE.sub(r'<em>\1</em>', text)
    text = CODE_RE.sub(r'<code>\1</code>', text)
    # Images first, otherwise the link pattern would eat "[alt](url)"
    text = IMAGE_RE.sub(_image, text)
    text = LINK_RE.sub(_link, text)
    return text
