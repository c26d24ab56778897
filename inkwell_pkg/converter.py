"""
Markdown to HTML conversion for Inkwell posts.
"""

import re

from .blocks import BlockParser, Plain, extract_fences
from .utils import escape_html

LINE_SPLIT_RE = re.compile(r'\r?\n')


def markdown_to_html(text: str, allow_html: bool = False) -> str:
    """
    Convert a markdown body to HTML.

    Code fences are extracted and escaped first. All other lines are
    escaped too unless ``allow_html`` is set, so prose can never inject
    markup or scripts into the page.

    Args:
        text: Markdown body (front matter already removed)
        allow_html: Pass raw HTML in prose through untouched

    Returns:
        HTML fragment, one block per line
    """
    lines, fences = extract_fences(LINE_SPLIT_RE.split(text))
    if not allow_html:
        lines = [Plain(escape_html(line.text)) if isinstance(line, Plain) else line for line in lines]
    return BlockParser(lines, fences).render()
