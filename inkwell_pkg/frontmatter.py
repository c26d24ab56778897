"""
Front matter parsing and validation for Inkwell documents.

A document starts with a block like::

    ---
    title: Hello
    date: 2024-05-01
    tags: [a, b]
    slug: hello-world
    ---

followed by the markdown body. The block is deliberately not YAML: values
are strings, ``[a, b]`` lists or the booleans ``true``/``false``.
"""

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from .errors import FormatError, ValidationError
from .utils import parse_iso_date

FRONT_MATTER_RE = re.compile(r'\A---\r?\n(.*?)\r?\n---', re.DOTALL)
QUOTE_RE = re.compile(r'^["\']|["\']$')
SLUG_RE = re.compile(r'^[a-z0-9]+(-[a-z0-9]+)*$')

REQUIRED_FIELDS = ('title', 'date', 'description', 'tags', 'slug')
DATE_FIELDS = ('date', 'updated')


@dataclass(frozen=True)
class Document:
    """A parsed document: read-only metadata plus the markdown body."""
    metadata: Mapping[str, Any] = field(default_factory=dict)
    body: str = ''

    def __post_init__(self):
        object.__setattr__(self, 'metadata', MappingProxyType(dict(self.metadata)))

    def get(self, key, default=None):
        return self.metadata.get(key, default)

    @property
    def is_draft(self) -> bool:
        return self.metadata.get('draft') is True

    @property
    def allows_html(self) -> bool:
        return self.metadata.get('allow_html') is True


def _parse_value(raw_value: str):
    value = raw_value.strip()
    if value.startswith('[') and value.endswith(']'):
        # Every element is kept, so "[]" is a list holding one empty string
        return [QUOTE_RE.sub('', item.strip()) for item in value[1:-1].split(',')]
    value = QUOTE_RE.sub('', value)
    if value == 'true':
        return True
    if value == 'false':
        return False
    return value


def parse_front_matter(raw: str, source: Optional[str] = None) -> Document:
    """
    Split raw document text into metadata and body.

    Args:
        raw: Full text of the document
        source: Name used in error messages (usually the file name)

    Returns:
        Document with the parsed metadata and the trimmed body

    Raises:
        FormatError: If the text does not open with a ``---`` delimited block
    """
    match = FRONT_MATTER_RE.match(raw)
    if not match:
        where = f" in {source}" if source else ''
        raise FormatError(f"Missing front matter{where}")

    metadata: Dict[str, Any] = {}
    for line in re.split(r'\r?\n', match.group(1)):
        key, sep, value = line.partition(':')
        if not sep:
            continue
        metadata[key.strip()] = _parse_value(value)

    body = raw[match.end():].strip()
    return Document(metadata=metadata, body=body)


def is_valid_slug(slug) -> bool:
    """Kebab-case check: lowercase letters and digits, single inner hyphens."""
    return isinstance(slug, str) and SLUG_RE.fullmatch(slug) is not None


def validate_document(document: Document, source: Optional[str] = None) -> None:
    """
    Check that a parsed document carries everything the site needs.

    Raises:
        ValidationError: On a missing or empty required field, a malformed
            date, non-list tags or a slug that is not kebab-case
    """
    where = source or 'document'
    meta = document.metadata

    for name in REQUIRED_FIELDS:
        if not meta.get(name):
            raise ValidationError(f'Missing "{name}" in {where}')

    for name in DATE_FIELDS:
        # An empty optional date counts as absent
        if meta.get(name):
            try:
                parse_iso_date(meta[name])
            except ValueError:
                raise ValidationError(
                    f'Invalid {name} "{meta[name]}" in {where}: expected YYYY-MM-DD'
                ) from None

    if not isinstance(meta['tags'], list):
        raise ValidationError(f'Invalid "tags" in {where}: expected a list like [a, b]')

    # Slugs become output directories, so nothing but kebab-case gets through
    if not is_valid_slug(meta['slug']):
        raise ValidationError(
            f'Invalid slug "{meta["slug"]}" in {where}: '
            'must be lowercase kebab-case (a-z, 0-9, hyphens)'
        )
