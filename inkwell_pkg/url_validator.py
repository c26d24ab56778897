"""
URL scheme allowlisting for Inkwell.

Links and images written in markdown end up as ``href``/``src`` attributes
in the published HTML. Only the schemes listed here are ever emitted;
anything else (``javascript:``, ``data:``, ``vbscript:``, ...) is dropped
by the inline formatter and the visible text is kept instead.
"""

from typing import Tuple


class URLValidator:
    """
    Allowlist-based validator for URLs that appear in rendered content.
    """

    # Accepted prefixes, compared against the trimmed, lowercased URL
    SAFE_PREFIXES: Tuple[str, ...] = (
        'http://',
        'https://',
        'mailto:',
        '#',   # in-page anchor
        '/',   # site-relative path
    )

    def __init__(self, safe_prefixes: Tuple[str, ...] = None):
        """
        Initialize URL validator.

        Args:
            safe_prefixes: Optional replacement for SAFE_PREFIXES
        """
        self.safe_prefixes = tuple(safe_prefixes) if safe_prefixes else self.SAFE_PREFIXES

    def is_safe(self, url: str) -> bool:
        """
        Check whether a URL may be emitted into an anchor or image tag.

        Only a prefix check is performed; the URL is otherwise emitted as
        written by the author.

        Args:
            url: The URL to check

        Returns:
            True if the URL starts with an allowed prefix, False otherwise
        """
        if not isinstance(url, str):
            return False
        candidate = url.strip().lower()
        return candidate.startswith(self.safe_prefixes)


_default_validator = URLValidator()


def is_safe_url(url: str) -> bool:
    """Check a URL against the default allowlist."""
    return _default_validator.is_safe(url)
