"""
Exceptions raised while building an Inkwell site.

Every error here is fatal to the build: a malformed document or template
is a defect the author has to fix before anything gets published.
"""


class InkwellError(Exception):
    """Base class for all build errors."""


class FormatError(InkwellError):
    """A document's front matter block is missing or malformed."""


class ValidationError(InkwellError):
    """A document's metadata is incomplete or invalid."""


class TemplateError(InkwellError):
    """A template references a variable nobody supplied, or is missing."""
