"""
Flat ``{{name}}`` template substitution.

There are no conditionals or loops: anything repeated (post lists, tag
chips) is rendered to a string before it is handed to ``render``.
"""

import os
import re
from typing import Any, List, Mapping

from .errors import TemplateError

PLACEHOLDER_RE = re.compile(r'\{\{([A-Za-z_][A-Za-z0-9_]*)\}\}')


def find_placeholders(template: str) -> List[str]:
    """Names of all placeholders in a template, in order of first use."""
    seen = []
    for name in PLACEHOLDER_RE.findall(template):
        if name not in seen:
            seen.append(name)
    return seen


def render(template: str, variables: Mapping[str, Any]) -> str:
    """
    Substitute every ``{{name}}`` in ``template`` from ``variables``.

    Substitution is a single pass, so values are never scanned for further
    placeholders. ``None`` renders as an empty string.

    Raises:
        TemplateError: If the template uses a name missing from ``variables``
    """
    missing = [name for name in find_placeholders(template) if name not in variables]
    if missing:
        raise TemplateError(f"Unresolved template placeholder(s): {', '.join(missing)}")

    def substitute(match):
        value = variables[match.group(1)]
        return '' if value is None else str(value)

    return PLACEHOLDER_RE.sub(substitute, template)


def load_template(templates_dir: str, name: str) -> str:
    """Read a template file from the templates directory."""
    path = os.path.join(templates_dir, name)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except FileNotFoundError:
        raise TemplateError(f"Template not found: {path}") from None
