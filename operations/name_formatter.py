"""
Template based names for renamed releases.

Templates use str.format syntax over the fields of a parsed release:

- "{title} ({year})"                      -> "Brave (2012)"
- "{title} S{season:02d}E{episode:02d}"   -> "Winx Club S06E16"
- "{title} [{resolution}]"                -> "Hercules [1080p]"

Fields without a value render as nothing, and brackets left empty by them
are dropped, so "{title} ({year})" on a release without a year gives
"Brave" rather than "Brave ()".
"""

import re
from string import Formatter
from typing import Any, List, Tuple

import config
from parsers.release_parser import Release, parse

EMPTY_BRACKETS = re.compile(r"\(\s*\)|\[\s*\]")
INVALID_CHARS = '<>:"/\\|?*'


def _render_value(value: Any, format_spec: str) -> str:
    # False == 0, so unset flags are covered too
    if value == "" or value == 0:
        return ""
    return format(value, format_spec)


def sanitize_name(name: str) -> str:
    """
    Sanitize a file or folder name by removing invalid characters.

    Args:
        name: Name to sanitize

    Returns:
        Sanitized name
    """
    sanitized = name
    for char in INVALID_CHARS:
        sanitized = sanitized.replace(char, '')

    # Clean up multiple spaces and trim
    sanitized = ' '.join(sanitized.split())
    sanitized = sanitized.strip('. ')  # Remove leading/trailing dots and spaces

    return sanitized


def validate_template(template: str) -> None:
    """
    Raise ValueError when the template is malformed or uses unknown fields.

    Args:
        template: str.format style template
    """
    unknown = config.unknown_template_fields(template)
    if unknown:
        raise ValueError(f"Unknown fields in format '{template}': {', '.join(unknown)}")


def format_release_name(release: Release, template: str) -> str:
    """
    Render a template against a parsed release.

    Args:
        release: Parsed release
        template: str.format style template

    Returns:
        Filesystem-safe name, empty when nothing was rendered

    Raises:
        ValueError: If the template is malformed or uses unknown fields
    """
    validate_template(template)
    values = release.to_dict()

    parts = []
    for literal, field_name, format_spec, conversion in Formatter().parse(template):
        parts.append(literal)
        if field_name is None:
            continue
        value = values[field_name]
        if conversion:
            value = {"s": str, "r": repr, "a": ascii}[conversion](value)
        parts.append(_render_value(value, format_spec or ""))

    name = EMPTY_BRACKETS.sub("", "".join(parts))
    return sanitize_name(name)


def format_examples(release_name: str = config.FORMATS_EXAMPLE) -> List[Tuple[str, str]]:
    """
    List template placeholders with their value for an example release.

    Args:
        release_name: Release name to parse for the example values

    Returns:
        (placeholder, value) pairs for every field the example fills in
    """
    release = parse(release_name)
    return [
        (f"{{{name}}}", str(value))
        for name, value in release.to_dict().items()
        if value
    ]
