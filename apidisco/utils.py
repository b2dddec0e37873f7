import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

__all__ = (
    'camelize',
    'camelize_keys',
    'format_value',
    'group_name',
    'lower_first',
    'merge_headers',
    'operation_name',
)

DEFAULT_HEADERS = {
    'Accept': 'application/json',
    'Content-Type': 'application/json',
}


def lower_first(input_string):
    if not input_string:
        return ''
    return input_string[0].lower() + input_string[1:]


SEPARATOR_RE = re.compile(r'(?<=[^\-_\s])[\-_\s]+([^\W_])')


def camelize(name: str) -> str:
    """Convert snake_case, kebab-case or spaced names to camelCase.

    Only characters following a separator change case. Leading separators
    are kept, and names without separators (``userId``, ``UserName``,
    ``ID``, ``sha256sum``) are returned unchanged.
    """
    if not name:
        return ''
    return SEPARATOR_RE.sub(lambda m: m.group(1).upper(), name)


def camelize_keys(data: Any) -> Any:
    """Recursively camelize every string key of mappings inside ``data``."""
    if isinstance(data, Mapping):
        return {
            camelize(key) if isinstance(key, str) else key: camelize_keys(value)
            for key, value in data.items()
        }
    if isinstance(data, list):
        return [camelize_keys(item) for item in data]
    return data


def group_name(path: str) -> str:
    """Client attribute name for a group: leading slash stripped, camelized.

    The first letter is lowered unless the name starts with an acronym.
    """
    name = camelize(path.replace('/', '', 1))
    if name[:2].isupper():
        return name
    return lower_first(name)


def operation_name(nickname: str) -> str:
    """Client attribute name for an operation: first letter lowered, camelized."""
    return camelize(lower_first(nickname))


def format_value(value: Any) -> str:
    """Render a path or query value for a URL.

    Booleans render as JSON literals, None as an empty string, and the
    result is percent-encoded.
    """
    if isinstance(value, bool):
        text = 'true' if value else 'false'
    elif value is None:
        text = ''
    else:
        text = str(value)
    return quote(text, safe='')


def merge_headers(*layers: Mapping[str, str] | None) -> dict[str, str]:
    """Merge header mappings left to right, later layers winning.

    Keys are compared case-insensitively; the casing of the last layer
    that sets a header is kept.
    """
    merged: dict[str, tuple[str, str]] = {}
    for layer in layers:
        for key, value in (layer or {}).items():
            merged[key.lower()] = (key, value)
    return dict(merged.values())
