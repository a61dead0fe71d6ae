"""
Translation helpers: interpolation, pluralization and safe lookups.

Translation tables are nested dicts of strings. Lookups never raise; a
missing or non-string entry falls back to the default (the key itself
unless given).
"""

import re
from collections.abc import Callable, Mapping
from typing import Any, Optional


_PLACEHOLDER = re.compile(r"\{\{([^}]+)\}\}")


def interpolate(text: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """
    Replace `{{name}}` placeholders with values from `params`.

    Placeholders without a matching parameter are left as they are.

        >>> interpolate("Hello, {{name}}!", {"name": "World"})
        'Hello, World!'
    """
    if not params or not text:
        return text

    def _replace(match: re.Match) -> str:
        key = match.group(1)
        if key not in params:
            return match.group(0)
        value = params[key]
        return "" if value is None else str(value)

    return _PLACEHOLDER.sub(_replace, text)


def pluralize(
    count: int,
    forms: Mapping[str, str],
    params: Optional[Mapping[str, Any]] = None,
) -> str:
    """
    Pick the `zero` / `one` / `other` form for `count` and interpolate it.

    `count` is always available as a parameter.

        >>> pluralize(2, {"one": "{{count}} item", "other": "{{count}} items"})
        '2 items'
    """
    if count == 0 and forms.get("zero"):
        form = forms["zero"]
    elif count == 1:
        form = forms["one"]
    else:
        form = forms["other"]

    merged = {**(params or {}), "count": count}
    return interpolate(form, merged)


def get_nested_translation(
    tree: Optional[Mapping[str, Any]],
    path: str,
    default: Optional[str] = None,
) -> str:
    """Resolve a dotted key such as "user.greeting" in a nested table."""
    if default is None:
        default = path
    if not tree or not path:
        return default

    result: Any = tree
    for key in path.split("."):
        if not isinstance(result, Mapping):
            return default
        result = result.get(key)
        if result is None:
            return default

    # A sub-table is not a renderable string
    if isinstance(result, Mapping):
        return default
    return str(result)


def get_safe_translation(
    translations: Optional[Mapping[str, Any]],
    key: str,
    default: Optional[str] = None,
) -> str:
    """Flat lookup that only ever returns strings."""
    if default is None:
        default = key
    if not translations:
        return default

    value = translations.get(key)
    if isinstance(value, str):
        return value
    return default


def create_safe_translator(
    translations: Optional[Mapping[str, Any]],
) -> Callable[..., str]:
    """Bind `get_safe_translation` to one translation table."""

    def get_text(key: str, default: Optional[str] = None) -> str:
        return get_safe_translation(translations, key, default)

    return get_text
