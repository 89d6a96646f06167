"""
htmlstruct Tag Grammar

Parses the annotation strings attached to record fields. A tag is a
whitespace separated list of ``key:"value"`` pairs, for example::

    xpath:"//h1[@class='title']" css:"h1.title" normalize:"raw"

Keys are identifiers matched case-insensitively. Values are double quoted,
may span several lines and may contain ``\\"`` for a literal quote or ``\\\\`` for a
backslash; any other backslash sequence is kept as written.
"""

import dataclasses
import re
from typing import Any, Dict, Mapping, Tuple, Union

from pydantic import Field

from .config import config
from .errors import TagSyntaxError

_PAIR = re.compile(
    r'\s*(?P<key>[A-Za-z_][A-Za-z0-9_-]*):"(?P<value>(?:[^"\\]|\\.)*)"',
    re.DOTALL,
)
_ESCAPE = re.compile(r'\\(["\\])')


def parse_tag(tag: str) -> Dict[str, str]:
    """
    Parse a field tag into a key -> value mapping

    Args:
        tag: Raw tag string

    Returns:
        Mapping with lower-cased keys; the first occurrence of a key wins

    Raises:
        TagSyntaxError: if the tag is not a sequence of key:"value" pairs
    """
    if not isinstance(tag, str):
        raise TagSyntaxError(f"tag must be a string, got {type(tag).__name__}")

    pairs: Dict[str, str] = {}
    pos = 0
    end = len(tag.rstrip())

    while pos < end:
        match = _PAIR.match(tag, pos)
        if match is None:
            raise TagSyntaxError("expected key:\"value\"", tag=tag, position=_skip_space(tag, pos))

        # Pairs must be separated by whitespace
        if pos and match.start('key') == pos:
            raise TagSyntaxError("missing whitespace between pairs", tag=tag, position=pos)

        key = match.group('key').lower()
        if key not in pairs:
            pairs[key] = _ESCAPE.sub(r'\1', match.group('value'))
        pos = match.end()

    return pairs


def get_tag_value(tag: str, key: str) -> Tuple[str, bool]:
    """Return the value stored under key and whether the key is present"""
    pairs = parse_tag(tag)
    lookup = key.lower()
    if lookup in pairs:
        return pairs[lookup], True
    return "", False


def annotations_from(raw: Union[str, Mapping[str, Any], None]) -> Dict[str, str]:
    """Normalize field metadata (tag string or mapping) into an annotation map"""
    if raw is None:
        return {}
    if isinstance(raw, Mapping):
        return {str(k).lower(): str(v) for k, v in raw.items()}
    return parse_tag(raw)


def tagged(tag: str, default: Any = dataclasses.MISSING, **kwargs) -> Any:
    """Declare a dataclass field carrying a tag"""
    metadata = dict(kwargs.pop('metadata', None) or {})
    metadata[config.TAG_METADATA] = tag
    if default is not dataclasses.MISSING:
        kwargs['default'] = default
    return dataclasses.field(metadata=metadata, **kwargs)


def tagged_field(tag: str, default: Any = None, **kwargs) -> Any:
    """Declare a pydantic model field carrying a tag"""
    extra = dict(kwargs.pop('json_schema_extra', None) or {})
    extra[config.TAG_METADATA] = tag
    if 'default_factory' in kwargs:
        return Field(json_schema_extra=extra, **kwargs)
    return Field(default, json_schema_extra=extra, **kwargs)


def _skip_space(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos
