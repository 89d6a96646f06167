"""
htmlstruct Value Normalizer

Cleans extracted text before it is assigned. Identifier fields (by default
any field whose name contains "ID") are reduced to the last segment of a
URL or path, so an href such as "/listing/12345" becomes "12345".
"""

from typing import Mapping, Optional

from .config import config

NORMALIZE_KEY = 'normalize'
BASENAME = 'basename'
RAW = 'raw'


def path_base(value: str) -> str:
    """Last slash-delimited element of a path, ignoring trailing slashes"""
    if value == "":
        return "."
    stripped = value.rstrip('/')
    if stripped == "":
        return "/"
    return stripped.rsplit('/', 1)[-1]


class Normalizer:
    """
    Field value normalization policy

    Trims whitespace and applies basename reduction to identifier fields.
    A field can opt in or out explicitly with normalize:"basename" or
    normalize:"raw" in its tag.
    """

    def __init__(self, id_marker: Optional[str] = None):
        self.id_marker = id_marker if id_marker is not None else config.ID_MARKER

    def wants_basename(self, field_name: str, annotations: Optional[Mapping[str, str]] = None) -> bool:
        """Whether the value of this field is reduced to a path basename"""
        mode = (annotations or {}).get(NORMALIZE_KEY, '').strip().lower()
        if mode == BASENAME:
            return True
        if mode == RAW:
            return False
        return bool(self.id_marker) and self.id_marker in field_name

    def normalize(self, field_name: str, raw_text: str,
                  annotations: Optional[Mapping[str, str]] = None) -> str:
        """Trim raw_text and apply the identifier convention"""
        value = raw_text.strip()
        if value and self.wants_basename(field_name, annotations):
            value = path_base(value)
        return value


default_normalizer = Normalizer()


def normalize(field_name: str, raw_text: str) -> str:
    """Normalize a value with the default policy"""
    return default_normalizer.normalize(field_name, raw_text)
