"""
htmlstruct - Declarative HTML-to-Record Mapping

Fills dataclasses and pydantic models from HTML pages using XPath (or CSS)
selectors declared in field tags.
"""

from .errors import (
    AssignmentError,
    ExtractionError,
    MappingError,
    ParseError,
    SelectorError,
    TagSyntaxError,
)
from .fields import FieldDescriptor, assign_field, build_tag_index, describe_fields
from .mapper import (
    RecordMapper,
    build_many,
    build_many_from_text,
    build_one,
    build_one_from_text,
)
from .models import ExtractionReport
from .normalizer import Normalizer, normalize
from .selectors import inner_text, parse_html, resolve_all, resolve_one
from .tags import get_tag_value, parse_tag, tagged, tagged_field

__version__ = "1.0.0"
__all__ = [
    "AssignmentError",
    "ExtractionError",
    "ExtractionReport",
    "FieldDescriptor",
    "MappingError",
    "Normalizer",
    "ParseError",
    "RecordMapper",
    "SelectorError",
    "TagSyntaxError",
    "assign_field",
    "build_many",
    "build_many_from_text",
    "build_one",
    "build_one_from_text",
    "build_tag_index",
    "describe_fields",
    "get_tag_value",
    "inner_text",
    "normalize",
    "parse_html",
    "parse_tag",
    "resolve_all",
    "resolve_one",
    "tagged",
    "tagged_field",
]
