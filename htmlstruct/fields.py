"""
htmlstruct Field Access

Uniform view over the record types htmlstruct fills: dataclasses and
pydantic models. Provides the ordered field descriptors, the field -> selector
tag index, zero-valued record construction and name-based assignment.
"""

import dataclasses
import logging
import types
import typing
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Type, Union

from pydantic import BaseModel, ValidationError

from .config import config
from .errors import AssignmentError
from .tags import annotations_from

logger = logging.getLogger(__name__)

_ZERO_FACTORIES = (str, int, float, bool, complex, bytes, list, dict, set, tuple, frozenset)


@dataclass
class FieldDescriptor:
    """One declared field of a record type"""
    name: str
    declared_type: Any
    annotations: Dict[str, str] = field(default_factory=dict)
    raw_tag: Optional[Any] = None

    def annotation(self, key: str) -> Optional[str]:
        """Annotation value under key (case-insensitive), None when absent"""
        return self.annotations.get(key.lower())


def is_record_type(record_type: Any) -> bool:
    """Whether htmlstruct knows how to describe and build this type"""
    if not isinstance(record_type, type):
        return False
    return dataclasses.is_dataclass(record_type) or issubclass(record_type, BaseModel)


def describe_fields(record_type: Type) -> List[FieldDescriptor]:
    """
    Enumerate the declared fields of a record type in declaration order

    Args:
        record_type: A dataclass or pydantic model class

    Returns:
        FieldDescriptor list with parsed tag annotations

    Raises:
        TypeError: if record_type is not a dataclass or pydantic model
        TagSyntaxError: if a field tag cannot be parsed
    """
    declared = _declared_types(record_type)
    descriptors = []

    for name, raw_tag in _raw_tags(record_type).items():
        descriptors.append(FieldDescriptor(
            name=name,
            declared_type=declared[name],
            annotations=annotations_from(raw_tag),
            raw_tag=raw_tag
        ))

    return descriptors


def build_tag_index(record_type: Type, key: str) -> Dict[str, str]:
    """
    Map field names to the selector stored under key in their tags

    Fields without the key, or with an empty value, are left out. Values are
    recorded verbatim; skip markers are left for the builders to filter.
    """
    index = {}

    for descriptor in describe_fields(record_type):
        selector = descriptor.annotation(key)
        if selector:
            index[descriptor.name] = selector

    logger.debug(f"Tag index for {record_type.__name__} under '{key}': {len(index)} fields")
    return index


def zero_value(declared_type: Any) -> Any:
    """Zero value for a declared type"""
    if declared_type is Any or declared_type is object:
        return None

    origin = typing.get_origin(declared_type)
    if origin is Union or origin is types.UnionType:
        args = typing.get_args(declared_type)
        if type(None) in args:
            return None
        return zero_value(args[0])

    if origin in _ZERO_FACTORIES:
        return origin()

    if declared_type in _ZERO_FACTORIES:
        return declared_type()

    return None


def new_record(record_type: Type) -> Any:
    """Create a zero-valued instance of a record type"""
    if not is_record_type(record_type):
        raise TypeError(f"{record_type!r} is not a dataclass or pydantic model")

    declared = _declared_types(record_type)

    if issubclass(record_type, BaseModel):
        # model_construct skips validation and fills declared defaults
        zeros = {
            name: zero_value(declared[name])
            for name, info in record_type.model_fields.items()
            if info.is_required()
        }
        return record_type.model_construct(**zeros)

    zeros = {}
    for f in dataclasses.fields(record_type):
        if not f.init:
            continue
        if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
            zeros[f.name] = zero_value(declared[f.name])
    return record_type(**zeros)


def is_assignable(value: Any, declared_type: Any) -> bool:
    """Whether value may be stored in a field of the declared type"""
    if declared_type is Any or declared_type is object:
        return True

    if declared_type is None or declared_type is type(None):
        return value is None

    origin = typing.get_origin(declared_type)
    if origin is Union or origin is types.UnionType:
        return any(is_assignable(value, arg) for arg in typing.get_args(declared_type))

    if origin is typing.Literal:
        return value in typing.get_args(declared_type)

    if origin is not None:
        return isinstance(origin, type) and isinstance(value, origin)

    # typing.NewType
    supertype = getattr(declared_type, '__supertype__', None)
    if supertype is not None:
        return is_assignable(value, supertype)

    if isinstance(declared_type, type):
        return isinstance(value, declared_type)

    return False


def assign_field(field_name: str, destination: Any, value: Any) -> None:
    """
    Set a field of destination by name

    Args:
        field_name: Exact field name
        destination: Record instance, mutated in place
        value: Value to store

    Raises:
        AssignmentError: if the field does not exist, the value type is not
            assignable to the declared type, or the record refuses mutation
    """
    declared = _declared_types(type(destination))

    if field_name not in declared:
        raise AssignmentError(
            field_name, type(value), None,
            message=f"{type(destination).__name__} has no field {field_name}"
        )

    field_type = declared[field_name]
    if not is_assignable(value, field_type):
        raise AssignmentError(field_name, type(value), field_type)

    try:
        setattr(destination, field_name, value)
    except (AttributeError, ValidationError) as e:
        raise AssignmentError(
            field_name, type(value), field_type,
            message=f"cannot set {field_name} on {type(destination).__name__}: {e}"
        ) from e


def _declared_types(record_type: Type) -> Dict[str, Any]:
    """Field name -> declared type, in declaration order"""
    if not is_record_type(record_type):
        raise TypeError(f"{record_type!r} is not a dataclass or pydantic model")

    if issubclass(record_type, BaseModel):
        return {name: info.annotation for name, info in record_type.model_fields.items()}

    try:
        hints = typing.get_type_hints(record_type)
    except (NameError, TypeError):
        # Unresolvable forward references fall back to the raw annotation
        hints = {}

    return {f.name: hints.get(f.name, f.type) for f in dataclasses.fields(record_type)}


def _raw_tags(record_type: Type) -> Dict[str, Any]:
    """Field name -> tag metadata as declared (string, mapping or None)"""
    if issubclass(record_type, BaseModel):
        tags = {}
        for name, info in record_type.model_fields.items():
            extra = info.json_schema_extra
            tags[name] = extra.get(config.TAG_METADATA) if isinstance(extra, dict) else None
        return tags

    return {f.name: f.metadata.get(config.TAG_METADATA) for f in dataclasses.fields(record_type)}
