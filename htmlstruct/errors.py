"""
htmlstruct Errors

Exception hierarchy shared by the tag parser, the selector resolver and the
record builders. Every error is raised to the caller; nothing here is logged.
"""

from typing import Any, Optional


class MappingError(Exception):
    """Base class for all htmlstruct errors"""


class TagSyntaxError(MappingError, ValueError):
    """A field tag could not be parsed as key:"value" pairs"""

    def __init__(self, message: str, tag: str = "", position: Optional[int] = None):
        self.tag = tag
        self.position = position
        if position is not None:
            message = f"{message} at position {position} in tag {tag!r}"
        super().__init__(message)


class ParseError(MappingError):
    """HTML text could not be parsed into a document tree"""


class SelectorError(MappingError):
    """A selector could not be compiled or evaluated"""

    def __init__(self, selector: str, reason: Any):
        self.selector = selector
        self.reason = reason
        super().__init__(f"invalid selector {selector!r}: {reason}")


class AssignmentError(MappingError, TypeError):
    """A value cannot be assigned to the destination field"""

    def __init__(self, field_name: str, value_type: Any, field_type: Any, message: Optional[str] = None):
        self.field_name = field_name
        self.value_type = value_type
        self.field_type = field_type
        if message is None:
            message = f"cannot assign {_type_name(value_type)} to {_type_name(field_type)}"
        super().__init__(message)


class ExtractionError(MappingError):
    """Building a record failed while setting one of its fields"""

    def __init__(self, field_name: str, cause: Exception, context: Optional[str] = None):
        self.field_name = field_name
        self.cause = cause
        self.context = context
        message = f"setting field {field_name}: {cause}"
        if context:
            message = f"{context}: {message}"
        super().__init__(message)

    def with_context(self, context: str) -> "ExtractionError":
        """Copy of this error prefixed with the caller's context"""
        return ExtractionError(self.field_name, self.cause, context=context)


def _type_name(tp: Any) -> str:
    if isinstance(tp, type):
        return tp.__name__
    return str(tp).replace("typing.", "")
