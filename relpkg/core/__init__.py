"""Core types shared by every layer."""

from .errors import ErrorCode
from .result import Err, Ok, Result
from .validation import FieldIssue, ValidationError

__all__ = [
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
    # validation
    "FieldIssue",
    "ValidationError",
]
