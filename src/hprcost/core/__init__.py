"""Core utilities shared across hprcost modules."""

from .errors import HPRValueError
from .numeric import first_positive, parse_number

__all__ = ["HPRValueError", "first_positive", "parse_number"]
