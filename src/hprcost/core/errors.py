"""Exceptions raised for invalid calculator input."""

class HPRValueError(ValueError):
    """Raised for invalid admin input such as an unknown species or settings key.

    Parsing and calculation never raise it; they degrade to zero values instead.
    """


__all__ = ["HPRValueError"]
