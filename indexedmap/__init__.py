"""An insertion-ordered hash map with positional access, sorting and searching."""

__version__ = "0.1.0"
__all__ = ["errors", "store", "sorting", "map"]