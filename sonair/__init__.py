"""Data structures for an EVM-oriented compiler intermediate representation."""

__version__ = "0.1.0"
__all__ = ["isa", "layout", "linkage", "module", "triple", "types", "value"]