"""Unsigned Q64.128 fixed-point arithmetic: the value type, squares and roots, wide-integer helpers."""

__version__ = "0.1.0"
__all__ = ["fixed", "roots", "wide"]