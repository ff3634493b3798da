"""
Input validation for the vocabulary generator.

Usage:
    from vocabgen.core.validators import LocatorValidator
"""

from .url import LocatorValidator

__all__ = ["LocatorValidator"]
