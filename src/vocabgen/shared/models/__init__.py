"""
Shared data models for the vocabulary generator.

Usage:
    from vocabgen.shared.models import VocabularySource, EntityRecord, VocabularyModel
"""

from .vocabulary import (
    EntityRecord,
    EntityRole,
    OutputType,
    VocabularyModel,
    VocabularySource,
    constant_name_for,
)

__all__ = [
    "EntityRecord",
    "EntityRole",
    "OutputType",
    "VocabularyModel",
    "VocabularySource",
    "constant_name_for",
]
