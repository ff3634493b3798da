"""
Core infrastructure for the vocabulary generator.

- Error hierarchy (VocabGenError and subclasses)
- Locator validation (LocatorValidator)
- Resource fetching and caching (core.platform)
- Run orchestration (core.services)

Usage:
    from vocabgen.core import VocabGenError, FetchError
    from vocabgen.core.platform import ResourceFetcher
    from vocabgen.core.services import VocabularyPipeline
"""

from .errors import (
    AssemblyError,
    ConfigurationError,
    FetchError,
    FormatUnresolvedError,
    NameClashError,
    ParseError,
    RenderError,
    VocabGenError,
    WriteError,
)

__all__ = [
    "AssemblyError",
    "ConfigurationError",
    "FetchError",
    "FormatUnresolvedError",
    "NameClashError",
    "ParseError",
    "RenderError",
    "VocabGenError",
    "WriteError",
]
