"""
Centralized test fixtures for the vocabgen test suite.

This package provides reusable fixtures for testing, including:
- Vocabulary documents (Turtle, RDF/XML, N-Triples, JSON-LD)
- Configuration dictionaries
- Mock HTTP responses

Usage:
    from fixtures import EXAMPLE_VOCAB_TTL, SAMPLE_GENERATOR_CONFIG

Or use the pytest fixtures in conftest.py which import from here.
"""

from .ttl_fixtures import (
    EX_NAMESPACE,
    EXAMPLE_VOCAB_TTL,
    NO_METADATA_TTL,
    CLASH_TTL,
    MALFORMED_TTL,
    EXAMPLE_VOCAB_RDFXML,
    EXAMPLE_VOCAB_NT,
    EXAMPLE_VOCAB_JSONLD,
)

from .http_fixtures import make_response

from .config_fixtures import (
    SAMPLE_GENERATOR_CONFIG,
    MINIMAL_GENERATOR_CONFIG,
)

__all__ = [
    'EX_NAMESPACE',
    'EXAMPLE_VOCAB_TTL',
    'NO_METADATA_TTL',
    'CLASH_TTL',
    'MALFORMED_TTL',
    'EXAMPLE_VOCAB_RDFXML',
    'EXAMPLE_VOCAB_NT',
    'EXAMPLE_VOCAB_JSONLD',
    'SAMPLE_GENERATOR_CONFIG',
    'MINIMAL_GENERATOR_CONFIG',
    'make_response',
]
