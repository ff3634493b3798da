"""
vocabgen - generate source-code constants from RDF vocabularies.

Fetches OWL/RDFS vocabularies, classifies their classes and properties,
resolves name-safe identifiers and renders one constants class per
vocabulary.
"""

__version__ = "0.3.0"
