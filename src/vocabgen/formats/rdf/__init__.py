"""
RDF vocabulary processing.

Pipeline stages for one vocabulary document:

- StatementStreamParser: parse a document into Statement events
- StatementClassifier: fold statements into classes/properties/deprecated
- IdentifierResolver: derive name-safe EntityRecords
- ModelAssembler: package everything into a VocabularyModel

Usage:
    from vocabgen.formats.rdf import StatementClassifier, IdentifierResolver
"""

from .assembly import ModelAssembler
from .classifier import (
    ClassificationFold,
    ClassificationResult,
    ClassificationState,
    StatementClassifier,
    fold_event,
)
from .format_table import FormatTable, RDFFormat
from .resolver import CLASH_POLICIES, IdentifierResolver, get_clash_policy
from .statement_stream import NamespaceDeclaration, Statement, StatementStreamParser
from .uri_utils import URIUtils

__all__ = [
    "CLASH_POLICIES",
    "ClassificationFold",
    "ClassificationResult",
    "ClassificationState",
    "FormatTable",
    "IdentifierResolver",
    "ModelAssembler",
    "NamespaceDeclaration",
    "RDFFormat",
    "Statement",
    "StatementClassifier",
    "StatementStreamParser",
    "URIUtils",
    "fold_event",
    "get_clash_policy",
]
