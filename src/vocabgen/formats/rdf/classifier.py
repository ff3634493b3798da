"""
Statement Classifier Module

Reduces a stream of RDF statements to the ordered sets of classes,
properties and deprecated subjects of a vocabulary, and infers the
vocabulary's namespace and prefix from the document when the caller did not
supply them.

The classifier is an explicit fold: ``fold_event(state, event)`` takes a
``ClassificationState`` and one stream event and returns the updated state.
``StatementClassifier.classify`` applies it with ``functools.reduce``;
``ClassificationFold`` applies it incrementally as a parser callback.

Decision table, evaluated top to bottom for every statement (first match wins):

1. vann:preferredNamespaceUri while the namespace is unset -> namespace
2. vann:preferredNamespacePrefix while the prefix is unset -> prefix
3. subject outside the resolved namespace -> ignored
4. rdf:type owl:Class / rdfs:Class -> classes
5. rdf:type owl:ObjectProperty / owl:DatatypeProperty / rdf:Property -> properties
6. owl:deprecated true -> deprecated
"""

import logging
from dataclasses import dataclass, field
from functools import reduce
from typing import BinaryIO, Dict, Iterable, Tuple, Union

from rdflib import OWL, RDF, RDFS, Literal, URIRef
from rdflib.namespace import VANN

from vocabgen.shared.models import VocabularySource
from .format_table import RDFFormat
from .statement_stream import NamespaceDeclaration, Statement, StatementStreamParser, StreamEvent
from .uri_utils import URIUtils

logger = logging.getLogger(__name__)


CLASS_TYPES = frozenset({OWL.Class, RDFS.Class})
PROPERTY_TYPES = frozenset({OWL.ObjectProperty, OWL.DatatypeProperty, RDF.Property})
TRUE_LEXICAL_FORMS = frozenset({"true", "1"})


@dataclass
class ClassificationState:
    """
    Accumulator threaded through the fold.

    The three entity collections are dicts used as insertion-ordered sets.
    """
    source: VocabularySource
    classes: Dict[URIRef, None] = field(default_factory=dict)
    properties: Dict[URIRef, None] = field(default_factory=dict)
    deprecated: Dict[URIRef, None] = field(default_factory=dict)
    statements_seen: int = 0
    statements_ignored: int = 0


@dataclass(frozen=True)
class ClassificationResult:
    """Outcome of classifying one vocabulary document."""
    classes: Tuple[URIRef, ...]
    properties: Tuple[URIRef, ...]
    deprecated: Tuple[URIRef, ...]
    source: VocabularySource
    statements_seen: int = 0

    def get_summary(self) -> str:
        return (
            f"{len(self.classes)} classes, {len(self.properties)} properties, "
            f"{len(self.deprecated)} deprecated ({self.statements_seen} statements)"
        )


def is_true_literal(value) -> bool:
    """True when ``value`` is a literal whose lexical form reads as boolean true."""
    return isinstance(value, Literal) and str(value).strip().lower() in TRUE_LEXICAL_FORMS


def _outside_namespace(subject: URIRef, namespace: str) -> bool:
    try:
        return URIUtils.namespace_of(subject) != namespace
    except ValueError:
        return True


def _fold_statement(state: ClassificationState, st: Statement) -> ClassificationState:
    s, p, o = st
    source = state.source
    state.statements_seen += 1

    if p == VANN.preferredNamespaceUri and source.namespace is None:
        state.source = source.resolve(namespace=str(o))
        logger.debug(f"Namespace resolved from document: {o}")
    elif p == VANN.preferredNamespacePrefix and source.prefix is None:
        state.source = source.resolve(prefix=str(o))
        logger.debug(f"Prefix resolved from document: {o}")
    elif not isinstance(s, URIRef):
        # blank nodes never name a vocabulary term
        state.statements_ignored += 1
    elif source.namespace is not None and _outside_namespace(s, source.namespace):
        state.statements_ignored += 1
    elif p == RDF.type and o in CLASS_TYPES:
        if s not in state.classes:
            state.classes[s] = None
            if s in state.properties:
                del state.properties[s]
                logger.debug(f"{s} asserted as class and property, keeping class")
    elif p == RDF.type and o in PROPERTY_TYPES:
        if s not in state.properties and s not in state.classes:
            state.properties[s] = None
    elif p == OWL.deprecated and is_true_literal(o):
        state.deprecated[s] = None
    return state


def _fold_namespace(state: ClassificationState, decl: NamespaceDeclaration) -> ClassificationState:
    if decl.uri == state.source.url:
        state.source = state.source.resolve(prefix=decl.prefix or None, namespace=decl.uri)
        logger.debug(f"Seeded prefix '{decl.prefix}' from namespace declaration {decl.uri}")
    return state


def fold_event(state: ClassificationState, event: StreamEvent) -> ClassificationState:
    """
    Apply one stream event to the classification state.

    Args:
        state: Current accumulator
        event: Statement or NamespaceDeclaration

    Returns:
        The updated accumulator
    """
    if isinstance(event, NamespaceDeclaration):
        return _fold_namespace(state, event)
    if isinstance(event, Statement):
        return _fold_statement(state, event)
    return _fold_statement(state, Statement(*event))


class ClassificationFold:
    """Parser callback that threads a ClassificationState through fold_event."""

    def __init__(self, source: VocabularySource):
        self.state = ClassificationState(source=source)

    def __call__(self, event: StreamEvent) -> None:
        self.state = fold_event(self.state, event)


class StatementClassifier:
    """
    Classifies the statements of a vocabulary document.

    Example:
        result = StatementClassifier.classify(events, VocabularySource(url))
        print(result.classes, result.source.prefix)
    """

    @staticmethod
    def finish(state: ClassificationState) -> ClassificationResult:
        """Freeze an accumulator into a ClassificationResult."""
        result = ClassificationResult(
            classes=tuple(state.classes),
            properties=tuple(state.properties),
            deprecated=tuple(state.deprecated),
            source=state.source,
            statements_seen=state.statements_seen,
        )
        logger.info(f"Classified {state.source.url}: {result.get_summary()}")
        if state.statements_ignored:
            logger.debug(f"Ignored {state.statements_ignored} statements outside the vocabulary")
        if not result.classes and not result.properties:
            logger.warning(f"No classes or properties found in {state.source.url}")
        return result

    @classmethod
    def classify(
        cls,
        events: Iterable[Union[StreamEvent, Tuple]],
        source: VocabularySource,
    ) -> ClassificationResult:
        """
        Classify an iterable of statements and namespace declarations.

        Args:
            events: Statements (or plain triples) and NamespaceDeclarations
            source: Vocabulary reference as supplied by the caller

        Returns:
            ClassificationResult with a resolved copy of ``source``
        """
        state = reduce(fold_event, events, ClassificationState(source=source))
        return cls.finish(state)

    @classmethod
    def classify_document(
        cls,
        stream: BinaryIO,
        rdf_format: Union[str, RDFFormat],
        source: VocabularySource,
    ) -> ClassificationResult:
        """
        Parse a document and classify its statements in a single pass.

        Raises:
            ParseError: If the document is malformed
            FetchError: If reading the stream fails
        """
        fold = ClassificationFold(source)
        StatementStreamParser.parse(stream, rdf_format, fold, locator=source.url)
        return cls.finish(fold.state)
