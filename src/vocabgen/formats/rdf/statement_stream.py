"""
Statement stream producer.

Drives an rdflib parser over a byte stream and delivers every parsed triple
and prefix declaration to a handler as soon as the parser produces it, in
document order, without building an in-memory graph. JSON-LD is the
exception: it is parsed into a graph first and then replayed.

Components:
- Statement / NamespaceDeclaration: the events delivered to handlers
- StatementSink: rdflib Graph whose add/bind forward events instead of storing
- DirectiveSink: Turtle sink reporting @prefix directives as they are read
- StatementStreamParser: format dispatch and error translation
"""

import logging
from typing import BinaryIO, Callable, NamedTuple, Optional, Union

from xml.sax import SAXException

from rdflib import Graph, Literal
from rdflib.exceptions import ParserError
from rdflib.plugins.parsers.notation3 import RDFSink, SinkParser
from rdflib.term import Node

from vocabgen.core.errors import FetchError, ParseError
from .format_table import FormatTable, RDFFormat

logger = logging.getLogger(__name__)


class Statement(NamedTuple):
    """A subject-predicate-object triple as produced by the parser."""
    subject: Node
    predicate: Node
    object: Node

    @property
    def object_is_literal(self) -> bool:
        return isinstance(self.object, Literal)


class NamespaceDeclaration(NamedTuple):
    """A prefix binding declared by the document."""
    prefix: str
    uri: str


StreamEvent = Union[Statement, NamespaceDeclaration]
EventHandler = Callable[[StreamEvent], None]


class _GuardedHandler:
    """Remembers the last exception raised by the wrapped handler."""

    def __init__(self, handler: EventHandler):
        self._handler = handler
        self.failure: Optional[BaseException] = None

    def __call__(self, event: StreamEvent) -> None:
        try:
            self._handler(event)
        except Exception as e:
            self.failure = e
            raise


class StatementSink(Graph):
    """
    Graph that forwards parser output to a handler instead of storing it.

    rdflib parsers for RDF/XML and N-Triples write into the graph they are
    given via ``add`` and ``bind``; overriding both turns the parser into a
    push-style statement stream. Turtle statements also arrive through
    ``add`` (see DirectiveSink for its prefixes).
    """

    def __init__(self, handler: EventHandler):
        super().__init__(bind_namespaces="none")
        self._handler = handler
        self.statement_count = 0

    def add(self, triple):
        s, p, o = triple
        self.statement_count += 1
        self._handler(Statement(s, p, o))
        return self

    def bind(self, prefix, namespace, override=True, replace=False):
        if namespace is None:
            return
        self._handler(NamespaceDeclaration(prefix or "", str(namespace)))


class DirectiveSink(RDFSink):
    """
    Turtle sink that reports ``@prefix`` directives when they are read.

    rdflib's TurtleParser only binds prefixes on the graph once the whole
    document is parsed. Driving SinkParser with this sink delivers each
    declaration before the statements that follow it.
    """

    def __init__(self, graph: StatementSink, handler: EventHandler):
        super().__init__(graph)
        self._handler = handler
        self.parser: Optional[SinkParser] = None

    def _declare(self, prefix: str, uri: bytes) -> None:
        # SinkParser passes a %-escaped copy; its own table holds the IRI as written
        namespace = self.parser._bindings.get(prefix) if self.parser is not None else None
        if namespace is None:
            namespace = uri.decode("latin-1")
        self._handler(NamespaceDeclaration(prefix, str(namespace)))

    def bind(self, pfx, uri) -> None:
        self._declare(pfx, uri)

    def setDefaultNamespace(self, *args: bytes) -> str:
        self._declare("", args[0])
        return ""


class StatementStreamParser:
    """
    Parse RDF documents into a stream of events.

    Example:
        events = []
        with open("foaf.rdf", "rb") as fh:
            StatementStreamParser.parse(fh, "xml", events.append, locator="foaf.rdf")
    """

    STREAMING_FORMATS = frozenset({"xml", "nt"})
    """Formats whose rdflib parsers write straight into the target graph."""

    PARSER_ERRORS = (ParserError, SyntaxError, SAXException, ValueError)
    """Exceptions rdflib parsers raise for malformed input."""

    @classmethod
    def parse(
        cls,
        stream: BinaryIO,
        rdf_format: Union[str, RDFFormat],
        handler: EventHandler,
        locator: str = "",
    ) -> int:
        """
        Parse ``stream`` and deliver events to ``handler``.

        Exceptions raised by ``handler`` propagate unchanged.

        Args:
            stream: Binary file-like object holding the document
            rdf_format: RDFFormat or rdflib parser name
            handler: Callable receiving each Statement / NamespaceDeclaration
            locator: Locator of the document, used as base IRI and in errors

        Returns:
            Number of statements delivered

        Raises:
            ParseError: If the document is malformed
            FetchError: If reading the stream fails
        """
        fmt = rdf_format if isinstance(rdf_format, RDFFormat) else FormatTable.by_name(rdf_format)
        if fmt is None:
            raise ParseError(locator, f"Unsupported RDF format: {rdf_format}")

        logger.debug(f"Parsing {locator or 'stream'} as {fmt.label}")
        guarded = _GuardedHandler(handler)
        try:
            if fmt.name == "turtle":
                count = cls._parse_turtle(stream, guarded, locator)
            elif fmt.name in cls.STREAMING_FORMATS:
                sink = StatementSink(guarded)
                sink.parse(source=stream, format=fmt.name, publicID=locator or None)
                count = sink.statement_count
            else:
                count = cls._parse_and_replay(stream, fmt, guarded, locator)
        except Exception as e:
            if e is guarded.failure or isinstance(e, (ParseError, FetchError)):
                raise
            if isinstance(e, OSError):
                raise FetchError(locator, e)
            if isinstance(e, cls.PARSER_ERRORS):
                logger.error(f"Failed to parse {locator}: {e}")
                raise ParseError(locator, str(e))
            logger.error(f"Unexpected parser failure for {locator}: {e}")
            raise ParseError(locator, f"{type(e).__name__}: {e}")

        logger.info(f"Parsed {count} statements from {locator or 'stream'}")
        return count

    @staticmethod
    def _parse_turtle(stream: BinaryIO, handler: EventHandler, locator: str) -> int:
        """Run SinkParser directly so prefix directives arrive in document order."""
        graph = StatementSink(handler)
        sink = DirectiveSink(graph, handler)
        parser = SinkParser(sink, baseURI=graph.absolutize(locator or ""), turtle=True)
        sink.parser = parser
        parser.loadStream(stream)
        return graph.statement_count

    @staticmethod
    def _parse_and_replay(
        stream: BinaryIO,
        fmt: RDFFormat,
        handler: EventHandler,
        locator: str,
    ) -> int:
        """Parse into an in-memory graph, then replay bindings and triples."""
        graph = Graph(bind_namespaces="none")
        graph.parse(source=stream, format=fmt.name, publicID=locator or None)
        for prefix, namespace in graph.namespaces():
            handler(NamespaceDeclaration(prefix, str(namespace)))
        count = 0
        for s, p, o in graph:
            handler(Statement(s, p, o))
            count += 1
        return count
