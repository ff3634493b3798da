"""
RDF serialization format table.

Maps file extensions and MIME types to the rdflib parser names used to read
vocabulary documents, and gives each format a canonical file extension for
naming cached downloads.

N3 documents are read with the Turtle parser; vocabularies published as
.n3 use the Turtle subset of the notation.
"""

import logging
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Dict, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RDFFormat:
    """
    A serialization format known to the generator.

    Attributes:
        name: rdflib parser plugin name (e.g. 'turtle', 'xml').
        label: Human-readable name.
        extensions: File extensions, the first one being canonical.
        mime_types: Content types mapped to this format.
    """
    name: str
    label: str
    extensions: Tuple[str, ...]
    mime_types: Tuple[str, ...]

    @property
    def canonical_extension(self) -> str:
        return self.extensions[0]

    def __str__(self) -> str:
        return self.label


TURTLE = RDFFormat(
    "turtle", "Turtle",
    (".ttl", ".turtle", ".n3"),
    ("text/turtle", "application/x-turtle", "text/n3", "text/rdf+n3"),
)
RDF_XML = RDFFormat("xml", "RDF/XML", (".rdf", ".owl", ".xml"), ("application/rdf+xml", "application/xml", "text/xml"))
N_TRIPLES = RDFFormat("nt", "N-Triples", (".nt",), ("application/n-triples", "text/plain"))
JSON_LD = RDFFormat("json-ld", "JSON-LD", (".jsonld", ".json"), ("application/ld+json",))


class FormatTable:
    """Lookup of RDF formats by name, file extension or content type."""

    FORMATS: Tuple[RDFFormat, ...] = (TURTLE, RDF_XML, N_TRIPLES, JSON_LD)

    _BY_EXTENSION: Dict[str, RDFFormat] = {
        ext: fmt for fmt in FORMATS for ext in fmt.extensions
    }
    _BY_MIME_TYPE: Dict[str, RDFFormat] = {
        mime: fmt for fmt in FORMATS for mime in fmt.mime_types
    }
    _BY_NAME: Dict[str, RDFFormat] = {fmt.name: fmt for fmt in FORMATS}

    @classmethod
    def by_name(cls, name: Optional[str]) -> Optional[RDFFormat]:
        """Look up a format by rdflib name or label (case-insensitive)."""
        if not name:
            return None
        key = name.strip().lower()
        if key in cls._BY_NAME:
            return cls._BY_NAME[key]
        for fmt in cls.FORMATS:
            if fmt.label.lower() == key or key in (e.lstrip(".") for e in fmt.extensions):
                return fmt
        return None

    @classmethod
    def for_file_name(cls, file_name: Optional[str]) -> Optional[RDFFormat]:
        """
        Look up a format by the extension of a file name or URL path.

        Args:
            file_name: File name, path or URL path component

        Returns:
            The matching format, or None when the extension is unknown
        """
        if not file_name:
            return None
        suffix = PurePosixPath(file_name).suffix.lower()
        return cls._BY_EXTENSION.get(suffix)

    @classmethod
    def for_content_type(cls, content_type: Optional[str]) -> Optional[RDFFormat]:
        """
        Look up a format by an HTTP Content-Type header value.

        Parameters such as ``charset`` are ignored.
        """
        if not content_type:
            return None
        mime = content_type.split(";", 1)[0].strip().lower()
        fmt = cls._BY_MIME_TYPE.get(mime)
        if fmt is None:
            logger.debug(f"No RDF format registered for content type '{mime}'")
        return fmt

    @classmethod
    def has_known_extension(cls, file_name: str) -> bool:
        return cls.for_file_name(file_name) is not None
