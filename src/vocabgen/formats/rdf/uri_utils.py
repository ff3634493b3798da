"""
URI parsing helpers.

An IRI is split into a namespace and a local name at the last '#', or the
last '/' when there is no '#', or the last ':' when there is neither.
"""

import logging
from pathlib import PurePosixPath
from typing import Tuple
from urllib.parse import urlparse

logger = logging.getLogger(__name__)


class URIUtils:
    """Utilities for splitting IRIs and locators."""

    @staticmethod
    def _split_index(iri: str) -> int:
        for separator in ("#", "/", ":"):
            idx = iri.rfind(separator)
            if idx >= 0:
                return idx + 1
        raise ValueError(f"Not a valid absolute IRI: {iri!r}")

    @classmethod
    def split(cls, iri: str) -> Tuple[str, str]:
        """
        Split an IRI into (namespace, local name).

        Args:
            iri: Absolute IRI string

        Returns:
            Tuple of namespace (including the separator) and local name

        Raises:
            ValueError: If the IRI contains no separator
        """
        iri = str(iri)
        idx = cls._split_index(iri)
        return iri[:idx], iri[idx:]

    @classmethod
    def local_name(cls, iri: str) -> str:
        """Return the local (short) name of an IRI."""
        return cls.split(iri)[1]

    @classmethod
    def namespace_of(cls, iri: str) -> str:
        """Return the namespace segment of an IRI."""
        return cls.split(iri)[0]

    @staticmethod
    def last_path_segment(locator: str) -> str:
        """
        Return the last non-empty path segment of a locator.

        Falls back to the host name when the path is empty, e.g.
        ``http://xmlns.com/foaf/0.1/`` gives ``0.1`` and
        ``https://schema.org/`` gives ``schema.org``.
        """
        parsed = urlparse(locator)
        segments = [s for s in PurePosixPath(parsed.path or "/").parts if s not in ("/", "")]
        if segments:
            return segments[-1]
        if parsed.hostname:
            return parsed.hostname
        raise ValueError(f"Cannot derive a file name from locator: {locator}")
