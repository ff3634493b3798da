"""
Vocabulary Resource Fetcher

Resolves a vocabulary locator to a byte stream and an RDF format, using a
local file cache so that the same vocabulary is downloaded at most once.

Format resolution order:
1. explicit format hint
2. file extension of the locator
3. Content-Type of the response to a request negotiating Turtle / RDF/XML
4. configured fallback format

Cache entries are never invalidated: once a file exists under the cache
directory it is used for its locator without any network access.
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterable, Optional

import requests

from vocabgen.constants import CacheConfig, FetchConfig
from vocabgen.core.errors import FetchError, FormatUnresolvedError
from vocabgen.core.validators import LocatorValidator
from vocabgen.formats.rdf.format_table import FormatTable, RDFFormat
from vocabgen.formats.rdf.uri_utils import URIUtils

logger = logging.getLogger(__name__)


@dataclass
class FetcherConfig:
    """Configuration for resource fetching and caching."""
    cache_directory: str = CacheConfig.DEFAULT_CACHE_ROOT
    timeout: int = FetchConfig.DEFAULT_TIMEOUT_SECONDS
    fallback_format: Optional[str] = FetchConfig.DEFAULT_FALLBACK_FORMAT
    allowed_schemes: Iterable[str] = FetchConfig.DEFAULT_ALLOWED_SCHEMES
    block_private_hosts: bool = False

    @property
    def cache_path(self) -> Path:
        """Directory holding cached vocabulary documents."""
        return Path(os.path.expanduser(str(self.cache_directory))) / CacheConfig.SUBDIRECTORY


class FetchedResource:
    """
    An opened vocabulary document.

    Use as a context manager so the underlying file or HTTP response is
    released:

        with fetcher.fetch(url, use_cache=True) as resource:
            data = resource.read()
    """

    def __init__(
        self,
        locator: str,
        rdf_format: RDFFormat,
        stream: BinaryIO,
        cache_path: Optional[Path] = None,
        from_cache: bool = False,
        response: Optional[requests.Response] = None,
    ):
        self.locator = locator
        self.rdf_format = rdf_format
        self.stream = stream
        self.cache_path = cache_path
        self.from_cache = from_cache
        self._response = response

    def read(self) -> bytes:
        return self.stream.read()

    def close(self) -> None:
        try:
            self.stream.close()
        finally:
            if self._response is not None:
                self._response.close()

    def __enter__(self) -> 'FetchedResource':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        origin = f"cache:{self.cache_path}" if self.from_cache else self.locator
        return f"FetchedResource({origin}, format={self.rdf_format.name})"


class ResourceFetcher:
    """
    Fetches vocabulary documents over HTTP(S) or from the local filesystem.

    ``network_requests`` counts the HTTP requests issued by this instance.
    """

    def __init__(self, config: Optional[FetcherConfig] = None):
        self.config = config or FetcherConfig()
        self.network_requests = 0
        self._fallback = None
        if self.config.fallback_format:
            self._fallback = FormatTable.by_name(self.config.fallback_format)
            if self._fallback is None:
                raise ValueError(f"Unknown fallback format: {self.config.fallback_format}")

    # ------------------------------------------------------------------
    # Format resolution
    # ------------------------------------------------------------------

    def _hint_format(self, hint: Optional[str]) -> Optional[RDFFormat]:
        if not hint:
            return None
        fmt = FormatTable.for_content_type(hint) or FormatTable.by_name(hint)
        if fmt is None:
            logger.warning(f"Ignoring unknown format hint '{hint}'")
        return fmt

    def resolve_format(
        self,
        locator: str,
        content_type: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> RDFFormat:
        """
        Determine the RDF format of a document.

        Args:
            locator: Locator of the document
            content_type: Content-Type reported by the server, if any
            hint: Caller-supplied format name or MIME type

        Returns:
            The resolved RDFFormat

        Raises:
            FormatUnresolvedError: If nothing matches and no fallback is configured
        """
        fmt = (
            self._hint_format(hint)
            or FormatTable.for_file_name(self._path_of(locator))
            or FormatTable.for_content_type(content_type)
        )
        if fmt is not None:
            return fmt
        if self._fallback is not None:
            logger.debug(f"Using fallback format {self._fallback.label} for {locator}")
            return self._fallback
        raise FormatUnresolvedError(locator, content_type)

    @staticmethod
    def _path_of(locator: str) -> str:
        if LocatorValidator.is_remote(locator):
            from urllib.parse import urlparse
            return urlparse(locator).path
        return locator

    # ------------------------------------------------------------------
    # Network
    # ------------------------------------------------------------------

    def _request(self, locator: str) -> requests.Response:
        """
        Issue a GET request negotiating an RDF serialization.

        Raises:
            FetchError: On timeout, connection failure or HTTP error status
        """
        timeout = self.config.timeout
        safe_locator = LocatorValidator.sanitize_for_logging(locator)
        self.network_requests += 1
        try:
            logger.info(f"Downloading {safe_locator}")
            response = requests.get(
                locator,
                headers={"Accept": FetchConfig.ACCEPT_HEADER},
                timeout=timeout,
                stream=True,
            )
        except requests.exceptions.Timeout as e:
            logger.error(f"Request for {safe_locator} timed out after {timeout}s")
            raise FetchError(locator, e, f"request timed out after {timeout} seconds")
        except requests.exceptions.ConnectionError as e:
            logger.error(f"Connection error for {safe_locator}: {e}")
            raise FetchError(locator, e)
        except requests.exceptions.RequestException as e:
            logger.error(f"Request error for {safe_locator}: {e}")
            raise FetchError(locator, e)

        if response.status_code >= 400:
            response.close()
            raise FetchError(locator, message=f"HTTP {response.status_code}")
        return response

    # ------------------------------------------------------------------
    # Cache
    # ------------------------------------------------------------------

    def cache_file_name(self, locator: str, rdf_format: Optional[RDFFormat] = None) -> str:
        """
        Derive the cache file name for a locator.

        The last path segment is used as is when it carries a known RDF
        extension; otherwise the canonical extension of ``rdf_format`` is
        appended.
        """
        segment = URIUtils.last_path_segment(locator)
        if FormatTable.has_known_extension(segment) or rdf_format is None:
            return segment
        return segment + rdf_format.canonical_extension

    def _find_cached(self, locator: str, hint: Optional[RDFFormat]) -> Optional[Path]:
        cache_dir = self.config.cache_path
        segment = URIUtils.last_path_segment(locator)
        if FormatTable.has_known_extension(segment):
            candidates = [cache_dir / segment]
        elif hint is not None:
            candidates = [cache_dir / (segment + hint.canonical_extension)]
        else:
            candidates = [cache_dir / (segment + fmt.canonical_extension) for fmt in FormatTable.FORMATS]
        for path in candidates:
            if path.is_file():
                return path
        return None

    @staticmethod
    def _persist(response: requests.Response, target: Path, locator: str) -> None:
        """Write a response body to ``target`` via a temporary file and rename."""
        tmp_name = None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                dir=target.parent, prefix=f".{target.name}.", suffix=".part", delete=False
            ) as tmp:
                tmp_name = tmp.name
                for chunk in response.iter_content(chunk_size=FetchConfig.CHUNK_SIZE):
                    if chunk:
                        tmp.write(chunk)
            os.replace(tmp_name, target)
            tmp_name = None
        except requests.exceptions.RequestException as e:
            raise FetchError(locator, e)
        except OSError as e:
            logger.error(f"Could not write cache file {target}: {e}")
            raise FetchError(locator, e, f"could not write cache file {target}: {e}")
        finally:
            response.close()
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

    @staticmethod
    def _open(path: Path, locator: str) -> BinaryIO:
        try:
            return open(path, 'rb')
        except OSError as e:
            raise FetchError(locator, e)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def fetch(
        self,
        locator: str,
        use_cache: bool = False,
        format_hint: Optional[str] = None,
    ) -> FetchedResource:
        """
        Open a vocabulary document.

        Args:
            locator: URL or local path of the document
            use_cache: Serve from / store into the cache directory
            format_hint: Optional format name or MIME type overriding detection

        Returns:
            FetchedResource (close it, or use it as a context manager)

        Raises:
            FetchError: If the locator is invalid or cannot be read
            FormatUnresolvedError: If no format can be determined
        """
        try:
            locator = LocatorValidator.validate_locator(
                locator,
                allowed_schemes=self.config.allowed_schemes,
                block_private_hosts=self.config.block_private_hosts,
            )
        except (TypeError, ValueError) as e:
            raise FetchError(str(locator), e)

        if not LocatorValidator.is_remote(locator):
            return self._fetch_local(locator, format_hint)
        if not use_cache:
            return self._fetch_direct(locator, format_hint)
        return self._fetch_cached(locator, format_hint)

    def _fetch_local(self, locator: str, format_hint: Optional[str]) -> FetchedResource:
        path = LocatorValidator.to_path(locator)
        if not path.is_file():
            raise FetchError(locator, FileNotFoundError(f"File not found: {path}"))
        fmt = self.resolve_format(str(path), hint=format_hint)
        logger.debug(f"Opening local vocabulary {path} as {fmt.label}")
        return FetchedResource(locator, fmt, self._open(path, locator))

    def _fetch_direct(self, locator: str, format_hint: Optional[str]) -> FetchedResource:
        response = self._request(locator)
        try:
            fmt = self.resolve_format(
                locator, content_type=response.headers.get("Content-Type"), hint=format_hint
            )
        except FormatUnresolvedError:
            response.close()
            raise
        raw = response.raw
        if hasattr(raw, "decode_content"):
            raw.decode_content = True
        return FetchedResource(locator, fmt, raw, response=response)

    def _fetch_cached(self, locator: str, format_hint: Optional[str]) -> FetchedResource:
        hint = self._hint_format(format_hint)
        try:
            cached = self._find_cached(locator, hint)
        except ValueError as e:
            raise FetchError(locator, e)

        if cached is not None:
            fmt = hint or FormatTable.for_file_name(cached.name) or self.resolve_format(locator)
            logger.info(f"Using cached copy of {locator}: {cached}")
            return FetchedResource(locator, fmt, self._open(cached, locator), cache_path=cached, from_cache=True)

        response = self._request(locator)
        try:
            fmt = self.resolve_format(
                locator, content_type=response.headers.get("Content-Type"), hint=format_hint
            )
        except FormatUnresolvedError:
            response.close()
            raise
        target = self.config.cache_path / self.cache_file_name(locator, fmt)
        self._persist(response, target, locator)
        logger.info(f"Cached {locator} as {target}")
        return FetchedResource(locator, fmt, self._open(target, locator), cache_path=target)
