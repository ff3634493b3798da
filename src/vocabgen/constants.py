"""
Centralized configuration constants for the RDF vocabulary generator.

This module provides a single source of truth for all configuration constants,
default values, and limits used throughout the application.
"""

from enum import IntEnum
from typing import Final

# ============================================================================
# Exit Codes
# ============================================================================

class ExitCode(IntEnum):
    """Standard exit codes for CLI commands.

    Following Unix conventions:
    - 0: Success
    - 1: General error
    - 2: Usage error
    - 3+: Specific error categories
    """
    SUCCESS = 0
    ERROR = 1
    USAGE_ERROR = 2
    CONFIG_ERROR = 3
    FETCH_ERROR = 4
    PARSE_ERROR = 5
    WRITE_ERROR = 6


# ============================================================================
# Well-known vocabulary terms
# ============================================================================

class VocabTerms:
    """IRIs consulted by the statement classifier that rdflib does not name."""

    VANN_NAMESPACE: Final[str] = "http://purl.org/vocab/vann/"
    """Vocabulary annotation namespace (preferredNamespaceUri/Prefix)."""

    HAS_PREFIX: Final[str] = "has_"
    """Prefix applied to property names that collide with a class name."""


# ============================================================================
# Fetching
# ============================================================================

class FetchConfig:
    """Network fetch configuration constants."""

    DEFAULT_TIMEOUT_SECONDS: Final[int] = 30
    """Default HTTP request timeout."""

    ACCEPT_HEADER: Final[str] = "text/turtle, application/rdf+xml;q=0.9"
    """Content negotiation preferring Turtle with RDF/XML as fallback."""

    DEFAULT_FALLBACK_FORMAT: Final[str] = "turtle"
    """Format assumed when neither extension nor content type resolves one."""

    CHUNK_SIZE: Final[int] = 64 * 1024
    """Bytes per chunk when persisting a download to the cache."""

    DEFAULT_ALLOWED_SCHEMES: Final[tuple] = ("http", "https", "file")
    """Locator schemes accepted by default."""


# ============================================================================
# Cache
# ============================================================================

class CacheConfig:
    """Vocabulary cache layout."""

    DEFAULT_CACHE_ROOT: Final[str] = "~/.cache"
    """Default base directory for the cache."""

    SUBDIRECTORY: Final[str] = "vocabgen/vocabularies"
    """Fixed sub-path below the cache root holding cached documents."""


# ============================================================================
# Output
# ============================================================================

class OutputConfig:
    """Generated output defaults."""

    DEFAULT_OUTPUT_DIRECTORY: Final[str] = "target/generated-sources"
    """Default root directory for generated sources."""

    DEFAULT_OUTPUT_TYPE: Final[str] = "MODERN"
    """Default rendering variant."""

    DEFAULT_CLASH_POLICY: Final[str] = "drop"
    """Default strategy for properties whose constant names clash."""

    FILE_ENCODING: Final[str] = "utf-8"
    """Encoding of generated files."""

    RESERVED_CONSTANTS: Final[frozenset] = frozenset({"NAMESPACE", "PREFIX", "NS"})
    """Members every template emits next to the entity constants."""


# ============================================================================
# Logging
# ============================================================================

class LoggingConfig:
    """Logging configuration."""

    DEFAULT_LOG_LEVEL: Final[str] = "INFO"
    """Default logging level."""

    LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    """Default log format string."""

    DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
    """Default date format for logs."""

    DEFAULT_FORMAT_STYLE: Final[str] = "text"
    """Human-readable formatter style."""

    JSON_DATE_FORMAT: Final[str] = "%Y-%m-%dT%H:%M:%S.%fZ"
    """ISO-8601 timestamp format for structured logs."""

    SUPPORTED_FORMATS: Final[tuple[str, ...]] = ("text", "json")
    """Supported formatter styles."""

    MAX_LOG_FILE_MB: Final[int] = 10
    """Maximum log file size before rotation (MB)."""

    LOG_BACKUP_COUNT: Final[int] = 5
    """Number of backup log files to keep."""

    ROTATION_ENABLED: Final[bool] = True
    """Enable log rotation by default when a file handler is configured."""


# ============================================================================
# Command line
# ============================================================================

class CLIConfig:
    """Command-line defaults."""

    DEFAULT_CONFIG_FILE: Final[str] = "vocabgen.json"
    """Configuration file looked up in the working directory when --config is not given."""

    HEADER_WIDTH: Final[int] = 60
    """Width of printed section headers."""
