"""
Exception types raised while generating vocabulary constants.

Every error carries the vocabulary locator (or output path) it concerns so
that the CLI can name the failing vocabulary. ``is_fatal`` tells the
pipeline whether the whole run must abort or whether it may continue with
the next vocabulary.
"""

from typing import Optional


class VocabGenError(Exception):
    """Base class for all generator errors."""

    is_fatal: bool = True

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigurationError(VocabGenError):
    """Exception raised for invalid or incomplete configuration."""


class FetchError(VocabGenError):
    """Exception raised when a vocabulary locator cannot be read."""

    def __init__(self, locator: str, cause: Optional[BaseException] = None, message: Optional[str] = None):
        self.locator = locator
        self.cause = cause
        detail = message or (str(cause) if cause else "unknown error")
        super().__init__(f"Failed to fetch vocabulary {locator}: {detail}")


class FormatUnresolvedError(VocabGenError):
    """Exception raised when no serialization format can be determined."""

    def __init__(self, locator: str, content_type: Optional[str] = None):
        self.locator = locator
        self.content_type = content_type
        hint = f" (content type: {content_type})" if content_type else ""
        super().__init__(
            f"Could not determine RDF format for {locator}{hint} and no fallback format is configured"
        )


class ParseError(VocabGenError):
    """Exception raised when the statement producer rejects a document."""

    def __init__(self, locator: str, details: Optional[str] = None):
        self.locator = locator
        self.details = details
        super().__init__(f"Could not parse vocabulary {locator}: {details}")


class AssemblyError(VocabGenError):
    """Exception raised when a vocabulary model cannot be assembled."""

    def __init__(self, locator: str, message: str):
        self.locator = locator
        super().__init__(f"Vocabulary {locator}: {message}")


class NameClashError(VocabGenError):
    """Exception raised by the 'error' clash policy."""

    def __init__(self, name: str, identifier: str):
        self.name = name
        self.identifier = identifier
        super().__init__(
            f"Name '{name}' for {identifier} maps to the same constant as an earlier entity"
        )


class WriteError(VocabGenError):
    """Exception raised when a generated file cannot be written."""

    is_fatal = False

    def __init__(self, path: str, cause: Optional[BaseException] = None):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to write {path}: {cause}")


class RenderError(VocabGenError):
    """Exception raised when a template cannot be rendered."""

    def __init__(self, locator: str, details: Optional[str] = None):
        self.locator = locator
        self.details = details
        super().__init__(f"Could not render vocabulary {locator}: {details}")
