"""
Vocabulary locator validation.

A locator is either a remote URL (http/https) or a local document given as
a ``file://`` URL or a plain filesystem path.

Security features:
- Scheme validation against an allowlist
- Optional private/internal address blocking for remote locators

Usage:
    from vocabgen.core.validators import LocatorValidator

    locator = LocatorValidator.validate_locator("https://xmlns.com/foaf/spec/index.rdf")
    if LocatorValidator.is_remote(locator):
        ...
"""

import logging
import socket
from pathlib import Path
from typing import Any, Iterable, Optional
from urllib.parse import unquote, urlparse, urlunparse

from vocabgen.constants import FetchConfig

logger = logging.getLogger(__name__)


class LocatorValidator:
    """
    Validation helpers for vocabulary locators.

    Private-address blocking is off by default: build tools routinely fetch
    vocabularies from intranet hosts. Enable it when locators come from
    untrusted input.
    """

    # Private IPv4 address ranges (RFC 1918, RFC 5735)
    PRIVATE_IPV4_RANGES = [
        ('10.0.0.0', '10.255.255.255'),       # Class A private
        ('172.16.0.0', '172.31.255.255'),     # Class B private
        ('192.168.0.0', '192.168.255.255'),   # Class C private
        ('127.0.0.0', '127.255.255.255'),     # Loopback
        ('169.254.0.0', '169.254.255.255'),   # Link-local
        ('0.0.0.0', '0.255.255.255'),         # Current network
        ('100.64.0.0', '100.127.255.255'),    # Shared address space
    ]

    # Private IPv6 patterns
    PRIVATE_IPV6_PATTERNS = [
        '::1',          # Loopback
        'fe80:',        # Link-local
        'fc00:',        # Unique local (ULA)
        'fd00:',        # Unique local (ULA)
    ]

    REMOTE_SCHEMES = ('http', 'https')
    LOCAL_HOSTNAMES = ('localhost', 'localhost.localdomain')

    @classmethod
    def _ip_to_int(cls, ip: str) -> int:
        """Convert IPv4 address string to integer for range comparison."""
        parts = ip.split('.')
        return sum(int(part) << (8 * (3 - i)) for i, part in enumerate(parts))

    @classmethod
    def _is_private_ipv4(cls, ip: str) -> bool:
        try:
            ip_int = cls._ip_to_int(ip)
            for start, end in cls.PRIVATE_IPV4_RANGES:
                if cls._ip_to_int(start) <= ip_int <= cls._ip_to_int(end):
                    return True
            return False
        except (ValueError, AttributeError):
            return False

    @classmethod
    def _is_private_ipv6(cls, ip: str) -> bool:
        ip_lower = ip.lower()
        return any(ip_lower.startswith(pattern) for pattern in cls.PRIVATE_IPV6_PATTERNS)

    @classmethod
    def is_private_host(cls, hostname: str, check_dns: bool = True) -> bool:
        """Check whether a hostname is, or resolves to, a private address."""
        if hostname in cls.LOCAL_HOSTNAMES:
            return True

        try:
            socket.inet_aton(hostname)
            return cls._is_private_ipv4(hostname)
        except (socket.error, UnicodeError):
            pass

        try:
            socket.inet_pton(socket.AF_INET6, hostname)
            return cls._is_private_ipv6(hostname)
        except (socket.error, UnicodeError, ValueError):
            pass

        if not check_dns:
            return False

        try:
            for family, _, _, _, sockaddr in socket.getaddrinfo(hostname, None):
                ip = sockaddr[0]
                if family == socket.AF_INET and cls._is_private_ipv4(ip):
                    return True
                if family == socket.AF_INET6 and cls._is_private_ipv6(ip):
                    return True
        except socket.gaierror:
            logger.warning(f"Could not resolve hostname: {hostname}")
        return False

    @staticmethod
    def _scheme(locator: str) -> str:
        scheme = urlparse(locator).scheme.lower()
        # 'C:\vocab.ttl' parses with scheme 'c'
        return "" if len(scheme) == 1 else scheme

    @classmethod
    def is_remote(cls, locator: str) -> bool:
        """True for http(s) locators."""
        return cls._scheme(locator) in cls.REMOTE_SCHEMES

    @classmethod
    def to_path(cls, locator: str) -> Path:
        """
        Convert a local locator (file URL or plain path) to a Path.

        Raises:
            ValueError: If the locator is remote
        """
        if cls.is_remote(locator):
            raise ValueError(f"Not a local locator: {locator}")
        if cls._scheme(locator) == "file":
            return Path(unquote(urlparse(locator).path))
        return Path(locator)

    @classmethod
    def validate_locator(
        cls,
        locator: Any,
        allowed_schemes: Optional[Iterable[str]] = None,
        block_private_hosts: bool = False,
        check_dns: bool = True,
    ) -> str:
        """
        Validate a vocabulary locator.

        Args:
            locator: Locator to validate
            allowed_schemes: Accepted schemes (default: http, https, file).
                Plain paths count as 'file'.
            block_private_hosts: Reject remote locators pointing to private
                or loopback addresses
            check_dns: Resolve host names when blocking private hosts

        Returns:
            The stripped locator string

        Raises:
            TypeError: If the locator is not a string
            ValueError: If the locator is empty, uses a disallowed scheme,
                lacks a host, or points to a blocked address
        """
        if not isinstance(locator, str):
            raise TypeError(f"Locator must be string, got {type(locator).__name__}")

        locator = locator.strip()
        if not locator:
            raise ValueError("Locator cannot be empty")

        if allowed_schemes is None:
            allowed_schemes = FetchConfig.DEFAULT_ALLOWED_SCHEMES
        allowed = [s.lower() for s in allowed_schemes]

        scheme = cls._scheme(locator) or "file"
        if scheme not in allowed:
            raise ValueError(
                f"Locator scheme '{scheme}' not allowed. Allowed schemes: {', '.join(allowed)}"
            )

        if scheme in cls.REMOTE_SCHEMES:
            hostname = urlparse(locator).hostname
            if not hostname:
                raise ValueError(f"Locator must include a hostname: {locator}")
            if block_private_hosts and cls.is_private_host(hostname.lower(), check_dns=check_dns):
                raise ValueError(
                    f"Locator points to a private/internal address, which is blocked: {hostname}"
                )

        return locator

    @classmethod
    def sanitize_for_logging(cls, locator: str) -> str:
        """Remove credentials and query parameters from a locator for logging."""
        if not cls.is_remote(locator):
            return locator
        try:
            parsed = urlparse(locator)
            netloc = parsed.hostname or ''
            if parsed.port:
                netloc = f"{netloc}:{parsed.port}"
            return urlunparse(parsed._replace(netloc=netloc, query='', fragment=''))
        except ValueError:
            return "[locator sanitization failed]"
