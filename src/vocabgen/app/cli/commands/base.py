"""
Base command class.

This module contains the base class all CLI commands inherit from: lazy
configuration loading, command-line overrides and logging setup.
"""

import argparse
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from vocabgen.constants import ExitCode
from vocabgen.core.errors import (
    ConfigurationError,
    FetchError,
    FormatUnresolvedError,
    ParseError,
    VocabGenError,
    WriteError,
)
from vocabgen.core.platform import ResourceFetcher
from vocabgen.core.services import GeneratorConfig
from ..helpers import get_default_config_path, setup_logging


logger = logging.getLogger(__name__)

# Arguments copied onto GeneratorConfig when given on the command line
CONFIG_OVERRIDES = (
    'output_directory',
    'package',
    'output_type',
    'overwrite',
    'include_deprecated',
    'use_cache',
    'cache_directory',
    'request_timeout',
    'fallback_format',
    'name_clash_policy',
)


def exit_code_for(error: VocabGenError) -> int:
    """Map a generator error to the process exit code."""
    if isinstance(error, ConfigurationError):
        return ExitCode.CONFIG_ERROR
    if isinstance(error, FetchError):
        return ExitCode.FETCH_ERROR
    if isinstance(error, (FormatUnresolvedError, ParseError)):
        return ExitCode.PARSE_ERROR
    if isinstance(error, WriteError):
        return ExitCode.WRITE_ERROR
    return ExitCode.ERROR


class BaseCommand(ABC):
    """
    Base class for CLI commands.

    Provides common functionality like configuration loading and logging setup.
    Subclasses should implement the execute() method.
    """

    def __init__(
        self,
        config_path: Optional[str] = None,
        fetcher: Optional[ResourceFetcher] = None,
    ):
        """
        Initialize the command.

        Args:
            config_path: Path to configuration file. Without one, ./vocabgen.json
                is used when it exists.
            fetcher: Optional fetcher instance (for dependency injection).
        """
        self.config_path = config_path
        self._fetcher = fetcher
        self._config: Optional[GeneratorConfig] = None

    @property
    def config(self) -> GeneratorConfig:
        """Lazy-load configuration."""
        if self._config is None:
            self._config = self._load_config()
        return self._config

    def _load_config(self) -> GeneratorConfig:
        if self.config_path:
            return GeneratorConfig.from_file(self.config_path)
        default_path = get_default_config_path()
        if Path(default_path).is_file():
            logger.debug(f"Using configuration file {default_path}")
            return GeneratorConfig.from_file(default_path)
        return GeneratorConfig()

    def apply_overrides(self, args: argparse.Namespace) -> GeneratorConfig:
        """Apply command-line arguments on top of the loaded configuration."""
        overrides = {key: getattr(args, key, None) for key in CONFIG_OVERRIDES}
        self._config = self.config.with_overrides(**overrides)
        return self._config

    def get_fetcher(self) -> ResourceFetcher:
        """Get or create the resource fetcher."""
        if self._fetcher is None:
            self._fetcher = ResourceFetcher(self.config.fetcher_config())
        return self._fetcher

    def setup_logging_from_args(self, args: argparse.Namespace) -> None:
        """Configure logging from the configuration file and command-line flags."""
        level = getattr(args, 'log_level', None)
        if level is None and getattr(args, 'quiet', False):
            level = 'WARNING'
        settings = self._config.logging_settings if self._config is not None else {}
        setup_logging(level=level, log_file=getattr(args, 'log_file', None), config=settings)

    @abstractmethod
    def execute(self, args: argparse.Namespace) -> int:
        """
        Execute the command.

        Args:
            args: Parsed command-line arguments.

        Returns:
            Exit code (0 for success, non-zero for error).
        """
