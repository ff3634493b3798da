"""
Generate command: run the full pipeline for every configured vocabulary.
"""

import argparse
import logging
import re
from typing import List, Optional

from vocabgen.constants import ExitCode
from vocabgen.core.errors import ConfigurationError, VocabGenError
from vocabgen.core.services import VocabularyPipeline
from vocabgen.shared.models import VocabularySource
from .base import BaseCommand, exit_code_for
from ..helpers import print_footer, print_header


logger = logging.getLogger(__name__)

_PREFIX_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_.-]*$")


def parse_vocabulary_argument(value: str) -> VocabularySource:
    """
    Parse a ``--vocabulary`` value of the form ``[PREFIX=]URL``.

    ``foaf=http://xmlns.com/foaf/spec/index.rdf`` sets the prefix;
    a bare URL leaves it to be inferred from the document.
    """
    value = value.strip()
    if not value:
        raise ConfigurationError("--vocabulary value cannot be empty")
    head, sep, tail = value.partition("=")
    if sep and tail and _PREFIX_PATTERN.match(head):
        return VocabularySource(url=tail, prefix=head)
    return VocabularySource(url=value)


class GenerateCommand(BaseCommand):
    """
    Generate constants classes.

    Usage:
        generate [--config FILE] [--vocabulary [PREFIX=]URL ...] [options]
    """

    def _vocabularies(self, args: argparse.Namespace) -> Optional[List[VocabularySource]]:
        values = getattr(args, 'vocabularies', None)
        if not values:
            return None
        return [parse_vocabulary_argument(v) for v in values]

    def execute(self, args: argparse.Namespace) -> int:
        """Generate all vocabularies and print a summary."""
        try:
            config = self.apply_overrides(args)
            config.validate()
            vocabularies = self._vocabularies(args)
        except ConfigurationError as e:
            self.setup_logging_from_args(args)
            print(f"✗ {e}")
            return ExitCode.CONFIG_ERROR

        self.setup_logging_from_args(args)

        pipeline = VocabularyPipeline(
            config,
            fetcher=self.get_fetcher(),
            show_progress=not getattr(args, 'quiet', False),
        )
        try:
            report = pipeline.run(vocabularies)
        except VocabGenError as e:
            print(f"✗ {e}")
            return exit_code_for(e)

        print_header("Generation summary")
        print(report.get_summary())
        print_footer()

        if report.has_failures:
            print(f"⚠ {len(report.failed)} vocabularies could not be written")
            return ExitCode.WRITE_ERROR
        print("✓ Generation complete")
        return ExitCode.SUCCESS
