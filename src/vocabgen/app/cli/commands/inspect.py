"""
Inspect command: classify one vocabulary and print its entity table.
"""

import argparse
import json
import logging

from vocabgen.constants import ExitCode
from vocabgen.core.errors import ConfigurationError, VocabGenError
from vocabgen.core.services import VocabularyPipeline
from vocabgen.shared.models import VocabularySource
from .base import BaseCommand, exit_code_for
from ..helpers import format_table, print_footer, print_header


logger = logging.getLogger(__name__)


class InspectCommand(BaseCommand):
    """
    Show the classes and properties that would be generated for a vocabulary.

    Usage:
        inspect <locator> [--prefix P] [--namespace NS] [--json]
    """

    def execute(self, args: argparse.Namespace) -> int:
        try:
            config = self.apply_overrides(args)
            config.validate(require_package=False)
        except ConfigurationError as e:
            self.setup_logging_from_args(args)
            print(f"✗ {e}")
            return ExitCode.CONFIG_ERROR

        self.setup_logging_from_args(args)

        source = VocabularySource(
            url=args.locator,
            prefix=getattr(args, 'prefix', None) or None,
            namespace=getattr(args, 'namespace', None) or None,
        )
        pipeline = VocabularyPipeline(config, fetcher=self.get_fetcher(), show_progress=False)
        try:
            result, entities = pipeline.analyze(source)
        except VocabGenError as e:
            print(f"✗ {e}")
            return exit_code_for(e)

        if getattr(args, 'as_json', False):
            print(json.dumps({
                "source": result.source.to_dict(),
                "statements": result.statements_seen,
                "entities": [entity.to_dict() for entity in entities],
            }, indent=2))
            return ExitCode.SUCCESS

        print_header(f"Vocabulary: {result.source.url}")
        print(f"Prefix:    {result.source.prefix or '(unresolved)'}")
        print(f"Namespace: {result.source.namespace or '(unresolved)'}")
        print(f"Found:     {result.get_summary()}")
        print()
        rows = [
            (e.role.value, e.constant_name, e.iri, "yes" if e.deprecated else "")
            for e in entities
        ]
        print(format_table(rows, headers=("ROLE", "CONSTANT", "IRI", "DEPRECATED")))
        print_footer()
        return ExitCode.SUCCESS
