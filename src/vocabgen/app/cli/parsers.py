"""
CLI argument parser configuration.

This module defines the argument parser structure for all CLI commands.

Command Structure:
    - generate [--config FILE] [--vocabulary [PREFIX=]URL ...] [options]
    - inspect  <locator> [--prefix P] [--namespace NS] [options]
"""

import argparse

from vocabgen import __version__
from vocabgen.formats.rdf import CLASH_POLICIES, FormatTable
from vocabgen.shared.models import OutputType


# ============================================================================
# Shared Flag Group Builders
# ============================================================================

def add_config_flags(parser: argparse.ArgumentParser) -> None:
    """Add configuration file flag."""
    parser.add_argument(
        '--config', '-c',
        help='Path to configuration file (default: ./vocabgen.json when present)'
    )


def add_logging_flags(parser: argparse.ArgumentParser) -> None:
    """Add logging-related flags."""
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        type=str.upper,
        help='Log level (overrides the configuration file)'
    )
    parser.add_argument(
        '--log-file',
        help='Also write log messages to this file'
    )
    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Only log warnings and errors, no progress bar'
    )


def add_fetch_flags(parser: argparse.ArgumentParser) -> None:
    """Add vocabulary retrieval flags."""
    parser.add_argument(
        '--no-cache',
        dest='use_cache',
        action='store_false',
        default=None,
        help='Always download vocabularies instead of using the local cache'
    )
    parser.add_argument(
        '--cache-directory',
        help='Base directory of the vocabulary cache (default: ~/.cache)'
    )
    parser.add_argument(
        '--timeout',
        dest='request_timeout',
        type=int,
        help='HTTP request timeout in seconds'
    )
    parser.add_argument(
        '--fallback-format',
        choices=[fmt.name for fmt in FormatTable.FORMATS],
        help='Format assumed when neither extension nor content type identifies one'
    )


def add_resolution_flags(parser: argparse.ArgumentParser) -> None:
    """Add identifier resolution flags."""
    parser.add_argument(
        '--include-deprecated',
        action='store_true',
        default=None,
        help='Keep owl:deprecated terms (annotated @Deprecated) instead of removing them'
    )
    parser.add_argument(
        '--clash-policy',
        dest='name_clash_policy',
        choices=sorted(CLASH_POLICIES),
        help="How to handle properties whose constant names clash (default: drop)"
    )


def add_output_flags(parser: argparse.ArgumentParser) -> None:
    """Add generated output flags."""
    parser.add_argument(
        '--output-directory', '-o',
        help='Root directory for generated sources (default: target/generated-sources)'
    )
    parser.add_argument(
        '--package', '-p',
        help='Package of the generated classes, e.g. com.example.vocab'
    )
    parser.add_argument(
        '--output-type', '-t',
        choices=[t.value for t in OutputType],
        type=str.upper,
        help='MODERN (RDF4J IRIs), LEGACY (Sesame URIs) or STRINGS (String constants)'
    )
    parser.add_argument(
        '--overwrite',
        action='store_true',
        default=None,
        help='Replace existing generated files'
    )


# ============================================================================
# Main Parser Factory
# ============================================================================

def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the main argument parser.

    Returns:
        Configured ArgumentParser with all subcommands.
    """
    parser = argparse.ArgumentParser(
        prog='vocabgen',
        description="Generate source-code constants from RDF vocabularies",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Generate every vocabulary listed in vocabgen.json
    %(prog)s generate --config vocabgen.json

    # Generate a single vocabulary without a configuration file
    %(prog)s generate --package com.example.vocab \\
        --vocabulary foaf=http://xmlns.com/foaf/spec/index.rdf

    # Show what would be generated for a vocabulary
    %(prog)s inspect http://purl.org/dc/terms/ --prefix dcterms
        """,
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')
    _add_generate_parser(subparsers)
    _add_inspect_parser(subparsers)
    return parser


def _add_generate_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the generate command parser."""
    parser = subparsers.add_parser(
        'generate',
        help='Generate a constants class for every configured vocabulary'
    )
    parser.add_argument(
        '--vocabulary', '-V',
        dest='vocabularies',
        action='append',
        metavar='[PREFIX=]URL',
        help='Vocabulary to generate (repeatable; replaces the configured list)'
    )
    add_config_flags(parser)
    add_output_flags(parser)
    add_fetch_flags(parser)
    add_resolution_flags(parser)
    add_logging_flags(parser)


def _add_inspect_parser(subparsers: argparse._SubParsersAction) -> None:
    """Add the inspect command parser."""
    parser = subparsers.add_parser(
        'inspect',
        help='Classify a vocabulary and print its entities without writing files'
    )
    parser.add_argument('locator', help='URL or path of the vocabulary document')
    parser.add_argument('--prefix', help='Vocabulary prefix (default: inferred from the document)')
    parser.add_argument('--namespace', help='Vocabulary namespace (default: inferred from the document)')
    parser.add_argument(
        '--json',
        dest='as_json',
        action='store_true',
        help='Print the entity table as JSON'
    )
    add_config_flags(parser)
    add_fetch_flags(parser)
    add_resolution_flags(parser)
    add_logging_flags(parser)
