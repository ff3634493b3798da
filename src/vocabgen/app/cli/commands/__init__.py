"""
CLI command implementations.

- base.py: BaseCommand and error-to-exit-code mapping
- generate.py: GenerateCommand
- inspect.py: InspectCommand
"""

from .base import BaseCommand, exit_code_for
from .generate import GenerateCommand, parse_vocabulary_argument
from .inspect import InspectCommand

COMMANDS = {
    'generate': GenerateCommand,
    'inspect': InspectCommand,
}

__all__ = [
    'BaseCommand',
    'COMMANDS',
    'GenerateCommand',
    'InspectCommand',
    'exit_code_for',
    'parse_vocabulary_argument',
]
