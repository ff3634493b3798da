"""Run orchestration."""

from .pipeline import (
    GeneratorConfig,
    RunReport,
    VocabularyOutcome,
    VocabularyPipeline,
    output_path,
    write_output,
)

__all__ = [
    "GeneratorConfig",
    "RunReport",
    "VocabularyOutcome",
    "VocabularyPipeline",
    "output_path",
    "write_output",
]
