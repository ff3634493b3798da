"""
Vocabulary generation pipeline.

Runs every configured vocabulary through the same sequence of stages:

    fetch -> parse/classify -> resolve -> assemble -> render -> write

Vocabularies are processed one after another. Fetch, format, parse,
assembly and render errors abort the run; a file that cannot be written is
recorded in the RunReport and the run continues with the next vocabulary.
"""

import json
import logging
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from tqdm import tqdm

from vocabgen.constants import CacheConfig, FetchConfig, OutputConfig
from vocabgen.core.errors import ConfigurationError, VocabGenError, WriteError
from vocabgen.core.platform import FetcherConfig, ResourceFetcher
from vocabgen.formats.rdf import (
    ClassificationResult,
    FormatTable,
    IdentifierResolver,
    ModelAssembler,
    StatementClassifier,
    get_clash_policy,
)
from vocabgen.rendering import TemplateRenderer
from vocabgen.shared.models import EntityRecord, OutputType, VocabularyModel, VocabularySource

logger = logging.getLogger(__name__)

_PACKAGE_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")


# =============================================================================
# Configuration
# =============================================================================

@dataclass
class GeneratorConfig:
    """Run-wide settings for the generator."""
    package: str = ""
    output_directory: str = OutputConfig.DEFAULT_OUTPUT_DIRECTORY
    output_type: OutputType = OutputType.MODERN
    overwrite: bool = False
    include_deprecated: bool = False
    use_cache: bool = True
    cache_directory: str = CacheConfig.DEFAULT_CACHE_ROOT
    request_timeout: int = FetchConfig.DEFAULT_TIMEOUT_SECONDS
    fallback_format: Optional[str] = FetchConfig.DEFAULT_FALLBACK_FORMAT
    name_clash_policy: str = OutputConfig.DEFAULT_CLASH_POLICY
    allowed_schemes: Tuple[str, ...] = FetchConfig.DEFAULT_ALLOWED_SCHEMES
    block_private_hosts: bool = False
    vocabularies: List[VocabularySource] = field(default_factory=list)
    logging_settings: Dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _require_bool(settings: Dict[str, Any], key: str, default: bool) -> bool:
        value = settings.get(key, default)
        if not isinstance(value, bool):
            raise ConfigurationError(f"'{key}' must be true or false, got {value!r}")
        return value

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'GeneratorConfig':
        """
        Create GeneratorConfig from a dictionary.

        Settings are read from the ``generator`` section (or the top level
        when there is none); ``vocabularies`` and ``logging`` are top-level.

        Raises:
            ConfigurationError: If a value is missing or invalid
        """
        if not isinstance(config_dict, dict):
            raise ConfigurationError(
                f"Configuration must be a JSON object, got {type(config_dict).__name__}"
            )
        settings = config_dict.get('generator', config_dict)
        if not isinstance(settings, dict):
            raise ConfigurationError("'generator' section must be a JSON object")

        try:
            output_type = OutputType.parse(settings.get('output_type', OutputConfig.DEFAULT_OUTPUT_TYPE))
        except ValueError as e:
            raise ConfigurationError(str(e))

        timeout = settings.get('request_timeout', FetchConfig.DEFAULT_TIMEOUT_SECONDS)
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ConfigurationError(f"'request_timeout' must be a positive number, got {timeout!r}")

        schemes = settings.get('allowed_schemes', FetchConfig.DEFAULT_ALLOWED_SCHEMES)
        if not isinstance(schemes, (list, tuple)) or not all(isinstance(s, str) for s in schemes):
            raise ConfigurationError("'allowed_schemes' must be a list of strings")

        raw_vocabularies = config_dict.get('vocabularies', [])
        if not isinstance(raw_vocabularies, list):
            raise ConfigurationError("'vocabularies' must be a list")
        vocabularies = []
        for index, entry in enumerate(raw_vocabularies):
            try:
                vocabularies.append(VocabularySource.from_dict(entry))
            except ValueError as e:
                raise ConfigurationError(f"vocabularies[{index}]: {e}")

        logging_config = config_dict.get('logging', {})
        if not isinstance(logging_config, dict):
            raise ConfigurationError("'logging' section must be a JSON object")

        config = cls(
            package=str(settings.get('package') or ''),
            output_directory=str(settings.get('output_directory', OutputConfig.DEFAULT_OUTPUT_DIRECTORY)),
            output_type=output_type,
            overwrite=cls._require_bool(settings, 'overwrite', False),
            include_deprecated=cls._require_bool(settings, 'include_deprecated', False),
            use_cache=cls._require_bool(settings, 'use_cache', True),
            cache_directory=str(settings.get('cache_directory', CacheConfig.DEFAULT_CACHE_ROOT)),
            request_timeout=timeout,
            fallback_format=settings.get('fallback_format', FetchConfig.DEFAULT_FALLBACK_FORMAT),
            name_clash_policy=str(settings.get('name_clash_policy', OutputConfig.DEFAULT_CLASH_POLICY)),
            allowed_schemes=tuple(schemes),
            block_private_hosts=cls._require_bool(settings, 'block_private_hosts', False),
            vocabularies=vocabularies,
            logging_settings=logging_config,
        )
        config.validate(require_package=False)
        return config

    @classmethod
    def from_file(cls, config_path: str) -> 'GeneratorConfig':
        """Load configuration from a JSON file."""
        if not config_path:
            raise ConfigurationError("config_path cannot be empty")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config_dict = json.load(f)
        except FileNotFoundError:
            raise ConfigurationError(f"Configuration file not found: {config_path}")
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in configuration file {config_path} at line {e.lineno}, "
                f"column {e.colno}: {e.msg}"
            )
        except UnicodeDecodeError as e:
            raise ConfigurationError(f"Encoding error reading {config_path}: {e}")
        except OSError as e:
            raise ConfigurationError(f"Error reading configuration file {config_path}: {e}")

        return cls.from_dict(config_dict)

    def validate(self, require_package: bool = True) -> None:
        """
        Check cross-field constraints.

        Raises:
            ConfigurationError: If the configuration cannot be used
        """
        if require_package and not self.package:
            raise ConfigurationError("'package' is required to generate sources")
        if self.package and not _PACKAGE_PATTERN.match(self.package):
            raise ConfigurationError(f"Invalid package name: {self.package!r}")
        if self.request_timeout <= 0:
            raise ConfigurationError(f"'request_timeout' must be positive, got {self.request_timeout}")
        if self.fallback_format is not None and FormatTable.by_name(self.fallback_format) is None:
            raise ConfigurationError(f"Unknown fallback format: {self.fallback_format!r}")
        try:
            get_clash_policy(self.name_clash_policy)
        except ValueError as e:
            raise ConfigurationError(str(e))

    def with_overrides(self, **overrides: Any) -> 'GeneratorConfig':
        """Return a copy with every non-None override applied."""
        values = {key: value for key, value in overrides.items() if value is not None}
        if 'output_type' in values:
            try:
                values['output_type'] = OutputType.parse(values['output_type'])
            except ValueError as e:
                raise ConfigurationError(str(e))
        return replace(self, **values)

    def fetcher_config(self) -> FetcherConfig:
        return FetcherConfig(
            cache_directory=self.cache_directory,
            timeout=self.request_timeout,
            fallback_format=self.fallback_format,
            allowed_schemes=self.allowed_schemes,
            block_private_hosts=self.block_private_hosts,
        )


# =============================================================================
# Output
# =============================================================================

def output_path(model: VocabularyModel, output_directory: str, output_type: OutputType) -> Path:
    """``<output>/<package path>/<ARTIFACT><extension>``"""
    package_dir = Path(output_directory).joinpath(*[p for p in model.package.split('.') if p])
    return package_dir / f"{model.class_name}{output_type.file_extension}"


def write_output(
    model: VocabularyModel,
    text: str,
    output_directory: str,
    output_type: OutputType = OutputType.MODERN,
    overwrite: bool = False,
) -> Tuple[Path, bool]:
    """
    Write a rendered vocabulary below ``output_directory``.

    An existing file is left untouched unless ``overwrite`` is set.

    Returns:
        Tuple of (target path, whether the file was written)

    Raises:
        WriteError: If the directory or file cannot be written
    """
    target = output_path(model, output_directory, output_type)
    if target.exists() and not overwrite:
        logger.info(f"Skipping {target}: file exists (enable overwrite to replace it)")
        return target, False
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding=OutputConfig.FILE_ENCODING)
    except OSError as e:
        logger.error(f"Failed to write {target}: {e}")
        raise WriteError(str(target), e)
    logger.info(f"Generated {target}")
    return target, True


# =============================================================================
# Run report
# =============================================================================

@dataclass
class VocabularyOutcome:
    """What happened to one vocabulary during a run."""
    source: VocabularySource
    status: str
    path: Optional[Path] = None
    entity_count: int = 0
    error: Optional[str] = None

    GENERATED = "generated"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class RunReport:
    """Outcome of a generator run."""
    outcomes: List[VocabularyOutcome] = field(default_factory=list)

    def _with_status(self, status: str) -> List[VocabularyOutcome]:
        return [o for o in self.outcomes if o.status == status]

    @property
    def generated(self) -> List[VocabularyOutcome]:
        return self._with_status(VocabularyOutcome.GENERATED)

    @property
    def skipped(self) -> List[VocabularyOutcome]:
        return self._with_status(VocabularyOutcome.SKIPPED)

    @property
    def failed(self) -> List[VocabularyOutcome]:
        return self._with_status(VocabularyOutcome.FAILED)

    @property
    def has_failures(self) -> bool:
        return bool(self.failed)

    def get_summary(self) -> str:
        lines = [
            f"Vocabularies: {len(self.outcomes)} "
            f"(generated: {len(self.generated)}, skipped: {len(self.skipped)}, "
            f"failed: {len(self.failed)})"
        ]
        for outcome in self.outcomes:
            name = outcome.source.prefix or outcome.source.url
            detail = outcome.error if outcome.error else outcome.path
            lines.append(f"  [{outcome.status}] {name}: {detail}")
        return "\n".join(lines)


# =============================================================================
# Pipeline
# =============================================================================

class VocabularyPipeline:
    """
    Generates one source file per vocabulary.

    Example:
        config = GeneratorConfig.from_file("vocabgen.json")
        report = VocabularyPipeline(config).run(config.vocabularies)
        print(report.get_summary())
    """

    def __init__(
        self,
        config: GeneratorConfig,
        fetcher: Optional[ResourceFetcher] = None,
        show_progress: bool = True,
    ):
        self.config = config
        self.fetcher = fetcher or ResourceFetcher(config.fetcher_config())
        self.resolver = IdentifierResolver(config.name_clash_policy)
        self.renderer = TemplateRenderer(config.output_type)
        self.show_progress = show_progress

    def analyze(self, source: VocabularySource) -> Tuple[ClassificationResult, Tuple[EntityRecord, ...]]:
        """
        Fetch, classify and resolve one vocabulary.

        Returns:
            Tuple of (classification result, resolved entity records)
        """
        logger.info(f"Processing vocabulary {source.url}", extra={"vocabulary": source.url})
        with self.fetcher.fetch(source.url, use_cache=self.config.use_cache) as resource:
            result = StatementClassifier.classify_document(resource.stream, resource.rdf_format, source)
        entities = self.resolver.resolve_result(result, include_deprecated=self.config.include_deprecated)
        return result, entities

    def build_model(self, source: VocabularySource) -> VocabularyModel:
        """Run every stage up to and including assembly."""
        result, entities = self.analyze(source)
        return ModelAssembler(self.config.package).assemble(result.source, entities)

    def process(self, source: VocabularySource) -> VocabularyOutcome:
        """
        Generate the source file for one vocabulary.

        Raises:
            VocabGenError: Fatal errors, and WriteError when the output
                cannot be written
        """
        model = self.build_model(source)
        text = self.renderer.render(model)
        resolved = VocabularySource(model.locator, model.prefix, model.namespace)
        path, written = write_output(
            model,
            text,
            self.config.output_directory,
            self.config.output_type,
            overwrite=self.config.overwrite,
        )
        status = VocabularyOutcome.GENERATED if written else VocabularyOutcome.SKIPPED
        return VocabularyOutcome(resolved, status, path, len(model.entities))

    def run(self, vocabularies: Optional[Sequence[VocabularySource]] = None) -> RunReport:
        """
        Process vocabularies in order.

        Args:
            vocabularies: Vocabularies to generate (defaults to the configured ones)

        Returns:
            RunReport listing generated, skipped and failed vocabularies

        Raises:
            ConfigurationError: If the configuration is unusable
            VocabGenError: The first fatal error, naming the failing vocabulary
        """
        self.config.validate()
        if vocabularies is None:
            vocabularies = self.config.vocabularies
        report = RunReport()
        if not vocabularies:
            logger.warning("No vocabularies configured, nothing to generate")
            return report

        for source in tqdm(
            vocabularies,
            desc="Generating vocabularies",
            unit="vocab",
            disable=not self.show_progress or len(vocabularies) < 2,
        ):
            try:
                report.outcomes.append(self.process(source))
            except VocabGenError as e:
                if e.is_fatal:
                    logger.error(f"Aborting run at {source.url}: {e}")
                    raise
                report.outcomes.append(
                    VocabularyOutcome(source, VocabularyOutcome.FAILED, error=str(e))
                )

        logger.info(report.get_summary().splitlines()[0])
        return report
