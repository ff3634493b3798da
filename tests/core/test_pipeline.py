"""
Tests for GeneratorConfig and the vocabulary pipeline.

Local vocabulary files are used throughout so no network access is needed.
"""

import json
from pathlib import Path

import pytest

from vocabgen.core.errors import AssemblyError, ConfigurationError, FetchError
from vocabgen.core.services import (
    GeneratorConfig,
    RunReport,
    VocabularyOutcome,
    VocabularyPipeline,
)
from vocabgen.shared.models import OutputType, VocabularySource


def make_config(output_dir, **overrides):
    settings = dict(package="com.example.vocab", output_directory=str(output_dir), use_cache=False)
    settings.update(overrides)
    return GeneratorConfig(**settings)


# =============================================================================
# Configuration
# =============================================================================

@pytest.mark.unit
class TestGeneratorConfig:
    """Loading and validating generator configuration."""

    def test_defaults(self):
        config = GeneratorConfig.from_dict({})
        assert config.package == ""
        assert config.output_type is OutputType.MODERN
        assert config.output_directory == "target/generated-sources"
        assert config.use_cache is True
        assert config.overwrite is False
        assert config.name_clash_policy == "drop"
        assert config.vocabularies == []

    def test_sample_config(self, sample_config_dict):
        config = GeneratorConfig.from_dict(sample_config_dict)
        assert config.package == "com.example.vocab"
        assert config.output_type is OutputType.STRINGS
        assert config.overwrite is True
        assert config.request_timeout == 10
        assert config.name_clash_policy == "suffix"
        assert config.allowed_schemes == ("https", "file")
        assert [v.prefix for v in config.vocabularies] == ["foaf", "dcterms", None]
        assert config.vocabularies[1].namespace == "http://purl.org/dc/terms/"
        assert config.logging_settings["format"] == "json"

    def test_top_level_settings(self):
        config = GeneratorConfig.from_dict({"package": "org.acme", "output_type": "legacy"})
        assert config.package == "org.acme"
        assert config.output_type is OutputType.LEGACY

    @pytest.mark.parametrize("settings,message", [
        ({"output_type": "kotlin"}, "Unknown output type"),
        ({"overwrite": "yes"}, "'overwrite' must be true or false"),
        ({"request_timeout": 0}, "request_timeout"),
        ({"request_timeout": "10"}, "request_timeout"),
        ({"fallback_format": "yaml"}, "Unknown fallback format"),
        ({"name_clash_policy": "merge"}, "merge"),
        ({"allowed_schemes": "https"}, "allowed_schemes"),
        ({"package": "com.1example"}, "Invalid package name"),
    ])
    def test_invalid_settings(self, settings, message):
        with pytest.raises(ConfigurationError, match=message):
            GeneratorConfig.from_dict({"generator": settings})

    def test_invalid_vocabulary_entry(self):
        with pytest.raises(ConfigurationError, match=r"vocabularies\[1\]"):
            GeneratorConfig.from_dict({"vocabularies": [{"url": "a.ttl"}, {"prefix": "b"}]})

    def test_from_file(self, tmp_path, sample_config_dict):
        path = tmp_path / "vocabgen.json"
        path.write_text(json.dumps(sample_config_dict), encoding="utf-8")
        assert GeneratorConfig.from_file(str(path)).package == "com.example.vocab"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            GeneratorConfig.from_file(str(tmp_path / "missing.json"))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{ not json", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            GeneratorConfig.from_file(str(path))

    def test_package_required_for_generation(self):
        with pytest.raises(ConfigurationError, match="'package' is required"):
            GeneratorConfig().validate()
        GeneratorConfig().validate(require_package=False)

    def test_with_overrides_ignores_none(self):
        config = GeneratorConfig(package="com.example")
        updated = config.with_overrides(package=None, output_type="strings", overwrite=True)
        assert updated.package == "com.example"
        assert updated.output_type is OutputType.STRINGS
        assert updated.overwrite is True
        assert config.overwrite is False

    def test_fetcher_config(self):
        config = GeneratorConfig(cache_directory="/tmp/c", request_timeout=5)
        fetcher_config = config.fetcher_config()
        assert fetcher_config.timeout == 5
        assert fetcher_config.cache_path == Path("/tmp/c/vocabgen/vocabularies")


# =============================================================================
# Pipeline
# =============================================================================

@pytest.mark.integration
class TestVocabularyPipeline:
    """End-to-end generation from local vocabulary files."""

    def test_generates_source_file(self, example_vocab_file, output_dir):
        pipeline = VocabularyPipeline(make_config(output_dir), show_progress=False)
        report = pipeline.run([VocabularySource(str(example_vocab_file))])

        target = output_dir / "com" / "example" / "vocab" / "EX.java"
        assert [o.status for o in report.outcomes] == [VocabularyOutcome.GENERATED]
        assert report.outcomes[0].path == target
        assert report.outcomes[0].source.prefix == "ex"

        text = target.read_text(encoding="utf-8")
        assert "package com.example.vocab;" in text
        for constant in ("PERSON", "DOCUMENT", "NAME", "KNOWS", "HAS_PERSON", "TITLE"):
            assert f"public static final IRI {constant};" in text
        assert "OLDNAME" not in text
        assert "THING" not in text

    def test_include_deprecated(self, example_vocab_file, output_dir):
        config = make_config(output_dir, include_deprecated=True, output_type=OutputType.STRINGS)
        VocabularyPipeline(config, show_progress=False).run([VocabularySource(str(example_vocab_file))])
        text = (output_dir / "com" / "example" / "vocab" / "EX.java").read_text(encoding="utf-8")
        assert 'public static final String OLDNAME = "http://example.org/vocab#oldName";' in text
        assert "@Deprecated" in text

    def test_caller_supplied_prefix(self, no_metadata_file, output_dir):
        source = VocabularySource(str(no_metadata_file), prefix="plain")
        report = VocabularyPipeline(make_config(output_dir), show_progress=False).run([source])
        outcome = report.outcomes[0]
        assert outcome.path.name == "PLAIN.java"
        assert outcome.entity_count == 2

    def test_existing_file_skipped(self, example_vocab_file, output_dir):
        source = VocabularySource(str(example_vocab_file))
        pipeline = VocabularyPipeline(make_config(output_dir), show_progress=False)
        pipeline.run([source])
        target = output_dir / "com" / "example" / "vocab" / "EX.java"
        target.write_text("// edited", encoding="utf-8")

        report = pipeline.run([source])
        assert [o.status for o in report.outcomes] == [VocabularyOutcome.SKIPPED]
        assert target.read_text(encoding="utf-8") == "// edited"

    def test_overwrite_replaces_file(self, example_vocab_file, output_dir):
        source = VocabularySource(str(example_vocab_file))
        target = output_dir / "com" / "example" / "vocab" / "EX.java"
        target.parent.mkdir(parents=True)
        target.write_text("// edited", encoding="utf-8")

        pipeline = VocabularyPipeline(make_config(output_dir, overwrite=True), show_progress=False)
        report = pipeline.run([source])
        assert report.outcomes[0].status == VocabularyOutcome.GENERATED
        assert "public final class EX" in target.read_text(encoding="utf-8")

    def test_write_error_recorded_and_run_continues(self, example_vocab_file, no_metadata_file, output_dir):
        output_dir.mkdir()
        (output_dir / "com").write_text("not a directory", encoding="utf-8")
        config = make_config(output_dir)
        pipeline = VocabularyPipeline(config, show_progress=False)
        report = pipeline.run([
            VocabularySource(str(example_vocab_file)),
            VocabularySource(str(no_metadata_file), prefix="plain"),
        ])
        assert [o.status for o in report.outcomes] == [VocabularyOutcome.FAILED] * 2
        assert report.has_failures
        assert "EX.java" in report.outcomes[0].error

    def test_missing_file_aborts(self, tmp_path, example_vocab_file, output_dir):
        pipeline = VocabularyPipeline(make_config(output_dir), show_progress=False)
        with pytest.raises(FetchError):
            pipeline.run([
                VocabularySource(str(tmp_path / "missing.ttl")),
                VocabularySource(str(example_vocab_file)),
            ])
        assert not output_dir.exists()

    def test_missing_prefix_aborts(self, no_metadata_file, output_dir):
        pipeline = VocabularyPipeline(make_config(output_dir), show_progress=False)
        with pytest.raises(AssemblyError):
            pipeline.run([VocabularySource(str(no_metadata_file))])

    def test_no_vocabularies(self, output_dir, caplog):
        report = VocabularyPipeline(make_config(output_dir), show_progress=False).run()
        assert report.outcomes == []
        assert "No vocabularies configured" in caplog.text

    def test_package_required(self, example_vocab_file, output_dir):
        pipeline = VocabularyPipeline(make_config(output_dir, package=""), show_progress=False)
        with pytest.raises(ConfigurationError):
            pipeline.run([VocabularySource(str(example_vocab_file))])


@pytest.mark.unit
class TestRunReport:
    """Run summaries."""

    def test_summary(self):
        report = RunReport([
            VocabularyOutcome(VocabularySource("a.ttl", "a"), VocabularyOutcome.GENERATED, Path("out/A.java"), 3),
            VocabularyOutcome(VocabularySource("b.ttl", "b"), VocabularyOutcome.SKIPPED, Path("out/B.java")),
            VocabularyOutcome(VocabularySource("c.ttl"), VocabularyOutcome.FAILED, error="disk full"),
        ])
        summary = report.get_summary()
        assert summary.splitlines()[0] == "Vocabularies: 3 (generated: 1, skipped: 1, failed: 1)"
        assert "[generated] a: out/A.java" in summary
        assert "[failed] c.ttl: disk full" in summary
        assert report.has_failures
