"""
CLI Command Integration Tests.

Tests for CLI command operations including:
- generate with command-line vocabularies and configuration files
- inspect with table and JSON output
- Exit codes for configuration, fetch and usage errors
"""

import json

import pytest

from vocabgen.app.cli.commands import COMMANDS, GenerateCommand, InspectCommand
from vocabgen.app.cli.commands.base import exit_code_for
from vocabgen.app.cli.commands.generate import parse_vocabulary_argument
from vocabgen.app.cli.parsers import create_argument_parser
from vocabgen.constants import ExitCode
from vocabgen.core.errors import (
    AssemblyError,
    ConfigurationError,
    FetchError,
    ParseError,
    WriteError,
)
from vocabgen.main import main


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run each command from an empty working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


# =============================================================================
# Argument parsing
# =============================================================================

@pytest.mark.unit
class TestArgumentParsing:
    """Parser and --vocabulary argument handling."""

    def test_commands_registered(self):
        assert COMMANDS == {'generate': GenerateCommand, 'inspect': InspectCommand}

    def test_generate_defaults_leave_config_untouched(self):
        args = create_argument_parser().parse_args(['generate'])
        assert args.use_cache is None
        assert args.overwrite is None
        assert args.include_deprecated is None
        assert args.output_type is None

    def test_generate_flags(self):
        args = create_argument_parser().parse_args([
            'generate', '-p', 'com.example', '-t', 'legacy', '--no-cache',
            '--timeout', '5', '--clash-policy', 'suffix',
            '-V', 'foaf=http://xmlns.com/foaf/0.1/', '-V', 'http://purl.org/dc/terms/',
        ])
        assert args.package == 'com.example'
        assert args.output_type == 'LEGACY'
        assert args.use_cache is False
        assert args.request_timeout == 5
        assert args.name_clash_policy == 'suffix'
        assert len(args.vocabularies) == 2

    @pytest.mark.parametrize("value,expected", [
        ("foaf=http://xmlns.com/foaf/0.1/", ("http://xmlns.com/foaf/0.1/", "foaf")),
        ("http://purl.org/dc/terms/", ("http://purl.org/dc/terms/", None)),
        ("http://example.org/v?a=b", ("http://example.org/v?a=b", None)),
        ("dc-terms=vocab/dc.ttl", ("vocab/dc.ttl", "dc-terms")),
    ])
    def test_parse_vocabulary_argument(self, value, expected):
        source = parse_vocabulary_argument(value)
        assert (source.url, source.prefix) == expected

    def test_parse_vocabulary_argument_empty(self):
        with pytest.raises(ConfigurationError):
            parse_vocabulary_argument("  ")

    @pytest.mark.parametrize("error,code", [
        (ConfigurationError("bad"), ExitCode.CONFIG_ERROR),
        (FetchError("v.ttl"), ExitCode.FETCH_ERROR),
        (ParseError("v.ttl", "oops"), ExitCode.PARSE_ERROR),
        (WriteError("V.java"), ExitCode.WRITE_ERROR),
        (AssemblyError("v.ttl", "no prefix"), ExitCode.ERROR),
    ])
    def test_exit_code_for(self, error, code):
        assert exit_code_for(error) == code


# =============================================================================
# generate
# =============================================================================

@pytest.mark.integration
class TestGenerateCommand:
    """End-to-end generate runs against local files."""

    def test_generate_from_arguments(self, workdir, example_vocab_file, capsys):
        code = main([
            'generate', '--package', 'com.example', '--vocabulary', f'ex={example_vocab_file}',
            '-o', 'out', '--no-cache', '-q',
        ])
        assert code == ExitCode.SUCCESS
        assert (workdir / 'out' / 'com' / 'example' / 'EX.java').is_file()
        out = capsys.readouterr().out
        assert "generated: 1" in out
        assert "✓ Generation complete" in out

    def test_generate_from_config_file(self, workdir, no_metadata_file):
        config = {
            "generator": {"package": "org.acme", "output_type": "strings", "output_directory": "src"},
            "vocabularies": [{"url": str(no_metadata_file), "prefix": "plain"}],
        }
        (workdir / 'vocabgen.json').write_text(json.dumps(config), encoding='utf-8')

        assert main(['generate', '--no-cache', '-q']) == ExitCode.SUCCESS
        text = (workdir / 'src' / 'org' / 'acme' / 'PLAIN.java').read_text(encoding='utf-8')
        assert 'public static final String WIDGET = "http://example.org/plain#Widget";' in text

    def test_command_line_overrides_config(self, workdir, example_vocab_file):
        config_path = workdir / 'custom.json'
        config_path.write_text(json.dumps({"generator": {"package": "org.acme"}}), encoding='utf-8')

        code = main([
            'generate', '--config', str(config_path), '--package', 'com.override',
            '-V', str(example_vocab_file), '-o', 'out', '-q',
        ])
        assert code == ExitCode.SUCCESS
        assert (workdir / 'out' / 'com' / 'override' / 'EX.java').is_file()

    def test_missing_package(self, workdir, example_vocab_file, capsys):
        assert main(['generate', '-V', str(example_vocab_file), '-q']) == ExitCode.CONFIG_ERROR
        assert "'package' is required" in capsys.readouterr().out

    def test_invalid_config_file(self, workdir):
        (workdir / 'broken.json').write_text("{", encoding='utf-8')
        assert main(['generate', '--config', 'broken.json', '-q']) == ExitCode.CONFIG_ERROR

    def test_missing_vocabulary_file(self, workdir, capsys):
        code = main(['generate', '-p', 'com.example', '-V', 'ex=missing.ttl', '--no-cache', '-q'])
        assert code == ExitCode.FETCH_ERROR
        assert "missing.ttl" in capsys.readouterr().out

    def test_unwritable_output(self, workdir, example_vocab_file):
        (workdir / 'out').write_text("not a directory", encoding='utf-8')
        code = main(['generate', '-p', 'com.example', '-V', str(example_vocab_file), '-o', 'out', '-q'])
        assert code == ExitCode.WRITE_ERROR

    def test_log_file(self, workdir, example_vocab_file):
        code = main([
            'generate', '-p', 'com.example', '-V', str(example_vocab_file), '-o', 'out',
            '--log-level', 'debug', '--log-file', 'logs/vocabgen.log',
        ])
        assert code == ExitCode.SUCCESS
        assert "Generated" in (workdir / 'logs' / 'vocabgen.log').read_text(encoding='utf-8')


# =============================================================================
# inspect
# =============================================================================

@pytest.mark.integration
class TestInspectCommand:
    """inspect output."""

    def test_json_output(self, workdir, example_vocab_file, capsys):
        assert main(['inspect', str(example_vocab_file), '--json', '-q']) == ExitCode.SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert data["source"]["prefix"] == "ex"
        assert data["source"]["namespace"] == "http://example.org/vocab#"
        names = [entity["name"] for entity in data["entities"]]
        assert "has_person" in names
        assert "oldName" not in names

    def test_table_output(self, workdir, no_metadata_file, capsys):
        code = main(['inspect', str(no_metadata_file), '--prefix', 'plain', '--include-deprecated', '-q'])
        assert code == ExitCode.SUCCESS
        out = capsys.readouterr().out
        assert "Prefix:    plain" in out
        assert "WIDGET" in out
        assert "http://example.org/plain#size" in out

    def test_parse_error(self, workdir, capsys):
        (workdir / 'broken.ttl').write_text("@prefix ex: <http://x#> .\nex:a ex:b", encoding='utf-8')
        assert main(['inspect', 'broken.ttl', '-q']) == ExitCode.PARSE_ERROR
        assert "✗" in capsys.readouterr().out


# =============================================================================
# main
# =============================================================================

@pytest.mark.unit
class TestMain:
    """Top-level entry point."""

    def test_no_command(self, capsys):
        assert main([]) == ExitCode.USAGE_ERROR
        assert "generate" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(['--version'])
        assert exc_info.value.code == 0
        assert "vocabgen" in capsys.readouterr().out
