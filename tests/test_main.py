"""Tests for the command-line interface."""

import pytest
from click.testing import CliRunner

from strict_semver.main import cli, split_versions, unescape_separator
from strict_semver.shell_completion import generate_completion_script


@pytest.fixture
def runner(tmp_path, monkeypatch):
    """CLI runner working in an empty directory."""
    monkeypatch.chdir(tmp_path)
    return CliRunner()


@pytest.fixture
def prefix_config(tmp_path):
    """Config file with a 'v' prefix and minor as default bump."""
    config_file = tmp_path / "prefixed.yaml"
    config_file.write_text("version-prefix: v\nbump:\n  default: minor\n")
    return str(config_file)


class TestHelpers:
    """Tests for input helpers."""

    def test_split_on_whitespace(self):
        """Test default splitting on any whitespace."""
        assert split_versions(" 1.0.0\n\t2.0.0   3.0.0\n") == ["1.0.0", "2.0.0", "3.0.0"]

    def test_split_on_delimiter(self):
        """Test splitting on a custom delimiter and trimming items."""
        assert split_versions("1.0.0, 2.0.0,,3.0.0\n", ",") == ["1.0.0", "2.0.0", "3.0.0"]

    def test_unescape_separator(self):
        """Test escape expansion in separators."""
        assert unescape_separator("\\n") == "\n"
        assert unescape_separator(", ") == ", "
        assert unescape_separator("\\t|\\\\") == "\t|\\"
        assert unescape_separator("\\x") == "\\x"


class TestVerify:
    """Tests for the verify command."""

    def test_all_valid(self, runner):
        """Test that valid versions exit cleanly."""
        result = runner.invoke(cli, ["verify", "1.2.3", "1.0.0-rc.1+build"])
        assert result.exit_code == 0
        assert result.output == ""

    def test_verbose(self, runner):
        """Test reporting valid versions."""
        result = runner.invoke(cli, ["verify", "--verbose", "1.2.3"])
        assert result.exit_code == 0
        assert "Valid version: '1.2.3'" in result.output

    def test_invalid(self, runner):
        """Test that invalid versions are reported with their position."""
        result = runner.invoke(cli, ["verify", "1.2.3", "01.2.3", "1.2"])
        assert result.exit_code == 1
        assert "Invalid version: '01.2.3', error at position 0" in result.output
        assert "Invalid version: '1.2', error at position 3" in result.output
        assert "'1.2.3'" not in result.output

    def test_prefix(self, runner, prefix_config):
        """Test that the configured prefix is accepted."""
        result = runner.invoke(cli, ["verify", "-c", prefix_config, "v1.2.3"])
        assert result.exit_code == 0

    def test_missing_config(self, runner):
        """Test error for a missing config file."""
        result = runner.invoke(cli, ["verify", "-c", "missing.yaml", "1.2.3"])
        assert result.exit_code == 1
        assert "Configuration error" in result.output


class TestSort:
    """Tests for the sort command."""

    def test_sort(self, runner):
        """Test sorting whitespace separated input."""
        result = runner.invoke(cli, ["sort"], input="1.0.0 0.9.0\n1.0.0-rc.1\n")
        assert result.exit_code == 0
        assert result.output == "0.9.0\n1.0.0-rc.1\n1.0.0\n"

    def test_sort_reverse_last(self, runner):
        """Test newest-first order and --last."""
        result = runner.invoke(cli, ["sort", "--reverse"], input="1.0.0 2.0.0 10.0.0")
        assert result.output == "10.0.0\n2.0.0\n1.0.0\n"

        result = runner.invoke(cli, ["sort", "--last"], input="1.0.0 10.0.0 2.0.0")
        assert result.output == "10.0.0\n"

    def test_sort_delimiter_and_separator(self, runner):
        """Test custom input delimiter and output separator."""
        result = runner.invoke(
            cli,
            ["sort", "-d", ";", "-s", ", ", "--no-newline"],
            input="1.0.0-beta; 1.0.0-alpha ;1.0.0",
        )
        assert result.exit_code == 0
        assert result.output == "1.0.0-alpha, 1.0.0-beta, 1.0.0"

    def test_sort_stable_with_metadata(self, runner):
        """Test that equal versions keep input order."""
        result = runner.invoke(cli, ["sort"], input="1.0.0+B 1.0.0+A 1.0.0+C")
        assert result.output == "1.0.0+B\n1.0.0+A\n1.0.0+C\n"

    def test_sort_invalid(self, runner):
        """Test that invalid input aborts the sort."""
        result = runner.invoke(cli, ["sort"], input="1.0.0 1.0")
        assert result.exit_code == 1
        assert "Error parsing 1.0" in result.output

    def test_sort_ignore_invalid(self, runner):
        """Test skipping invalid versions."""
        result = runner.invoke(cli, ["sort", "-i"], input="2.0.0 bogus 1.0.0")
        assert result.exit_code == 0
        assert result.output == "1.0.0\n2.0.0\n"

    def test_sort_empty_input(self, runner):
        """Test that no input produces no output."""
        result = runner.invoke(cli, ["sort"], input="")
        assert result.exit_code == 0
        assert result.output == ""

    def test_sort_prefix(self, runner, prefix_config):
        """Test that the prefix is stripped on input and added on output."""
        result = runner.invoke(cli, ["sort", "-c", prefix_config], input="v2.0.0 1.0.0")
        assert result.output == "v1.0.0\nv2.0.0\n"


class TestBump:
    """Tests for the bump command."""

    @pytest.mark.parametrize(
        "args, expected",
        [
            (["1.2.3"], "1.2.4"),
            (["--major", "1.2.3"], "2.0.0"),
            (["--minor", "1.2.3-rc.1"], "1.3.0"),
            (["--patch", "1.2.3+meta"], "1.2.4"),
            (["--release", "1.2.3-rc.1"], "1.2.3"),
            (["--prerelease", "1.2.3-rc.1"], "1.2.3-rc.2"),
            (["--major", "--meta", "build", "--meta", "7", "1.0.0+old"], "2.0.0+build.7"),
            (["--patch", "--keep-meta", "1.0.0+old"], "1.0.1+old"),
        ],
    )
    def test_bump(self, runner, args, expected):
        """Test bump flags and metadata options."""
        result = runner.invoke(cli, ["bump", *args])
        assert result.exit_code == 0
        assert result.output == f"{expected}\n"

    def test_bump_config_default(self, runner, prefix_config):
        """Test default bump and prefix from configuration."""
        result = runner.invoke(cli, ["bump", "-c", prefix_config, "v1.2.3"])
        assert result.exit_code == 0
        assert result.output == "v1.3.0\n"

    def test_release_without_prerelease(self, runner):
        """Test that a failing bump reports the error."""
        result = runner.invoke(cli, ["bump", "--release", "1.2.3"])
        assert result.exit_code == 1
        assert "Bump '1.2.3' failed" in result.output

    def test_invalid_version(self, runner):
        """Test bumping an invalid version."""
        result = runner.invoke(cli, ["bump", "1.2"])
        assert result.exit_code == 1
        assert "Invalid version: '1.2'" in result.output

    def test_invalid_metadata(self, runner):
        """Test that metadata is validated."""
        result = runner.invoke(cli, ["bump", "--meta", "a_b", "1.2.3"])
        assert result.exit_code == 1
        assert "invalid build metadata" in result.output

    def test_conflicting_flags(self, runner):
        """Test that only one bump type is allowed."""
        result = runner.invoke(cli, ["bump", "--major", "--minor", "1.2.3"])
        assert result.exit_code == 2
        assert "Only one of" in result.output

    def test_meta_and_keep_meta(self, runner):
        """Test that --meta and --keep-meta exclude each other."""
        result = runner.invoke(cli, ["bump", "--meta", "x", "--keep-meta", "1.2.3"])
        assert result.exit_code == 2


class TestCompare:
    """Tests for the compare command."""

    @pytest.mark.parametrize(
        "first, second, expected",
        [
            ("1.0.0", "2.0.0", "<"),
            ("10.0.0", "2.0.0", ">"),
            ("1.0.0+A", "1.0.0+B", "="),
            ("1.0.0-alpha", "1.0.0", "<"),
        ],
    )
    def test_compare(self, runner, first, second, expected):
        """Test precedence output."""
        result = runner.invoke(cli, ["compare", first, second])
        assert result.exit_code == 0
        assert result.output == f"{expected}\n"

    def test_compare_invalid(self, runner):
        """Test comparing an invalid version."""
        result = runner.invoke(cli, ["compare", "1.0.0", "1.0"])
        assert result.exit_code == 1
        assert "Invalid version" in result.output


class TestMisc:
    """Tests for auxiliary commands."""

    def test_generate_config(self, runner):
        """Test printing the configuration template."""
        result = runner.invoke(cli, ["generate-config"])
        assert result.exit_code == 0
        assert "version-prefix" in result.output

    @pytest.mark.parametrize("shell", ["bash", "zsh", "fish"])
    def test_completion(self, runner, shell):
        """Test completion script generation."""
        result = runner.invoke(cli, ["completion", shell])
        assert result.exit_code == 0
        assert "_STRICT_SEMVER_COMPLETE" in result.output

    def test_help_alias(self, runner):
        """Test that -h shows help."""
        result = runner.invoke(cli, ["bump", "-h"])
        assert result.exit_code == 0
        assert "--prerelease" in result.output

    def test_completion_shell_case_insensitive(self, runner):
        """Test that the shell name is matched case-insensitively."""
        result = runner.invoke(cli, ["completion", "ZSH"])
        assert result.exit_code == 0
        assert "_STRICT_SEMVER_COMPLETE" in result.output

    def test_completion_unsupported_shell(self, runner):
        """Test that unknown shells are rejected by the command and the generator."""
        result = runner.invoke(cli, ["completion", "tcsh"])
        assert result.exit_code == 2

        with pytest.raises(ValueError, match="Unsupported shell: tcsh"):
            generate_completion_script(cli, "tcsh")
