"""CLI interface for strict-semver."""

import sys

import click

from strict_semver import __version__
from strict_semver.bump import (
    KEEP_METADATA,
    AttachMetadata,
    BumpError,
    BumpOperation,
    bump,
    get_operation,
)
from strict_semver.compare import compare, sort_versions
from strict_semver.config import ConfigError, ToolConfig, load_config
from strict_semver.grammar import ParseError, parse
from strict_semver.shell_completion import SUPPORTED_SHELLS, generate_completion_script
from strict_semver.version import Version

BUMP_TYPES = ("major", "minor", "patch", "release", "prerelease")


def add_help_option(f):
    """Custom decorator to add '-h' as an alias for '--help'."""
    f = click.help_option("--help", "-h")(f)
    return f


def config_option(f):
    """Add the shared --config/-c option."""
    return click.option(
        "--config",
        "-c",
        default=None,
        help="Path to configuration file (default: strict-semver.yaml in current directory)",
    )(f)


def split_versions(text: str, delimiter: str | None = None) -> list[str]:
    """Split raw input into version strings.

    Args:
        text: Raw input text
        delimiter: Separator between versions, or None for runs of whitespace

    Returns:
        Trimmed, non-empty items in input order
    """
    if delimiter is None:
        return text.split()
    return [item.strip() for item in text.split(delimiter) if item.strip()]


def unescape_separator(separator: str) -> str:
    """Expand the \\n, \\t and \\\\ escapes accepted by --separator."""
    # Separators are joined verbatim, so only the escapes a shell cannot type easily are expanded
    escapes = {"n": "\n", "t": "\t", "\\": "\\"}
    result = []
    index = 0
    while index < len(separator):
        char = separator[index]
        if char == "\\" and index + 1 < len(separator) and separator[index + 1] in escapes:
            result.append(escapes[separator[index + 1]])
            index += 2
            continue
        result.append(char)
        index += 1
    return "".join(result)


def parse_argument(text: str, tool_config: ToolConfig) -> Version:
    """Parse a version given on the command line, honouring the prefix.

    Raises:
        ParseError: If the version is invalid
    """
    return parse(tool_config.strip_prefix(text))


@click.group()
@add_help_option
@click.version_option(__version__, "--version", "-v")
def cli():
    """strict-semver - validate, sort, compare and bump semantic versions."""
    pass


@cli.command()
@add_help_option
@config_option
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Also report versions that are valid",
)
@click.argument("versions", nargs=-1)
def verify(config: str | None, verbose: bool, versions: tuple[str, ...]):
    """Validate versions given as arguments.

    Every invalid version is reported with the position of the error.
    Exits with status 1 if any version is invalid.
    """
    try:
        tool_config = load_config(config)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    was_invalid = False
    for text in versions:
        try:
            parse_argument(text, tool_config)
        except ParseError as e:
            click.echo(f"Invalid version: '{text}', {e}")
            was_invalid = True
            continue
        if verbose:
            click.echo(f"Valid version: '{text}'")

    if was_invalid:
        sys.exit(1)


@cli.command(name="sort")
@add_help_option
@config_option
@click.option(
    "--delimiter",
    "-d",
    default=None,
    help="Delimiter used to separate input versions (default: any whitespace)",
)
@click.option(
    "--separator",
    "-s",
    default=None,
    help="Separator between output versions; \\n and \\t are expanded (default: newline)",
)
@click.option(
    "--no-newline",
    "-n",
    is_flag=True,
    help="Do not output the trailing newline",
)
@click.option(
    "--last",
    "-1",
    "only_last",
    is_flag=True,
    help="Output only the last version after sorting",
)
@click.option(
    "--reverse",
    "-r",
    is_flag=True,
    help="Sort newest first",
)
@click.option(
    "--ignore-invalid",
    "-i",
    is_flag=True,
    help="Skip versions that have an invalid format",
)
def sort_cmd(
    config: str | None,
    delimiter: str | None,
    separator: str | None,
    no_newline: bool,
    only_last: bool,
    reverse: bool,
    ignore_invalid: bool,
):
    """Sort versions read from standard input.

    Sorting follows the precedence rules of Semantic Versioning 2.0 (see
    semver.org). Versions of equal precedence keep their input order.
    """
    try:
        tool_config = load_config(config)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    if delimiter is None:
        delimiter = tool_config.get_sort_delimiter()
    if separator is None:
        separator = tool_config.get_output_separator()
    else:
        separator = unescape_separator(separator)

    text = click.get_text_stream("stdin").read()

    versions = []
    for item in split_versions(text, delimiter):
        try:
            versions.append(parse_argument(item, tool_config))
        except ParseError as e:
            if ignore_invalid:
                continue
            click.echo(f"Error parsing {item}: {e}", err=True)
            sys.exit(1)

    if not versions:
        return

    ordered = sort_versions(versions, reverse=reverse)
    if only_last:
        ordered = ordered[-1:]

    prefix = tool_config.get_version_prefix()
    output = separator.join(f"{prefix}{version}" for version in ordered)
    click.echo(output, nl=not no_newline)


@cli.command(name="bump")
@add_help_option
@config_option
@click.option("--major", is_flag=True, help="Bump to next major version")
@click.option("--minor", is_flag=True, help="Bump to next minor version")
@click.option("--patch", is_flag=True, help="Bump to next patch version")
@click.option("--release", is_flag=True, help="Strip prerelease from version")
@click.option(
    "--prerelease",
    is_flag=True,
    help="Increment the last numeric prerelease identifier",
)
@click.option(
    "--meta",
    "-m",
    multiple=True,
    help="Build metadata attached to new version. Can be used multiple times.",
)
@click.option(
    "--keep-meta",
    "-k",
    is_flag=True,
    help="Keep the build metadata of the given version",
)
@click.argument("version")
def bump_cmd(
    config: str | None,
    major: bool,
    minor: bool,
    patch: bool,
    release: bool,
    prerelease: bool,
    meta: tuple[str, ...],
    keep_meta: bool,
    version: str,
):
    """Bump VERSION to a newer version.

    Without a bump type the default from configuration is used (patch
    unless configured otherwise). Build metadata is dropped unless --meta
    or --keep-meta is given.
    """
    flags = {
        "major": major,
        "minor": minor,
        "patch": patch,
        "release": release,
        "prerelease": prerelease,
    }
    bump_types = [name for name in BUMP_TYPES if flags[name]]

    if len(bump_types) > 1:
        raise click.UsageError("Only one of --major, --minor, --patch, --release, --prerelease allowed")
    if meta and keep_meta:
        raise click.UsageError("--meta and --keep-meta are mutually exclusive")

    try:
        tool_config = load_config(config)
        parsed_version = parse_argument(version, tool_config)

        bump_type = bump_types[0] if bump_types else tool_config.get_default_bump()
        operations: list[BumpOperation] = [get_operation(bump_type)]
        if meta:
            operations.append(AttachMetadata(".".join(meta)))
        if keep_meta:
            operations.append(KEEP_METADATA)

        new_version = bump(parsed_version, operations)

    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except ParseError as e:
        click.echo(f"Invalid version: '{version}', {e}", err=True)
        sys.exit(1)
    except BumpError as e:
        click.echo(f"Bump '{version}' failed: {e}", err=True)
        sys.exit(1)

    click.echo(f"{tool_config.get_version_prefix()}{new_version}")


@cli.command(name="compare")
@add_help_option
@config_option
@click.argument("first")
@click.argument("second")
def compare_cmd(config: str | None, first: str, second: str):
    """Compare precedence of FIRST and SECOND.

    Prints '<', '=' or '>'. Build metadata is ignored, so versions that
    differ only in metadata compare as '='.
    """
    try:
        tool_config = load_config(config)
        result = compare(
            parse_argument(first, tool_config),
            parse_argument(second, tool_config),
        )
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except ParseError as e:
        click.echo(f"Invalid version: {e}", err=True)
        sys.exit(1)

    click.echo({-1: "<", 0: "=", 1: ">"}[result])


@cli.command()
@add_help_option
def generate_config():
    """Generate a configuration file template.

    Outputs a documented configuration template to stdout.

    Usage:
        strict-semver generate-config > strict-semver.yaml
    """
    from strict_semver.config import generate_config_template

    click.echo(generate_config_template())


@cli.command()
@add_help_option
@click.argument(
    "shell",
    type=click.Choice(list(SUPPORTED_SHELLS), case_sensitive=False),
)
def completion(shell: str):
    """Generate shell completion script.

    Usage:
        # Bash - save to file and source in ~/.bashrc
        strict-semver completion bash > ~/.strict-semver-completion.bash
        echo ". ~/.strict-semver-completion.bash" >> ~/.bashrc

        # Fish - save to completions directory
        strict-semver completion fish > ~/.config/fish/completions/strict-semver.fish
    """
    click.echo(generate_completion_script(cli, shell))


if __name__ == "__main__":
    cli()
