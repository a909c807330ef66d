"""Completion scripts for the strict-semver command."""

import click
from click.shell_completion import BashComplete, FishComplete, ShellComplete, ZshComplete

PROG_NAME = "strict-semver"

# click reads this variable to tell a completion request from a normal run
COMPLETE_VAR = "_STRICT_SEMVER_COMPLETE"

SUPPORTED_SHELLS: dict[str, type[ShellComplete]] = {
    "bash": BashComplete,
    "zsh": ZshComplete,
    "fish": FishComplete,
}


def generate_completion_script(cli: click.Command, shell: str) -> str:
    """Return the script that wires shell completion up to cli.

    Raises:
        ValueError: If shell is not one of SUPPORTED_SHELLS
    """
    try:
        complete_class = SUPPORTED_SHELLS[shell.lower()]
    except KeyError:
        raise ValueError(
            f"Unsupported shell: {shell}. Supported shells: {', '.join(SUPPORTED_SHELLS)}"
        ) from None

    return complete_class(cli, {}, PROG_NAME, COMPLETE_VAR).source()
