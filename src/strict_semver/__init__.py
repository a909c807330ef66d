"""strict-semver - Semantic Versioning 2.0 parsing, precedence and bumping."""

from importlib.metadata import version as package_version

from strict_semver.builder import VersionBuilder, build
from strict_semver.bump import (
    KEEP_METADATA,
    MAJOR,
    MINOR,
    PATCH,
    PRERELEASE,
    RELEASE,
    AttachMetadata,
    BumpError,
    BumpOperation,
    KeepMetadata,
    bump,
    bump_version,
    get_operation,
)
from strict_semver.compare import (
    compare,
    equal_precedence,
    latest,
    less,
    precedence_key,
    sort_versions,
)
from strict_semver.grammar import ParseError, must_parse, parse, render, valid
from strict_semver.version import ErrorKind, Version, VersionError

try:
    __version__ = package_version("strict-semver")
except Exception:
    __version__ = "0.0.0-dev"

__all__ = [
    "Version",
    "VersionError",
    "ErrorKind",
    "ParseError",
    "parse",
    "valid",
    "must_parse",
    "render",
    "less",
    "compare",
    "equal_precedence",
    "precedence_key",
    "sort_versions",
    "latest",
    "BumpError",
    "BumpOperation",
    "AttachMetadata",
    "KeepMetadata",
    "MAJOR",
    "MINOR",
    "PATCH",
    "RELEASE",
    "PRERELEASE",
    "KEEP_METADATA",
    "bump",
    "bump_version",
    "get_operation",
    "VersionBuilder",
    "build",
]
