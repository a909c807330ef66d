"""Semantic version value type and error taxonomy."""

from dataclasses import dataclass, field
from enum import Enum


class ErrorKind(Enum):
    """Category of a parse, build or bump failure."""

    UNEXPECTED_END = "unexpected end"
    UNEXPECTED_CHAR = "unexpected character"
    INVALID_CHARACTER = "invalid character"
    NOT_A_NUMBER = "not a number"
    LEADING_ZERO = "leading zero"
    EMPTY_IDENTIFIER = "empty identifier"
    TRAILING_DATA = "trailing data"
    NO_PRERELEASE_TO_RELEASE = "no prerelease to release"
    NO_PRERELEASE_TO_INCREMENT = "no prerelease to increment"
    INVALID_METADATA = "invalid metadata"
    UNKNOWN_OPERATION = "unknown operation"


# int() and str() refuse more digits than sys.get_int_max_str_digits() at once
_CHUNK_DIGITS = 4000


def number_from_digits(digits: str) -> int:
    """Convert a string of ASCII digits of any length to an int."""
    value = 0
    for start in range(0, len(digits), _CHUNK_DIGITS):
        chunk = digits[start:start + _CHUNK_DIGITS]
        value = value * 10 ** len(chunk) + int(chunk)
    return value


def format_number(value: int) -> str:
    """Render an int in decimal, however many digits it has."""
    if value < 0:
        return "-" + format_number(-value)
    chunks = []
    while value >= 10**_CHUNK_DIGITS:
        value, low = divmod(value, 10**_CHUNK_DIGITS)
        chunks.append(str(low).zfill(_CHUNK_DIGITS))
    chunks.append(str(value))
    return "".join(reversed(chunks))


class VersionError(Exception):
    """Raised when version operations fail."""

    pass


@dataclass(frozen=True)
class Version:
    """A parsed semantic version.

    Attributes:
        major: Major version number (breaking changes)
        minor: Minor version number (new features, backward compatible)
        patch: Patch version number (bug fixes, backward compatible)
        prerelease: Pre-release identifiers, empty for a release version
        buildmetadata: Build metadata identifiers, ignored for precedence
    """

    major: int = 0
    minor: int = 0
    patch: int = 0
    prerelease: tuple[str, ...] = field(default=())
    buildmetadata: tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        # Lists are accepted for convenience but stored as tuples
        object.__setattr__(self, "prerelease", tuple(self.prerelease))
        object.__setattr__(self, "buildmetadata", tuple(self.buildmetadata))

    def __str__(self) -> str:
        """Return the canonical string representation of the version."""
        text = self.core
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        if self.buildmetadata:
            text += "+" + ".".join(self.buildmetadata)
        return text

    @property
    def core(self) -> str:
        """Return the major.minor.patch part without any suffix."""
        return ".".join(format_number(n) for n in (self.major, self.minor, self.patch))

    @property
    def is_prerelease(self) -> bool:
        """Return True if this is a pre-release version."""
        return len(self.prerelease) > 0

    def is_valid(self) -> bool:
        """Check that rendering and re-parsing yields the same structure.

        Values produced by parsing, building or bumping are always valid;
        this is meant for versions constructed or edited by hand.

        Returns:
            True if the version survives a render/parse round trip unchanged
        """
        from strict_semver.grammar import parse

        try:
            return parse(str(self)) == self
        except VersionError:
            return False
