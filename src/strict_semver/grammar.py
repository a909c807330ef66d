"""Recursive-descent grammar for Semantic Versioning 2.0 strings.

The grammar is assembled from small consumers. A consumer is any callable
taking the current offset, the unconsumed input and a draft being filled in,
and returning whatever input it did not consume. A consumer that cannot match
raises ParseError with the offset at which the rule was violated.

    version  := integer "." integer "." integer
                ["-" prerelease ("." prerelease)*]
                ["+" metadata ("." metadata)*]
                end-of-input
"""

import string
from collections.abc import Callable

from strict_semver.version import ErrorKind, Version, VersionError, number_from_digits

DIGITS = frozenset(string.digits)

# Allowed in both pre-release and build metadata identifiers (ASCII only)
IDENTIFIER_CHARACTERS = frozenset(string.ascii_letters + string.digits + "-")

# Characters that end an identifier without being part of it
IDENTIFIER_TERMINATORS = frozenset(".+")


class ParseError(VersionError):
    """Raised when a string does not match the version grammar."""

    def __init__(self, position: int, kind: ErrorKind, message: str):
        self.position = position
        self.kind = kind
        self.message = message
        super().__init__(f"error at position {position}: {message}")


class VersionDraft:
    """Mutable accumulator filled in by consumers during one parse call.

    A draft is created for a single top-level call and never shared, so the
    consumers can append to it freely. Only freeze() results leave this module.
    """

    def __init__(self) -> None:
        self.major = 0
        self.minor = 0
        self.patch = 0
        self.prerelease: list[str] = []
        self.buildmetadata: list[str] = []

    def freeze(self) -> Version:
        """Return an immutable Version holding the accumulated fields."""
        return Version(
            major=self.major,
            minor=self.minor,
            patch=self.patch,
            prerelease=tuple(self.prerelease),
            buildmetadata=tuple(self.buildmetadata),
        )


Consumer = Callable[[int, str, VersionDraft], str]


def is_numeric(identifier: str) -> bool:
    """Return True if the identifier consists of ASCII digits only."""
    return identifier != "" and all(ch in DIGITS for ch in identifier)


def literal(expected: str) -> Consumer:
    """Match an exact literal at the start of the input.

    Args:
        expected: Literal text to match (e.g., '.')

    Returns:
        Consumer raising UNEXPECTED_END or UNEXPECTED_CHAR on mismatch
    """

    def consume(pos: int, stream: str, draft: VersionDraft) -> str:
        if not stream:
            raise ParseError(
                pos,
                ErrorKind.UNEXPECTED_END,
                f"expected '{expected}' but version too short",
            )
        if not stream.startswith(expected):
            raise ParseError(
                pos,
                ErrorKind.UNEXPECTED_CHAR,
                f"expected '{expected}' but found '{stream[0]}' instead",
            )
        return stream[len(expected):]

    return consume


def dot() -> Consumer:
    return literal(".")


def plus() -> Consumer:
    return literal("+")


def minus() -> Consumer:
    return literal("-")


def integer(field: str) -> Consumer:
    """Match a non-negative integer without leading zeros.

    Digits are consumed greedily and the value is stored on the draft
    attribute named by field.

    Args:
        field: Draft attribute to assign ('major', 'minor' or 'patch')

    Returns:
        Consumer raising NOT_A_NUMBER or LEADING_ZERO on failure
    """

    def consume(pos: int, stream: str, draft: VersionDraft) -> str:
        end = 0
        while end < len(stream) and stream[end] in DIGITS:
            end += 1
        digits = stream[:end]

        if not digits:
            found = f"'{stream[0]}'" if stream else "end of version"
            raise ParseError(
                pos, ErrorKind.NOT_A_NUMBER, f"expected {field} number but found {found}"
            )
        if len(digits) > 1 and digits[0] == "0":
            raise ParseError(
                pos,
                ErrorKind.LEADING_ZERO,
                f"number {digits} should not have leading zero(s)",
            )

        setattr(draft, field, number_from_digits(digits))
        return stream[end:]

    return consume


def identifier(section: str) -> Consumer:
    """Match one dot-separated identifier of a pre-release or metadata list.

    The identifier runs up to the next '.' or '+' or to the end of input.
    Pre-release identifiers made only of digits must not have leading zeros;
    build metadata identifiers have no such restriction.

    Args:
        section: Draft list to append to ('prerelease' or 'buildmetadata')

    Returns:
        Consumer raising EMPTY_IDENTIFIER, INVALID_CHARACTER or LEADING_ZERO
    """
    check_leading_zero = section == "prerelease"

    def consume(pos: int, stream: str, draft: VersionDraft) -> str:
        end = 0
        while end < len(stream) and stream[end] not in IDENTIFIER_TERMINATORS:
            if stream[end] not in IDENTIFIER_CHARACTERS:
                raise ParseError(
                    pos + end,
                    ErrorKind.INVALID_CHARACTER,
                    f"invalid character in {section} identifier: '{stream[end]}'",
                )
            end += 1
        token = stream[:end]

        if not token:
            raise ParseError(
                pos, ErrorKind.EMPTY_IDENTIFIER, f"{section} identifier cannot be empty"
            )
        if check_leading_zero and is_numeric(token) and len(token) > 1 and token[0] == "0":
            raise ParseError(
                pos,
                ErrorKind.LEADING_ZERO,
                f"number {token} should not have leading zero(s)",
            )

        getattr(draft, section).append(token)
        return stream[end:]

    return consume


def end_of_input() -> Consumer:
    """Succeed only when no input remains."""

    def consume(pos: int, stream: str, draft: VersionDraft) -> str:
        if stream:
            raise ParseError(pos, ErrorKind.TRAILING_DATA, f"extra data at the end: {stream}")
        return stream

    return consume


def sequence(*consumers: Consumer) -> Consumer:
    """Run consumers in order, each starting where the previous one stopped."""

    def consume(pos: int, stream: str, draft: VersionDraft) -> str:
        for consumer in consumers:
            remain = consumer(pos, stream, draft)
            pos += len(stream) - len(remain)
            stream = remain
        return stream

    return consume


def optional(probe: Consumer, *consumers: Consumer) -> Consumer:
    """Run probe and, if it matches, require the remaining consumers.

    A failing probe means the section is absent: nothing is consumed and no
    error is raised. Once the probe has matched the section is mandatory and
    any failure in the remaining consumers propagates.
    """
    rest = sequence(*consumers)

    def consume(pos: int, stream: str, draft: VersionDraft) -> str:
        try:
            remain = probe(pos, stream, draft)
        except ParseError:
            return stream
        return rest(pos + len(stream) - len(remain), remain, draft)

    return consume


def repeat(*consumers: Consumer) -> Consumer:
    """Run the consumer group zero or more times.

    Repetition stops cleanly when the first consumer of a cycle fails. A
    failure of any later consumer in a started cycle propagates, since the
    earlier part of the cycle committed to another repetition.
    """

    def consume(pos: int, stream: str, draft: VersionDraft) -> str:
        while True:
            cycle_start = stream
            for index, consumer in enumerate(consumers):
                try:
                    remain = consumer(pos, stream, draft)
                except ParseError:
                    if index == 0:
                        return stream
                    raise
                pos += len(stream) - len(remain)
                stream = remain
            if stream == cycle_start:
                return stream

    return consume


def core_grammar() -> Consumer:
    return sequence(integer("major"), dot(), integer("minor"), dot(), integer("patch"))


def identifier_list(section: str) -> Consumer:
    """Match identifier ("." identifier)* for the given section."""
    return sequence(identifier(section), repeat(dot(), identifier(section)))


def version_grammar() -> Consumer:
    return sequence(
        core_grammar(),
        optional(minus(), identifier_list("prerelease")),
        optional(plus(), identifier_list("buildmetadata")),
        end_of_input(),
    )


VERSION_PARSER = version_grammar()
CORE_PARSER = sequence(core_grammar(), end_of_input())
PRERELEASE_PARSER = sequence(identifier_list("prerelease"), end_of_input())
BUILDMETADATA_PARSER = sequence(identifier_list("buildmetadata"), end_of_input())


def _run(parser: Consumer, text: str) -> VersionDraft:
    if not isinstance(text, str):
        raise TypeError(f"Version must be a string, got {type(text).__name__}")
    draft = VersionDraft()
    parser(0, text, draft)
    return draft


def parse(text: str) -> Version:
    """Parse a semantic version string.

    Args:
        text: Version string (e.g., '1.2.3-rc.1+build.5'), without
            surrounding whitespace

    Returns:
        Parsed Version

    Raises:
        ParseError: If the string is not a valid semantic version. The error
            carries the 0-based offset of the violation and its kind.
    """
    return _run(VERSION_PARSER, text).freeze()


def valid(text: str) -> bool:
    """Check if a string is a valid semantic version.

    Args:
        text: The string to validate

    Returns:
        True if the string parses, False otherwise
    """
    try:
        parse(text)
    except (ParseError, TypeError):
        return False
    return True


def must_parse(text: str) -> Version:
    """Parse a version that is known to be valid.

    Intended for literals and inputs validated elsewhere, where a failure
    means a bug in the caller rather than bad user input.

    Raises:
        RuntimeError: If the string is not a valid semantic version
    """
    try:
        return parse(text)
    except ParseError as e:
        raise RuntimeError(f"must_parse({text!r}) failed: {e}") from e


def render(version: Version) -> str:
    """Render a version in canonical form, the exact inverse of parse()."""
    return str(version)


def parse_core(text: str) -> tuple[int, int, int]:
    """Parse a bare major.minor.patch triple.

    Raises:
        ParseError: If the text is not exactly a valid core
    """
    draft = _run(CORE_PARSER, text)
    return draft.major, draft.minor, draft.patch


def parse_prerelease(text: str) -> tuple[str, ...]:
    """Parse a dot-separated pre-release identifier list (without the '-').

    Raises:
        ParseError: If any identifier is empty, malformed or has a leading zero
    """
    return tuple(_run(PRERELEASE_PARSER, text).prerelease)


def parse_buildmetadata(text: str) -> tuple[str, ...]:
    """Parse a dot-separated build metadata identifier list (without the '+').

    Raises:
        ParseError: If any identifier is empty or malformed
    """
    return tuple(_run(BUILDMETADATA_PARSER, text).buildmetadata)
