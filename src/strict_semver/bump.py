"""Version bumping: named transformations from one version to the next."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import replace

from strict_semver.grammar import ParseError, is_numeric, parse, parse_buildmetadata
from strict_semver.version import ErrorKind, Version, VersionError


class BumpError(VersionError):
    """Raised when a bump operation cannot be applied.

    Attributes:
        kind: Failure category
        message: Human-readable description
        version: The version that was being bumped, unmodified
    """

    def __init__(self, kind: ErrorKind, message: str, version: Version | None = None):
        self.kind = kind
        self.message = message
        self.version = version
        super().__init__(message)


def increment_digits(digits: str) -> str:
    """Add one to a non-negative decimal number given as a digit string.

    Works on the text directly, so identifiers of any length are handled.
    """
    head = digits.rstrip("9")
    carried = "0" * (len(digits) - len(head))
    if not head:
        return "1" + carried
    return head[:-1] + str(int(head[-1]) + 1) + carried


class BumpOperation(ABC):
    """Abstract base class for bump operations."""

    name = ""

    @abstractmethod
    def apply(self, version: Version, origin: Version) -> Version:
        """Apply this operation.

        Args:
            version: Result of the previous operations in the bump
            origin: The version the bump started from

        Returns:
            New version

        Raises:
            BumpError: If the operation's precondition is not met
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class MajorBump(BumpOperation):
    """Increment major, reset minor and patch, drop the pre-release."""

    name = "major"

    def apply(self, version: Version, origin: Version) -> Version:
        return replace(version, major=version.major + 1, minor=0, patch=0, prerelease=())


class MinorBump(BumpOperation):
    """Increment minor, reset patch, drop the pre-release."""

    name = "minor"

    def apply(self, version: Version, origin: Version) -> Version:
        return replace(version, minor=version.minor + 1, patch=0, prerelease=())


class PatchBump(BumpOperation):
    """Increment patch and drop the pre-release."""

    name = "patch"

    def apply(self, version: Version, origin: Version) -> Version:
        return replace(version, patch=version.patch + 1, prerelease=())


class ReleaseBump(BumpOperation):
    """Turn a pre-release into the release of the same core."""

    name = "release"

    def apply(self, version: Version, origin: Version) -> Version:
        if not version.prerelease:
            raise BumpError(
                ErrorKind.NO_PRERELEASE_TO_RELEASE,
                f"no prerelease set in version {version}",
            )
        return replace(version, prerelease=())


class PrereleaseIncrement(BumpOperation):
    """Increment the last purely numeric pre-release identifier.

    Only that one identifier changes: 'alpha.1.2' becomes 'alpha.1.3'.
    """

    name = "prerelease"

    def apply(self, version: Version, origin: Version) -> Version:
        identifiers = list(version.prerelease)
        for index in range(len(identifiers) - 1, -1, -1):
            if is_numeric(identifiers[index]):
                identifiers[index] = increment_digits(identifiers[index])
                return replace(version, prerelease=tuple(identifiers))

        if not identifiers:
            message = f"no prerelease set in version {version}"
        else:
            message = f"no numeric prerelease identifier in version {version}"
        raise BumpError(ErrorKind.NO_PRERELEASE_TO_INCREMENT, message)


class AttachMetadata(BumpOperation):
    """Replace build metadata with the dot-separated identifiers of value.

    An empty value removes the metadata.
    """

    name = "metadata"

    def __init__(self, value: str):
        self.value = value

    def apply(self, version: Version, origin: Version) -> Version:
        if not self.value:
            return replace(version, buildmetadata=())
        try:
            identifiers = parse_buildmetadata(self.value)
        except ParseError as e:
            raise BumpError(
                ErrorKind.INVALID_METADATA,
                f"invalid build metadata '{self.value}': {e}",
            ) from e
        return replace(version, buildmetadata=identifiers)

    def __repr__(self) -> str:
        return f"AttachMetadata({self.value!r})"


class KeepMetadata(BumpOperation):
    """Carry the build metadata of the original version forward."""

    name = "keep-metadata"

    def apply(self, version: Version, origin: Version) -> Version:
        return replace(version, buildmetadata=origin.buildmetadata)


MAJOR = MajorBump()
MINOR = MinorBump()
PATCH = PatchBump()
RELEASE = ReleaseBump()
PRERELEASE = PrereleaseIncrement()
KEEP_METADATA = KeepMetadata()

OPERATIONS: dict[str, BumpOperation] = {
    op.name: op for op in (MAJOR, MINOR, PATCH, RELEASE, PRERELEASE)
}


def get_operation(name: str) -> BumpOperation:
    """Get the bump operation for a name.

    Args:
        name: Operation name ('major', 'minor', 'patch', 'release' or 'prerelease')

    Returns:
        BumpOperation instance

    Raises:
        BumpError: If the name is not supported
    """
    operation = OPERATIONS.get(name.lower())
    if operation is None:
        raise BumpError(
            ErrorKind.UNKNOWN_OPERATION,
            f"Invalid bump type '{name}'. Must be one of: {', '.join(OPERATIONS)}",
        )
    return operation


def bump(version: Version, operations: Iterable[BumpOperation] = ()) -> Version:
    """Derive a new version by applying bump operations in order.

    Build metadata is cleared before the first operation runs, so it only
    survives through an explicit AttachMetadata or KeepMetadata; the last
    metadata operation wins. With no operations a major bump is applied.

    Args:
        version: Version to bump (left untouched)
        operations: Operations applied one after another

    Returns:
        New version

    Raises:
        BumpError: If any operation fails. Nothing is applied in that case
            and the error's version attribute holds the original version.
    """
    operations = list(operations) or [MAJOR]

    result = replace(version, buildmetadata=())
    for operation in operations:
        try:
            result = operation.apply(result, version)
        except BumpError as e:
            e.version = version
            raise

    return result


def bump_version(current_version: str, *bump_types: str) -> str:
    """Bump a version string by the named operations.

    Args:
        current_version: Current version string (e.g., '1.2.3')
        bump_types: Operation names applied in order (default: major)

    Returns:
        New version string

    Raises:
        ParseError: If current_version is invalid
        BumpError: If a bump type is unknown or cannot be applied
    """
    operations = [get_operation(bump_type) for bump_type in bump_types]
    return str(bump(parse(current_version), operations))
