"""Version precedence following Semantic Versioning 2.0, item 11.

Core numbers compare by value, a release outranks any pre-release of the same
core, pre-release identifiers compare left to right, and build metadata is
ignored.
"""

from collections.abc import Iterable
from functools import cmp_to_key

from strict_semver.grammar import is_numeric, parse
from strict_semver.version import Version


def _coerce(version: str | Version) -> Version:
    return parse(version) if isinstance(version, str) else version


def _identifier_less(a: str, b: str) -> tuple[bool, bool]:
    """Compare two pre-release identifiers.

    Returns:
        Tuple of (less, equal)
    """
    a_numeric = is_numeric(a)
    b_numeric = is_numeric(b)

    if a_numeric and b_numeric:
        # Without leading zeros a longer digit string is the larger number
        return (len(a), a) < (len(b), b), a == b
    # Numeric identifiers have lower precedence than alphanumeric ones
    if a_numeric:
        return True, False
    if b_numeric:
        return False, False
    return a < b, a == b


def _prerelease_less(a: tuple[str, ...], b: tuple[str, ...]) -> tuple[bool, bool]:
    """Compare two pre-release identifier sequences.

    Returns:
        Tuple of (less, equal)
    """
    # A release (no pre-release) outranks every pre-release
    if not a and not b:
        return False, True
    if not a:
        return False, False
    if not b:
        return True, False

    for left, right in zip(a, b):
        less, equal = _identifier_less(left, right)
        if not equal:
            return less, False

    # All shared identifiers equal: the shorter sequence sorts first
    return len(a) < len(b), len(a) == len(b)


def less(a: str | Version, b: str | Version) -> bool:
    """Return True if a has strictly lower precedence than b.

    Args:
        a: First version (string or Version)
        b: Second version (string or Version)

    Returns:
        True if a < b; False when a > b or both have equal precedence

    Raises:
        ParseError: If either argument is an invalid version string

    Examples:
        >>> less("1.0.0-alpha", "1.0.0")
        True
        >>> less("1.0.0+A", "1.0.0+B")
        False
    """
    v1 = _coerce(a)
    v2 = _coerce(b)

    for attr in ("major", "minor", "patch"):
        val1 = getattr(v1, attr)
        val2 = getattr(v2, attr)
        if val1 != val2:
            return val1 < val2

    less_than, _ = _prerelease_less(v1.prerelease, v2.prerelease)
    return less_than


def compare(a: str | Version, b: str | Version) -> int:
    """Compare two versions by precedence.

    Returns:
        -1 if a < b, 0 if both have equal precedence, 1 if a > b
    """
    v1 = _coerce(a)
    v2 = _coerce(b)
    if less(v1, v2):
        return -1
    if less(v2, v1):
        return 1
    return 0


def equal_precedence(a: str | Version, b: str | Version) -> bool:
    """Return True if neither version precedes the other."""
    return compare(a, b) == 0


precedence_key = cmp_to_key(compare)


def sort_versions(versions: Iterable[Version], reverse: bool = False) -> list[Version]:
    """Sort versions by precedence.

    The sort is stable, so versions of equal precedence (for example differing
    only in build metadata) keep their input order, also when reversed.

    Args:
        versions: Versions to sort
        reverse: If True, newest first

    Returns:
        New sorted list
    """
    return sorted(versions, key=precedence_key, reverse=reverse)


def latest(versions: Iterable[Version]) -> Version | None:
    """Return the version with the highest precedence, or None if empty.

    Of several versions with equal precedence the first one wins.
    """
    best = None
    for version in versions:
        if best is None or less(best, version):
            best = version
    return best
