"""Assemble a version from separately validated pieces."""

from collections.abc import Iterable

from strict_semver.grammar import parse_buildmetadata, parse_core, parse_prerelease
from strict_semver.version import Version


class VersionBuilder:
    """Incremental version construction.

    Every call validates its own piece against the version grammar before
    anything is stored, so a failed call leaves the builder unchanged.
    Pre-release and build metadata fragments accumulate in call order.

    Example:
        >>> str(VersionBuilder().core("1.2.3").prerelease("rc.1").buildmetadata("cafebabe").build())
        '1.2.3-rc.1+cafebabe'
    """

    def __init__(self) -> None:
        self._core = (0, 0, 0)
        self._prerelease: list[str] = []
        self._buildmetadata: list[str] = []

    def core(self, text: str) -> "VersionBuilder":
        """Set major.minor.patch. An empty string is ignored.

        Raises:
            ParseError: If text is not a valid core
        """
        if text:
            self._core = parse_core(text)
        return self

    def prerelease(self, fragment: str) -> "VersionBuilder":
        """Append dot-separated pre-release identifiers. An empty string is ignored.

        Raises:
            ParseError: If any identifier in the fragment is invalid
        """
        if fragment:
            self._prerelease.extend(parse_prerelease(fragment))
        return self

    def buildmetadata(self, fragment: str) -> "VersionBuilder":
        """Append dot-separated build metadata identifiers. An empty string is ignored.

        Raises:
            ParseError: If any identifier in the fragment is invalid
        """
        if fragment:
            self._buildmetadata.extend(parse_buildmetadata(fragment))
        return self

    def build(self) -> Version:
        """Return the version assembled so far."""
        major, minor, patch = self._core
        return Version(
            major=major,
            minor=minor,
            patch=patch,
            prerelease=tuple(self._prerelease),
            buildmetadata=tuple(self._buildmetadata),
        )


def build(
    core: str | None = None,
    prerelease: Iterable[str] = (),
    buildmetadata: Iterable[str] = (),
) -> Version:
    """Build a version from a core and lists of identifier fragments.

    Args:
        core: 'major.minor.patch' text, 0.0.0 if None or empty
        prerelease: Pre-release fragments such as 'alpha.1', appended in order
        buildmetadata: Build metadata fragments, appended in order

    Returns:
        Assembled Version

    Raises:
        ParseError: If any piece is invalid
    """
    builder = VersionBuilder().core(core or "")
    for fragment in prerelease:
        builder.prerelease(fragment)
    for fragment in buildmetadata:
        builder.buildmetadata(fragment)
    return builder.build()
