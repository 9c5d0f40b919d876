# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Structured version identifiers, ordering, and pattern resolution.

A VersionIdentifier is the parsed, immutable form of an arbitrary tool
version string. It is not limited to semantic versioning: "17.0.2+8",
"2024.1", "1.0-SNAPSHOT" and "3.9.6-rc2" are all accepted.

Parsing never fails for a string. Instead every identifier can be asked
whether it is_valid(). A valid identifier:

- has only valid segments,
- starts with a number (".1.0" and "rc1" are not valid),
- has at least one positive number ("0.0.0" is not valid),
- names at most one development phase ("1.0-alpha1.rc2" is not valid),
- is not a pattern.

Patterns contain a wildcard segment: "*" matches any version with the same
prefix (e.g., "17*" matches "17.0.2"), while "*!" only matches unstable
versions that carry a development phase (e.g., "1.0-SNAPSHOT").

Example:
    Ordering versions:
        ```python
        from vermatch.versioning import VersionIdentifier

        a = VersionIdentifier.of("1.0-alpha1")
        b = VersionIdentifier.of("1.0")
        a.compare_version(b)  # VersionComparisonResult.LESS
        a < b                 # True
        ```

    Resolving a pattern against a catalog sorted newest first:
        ```python
        from vermatch.versioning import resolve_version_pattern, sort_versions

        candidates = sort_versions(
            [VersionIdentifier.of(v) for v in ("2.9.0", "3.1.0", "3.0.5")]
        )
        resolve_version_pattern(VersionIdentifier.of("3*"), candidates)
        # VersionIdentifier('3.1.0')
        ```
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from functools import cmp_to_key
from typing import ClassVar, Protocol

from vermatch.exceptions import VersionResolutionError
from vermatch.logging import Logger, get_global_logger
from vermatch.versioning.letters import VersionLetters
from vermatch.versioning.results import VersionComparisonResult, VersionMatchResult
from vermatch.versioning.segment import VersionSegment, parse_segments

LATEST_ALIAS = "latest"


class GenericVersionRange(Protocol):
    """Anything that can select concrete versions.

    A plain VersionIdentifier is a degenerate range whose minimum and maximum
    are the identifier itself.
    """

    def is_pattern(self) -> bool: ...

    def contains(self, version: VersionIdentifier) -> bool: ...

    def get_min(self) -> VersionIdentifier | None: ...

    def get_max(self) -> VersionIdentifier | None: ...


class VersionIdentifier:
    """Parsed version string with ordering and pattern matching.

    Instances are created with VersionIdentifier.of() and never change.

    Attributes:
        start: First segment of the owned segment chain.
        development_phase: VersionLetters.EMPTY if no segment names a
            development phase, the letters of that segment if exactly one
            does, and VersionLetters.UNDEFINED if several do.
    """

    __slots__ = ("_start", "_development_phase", "_valid")

    LATEST: ClassVar[VersionIdentifier]
    LATEST_UNSTABLE: ClassVar[VersionIdentifier]

    def __init__(self, start: VersionSegment) -> None:
        if start is None:
            raise ValueError("start segment is required")
        self._start = start
        valid = not start.separator and start.letters.is_empty()
        has_positive_number = False
        dev = VersionLetters.EMPTY
        for segment in self._segments():
            if not segment.is_valid():
                valid = False
            elif segment.number > 0:
                has_positive_number = True
            if segment.letters.is_development_phase():
                if dev.is_empty():
                    dev = segment.letters
                else:
                    dev = VersionLetters.UNDEFINED
                    valid = False
        self._development_phase = dev
        self._valid = valid and has_positive_number and not self.is_pattern()

    @classmethod
    def of(cls, version: str | None) -> VersionIdentifier | None:
        """Parses a version string.

        Args:
            version: Version text, "latest" as an alias for "*", or None.

        Returns:
            The parsed identifier, or None if version is None.
        """
        if version is None:
            return None
        if version == LATEST_ALIAS:
            return cls.LATEST
        return cls(parse_segments(version))

    @property
    def start(self) -> VersionSegment:
        return self._start

    @property
    def development_phase(self) -> VersionLetters:
        return self._development_phase

    def get_development_phase(self) -> VersionLetters:
        return self._development_phase

    def _segments(self) -> Iterator[VersionSegment]:
        segment: VersionSegment | None = self._start
        while segment is not None:
            yield segment
            segment = segment.next

    def __iter__(self) -> Iterator[VersionSegment]:
        return self._segments()

    def is_valid(self) -> bool:
        return self._valid

    def is_pattern(self) -> bool:
        return any(segment.is_pattern() for segment in self._segments())

    def is_stable(self) -> bool:
        """Returns True for valid versions without a development phase."""
        return self._valid and self._development_phase.is_empty()

    def is_unstable(self) -> bool:
        return not self._development_phase.is_empty()

    def compare_version(self, other: VersionIdentifier | None) -> VersionComparisonResult:
        """Orders this version relative to another.

        Segments are compared pairwise; a shorter chain is padded with empty
        segments so "1.0" and "1" compare equal. The walk stops at the first
        difference. If any earlier equal pair was only equal heuristically,
        the final result is flagged unsafe.

        Args:
            other: Version to compare against. None counts as older, unsafely.

        Returns:
            The comparison result from the point of view of self.
        """
        if other is None:
            return VersionComparisonResult.GREATER_UNSAFE
        this_segment = self._start
        other_segment = other._start
        unsafe = False
        while True:
            result = this_segment.compare_version(other_segment)
            if not result.is_equal():
                break
            if this_segment.is_empty() and other_segment.is_empty():
                break
            if result.is_unsafe():
                unsafe = True
            this_segment = this_segment.get_next_or_empty()
            other_segment = other_segment.get_next_or_empty()
        if unsafe:
            return result.with_unsafe()
        return result

    def is_less(self, other: VersionIdentifier | None) -> bool:
        return self.compare_version(other).is_less()

    def is_greater(self, other: VersionIdentifier | None) -> bool:
        return self.compare_version(other).is_greater()

    def matches(self, other: VersionIdentifier | None) -> bool:
        """Checks whether the other version equals or fits this pattern.

        Args:
            other: Concrete version to test.

        Returns:
            True if this identifier equals other segment by segment (trailing
            zeros aside), or is a pattern (e.g., "17*" or "17.*") that other
            fits into.
        """
        if other is None:
            return False
        this_segment = self._start
        other_segment = other._start
        while True:
            result = this_segment.matches(
                other_segment, other_phase=other._development_phase
            )
            if result is VersionMatchResult.MATCH:
                return True
            if result is VersionMatchResult.MISMATCH:
                return False
            this_segment = this_segment.get_next_or_empty()
            other_segment = other_segment.get_next_or_empty()

    def contains(self, version: VersionIdentifier) -> bool:
        return self.matches(version)

    def get_min(self) -> VersionIdentifier:
        return self

    def get_max(self) -> VersionIdentifier:
        return self

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, VersionIdentifier):
            return NotImplemented
        return self.compare_version(other).is_less()

    def __le__(self, other: object) -> bool:
        if not isinstance(other, VersionIdentifier):
            return NotImplemented
        return not self.compare_version(other).is_greater()

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, VersionIdentifier):
            return NotImplemented
        return self.compare_version(other).is_greater()

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, VersionIdentifier):
            return NotImplemented
        return not self.compare_version(other).is_less()

    def __eq__(self, other: object) -> bool:
        # Structural: "1.0" and "1" compare EQUAL but are different identifiers.
        if other is self:
            return True
        if not isinstance(other, VersionIdentifier):
            return NotImplemented
        return tuple(self._segments()) == tuple(other._segments())

    def __hash__(self) -> int:
        return hash(tuple(self._segments()))

    def __str__(self) -> str:
        return "".join(str(segment) for segment in self._segments())

    def __repr__(self) -> str:
        return f"VersionIdentifier({str(self)!r})"


VersionIdentifier.LATEST = VersionIdentifier(parse_segments("*"))
VersionIdentifier.LATEST_UNSTABLE = VersionIdentifier(parse_segments("*!"))

LATEST = VersionIdentifier.LATEST
LATEST_UNSTABLE = VersionIdentifier.LATEST_UNSTABLE


def sort_versions(
    versions: Iterable[VersionIdentifier], *, descending: bool = True
) -> list[VersionIdentifier]:
    """Sorts versions by compare_version(), newest first by default."""
    return sorted(
        versions,
        key=cmp_to_key(lambda a, b: a.compare_version(b).to_int()),
        reverse=descending,
    )


def resolve_version_pattern(
    version: GenericVersionRange | None,
    versions: Sequence[VersionIdentifier],
    logger: Logger | None = None,
) -> VersionIdentifier:
    """Resolves a version pattern against the available versions.

    Args:
        version: Version or pattern to resolve. None means LATEST.
        versions: Available versions, sorted newest first (see
            sort_versions()). The first one the pattern contains wins.
        logger: Logger for the resolution decision. Defaults to the global
            logger.

    Returns:
        version itself if it is not a pattern, otherwise the newest
        matching candidate.

    Raises:
        VersionResolutionError: If no candidate matches the pattern.
    """
    if version is None:
        version = LATEST
    if not version.is_pattern():
        return version  # type: ignore[return-value]
    if logger is None:
        logger = get_global_logger()
    for candidate in versions:
        if version.contains(candidate):
            logger.debug(
                "VERSION", f"Resolved version pattern {version} to version {candidate}"
            )
            return candidate
    raise VersionResolutionError(str(version), len(versions))
