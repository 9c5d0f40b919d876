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

"""Version segments and the segment parser.

A version string is split into a forward-linked chain of segments. Each
segment consists of four parts, scanned in this order:

1. separator: characters that are neither digits, letters nor "*"
2. digits: a run of digits (the segment number, 0 if absent)
3. letters: a run of letters (e.g., "alpha", "RC", "final")
4. pattern: "*" or "*!" wildcard marker

Examples:
    "1.0-alpha1" -> "1" | ".0" | "-alpha" | "1"
    "17*"        -> "17*"
    "17.2.final" -> "17" | ".2" | ".final"

The parts of every segment concatenate back to the exact input text, so
parsing always round-trips.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import re
from typing import ClassVar

from vermatch.versioning.letters import VersionLetters
from vermatch.versioning.results import VersionComparisonResult, VersionMatchResult

PATTERN_MATCH_ANY_VERSION = "*"
PATTERN_MATCH_ANY_UNSTABLE_VERSION = "*!"

_PATTERNS = ("", PATTERN_MATCH_ANY_VERSION, PATTERN_MATCH_ANY_UNSTABLE_VERSION)
_VALID_SEPARATORS = frozenset(".-_+")

_SEGMENT_RE = re.compile(
    r"(?P<separator>[^0-9A-Za-z*]*)"
    r"(?P<digits>[0-9]*)"
    r"(?P<letters>[A-Za-z]*)"
    r"(?P<pattern>\*!?)?"
)


@dataclass(frozen=True)
class VersionSegment:
    """One separator+number+letters unit of a version string.

    Equality and hashing only consider this segment's own parts; the rest of
    the chain is compared by VersionIdentifier.

    Attributes:
        separator: Delimiter preceding this segment ("" for the first one).
        digits: Digit text exactly as written (may carry leading zeros).
        letters: Letters following the digits.
        pattern: "" or one of the wildcard markers "*" and "*!".
        next: The following segment, or None at the end of the chain.
    """

    separator: str = ""
    digits: str = ""
    letters: VersionLetters = VersionLetters.EMPTY
    pattern: str = ""
    next: VersionSegment | None = field(default=None, compare=False, repr=False)

    EMPTY: ClassVar[VersionSegment]

    def __post_init__(self) -> None:
        if self.pattern not in _PATTERNS:
            raise ValueError(f"Invalid pattern: {self.pattern!r}")
        if self.digits and not self.digits.isdigit():
            raise ValueError(f"Invalid digits: {self.digits!r}")

    @property
    def number(self) -> int:
        return int(self.digits) if self.digits else 0

    def get_next_or_empty(self) -> VersionSegment:
        """Returns the next segment, or the EMPTY sentinel at the end."""
        return self.next if self.next is not None else VersionSegment.EMPTY

    def is_empty(self) -> bool:
        return not (self.separator or self.digits or self.letters.letters or self.pattern)

    def is_pattern(self) -> bool:
        return bool(self.pattern)

    def is_valid(self) -> bool:
        """Checks segment-local syntax.

        A valid segment is not a pattern, has at most one separator character
        out of ".-_+", and carries digits or letters.
        """
        if self.pattern:
            return False
        if len(self.separator) > 1:
            return False
        if self.separator and self.separator not in _VALID_SEPARATORS:
            return False
        return bool(self.digits or self.letters.letters)

    def compare_version(self, other: VersionSegment | None) -> VersionComparisonResult:
        """Compares number first, then letters. Separators are ignored."""
        if other is None:
            return VersionComparisonResult.GREATER_UNSAFE
        if self.number != other.number:
            return VersionComparisonResult.of(self.number - other.number)
        return self.letters.compare_version(other.letters)

    def matches(
        self,
        other: VersionSegment | None,
        *,
        other_phase: VersionLetters = VersionLetters.EMPTY,
    ) -> VersionMatchResult:
        """Matches the other segment against this (possibly pattern) segment.

        Args:
            other: Segment of the version being matched.
            other_phase: Development phase of the whole version being matched.
                Only consulted by the "*!" wildcard, which requires it to be
                non-empty.

        Returns:
            MATCH if the wildcard of this segment accepts the rest of the
            version (or both chains ended), CONTINUE if both segments are equal
            and matching proceeds with the next segment, MISMATCH otherwise.
        """
        if other is None:
            return VersionMatchResult.MISMATCH
        if self.is_pattern():
            return self._match_pattern(other, other_phase)
        if self.number != other.number or self.letters != other.letters:
            return VersionMatchResult.MISMATCH
        if self.is_empty() and other.is_empty():
            return VersionMatchResult.MATCH
        return VersionMatchResult.CONTINUE

    def _match_pattern(
        self, other: VersionSegment, other_phase: VersionLetters
    ) -> VersionMatchResult:
        prefix_empty = not self.digits and self.letters.is_empty()
        if self.separator != other.separator:
            # "17.*" also covers plain "17"
            if not (prefix_empty and other.is_empty()):
                return VersionMatchResult.MISMATCH
        if self.digits and (not other.digits or self.number != other.number):
            return VersionMatchResult.MISMATCH
        if not self.letters.is_empty() and self.letters != other.letters:
            return VersionMatchResult.MISMATCH
        if self.pattern == PATTERN_MATCH_ANY_UNSTABLE_VERSION and other_phase.is_empty():
            return VersionMatchResult.MISMATCH
        return VersionMatchResult.MATCH

    def __str__(self) -> str:
        return f"{self.separator}{self.digits}{self.letters}{self.pattern}"


VersionSegment.EMPTY = VersionSegment()


def parse_segments(text: str) -> VersionSegment:
    """Parses version text into a chain of segments.

    Every input yields a chain; an empty string becomes a single empty
    segment. Characters that do not fit the grammar end up in a separator
    and make that segment invalid rather than failing the parse.

    Args:
        text: Raw version text (e.g., "1.0-rc2").

    Returns:
        The first segment of the chain.
    """
    parts: list[tuple[str, str, str, str]] = []
    pos = 0
    while True:
        m = _SEGMENT_RE.match(text, pos)
        parts.append(
            (
                m.group("separator"),
                m.group("digits"),
                m.group("letters"),
                m.group("pattern") or "",
            )
        )
        pos = m.end()
        if pos >= len(text):
            break

    # Link from the tail so each segment owns its successor.
    *rest, (separator, digits, letters, pattern) = parts
    segment = VersionSegment(
        separator=separator,
        digits=digits,
        letters=VersionLetters.of(letters),
        pattern=pattern,
    )
    for separator, digits, letters, pattern in reversed(rest):
        segment = VersionSegment(
            separator=separator,
            digits=digits,
            letters=VersionLetters.of(letters),
            pattern=pattern,
            next=segment,
        )
    return segment
