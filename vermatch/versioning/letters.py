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

"""Alphabetic suffix of a version segment.

The letters of a segment (e.g., "alpha" in "1.0-alpha1") either name a known
VersionPhase or are free text such as a vendor tag. Known phases can be
ordered reliably; free text can only be ordered heuristically, so every
comparison involving it is flagged unsafe.

Two sentinels exist:

- VersionLetters.EMPTY: no letters at all.
- VersionLetters.UNDEFINED: more than one development phase was found in a
    single version (e.g., "1.0-alpha1.rc2"). Parsing a segment never produces
    it; only VersionIdentifier uses it when aggregating phases.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from vermatch.versioning.phase import VersionPhase
from vermatch.versioning.results import VersionComparisonResult


@dataclass(frozen=True)
class VersionLetters:
    """Immutable wrapper around the letters of a version segment.

    Attributes:
        letters: The raw letter text, case preserved (e.g., "RC", "beta").
        undefined: True only for the UNDEFINED sentinel.
    """

    letters: str = ""
    undefined: bool = False

    EMPTY: ClassVar[VersionLetters]
    UNDEFINED: ClassVar[VersionLetters]

    @classmethod
    def of(cls, letters: str) -> VersionLetters:
        if not letters:
            return cls.EMPTY
        return cls(letters)

    @property
    def phase(self) -> VersionPhase | None:
        """The VersionPhase named by the letters, or None if unknown."""
        if self.undefined or not self.letters:
            return None
        return VersionPhase.from_keyword(self.letters)

    def is_empty(self) -> bool:
        return not self.letters and not self.undefined

    def is_development_phase(self) -> bool:
        phase = self.phase
        return phase is not None and phase.is_development_phase()

    def _rank(self) -> int | None:
        # Empty letters rank like a final release; free text has no rank.
        if self.is_empty():
            return VersionPhase.RELEASE.rank
        phase = self.phase
        return phase.rank if phase is not None else None

    def compare_version(self, other: VersionLetters | None) -> VersionComparisonResult:
        """Compares these letters with another letter sequence.

        Known phases compare by rank, so "alpha" < "beta" < "" (release).
        Free text is considered newer than any known phase or empty letters,
        and two free texts compare lexically ignoring case; both cases are
        unsafe.

        Args:
            other: Letters to compare against.

        Returns:
            The comparison result from the point of view of self.
        """
        if other is None:
            return VersionComparisonResult.GREATER_UNSAFE
        if self == other:
            return VersionComparisonResult.EQUAL
        this_rank = self._rank()
        other_rank = other._rank()
        if this_rank is not None and other_rank is not None:
            return VersionComparisonResult.of(this_rank - other_rank)
        if this_rank is None and other_rank is None:
            # "Foo" and "foo" tie, but only unsafely
            a, b = self.letters.lower(), other.letters.lower()
            return VersionComparisonResult.of((a > b) - (a < b), unsafe=True)
        if this_rank is None:
            return VersionComparisonResult.GREATER_UNSAFE
        return VersionComparisonResult.LESS_UNSAFE

    def __str__(self) -> str:
        return self.letters


VersionLetters.EMPTY = VersionLetters()
VersionLetters.UNDEFINED = VersionLetters(undefined=True)
