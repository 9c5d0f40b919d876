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

"""Result vocabularies for version comparison and pattern matching.

VersionComparisonResult carries a three-way ordering plus an "unsafe" flag.
An unsafe result was derived from heuristics (e.g., lexical comparison of
unknown letter suffixes like "1.0x" vs "1.0y") and may not reflect the real
release order, even though the direction itself is well defined.

VersionMatchResult is the per-segment outcome of matching a pattern against
a version: the whole version matched, the segments are equal so matching
continues with the next segment, or the version does not match.
"""

from __future__ import annotations

from enum import Enum


class VersionComparisonResult(Enum):
    """Ordering of two versions, optionally flagged as unsafe."""

    LESS = (-1, False)
    LESS_UNSAFE = (-1, True)
    EQUAL = (0, False)
    EQUAL_UNSAFE = (0, True)
    GREATER = (1, False)
    GREATER_UNSAFE = (1, True)

    def __init__(self, ordering: int, unsafe: bool) -> None:
        self.ordering = ordering
        self.unsafe = unsafe

    @classmethod
    def of(cls, ordering: int, unsafe: bool = False) -> VersionComparisonResult:
        """Builds a result from the sign of an integer comparison."""
        sign = (ordering > 0) - (ordering < 0)
        return cls((sign, unsafe))

    def is_less(self) -> bool:
        return self.ordering < 0

    def is_equal(self) -> bool:
        return self.ordering == 0

    def is_greater(self) -> bool:
        return self.ordering > 0

    def is_unsafe(self) -> bool:
        return self.unsafe

    def with_unsafe(self) -> VersionComparisonResult:
        """Returns the unsafe variant with the same ordering."""
        return VersionComparisonResult((self.ordering, True))

    def reverse(self) -> VersionComparisonResult:
        """Returns the result as seen from the other side of the comparison."""
        return VersionComparisonResult((-self.ordering, self.unsafe))

    def to_int(self) -> int:
        """Returns -1, 0 or 1 for use with functools.cmp_to_key."""
        return self.ordering


class VersionMatchResult(Enum):
    """Outcome of matching a single version segment against a pattern."""

    MATCH = "match"
    CONTINUE = "continue"
    MISMATCH = "mismatch"
