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

"""Known release phases and their maturity ranking.

Phases are ordered from least to most mature. Every phase below RELEASE is a
development (pre-release) phase. Keywords are matched case-insensitively, so
"RC", "rc" and "Rc" all map to RELEASE_CANDIDATE.

Example:
    ```python
    from vermatch.versioning.phase import VersionPhase

    VersionPhase.from_keyword("beta")   # VersionPhase.BETA
    VersionPhase.from_keyword("SNAPSHOT").is_development_phase()  # True
    VersionPhase.from_keyword("final")  # VersionPhase.RELEASE
    VersionPhase.from_keyword("foo")    # None
    ```
"""

from __future__ import annotations

from enum import Enum


class VersionPhase(Enum):
    """Ranked release phase, identified by one or more keywords."""

    SNAPSHOT = (0, "snapshot", "nightly")
    DEVELOPMENT = (1, "dev", "pre", "preview", "ea")
    ALPHA = (2, "alpha", "a")
    BETA = (3, "beta", "b")
    MILESTONE = (4, "milestone", "m")
    RELEASE_CANDIDATE = (5, "rc", "cr")
    RELEASE = (6, "release", "final", "ga")

    def __init__(self, rank: int, *keywords: str) -> None:
        self.rank = rank
        self.keywords = keywords

    def is_development_phase(self) -> bool:
        """Returns True for every phase that precedes a final release."""
        return self.rank < VersionPhase.RELEASE.rank

    @classmethod
    def from_keyword(cls, keyword: str) -> VersionPhase | None:
        """Looks up the phase for a letter sequence.

        Args:
            keyword: Letters of a version segment (e.g., "alpha", "RC").

        Returns:
            The matching phase, or None if the letters are not a known keyword.
        """
        return _PHASES_BY_KEYWORD.get(keyword.lower())


_PHASES_BY_KEYWORD: dict[str, VersionPhase] = {
    keyword: phase for phase in VersionPhase for keyword in phase.keywords
}
