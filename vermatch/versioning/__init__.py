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

"""Version parsing, ordering, and pattern resolution for vermatch.

This package turns arbitrary tool version strings into structured
identifiers that can be ordered, matched against wildcard patterns, and
resolved against a catalog of available versions. It is deliberately not
limited to semantic versioning.

Modules:
    phase
        Ranked release phases (snapshot, alpha, beta, milestone, rc, release).
    letters
        Alphabetic suffix of a segment with phase classification.
    results
        Comparison and match result vocabularies.
    segment
        Segment chain and the segment parser.
    identifier
        VersionIdentifier, sort_versions() and resolve_version_pattern().

Ordering Rules:

1. Segments are compared pairwise, numbers first:
   - 1.10 > 1.9, and 1.0 == 1 (missing segments count as zero)

2. Letters break ties:
   - Development phases precede the release: 1.0-alpha < 1.0-beta < 1.0-rc < 1.0
   - Unknown suffixes are ordered lexically and flagged unsafe

3. Wildcards:
   - "17*" matches 17.0.2, 17.2.final, but not 18.0
   - "*!" matches only unstable versions such as 1.0-SNAPSHOT
   - "latest" is an alias for "*"

Example:
    Basic usage:
        ```python
        from vermatch.versioning import VersionIdentifier

        v = VersionIdentifier.of("1.0-alpha1")
        v.is_valid()                   # True
        v.get_development_phase().phase  # VersionPhase.ALPHA
        VersionIdentifier.of("17*").matches(VersionIdentifier.of("17.0.2"))  # True
        ```
"""

from .identifier import (
    LATEST,
    LATEST_UNSTABLE,
    GenericVersionRange,
    VersionIdentifier,
    resolve_version_pattern,
    sort_versions,
)
from .letters import VersionLetters
from .phase import VersionPhase
from .results import VersionComparisonResult, VersionMatchResult
from .segment import VersionSegment, parse_segments

__all__ = [
    "LATEST",
    "LATEST_UNSTABLE",
    "GenericVersionRange",
    "VersionComparisonResult",
    "VersionIdentifier",
    "VersionLetters",
    "VersionMatchResult",
    "VersionPhase",
    "VersionSegment",
    "parse_segments",
    "resolve_version_pattern",
    "sort_versions",
]
