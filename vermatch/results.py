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

"""Public API return types for vermatch.

All dataclasses are frozen (immutable) to prevent accidental mutation of
return values.

Note:
    Only public API return types belong in this module. Domain types (like
    VersionIdentifier) remain co-located with their related logic.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ResolveResult:
    """Result from resolving the version of one tool.

    Attributes:
        tool: Tool name as written in the manifest.
        requested: Version text from the manifest ("*" if none was given).
        version: The concrete version to use.
        is_pattern: True if requested was a pattern resolved via the catalog.
        candidate_count: Number of catalog versions examined (0 when the
            requested version was already concrete).
        status: "resolved" for patterns, "pinned" for concrete versions.
    """

    tool: str
    requested: str
    version: str
    is_pattern: bool
    candidate_count: int
    status: str
