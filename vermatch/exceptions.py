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

"""Exception hierarchy for vermatch.

This module defines a custom exception hierarchy that allows library users
to distinguish between different types of errors. All exceptions inherit from
VermatchError, allowing users to catch all vermatch errors with a single
except clause if needed.

Example:
    Catching specific error types:
        ```python
        from vermatch.core import resolve_tool
        from vermatch.exceptions import ConfigError, VersionResolutionError

        try:
            result = resolve_tool(Path("tools.yaml"), "java")
        except ConfigError as e:
            print(f"Configuration error: {e}")
        except VersionResolutionError as e:
            print(f"No match for {e.pattern} among {e.candidate_count} versions")
        ```

    Catching all vermatch errors:
        ```python
        from vermatch.exceptions import VermatchError

        try:
            result = resolve_tool(Path("tools.yaml"), "java")
        except VermatchError as e:
            print(f"vermatch error: {e}")
        ```
"""

from __future__ import annotations

__all__ = [
    "VermatchError",
    "ConfigError",
    "NetworkError",
    "VersionResolutionError",
]


class VermatchError(Exception):
    """Base exception for all vermatch errors.

    All vermatch-specific exceptions inherit from this class, allowing users
    to catch all vermatch errors with a single except clause if needed.
    """

    pass


class ConfigError(VermatchError):
    """Raised for configuration-related errors.

    This exception is raised when there are problems with:

    - YAML parsing (syntax errors, invalid structure)
    - Missing manifest or catalog files
    - Missing or invalid tool and catalog fields
    - Version entries that are not strings

    Example:
        Catching configuration errors:
            ```python
            from vermatch.exceptions import ConfigError

            try:
                config = load_effective_config(Path("invalid.yaml"))
            except ConfigError as e:
                print(f"Config error: {e}")
            ```
    """

    pass


class NetworkError(VermatchError):
    """Raised for remote catalog errors.

    This exception is raised when there are problems with:

    - HTTP errors and connection failures
    - Responses that are not valid JSON
    - JSONPath expressions that match nothing in the response
    """

    pass


class VersionResolutionError(VermatchError):
    """Raised when no available version matches a version pattern.

    Attributes:
        pattern: The pattern that could not be resolved (e.g., "9*").
        candidate_count: Number of versions that were examined.
    """

    def __init__(self, pattern: str, candidate_count: int) -> None:
        self.pattern = pattern
        self.candidate_count = candidate_count
        super().__init__(
            f"Could not find any version matching '{pattern}' - there are "
            f"{candidate_count} version(s) available but none matched!"
        )
