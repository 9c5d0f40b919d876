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

"""vermatch - order, match and resolve tool version strings.

A Python library and CLI for working with the version strings of arbitrary
tools and packages, not only semantic versions. It parses versions into a
structured form, orders them (release phases included), matches them against
wildcard patterns such as "17*", "*" and "*!", and resolves such patterns
against a catalog of available versions.

vermatch provides:

- Structural parsing of loosely formatted version strings
- Ordering with pre-release phases (snapshot < alpha < beta < milestone < rc)
- Wildcard patterns and "latest" resolution
- YAML tool manifests with layered defaults
- Catalogs from inline lists, files, or remote JSON endpoints

Quick Start:

    $ vermatch compare 1.0-alpha1 1.0
    $ vermatch match "17*" 17.0.2
    $ vermatch resolve tools.yaml

For more details, see the individual module docstrings.
"""

__version__ = "0.1.0"
__author__ = "Roger Cibrian"
__license__ = "Apache-2.0"
__description__ = "Order, match and resolve arbitrary tool version strings"

# Re-export commonly used functions for convenience
from vermatch.catalog import load_catalog
from vermatch.config import load_effective_config
from vermatch.core import resolve_manifest, resolve_tool
from vermatch.exceptions import (
    ConfigError,
    NetworkError,
    VermatchError,
    VersionResolutionError,
)
from vermatch.results import ResolveResult
from vermatch.versioning import (
    LATEST,
    LATEST_UNSTABLE,
    VersionComparisonResult,
    VersionIdentifier,
    resolve_version_pattern,
    sort_versions,
)

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "__description__",
    "LATEST",
    "LATEST_UNSTABLE",
    "ResolveResult",
    "VersionComparisonResult",
    "VersionIdentifier",
    "load_catalog",
    "load_effective_config",
    "resolve_manifest",
    "resolve_tool",
    "resolve_version_pattern",
    "sort_versions",
    "VermatchError",
    "ConfigError",
    "NetworkError",
    "VersionResolutionError",
]
