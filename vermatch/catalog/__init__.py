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

"""Version catalogs for vermatch.

Public API:

- load_catalog: Load candidates from a catalog configuration, newest first
- load_catalog_file: Read raw versions from a YAML/JSON file
- fetch_catalog: Read raw versions from a remote JSON endpoint
- parse_versions: Turn raw values into VersionIdentifier objects
"""

from .loader import load_catalog, load_catalog_file, parse_versions
from .remote import fetch_catalog

__all__ = ["fetch_catalog", "load_catalog", "load_catalog_file", "parse_versions"]
