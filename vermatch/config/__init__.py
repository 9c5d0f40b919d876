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

"""Configuration loading for vermatch.

This module loads YAML tool manifests with a layered approach:

  - Organization-wide defaults (defaults/org.yaml)
  - Tool-specific defaults (defaults/tools/<tool>.yaml)
  - The manifest itself (e.g., tools.yaml)

The loader performs deep merging where dicts are merged recursively and
lists/scalars are replaced (last wins). Relative catalog files are resolved
against the file that declared them.

Public API:

- load_effective_config: Load and merge configuration for a manifest

Example:
    Basic usage:

        from pathlib import Path
        from vermatch.config import load_effective_config

        config = load_effective_config(Path("tools.yaml"))
        for name, tool in config["tools"].items():
            print(name, tool["version"])

"""

from .loader import load_effective_config, normalize_version_text

__all__ = ["load_effective_config", "normalize_version_text"]
