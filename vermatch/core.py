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

"""Core orchestration for resolving tool versions from a manifest.

This module ties configuration, catalogs and the versioning core together:

1. Load the layered manifest configuration
2. Parse the requested version of a tool ("17*", "latest", "3.9.6", ...)
3. For patterns, load the tool's catalog sorted newest first
4. Pick the newest catalog version the pattern contains

Concrete versions are returned as-is without touching the catalog, so
pinned tools keep working offline.

Example:
    ```python
    from pathlib import Path
    from vermatch.core import resolve_tool

    result = resolve_tool(Path("tools.yaml"), "java")
    print(result.version)  # 17.0.2
    ```
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from vermatch.catalog import load_catalog
from vermatch.config import load_effective_config
from vermatch.exceptions import ConfigError
from vermatch.logging import get_global_logger
from vermatch.results import ResolveResult
from vermatch.versioning import LATEST, VersionIdentifier, resolve_version_pattern


def _resolve_entry(
    name: str, tool_cfg: dict[str, Any], *, include_invalid: bool = False
) -> ResolveResult:
    logger = get_global_logger()
    requested = VersionIdentifier.of(tool_cfg.get("version")) or LATEST
    logger.verbose("RESOLVE", f"{name}: requested version {requested}")

    if not requested.is_pattern():
        if not requested.is_valid():
            logger.warning("RESOLVE", f"{name}: version {requested} is not valid")
        return ResolveResult(
            tool=name,
            requested=str(requested),
            version=str(requested),
            is_pattern=False,
            candidate_count=0,
            status="pinned",
        )

    catalog_cfg = tool_cfg.get("catalog")
    if catalog_cfg is None:
        raise ConfigError(
            f"tools.{name} requests pattern {requested} but defines no catalog"
        )
    candidates = load_catalog(catalog_cfg, include_invalid=include_invalid)
    resolved = resolve_version_pattern(requested, candidates, logger)
    return ResolveResult(
        tool=name,
        requested=str(requested),
        version=str(resolved),
        is_pattern=True,
        candidate_count=len(candidates),
        status="resolved",
    )


def resolve_tool(
    manifest_path: Path, tool: str, *, include_invalid: bool = False
) -> ResolveResult:
    """Resolves the version of a single tool in a manifest.

    Args:
        manifest_path: Path to the manifest YAML file.
        tool: Name of the tool under "tools".
        include_invalid: Also consider catalog versions that are not valid.

    Returns:
        The resolution result.

    Raises:
        ConfigError: On manifest/catalog problems or an unknown tool.
        NetworkError: If a remote catalog cannot be fetched.
        VersionResolutionError: If no catalog version matches the pattern.
    """
    logger = get_global_logger()
    logger.step(1, 2, "Loading manifest...")
    config = load_effective_config(manifest_path)
    tools = config["tools"]
    if tool not in tools:
        known = ", ".join(sorted(tools)) or "none"
        raise ConfigError(f"Unknown tool {tool!r} (known tools: {known})")
    logger.step(2, 2, f"Resolving {tool}...")
    return _resolve_entry(tool, tools[tool], include_invalid=include_invalid)


def resolve_manifest(
    manifest_path: Path, *, include_invalid: bool = False
) -> list[ResolveResult]:
    """Resolves the versions of all tools in a manifest, in manifest order.

    Raises:
        ConfigError: On manifest/catalog problems.
        NetworkError: If a remote catalog cannot be fetched.
        VersionResolutionError: If any tool's pattern matches no catalog version.
    """
    logger = get_global_logger()
    config = load_effective_config(manifest_path)
    tools = config["tools"]
    results: list[ResolveResult] = []
    for index, (name, tool_cfg) in enumerate(tools.items(), start=1):
        logger.step(index, len(tools), f"Resolving {name}...")
        results.append(_resolve_entry(name, tool_cfg, include_invalid=include_invalid))
    return results
