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

"""Configuration loading and merging for vermatch.

A tool manifest lists the tools of a project together with the version each
one should use and the catalog its available versions come from. Manifests
are layered so that catalog settings shared by many projects only need to be
written once.

Configuration Layers:
    1. **Organization defaults** (defaults/org.yaml)
       - Base configuration for all manifests
       - defaults.tool is applied to every tool entry
       - Found by walking upward from the manifest

    2. **Tool defaults** (defaults/tools/<tool>.yaml)
       - Tool-specific settings, typically the catalog of that tool
       - Optional; only loaded for tools named in the manifest

    3. **Manifest** (e.g., tools.yaml)
       - Always required; names the tools and their versions
       - Overrides tool and organization defaults

Merge Behavior:
    The loader performs deep merging with "last wins" semantics:

    - **Dicts**: Recursively merged (keys from overlay override base)
    - **Lists**: Completely replaced (NOT appended/extended)
    - **Scalars**: Overwritten (strings, numbers, booleans)

Path Resolution:
    Relative catalog files (tools.<tool>.catalog.file) are resolved against
    the directory of the file that declared them: the defaults root for
    org.yaml and tool defaults, the manifest directory otherwise. This also
    applies to a catalog file given in defaults.tool.

Example:
    Basic usage:
        ```python
        from pathlib import Path
        from vermatch.config import load_effective_config

        cfg = load_effective_config(Path("tools.yaml"))
        print(cfg["tools"]["java"]["version"])  # Output: 17*
        ```

Note:
    Version values must be strings or integers. YAML turns an unquoted 17.10
    into the float 17.1, so floats are rejected with a hint to quote them.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from vermatch.exceptions import ConfigError
from vermatch.logging import get_global_logger

API_VERSION = "vermatch/v1"

# -------------------------------
# YAML helpers
# -------------------------------


def _load_yaml_file(p: Path) -> Any:
    """Loads a YAML file and returns the parsed Python object.

    Args:
        p: Path to the YAML file to load.

    Returns:
        The parsed Python object from the YAML file.

    Raises:
        ConfigError: When the file does not exist, is not valid YAML, or is empty.
    """
    if not p.exists():
        raise ConfigError(f"file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise ConfigError(f"Error parsing YAML: {p}: {err}") from err
    if data is None:
        raise ConfigError(f"YAML file is empty: {p}")
    return data


def _print_yaml_content(data: dict[str, Any]) -> None:
    logger = get_global_logger()
    yaml_str = yaml.dump(data, default_flow_style=False, sort_keys=False)
    for line in yaml_str.split("\n"):
        if line.strip():
            logger.debug("CONFIG", line)


# -------------------------------
# Merge logic
# -------------------------------


def _deep_merge_dicts(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Deep-merges two dicts with "overlay wins" semantics.

    This function does not mutate inputs; returns a new dict.

    Args:
        base: The base dictionary.
        overlay: The overlay dictionary that takes precedence.

    Returns:
        A new dictionary with the merged contents.
    """
    result: dict[str, Any] = dict(base)
    for k, v in overlay.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge_dicts(result[k], v)
        else:
            # Replace lists and scalars entirely
            result[k] = v
    return result


# -------------------------------
# Defaults discovery
# -------------------------------


def _find_defaults_root(start_dir: Path) -> Path | None:
    """Walks upward from start_dir looking for a defaults/org.yaml file.

    Returns:
        The defaults/ directory if found, None otherwise.
    """
    for parent in [start_dir] + list(start_dir.parents):
        candidate = parent / "defaults" / "org.yaml"
        if candidate.exists():
            return parent / "defaults"
    return None


# -------------------------------
# Path resolution
# -------------------------------


def _resolve_catalog_file(tool_cfg: dict[str, Any], base_dir: Path) -> None:
    """Resolves a relative catalog.file against base_dir, in place."""
    catalog = tool_cfg.get("catalog")
    if not isinstance(catalog, dict):
        return
    raw_path = catalog.get("file")
    if isinstance(raw_path, str) and raw_path:
        p = Path(raw_path)
        if not p.is_absolute():
            catalog["file"] = str((base_dir / p).resolve())


def _resolve_tool_default_catalog(cfg: dict[str, Any], base_dir: Path) -> None:
    """Resolves a relative defaults.tool.catalog.file against base_dir, in place."""
    defaults = cfg.get("defaults")
    if isinstance(defaults, dict) and isinstance(defaults.get("tool"), dict):
        _resolve_catalog_file(defaults["tool"], base_dir)


# -------------------------------
# Validation
# -------------------------------


def normalize_version_text(value: Any, where: str) -> str | None:
    """Converts a YAML version value to text.

    Args:
        value: Value as parsed by YAML.
        where: Location used in error messages (e.g., "tools.java.version").

    Returns:
        The version text, or None if value is None.

    Raises:
        ConfigError: If value is a float, a bool, or another non-text type.
    """
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        raise ConfigError(f"{where} must be a version string, got {value!r}")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        raise ConfigError(
            f"{where} is the number {value!r}; quote versions in YAML "
            f"(e.g., \"17.10\") to keep them exact"
        )
    raise ConfigError(f"{where} must be a version string, got {type(value).__name__}")


def _validate_tools(cfg: dict[str, Any], manifest_path: Path) -> None:
    tools = cfg.get("tools")
    if tools is None:
        raise ConfigError(f"No 'tools' defined in manifest: {manifest_path}")
    if not isinstance(tools, dict):
        raise ConfigError(f"'tools' must be a mapping of tool names: {manifest_path}")
    for name, tool_cfg in tools.items():
        if tool_cfg is None:
            tools[name] = tool_cfg = {}
        if not isinstance(tool_cfg, dict):
            raise ConfigError(f"tools.{name} must be a mapping: {manifest_path}")
        tool_cfg["version"] = normalize_version_text(
            tool_cfg.get("version"), f"tools.{name}.version"
        )


# -------------------------------
# Public API
# -------------------------------


def load_effective_config(manifest_path: Path) -> dict[str, Any]:
    """Loads and merges the effective configuration for a tool manifest.

    Performs the following operations:

    1. Read manifest YAML
    2. Find defaults root by scanning upwards for defaults/org.yaml
    3. Load org defaults and merge the manifest on top
    4. Build each tool entry: defaults.tool -> defaults/tools/<tool>.yaml -> manifest
    5. Resolve relative catalog files
    6. Validate tool entries and normalize version values to text

    Args:
        manifest_path: Path to the manifest YAML file.

    Returns:
        A merged configuration dict with a "tools" mapping.

    Raises:
        ConfigError: On missing files, YAML parse errors, empty files, or
            invalid structure.
    """
    logger = get_global_logger()
    manifest_path = manifest_path.resolve()
    manifest_dir = manifest_path.parent

    logger.verbose("CONFIG", f"Loading manifest: {manifest_path}")

    # 1) Read manifest
    manifest_obj = _load_yaml_file(manifest_path)
    if not isinstance(manifest_obj, dict):
        raise ConfigError(f"top-level YAML must be a mapping (dict): {manifest_path}")
    api_version = manifest_obj.get("apiVersion")
    if api_version is not None and api_version != API_VERSION:
        logger.warning(
            "CONFIG", f"Unexpected apiVersion {api_version!r} (expected {API_VERSION})"
        )

    # Resolve manifest-relative catalog files before any merging.
    for tool_cfg in (manifest_obj.get("tools") or {}).values():
        if isinstance(tool_cfg, dict):
            _resolve_catalog_file(tool_cfg, manifest_dir)
    _resolve_tool_default_catalog(manifest_obj, manifest_dir)

    # 2) Find defaults root
    defaults_root = _find_defaults_root(manifest_dir)
    merged: dict[str, Any] = {}
    if defaults_root:
        logger.verbose("CONFIG", f"Found defaults root: {defaults_root}")
        # 3) Load org defaults
        org_defaults = _load_yaml_file(defaults_root / "org.yaml")
        if isinstance(org_defaults, dict):
            _resolve_tool_default_catalog(org_defaults, defaults_root)
            logger.debug("CONFIG", "--- Content from org.yaml ---")
            _print_yaml_content(org_defaults)
            merged = _deep_merge_dicts(merged, org_defaults)

    logger.debug("CONFIG", f"--- Content from {manifest_path.name} ---")
    _print_yaml_content(manifest_obj)
    merged = _deep_merge_dicts(merged, manifest_obj)

    # 4) Layer tool defaults under each manifest tool entry
    tools = merged.get("tools")
    if isinstance(tools, dict):
        defaults = merged.get("defaults")
        tool_base = defaults.get("tool") if isinstance(defaults, dict) else None
        layered: dict[str, Any] = {}
        for name, tool_cfg in tools.items():
            base = dict(tool_base) if isinstance(tool_base, dict) else {}
            if defaults_root:
                tool_defaults_path = defaults_root / "tools" / f"{name}.yaml"
                if tool_defaults_path.exists():
                    logger.verbose(
                        "CONFIG",
                        f"Loading: {tool_defaults_path.relative_to(defaults_root.parent)}",
                    )
                    tool_defaults = _load_yaml_file(tool_defaults_path)
                    if isinstance(tool_defaults, dict):
                        # 5) Tool default catalogs are relative to defaults/
                        _resolve_catalog_file(tool_defaults, defaults_root)
                        base = _deep_merge_dicts(base, tool_defaults)
            if isinstance(tool_cfg, dict):
                layered[name] = _deep_merge_dicts(base, tool_cfg)
            elif tool_cfg is None:
                layered[name] = base
            else:
                layered[name] = tool_cfg
        merged["tools"] = layered

    # 6) Validate
    _validate_tools(merged, manifest_path)

    logger.verbose("CONFIG", f"Manifest defines {len(merged['tools'])} tool(s)")
    logger.debug("CONFIG", "--- Final Merged Configuration ---")
    _print_yaml_content(merged)
    return merged
