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

A catalog supplies the candidate versions a pattern is resolved against.
Whatever the source, load_catalog() returns VersionIdentifier objects sorted
newest first, which is the order resolve_version_pattern() expects.

Supported Sources:
    - **versions**: inline list in the manifest
    - **file**: YAML or JSON file with a list, or a mapping with a
      "versions" list
    - **url**: remote JSON endpoint (see vermatch.catalog.remote)

Exactly one source must be configured per catalog. An optional strip_prefix
(e.g., "v") is removed from every value before parsing.

Example:
    ```python
    from vermatch.catalog import load_catalog

    candidates = load_catalog({"versions": ["3.0.5", "3.1.0", "2.9.0"]})
    [str(v) for v in candidates]  # ['3.1.0', '3.0.5', '2.9.0']
    ```
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from vermatch.catalog.remote import DEFAULT_TIMEOUT, DEFAULT_VERSIONS_PATH, fetch_catalog
from vermatch.config import normalize_version_text
from vermatch.exceptions import ConfigError
from vermatch.logging import get_global_logger
from vermatch.versioning import VersionIdentifier, sort_versions

_SOURCES = ("versions", "file", "url")


def parse_versions(
    values: Iterable[Any], *, source: str = "catalog", strip_prefix: str = ""
) -> list[VersionIdentifier]:
    """Parses raw catalog values into identifiers, dropping duplicates.

    Args:
        values: Version values (strings, or integers from unquoted YAML).
        source: Catalog description used in error messages.
        strip_prefix: Prefix removed from values that start with it
            (e.g., "v" for tags like "v20.1.0").

    Returns:
        Identifiers in input order, first occurrence wins.

    Raises:
        ConfigError: If a value is not usable as version text.
    """
    seen: set[VersionIdentifier] = set()
    versions: list[VersionIdentifier] = []
    for index, value in enumerate(values):
        text = normalize_version_text(value, f"{source}[{index}]")
        if text is None:
            raise ConfigError(f"{source}[{index}] is empty")
        if strip_prefix and text.startswith(strip_prefix):
            text = text[len(strip_prefix) :]
        version = VersionIdentifier.of(text)
        if version in seen:
            continue
        seen.add(version)
        versions.append(version)
    return versions


def load_catalog_file(path: Path) -> list[Any]:
    """Reads raw version values from a YAML or JSON catalog file.

    Args:
        path: Catalog file; either a list or a mapping with a "versions" list.

    Returns:
        The raw version values.

    Raises:
        ConfigError: If the file is missing, unparsable, or has another shape.
    """
    if not path.exists():
        raise ConfigError(f"catalog file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise ConfigError(f"Error parsing catalog: {path}: {err}") from err
    if isinstance(data, dict):
        data = data.get("versions")
    if not isinstance(data, list):
        raise ConfigError(
            f"catalog must be a list or a mapping with a 'versions' list: {path}"
        )
    return data


def load_catalog(
    catalog_cfg: dict[str, Any], *, include_invalid: bool = False
) -> list[VersionIdentifier]:
    """Loads the candidate versions described by a catalog configuration.

    Invalid identifiers (patterns, "0.0", "1.0-alpha.rc1", ...) cannot be
    installed and are skipped unless include_invalid is set.

    Args:
        catalog_cfg: The "catalog" mapping of a tool entry.
        include_invalid: Keep identifiers that fail is_valid().

    Returns:
        Candidate versions sorted newest first.

    Raises:
        ConfigError: If no or several sources are configured, or the source
            content is invalid.
        NetworkError: If a remote catalog cannot be fetched.
    """
    logger = get_global_logger()
    if not isinstance(catalog_cfg, dict):
        raise ConfigError("catalog must be a mapping")
    configured = [key for key in _SOURCES if catalog_cfg.get(key) is not None]
    if len(configured) != 1:
        raise ConfigError(
            f"catalog needs exactly one of {', '.join(_SOURCES)}; "
            f"got {', '.join(configured) or 'none'}"
        )

    kind = configured[0]
    if kind == "versions":
        raw = catalog_cfg["versions"]
        if not isinstance(raw, list):
            raise ConfigError("catalog.versions must be a list")
        source = "catalog.versions"
    elif kind == "file":
        path = Path(catalog_cfg["file"])
        raw = load_catalog_file(path)
        source = str(path)
    else:
        url = catalog_cfg["url"]
        raw = fetch_catalog(
            url,
            versions_path=catalog_cfg.get("versions_path", DEFAULT_VERSIONS_PATH),
            headers=catalog_cfg.get("headers"),
            timeout=catalog_cfg.get("timeout", DEFAULT_TIMEOUT),
        )
        source = url

    versions = parse_versions(
        raw, source=source, strip_prefix=catalog_cfg.get("strip_prefix") or ""
    )
    if not include_invalid:
        kept = [v for v in versions if v.is_valid()]
        for skipped in (v for v in versions if not v.is_valid()):
            logger.verbose("CATALOG", f"Skipping invalid version: {skipped}")
        versions = kept
    logger.verbose("CATALOG", f"Loaded {len(versions)} version(s) from {source}")
    return sort_versions(versions)
