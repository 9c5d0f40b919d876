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

"""Remote version catalogs for vermatch.

Fetches the available versions of a tool from a JSON endpoint. The list of
versions is extracted from the response with a JSONPath expression, so both
plain arrays and nested release feeds are supported.

Catalog Configuration:
catalog:
  url: "https://vendor.example/api/releases.json"
  versions_path: "$.releases[*].version"     # Optional, default "$[*]"
  headers:                                   # Optional
    Authorization: "Bearer ${CATALOG_TOKEN}"
  timeout: 30                                # Optional, seconds

References like "${VAR}" in header values are expanded from the environment;
a header that refers to an unset variable is not sent. The CLI loads a .env
file first, so tokens can live there.

Example:
    ```python
    from vermatch.catalog.remote import fetch_catalog

    texts = fetch_catalog(
        "https://nodejs.org/dist/index.json", versions_path="$[*].version"
    )
    ```
"""

from __future__ import annotations

import os
from string import Template
from typing import Any

from jsonpath_ng import parse as jsonpath_parse
from jsonpath_ng.exceptions import JSONPathError
import requests

from vermatch.exceptions import ConfigError, NetworkError
from vermatch.logging import get_global_logger

DEFAULT_VERSIONS_PATH = "$[*]"
DEFAULT_TIMEOUT = 30


def _expand_headers(headers: dict[str, Any]) -> dict[str, str]:
    logger = get_global_logger()
    expanded: dict[str, str] = {}
    for key, value in headers.items():
        if not isinstance(value, str):
            expanded[key] = str(value)
            continue
        template = Template(value)
        missing = []
        for match in template.pattern.finditer(value):
            env_var = match.group("named") or match.group("braced")
            if env_var and not os.environ.get(env_var):
                missing.append(env_var)
        if missing:
            for env_var in missing:
                logger.warning("CATALOG", f"Environment variable {env_var} not set")
            logger.warning("CATALOG", f"Header {key} not sent")
            continue
        expanded[key] = template.safe_substitute(os.environ)
    return expanded


def fetch_catalog(
    url: str,
    *,
    versions_path: str = DEFAULT_VERSIONS_PATH,
    headers: dict[str, Any] | None = None,
    timeout: int = DEFAULT_TIMEOUT,
) -> list[Any]:
    """Fetches raw version values from a JSON endpoint.

    Args:
        url: Endpoint returning JSON.
        versions_path: JSONPath selecting the version values.
        headers: Extra HTTP headers; "${VAR}" references expand from the
            environment.
        timeout: Request timeout in seconds.

    Returns:
        The selected values in response order (usually strings).

    Raises:
        ConfigError: If versions_path is not a valid JSONPath expression.
        NetworkError: If the request fails, the response is not JSON, or
            versions_path selects nothing.
    """
    logger = get_global_logger()

    try:
        expr = jsonpath_parse(versions_path)
    except JSONPathError as err:
        raise ConfigError(f"Invalid versions_path {versions_path!r}: {err}") from err

    logger.verbose("CATALOG", f"Calling API: GET {url}")
    try:
        response = requests.get(url, headers=_expand_headers(headers or {}), timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.HTTPError as err:
        raise NetworkError(
            f"Catalog request failed: {response.status_code} {response.reason}"
        ) from err
    except requests.exceptions.RequestException as err:
        raise NetworkError(f"Failed to fetch catalog: {err}") from err

    logger.verbose("CATALOG", f"API response: {response.status_code} OK")

    try:
        json_data = response.json()
    except ValueError as err:
        raise NetworkError(
            f"Invalid JSON response from catalog. Response: {response.text[:200]}"
        ) from err

    values = [match.value for match in expr.find(json_data)]
    if not values:
        raise NetworkError(
            f"Versions path {versions_path!r} did not match anything in catalog response"
        )
    logger.debug("CATALOG", f"Extracted {len(values)} value(s) from {url}")
    return values
