"""Load the obs-websocket protocol document from GitHub, a URL, a file, or stdin.

This module handles all I/O for fetching the raw ``protocol.json`` and
converting it into a Python dictionary. Content is parsed as JSON with a YAML
fallback, so hand-edited fixtures may be written in either format.

The public functions are:

* :func:`load_protocol` -- Load from an explicit source, or from GitHub when
  no source is given.
* :func:`fetch_protocol` -- Download ``docs/generated/protocol.json`` for a
  given commit, tag or branch of the obs-websocket repository.
* :func:`resolve_latest_release` -- Look up the tag of the latest release.

After loading, the raw dict should be passed to
:func:`~obsgen.source.extractor.extract_protocol`.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import httpx
import yaml

from obsgen.exceptions import ProtocolLoadError
from obsgen.models import GeneratorConfig

logger = logging.getLogger(__name__)

GITHUB_API = "https://api.github.com"
RAW_GITHUB = "https://raw.githubusercontent.com"
PROTOCOL_PATH = "docs/generated/protocol.json"


def load_protocol(source: Optional[str], config: GeneratorConfig) -> dict[str, Any]:
    """Load the protocol document from *source*, or from GitHub if it is ``None``.

    Args:
        source: A URL (http/https), file path, ``'-'`` for stdin, or ``None``
            to fetch ``config.commit`` from ``config.repository``.
        config: Effective generator configuration (token, timeout, commit).

    Returns:
        The parsed document as a dictionary.

    Raises:
        ProtocolLoadError: If the source cannot be loaded or parsed.
    """
    if source is None:
        return fetch_protocol(config)
    if source == "-":
        return _load_from_stdin()
    if source.startswith(("http://", "https://")):
        return _load_from_url(source, _github_headers(config.github_token), config.timeout)
    return _load_from_file(source)


def fetch_protocol(config: GeneratorConfig) -> dict[str, Any]:
    """Download ``protocol.json`` for ``config.commit``.

    An empty commit or the literal ``"latest"`` is first resolved to the tag
    of the repository's latest release.

    Args:
        config: Effective generator configuration.

    Returns:
        The parsed document.

    Raises:
        ProtocolLoadError: On HTTP or parse failures.
    """
    headers = _github_headers(config.github_token)
    commit = config.commit
    if not commit or commit == "latest":
        commit = resolve_latest_release(config.repository, headers, config.timeout)

    url = f"{RAW_GITHUB}/{config.repository}/{commit}/{PROTOCOL_PATH}"
    logger.debug("Fetching protocol from %s", url)
    return _load_from_url(url, headers, config.timeout)


def resolve_latest_release(
    repository: str,
    headers: dict[str, str],
    timeout: float = 30.0,
) -> str:
    """Return the ``tag_name`` of *repository*'s latest GitHub release.

    Raises:
        ProtocolLoadError: If the request fails or the payload has no tag.
    """
    url = f"{GITHUB_API}/repos/{repository}/releases/latest"
    release = _load_from_url(url, headers, timeout)
    tag = release.get("tag_name")
    if not isinstance(tag, str) or not tag:
        raise ProtocolLoadError(f"Latest release of {repository} has no tag_name")
    return tag


def _github_headers(token: Optional[str]) -> dict[str, str]:
    """Build request headers, adding ``Authorization`` when a token is set."""
    headers = {"Accept": "application/json"}
    if token:
        headers["Authorization"] = f"token {token}"
    return headers


def _load_from_stdin() -> dict[str, Any]:
    """Read the document from stdin.

    Raises:
        ProtocolLoadError: If stdin is empty or content cannot be parsed.
    """
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise ProtocolLoadError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise ProtocolLoadError("No input received from stdin")

    return _parse_content(content, hint="stdin")


def _load_from_url(url: str, headers: dict[str, str], timeout: float) -> dict[str, Any]:
    """Fetch a JSON (or YAML) document from *url*.

    Raises:
        ProtocolLoadError: If the URL cannot be fetched or content cannot be parsed.
    """
    try:
        response = httpx.get(url, headers=headers, timeout=timeout, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise ProtocolLoadError(
            f"HTTP {exc.response.status_code} fetching {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise ProtocolLoadError(f"Failed to fetch {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"

    return _parse_content(response.text, hint=hint)


def _load_from_file(path: str) -> dict[str, Any]:
    """Load the document from a local ``.json``, ``.yaml`` or ``.yml`` file.

    Raises:
        ProtocolLoadError: If the file cannot be read or content cannot be parsed.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise ProtocolLoadError(f"Protocol file not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ProtocolLoadError(f"Failed to read protocol file {path}: {exc}") from exc

    if not content.strip():
        raise ProtocolLoadError(f"Protocol file is empty: {path}")

    suffix = file_path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"

    return _parse_content(content, hint=hint)


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse content as JSON or YAML.

    Tries JSON first (unless hint is ``'yaml'``), then falls back to YAML.
    An explicit ``'json'`` hint disables the fallback.

    Raises:
        ProtocolLoadError: If the content cannot be parsed as either format,
            or does not hold a mapping at the top level.
    """
    json_error: Exception | None = None
    yaml_error: Exception | None = None

    if hint != "yaml":
        try:
            result = json.loads(content)
        except json.JSONDecodeError as exc:
            json_error = exc
            if hint == "json":
                raise ProtocolLoadError(f"Invalid JSON: {exc}") from exc
        else:
            if not isinstance(result, dict):
                raise ProtocolLoadError(
                    f"Protocol must be a JSON/YAML object (got {type(result).__name__})"
                )
            return result

    try:
        result = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        yaml_error = exc
    else:
        if not isinstance(result, dict):
            kind = type(result).__name__ if result is not None else "empty document"
            raise ProtocolLoadError(f"Protocol must be a JSON/YAML object (got {kind})")
        return result

    msg = "Failed to parse protocol as JSON or YAML"
    if json_error:
        msg += f"\n  JSON error: {json_error}"
    if yaml_error:
        msg += f"\n  YAML error: {yaml_error}"
    raise ProtocolLoadError(msg)
