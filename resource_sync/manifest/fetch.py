"""
Remote manifest fetching for Meme Resource Sync.
"""

import requests

from ..core.constants import MANIFEST_NAME
from ..errors import ManifestMalformed, ManifestUnavailable
from .manifest import ResourceManifest


def resource_url(base_url: str, version: str, name: str) -> str:
    """
    Build the URL of a versioned resource.

    Bases ending in "/" or "@" (jsDelivr tag prefix) are used as-is,
    anything else gets a "/" separator.
    """
    if not base_url.endswith(("/", "@")):
        base_url += "/"
    return f"{base_url}v{version}/resources/{name}"


def fetch_manifest(base_url: str, version: str, timeout: float = 10) -> ResourceManifest:
    """
    Fetch and parse resources.json for a version.

    Args:
        base_url: Remote resource prefix
        version: Resource version (without the leading "v")
        timeout: Request timeout in seconds

    Returns:
        Parsed ResourceManifest

    Raises:
        ManifestUnavailable: Network error or non-success HTTP status
        ManifestMalformed: Body isn't JSON or doesn't match the schema
    """
    url = resource_url(base_url, version, MANIFEST_NAME)

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        raise ManifestUnavailable(url, f"HTTP error {status}", status=status) from e
    except requests.Timeout as e:
        raise ManifestUnavailable(url, "Connection timed out") from e
    except requests.RequestException as e:
        raise ManifestUnavailable(url, str(e)) from e

    try:
        data = response.json()
    except ValueError as e:
        raise ManifestMalformed(f"Failed to parse {MANIFEST_NAME}: {e}") from e

    return ResourceManifest.from_dict(data)
