"""
  NPM registry module. Looks up the "latest" dist-tag of a package
  in the npm registry.
"""
from __future__ import annotations

import logging
from typing import Optional

from constants import Constants
from common.http_client import get_json
from common.logging_utils import extra_context, is_debug_enabled, safe_url
from versioning.errors import DecodeError
from versioning.models import Registry

logger = logging.getLogger(__name__)


def package_url(base: str, url: Optional[str] = None) -> str:
    """Return the packument URL for ``base``."""
    return (url or Constants.REGISTRY_URL_NPM) + base


def _extract_latest_version(packument) -> str:
    """Extract latest version from packument dist-tags.

    Raises:
        DecodeError: dist-tags.latest is missing or not a string.
    """
    dist_tags = packument.get("dist-tags") if isinstance(packument, dict) else None
    if not isinstance(dist_tags, dict):
        raise DecodeError("response has no 'dist-tags' object")
    latest = dist_tags.get("latest")
    if not isinstance(latest, str) or not latest:
        raise DecodeError("response has no 'dist-tags.latest' string")
    return latest


def fetch_latest(base: str, url: Optional[str] = None) -> str:
    """Return the latest published version of an npm package.

    Args:
        base: Package name without subpath, e.g. "lodash" or "@scope/pkg".
        url: Registry base URL. Defaults to Constants.REGISTRY_URL_NPM.

    Raises:
        TransportError: request failed or returned a non-2xx status.
        DecodeError: body was not JSON or had no latest dist-tag.
    """
    target = package_url(base, url)
    packument = get_json(target, context=Registry.NPM.tag, headers=dict(Constants.HEADERS_JSON))
    latest = _extract_latest_version(packument)
    if is_debug_enabled(logger):
        logger.debug(
            "Resolved latest version",
            extra=extra_context(
                event="resolve",
                component="client",
                target=safe_url(target),
                package_manager="npm",
                outcome="success",
                version=latest
            )
        )
    return latest
