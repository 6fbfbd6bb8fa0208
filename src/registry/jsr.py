"""
  JSR registry module. Reads the "latest" field of a package's
  meta.json from jsr.io.
"""
from __future__ import annotations

import logging
from typing import Optional

from constants import Constants
from common.http_client import get_json
from versioning.errors import DecodeError
from versioning.models import Registry

logger = logging.getLogger(__name__)


def package_url(base: str, url: Optional[str] = None) -> str:
    """Return the meta.json URL for ``base`` (always ``@scope/name``)."""
    return f"{url or Constants.REGISTRY_URL_JSR}{base}/{Constants.JSR_META_FILE}"


def fetch_latest(base: str, url: Optional[str] = None) -> str:
    """Return the latest published version of a JSR package.

    Raises:
        TransportError: request failed or returned a non-2xx status.
        DecodeError: body was not JSON or had no 'latest' string.
    """
    meta = get_json(package_url(base, url), context=Registry.JSR.tag,
                    headers=dict(Constants.HEADERS_JSON))
    latest = meta.get("latest") if isinstance(meta, dict) else None
    if not isinstance(latest, str) or not latest:
        raise DecodeError("response has no 'latest' string")
    logger.debug("jsr latest for %s is %s", base, latest)
    return latest
