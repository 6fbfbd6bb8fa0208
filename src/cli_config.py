"""Runtime configuration: YAML file, environment and CLI overrides.

Settings land on ``Constants`` once at start-up. Precedence, highest first:
CLI flags, environment variables, YAML file, built-in defaults.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

import yaml

from constants import Constants
from versioning.errors import UsageError

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("1", "true", "yes", "on")


def _normalize_registry_url(url: str) -> str:
    url = str(url).strip()
    return url if url.endswith("/") else url + "/"


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


def _as_timeout(value: Any, source: str) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError) as exc:
        raise UsageError(f"invalid timeout from {source}: {value!r}") from exc
    if timeout <= 0:
        raise UsageError(f"timeout from {source} must be positive, got {value!r}")
    return timeout


def load_config_file(path: str) -> Dict[str, Any]:
    """Load a YAML (or JSON, which YAML accepts) configuration file.

    Raises:
        UsageError: missing file, unreadable file, or a non-mapping document.
    """
    if not os.path.isfile(path):
        raise UsageError(f"config file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        raise UsageError(f"failed to load config {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise UsageError(f"config {path} must be a mapping")
    return data


def apply_config_file(data: Dict[str, Any]) -> None:
    """Apply a loaded configuration mapping to Constants."""
    registry = data.get("registry") or {}
    if not isinstance(registry, dict):
        raise UsageError("config key 'registry' must be a mapping")
    if registry.get("npm"):
        Constants.REGISTRY_URL_NPM = _normalize_registry_url(registry["npm"])
    if registry.get("jsr"):
        Constants.REGISTRY_URL_JSR = _normalize_registry_url(registry["jsr"])

    http = data.get("http") or {}
    if not isinstance(http, dict):
        raise UsageError("config key 'http' must be a mapping")
    if http.get("timeout") is not None:
        Constants.REQUEST_TIMEOUT = _as_timeout(http["timeout"], "config")

    if data.get("strict_prefix") is not None:
        Constants.STRICT_PREFIX = _as_bool(data["strict_prefix"])


def apply_env_overrides(environ: Optional[Dict[str, str]] = None) -> None:
    """Apply LATESTPIN_* environment variables to Constants."""
    env = os.environ if environ is None else environ
    if env.get(Constants.ENV_NPM_REGISTRY):
        Constants.REGISTRY_URL_NPM = _normalize_registry_url(env[Constants.ENV_NPM_REGISTRY])
    if env.get(Constants.ENV_JSR_REGISTRY):
        Constants.REGISTRY_URL_JSR = _normalize_registry_url(env[Constants.ENV_JSR_REGISTRY])
    if env.get(Constants.ENV_TIMEOUT):
        Constants.REQUEST_TIMEOUT = _as_timeout(env[Constants.ENV_TIMEOUT], Constants.ENV_TIMEOUT)
    if env.get(Constants.ENV_STRICT):
        Constants.STRICT_PREFIX = _as_bool(env[Constants.ENV_STRICT])


def apply_cli_overrides(args) -> None:
    """Apply parsed CLI arguments to Constants."""
    if getattr(args, "NPM_REGISTRY", None):
        Constants.REGISTRY_URL_NPM = _normalize_registry_url(args.NPM_REGISTRY)
    if getattr(args, "JSR_REGISTRY", None):
        Constants.REGISTRY_URL_JSR = _normalize_registry_url(args.JSR_REGISTRY)
    if getattr(args, "TIMEOUT", None) is not None:
        Constants.REQUEST_TIMEOUT = _as_timeout(args.TIMEOUT, "--timeout")
    if getattr(args, "STRICT", False):
        Constants.STRICT_PREFIX = True


def configure(args, environ: Optional[Dict[str, str]] = None) -> None:
    """Load and apply every configuration source in precedence order.

    Raises:
        UsageError: an invalid config file or value.
    """
    env = os.environ if environ is None else environ
    config_path = getattr(args, "CONFIG", None) or env.get(Constants.ENV_CONFIG)
    if config_path:
        logger.debug("Loading config from %s", config_path)
        apply_config_file(load_config_file(config_path))
    apply_env_overrides(env)
    apply_cli_overrides(args)
