"""Latest-version resolution: parse, query the registry, compose."""

from __future__ import annotations

import logging

from common.logging_utils import extra_context, is_debug_enabled
from registry import jsr as jsr_registry
from registry import npm as npm_registry

from .errors import ResolutionError
from .models import PackageRequest, Registry, ResolutionResult
from .parser import compose_specifier, drop_version_pin, split_name, validate_base

logger = logging.getLogger(__name__)

_CLIENTS = {
    Registry.NPM: npm_registry,
    Registry.JSR: jsr_registry,
}


def resolve_latest(req: PackageRequest) -> ResolutionResult:
    """Resolve ``req`` to its latest version.

    Never raises for parse, transport or decode failures; they are returned
    in ``ResolutionResult.error`` with the matching ``error_kind``.

    Registry base URLs come from Constants, as set up by cli_config.
    """
    parsed = split_name(req.package_path, req.registry)
    base, pinned = drop_version_pin(parsed.base)
    result = ResolutionResult(
        registry=req.registry,
        package_path=req.package_path,
        base=base,
        subpath=parsed.subpath,
        resolved_version=None,
        error=None,
    )
    if pinned is not None:
        logger.info("Ignoring pinned version %s of %s; resolving latest.", pinned, base)
    if is_debug_enabled(logger):
        logger.debug(
            "Split package path",
            extra=extra_context(
                event="parse",
                component="service",
                action="split_name",
                target=req.package_path,
                package_manager=req.registry.value,
                base=base,
                subpath=parsed.subpath
            )
        )

    try:
        validate_base(base, req.registry)
        version = _CLIENTS[req.registry].fetch_latest(base)
    except ResolutionError as exc:
        result.error = str(exc)
        result.error_kind = exc.kind
        logger.debug("Resolution of %s failed (%s): %s", req.package_path, exc.kind.value, exc)
        return result

    result.resolved_version = version
    result.specifier = compose_specifier(req.registry, base, version, parsed.subpath)
    return result
