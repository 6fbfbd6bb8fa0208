"""Specifier parsing: registry prefixes, base/subpath splitting, composition."""

from typing import Optional, Tuple

from constants import Constants

from .errors import InvalidSpecifierError, UsageError
from .models import PackageRequest, ParsedName, PinnedSpecifier, Registry

SCOPE = Constants.SCOPE_MARKER
SEP = Constants.PATH_SEPARATOR


def _split_after_scope(name: str) -> ParsedName:
    """Keep ``@scope/name`` as the base; everything after it is the subpath."""
    parts = name.split(SEP, 2)
    if len(parts) < 3:
        return ParsedName(name, "")
    base_len = len(parts[0]) + len(SEP) + len(parts[1])
    return ParsedName(name[:base_len], name[base_len:])


def split_flat(name: str) -> ParsedName:
    """Split an npm package path into (base, subpath).

    Scoped names keep two segments in the base; unscoped names keep one.
    All trailing segments stay together in the subpath.
    """
    if name.startswith(SCOPE):
        return _split_after_scope(name)
    pos = name.find(SEP)
    if pos == -1:
        return ParsedName(name, "")
    return ParsedName(name[:pos], name[pos:])


def split_scoped(name: str) -> ParsedName:
    """Split a JSR package path into (base, subpath).

    JSR names are always ``@scope/name``, so the first two segments form
    the base regardless of a leading scope marker.
    """
    return _split_after_scope(name)


def split_name(name: str, registry: Registry) -> ParsedName:
    """Split ``name`` using the namespace convention of ``registry``."""
    if registry == Registry.JSR:
        return split_scoped(name)
    return split_flat(name)


def compose_specifier(registry: Registry, base: str, version: str, subpath: str = "") -> str:
    """Return ``<tag>:<base>@<version><subpath>``."""
    return f"{registry.prefix}{base}{Constants.VERSION_SEPARATOR}{version}{subpath}"


def _strip_registry_prefix(token: str) -> Tuple[Optional[Registry], str]:
    for registry in Registry:
        if token.startswith(registry.prefix):
            return registry, token[len(registry.prefix):]
    return None, token


def parse_cli_token(token: Optional[str], *, strict: bool = False) -> PackageRequest:
    """Parse one raw input token into a PackageRequest.

    Untagged tokens resolve against npm unless ``strict`` is set, in which
    case they are rejected.

    Raises:
        UsageError: empty token, or untagged token under ``strict``.
    """
    raw = token if token is not None else ""
    stripped = raw.strip()
    if not stripped:
        raise UsageError("no package specifier supplied")

    registry, package_path = _strip_registry_prefix(stripped)
    if registry is not None:
        return PackageRequest(
            registry=registry,
            package_path=package_path,
            raw_token=raw,
            tagged=True,
        )
    if strict:
        expected = " or ".join(r.prefix for r in Registry)
        raise UsageError(f"specifier '{stripped}' has no registry prefix (expected {expected})")
    return PackageRequest(
        registry=Registry.NPM,
        package_path=stripped,
        raw_token=raw,
        tagged=False,
    )


def drop_version_pin(base: str) -> Tuple[str, Optional[str]]:
    """Remove an ``@<version>`` suffix from a base package name.

    Returns (bare_base, pinned_version or None). The leading scope marker
    of a scoped name is never read as a pin.
    """
    head, sep, tail = base.rpartition(Constants.VERSION_SEPARATOR)
    if not sep or not head:
        return base, None
    if head.startswith(SCOPE) and SEP not in head:
        # "@scope@1.0" style; the marker belongs to the scope, not a version
        return base, None
    return head, tail or None


def validate_base(base: Optional[str], registry: Registry) -> str:
    """Return ``base`` if it names a registry entry, else raise.

    Raises:
        InvalidSpecifierError: empty base, incomplete scope, or unscoped JSR name.
    """
    if not base:
        raise InvalidSpecifierError("package name is empty")
    if base.startswith(SCOPE):
        scope, sep, name = base[len(SCOPE):].partition(SEP)
        if not sep or not scope or not name:
            raise InvalidSpecifierError(
                f"scoped package '{base}' must have the form @scope/name"
            )
    elif registry == Registry.JSR:
        raise InvalidSpecifierError(f"jsr package '{base}' must have the form @scope/name")
    return base


def parse_pinned_specifier(specifier: str) -> PinnedSpecifier:
    """Read a composed ``<tag>:<base>@<version><subpath>`` back into parts.

    Inverse of compose_specifier, for consumers of latestpin output. The
    resolution path itself never calls it.

    Raises:
        InvalidSpecifierError: missing registry tag or missing version.
    """
    registry, package_path = _strip_registry_prefix(specifier.strip())
    if registry is None:
        raise InvalidSpecifierError(f"specifier '{specifier}' has no registry prefix")
    pinned_base, subpath = split_name(package_path, registry)
    base, version = drop_version_pin(pinned_base)
    if version is None:
        raise InvalidSpecifierError(f"specifier '{specifier}' has no version")
    return PinnedSpecifier(registry=registry, base=base, version=version, subpath=subpath)
