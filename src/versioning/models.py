"""Data models for specifier parsing and latest-version resolution."""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional

from constants import Constants


class Registry(Enum):
    """Registry kinds, keyed by the tag used in specifiers."""
    NPM = "npm"
    JSR = "jsr"

    @property
    def tag(self) -> str:
        """Tag written before the package path, e.g. ``npm``."""
        return self.value

    @property
    def prefix(self) -> str:
        """Tag plus separator, e.g. ``npm:``."""
        return f"{self.value}{Constants.TAG_SEPARATOR}"


class ErrorKind(Enum):
    """Failure categories reported by a resolution."""
    USAGE = "usage"
    PARSE = "parse"
    TRANSPORT = "transport"
    DECODE = "decode"


class ParsedName(NamedTuple):
    """A package path split into registry entry and in-package subpath.

    ``base + subpath`` always reproduces the parsed path; ``subpath`` is
    empty or starts with the path separator.
    """
    base: str
    subpath: str

    @property
    def package_path(self) -> str:
        return self.base + self.subpath


@dataclass(frozen=True)
class PackageRequest:
    """Resolution input built from one CLI or stdin token."""
    registry: Registry
    package_path: str  # token with any registry prefix removed
    raw_token: str
    tagged: bool


@dataclass(frozen=True)
class PinnedSpecifier:
    """An output specifier read back by parse_pinned_specifier; not used during resolution."""
    registry: Registry
    base: str
    version: str
    subpath: str


@dataclass
class ResolutionResult:
    """Resolution outcome; exactly one of resolved_version or error is set."""
    registry: Registry
    package_path: str
    base: Optional[str]
    subpath: str
    resolved_version: Optional[str]
    error: Optional[str]
    error_kind: Optional[ErrorKind] = None
    specifier: Optional[str] = None  # composed output on success

    @property
    def ok(self) -> bool:
        return self.error is None and self.specifier is not None
