"""Exception types raised by ldsynth."""

from __future__ import annotations


class LdSynthError(Exception):
    """Base class for failures that end a generation run."""


class ParseError(LdSynthError, ValueError):
    """The sample document is not valid JSON.

    Raised before any resolution happens, so no partial output exists when
    this surfaces.
    """

    def __init__(self, message: str, *, line: int = 0, column: int = 0, source: str = ""):
        super().__init__(message)
        self.line = line
        self.column = column
        self.source = source

    def __str__(self) -> str:
        base = super().__str__()
        location = f"line {self.line}, column {self.column}" if self.line else ""
        if self.source and location:
            return f"{self.source}: {base} ({location})"
        if location:
            return f"{base} ({location})"
        if self.source:
            return f"{self.source}: {base}"
        return base


class UnsupportedRootError(LdSynthError):
    """The sample document's top-level value is not an object."""

    def __init__(self, kind: str, *, source: str = ""):
        where = f"{source}: " if source else ""
        super().__init__(f"{where}top-level value must be an object, got {kind}")
        self.kind = kind
        self.source = source


class SampleReadError(LdSynthError):
    """The sample document could not be read from disk."""


class ConfigError(LdSynthError):
    """A model declaration in ldsynth.toml is incomplete or inconsistent."""


class NeverThrown(RuntimeError):
    """Raised by never(); marks a code path that should be unreachable."""

    def __init__(self, message: str, *, env: dict[str, object] | None = None):
        super().__init__(message)
        self.env = dict(env or {})
