"""ldsynth package root."""

from ldsynth.exceptions import (
    ConfigError,
    LdSynthError,
    NeverThrown,
    ParseError,
    SampleReadError,
    UnsupportedRootError,
)
from ldsynth.invariants import never

__all__ = [
    "__version__",
    "ConfigError",
    "LdSynthError",
    "NeverThrown",
    "ParseError",
    "SampleReadError",
    "UnsupportedRootError",
    "never",
]

__version__ = "0.1.0"
