"""Invariant markers."""

from __future__ import annotations

from typing import NoReturn

from ldsynth.exceptions import NeverThrown


def never(reason: str = "", **env: object) -> NoReturn:
    """Mark a code path as intentionally unreachable.

    The keyword payload is attached to the raised exception for diagnostics;
    it is never evaluated beyond being stored.
    """
    message = reason or "never() marker reached"
    if env:
        details = ", ".join(f"{key}={env[key]!r}" for key in sorted(env))
        message = f"{message} ({details})"
    raise NeverThrown(message, env=env)
