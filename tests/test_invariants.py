from __future__ import annotations

from pathlib import Path
import sys

import pytest


def _load():
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root / "src"))
    from ldsynth.exceptions import NeverThrown
    from ldsynth.invariants import never

    return never, NeverThrown


def test_never_raises_with_env() -> None:
    never, NeverThrown = _load()
    with pytest.raises(NeverThrown) as excinfo:
        never("reference to an undefined type", name="Ghost")
    assert excinfo.value.env == {"name": "Ghost"}
