from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))


import pytest


PERSON_SAMPLE = ROOT / "samples" / "person.jsonld"


@pytest.fixture
def person_sample_path() -> Path:
    return PERSON_SAMPLE


@pytest.fixture
def person_sample_text() -> str:
    return PERSON_SAMPLE.read_text(encoding="utf-8")


@pytest.fixture
def write_sample(tmp_path: Path):
    def _write(text: str, name: str = "sample.json") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
