from __future__ import annotations

from pathlib import Path
import sys
import textwrap

import libcst as cst


def _load():
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root / "src"))
    from ldsynth.scaffold import (
        DiscoveredType,
        discover_entities,
        module_name,
        render_repositories,
    )

    return DiscoveredType, discover_entities, module_name, render_repositories


def _write_models(root: Path) -> Path:
    package = root / "app"
    package.mkdir()
    (package / "__init__.py").write_text("", encoding="utf-8")
    (package / "models.py").write_text(
        textwrap.dedent(
            """
            from ldsynth import repository
            from ldsynth.repository import Entity


            class User(Entity):
                pass


            class Order(repository.Entity):
                class Line(Entity):
                    pass


            class Helper:
                pass


            def factory():
                class Hidden(Entity):
                    pass
                return Hidden
            """
        ).lstrip(),
        encoding="utf-8",
    )
    return package


def test_discover_entities_finds_module_level_subclasses(tmp_path: Path) -> None:
    DiscoveredType, discover_entities, _, _ = _load()
    package = _write_models(tmp_path)
    result = discover_entities([package], root=tmp_path)
    assert result.types == [
        DiscoveredType(name="User", module="app.models"),
        DiscoveredType(name="Order", module="app.models"),
    ]
    assert result.failures == []


def test_discover_entities_records_parse_failures(tmp_path: Path) -> None:
    _, discover_entities, _, _ = _load()
    broken = tmp_path / "broken.py"
    broken.write_text("class (:\n", encoding="utf-8")
    result = discover_entities([broken], root=tmp_path)
    assert result.types == []
    assert len(result.failures) == 1
    assert "LibCST parse failed" in result.warnings[0]


def test_module_name_strips_src_and_init(tmp_path: Path) -> None:
    _, _, module_name, _ = _load()
    assert module_name(tmp_path / "src" / "app" / "models.py", tmp_path) == "app.models"
    assert module_name(tmp_path / "app" / "__init__.py", tmp_path) == "app"


def test_render_repositories(tmp_path: Path) -> None:
    DiscoveredType, _, _, render_repositories = _load()
    source = render_repositories(
        [
            DiscoveredType(name="User", module="app.models"),
            DiscoveredType(name="Order", module="app.models"),
            DiscoveredType(name="User", module="app.models"),
        ]
    )
    cst.parse_module(source)
    assert "from ldsynth.repository import RepositoryBase" in source
    assert "from app.models import Order, User" in source
    assert "class UserRepository(RepositoryBase[User]):" in source
    assert "class OrderRepository(RepositoryBase[Order]):" in source
    assert source.count("class UserRepository") == 1
    assert '"""Repository for Order entities."""' in source
